"""Workspace template loader.

Reads an exported workspace template and builds the immutable
:class:`~synlint.models.manifest.WorkspaceManifest` the analysis runs on.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from synlint.errors import ManifestError
from synlint.models.activity import CONTAINER_ACTIVITY_KEYS, Activity
from synlint.models.manifest import WorkspaceManifest
from synlint.models.resource import PROPERTIES_MODELS, Resource, ResourceKind
from synlint.parser.names import parse_kind, parse_name

logger = logging.getLogger(__name__)


class ManifestParser:
    """Parser for exported workspace templates."""

    @staticmethod
    def load(template_file: Path) -> WorkspaceManifest:
        """Read and parse a workspace template file.

        Raises:
            ManifestError: If the file is missing, is not valid JSON or does not
                describe a workspace
        """
        template_file = Path(template_file)
        if not template_file.is_file():
            raise ManifestError("Template file not found", str(template_file))

        try:
            with open(template_file, encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON: {e}", str(template_file)) from e
        except OSError as e:
            raise ManifestError(f"Failed to read template: {e}", str(template_file)) from e

        logger.info(f"Loaded template {template_file}")
        return ManifestParser.parse(document, source=str(template_file))

    @classmethod
    def parse(cls, document: Any, source: str | None = None) -> WorkspaceManifest:
        """Build a manifest from an already-parsed template document."""
        if not isinstance(document, dict) or not isinstance(document.get("resources"), list):
            raise ManifestError("Template has no top-level 'resources' array", source)

        resources: list[Resource] = []
        seen = set()
        for index, raw in enumerate(document["resources"]):
            if not isinstance(raw, dict):
                raise ManifestError(f"resources[{index}] is not an object", source)

            resource = cls._parse_resource(raw, index, source)
            if resource is None:
                continue

            if resource.identity in seen:
                raise ManifestError(f"Duplicate resource {resource.identity}", source)
            seen.add(resource.identity)
            resources.append(resource)

        manifest = WorkspaceManifest(resources=resources, source=source)
        logger.info(f"Parsed {source or 'document'}: {manifest.counts()}")
        return manifest

    @classmethod
    def _parse_resource(cls, raw: dict, index: int, source: str | None) -> Resource | None:
        kind = parse_kind(raw.get("type"))
        if kind is None:
            logger.debug(f"Skipping resources[{index}] of unsupported type {raw.get('type')!r}")
            return None

        name = parse_name(raw.get("name"))
        if name is None:
            logger.warning(f"Skipping resources[{index}]: cannot resolve name from {raw.get('name')!r}")
            return None

        raw_properties = raw.get("properties") or {}
        if not isinstance(raw_properties, dict):
            raise ManifestError(f"{kind.label} '{name}' properties is not an object", source)

        if kind == ResourceKind.PIPELINE:
            raw_properties = dict(raw_properties)
            raw_properties["activities"] = list(
                cls._parse_activities(raw_properties.get("activities"), name, "", source)
            )

        try:
            properties = PROPERTIES_MODELS[kind].model_validate(raw_properties)
        except ValidationError as e:
            raise ManifestError(f"Invalid properties for {kind.label} '{name}': {e}", source) from e

        depends_on = raw.get("dependsOn") or []
        if not isinstance(depends_on, list):
            raise ManifestError(f"{kind.label} '{name}' dependsOn is not an array", source)

        references = []
        for reference in depends_on:
            if isinstance(reference, str):
                references.append(reference)
            else:
                logger.debug(f"Ignoring non-string dependency of {kind.label} '{name}': {reference!r}")

        return Resource(kind=kind, name=name, properties=properties, depends_on=references)

    @classmethod
    def _parse_activities(
        cls, raw_activities: Any, pipeline_name: str, scope: str, source: str | None
    ) -> Iterator[Activity]:
        """Yield activities of one scope followed by those nested in its containers."""
        if raw_activities is None:
            return
        if not isinstance(raw_activities, list):
            raise ManifestError(f"Pipeline '{pipeline_name}' activities is not an array", source)

        for raw in raw_activities:
            if not isinstance(raw, dict) or not isinstance(raw.get("name"), str) or not raw["name"]:
                logger.warning(f"Skipping unnamed activity in pipeline '{pipeline_name}'")
                continue

            depends_on = cls._activity_dependencies(raw, pipeline_name)

            try:
                activity = Activity.model_validate(
                    {**raw, "dependsOn": depends_on, "pipelineName": pipeline_name, "scope": scope}
                )
            except ValidationError as e:
                raise ManifestError(
                    f"Invalid activity '{raw['name']}' in pipeline '{pipeline_name}': {e}", source
                ) from e

            yield activity
            for child_scope, children in cls._child_scopes(activity):
                yield from cls._parse_activities(children, pipeline_name, child_scope, source)

    @staticmethod
    def _activity_dependencies(raw: dict, pipeline_name: str) -> list[dict]:
        """Dependency entries of a raw activity that name an upstream activity."""
        depends_on = raw.get("dependsOn") or []
        if not isinstance(depends_on, list):
            logger.warning(
                f"Ignoring dependsOn of activity '{raw['name']}' in pipeline '{pipeline_name}': not an array"
            )
            return []

        entries = []
        for entry in depends_on:
            if isinstance(entry, dict) and isinstance(entry.get("activity"), str) and entry["activity"]:
                entries.append(entry)
            else:
                logger.warning(
                    f"Ignoring malformed dependency of activity '{raw['name']}' "
                    f"in pipeline '{pipeline_name}': {entry!r}"
                )
        return entries

    @staticmethod
    def _child_scopes(activity: Activity) -> Iterator[tuple[str, Any]]:
        """Child activity lists of a container activity with their scope paths."""
        keys = CONTAINER_ACTIVITY_KEYS.get(activity.type, ())
        props = activity.type_properties

        for key in keys:
            if key not in props:
                continue
            if key == "ifTrueActivities":
                yield f"{activity.path}/true", props[key]
            elif key == "ifFalseActivities":
                yield f"{activity.path}/false", props[key]
            elif key == "defaultActivities":
                yield f"{activity.path}/default", props[key]
            else:
                yield activity.path, props[key]

        if activity.type == "Switch":
            for case in props.get("cases") or []:
                if isinstance(case, dict):
                    yield f"{activity.path}/case:{case.get('value', '')}", case.get("activities")


def load_manifest(template_file: str | Path) -> WorkspaceManifest:
    """Read and parse a workspace template file."""
    return ManifestParser.load(Path(template_file))


def parse_manifest(document: Any, source: str | None = None) -> WorkspaceManifest:
    """Build a manifest from an already-parsed template document."""
    return ManifestParser.parse(document, source)
