"""Built-in rule catalog.

Each rule checks one aspect of a workspace: reachability of resources,
impossible activity chains, documentation and organisation hygiene, activity
settings and credential handling.
"""

import logging
from typing import Any

from ..config import SynlintConfig
from ..models.activity import Activity
from ..models.finding import Finding, Severity
from ..models.resource import Resource, ResourceKind
from .framework import ActivityRule, AnalysisContext, ResourceRule, RuleTarget, ValidationRule

logger = logging.getLogger(__name__)

SECRET_REFERENCE_TYPES = frozenset({"AzureKeyVaultSecret"})
SECRET_REFERENCE_FIELDS = frozenset({"secretName"})


class UnreferencedResourceRule(ResourceRule):
    """Flag resources that no other resource depends on."""

    def __init__(self, kind: ResourceKind, name: str, description: str, message: str,
                 severity: Severity = Severity.MEDIUM):
        super().__init__(kind)
        self.name = name
        self.description = description
        self.severity = severity
        self._message = message

    def is_violation(self, resource: Resource, context: AnalysisContext) -> bool:
        return not context.graph.is_referenced(resource.identity)

    def message(self, resource: Resource, context: AnalysisContext) -> str:
        return self._message


class MissingDescriptionRule(ResourceRule):
    """Flag resources with an empty or absent description."""
    severity = Severity.LOW

    def __init__(self, kind: ResourceKind, name: str, description: str):
        super().__init__(kind)
        self.name = name
        self.description = description

    def is_violation(self, resource: Resource, context: AnalysisContext) -> bool:
        return not resource.properties.has_description

    def message(self, resource: Resource, context: AnalysisContext) -> str:
        return "has no description"


class MissingFolderRule(ResourceRule):
    """Flag resources that are not organised into a folder."""
    severity = Severity.MEDIUM

    def __init__(self, kind: ResourceKind, name: str, description: str):
        super().__init__(kind)
        self.name = name
        self.description = description

    def is_violation(self, resource: Resource, context: AnalysisContext) -> bool:
        return resource.properties.folder_name is None

    def message(self, resource: Resource, context: AnalysisContext) -> str:
        return "is not in a folder"


class MissingAnnotationsRule(ResourceRule):
    """Flag resources without annotations."""
    severity = Severity.LOW

    def __init__(self, kind: ResourceKind, name: str, description: str):
        super().__init__(kind)
        self.name = name
        self.description = description

    def is_violation(self, resource: Resource, context: AnalysisContext) -> bool:
        return len(resource.properties.annotations) == 0

    def message(self, resource: Resource, context: AnalysisContext) -> str:
        return "has no annotations"


class ConflictingActivityChainRule(ValidationRule):
    """Flag pipelines where an activity must both fail and succeed.

    Reported once per pipeline, whatever the number of conflicting activities.
    """
    name = "pipeline_conflicting_chain"
    description = "Pipeline(s) with an impossible AND/OR activity execution chain"
    severity = Severity.HIGH
    target = RuleTarget.PIPELINE

    def evaluate(self, context: AnalysisContext) -> list[Finding]:
        findings = []
        for pipeline in context.manifest.pipelines:
            result = context.conflicts.get(pipeline.name)
            if result is None or not result.has_conflicts:
                continue
            findings.append(self.finding(
                pipeline.name,
                "has an impossible AND/OR activity execution chain: "
                f"{', '.join(result.conflicts)} must both fail and succeed"
            ))
        return findings


class ActivityTimeoutRule(ActivityRule):
    """Flag activities whose declared timeout exceeds the allowed maximum.

    Absent timeouts and dynamic expressions are not flagged.
    """
    name = "activity_timeout_too_long"
    severity = Severity.HIGH

    def __init__(self, max_hours: float = 4):
        self.max_hours = max_hours
        self.description = f"Activities with timeout values above {max_hours:g} hours"

    def is_violation(self, activity: Activity) -> bool:
        timeout = activity.policy.timeout_duration
        return timeout is not None and timeout.total_seconds() > self.max_hours * 3600

    def message(self, activity: Activity) -> str:
        return (f"in pipeline '{activity.pipeline_name}' has a timeout of "
                f"{activity.policy.timeout}, above {self.max_hours:g} hours")


class ActivityDescriptionRule(ActivityRule):
    """Flag activities without a description."""
    name = "activity_no_description"
    description = "Activities without a description value"
    severity = Severity.LOW

    def is_violation(self, activity: Activity) -> bool:
        return not (activity.description and activity.description.strip())

    def message(self, activity: Activity) -> str:
        return f"in pipeline '{activity.pipeline_name}' has no description"


class ForEachBatchCountRule(ActivityRule):
    """Flag parallel ForEach activities that leave batch count unset."""
    name = "foreach_no_batch_count"
    description = "ForEach activities without a batch count value set"
    severity = Severity.HIGH

    def is_violation(self, activity: Activity) -> bool:
        if activity.type != "ForEach":
            return False
        if activity.type_properties.get("isSequential") is True:
            return False
        return activity.type_properties.get("batchCount") is None

    def message(self, activity: Activity) -> str:
        return f"in pipeline '{activity.pipeline_name}' runs in parallel without a batch count"


class LinkedServiceSecretRule(ResourceRule):
    """Flag linked services holding credentials outside a secret store.

    Every entry of ``typeProperties`` is inspected; the linked service passes
    when any entry references a secret store or declares anonymous
    authentication. Secret stores themselves and default workspace linked
    services are exempt.
    """
    name = "linked_service_no_secret_store"
    description = "Linked service(s) not using a secret store to manage credentials"
    severity = Severity.HIGH

    def __init__(self, secret_store_types: list[str], default_suffixes: list[str],
                 anonymous_markers: list[str]):
        super().__init__(ResourceKind.LINKED_SERVICE)
        self.secret_store_types = set(secret_store_types)
        self.default_suffixes = tuple(default_suffixes)
        self.anonymous_markers = set(anonymous_markers)

    def is_violation(self, resource: Resource, context: AnalysisContext) -> bool:
        if resource.properties.type in self.secret_store_types:
            return False
        if self.default_suffixes and resource.name.endswith(self.default_suffixes):
            return False

        return not any(
            self.entry_is_secured(value)
            for value in resource.properties.type_properties.values()
        )

    def entry_is_secured(self, value: Any) -> bool:
        return contains_secret_reference(value) or contains_marker(value, self.anonymous_markers)

    def message(self, resource: Resource, context: AnalysisContext) -> str:
        return "does not reference a secret store for its credentials"


def contains_secret_reference(value: Any) -> bool:
    """True if a type-property value holds a secret store reference at any depth."""
    if isinstance(value, dict):
        if value.get("type") in SECRET_REFERENCE_TYPES:
            return True
        if SECRET_REFERENCE_FIELDS.intersection(value):
            return True
        return any(contains_secret_reference(item) for item in value.values())
    if isinstance(value, list):
        return any(contains_secret_reference(item) for item in value)
    return False


def contains_marker(value: Any, markers: set[str]) -> bool:
    """True if a type-property value holds one of ``markers`` as a string at any depth."""
    if isinstance(value, str):
        return value in markers
    if isinstance(value, dict):
        return any(contains_marker(item, markers) for item in value.values())
    if isinstance(value, list):
        return any(contains_marker(item, markers) for item in value)
    return False


def default_rules(config: SynlintConfig | None = None) -> list[ValidationRule]:
    """The built-in catalog in reporting order."""
    config = config or SynlintConfig()
    rules_config = config.rules

    rules: list[ValidationRule] = [
        UnreferencedResourceRule(
            ResourceKind.PIPELINE, "pipeline_no_trigger",
            "Pipeline(s) without any triggers attached",
            "has no trigger attached and is not used by another pipeline",
        ),
        ConflictingActivityChainRule(),
        MissingDescriptionRule(
            ResourceKind.PIPELINE, "pipeline_no_description", "Pipeline(s) without a description value"
        ),
        MissingFolderRule(
            ResourceKind.PIPELINE, "pipeline_no_folder", "Pipeline(s) not organized into folders"
        ),
        MissingAnnotationsRule(
            ResourceKind.PIPELINE, "pipeline_no_annotations", "Pipeline(s) without annotations"
        ),
        MissingDescriptionRule(
            ResourceKind.DATA_FLOW, "dataflow_no_description", "Data flow(s) without a description value"
        ),
        ActivityTimeoutRule(rules_config.max_activity_timeout_hours),
        ActivityDescriptionRule(),
        ForEachBatchCountRule(),
        LinkedServiceSecretRule(
            rules_config.secret_store_types,
            rules_config.default_linked_service_suffixes,
            rules_config.anonymous_auth_markers,
        ),
        UnreferencedResourceRule(
            ResourceKind.LINKED_SERVICE, "linked_service_unused",
            "Linked service(s) not used by any other resource",
            "is not used by any other resource",
        ),
        MissingDescriptionRule(
            ResourceKind.LINKED_SERVICE, "linked_service_no_description",
            "Linked service(s) without a description value",
        ),
    ]

    if rules_config.check_linked_service_annotations:
        rules.append(MissingAnnotationsRule(
            ResourceKind.LINKED_SERVICE, "linked_service_no_annotations",
            "Linked service(s) without annotations",
        ))

    rules.extend([
        UnreferencedResourceRule(
            ResourceKind.DATASET, "dataset_unused",
            "Dataset(s) not used by any other resource",
            "is not used by any other resource",
        ),
        MissingDescriptionRule(
            ResourceKind.DATASET, "dataset_no_description", "Dataset(s) without a description value"
        ),
        MissingFolderRule(
            ResourceKind.DATASET, "dataset_no_folder", "Dataset(s) not organized into folders"
        ),
        MissingAnnotationsRule(
            ResourceKind.DATASET, "dataset_no_annotations", "Dataset(s) without annotations"
        ),
        UnreferencedResourceRule(
            ResourceKind.TRIGGER, "trigger_unused",
            "Trigger(s) not attached to any pipeline",
            "is not attached to any pipeline",
        ),
        MissingDescriptionRule(
            ResourceKind.TRIGGER, "trigger_no_description", "Trigger(s) without a description value"
        ),
        MissingAnnotationsRule(
            ResourceKind.TRIGGER, "trigger_no_annotations", "Trigger(s) without annotations"
        ),
    ])

    logger.debug(f"Built catalog of {len(rules)} rules")
    return rules
