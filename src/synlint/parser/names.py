"""Resource identity normalization.

Templates embed identities in expression strings:

* resource types end in the kind, e.g. ``Microsoft.Synapse/workspaces/pipelines``
* resource names embed a quoted path segment after the workspace parameter, e.g.
  ``[concat(parameters('workspaceName'), '/PL_Load')]``
* dependency references embed ``<kind>/<name>`` the same way, e.g.
  ``[concat(variables('workspaceId'), '/linkedServices/LS_Sql')]``

Every function here returns None for input it cannot resolve; callers treat
that as "no identity" and carry on.
"""

import logging
import re

from synlint.models.resource import ResourceId, ResourceKind

logger = logging.getLogger(__name__)

# Text after the first "/" up to the closing quote or bracket (or end of string)
_PATH_SEGMENT = re.compile(r"/([^'\"\]]*)")


def parse_kind(type_string: str | None) -> ResourceKind | None:
    """Resource kind from a type path (the segment after the last ``/``)."""
    if not isinstance(type_string, str):
        return None

    suffix = type_string.strip().strip("[]'\"").rsplit("/", 1)[-1]
    if not suffix:
        return None
    return ResourceKind.from_suffix(suffix)


def parse_path_segment(expression: str | None) -> str | None:
    """Quoted path segment following the first ``/`` of a name expression."""
    if not isinstance(expression, str):
        return None

    match = _PATH_SEGMENT.search(expression)
    if not match:
        return None

    segment = match.group(1).strip()
    return segment or None


def parse_name(name_expression: str | None) -> str | None:
    """Resource name from a top-level name expression."""
    return parse_path_segment(name_expression)


def parse_reference(reference: str | None) -> ResourceId | None:
    """Identity targeted by a ``dependsOn`` reference expression."""
    segment = parse_path_segment(reference)
    if segment is None:
        logger.debug(f"Unresolvable dependency reference: {reference!r}")
        return None

    return parse_key(segment.replace("/", ResourceId.KEY_DELIMITER, 1))


def parse_key(key: str) -> ResourceId | None:
    """Identity from a composite ``kind|name`` key."""
    kind_part, delimiter, name = key.partition(ResourceId.KEY_DELIMITER)
    if not delimiter or not name:
        return None

    kind = ResourceKind.from_suffix(kind_part)
    if kind is None:
        logger.debug(f"Reference to unsupported resource kind: {kind_part!r}")
        return None
    return ResourceId(kind, name)


def parse_identity(type_string: str | None, name_expression: str | None) -> ResourceId | None:
    """Identity of a top-level resource declaration."""
    kind = parse_kind(type_string)
    name = parse_name(name_expression)
    if kind is None or name is None:
        return None
    return ResourceId(kind, name)
