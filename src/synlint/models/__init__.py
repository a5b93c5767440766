"""Pydantic data models for workspace resources, activities and findings."""

from synlint.models.activity import (
    Activity,
    ActivityDependency,
    ActivityPolicy,
    DependencyCondition,
)
from synlint.models.finding import Finding, Severity
from synlint.models.manifest import WorkspaceManifest
from synlint.models.resource import (
    DataFlowProperties,
    DatasetProperties,
    Folder,
    LinkedServiceProperties,
    PipelineProperties,
    Resource,
    ResourceId,
    ResourceKind,
    TriggerProperties,
)

__all__ = [
    "Activity",
    "ActivityDependency",
    "ActivityPolicy",
    "DependencyCondition",
    "Finding",
    "Severity",
    "WorkspaceManifest",
    "Resource",
    "ResourceId",
    "ResourceKind",
    "Folder",
    "PipelineProperties",
    "DatasetProperties",
    "LinkedServiceProperties",
    "DataFlowProperties",
    "TriggerProperties",
]
