"""Models for top-level workspace resources."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from synlint.models.activity import Activity


class ResourceKind(str, Enum):
    """Resource kinds, keyed by the type-path suffix used in templates."""
    LINKED_SERVICE = "linkedServices"
    DATASET = "datasets"
    PIPELINE = "pipelines"
    DATA_FLOW = "dataflows"
    TRIGGER = "triggers"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @classmethod
    def from_suffix(cls, suffix: str) -> "ResourceKind | None":
        """Resolve a type-path suffix, ignoring case."""
        return _KINDS_BY_SUFFIX.get(suffix.lower())


_KIND_LABELS = {
    ResourceKind.LINKED_SERVICE: "LinkedService",
    ResourceKind.DATASET: "Dataset",
    ResourceKind.PIPELINE: "Pipeline",
    ResourceKind.DATA_FLOW: "DataFlow",
    ResourceKind.TRIGGER: "Trigger",
}

_KINDS_BY_SUFFIX = {kind.value.lower(): kind for kind in ResourceKind}


@dataclass(frozen=True, order=True)
class ResourceId:
    """Canonical (kind, name) identity of a resource."""
    kind: ResourceKind
    name: str

    KEY_DELIMITER = "|"

    @property
    def key(self) -> str:
        """Composite ``kind|name`` identity string."""
        return f"{self.kind.value}{self.KEY_DELIMITER}{self.name}"

    def __str__(self) -> str:
        return f"{self.kind.label}:{self.name}"


class Folder(BaseModel):
    """Folder a resource is organised under."""
    name: str | None = None


class _DocumentedProperties(BaseModel):
    description: str | None = None
    annotations: list[Any] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("annotations", mode="before")
    @classmethod
    def null_annotations(cls, v):
        return [] if v is None else v

    @property
    def has_description(self) -> bool:
        return bool(self.description and self.description.strip())


class _FolderedProperties(_DocumentedProperties):
    folder: Folder | None = None

    @property
    def folder_name(self) -> str | None:
        if self.folder and self.folder.name and self.folder.name.strip():
            return self.folder.name
        return None


class PipelineProperties(_FolderedProperties):
    """Pipeline properties; ``activities`` holds every activity, nested ones included."""
    activities: list[Activity] = Field(default_factory=list)


class DatasetProperties(_FolderedProperties):
    """Dataset properties."""


class DataFlowProperties(_FolderedProperties):
    """Data flow properties."""


class TriggerProperties(_DocumentedProperties):
    """Trigger properties."""


class LinkedServiceProperties(_DocumentedProperties):
    """Linked service properties."""
    type: str | None = None
    type_properties: dict[str, Any] = Field(alias="typeProperties", default_factory=dict)

    @field_validator("type_properties", mode="before")
    @classmethod
    def null_type_properties(cls, v):
        return {} if v is None else v


ResourceProperties = (
    PipelineProperties
    | DatasetProperties
    | LinkedServiceProperties
    | DataFlowProperties
    | TriggerProperties
)

PROPERTIES_MODELS: dict[ResourceKind, type[BaseModel]] = {
    ResourceKind.PIPELINE: PipelineProperties,
    ResourceKind.DATASET: DatasetProperties,
    ResourceKind.LINKED_SERVICE: LinkedServiceProperties,
    ResourceKind.DATA_FLOW: DataFlowProperties,
    ResourceKind.TRIGGER: TriggerProperties,
}


class Resource(BaseModel):
    """A top-level workspace resource."""
    kind: ResourceKind
    name: str
    properties: ResourceProperties
    depends_on: list[str] = Field(alias="dependsOn", default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("depends_on", mode="before")
    @classmethod
    def null_depends_on(cls, v):
        return [] if v is None else v

    @property
    def identity(self) -> ResourceId:
        return ResourceId(self.kind, self.name)
