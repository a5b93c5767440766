"""Workspace manifest: the parsed, immutable set of resources under analysis."""

from pydantic import BaseModel, ConfigDict, Field

from synlint.models.activity import Activity
from synlint.models.resource import Resource, ResourceKind


class WorkspaceManifest(BaseModel):
    """All supported resources of one workspace template, in document order."""
    resources: list[Resource] = Field(default_factory=list)
    source: str | None = None

    model_config = ConfigDict(frozen=True)

    def of_kind(self, kind: ResourceKind) -> list[Resource]:
        return [resource for resource in self.resources if resource.kind == kind]

    @property
    def pipelines(self) -> list[Resource]:
        return self.of_kind(ResourceKind.PIPELINE)

    @property
    def datasets(self) -> list[Resource]:
        return self.of_kind(ResourceKind.DATASET)

    @property
    def linked_services(self) -> list[Resource]:
        return self.of_kind(ResourceKind.LINKED_SERVICE)

    @property
    def data_flows(self) -> list[Resource]:
        return self.of_kind(ResourceKind.DATA_FLOW)

    @property
    def triggers(self) -> list[Resource]:
        return self.of_kind(ResourceKind.TRIGGER)

    def activities(self, include_nested: bool = True) -> list[Activity]:
        """Activities of every pipeline, in pipeline then document order."""
        activities = []
        for pipeline in self.pipelines:
            for activity in pipeline.properties.activities:
                if include_nested or not activity.is_nested:
                    activities.append(activity)
        return activities

    def counts(self) -> dict[str, int]:
        """Resource counts per kind label, plus activities."""
        counts = {kind.label: len(self.of_kind(kind)) for kind in ResourceKind}
        counts["Activity"] = len(self.activities())
        return counts
