"""Dependency graph artifacts derived from a workspace manifest."""

from dataclasses import dataclass, field

from synlint.models.resource import ResourceId, ResourceKind


@dataclass(frozen=True)
class DependencyGraph:
    """Resource nodes and the set of identities referenced as dependencies.

    ``edge_targets`` holds every resolved dependency target, including targets
    missing from the template, plus triggers that declare any dependency.
    """
    nodes: frozenset[ResourceId] = field(default_factory=frozenset)
    edge_targets: frozenset[ResourceId] = field(default_factory=frozenset)

    @property
    def referenced(self) -> frozenset[ResourceId]:
        """Nodes that appear as a dependency target."""
        return self.nodes & self.edge_targets

    @property
    def redundant(self) -> frozenset[ResourceId]:
        """Nodes never referenced as a dependency target."""
        return self.nodes - self.edge_targets

    @property
    def dangling(self) -> frozenset[ResourceId]:
        """Dependency targets that are not declared in the template."""
        return self.edge_targets - self.nodes

    def is_referenced(self, identity: ResourceId) -> bool:
        return identity in self.edge_targets

    def redundant_of_kind(self, kind: ResourceKind) -> frozenset[ResourceId]:
        return frozenset(identity for identity in self.redundant if identity.kind == kind)

    def redundant_by_kind(self) -> dict[ResourceKind, frozenset[ResourceId]]:
        return {kind: self.redundant_of_kind(kind) for kind in ResourceKind}
