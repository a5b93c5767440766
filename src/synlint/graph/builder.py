"""Dependency graph construction from declared resource dependencies."""

import logging

from synlint.graph.models import DependencyGraph
from synlint.models.manifest import WorkspaceManifest
from synlint.models.resource import ResourceKind
from synlint.parser.names import parse_reference

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Builds the node set and dependency-target set in one pass over resources."""

    def __init__(self, manifest: WorkspaceManifest):
        self.manifest = manifest

    def build(self) -> DependencyGraph:
        nodes = set()
        edge_targets = set()
        unresolved = 0

        for resource in self.manifest.resources:
            nodes.add(resource.identity)

            for reference in resource.depends_on:
                target = parse_reference(reference)
                if target is None:
                    unresolved += 1
                    continue
                edge_targets.add(target)

            # A wired trigger is a graph root: in use even though nothing depends on it
            if resource.kind == ResourceKind.TRIGGER and resource.depends_on:
                edge_targets.add(resource.identity)

        graph = DependencyGraph(nodes=frozenset(nodes), edge_targets=frozenset(edge_targets))

        logger.info(
            f"Built dependency graph: {len(graph.nodes)} nodes, "
            f"{len(graph.referenced)} referenced, {len(graph.redundant)} unreferenced"
        )
        if unresolved:
            logger.debug(f"Skipped {unresolved} unresolvable dependency references")
        if graph.dangling:
            logger.debug(f"Dependencies on resources missing from the template: "
                         f"{', '.join(sorted(str(target) for target in graph.dangling))}")

        return graph


def build_dependency_graph(manifest: WorkspaceManifest) -> DependencyGraph:
    """Build the dependency graph of a manifest."""
    return DependencyGraphBuilder(manifest).build()
