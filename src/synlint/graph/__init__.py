"""Resource dependency graph and activity chain analysis."""

from .builder import DependencyGraphBuilder, build_dependency_graph
from .conflicts import ActivityConflictDetector, PipelineConflicts, ScopeConflicts
from .models import DependencyGraph

__all__ = [
    "DependencyGraph",
    "DependencyGraphBuilder",
    "build_dependency_graph",
    "ActivityConflictDetector",
    "PipelineConflicts",
    "ScopeConflicts",
]
