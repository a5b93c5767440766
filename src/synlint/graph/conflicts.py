"""Detection of contradictory success/failure chains between activities.

An activity gated on several upstream activities (an AND/OR combination) that
requires some upstream ``X`` to have *failed* cannot run if, two hops away,
another activity in the same scope requires ``X`` to have *succeeded*: a single
execution of ``X`` only has one outcome.

This is a bounded two-hop check on activity names. Contradictions spanning
more hops are not reported.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from synlint.models.activity import Activity, DependencyCondition
from synlint.models.manifest import WorkspaceManifest
from synlint.models.resource import Resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScopeConflicts:
    """Two-hop analysis of the activities sharing one dependency scope."""
    scope: str
    failure_triggers: frozenset[str] = field(default_factory=frozenset)
    success_candidates: frozenset[str] = field(default_factory=frozenset)

    @property
    def conflicts(self) -> frozenset[str]:
        return self.failure_triggers & self.success_candidates

    @property
    def conflict_paths(self) -> list[str]:
        return sorted(f"{self.scope}/{name}" if self.scope else name for name in self.conflicts)


@dataclass(frozen=True)
class PipelineConflicts:
    """Conflict analysis of a single pipeline."""
    pipeline_name: str
    scopes: tuple[ScopeConflicts, ...] = ()

    @property
    def conflicts(self) -> list[str]:
        """Paths of activities required both to fail and to succeed."""
        return [path for scope in self.scopes for path in scope.conflict_paths]

    @property
    def has_conflicts(self) -> bool:
        return any(scope.conflicts for scope in self.scopes)


class ActivityConflictDetector:
    """Finds impossible AND/OR activity execution chains per pipeline."""

    def detect(self, pipeline: Resource) -> PipelineConflicts:
        scopes: dict[str, list[Activity]] = {}
        for activity in pipeline.properties.activities:
            scopes.setdefault(activity.scope, []).append(activity)

        results = tuple(self.detect_scope(scope, activities) for scope, activities in scopes.items())
        result = PipelineConflicts(pipeline.name, results)

        if result.has_conflicts:
            logger.debug(f"Pipeline '{pipeline.name}' has conflicting chains on: {', '.join(result.conflicts)}")
        return result

    def detect_scope(self, scope: str, activities: Iterable[Activity]) -> ScopeConflicts:
        activities = list(activities)

        by_name: dict[str, Activity] = {}
        for activity in activities:
            by_name.setdefault(activity.name, activity)

        failure_triggers = set()
        for activity in activities:
            if len(activity.depends_on) <= 1:
                continue
            for dependency in activity.depends_on:
                if dependency.activity and dependency.has_condition(DependencyCondition.FAILED):
                    failure_triggers.add(dependency.activity)

        success_candidates = set()
        for name in failure_triggers:
            upstream = by_name.get(name)
            if upstream is None:
                continue
            for dependency in upstream.depends_on:
                if dependency.activity and dependency.has_condition(DependencyCondition.SUCCEEDED):
                    success_candidates.add(dependency.activity)

        return ScopeConflicts(scope, frozenset(failure_triggers), frozenset(success_candidates))

    def detect_all(self, manifest: WorkspaceManifest) -> dict[str, PipelineConflicts]:
        """Pipelines with at least one conflict, keyed by name in document order."""
        conflicting = {}
        for pipeline in manifest.pipelines:
            result = self.detect(pipeline)
            if result.has_conflicts:
                conflicting[pipeline.name] = result

        logger.info(f"Found {len(conflicting)} pipelines with impossible activity chains")
        return conflicting
