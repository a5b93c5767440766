"""Tests for impossible AND/OR activity chain detection."""

import pytest

from conftest import activity
from synlint.graph import ActivityConflictDetector

FAILED = ["Failed"]
SUCCEEDED = ["Succeeded"]


@pytest.fixture
def detector():
    return ActivityConflictDetector()


@pytest.fixture
def conflicting_pipeline(workspace):
    """A depends on B failing, while H (also gating G on failure) needs B to succeed."""
    workspace.pipeline("PL1", activities=[
        activity("A", depends_on=[("B", FAILED), ("C", SUCCEEDED)]),
        activity("B", depends_on=[("D", SUCCEEDED)]),
        activity("C"),
        activity("D"),
        activity("G", depends_on=[("H", FAILED), ("I", SUCCEEDED)]),
        activity("H", depends_on=[("B", SUCCEEDED)]),
        activity("I"),
    ])
    return workspace.manifest().pipelines[0]


class TestActivityConflictDetector:
    """Test ActivityConflictDetector."""

    def test_two_hop_conflict(self, detector, conflicting_pipeline):
        result = detector.detect(conflicting_pipeline)
        top = result.scopes[0]

        assert top.failure_triggers == {"B", "H"}
        assert top.success_candidates == {"D", "B"}
        assert top.conflicts == {"B"}
        assert result.has_conflicts
        assert result.conflicts == ["B"]

    def test_single_dependency_does_not_qualify(self, detector, workspace):
        workspace.pipeline("PL", activities=[
            activity("A", depends_on=[("B", FAILED)]),
            activity("B", depends_on=[("A0", SUCCEEDED)]),
            activity("H", depends_on=[("B", SUCCEEDED)]),
        ])

        result = detector.detect(workspace.manifest().pipelines[0])

        assert result.scopes[0].failure_triggers == frozenset()
        assert not result.has_conflicts

    def test_no_conflict_when_success_chain_differs(self, detector, workspace):
        workspace.pipeline("PL", activities=[
            activity("A", depends_on=[("B", FAILED), ("C", SUCCEEDED)]),
            activity("B", depends_on=[("D", SUCCEEDED)]),
        ])

        result = detector.detect(workspace.manifest().pipelines[0])

        assert result.scopes[0].failure_triggers == {"B"}
        assert result.scopes[0].success_candidates == {"D"}
        assert not result.has_conflicts

    def test_completed_and_skipped_are_ignored(self, detector, workspace):
        workspace.pipeline("PL", activities=[
            activity("A", depends_on=[("B", ["Completed"]), ("C", ["Skipped"])]),
            activity("B", depends_on=[("B0", ["Completed"])]),
        ])

        result = detector.detect(workspace.manifest().pipelines[0])

        assert result.scopes[0].failure_triggers == frozenset()

    def test_three_hop_contradiction_is_not_reported(self, detector, workspace):
        workspace.pipeline("PL", activities=[
            activity("A", depends_on=[("B", FAILED), ("C", SUCCEEDED)]),
            activity("B", depends_on=[("X", SUCCEEDED)]),
            activity("X", depends_on=[("Y", SUCCEEDED)]),
            activity("Z", depends_on=[("Y", FAILED), ("C", SUCCEEDED)]),
            activity("Y", depends_on=[("W", SUCCEEDED)]),
        ])

        result = detector.detect(workspace.manifest().pipelines[0])

        assert not result.has_conflicts

    def test_scopes_are_analysed_separately(self, detector, workspace):
        # Same names as the conflicting chain, but split across two scopes
        workspace.pipeline("PL", activities=[
            activity("A", depends_on=[("B", FAILED), ("C", SUCCEEDED)]),
            activity("B", depends_on=[("D", SUCCEEDED)]),
            activity("Loop", type="ForEach", batchCount=4, activities=[
                activity("G", depends_on=[("H", FAILED), ("I", SUCCEEDED)]),
                activity("H", depends_on=[("B", SUCCEEDED)]),
            ]),
        ])

        result = detector.detect(workspace.manifest().pipelines[0])

        assert [scope.scope for scope in result.scopes] == ["", "Loop"]
        assert not result.has_conflicts

    def test_conflict_inside_container(self, detector, workspace):
        workspace.pipeline("PL", activities=[
            activity("Loop", type="ForEach", batchCount=4, activities=[
                activity("A", depends_on=[("B", FAILED), ("C", SUCCEEDED)]),
                activity("B", depends_on=[("H", SUCCEEDED)]),
                activity("G", depends_on=[("H", FAILED), ("I", SUCCEEDED)]),
                activity("H", depends_on=[("J", SUCCEEDED)]),
            ]),
        ])

        result = detector.detect(workspace.manifest().pipelines[0])

        assert result.conflicts == ["Loop/H"]

    def test_detect_all_keeps_document_order(self, detector, workspace):
        chain = [
            activity("A", depends_on=[("B", FAILED), ("C", SUCCEEDED)]),
            activity("B", depends_on=[("B0", SUCCEEDED)]),
            activity("G", depends_on=[("H", FAILED), ("I", SUCCEEDED)]),
            activity("H", depends_on=[("B", SUCCEEDED)]),
        ]
        workspace.pipeline("PL_Z", activities=chain).pipeline("PL_Clean").pipeline("PL_A", activities=chain)

        conflicting = detector.detect_all(workspace.manifest())

        assert list(conflicting) == ["PL_Z", "PL_A"]

    def test_pipeline_without_activities(self, detector, workspace):
        workspace.pipeline("PL")

        result = detector.detect(workspace.manifest().pipelines[0])

        assert result.scopes == ()
        assert not result.has_conflicts
