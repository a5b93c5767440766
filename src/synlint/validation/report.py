"""Aggregation of rule outcomes into a summary and detail report."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models.finding import Finding, Severity

if TYPE_CHECKING:
    from .framework import RuleOutcome


@dataclass(frozen=True)
class SummaryEntry:
    """Issue count of one rule."""
    rule_id: str
    issue_count: int
    check_detail: str
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "ruleId": self.rule_id,
            "issueCount": self.issue_count,
            "checkDetail": self.check_detail,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Per-rule summary in catalog order plus the full finding list."""
    summary: tuple[SummaryEntry, ...] = ()
    details: tuple[Finding, ...] = ()
    counts: dict[Severity, int] = field(default_factory=dict)

    @property
    def total_findings(self) -> int:
        return sum(entry.issue_count for entry in self.summary)

    @property
    def highest_severity(self) -> Severity | None:
        present = [severity for severity, count in self.counts.items() if count]
        return max(present, key=lambda severity: severity.rank) if present else None

    def exit_code(self, fail_on: Severity | None = None) -> int:
        """Exit code for CI: 1 when a finding reaches ``fail_on``, otherwise 0."""
        if fail_on is None or self.highest_severity is None:
            return 0
        return 1 if self.highest_severity.rank >= fail_on.rank else 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "totalFindings": self.total_findings,
            "counts": {severity.value: self.counts.get(severity, 0) for severity in Severity},
            "summary": [entry.to_dict() for entry in self.summary],
            "details": [finding.to_dict() for finding in self.details],
        }


def build_report(outcomes: Iterable["RuleOutcome"], include_detail: bool = False) -> ValidationReport:
    """Sum rule outcomes into a report, keeping catalog then document order."""
    summary = []
    details = []
    counts = {severity: 0 for severity in Severity}

    for outcome in outcomes:
        rule = outcome.rule
        summary.append(SummaryEntry(rule.name, len(outcome.findings), rule.description, rule.severity))
        for finding in outcome.findings:
            counts[finding.severity] += 1
        if include_detail:
            details.extend(outcome.findings)

    return ValidationReport(tuple(summary), tuple(details), counts)
