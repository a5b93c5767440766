"""Core rule engine for workspace analysis.

Rules are independent checks over one target collection of the manifest (or a
graph-derived set). Each rule only reads the immutable :class:`AnalysisContext`
and returns its own findings, so rules can run in any order; the report keeps
catalog order so output is reproducible.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ..config import SynlintConfig
from ..errors import RuleExecutionError
from ..graph import ActivityConflictDetector, DependencyGraph, PipelineConflicts, build_dependency_graph
from ..models.activity import Activity
from ..models.finding import Finding, Severity
from ..models.manifest import WorkspaceManifest
from ..models.resource import Resource, ResourceKind
from .report import ValidationReport, build_report

logger = logging.getLogger(__name__)


class RuleTarget(str, Enum):
    """Collections a rule evaluates."""
    PIPELINE = "Pipeline"
    ACTIVITY = "Activity"
    LINKED_SERVICE = "LinkedService"
    DATASET = "Dataset"
    DATA_FLOW = "DataFlow"
    TRIGGER = "Trigger"

    @classmethod
    def for_kind(cls, kind: ResourceKind) -> "RuleTarget":
        return cls(kind.label)


@dataclass(frozen=True)
class AnalysisContext:
    """Everything a rule may read: the manifest and the artifacts derived from it."""
    manifest: WorkspaceManifest
    graph: DependencyGraph
    conflicts: dict[str, PipelineConflicts] = field(default_factory=dict)
    config: SynlintConfig = field(default_factory=SynlintConfig)

    @classmethod
    def build(cls, manifest: WorkspaceManifest, config: SynlintConfig | None = None) -> "AnalysisContext":
        """Build the dependency graph and conflict analysis for a manifest."""
        graph = build_dependency_graph(manifest)
        conflicts = ActivityConflictDetector().detect_all(manifest)
        return cls(manifest, graph, conflicts, config or SynlintConfig())

    @property
    def activities(self) -> list[Activity]:
        """Activities subject to activity rules."""
        return self.manifest.activities(include_nested=self.config.rules.scan_nested_activities)


@dataclass(frozen=True)
class RuleOutcome:
    """Findings of one rule."""
    rule: "ValidationRule"
    findings: tuple[Finding, ...] = ()


class ValidationRule(ABC):
    """Base class for rules.

    Subclasses set ``name`` (rule id), ``description`` (the check detail shown
    in the summary), ``severity`` and ``target``.
    """
    name: str
    description: str
    severity: Severity
    target: RuleTarget

    @abstractmethod
    def evaluate(self, context: AnalysisContext) -> list[Finding]:
        """Return one finding per failing element of the target collection."""

    def finding(self, name: str, message: str) -> Finding:
        return Finding(
            rule_id=self.name,
            component=self.target.value,
            name=name,
            message=message,
            severity=self.severity,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ResourceRule(ValidationRule):
    """Rule evaluated over every resource of one kind, in document order."""

    def __init__(self, kind: ResourceKind):
        self.kind = kind
        self.target = RuleTarget.for_kind(kind)

    def evaluate(self, context: AnalysisContext) -> list[Finding]:
        return [
            self.finding(resource.name, self.message(resource, context))
            for resource in context.manifest.of_kind(self.kind)
            if self.is_violation(resource, context)
        ]

    @abstractmethod
    def is_violation(self, resource: Resource, context: AnalysisContext) -> bool:
        """True when the resource fails the check."""

    @abstractmethod
    def message(self, resource: Resource, context: AnalysisContext) -> str:
        """Finding message for a failing resource."""


class ActivityRule(ValidationRule):
    """Rule evaluated over every activity of every pipeline."""
    target = RuleTarget.ACTIVITY

    def evaluate(self, context: AnalysisContext) -> list[Finding]:
        return [
            self.finding(activity.path, self.message(activity))
            for activity in context.activities
            if self.is_violation(activity)
        ]

    @abstractmethod
    def is_violation(self, activity: Activity) -> bool:
        """True when the activity fails the check."""

    @abstractmethod
    def message(self, activity: Activity) -> str:
        """Finding message for a failing activity."""


class ValidationFramework:
    """Runs an ordered catalog of rules over a workspace manifest."""

    def __init__(self, config: SynlintConfig | None = None):
        self.config = config or SynlintConfig()
        self.rules: list[ValidationRule] = []

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a rule at the end of the catalog."""
        self.rules.append(rule)

    def create_default_rules(self) -> None:
        """Add the built-in catalog, minus rules disabled in configuration."""
        from .rules import default_rules

        catalog = default_rules(self.config)
        known = {rule.name for rule in catalog}
        disabled = set(self.config.rules.disabled)

        for rule_id in sorted(disabled - known):
            logger.warning(f"Unknown rule in disabled list: {rule_id}")

        for rule in catalog:
            if rule.name in disabled:
                logger.debug(f"Rule disabled by configuration: {rule.name}")
                continue
            self.add_rule(rule)

    def run(self, context: AnalysisContext) -> list[RuleOutcome]:
        """Evaluate every rule once, in catalog order."""
        logger.info(f"Running {len(self.rules)} rules")

        outcomes = []
        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            try:
                findings = rule.evaluate(context)
            except Exception as e:
                logger.error(f"Rule {rule.name} failed with error: {e}")
                raise RuleExecutionError(rule.name, e) from e
            outcomes.append(RuleOutcome(rule, tuple(findings)))

        return outcomes

    def validate(self, manifest: WorkspaceManifest, detail: bool | None = None) -> ValidationReport:
        """Analyze a manifest and aggregate the findings into a report.

        Args:
            manifest: Parsed workspace manifest
            detail: Include the full finding list; defaults to ``output.detail``

        Returns:
            ValidationReport with the per-rule summary and (optionally) detail
        """
        if detail is None:
            detail = self.config.output.detail

        context = AnalysisContext.build(manifest, self.config)
        report = build_report(self.run(context), include_detail=detail)

        logger.info(f"Analysis completed with {report.total_findings} findings")
        return report
