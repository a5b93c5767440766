"""Rule engine, built-in rule catalog and report aggregation."""

from .framework import (
    ActivityRule,
    AnalysisContext,
    ResourceRule,
    RuleOutcome,
    RuleTarget,
    ValidationFramework,
    ValidationRule,
)
from .report import SummaryEntry, ValidationReport, build_report
from .rules import (
    ActivityDescriptionRule,
    ActivityTimeoutRule,
    ConflictingActivityChainRule,
    ForEachBatchCountRule,
    LinkedServiceSecretRule,
    MissingAnnotationsRule,
    MissingDescriptionRule,
    MissingFolderRule,
    UnreferencedResourceRule,
    default_rules,
)

__all__ = [
    "ValidationFramework",
    "ValidationRule",
    "ResourceRule",
    "ActivityRule",
    "AnalysisContext",
    "RuleOutcome",
    "RuleTarget",
    "ValidationReport",
    "SummaryEntry",
    "build_report",
    "default_rules",
    "UnreferencedResourceRule",
    "MissingDescriptionRule",
    "MissingFolderRule",
    "MissingAnnotationsRule",
    "ConflictingActivityChainRule",
    "ActivityTimeoutRule",
    "ActivityDescriptionRule",
    "ForEachBatchCountRule",
    "LinkedServiceSecretRule",
]
