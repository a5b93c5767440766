"""Finding and severity types produced by the rule engine."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Finding severity, ordered Low < Medium < High."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


@dataclass(frozen=True)
class Finding:
    """A single issue reported by a rule against one workspace element."""
    rule_id: str
    component: str
    name: str
    message: str
    severity: Severity

    def __str__(self) -> str:
        return f"[{self.severity.label.upper()}] {self.rule_id}: {self.component} '{self.name}' {self.message}"

    def to_dict(self) -> dict:
        return {
            "ruleId": self.rule_id,
            "component": self.component,
            "name": self.name,
            "message": self.message,
            "severity": self.severity.value,
        }
