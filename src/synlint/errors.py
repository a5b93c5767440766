"""Exceptions raised by synlint."""


class SynlintError(Exception):
    """Base class for all synlint errors."""


class ManifestError(SynlintError):
    """Workspace template could not be located, read or parsed."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class RuleExecutionError(SynlintError):
    """A rule raised while being evaluated."""

    def __init__(self, rule_id: str, cause: Exception):
        self.rule_id = rule_id
        super().__init__(f"Rule {rule_id} failed: {cause}")
