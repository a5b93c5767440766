"""Configuration management for synlint using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from synlint.models.finding import Severity

CONFIG_FILE_NAME = ".synlint.json"


class OutputFormat(str, Enum):
    """Output format types."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class RulesConfig(BaseModel):
    """Rule catalog configuration section."""
    disabled: list[str] = Field(default_factory=list)
    max_activity_timeout_hours: float = Field(alias="maxActivityTimeoutHours", default=4)
    secret_store_types: list[str] = Field(
        alias="secretStoreTypes", default_factory=lambda: ["AzureKeyVault"]
    )
    default_linked_service_suffixes: list[str] = Field(
        alias="defaultLinkedServiceSuffixes",
        default_factory=lambda: ["WorkspaceDefaultSqlServer", "WorkspaceDefaultStorage"]
    )
    anonymous_auth_markers: list[str] = Field(
        alias="anonymousAuthMarkers", default_factory=lambda: ["Anonymous"]
    )
    scan_nested_activities: bool = Field(alias="scanNestedActivities", default=True)
    check_linked_service_annotations: bool = Field(
        alias="checkLinkedServiceAnnotations", default=False
    )

    @field_validator("max_activity_timeout_hours")
    @classmethod
    def validate_max_timeout(cls, v):
        if v <= 0:
            raise ValueError("max_activity_timeout_hours must be > 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    summary: bool = True
    detail: bool = False
    format: OutputFormat = OutputFormat.TABLE
    fail_on: Severity | None = Field(alias="failOn", default=None)

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class SynlintConfig(BaseModel):
    """Complete synlint configuration model."""
    rules: RulesConfig = Field(default_factory=RulesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> SynlintConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .synlint.json

    Returns:
        SynlintConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If config file specified but not found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return SynlintConfig()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
        return SynlintConfig(**config_data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .synlint.json configuration file by searching up directory tree."""
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
