"""Models for pipeline activities and their conditional dependencies."""

import re
from datetime import timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# d.hh:mm:ss or hh:mm:ss, optional fractional seconds
_TIMESPAN_PATTERN = re.compile(r"^(?:(\d+)\.)?(\d+):([0-5]?\d):([0-5]?\d)(?:\.\d+)?$")

# Container activity type -> keys holding child activity lists in typeProperties
CONTAINER_ACTIVITY_KEYS = {
    "ForEach": ("activities",),
    "Until": ("activities",),
    "IfCondition": ("ifTrueActivities", "ifFalseActivities"),
    "Switch": ("defaultActivities",),
}


class DependencyCondition(str, Enum):
    """Activity dependency conditions."""
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    SKIPPED = "Skipped"
    COMPLETED = "Completed"


class ActivityDependency(BaseModel):
    """A dependency of an activity on an upstream activity in the same scope."""
    activity: str | None = None
    conditions: list[str] = Field(alias="dependencyConditions", default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def known_conditions(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return [condition for condition in v if isinstance(condition, str)]
        return v

    def has_condition(self, condition: DependencyCondition) -> bool:
        return condition.value in self.conditions

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ActivityPolicy(BaseModel):
    """Activity execution policy."""
    timeout: Any = None

    model_config = ConfigDict(frozen=True)

    @property
    def timeout_duration(self) -> timedelta | None:
        """Parsed timeout, or None when absent or not a literal timespan."""
        return parse_timespan(self.timeout)


class Activity(BaseModel):
    """A single step of a pipeline.

    Activities are owned by their pipeline. ``scope`` is the container path the
    activity lives in ("" for the pipeline's top level, e.g. ``ForEachTable``
    or ``CheckFlag/true`` for nested ones); dependencies only refer to
    activities within the same scope.
    """
    name: str
    type: str = ""
    pipeline_name: str = Field(alias="pipelineName")
    scope: str = ""
    depends_on: list[ActivityDependency] = Field(alias="dependsOn", default_factory=list)
    policy: ActivityPolicy = Field(default_factory=ActivityPolicy)
    type_properties: dict[str, Any] = Field(alias="typeProperties", default_factory=dict)
    description: str | None = None

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("type", mode="before")
    @classmethod
    def null_type(cls, v):
        return "" if v is None else v

    @field_validator("depends_on", mode="before")
    @classmethod
    def null_depends_on(cls, v):
        return [] if v is None else v

    @field_validator("policy", mode="before")
    @classmethod
    def null_policy(cls, v):
        return {} if v is None else v

    @field_validator("type_properties", mode="before")
    @classmethod
    def null_type_properties(cls, v):
        return {} if v is None else v

    @property
    def path(self) -> str:
        """Display path of the activity within its pipeline."""
        return f"{self.scope}/{self.name}" if self.scope else self.name

    @property
    def is_nested(self) -> bool:
        return bool(self.scope)


def parse_timespan(value: Any) -> timedelta | None:
    """Parse a ``[d.]hh:mm:ss`` timespan string.

    Returns None for absent values and for anything that is not a literal
    timespan (dynamic expressions, objects).
    """
    if not isinstance(value, str):
        return None

    match = _TIMESPAN_PATTERN.match(value.strip())
    if not match:
        return None

    days, hours, minutes, seconds = match.groups()
    return timedelta(
        days=int(days or 0),
        hours=int(hours),
        minutes=int(minutes),
        seconds=int(seconds),
    )
