"""Pydantic schemas for project file (JSON) validation."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .models import DEFAULT_OWNER_EFFORT, DependencyType, Priority, TaskKind, TaskStatus
from .workdays import ProjectSettings


class _CamelModel(BaseModel):
    """Base for schemas whose JSON keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _strip_time(v: Any) -> Any:
    """Reduce timestamps such as 2024-01-05T00:00:00.000Z to the calendar date."""
    if isinstance(v, str) and len(v) > 10 and v[10] in "T ":
        return v[:10]
    return v


class AssignmentSchema(_CamelModel):
    """Schema for an additional member assignment on a task."""

    member_id: str
    effort: int = Field(default=0, ge=0, le=100)


class TaskSchema(_CamelModel):
    """Schema for a task entry."""

    id: str
    name: str = ""
    description: str | None = None
    start: date
    end: date
    duration: int = 0
    progress: int = Field(default=0, ge=0, le=100)
    priority: Priority | None = None
    status: TaskStatus | None = None
    owner_id: str | None = None
    owner_effort: int | None = None
    assignments: list[AssignmentSchema] = Field(default_factory=list[AssignmentSchema])
    role: str | None = None
    deliverable: str | None = None
    kind: TaskKind = Field(default=TaskKind.TASK, alias="type")
    parent_id: str | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Any:
        """Accept full timestamps as well as YYYY-MM-DD."""
        return _strip_time(v)

    @field_validator("assignments", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        """Treat a missing assignment list as empty."""
        return v if v is not None else []

    @field_validator("owner_effort", mode="after")
    @classmethod
    def default_owner_effort(cls, v: int | None) -> int:
        """Older files have no owner effort; the owner is then fully allocated."""
        return DEFAULT_OWNER_EFFORT if v is None else v

    @model_validator(mode="after")
    def validate_end_after_start(self) -> TaskSchema:
        """Ensure end date is not before start date."""
        if self.end < self.start:
            raise ValueError(f"task {self.id}: end date must not be before start date")
        return self


class DependencySchema(_CamelModel):
    """Schema for a dependency entry."""

    id: str
    source_id: str
    target_id: str
    type: DependencyType = DependencyType.FS


class MemberSchema(_CamelModel):
    """Schema for a team member entry."""

    id: str
    name: str
    role: str = ""
    email: str | None = None
    phone: str | None = None
    color: str | None = None


class ProjectSchema(BaseModel):
    """Schema for the entire project file."""

    tasks: list[TaskSchema] = Field(default_factory=list[TaskSchema])
    dependencies: list[DependencySchema] = Field(default_factory=list[DependencySchema])
    members: list[MemberSchema] = Field(default_factory=list[MemberSchema])
    settings: ProjectSettings = Field(default_factory=ProjectSettings)

    @field_validator("tasks", "dependencies", "members", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        """Treat null sections as empty."""
        return v if v is not None else []

    @field_validator("settings", mode="before")
    @classmethod
    def ensure_settings(cls, v: Any) -> Any:
        """Missing settings fall back to defaults."""
        return v if v is not None else {}
