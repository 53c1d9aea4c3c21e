"""Data models for ganttcore."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .exceptions import DuplicateDependencyError, MissingReferenceError, SelfDependencyError
from .logger import get_logger
from .workdays import ProjectSettings

logger = get_logger()

DEFAULT_OWNER_EFFORT = 100  # Percent


class DependencyType(str, Enum):
    """Relationship between a predecessor (source) and successor (target) task."""

    FS = "FS"  # Finish to Start
    SS = "SS"  # Start to Start
    FF = "FF"  # Finish to Finish
    SF = "SF"  # Start to Finish


class Priority(str, Enum):
    """Task priority."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TaskStatus(str, Enum):
    """Task status."""

    NOT_STARTED = "Not Started"
    ONGOING = "In Progress"
    DONE = "Completed"
    ON_HOLD = "On Hold"


class TaskKind(str, Enum):
    """Kind of schedule item."""

    TASK = "task"
    MILESTONE = "milestone"
    PHASE = "phase"


def _default_assignments() -> list[TaskAssignment]:
    return []


def _default_tasks() -> list[Task]:
    return []


def _default_dependencies() -> list[Dependency]:
    return []


def _default_members() -> list[Member]:
    return []


def new_id() -> str:
    """Generate a short random identifier for new tasks and dependencies."""
    return uuid.uuid4().hex[:9]


@dataclass(frozen=True)
class TaskAssignment:
    """An additional member working on a task at some effort level."""

    member_id: str
    effort: int  # 0-100 percentage


@dataclass
class Member:
    """A project team member."""

    id: str
    name: str
    role: str = ""
    email: str | None = None
    phone: str | None = None
    color: str | None = None


@dataclass
class Task:
    """A scheduled task.

    end is inclusive: a one-day task has start == end. duration is the
    working-day count of [start, end] under the project calendar and is
    kept in sync by ganttcore.scheduler.updates.
    """

    id: str
    name: str
    start: date
    end: date
    duration: int = 0
    progress: int = 0
    priority: Priority | None = Priority.MEDIUM
    status: TaskStatus | None = TaskStatus.NOT_STARTED
    owner_id: str | None = None
    owner_effort: int = DEFAULT_OWNER_EFFORT
    assignments: list[TaskAssignment] = field(default_factory=_default_assignments)
    role: str | None = None
    deliverable: str | None = None
    description: str | None = None
    kind: TaskKind = TaskKind.TASK
    parent_id: str | None = None

    @property
    def total_effort(self) -> int:
        """Owner effort plus all assignment efforts, in percent."""
        return self.owner_effort + sum(a.effort for a in self.assignments)


@dataclass(frozen=True)
class Dependency:
    """A directed link from a predecessor (source) to a successor (target)."""

    id: str
    source_id: str
    target_id: str
    type: DependencyType = DependencyType.FS


@dataclass
class Project:
    """A complete project snapshot: tasks, dependencies, members and calendar."""

    tasks: list[Task] = field(default_factory=_default_tasks)
    dependencies: list[Dependency] = field(default_factory=_default_dependencies)
    members: list[Member] = field(default_factory=_default_members)
    settings: ProjectSettings = field(default_factory=ProjectSettings)

    def get_all_ids(self) -> set[str]:
        """Get all task IDs in the project."""
        return {task.id for task in self.tasks}

    def get_task_by_id(self, task_id: str) -> Task | None:
        """Get a task by its ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def get_member_by_id(self, member_id: str) -> Member | None:
        """Get a member by its ID."""
        for member in self.members:
            if member.id == member_id:
                return member
        return None

    def predecessors_of(self, task_id: str) -> list[str]:
        """IDs of tasks this task depends on, in dependency order."""
        return [d.source_id for d in self.dependencies if d.target_id == task_id]

    def successors_of(self, task_id: str) -> list[str]:
        """IDs of tasks that depend on this task, in dependency order."""
        return [d.target_id for d in self.dependencies if d.source_id == task_id]

    def add_dependency(
        self,
        source_id: str,
        target_id: str,
        dep_type: DependencyType = DependencyType.FS,
        dep_id: str | None = None,
    ) -> Dependency:
        """Create a dependency between two existing tasks.

        The project is left unchanged if the dependency is rejected.

        Raises:
            SelfDependencyError: If source_id == target_id
            MissingReferenceError: If either endpoint is not a task in the project
            DuplicateDependencyError: If a (source_id, target_id) dependency already exists
        """
        if source_id == target_id:
            raise SelfDependencyError(f"Task {source_id} cannot depend on itself")

        all_ids = self.get_all_ids()
        for endpoint in (source_id, target_id):
            if endpoint not in all_ids:
                raise MissingReferenceError(f"Dependency references unknown task: {endpoint}")

        for existing in self.dependencies:
            if existing.source_id == source_id and existing.target_id == target_id:
                raise DuplicateDependencyError(
                    f"Dependency {source_id} -> {target_id} already exists ({existing.id})"
                )

        dependency = Dependency(
            id=dep_id or new_id(), source_id=source_id, target_id=target_id, type=dep_type
        )
        self.dependencies.append(dependency)
        logger.changes("Added %s dependency %s -> %s", dep_type.value, source_id, target_id)
        return dependency

    def remove_dependency(self, dep_id: str) -> bool:
        """Remove a dependency by ID. Returns True if one was removed."""
        before = len(self.dependencies)
        self.dependencies = [d for d in self.dependencies if d.id != dep_id]
        return len(self.dependencies) != before

    def remove_task(self, task_id: str) -> bool:
        """Remove a task and every dependency that touches it.

        Returns:
            True if the task existed
        """
        if self.get_task_by_id(task_id) is None:
            return False
        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.dependencies = [
            d for d in self.dependencies if task_id not in (d.source_id, d.target_id)
        ]
        logger.changes("Removed task %s and its dependencies", task_id)
        return True


def task_hours(task: Task, settings: ProjectSettings) -> float:
    """Convert a task's effort allocation into planned hours.

    hours = (total effort % / 100) * duration * working hours per day
    """
    return (task.total_effort / 100) * task.duration * settings.working_day_hours
