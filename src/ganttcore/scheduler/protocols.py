"""Protocol definitions for the scheduling engine."""

from collections.abc import Sequence
from typing import Protocol

from ..models import Dependency, DependencyType, Task
from ..workdays import ProjectSettings
from .core import CriticalPathResult


class GapStrategy(Protocol):
    """Protocol for measuring the gap along one dependency edge."""

    def gap(
        self,
        predecessor: Task,
        successor: Task,
        dep_type: DependencyType,
        settings: ProjectSettings,
    ) -> int:
        """Return the working-day gap between predecessor and successor.

        Args:
            predecessor: Source task of the dependency
            successor: Target task of the dependency
            dep_type: Relationship type of the dependency
            settings: Project calendar

        Returns:
            Non-negative number of working days
        """
        ...


class CriticalPathSolver(Protocol):
    """Protocol for critical path solvers."""

    def solve(
        self,
        tasks: Sequence[Task],
        dependencies: Sequence[Dependency],
        settings: ProjectSettings,
    ) -> CriticalPathResult:
        """Compute the critical task set for a project snapshot.

        Args:
            tasks: Current tasks
            dependencies: Current dependencies (dangling ones are ignored)
            settings: Project calendar

        Returns:
            CriticalPathResult with the critical IDs and per-task slack
        """
        ...
