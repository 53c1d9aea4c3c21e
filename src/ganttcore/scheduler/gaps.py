"""Gap strategies: the working-day span between a predecessor and a successor.

The default strategy measures from predecessor end to successor start for
every dependency type, which is exact for finish-to-start links only.
TypedGap picks the driving dates that match each dependency type.
"""

from __future__ import annotations

from datetime import date

from ..models import DependencyType, Task
from ..workdays import ProjectSettings, is_working_day, project_duration
from .config import GapStrategyType
from .protocols import GapStrategy


def driving_dates(
    predecessor: Task, successor: Task, dep_type: DependencyType
) -> tuple[date, date]:
    """Return the (predecessor date, successor date) pair a dependency type links."""
    if dep_type == DependencyType.SS:
        return predecessor.start, successor.start
    if dep_type == DependencyType.FF:
        return predecessor.end, successor.end
    if dep_type == DependencyType.SF:
        return predecessor.start, successor.end
    return predecessor.end, successor.start


def working_gap(first: date, second: date, settings: ProjectSettings) -> int:
    """Working days strictly between two dates.

    The inclusive count over [first, second] minus each endpoint that is
    itself a working day, floored at zero.
    """
    duration = project_duration(first, second, settings)
    duration -= int(is_working_day(first, settings))
    duration -= int(is_working_day(second, settings))
    return max(0, duration)


class FinishToStartGap:
    """Predecessor end to successor start, regardless of dependency type."""

    def gap(
        self,
        predecessor: Task,
        successor: Task,
        dep_type: DependencyType,
        settings: ProjectSettings,
    ) -> int:
        return working_gap(predecessor.end, successor.start, settings)


class TypedGap:
    """Driving dates chosen per dependency type (FS, SS, FF, SF)."""

    def gap(
        self,
        predecessor: Task,
        successor: Task,
        dep_type: DependencyType,
        settings: ProjectSettings,
    ) -> int:
        first, second = driving_dates(predecessor, successor, dep_type)
        return working_gap(first, second, settings)


def create_gap_strategy(strategy_type: GapStrategyType) -> GapStrategy:
    """Create a gap strategy instance based on type."""
    if strategy_type == GapStrategyType.FINISH_TO_START:
        return FinishToStartGap()
    if strategy_type == GapStrategyType.TYPED:
        return TypedGap()

    msg = f"Unknown gap strategy: {strategy_type}"
    raise ValueError(msg)
