"""Scheduler package - calendar-aware critical path computation.

This package provides:
- Dependency graph construction from task and dependency lists
- Pluggable gap strategies (finish-to-start default, per-type)
- Critical path solvers (slack backward pass, legacy adjacency walk)
- Duration upkeep helpers for task edits and calendar changes

Main entry points:
- critical_tasks: IDs of the critical tasks
- compute_critical_path: full result including per-task slack
- refresh_durations / apply_task_edit: keep Task.duration in sync
"""

from .config import CriticalPathConfig, CriticalPathMode, GapStrategyType
from .core import CriticalPathResult, Edge
from .critical_path import (
    AdjacencySolver,
    SlackSolver,
    compute_critical_path,
    create_solver,
    critical_tasks,
    project_finish_date,
)
from .gaps import FinishToStartGap, TypedGap, create_gap_strategy, driving_dates, working_gap
from .graph import build_predecessors, build_successors
from .protocols import CriticalPathSolver, GapStrategy
from .updates import apply_task_edit, new_task_dates, refresh_durations, with_duration

__all__ = [
    # Configuration
    "CriticalPathConfig",
    "CriticalPathMode",
    "GapStrategyType",
    # Core dataclasses
    "CriticalPathResult",
    "Edge",
    # Protocols
    "CriticalPathSolver",
    "GapStrategy",
    # Graph
    "build_successors",
    "build_predecessors",
    # Gaps
    "FinishToStartGap",
    "TypedGap",
    "create_gap_strategy",
    "driving_dates",
    "working_gap",
    # Solvers
    "SlackSolver",
    "AdjacencySolver",
    "create_solver",
    "compute_critical_path",
    "critical_tasks",
    "project_finish_date",
    # Duration upkeep
    "apply_task_edit",
    "new_task_dates",
    "refresh_durations",
    "with_duration",
]
