"""Critical path computation.

Two solvers share the CriticalPathSolver protocol:

- SlackSolver: calendar-aware backward pass. Each task's slack is the
  working-day float between it and the project finish, bounded by its
  tightest successor path. Tasks with zero slack are critical.
- AdjacencySolver: calendar-naive walk kept for compatibility. Starting from
  the tasks that finish last, it follows FS and FF links whose dates touch.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import date

from ..logger import get_logger
from ..models import Dependency, DependencyType, Task
from ..workdays import ProjectSettings, project_duration
from .config import CriticalPathConfig, CriticalPathMode
from .core import CriticalPathResult, Edge
from .gaps import FinishToStartGap, create_gap_strategy
from .graph import build_predecessors, build_successors
from .protocols import CriticalPathSolver, GapStrategy

logger = get_logger()

_VISITING = 1
_DONE = 2


def project_finish_date(tasks: Sequence[Task]) -> date | None:
    """Latest end date across all tasks, or None for an empty project."""
    if not tasks:
        return None
    return max(task.end for task in tasks)


class SlackSolver:
    """Backward pass over total float, memoized per task.

    Slack for a terminal task is the working-day gap between its end and
    the project finish. Slack for any other task is the minimum, over its
    outgoing edges, of the successor's slack plus the edge gap.

    The pass uses an explicit stack so deep chains do not hit the recursion
    limit. A successor that is still on the stack closes a cycle: every task on
    the stack from that successor up to the current task is recorded as a
    cycle member and forced to slack 0.
    """

    def __init__(self, gap_strategy: GapStrategy | None = None):
        """Initialize the solver.

        Args:
            gap_strategy: How edge gaps are measured (default: finish-to-start)
        """
        self.gap_strategy = gap_strategy or FinishToStartGap()

    def solve(
        self,
        tasks: Sequence[Task],
        dependencies: Sequence[Dependency],
        settings: ProjectSettings,
    ) -> CriticalPathResult:
        """Compute slack for every task and the resulting critical set."""
        finish = project_finish_date(tasks)
        if finish is None:
            return CriticalPathResult(critical_ids=set(), project_finish=None)

        task_dict = {task.id: task for task in tasks}
        successors = build_successors(tasks, dependencies)

        slack: dict[str, int] = {}
        state: dict[str, int] = {}
        cycle_members: set[str] = set()

        for task in tasks:
            if task.id not in state:
                self._visit(
                    task.id, task_dict, successors, finish, settings, slack, state, cycle_members
                )

        for task_id in cycle_members:
            slack[task_id] = 0

        warnings: list[str] = []
        if cycle_members:
            msg = (
                "Circular dependency detected; treating as critical: "
                + ", ".join(sorted(cycle_members))
            )
            warnings.append(msg)
            logger.warning(msg)

        critical_ids = {task_id for task_id, value in slack.items() if value <= 0}
        logger.changes(
            "Critical path: %d of %d tasks critical (project finish %s)",
            len(critical_ids),
            len(tasks),
            finish,
        )

        return CriticalPathResult(
            critical_ids=critical_ids,
            project_finish=finish,
            slack=slack,
            cycle_members=cycle_members,
            warnings=warnings,
        )

    def _visit(  # noqa: PLR0913 - Shared per-invocation state is passed explicitly
        self,
        root_id: str,
        task_dict: dict[str, Task],
        successors: dict[str, list[Edge]],
        finish: date,
        settings: ProjectSettings,
        slack: dict[str, int],
        state: dict[str, int],
        cycle_members: set[str],
    ) -> None:
        """Depth-first post-order traversal computing slack for root and its descendants."""
        state[root_id] = _VISITING
        stack: list[tuple[str, Iterator[Edge]]] = [(root_id, iter(successors[root_id]))]
        depth: dict[str, int] = {root_id: 0}

        while stack:
            task_id, edges = stack[-1]

            descended = False
            for edge in edges:
                target_state = state.get(edge.target_id)
                if target_state == _VISITING:
                    # Everything from the target up to here is on the cycle
                    cycle_members.update(tid for tid, _ in stack[depth[edge.target_id] :])
                    continue
                if target_state is None:
                    state[edge.target_id] = _VISITING
                    depth[edge.target_id] = len(stack)
                    stack.append((edge.target_id, iter(successors[edge.target_id])))
                    descended = True
                    break

            if descended:
                continue

            stack.pop()
            del depth[task_id]
            slack[task_id] = self._task_slack(
                task_dict[task_id], successors[task_id], task_dict, finish, settings, slack
            )
            state[task_id] = _DONE
            logger.checks("Slack for %s: %d", task_id, slack[task_id])

    def _task_slack(  # noqa: PLR0913
        self,
        task: Task,
        edges: list[Edge],
        task_dict: dict[str, Task],
        finish: date,
        settings: ProjectSettings,
        slack: dict[str, int],
    ) -> int:
        """Slack for one task once all reachable successors are resolved."""
        if not edges:
            return max(0, project_duration(task.end, finish, settings) - 1)

        best: int | None = None
        for edge in edges:
            # A successor without a value yet is the far end of a cycle
            successor_slack = slack.get(edge.target_id, 0)
            gap = self.gap_strategy.gap(task, task_dict[edge.target_id], edge.type, settings)
            path_slack = successor_slack + gap
            logger.debug(
                "  %s -> %s (%s): gap %d, path slack %d",
                task.id,
                edge.target_id,
                edge.type.value,
                gap,
                path_slack,
            )
            if best is None or path_slack < best:
                best = path_slack

        assert best is not None
        return best


class AdjacencySolver:
    """Calendar-naive critical path walk.

    Tasks ending on the project finish are critical. A predecessor is
    critical when its link to a critical task is driving: for FS its end
    equals the successor's start, for FF its end equals the successor's end.
    SS and SF links never drive. Slack is not computed.
    """

    def solve(
        self,
        tasks: Sequence[Task],
        dependencies: Sequence[Dependency],
        settings: ProjectSettings,
    ) -> CriticalPathResult:
        """Walk backward from the latest-finishing tasks over touching links."""
        finish = project_finish_date(tasks)
        if finish is None:
            return CriticalPathResult(critical_ids=set(), project_finish=None)

        task_dict = {task.id: task for task in tasks}
        predecessors = build_predecessors(tasks, dependencies)

        to_visit = [task.id for task in tasks if task.end == finish]
        critical_ids: set[str] = set()

        while to_visit:
            current_id = to_visit.pop()
            if current_id in critical_ids:
                continue
            critical_ids.add(current_id)
            current = task_dict[current_id]

            for edge in predecessors[current_id]:
                source = task_dict[edge.source_id]
                if self._is_driving(source, current, edge.type):
                    logger.checks("%s drives %s (%s)", source.id, current.id, edge.type.value)
                    to_visit.append(source.id)

        logger.changes(
            "Critical path (adjacency): %d of %d tasks critical", len(critical_ids), len(tasks)
        )
        return CriticalPathResult(critical_ids=critical_ids, project_finish=finish)

    @staticmethod
    def _is_driving(source: Task, target: Task, dep_type: DependencyType) -> bool:
        if dep_type == DependencyType.FS:
            return source.end == target.start
        if dep_type == DependencyType.FF:
            return source.end == target.end
        return False


def create_solver(config: CriticalPathConfig | None = None) -> CriticalPathSolver:
    """Create a critical path solver from configuration."""
    config = config or CriticalPathConfig()

    if config.mode == CriticalPathMode.SLACK:
        return SlackSolver(gap_strategy=create_gap_strategy(config.gap_strategy))
    if config.mode == CriticalPathMode.LEGACY_ADJACENCY:
        return AdjacencySolver()

    msg = f"Unknown critical path mode: {config.mode}"
    raise ValueError(msg)


def compute_critical_path(
    tasks: Sequence[Task],
    dependencies: Sequence[Dependency],
    settings: ProjectSettings,
    config: CriticalPathConfig | None = None,
) -> CriticalPathResult:
    """Compute the full critical path result for a project snapshot."""
    return create_solver(config).solve(tasks, dependencies, settings)


def critical_tasks(
    tasks: Sequence[Task],
    dependencies: Sequence[Dependency],
    settings: ProjectSettings,
    config: CriticalPathConfig | None = None,
) -> set[str]:
    """Return the IDs of the tasks on the critical path."""
    return compute_critical_path(tasks, dependencies, settings, config).critical_ids


__all__ = [
    "AdjacencySolver",
    "SlackSolver",
    "compute_critical_path",
    "create_solver",
    "critical_tasks",
    "project_finish_date",
]
