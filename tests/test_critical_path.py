"""Tests for critical path computation."""

from datetime import date, timedelta

import pytest
from conftest import dep, jan, make_task

from ganttcore.models import Dependency, DependencyType, Task
from ganttcore.scheduler import (
    AdjacencySolver,
    CriticalPathConfig,
    CriticalPathMode,
    FinishToStartGap,
    GapStrategyType,
    SlackSolver,
    TypedGap,
    compute_critical_path,
    create_gap_strategy,
    create_solver,
    critical_tasks,
    project_finish_date,
)
from ganttcore.workdays import Holiday, ProjectSettings


def branching_project() -> tuple[list[Task], list[Dependency]]:
    """A -> B -> D and A -> C -> D; the C path is one working day longer."""
    tasks = [
        make_task("A", 1, 2),
        make_task("B", 3, 4),
        make_task("C", 3, 6),
        make_task("D", 7, 8),
    ]
    deps = [dep("A", "B"), dep("A", "C"), dep("B", "D"), dep("C", "D")]
    return tasks, deps


class TestSlackSolver:
    """Tests for the calendar-aware slack solver."""

    def test_empty_project(self, weekday_settings: ProjectSettings) -> None:
        result = compute_critical_path([], [], weekday_settings)
        assert result.critical_ids == set()
        assert result.project_finish is None
        assert result.slack == {}

    def test_single_task_is_critical(self, weekday_settings: ProjectSettings) -> None:
        result = compute_critical_path([make_task("A", 2, 4)], [], weekday_settings)
        assert result.critical_ids == {"A"}
        assert result.project_finish == jan(4)

    def test_linear_chain_all_critical(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 2), make_task("B", 3, 4), make_task("C", 5, 6)]
        deps = [dep("A", "B"), dep("B", "C")]
        result = compute_critical_path(tasks, deps, weekday_settings)
        assert result.critical_ids == {"A", "B", "C"}
        assert result.slack == {"A": 0, "B": 0, "C": 0}

    def test_branching_picks_longest_path(self, weekday_settings: ProjectSettings) -> None:
        tasks, deps = branching_project()
        result = compute_critical_path(tasks, deps, weekday_settings)
        assert result.critical_ids == {"A", "C", "D"}
        assert result.slack["B"] == 1
        assert not result.is_critical("B")

    def test_weekend_between_tasks_is_not_slack(
        self, weekday_settings: ProjectSettings
    ) -> None:
        """Friday -> Monday is back to back on a Mon-Fri calendar."""
        tasks = [make_task("A", 5, 5), make_task("B", 8, 8)]
        result = compute_critical_path(tasks, [dep("A", "B")], weekday_settings)
        assert result.critical_ids == {"A", "B"}

    def test_weekend_between_tasks_is_slack_when_worked(
        self, all_days_settings: ProjectSettings
    ) -> None:
        tasks = [make_task("A", 5, 5), make_task("B", 8, 8)]
        result = compute_critical_path(tasks, [dep("A", "B")], all_days_settings)
        assert result.critical_ids == {"B"}
        assert result.slack["A"] == 2

    def test_holiday_removes_slack(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 4), make_task("B", 1, 5)]
        assert compute_critical_path(tasks, [], weekday_settings).slack["A"] == 1

        settings = ProjectSettings(
            holidays=[Holiday(id="h1", name="Closed", start=jan(5), end=jan(5))]
        )
        result = compute_critical_path(tasks, [], settings)
        assert result.slack["A"] == 0
        assert result.critical_ids == {"A", "B"}

    def test_disconnected_short_task_has_slack(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 5), make_task("B", 1, 2)]
        result = compute_critical_path(tasks, [], weekday_settings)
        assert result.critical_ids == {"A"}
        assert result.slack["B"] == 3

    def test_tasks_ending_on_finish_are_critical(
        self, weekday_settings: ProjectSettings
    ) -> None:
        tasks = [make_task("A", 1, 8), make_task("B", 3, 8), make_task("C", 1, 2)]
        result = compute_critical_path(tasks, [dep("C", "B")], weekday_settings)
        finish = project_finish_date(tasks)
        assert finish == jan(8)
        for task in tasks:
            if task.end == finish:
                assert result.is_critical(task.id)

    def test_critical_set_matches_zero_slack(self, weekday_settings: ProjectSettings) -> None:
        tasks, deps = branching_project()
        result = compute_critical_path(tasks, deps, weekday_settings)
        assert result.critical_ids == {tid for tid, value in result.slack.items() if value == 0}
        assert all(value >= 0 for value in result.slack.values())

    def test_dangling_dependency_ignored(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 2), make_task("B", 3, 4)]
        deps = [dep("A", "B"), dep("B", "ghost"), dep("ghost", "A")]
        result = compute_critical_path(tasks, deps, weekday_settings)
        assert result.critical_ids == {"A", "B"}
        assert result.warnings == []

    def test_cycle_terminates_and_is_critical(
        self, weekday_settings: ProjectSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        tasks = [make_task("A", 1, 2), make_task("B", 3, 4), make_task("C", 1, 8)]
        deps = [dep("A", "B"), dep("B", "A")]
        result = compute_critical_path(tasks, deps, weekday_settings)
        assert result.cycle_members == {"A", "B"}
        assert {"A", "B", "C"} <= result.critical_ids
        assert result.slack["A"] == 0
        assert result.slack["B"] == 0
        assert len(result.warnings) == 1
        assert "Circular dependency" in caplog.text

    def test_every_task_on_cycle_is_reported(
        self, all_days_settings: ProjectSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        tasks = [
            make_task("A", 1, 2),
            make_task("B", 3, 4),
            make_task("C", 5, 6),
            make_task("D", 1, 20),
        ]
        deps = [dep("A", "B"), dep("B", "C"), dep("C", "A")]
        result = compute_critical_path(tasks, deps, all_days_settings)
        assert result.cycle_members == {"A", "B", "C"}
        assert result.slack["B"] == 0
        assert "A, B, C" in caplog.text

    def test_long_chain_does_not_recurse(self, all_days_settings: ProjectSettings) -> None:
        start = date(2020, 1, 1)
        count = 3000
        tasks = [
            Task(
                id=f"T{i}",
                name=f"Step {i}",
                start=start + timedelta(days=i),
                end=start + timedelta(days=i),
                duration=1,
            )
            for i in range(count)
        ]
        deps = [dep(f"T{i}", f"T{i + 1}") for i in range(count - 1)]
        result = compute_critical_path(tasks, deps, all_days_settings)
        assert len(result.critical_ids) == count

    def test_finish_to_start_gap_for_ff_link(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 2), make_task("B", 3, 5)]
        deps = [dep("A", "B", DependencyType.FF)]
        result = SlackSolver().solve(tasks, deps, weekday_settings)
        assert result.critical_ids == {"A", "B"}

    def test_typed_gap_for_ff_link(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 2), make_task("B", 3, 5)]
        deps = [dep("A", "B", DependencyType.FF)]
        result = SlackSolver(gap_strategy=TypedGap()).solve(tasks, deps, weekday_settings)
        assert result.critical_ids == {"B"}
        assert result.slack["A"] == 2

    def test_critical_tasks_shortcut(self, weekday_settings: ProjectSettings) -> None:
        tasks, deps = branching_project()
        assert critical_tasks(tasks, deps, weekday_settings) == {"A", "C", "D"}


class TestAdjacencySolver:
    """Tests for the calendar-naive adjacency walk."""

    def test_touching_finish_to_start(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 3), make_task("B", 3, 5)]
        result = AdjacencySolver().solve(tasks, [dep("A", "B")], weekday_settings)
        assert result.critical_ids == {"A", "B"}
        assert result.slack == {}

    def test_non_touching_link_is_not_driving(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 2), make_task("B", 3, 4)]
        result = AdjacencySolver().solve(tasks, [dep("A", "B")], weekday_settings)
        assert result.critical_ids == {"B"}

    def test_finish_to_finish_drives_on_equal_ends(
        self, weekday_settings: ProjectSettings
    ) -> None:
        tasks = [make_task("A", 1, 4), make_task("B", 2, 4), make_task("C", 1, 2)]
        deps = [dep("A", "B", DependencyType.FF), dep("C", "B", DependencyType.FF)]
        result = AdjacencySolver().solve(tasks, deps, weekday_settings)
        assert result.critical_ids == {"A", "B"}

    def test_start_links_never_drive(self, weekday_settings: ProjectSettings) -> None:
        tasks = [make_task("A", 1, 2), make_task("B", 1, 5)]
        deps = [dep("A", "B", DependencyType.SS)]
        result = AdjacencySolver().solve(tasks, deps, weekday_settings)
        assert result.critical_ids == {"B"}

    def test_empty_project(self, weekday_settings: ProjectSettings) -> None:
        result = AdjacencySolver().solve([], [], weekday_settings)
        assert result.project_finish is None


class TestSolverSelection:
    """Tests for config-driven solver and gap strategy creation."""

    def test_default_is_slack_with_finish_to_start(self) -> None:
        solver = create_solver()
        assert isinstance(solver, SlackSolver)
        assert isinstance(solver.gap_strategy, FinishToStartGap)

    def test_typed_gap(self) -> None:
        solver = create_solver(CriticalPathConfig(gap_strategy=GapStrategyType.TYPED))
        assert isinstance(solver, SlackSolver)
        assert isinstance(solver.gap_strategy, TypedGap)

    def test_legacy_mode(self, weekday_settings: ProjectSettings) -> None:
        config = CriticalPathConfig(mode=CriticalPathMode.LEGACY_ADJACENCY)
        assert isinstance(create_solver(config), AdjacencySolver)

        tasks, deps = branching_project()
        # No link touches: only the task ending on the finish is critical
        assert critical_tasks(tasks, deps, weekday_settings, config) == {"D"}

    def test_config_from_strings(self) -> None:
        config = CriticalPathConfig.model_validate(
            {"mode": "legacy_adjacency", "gap_strategy": "typed"}
        )
        assert config.mode == CriticalPathMode.LEGACY_ADJACENCY
        assert config.gap_strategy == GapStrategyType.TYPED

    def test_gap_strategy_factory(self) -> None:
        assert isinstance(create_gap_strategy(GapStrategyType.FINISH_TO_START), FinishToStartGap)
        assert isinstance(create_gap_strategy(GapStrategyType.TYPED), TypedGap)
