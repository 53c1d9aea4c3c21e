"""Pytest configuration and fixtures for ganttcore tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from ganttcore import context
from ganttcore.logger import reset_logger
from ganttcore.models import Dependency, DependencyType, Task
from ganttcore.workdays import ProjectSettings

# January 2024 starts on a Monday: Jan 6/7, 13/14, 20/21, 27/28 are weekends
YEAR = 2024
MONTH = 1


def jan(day: int) -> date:
    """Date in January 2024."""
    return date(YEAR, MONTH, day)


def make_task(task_id: str, start_day: int, end_day: int, **kwargs: Any) -> Task:
    """Create a task spanning January start_day..end_day (inclusive).

    The stored duration is the plain calendar-day count; tests that need the
    calendar-aware value call the engine.
    """
    return Task(
        id=task_id,
        name=f"Task {task_id}",
        start=jan(start_day),
        end=jan(end_day),
        duration=end_day - start_day + 1,
        **kwargs,
    )


def dep(source: str, target: str, dep_type: DependencyType = DependencyType.FS) -> Dependency:
    """Create a dependency with a predictable ID."""
    return Dependency(id=f"{source}-{target}", source_id=source, target_id=target, type=dep_type)


@pytest.fixture
def weekday_settings() -> ProjectSettings:
    """Mon-Fri calendar with no holidays."""
    return ProjectSettings(include_weekends=False)


@pytest.fixture
def all_days_settings() -> ProjectSettings:
    """Every calendar day is a working day (fast-path calendar)."""
    return ProjectSettings(include_weekends=True)


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing project data as JSON into tmp_path."""

    def _write(data: Any, name: str = "project.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_project_data() -> dict[str, Any]:
    """Branching project in the JSON file format.

    A -> B -> D and A -> C -> D, where the C path is longer.
    """
    return {
        "tasks": [
            {"id": "A", "name": "Design", "start": "2024-01-01", "end": "2024-01-02"},
            {"id": "B", "name": "Docs", "start": "2024-01-03", "end": "2024-01-04"},
            {"id": "C", "name": "Build", "start": "2024-01-03", "end": "2024-01-06"},
            {"id": "D", "name": "Release", "start": "2024-01-07", "end": "2024-01-08"},
        ],
        "dependencies": [
            {"id": "d1", "sourceId": "A", "targetId": "B", "type": "FS"},
            {"id": "d2", "sourceId": "A", "targetId": "C", "type": "FS"},
            {"id": "d3", "sourceId": "B", "targetId": "D", "type": "FS"},
            {"id": "d4", "sourceId": "C", "targetId": "D", "type": "FS"},
        ],
        "members": [{"id": "m1", "name": "Alice", "role": "Project Manager"}],
        "settings": {"includeWeekends": False, "holidays": [], "makeUpDays": []},
    }


@pytest.fixture(autouse=True)
def clean_global_state() -> None:
    """Reset logger and CLI context before each test for isolation."""
    reset_logger()
    context.set_config_path(None)
