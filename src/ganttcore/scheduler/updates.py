"""Keeping the stored task duration in sync with dates and calendar.

Task.duration is derived from (start, end, settings) but stored and shown
directly. Every edit that touches a task's dates, and every calendar change,
goes through these helpers so the two never drift apart.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date

from ..logger import get_logger
from ..models import Task
from ..workdays import ProjectSettings, project_date_add, project_duration

logger = get_logger()

DEFAULT_NEW_TASK_DURATION = 2


def with_duration(task: Task, settings: ProjectSettings) -> Task:
    """Return the task with duration recomputed from its dates."""
    duration = project_duration(task.start, task.end, settings)
    if duration == task.duration:
        return task
    logger.changes("%s: duration %d -> %d", task.id, task.duration, duration)
    return replace(task, duration=duration)


def refresh_durations(tasks: Iterable[Task], settings: ProjectSettings) -> list[Task]:
    """Recompute every task's duration, e.g. after the calendar changed."""
    return [with_duration(task, settings) for task in tasks]


def apply_task_edit(current: Task, updated: Task, settings: ProjectSettings) -> Task:
    """Apply an edit to a task and restore the duration invariant.

    - Only start or only end changed (a resize): duration is recomputed.
    - Both changed (a move): the current duration is kept and the end is
      recomputed from the new start on the working calendar. The stored
      duration is then taken from the new dates.
    - Neither changed: other fields are taken as-is.

    Args:
        current: The task as currently stored
        updated: The task with the user's edits applied
        settings: Project calendar

    Returns:
        The task to store
    """
    start_changed = current.start != updated.start
    end_changed = current.end != updated.end

    if start_changed and end_changed:
        new_end = project_date_add(updated.start, current.duration, settings)
        # Stored duration may be 0 or the walk capped; the dates decide
        duration = project_duration(updated.start, new_end, settings)
        logger.changes(
            "%s: moved to %s, end %s -> %s (duration %d -> %d)",
            updated.id,
            updated.start,
            updated.end,
            new_end,
            current.duration,
            duration,
        )
        return replace(updated, end=new_end, duration=duration)

    if start_changed or end_changed:
        return with_duration(updated, settings)

    return updated


def new_task_dates(
    start: date, settings: ProjectSettings, duration: int = DEFAULT_NEW_TASK_DURATION
) -> tuple[date, date, int]:
    """Dates and duration for a freshly created task starting on start."""
    end = project_date_add(start, duration, settings)
    return start, end, project_duration(start, end, settings)
