"""Working-day calendar and calendar-aware date arithmetic.

A project calendar decides which dates count as working days:

1. A make-up day is always a working day.
2. Otherwise a date inside any holiday interval is a non-working day.
3. Otherwise, when weekends are excluded, Saturday and Sunday are non-working.
4. Everything else is a working day.

Durations are inclusive day counts: a task that starts and ends on the same
working day has a duration of 1.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .logger import get_logger

logger = get_logger()

SATURDAY = 5  # date.weekday() value
SUNDAY = 6

# Upper bound on day-by-day calendar walks. A calendar where (almost) every
# day is a holiday would otherwise never terminate; ~13 years of days.
MAX_CALENDAR_ITERATIONS = 5000

LEGACY_HOLIDAY_NAME = "Holiday"


class Holiday(BaseModel):
    """A named closed interval [start, end] of non-working days."""

    id: str
    name: str
    start: date
    end: date

    @model_validator(mode="after")
    def validate_end_after_start(self) -> Holiday:
        """Ensure end date is not before start date."""
        if self.end < self.start:
            raise ValueError("holiday end date must not be before start date")
        return self

    def contains(self, day: date) -> bool:
        """Return True if day falls inside this holiday (inclusive)."""
        return self.start <= day <= self.end


def _upgrade_legacy_holiday(value: Any, index: int) -> Any:
    """Upgrade single-date holiday entries to the interval form.

    Older project files stored holidays either as bare "YYYY-MM-DD" strings
    or as {"date": ..., "name": ...} objects.
    """
    if isinstance(value, (str, date)):
        day = str(value)[:10]
        return {"id": f"holiday-{day}", "name": LEGACY_HOLIDAY_NAME, "start": day, "end": day}

    if isinstance(value, dict) and "date" in value and "start" not in value:
        day = str(value["date"])[:10]
        return {
            "id": value.get("id") or f"holiday-{day}",
            "name": value.get("name") or LEGACY_HOLIDAY_NAME,
            "start": day,
            "end": day,
        }

    if isinstance(value, dict) and "id" not in value:
        return {**value, "id": f"holiday-{index}"}

    return value


class ProjectSettings(BaseModel):
    """Project calendar and display settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    show_dependencies: bool = True
    include_weekends: bool = False
    holidays: list[Holiday] = Field(default_factory=list[Holiday])
    make_up_days: list[date] = Field(default_factory=list[date])
    working_day_hours: float = 8.0
    project_filename: str | None = None
    project_save_path: str | None = None

    @field_validator("holidays", mode="before")
    @classmethod
    def upgrade_holidays(cls, v: Any) -> Any:
        """Accept legacy single-date holidays alongside the interval form."""
        if v is None:
            return []
        if isinstance(v, list):
            return [_upgrade_legacy_holiday(item, i) for i, item in enumerate(v)]  # type: ignore[arg-type]
        return v

    @field_validator("make_up_days", mode="before")
    @classmethod
    def normalize_make_up_days(cls, v: Any) -> Any:
        """Accept None and timestamps like 2024-01-06T00:00:00.000Z."""
        if v is None:
            return []
        if isinstance(v, list):
            return [item[:10] if isinstance(item, str) else item for item in v]  # type: ignore[misc]
        return v

    @field_validator("working_day_hours", mode="before")
    @classmethod
    def default_working_day_hours(cls, v: Any) -> Any:
        """A missing or zero value falls back to an 8 hour day."""
        return v or 8.0

    @property
    def is_trivial(self) -> bool:
        """True when every calendar day is a working day (fast-path calendar)."""
        return self.include_weekends and not self.holidays and not self.make_up_days


def holiday_containing(day: date, holidays: list[Holiday]) -> Holiday | None:
    """Return the first holiday whose closed interval contains day, if any."""
    for holiday in holidays:
        if holiday.contains(day):
            return holiday
    return None


def is_make_up_day(day: date, settings: ProjectSettings) -> bool:
    """Return True if day is a forced working day."""
    return day in settings.make_up_days


def is_weekend(day: date) -> bool:
    """Return True for Saturday and Sunday."""
    return day.weekday() in (SATURDAY, SUNDAY)


def is_working_day(day: date, settings: ProjectSettings) -> bool:
    """Decide whether day is a working day under the project calendar.

    Make-up days override holidays, which override weekend exclusion.
    """
    if is_make_up_day(day, settings):
        return True

    if holiday_containing(day, settings.holidays) is not None:
        return False

    if not settings.include_weekends and is_weekend(day):
        return False

    return True


def project_duration(
    start: date,
    end: date,
    settings: ProjectSettings,
    *,
    strict: bool = False,
    max_iterations: int = MAX_CALENDAR_ITERATIONS,
) -> int:
    """Count working days between start and end, inclusive.

    The count is order-insensitive: the range walked is [min, max]. With
    strict=True an end before start yields 0 instead.

    Args:
        start: First day of the range
        end: Last day of the range (inclusive)
        settings: Project calendar
        strict: Return 0 when end < start instead of counting the reversed range
        max_iterations: Bound on the day-by-day walk

    Returns:
        Number of working days in the range
    """
    if strict and end < start:
        return 0

    if settings.is_trivial:
        return abs((end - start).days) + 1

    current = min(start, end)
    target = max(start, end)
    count = 0
    steps = 0

    while current <= target:
        if steps >= max_iterations:
            logger.warning(
                "Calendar walk from %s to %s stopped after %d days; duration is approximate",
                start,
                end,
                max_iterations,
            )
            break
        if is_working_day(current, settings):
            count += 1
        current += timedelta(days=1)
        steps += 1

    return count


def next_working_day(
    day: date, settings: ProjectSettings, *, max_iterations: int = MAX_CALENDAR_ITERATIONS
) -> date:
    """Return day itself if it is a working day, else the next working day after it.

    If no working day is found within max_iterations days, the last date
    examined is returned.
    """
    current = day
    for _ in range(max_iterations):
        if is_working_day(current, settings):
            return current
        current += timedelta(days=1)

    logger.warning(
        "No working day found within %d days of %s; using %s", max_iterations, day, current
    )
    return current


def project_date_add(
    start: date,
    duration_days: int,
    settings: ProjectSettings,
    *,
    max_iterations: int = MAX_CALENDAR_ITERATIONS,
) -> date:
    """Find the end date of a task starting on start with the given working-day duration.

    The result satisfies project_duration(start, result) == duration_days for
    any calendar that has working days. A non-positive duration returns start
    unchanged. A start on a non-working day is first moved forward to the next
    working day, which counts as day 1.

    Both walks are bounded by max_iterations. On a degenerate calendar the
    best date found so far is returned and a warning is logged.
    """
    if duration_days <= 0:
        return start

    if settings.is_trivial:
        return start + timedelta(days=duration_days - 1)

    current = next_working_day(start, settings, max_iterations=max_iterations)
    remaining = duration_days - 1
    steps = 0

    while remaining > 0:
        if steps >= max_iterations:
            logger.warning(
                "Adding %d working days to %s stopped after %d days; end date is approximate",
                duration_days,
                start,
                max_iterations,
            )
            break
        current += timedelta(days=1)
        steps += 1
        if is_working_day(current, settings):
            remaining -= 1

    logger.debug("%s + %d working days -> %s", start, duration_days, current)
    return current


def working_days_between(start: date, end: date, settings: ProjectSettings) -> list[date]:
    """List the working days in [start, end], in order."""
    days: list[date] = []
    current = start
    while current <= end:
        if is_working_day(current, settings):
            days.append(current)
        current += timedelta(days=1)
    return days
