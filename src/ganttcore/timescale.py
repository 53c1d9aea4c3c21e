"""Time-scale projection: mapping calendar dates to chart coordinates.

Positions are measured in columns of the selected scale multiplied by the
column width (unit_size). Fractional positions are allowed so a date in the
middle of a week or month lands between column edges.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import Enum

# Constants for date calculations
DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12
DAYS_PER_YEAR = 365  # Approximation used for within-year fractions
DAYS_PER_MONTH_MIN_SPAN = 30  # Month-scale spans are at least 1/30 of a column
MIN_SPAN = 2.0  # Smallest drawn width, keeps zero-length bars visible

# Columns to scroll per navigation step
_SHIFT_DAYS = {"DAY": 7, "WEEK": 14}
_SHIFT_MONTHS = {"MONTH": 1, "QUARTER": 3, "HALF_YEAR": 6, "YEAR": 12}


class TimeScale(str, Enum):
    """Chart granularity."""

    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    HALF_YEAR = "HALF_YEAR"
    YEAR = "YEAR"


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month (month is 1-12)."""
    return calendar.monthrange(year, month)[1]


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the target month."""
    month_index = day.year * MONTHS_PER_YEAR + (day.month - 1) + months
    year, month = divmod(month_index, MONTHS_PER_YEAR)
    month += 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def diff_days(later: date, earlier: date) -> int:
    """Signed calendar-day difference later - earlier."""
    return (later - earlier).days


def diff_weeks(later: date, earlier: date) -> float:
    """Signed difference in (fractional) weeks."""
    return diff_days(later, earlier) / DAYS_PER_WEEK


def _month_fraction(day: date) -> float:
    """How far into its month a date is, in [0, 1)."""
    return (day.day - 1) / days_in_month(day.year, day.month)


def diff_months(later: date, earlier: date) -> float:
    """Signed difference in (fractional) months.

    Whole calendar months plus the difference of each date's offset within
    its own month. The first of a month is always a whole number of months
    from the first of another.
    """
    months = (later.year - earlier.year) * MONTHS_PER_YEAR + (later.month - earlier.month)
    return months + _month_fraction(later) - _month_fraction(earlier)


def diff_years(later: date, earlier: date) -> float:
    """Signed difference in (fractional) years, day-of-year over 365."""
    years = later.year - earlier.year
    later_offset = later.timetuple().tm_yday - 1
    earlier_offset = earlier.timetuple().tm_yday - 1
    return years + (later_offset - earlier_offset) / DAYS_PER_YEAR


def position_of(day: date, reference: date, scale: TimeScale, unit_size: float) -> float:
    """Offset of day from the reference date (left edge of the chart).

    Quarter and half-year scales use the month projection; they differ from
    the month scale only in header label density.
    """
    if scale == TimeScale.WEEK:
        columns = diff_weeks(day, reference)
    elif scale in (TimeScale.MONTH, TimeScale.QUARTER, TimeScale.HALF_YEAR):
        columns = diff_months(day, reference)
    elif scale == TimeScale.YEAR:
        columns = diff_years(day, reference)
    else:
        columns = diff_days(day, reference)
    return columns * unit_size


def span_of(
    start: date, end: date, scale: TimeScale, unit_size: float, *, min_span: float = MIN_SPAN
) -> float:
    """Drawn length of an inclusive [start, end] range.

    Day and week spans include the end day. Month and year spans are
    floored at one day's worth of a column. Every span is at least min_span.
    """
    if scale == TimeScale.WEEK:
        width = (diff_weeks(end, start) + 1 / DAYS_PER_WEEK) * unit_size
    elif scale in (TimeScale.MONTH, TimeScale.QUARTER, TimeScale.HALF_YEAR):
        width = max(diff_months(end, start), 1 / DAYS_PER_MONTH_MIN_SPAN) * unit_size
    elif scale == TimeScale.YEAR:
        width = max(diff_years(end, start), 1 / DAYS_PER_YEAR) * unit_size
    else:
        width = (diff_days(end, start) + 1) * unit_size
    return max(width, min_span)


def header_dates(start: date, end: date, scale: TimeScale) -> list[date]:
    """Column start dates covering [start, end] for the chart header.

    - Day: every date
    - Week: Mondays, starting from the Monday on or before start
    - Month, Quarter, Half-year: first of each month
    - Year: January 1st of each year
    """
    dates: list[date] = []

    if scale == TimeScale.WEEK:
        current = start - timedelta(days=start.weekday())
        while current <= end:
            dates.append(current)
            current += timedelta(days=DAYS_PER_WEEK)
        return dates

    if scale in (TimeScale.MONTH, TimeScale.QUARTER, TimeScale.HALF_YEAR):
        current = date(start.year, start.month, 1)
        while current <= end:
            dates.append(current)
            current = add_months(current, 1)
        return dates

    if scale == TimeScale.YEAR:
        current = date(start.year, 1, 1)
        while current <= end:
            dates.append(current)
            current = date(current.year + 1, 1, 1)
        return dates

    current = start
    while current <= end:
        dates.append(current)
        current += timedelta(days=1)
    return dates


def shift_view(day: date, scale: TimeScale, steps: int = 1) -> date:
    """Move the visible window's start by navigation steps (negative goes back)."""
    if scale.value in _SHIFT_DAYS:
        return day + timedelta(days=_SHIFT_DAYS[scale.value] * steps)
    return add_months(day, _SHIFT_MONTHS[scale.value] * steps)
