"""Calendar primitives.

Every date inside the planner is a plain :class:`datetime.date`.  Weekday
sets follow the 0 = Sunday ... 6 = Saturday convention used by callers, so
:func:`weekday_index` is the only place that converts from ``datetime``'s own
Monday-based numbering.
"""

from __future__ import annotations

import datetime
from collections.abc import Collection, Iterator

CalendarDate = datetime.date

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

DEFAULT_WORKDAYS: frozenset[int] = frozenset({MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY})


def to_calendar_date(value: object) -> CalendarDate:
    """Normalize *value* to a whole calendar day.

    Accepts a ``date``, a ``datetime`` (time and zone are dropped) or an ISO
    string such as ``"2025-03-14"`` or ``"2025-03-14T00:00:00.000Z"``.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return datetime.date.fromisoformat(value[:10])
    raise TypeError(f"Cannot interpret {value!r} as a calendar date")


def weekday_index(day: CalendarDate) -> int:
    """Weekday of *day* with 0 = Sunday."""
    return day.isoweekday() % 7


def add_days(day: CalendarDate, n: int) -> CalendarDate:
    return day + datetime.timedelta(days=n)


def is_workday(day: CalendarDate, workdays: Collection[int]) -> bool:
    return weekday_index(day) in workdays


def is_remote_day(day: CalendarDate, remote_workdays: Collection[int]) -> bool:
    return weekday_index(day) in remote_workdays


def inclusive_day_span(start: CalendarDate, end: CalendarDate) -> int:
    """Number of calendar days from *start* to *end*, both included."""
    return abs((end - start).days) + 1


def enumerate_workdays(
    start: CalendarDate,
    end: CalendarDate,
    workdays: Collection[int],
) -> list[CalendarDate]:
    """Every day in ``[start, end]`` whose weekday is in *workdays*, ascending."""
    return [day for day in iter_days(start, end) if weekday_index(day) in workdays]


def iter_days(start: CalendarDate, end: CalendarDate) -> Iterator[CalendarDate]:
    day = start
    while day <= end:
        yield day
        day += datetime.timedelta(days=1)
