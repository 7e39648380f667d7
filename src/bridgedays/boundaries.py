"""Expand a run of vacation days to the full span of days off around it.

Weekends, holidays, mandatory days and remote days are already days away
from the office.  Walking outwards from the first and last vacation day
until a plain office day shows up gives the real length of the break.
"""

from __future__ import annotations

import datetime
from collections.abc import Collection

from loguru import logger

from bridgedays.dates import is_workday

MAX_EXPANSION_STEPS = 30


def is_office_day(
    day: datetime.date,
    workdays: Collection[int],
    holidays: Collection[datetime.date],
    company_dates: Collection[datetime.date],
    remote_dates: Collection[datetime.date],
) -> bool:
    """True when *day* is a designated workday spent at the office."""
    return (
        is_workday(day, workdays)
        and day not in holidays
        and day not in company_dates
        and day not in remote_dates
    )


def _expand(
    day: datetime.date,
    step: int,
    workdays: Collection[int],
    holidays: Collection[datetime.date],
    company_dates: Collection[datetime.date],
    remote_dates: Collection[datetime.date],
) -> datetime.date:
    direction = "start" if step < 0 else "end"
    if not isinstance(day, datetime.date):
        logger.error("Invalid date passed to boundary expansion", direction=direction, day=day)
        return day
    if isinstance(day, datetime.datetime):
        day = day.date()

    current = day
    steps = 0
    while steps < MAX_EXPANSION_STEPS:
        try:
            neighbour = current + datetime.timedelta(days=step)
        except OverflowError:
            logger.error(
                "Date out of range during boundary expansion", direction=direction, day=current
            )
            break
        if is_office_day(neighbour, workdays, holidays, company_dates, remote_dates):
            break
        current = neighbour
        steps += 1

    if steps == MAX_EXPANSION_STEPS:
        logger.warning(
            "Boundary expansion reached the step limit",
            direction=direction,
            day=day.isoformat(),
            limit=MAX_EXPANSION_STEPS,
        )
    return current


def expand_start(
    day: datetime.date,
    workdays: Collection[int],
    holidays: Collection[datetime.date],
    company_dates: Collection[datetime.date] = frozenset(),
    remote_dates: Collection[datetime.date] = frozenset(),
) -> datetime.date:
    """Walk back from *day* to the first day of its off-span.

    Stops at the day after the closest preceding office day, or after
    ``MAX_EXPANSION_STEPS`` steps.
    """
    return _expand(day, -1, workdays, holidays, company_dates, remote_dates)


def expand_end(
    day: datetime.date,
    workdays: Collection[int],
    holidays: Collection[datetime.date],
    company_dates: Collection[datetime.date] = frozenset(),
    remote_dates: Collection[datetime.date] = frozenset(),
) -> datetime.date:
    """Mirror of :func:`expand_start`, walking forward."""
    return _expand(day, 1, workdays, holidays, company_dates, remote_dates)
