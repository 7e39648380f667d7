"""Candidate generators.

Each generator enumerates possible time-off periods over the workdays that
are still available for planning:

  1. Bridge          - short runs of workdays wedged between two off-spans
  2. Holiday link    - one or two workdays directly before or after a holiday
  3. Long weekend    - Friday, Monday, Thu+Fri or Mon+Tue next to a weekend
  4. Holiday bridge  - every workday between two nearby holidays (opt-in)

Generators are pure: they read the calendar context and return scored
:class:`CandidatePeriod` values.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Sequence

from bridgedays.boundaries import expand_end, expand_start
from bridgedays.dates import (
    FRIDAY,
    MONDAY,
    THURSDAY,
    TUESDAY,
    add_days,
    inclusive_day_span,
    is_workday,
    iter_days,
    weekday_index,
)
from bridgedays.events import Observer, emit
from bridgedays.models import (
    CalendarContext,
    CandidatePeriod,
    CompanyInclude,
    HolidayInclude,
    IncludedDay,
    Strategy,
    WeekendInclude,
)
from bridgedays.scoring import DEFAULT_WEIGHTS, ScoringWeights, score_period
from bridgedays.settings import MAX_BRIDGE_LENGTH, PlannerSettings

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def included_days(
    start: datetime.date,
    end: datetime.date,
    vacation_days: Iterable[datetime.date],
    context: CalendarContext,
) -> tuple[IncludedDay, ...]:
    """Non-budget days folded into ``[start, end]``.

    Non-workdays collapse into a single weekend marker; each holiday and
    mandatory day is listed once.
    """
    vacation = set(vacation_days)
    includes: list[IncludedDay] = []
    for day in iter_days(start, end):
        if day in vacation:
            continue
        if not is_workday(day, context.workdays):
            item: IncludedDay | None = WeekendInclude()
        elif day in context.holidays:
            item = HolidayInclude(name=context.holidays[day])
        elif day in context.company_dates:
            item = CompanyInclude()
        else:
            item = None
        if item is not None and item not in includes:
            includes.append(item)
    return tuple(includes)


def build_candidate(
    vacation_days: Iterable[datetime.date],
    strategy: Strategy,
    context: CalendarContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> CandidatePeriod:
    """Expand *vacation_days* to their full off-span and score the result."""
    days = tuple(sorted(vacation_days))
    start = expand_start(
        days[0], context.workdays, context.holidays, context.company_dates, context.remote_dates
    )
    end = expand_end(
        days[-1], context.workdays, context.holidays, context.company_dates, context.remote_dates
    )
    total = inclusive_day_span(start, end)
    return CandidatePeriod(
        start_date=start,
        end_date=end,
        vacation_days=days,
        total_days_off=total,
        cost=len(days),
        score=score_period(days[0], total, len(days), weights),
        strategy=strategy,
        includes=included_days(start, end, days, context),
    )


def dedupe_by_vacation_days(periods: Iterable[CandidatePeriod]) -> list[CandidatePeriod]:
    """Keep the best-scoring period for each distinct set of vacation days.

    On equal scores the first period seen wins, so the output is stable.
    """
    best: dict[tuple[datetime.date, ...], CandidatePeriod] = {}
    for p in periods:
        current = best.get(p.key)
        if current is None or p.score > current.score:
            best[p.key] = p
    return list(best.values())


def _usable(available: Sequence[datetime.date], context: CalendarContext) -> list[datetime.date]:
    return [
        d
        for d in available
        if d not in context.holidays
        and d not in context.company_dates
        and d not in context.remote_dates
    ]


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def generate_bridge_periods(
    available: Sequence[datetime.date],
    context: CalendarContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    max_length: int = MAX_BRIDGE_LENGTH,
) -> list[CandidatePeriod]:
    """Runs of 1..*max_length* available workdays with off-days on both sides."""
    usable = _usable(available, context)
    usable_set = set(usable)
    periods: list[CandidatePeriod] = []

    for start in usable:
        for length in range(1, max_length + 1):
            run = [add_days(start, i) for i in range(length)]
            if run[-1] not in usable_set:
                break  # longer runs would contain the same gap
            if context.is_office_day(add_days(start, -1)):
                continue
            if context.is_office_day(add_days(run[-1], 1)):
                continue
            periods.append(build_candidate(run, Strategy.BRIDGE, context, weights))

    return periods


def generate_holiday_link_periods(
    available: Sequence[datetime.date],
    context: CalendarContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[CandidatePeriod]:
    """One or two workdays directly before or after each holiday."""
    usable_set = set(_usable(available, context))
    periods: list[CandidatePeriod] = []

    for holiday in sorted(context.holidays):
        for direction in (-1, 1):
            first = add_days(holiday, direction)
            if first not in usable_set:
                continue
            periods.append(build_candidate([first], Strategy.HOLIDAY_LINK, context, weights))

            second = add_days(first, direction)
            if second in usable_set:
                periods.append(
                    build_candidate([first, second], Strategy.HOLIDAY_LINK, context, weights)
                )

    return dedupe_by_vacation_days(periods)


def generate_long_weekend_periods(
    available: Sequence[datetime.date],
    context: CalendarContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[CandidatePeriod]:
    """Single Fridays and Mondays, Thursday+Friday and Monday+Tuesday pairs."""
    usable = _usable(available, context)
    usable_set = set(usable)
    periods: list[CandidatePeriod] = []

    for day in usable:
        weekday = weekday_index(day)
        if weekday in (FRIDAY, MONDAY):
            days = [day]
        elif weekday == THURSDAY and add_days(day, 1) in usable_set:
            days = [day, add_days(day, 1)]
        elif weekday == TUESDAY and add_days(day, -1) in usable_set:
            days = [add_days(day, -1), day]
        else:
            continue
        periods.append(build_candidate(days, Strategy.LONG_WEEKEND, context, weights))

    return dedupe_by_vacation_days(periods)


def generate_holiday_bridge_periods(
    available: Sequence[datetime.date],
    context: CalendarContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    max_days: int = 15,
) -> list[CandidatePeriod]:
    """Fill every office day between two holidays at most *max_days* apart.

    Non-office days in between (weekends, other holidays, mandatory and
    remote days) are skipped; every office day must still be available.
    """
    usable_set = set(_usable(available, context))
    holidays = sorted(context.holidays)
    periods: list[CandidatePeriod] = []

    for i, first in enumerate(holidays):
        for second in holidays[i + 1 :]:
            days: list[datetime.date] = []
            possible = True
            for day in iter_days(add_days(first, 1), add_days(second, -1)):
                if not context.is_office_day(day):
                    continue
                if day not in usable_set:
                    possible = False
                    break
                days.append(day)
            if len(days) > max_days:
                break  # later holidays are further away
            if possible and days:
                periods.append(build_candidate(days, Strategy.HOLIDAY_BRIDGE, context, weights))

    return dedupe_by_vacation_days(periods)


# ---------------------------------------------------------------------------
# Candidate pool
# ---------------------------------------------------------------------------


def generate_candidates(
    available: Sequence[datetime.date],
    context: CalendarContext,
    settings: PlannerSettings | None = None,
    observer: Observer | None = None,
) -> list[CandidatePeriod]:
    """Run every enabled generator and pool the results."""
    settings = settings or PlannerSettings()
    weights = settings.weights

    runs: list[tuple[Strategy, list[CandidatePeriod]]] = [
        (
            Strategy.BRIDGE,
            generate_bridge_periods(available, context, weights, settings.max_bridge_length),
        ),
        (Strategy.HOLIDAY_LINK, generate_holiday_link_periods(available, context, weights)),
        (Strategy.LONG_WEEKEND, generate_long_weekend_periods(available, context, weights)),
    ]
    if settings.include_holiday_bridges:
        runs.append(
            (
                Strategy.HOLIDAY_BRIDGE,
                generate_holiday_bridge_periods(
                    available, context, weights, settings.max_holiday_bridge_days
                ),
            )
        )

    pool: list[CandidatePeriod] = []
    for strategy, found in runs:
        emit(observer, "candidates_generated", strategy=strategy.value, count=len(found))
        pool.extend(found)
    return pool
