"""Vacation planner.

Recommends which workdays to take off so a limited vacation budget turns
into as many consecutive days off as possible.

The planner resolves the calendar for the target year (holidays, remote
days, company and user mandated days off), hands the remaining office days
to the candidate generators, lets the greedy selector spend what is left of
the budget, and folds the result together with the mandatory days into a
:class:`VacationPlan`.
"""

from __future__ import annotations

import datetime
from collections.abc import Collection, Iterable
from typing import Literal, NamedTuple

from loguru import logger

from bridgedays.dates import (
    DEFAULT_WORKDAYS,
    enumerate_workdays,
    is_remote_day,
    to_calendar_date,
)
from bridgedays.events import Observer, emit
from bridgedays.holidays import HolidayProvider
from bridgedays.models import (
    CalendarContext,
    CandidatePeriod,
    Holiday,
    MandatoryDay,
    PlanPeriod,
    VacationPlan,
)
from bridgedays.selector import select_periods
from bridgedays.settings import PlannerSettings
from bridgedays.strategies import generate_candidates


class _ResolvedMandatory(NamedTuple):
    date: datetime.date
    cost: float
    source: Literal["company", "user"]


class VacationPlanner:
    """Plans vacation days for a single year.

    Parameters
    ----------
    budget : float
        Vacation days available, in steps of 0.5.
    year : int
        Display year of the plan.
    holidays : iterable of Holiday
        Public holidays, as supplied by a holiday data provider.
    workdays : collection of int
        Designated workdays, 0 = Sunday ... 6 = Saturday.
    remote_workdays : collection of int
        Weekdays worked remotely; a subset of *workdays*.
    company_days, user_days : iterable of MandatoryDay
        Days off imposed by the employer or chosen by the user in advance.
    optimization_start_date : date, optional
        First day considered for planning; defaults to January 1.
    holiday_provider : callable, optional
        ``year -> holidays``; queried for the following year so late-year
        periods can see early January holidays.
    """

    def __init__(
        self,
        budget: float,
        year: int,
        holidays: Iterable[Holiday] = (),
        workdays: Collection[int] = DEFAULT_WORKDAYS,
        remote_workdays: Collection[int] = (),
        company_days: Iterable[MandatoryDay] = (),
        user_days: Iterable[MandatoryDay] = (),
        *,
        optimization_start_date: datetime.date | None = None,
        holiday_provider: HolidayProvider | None = None,
        settings: PlannerSettings | None = None,
        observer: Observer | None = None,
    ):
        self.budget = budget
        self.year = year
        self.workdays = frozenset(workdays)
        self.remote_workdays = frozenset(remote_workdays)
        self.settings = settings or PlannerSettings()
        self.observer = observer

        self.start_date = (
            to_calendar_date(optimization_start_date)
            if optimization_start_date is not None
            else datetime.date(year, 1, 1)
        )
        month, day = self.settings.lookahead_end
        self.end_date = datetime.date(year + 1, month, day)

        self.holidays = self._resolve_holidays(holidays, holiday_provider)
        self.holiday_names = {h.date: h.name for h in self.holidays}

        self.workday_dates = enumerate_workdays(self.start_date, self.end_date, self.workdays)
        self.remote_dates = frozenset(
            d
            for d in self.workday_dates
            if is_remote_day(d, self.remote_workdays) and d not in self.holiday_names
        )

        self.mandatory = self._resolve_mandatory(company_days, user_days)
        self.company_cost = float(sum(m.cost for m in self.mandatory if m.source == "company"))
        self.user_cost = float(sum(m.cost for m in self.mandatory if m.source == "user"))
        self.optimizer_budget = max(0.0, budget - self.company_cost - self.user_cost)

        self.context = CalendarContext.build(
            self.workdays,
            self.holidays,
            company_dates=[m.date for m in self.mandatory],
            remote_dates=self.remote_dates,
        )
        self.available_workdays = [
            d
            for d in self.workday_dates
            if d not in self.holiday_names
            and d not in self.context.company_dates
            and d not in self.remote_dates
        ]

        logger.debug(
            "Calendar resolved",
            year=year,
            start=self.start_date.isoformat(),
            end=self.end_date.isoformat(),
            holidays=len(self.holidays),
            workdays=len(self.workday_dates),
            remote_days=len(self.remote_dates),
            mandatory_days=len(self.mandatory),
            available_workdays=len(self.available_workdays),
        )

    # ------------------------------------------------------------------
    # Calendar resolution
    # ------------------------------------------------------------------

    def _resolve_holidays(
        self,
        holidays: Iterable[Holiday],
        provider: HolidayProvider | None,
    ) -> list[Holiday]:
        records = [Holiday(to_calendar_date(h.date), h.name) for h in holidays]
        if provider is not None:
            records.extend(Holiday(to_calendar_date(h.date), h.name) for h in provider(self.year + 1))

        unique: dict[datetime.date, Holiday] = {}
        for h in records:
            if self.start_date <= h.date <= self.end_date:
                unique.setdefault(h.date, h)
        return sorted(unique.values())

    def _resolve_mandatory(
        self,
        company_days: Iterable[MandatoryDay],
        user_days: Iterable[MandatoryDay],
    ) -> list[_ResolvedMandatory]:
        """Validate mandatory days against the calendar and price them.

        A day on a holiday or remote day is kept at zero cost; a day that is
        not a designated workday or lies outside the planning window is
        dropped.  Company days take precedence over user days on the same
        date.
        """
        workday_set = set(self.workday_dates)
        resolved: dict[datetime.date, _ResolvedMandatory] = {}
        sources: list[tuple[Literal["company", "user"], Iterable[MandatoryDay]]] = [
            ("company", company_days),
            ("user", user_days),
        ]
        for source, days in sources:
            for item in days:
                day = to_calendar_date(item.date)
                if day in resolved:
                    continue
                if day not in workday_set:
                    logger.debug("Mandatory day ignored", source=source, day=day.isoformat())
                    continue
                if day in self.holiday_names or day in self.remote_dates:
                    cost = 0.0
                else:
                    cost = float(item.duration)
                resolved[day] = _ResolvedMandatory(day, cost, source)
        return sorted(resolved.values())

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def find_periods(self) -> list[CandidatePeriod]:
        """Run the optimizer over the available workdays."""
        if not self.available_workdays:
            logger.warning("No available workdays for vacation planning", year=self.year)
            return []
        if self.optimizer_budget <= 0:
            emit(self.observer, "selection_finished", selected=0, remaining_budget=0.0)
            return []

        candidates = generate_candidates(
            self.available_workdays, self.context, self.settings, self.observer
        )
        return select_periods(
            candidates,
            self.optimizer_budget,
            min_score=self.settings.min_score,
            observer=self.observer,
        )

    def plan(self) -> VacationPlan:
        selected = self.find_periods()

        periods = [
            PlanPeriod(
                start_date=p.start_date,
                end_date=p.end_date,
                vacation_days=p.vacation_days,
                total_days_off=p.total_days_off,
                cost=len(p.vacation_days),
                includes=p.includes,
                is_mandatory=False,
                source="optimizer",
                score=p.score,
                strategy=p.strategy,
            )
            for p in selected
        ]
        periods.extend(
            PlanPeriod(
                start_date=m.date,
                end_date=m.date,
                vacation_days=(m.date,),
                total_days_off=1,
                cost=m.cost,
                includes=(),
                is_mandatory=True,
                source=m.source,
            )
            for m in self.mandatory
        )
        periods.sort(key=lambda p: (p.start_date, p.is_mandatory))

        optimizer_used = float(sum(p.cost for p in selected))
        total_used = optimizer_used + self.company_cost + self.user_cost

        year = self.year
        shown = [p for p in periods if any(d.year == year for d in p.vacation_days)]

        return VacationPlan(
            year=year,
            recommended_days=sorted(d for p in shown for d in p.vacation_days),
            periods=shown,
            total_days_off=sum(p.total_days_off for p in shown),
            budget=self.budget,
            optimizer_budget=self.optimizer_budget,
            optimizer_days_used=optimizer_used,
            company_days_cost=self.company_cost,
            user_mandatory_days_cost=self.user_cost,
            total_vacation_days_used=total_used,
            remaining_vacation_days=self.budget - total_used,
            holidays=[h for h in self.holidays if h.date.year == year],
            remote_workdays=sorted(d for d in self.remote_dates if d.year == year),
            company_vacation_days=[
                m.date for m in self.mandatory if m.source == "company" and m.date.year == year
            ],
            user_mandatory_vacation_days=[
                m.date for m in self.mandatory if m.source == "user" and m.date.year == year
            ],
        )


def calculate_vacation_plan(
    budget: float,
    year: int,
    holidays: Iterable[Holiday] = (),
    workdays: Collection[int] = DEFAULT_WORKDAYS,
    remote_workdays: Collection[int] = (),
    company_days: Iterable[MandatoryDay] = (),
    user_days: Iterable[MandatoryDay] = (),
    **kwargs: object,
) -> VacationPlan:
    """Functional shortcut for ``VacationPlanner(...).plan()``."""
    return VacationPlanner(
        budget,
        year,
        holidays,
        workdays,
        remote_workdays,
        company_days,
        user_days,
        **kwargs,  # type: ignore[arg-type]
    ).plan()
