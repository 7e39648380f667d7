"""Data types shared by the generators, the selector and the plan assembler."""

from __future__ import annotations

import datetime
import enum
from collections.abc import Collection, Mapping
from typing import Literal, NamedTuple

from bridgedays.boundaries import is_office_day


class Holiday(NamedTuple):
    date: datetime.date
    name: str


class MandatoryDay(NamedTuple):
    """A day off fixed in advance by the employer or the user.

    *duration* is the budget cost when the day is a plain office day:
    ``0.5`` for a half day, ``1.0`` for a full day.
    """

    date: datetime.date
    duration: float = 1.0


# ---------------------------------------------------------------------------
# Included days
# ---------------------------------------------------------------------------


class WeekendInclude(NamedTuple):
    """Marks that a period spans at least one non-workday."""

    kind: Literal["weekend"] = "weekend"


class HolidayInclude(NamedTuple):
    name: str
    kind: Literal["holiday"] = "holiday"


class CompanyInclude(NamedTuple):
    """A company or user mandated day off folded into a period."""

    kind: Literal["company"] = "company"


IncludedDay = WeekendInclude | HolidayInclude | CompanyInclude


class Strategy(str, enum.Enum):
    BRIDGE = "bridge"
    HOLIDAY_LINK = "holiday-link"
    LONG_WEEKEND = "long-weekend"
    HOLIDAY_BRIDGE = "holiday-bridge"


# ---------------------------------------------------------------------------
# Calendar context
# ---------------------------------------------------------------------------


class CalendarContext(NamedTuple):
    """Everything that decides whether a day is a plain office day.

    ``holidays`` maps each holiday date to its name.  ``company_dates`` holds
    every mandatory day off (company and user), ``remote_dates`` every remote
    workday.
    """

    workdays: frozenset[int]
    holidays: Mapping[datetime.date, str]
    company_dates: frozenset[datetime.date]
    remote_dates: frozenset[datetime.date]

    @classmethod
    def build(
        cls,
        workdays: Collection[int],
        holidays: Collection[Holiday] = (),
        company_dates: Collection[datetime.date] = (),
        remote_dates: Collection[datetime.date] = (),
    ) -> CalendarContext:
        names: dict[datetime.date, str] = {}
        for h in holidays:
            names.setdefault(h.date, h.name)
        return cls(
            workdays=frozenset(workdays),
            holidays=names,
            company_dates=frozenset(company_dates),
            remote_dates=frozenset(remote_dates),
        )

    def is_office_day(self, day: datetime.date) -> bool:
        """True when *day* is a designated workday spent at the office."""
        return is_office_day(
            day, self.workdays, self.holidays, self.company_dates, self.remote_dates
        )


# ---------------------------------------------------------------------------
# Periods and plans
# ---------------------------------------------------------------------------


class CandidatePeriod(NamedTuple):
    """A possible time-off period produced by one of the generators.

    ``start_date``/``end_date`` bound the whole contiguous off-span;
    ``vacation_days`` are the workdays drawn from the budget.
    """

    start_date: datetime.date
    end_date: datetime.date
    vacation_days: tuple[datetime.date, ...]
    total_days_off: int
    cost: int
    score: float
    strategy: Strategy
    includes: tuple[IncludedDay, ...]

    @property
    def key(self) -> tuple[datetime.date, ...]:
        return tuple(sorted(self.vacation_days))


class PlanPeriod(NamedTuple):
    """A period of the final plan, either optimizer-chosen or mandatory."""

    start_date: datetime.date
    end_date: datetime.date
    vacation_days: tuple[datetime.date, ...]
    total_days_off: int
    cost: float
    includes: tuple[IncludedDay, ...]
    is_mandatory: bool
    source: Literal["optimizer", "company", "user"]
    score: float | None = None
    strategy: Strategy | None = None


class VacationPlan(NamedTuple):
    """The result of one planning run."""

    year: int
    recommended_days: list[datetime.date]
    periods: list[PlanPeriod]
    total_days_off: int
    budget: float
    optimizer_budget: float
    optimizer_days_used: float
    company_days_cost: float
    user_mandatory_days_cost: float
    total_vacation_days_used: float
    remaining_vacation_days: float
    holidays: list[Holiday]
    remote_workdays: list[datetime.date]
    company_vacation_days: list[datetime.date]
    user_mandatory_vacation_days: list[datetime.date]
