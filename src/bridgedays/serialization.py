"""Encode a :class:`VacationPlan` to plain JSON-compatible data and back.

Key names are stable; presentation code indexes them directly.  Dates are
written as ``YYYY-MM-DD`` calendar days.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import Any

from bridgedays.models import (
    CompanyInclude,
    Holiday,
    HolidayInclude,
    IncludedDay,
    PlanPeriod,
    Strategy,
    VacationPlan,
    WeekendInclude,
)


def _dates(values: list[datetime.date] | tuple[datetime.date, ...]) -> list[str]:
    return [d.isoformat() for d in values]


def _parse_dates(values: list[str]) -> list[datetime.date]:
    return [datetime.date.fromisoformat(v) for v in values]


def include_to_dict(item: IncludedDay) -> dict[str, str]:
    match item:
        case WeekendInclude():
            return {"type": "weekend"}
        case HolidayInclude(name=name):
            return {"type": "holiday", "name": name}
        case CompanyInclude():
            return {"type": "company", "name": "Company Vacation"}
    raise TypeError(f"Unknown included day {item!r}")


def include_from_dict(data: Mapping[str, str]) -> IncludedDay:
    kind = data["type"]
    if kind == "weekend":
        return WeekendInclude()
    if kind == "holiday":
        return HolidayInclude(name=data["name"])
    if kind == "company":
        return CompanyInclude()
    raise ValueError(f"Unknown included day type {kind!r}")


def period_to_dict(period: PlanPeriod) -> dict[str, Any]:
    return {
        "startDate": period.start_date.isoformat(),
        "endDate": period.end_date.isoformat(),
        "totalDays": period.total_days_off,
        "vacationDaysUsed": period.cost,
        "vacationDays": _dates(period.vacation_days),
        "includes": [include_to_dict(i) for i in period.includes],
        "isCompanyVacation": period.source == "company",
        "isMandatory": period.is_mandatory,
        "source": period.source,
        "score": period.score,
        "type": period.strategy.value if period.strategy is not None else None,
    }


def period_from_dict(data: Mapping[str, Any]) -> PlanPeriod:
    strategy = data.get("type")
    return PlanPeriod(
        start_date=datetime.date.fromisoformat(data["startDate"]),
        end_date=datetime.date.fromisoformat(data["endDate"]),
        vacation_days=tuple(_parse_dates(data["vacationDays"])),
        total_days_off=data["totalDays"],
        cost=data["vacationDaysUsed"],
        includes=tuple(include_from_dict(i) for i in data["includes"]),
        is_mandatory=data["isMandatory"],
        source=data["source"],
        score=data.get("score"),
        strategy=Strategy(strategy) if strategy is not None else None,
    )


def plan_to_dict(plan: VacationPlan) -> dict[str, Any]:
    return {
        "year": plan.year,
        "recommendedDays": _dates(plan.recommended_days),
        "totalDaysOff": plan.total_days_off,
        "budget": plan.budget,
        "optimizerBudget": plan.optimizer_budget,
        "optimizerDaysUsed": plan.optimizer_days_used,
        "companyVacationDaysCost": plan.company_days_cost,
        "userMandatoryDaysCost": plan.user_mandatory_days_cost,
        "totalVacationDaysUsed": plan.total_vacation_days_used,
        "remainingVacationDays": plan.remaining_vacation_days,
        "vacationPeriods": [period_to_dict(p) for p in plan.periods],
        "holidays": [{"date": h.date.isoformat(), "name": h.name} for h in plan.holidays],
        "remoteWorkdays": _dates(plan.remote_workdays),
        "companyVacationDays": _dates(plan.company_vacation_days),
        "userMandatoryVacationDays": _dates(plan.user_mandatory_vacation_days),
    }


def plan_from_dict(data: Mapping[str, Any]) -> VacationPlan:
    """Inverse of :func:`plan_to_dict`. Missing keys raise ``KeyError``."""
    return VacationPlan(
        year=data["year"],
        recommended_days=_parse_dates(data["recommendedDays"]),
        periods=[period_from_dict(p) for p in data["vacationPeriods"]],
        total_days_off=data["totalDaysOff"],
        budget=data["budget"],
        optimizer_budget=data["optimizerBudget"],
        optimizer_days_used=data["optimizerDaysUsed"],
        company_days_cost=data["companyVacationDaysCost"],
        user_mandatory_days_cost=data["userMandatoryDaysCost"],
        total_vacation_days_used=data["totalVacationDaysUsed"],
        remaining_vacation_days=data["remainingVacationDays"],
        holidays=[
            Holiday(datetime.date.fromisoformat(h["date"]), h["name"]) for h in data["holidays"]
        ],
        remote_workdays=_parse_dates(data["remoteWorkdays"]),
        company_vacation_days=_parse_dates(data["companyVacationDays"]),
        user_mandatory_vacation_days=_parse_dates(data["userMandatoryVacationDays"]),
    )
