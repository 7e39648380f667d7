from __future__ import annotations

import datetime
import json

import pytest

from bridgedays.holidays import get_holidays
from bridgedays.models import CompanyInclude, HolidayInclude, MandatoryDay, WeekendInclude
from bridgedays.planner import calculate_vacation_plan
from bridgedays.serialization import (
    include_from_dict,
    include_to_dict,
    period_to_dict,
    plan_from_dict,
    plan_to_dict,
)


def _plan():
    return calculate_vacation_plan(
        12,
        2025,
        get_holidays("us", 2025),
        remote_workdays={5},
        company_days=[MandatoryDay(datetime.date(2025, 12, 24))],
        user_days=[MandatoryDay(datetime.date(2025, 8, 14), 0.5)],
    )


class TestPlanEncoding:
    def test_keys(self) -> None:
        data = plan_to_dict(_plan())
        assert set(data) == {
            "year",
            "recommendedDays",
            "totalDaysOff",
            "budget",
            "optimizerBudget",
            "optimizerDaysUsed",
            "companyVacationDaysCost",
            "userMandatoryDaysCost",
            "totalVacationDaysUsed",
            "remainingVacationDays",
            "vacationPeriods",
            "holidays",
            "remoteWorkdays",
            "companyVacationDays",
            "userMandatoryVacationDays",
        }
        assert data["companyVacationDays"] == ["2025-12-24"]
        assert data["holidays"][0] == {"date": "2025-01-01", "name": "New Year's Day"}

    def test_round_trip_through_json(self) -> None:
        plan = _plan()
        assert plan_from_dict(json.loads(json.dumps(plan_to_dict(plan)))) == plan

    def test_missing_key(self) -> None:
        data = plan_to_dict(_plan())
        del data["budget"]
        with pytest.raises(KeyError):
            plan_from_dict(data)


class TestPeriodEncoding:
    def test_mandatory_period(self) -> None:
        plan = _plan()
        company = next(p for p in plan.periods if p.source == "company")
        data = period_to_dict(company)
        assert data["isCompanyVacation"] is True
        assert data["isMandatory"] is True
        assert data["type"] is None
        assert data["score"] is None
        assert data["vacationDays"] == ["2025-12-24"]

    def test_optimizer_period(self) -> None:
        plan = _plan()
        period = next(p for p in plan.periods if p.source == "optimizer")
        data = period_to_dict(period)
        assert data["isCompanyVacation"] is False
        assert data["type"] in {"bridge", "holiday-link", "long-weekend"}
        assert data["totalDays"] == period.total_days_off


class TestIncludes:
    def test_encoding(self) -> None:
        assert include_to_dict(WeekendInclude()) == {"type": "weekend"}
        assert include_to_dict(HolidayInclude("Labor Day")) == {
            "type": "holiday",
            "name": "Labor Day",
        }
        assert include_to_dict(CompanyInclude()) == {"type": "company", "name": "Company Vacation"}

    def test_decoding(self) -> None:
        assert include_from_dict({"type": "company", "name": "Company Vacation"}) == (
            CompanyInclude()
        )
        assert include_from_dict({"type": "holiday", "name": "X"}) == HolidayInclude("X")

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            include_from_dict({"type": "sabbatical"})
