"""bridgedays vacation planner.

Turn a limited vacation budget into the longest possible breaks by taking
off the workdays that bridge weekends, holidays and company days off.
"""

from loguru import logger

from bridgedays.boundaries import expand_end, expand_start
from bridgedays.holidays import get_holidays, preset_provider
from bridgedays.models import (
    CalendarContext,
    CandidatePeriod,
    CompanyInclude,
    Holiday,
    HolidayInclude,
    MandatoryDay,
    PlanPeriod,
    Strategy,
    VacationPlan,
    WeekendInclude,
)
from bridgedays.planner import VacationPlanner, calculate_vacation_plan
from bridgedays.scoring import ScoringWeights, score_period
from bridgedays.selector import select_periods
from bridgedays.settings import PlannerSettings
from bridgedays.strategies import generate_candidates

logger.disable("bridgedays")

__all__ = [
    "CalendarContext",
    "CandidatePeriod",
    "CompanyInclude",
    "Holiday",
    "HolidayInclude",
    "MandatoryDay",
    "PlanPeriod",
    "PlannerSettings",
    "ScoringWeights",
    "Strategy",
    "VacationPlan",
    "VacationPlanner",
    "WeekendInclude",
    "calculate_vacation_plan",
    "expand_end",
    "expand_start",
    "generate_candidates",
    "get_holidays",
    "preset_provider",
    "score_period",
    "select_periods",
]
