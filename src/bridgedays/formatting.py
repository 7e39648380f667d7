"""Human-readable rendering of a vacation plan."""

from __future__ import annotations

import calendar
import datetime

from bridgedays.models import (
    CompanyInclude,
    HolidayInclude,
    IncludedDay,
    PlanPeriod,
    VacationPlan,
    WeekendInclude,
)

WIDTH = 64


def _days(value: float) -> str:
    """Render a day count without a trailing ``.0``."""
    return f"{value:g}"


def describe_include(item: IncludedDay) -> str:
    match item:
        case WeekendInclude():
            return "weekend"
        case HolidayInclude(name=name):
            return name
        case CompanyInclude():
            return "company day off"
    raise TypeError(f"Unknown included day {item!r}")


def _date_range(period: PlanPeriod) -> str:
    if period.start_date == period.end_date:
        return period.start_date.strftime("%a, %b %d")
    return (
        f"{period.start_date.strftime('%a, %b %d')} -> "
        f"{period.end_date.strftime('%a, %b %d')}"
    )


def format_plan(plan: VacationPlan) -> str:
    """Return a human-readable summary of a vacation plan."""
    lines: list[str] = []
    w = WIDTH

    lines.append("")
    lines.append("=" * w)
    lines.append(f"  VACATION PLAN {plan.year}")
    lines.append("=" * w)
    lines.append("")
    lines.append(f"  Budget:                 {_days(plan.budget)} days")
    if plan.company_days_cost or plan.user_mandatory_days_cost:
        lines.append(f"  Company days off:       {_days(plan.company_days_cost)}")
        lines.append(f"  Personal fixed days:    {_days(plan.user_mandatory_days_cost)}")
    lines.append(f"  Planned by optimizer:   {_days(plan.optimizer_days_used)}")
    lines.append(f"  Remaining:              {_days(plan.remaining_vacation_days)}")
    lines.append(f"  Total days off:         {plan.total_days_off}")
    used = plan.total_vacation_days_used
    if used > 0:
        lines.append(
            f"  Efficiency: {plan.total_days_off / used:.1f}x (days off per vacation day)"
        )
    lines.append("")

    lines.append("  Vacation Periods:")
    lines.append("  " + "-" * (w - 4))
    if not plan.periods:
        lines.append("  (no periods)")

    for i, period in enumerate(plan.periods, 1):
        n = period.total_days_off
        day_word = "day" if n == 1 else "days"
        label = f"  [{period.source}]" if period.is_mandatory else ""
        lines.append(f"  {i:>2}. {_date_range(period)}  ({n} {day_word}){label}")

        parts = [f"{_days(period.cost)} vacation"]
        parts.extend(describe_include(item) for item in period.includes)
        lines.append(f"      {' + '.join(parts)}")

    lines.append("")
    lines.append("  Days to request off:")
    if plan.recommended_days:
        for d in plan.recommended_days:
            lines.append(f"    -> {d.strftime('%A, %B %d, %Y')}")
    else:
        lines.append("    (none)")
    lines.append("")

    return "\n".join(lines)


def format_calendar_view(plan: VacationPlan) -> str:
    """Return a month-by-month calendar view highlighting the plan."""
    year = plan.year
    mandatory: set[datetime.date] = set(plan.company_vacation_days) | set(
        plan.user_mandatory_vacation_days
    )
    vacation = set(plan.recommended_days) - mandatory
    holiday_set = {h.date for h in plan.holidays}
    remote_set = set(plan.remote_workdays)

    active_months = {d.month for d in vacation | mandatory | holiday_set}
    if not active_months:
        return ""

    lines: list[str] = [
        "",
        f"  Calendar View {year}",
        "  Legend: V=Vacation  M=Mandatory  H=Holiday  R=Remote",
        "",
    ]

    cal = calendar.Calendar(firstweekday=0)

    for month in range(1, 13):
        if month not in active_months:
            continue

        lines.append(f"  {calendar.month_name[month]} {year}")
        lines.append("  Mo  Tu  We  Th  Fr  Sa  Su")

        row = ""
        for day_num, weekday in cal.itermonthdays2(year, month):
            if day_num == 0:
                row += "    "
            else:
                d = datetime.date(year, month, day_num)
                if d in vacation:
                    cell = f" {day_num:>2}V"
                elif d in mandatory:
                    cell = f" {day_num:>2}M"
                elif d in holiday_set:
                    cell = f" {day_num:>2}H"
                elif d in remote_set:
                    cell = f" {day_num:>2}R"
                else:
                    cell = f"  {day_num:>2}"
                row += cell

            if weekday == 6:
                lines.append(row)
                row = ""

        if row.strip():
            lines.append(row)
        lines.append("")

    return "\n".join(lines)
