from __future__ import annotations

import datetime

from bridgedays.dates import DEFAULT_WORKDAYS, enumerate_workdays
from bridgedays.models import (
    CalendarContext,
    CompanyInclude,
    Holiday,
    HolidayInclude,
    Strategy,
    WeekendInclude,
)
from bridgedays.scoring import score_period
from bridgedays.settings import PlannerSettings
from bridgedays.strategies import (
    build_candidate,
    dedupe_by_vacation_days,
    generate_bridge_periods,
    generate_candidates,
    generate_holiday_bridge_periods,
    generate_holiday_link_periods,
    generate_long_weekend_periods,
    included_days,
)


def d(month: int, day: int, year: int = 2024) -> datetime.date:
    return datetime.date(year, month, day)


# May 2024: Labor Day (Wed 1), Ascension (Thu 9), Whit Monday (Mon 20)
MAY_HOLIDAYS = [
    Holiday(d(5, 1), "Labor Day"),
    Holiday(d(5, 9), "Ascension Day"),
    Holiday(d(5, 20), "Whit Monday"),
]


def _may_context() -> CalendarContext:
    return CalendarContext.build(DEFAULT_WORKDAYS, MAY_HOLIDAYS)


def _may_available() -> list[datetime.date]:
    return enumerate_workdays(d(5, 1), d(5, 31), DEFAULT_WORKDAYS)


def _keys(periods) -> set[tuple[datetime.date, ...]]:
    return {p.key for p in periods}


class TestBuildCandidate:
    def test_friday_after_holiday(self) -> None:
        p = build_candidate([d(5, 10)], Strategy.BRIDGE, _may_context())
        assert p.start_date == d(5, 9)
        assert p.end_date == d(5, 12)
        assert p.total_days_off == 4
        assert p.cost == 1
        assert p.includes == (HolidayInclude("Ascension Day"), WeekendInclude())

    def test_vacation_days_are_sorted(self) -> None:
        p = build_candidate([d(5, 3), d(5, 2)], Strategy.BRIDGE, _may_context())
        assert p.vacation_days == (d(5, 2), d(5, 3))
        assert p.start_date == d(5, 1)
        assert p.end_date == d(5, 5)

    def test_company_day_included(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS, company_dates=[d(3, 14)])
        p = build_candidate([d(3, 15)], Strategy.LONG_WEEKEND, context)
        assert p.start_date == d(3, 14)
        assert CompanyInclude() in p.includes


class TestIncludedDays:
    def test_weekend_listed_once(self) -> None:
        includes = included_days(d(3, 9), d(3, 17), [d(3, 11)], _may_context())
        assert includes == (WeekendInclude(),)

    def test_remote_days_not_listed(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS, remote_dates=[d(3, 15)])
        assert included_days(d(3, 14), d(3, 15), [d(3, 14)], context) == ()


class TestBridgePeriods:
    def test_finds_runs_between_off_days(self) -> None:
        periods = generate_bridge_periods(_may_available(), _may_context())
        assert _keys(periods) == {
            (d(5, 2), d(5, 3)),
            (d(5, 6), d(5, 7), d(5, 8)),
            (d(5, 10),),
            (d(5, 21), d(5, 22), d(5, 23), d(5, 24)),
        }
        assert all(p.strategy == Strategy.BRIDGE for p in periods)

    def test_max_length(self) -> None:
        periods = generate_bridge_periods(_may_available(), _may_context(), max_length=3)
        assert (d(5, 21), d(5, 22), d(5, 23), d(5, 24)) not in _keys(periods)
        assert (d(5, 6), d(5, 7), d(5, 8)) in _keys(periods)

    def test_plain_weeks_have_no_bridges(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS)
        available = enumerate_workdays(d(3, 4), d(3, 29), DEFAULT_WORKDAYS)
        assert generate_bridge_periods(available, context) == []

    def test_empty_input(self) -> None:
        assert generate_bridge_periods([], _may_context()) == []


class TestHolidayLinkPeriods:
    def test_days_next_to_holidays(self) -> None:
        periods = generate_holiday_link_periods(_may_available(), _may_context())
        assert _keys(periods) == {
            (d(5, 2),),
            (d(5, 2), d(5, 3)),
            (d(5, 8),),
            (d(5, 7), d(5, 8)),
            (d(5, 10),),
            (d(5, 21),),
            (d(5, 21), d(5, 22)),
        }
        assert all(p.strategy == Strategy.HOLIDAY_LINK for p in periods)

    def test_no_holidays(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS)
        assert generate_holiday_link_periods(_may_available(), context) == []


class TestLongWeekendPeriods:
    def test_plain_fortnight(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS)
        available = enumerate_workdays(d(3, 11), d(3, 22), DEFAULT_WORKDAYS)
        periods = generate_long_weekend_periods(available, context)
        assert _keys(periods) == {
            (d(3, 11),),
            (d(3, 11), d(3, 12)),
            (d(3, 14), d(3, 15)),
            (d(3, 15),),
            (d(3, 18),),
            (d(3, 18), d(3, 19)),
            (d(3, 21), d(3, 22)),
            (d(3, 22),),
        }

    def test_friday_span(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS)
        periods = generate_long_weekend_periods([d(3, 15)], context)
        assert len(periods) == 1
        assert periods[0].start_date == d(3, 15)
        assert periods[0].end_date == d(3, 17)
        assert periods[0].total_days_off == 3

    def test_thursday_needs_friday(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS)
        assert generate_long_weekend_periods([d(3, 14)], context) == []


class TestHolidayBridgePeriods:
    CHRISTMAS = [
        Holiday(d(12, 25), "Christmas Day"),
        Holiday(d(12, 26), "Second Day of Christmas"),
        Holiday(d(1, 1, 2025), "New Year's Day"),
    ]

    def _available(self) -> list[datetime.date]:
        return enumerate_workdays(d(12, 1), d(1, 15, 2025), DEFAULT_WORKDAYS)

    def test_fills_gap_between_holidays(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS, self.CHRISTMAS)
        periods = generate_holiday_bridge_periods(self._available(), context)
        assert len(periods) == 1
        p = periods[0]
        assert p.vacation_days == (d(12, 27), d(12, 30), d(12, 31))
        assert p.start_date == d(12, 25)
        assert p.end_date == d(1, 1, 2025)
        assert p.total_days_off == 8
        assert p.strategy == Strategy.HOLIDAY_BRIDGE

    def test_gap_too_long(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS, self.CHRISTMAS)
        assert generate_holiday_bridge_periods(self._available(), context, max_days=2) == []

    def test_unavailable_office_day_blocks(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS, self.CHRISTMAS)
        available = [x for x in self._available() if x != d(12, 30)]
        assert generate_holiday_bridge_periods(available, context) == []


class TestDedupe:
    def test_keeps_best_score(self) -> None:
        p = build_candidate([d(5, 10)], Strategy.BRIDGE, _may_context())
        better = p._replace(score=p.score + 1, strategy=Strategy.HOLIDAY_LINK)
        assert dedupe_by_vacation_days([p, better]) == [better]

    def test_first_wins_on_tie(self) -> None:
        p = build_candidate([d(5, 10)], Strategy.BRIDGE, _may_context())
        same = p._replace(strategy=Strategy.LONG_WEEKEND)
        assert dedupe_by_vacation_days([p, same]) == [p]


class TestGenerateCandidates:
    def test_default_pool_and_events(self) -> None:
        events: list[tuple[str, dict[str, object]]] = []
        pool = generate_candidates(
            _may_available(), _may_context(), observer=lambda e, f: events.append((e, f))
        )
        assert {p.strategy for p in pool} == {
            Strategy.BRIDGE,
            Strategy.HOLIDAY_LINK,
            Strategy.LONG_WEEKEND,
        }
        assert [f["strategy"] for _, f in events] == ["bridge", "holiday-link", "long-weekend"]
        assert all(e == "candidates_generated" for e, _ in events)
        assert sum(f["count"] for _, f in events) == len(pool)  # type: ignore[misc]

    def test_holiday_bridges_opt_in(self) -> None:
        settings = PlannerSettings(include_holiday_bridges=True)
        pool = generate_candidates(_may_available(), _may_context(), settings)
        assert any(p.strategy == Strategy.HOLIDAY_BRIDGE for p in pool)

    def test_candidates_never_use_unavailable_days(self) -> None:
        pool = generate_candidates(_may_available(), _may_context())
        holidays = {h.date for h in MAY_HOLIDAYS}
        for p in pool:
            assert p.cost == len(p.vacation_days)
            assert not holidays & set(p.vacation_days)
            assert all(day.weekday() < 5 for day in p.vacation_days)
            assert p.start_date <= p.vacation_days[0] <= p.vacation_days[-1] <= p.end_date


class TestScoreMonth:
    def test_penalty_follows_first_vacation_day(self) -> None:
        # Monday April 1 expands back to Saturday March 30
        context = CalendarContext.build(DEFAULT_WORKDAYS)
        p = build_candidate([d(4, 1)], Strategy.LONG_WEEKEND, context)
        assert p.start_date == d(3, 30)
        assert p.score == score_period(d(4, 1), 3, 1)
        assert p.score < score_period(d(3, 30), 3, 1)

    def test_january_day_after_new_year(self) -> None:
        context = CalendarContext.build(DEFAULT_WORKDAYS, [Holiday(d(1, 1), "New Year's Day")])
        p = build_candidate([d(1, 2)], Strategy.HOLIDAY_LINK, context)
        assert p.start_date == d(12, 30, 2023)
        assert p.score == score_period(d(1, 2), 4, 1)
