"""Greedy, budget-constrained selection of candidate periods.

Candidates are ranked by score (ties broken by start date, then by their
vacation days, so the order is total and runs are reproducible) and
accepted one by one while the budget lasts.  A candidate is rejected when
it costs more than what is left or when one of its vacation days already
lies inside the span of an accepted period.
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Iterable

from bridgedays.dates import iter_days
from bridgedays.events import Observer, emit
from bridgedays.models import CandidatePeriod
from bridgedays.strategies import dedupe_by_vacation_days


def _rank_key(p: CandidatePeriod) -> tuple[float, datetime.date, tuple[datetime.date, ...]]:
    return (-p.score, p.start_date, p.key)


def rank_candidates(candidates: Iterable[CandidatePeriod]) -> list[CandidatePeriod]:
    """Drop invalid candidates, dedupe by vacation days and sort best first."""
    valid = [p for p in candidates if p.vacation_days and p.score != -math.inf]
    return sorted(dedupe_by_vacation_days(valid), key=_rank_key)


def select_periods(
    candidates: Iterable[CandidatePeriod],
    budget: float,
    *,
    min_score: float | None = None,
    observer: Observer | None = None,
) -> list[CandidatePeriod]:
    """Pick non-overlapping candidates that fit into *budget*.

    Returns the accepted periods sorted by start date.
    """
    ranked = rank_candidates(candidates)
    emit(observer, "candidates_ranked", count=len(ranked))

    remaining = budget
    covered: set[datetime.date] = set()
    selected: list[CandidatePeriod] = []

    for p in ranked:
        if remaining <= 0:
            break
        if min_score is not None and p.score < min_score:
            emit(observer, "period_skipped", reason="score", start=p.start_date, score=p.score)
            break
        if p.cost > remaining:
            emit(observer, "period_skipped", reason="budget", start=p.start_date, cost=p.cost)
            continue
        if any(d in covered for d in p.vacation_days):
            emit(observer, "period_skipped", reason="overlap", start=p.start_date, cost=p.cost)
            continue

        selected.append(p)
        remaining -= p.cost
        covered.update(iter_days(p.start_date, p.end_date))
        emit(
            observer,
            "period_selected",
            start=p.start_date,
            end=p.end_date,
            cost=p.cost,
            score=round(p.score, 3),
            strategy=p.strategy.value,
            remaining_budget=remaining,
        )

    selected.sort(key=lambda p: (p.start_date, p.key))
    emit(observer, "selection_finished", selected=len(selected), remaining_budget=remaining)
    return selected
