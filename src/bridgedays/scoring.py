"""Desirability score of a candidate period."""

from __future__ import annotations

import datetime
import math
from typing import NamedTuple


class ScoringWeights(NamedTuple):
    """Weights of the score terms.

    efficiency  : days off per budget day spent
    gap         : preference for short gaps (``1 / cost``)
    length      : total length of the break
    early_month : penalty growing from January (0) to December (full weight)
    """

    efficiency: float = 1.5
    gap: float = 1.0
    length: float = 0.5
    early_month: float = 0.05


DEFAULT_WEIGHTS = ScoringWeights()


def score_period(
    first_day: datetime.date,
    total_days_off: int,
    cost: int,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Score a period spanning *total_days_off* days for *cost* vacation days.

    The early-month penalty uses the month of *first_day*, the first vacation
    day of the period.

    A period without vacation days is invalid and scores ``-inf``.
    """
    if cost <= 0:
        return -math.inf

    efficiency = max(0.0, total_days_off / cost)
    month = first_day.month - 1
    early_penalty = (1 - (11 - month) / 11) * weights.early_month

    return (
        efficiency * weights.efficiency
        + (1 / cost) * weights.gap
        + total_days_off * weights.length
        - early_penalty
    )
