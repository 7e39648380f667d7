"""Tunable planner settings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple

from bridgedays.scoring import DEFAULT_WEIGHTS, ScoringWeights

MAX_BRIDGE_LENGTH = 4


class PlannerSettings(NamedTuple):
    """Settings for one planning run.

    ``lookahead_end`` is the ``(month, day)`` in the following year up to
    which workdays and holidays are still considered, so late December
    bridges can see early January holidays.
    """

    weights: ScoringWeights = DEFAULT_WEIGHTS
    max_bridge_length: int = MAX_BRIDGE_LENGTH
    lookahead_end: tuple[int, int] = (1, 15)
    include_holiday_bridges: bool = False
    max_holiday_bridge_days: int = 15
    min_score: float | None = None


_WEIGHT_KEYS = {
    "efficiency": "efficiency",
    "gap": "gap",
    "short_gap": "gap",
    "length": "length",
    "total_length": "length",
    "early_month": "early_month",
}


def settings_from_mapping(data: Mapping[str, object]) -> PlannerSettings:
    """Build settings from a parsed JSON/dict configuration.

    Unknown weight names raise ``ValueError`` so typos in a config file
    are not silently ignored.
    """
    weights = DEFAULT_WEIGHTS
    raw_weights = data.get("weights")
    if raw_weights is not None:
        if not isinstance(raw_weights, Mapping):
            raise ValueError("'weights' must be an object")
        overrides: dict[str, float] = {}
        for key, value in raw_weights.items():
            field = _WEIGHT_KEYS.get(key)
            if field is None:
                raise ValueError(f"Unknown weight {key!r}")
            overrides[field] = float(value)  # type: ignore[arg-type]
        weights = weights._replace(**overrides)

    settings = PlannerSettings(weights=weights)
    fields: dict[str, object] = {}
    if "max_bridge_length" in data:
        fields["max_bridge_length"] = int(data["max_bridge_length"])  # type: ignore[call-overload]
    if "include_holiday_bridges" in data:
        fields["include_holiday_bridges"] = bool(data["include_holiday_bridges"])
    if "max_holiday_bridge_days" in data:
        fields["max_holiday_bridge_days"] = int(data["max_holiday_bridge_days"])  # type: ignore[call-overload]
    if data.get("min_score") is not None:
        fields["min_score"] = float(data["min_score"])  # type: ignore[arg-type]
    if "lookahead_end" in data:
        month, day = data["lookahead_end"]  # type: ignore[misc]
        fields["lookahead_end"] = (int(month), int(day))
    return settings._replace(**fields)
