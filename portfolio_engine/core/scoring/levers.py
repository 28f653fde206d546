"""Lever score aggregation.

Impact and effort are normalized weighted averages of their five levers:

    score = sum(lever * weight) / sum(weight)

The divisor is the weight actually used, not 100, so a partial weight map
still yields a score on the 1-5 scale. Levers with no weight (or no value)
are left out of both sums. Rounding happens once, when the score is
finalized.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from portfolio_engine.core.schemas_use_case import LeverScores
from portfolio_engine.core.scoring.types import (
    DEFAULT_EFFORT_WEIGHTS,
    DEFAULT_IMPACT_WEIGHTS,
    MAX_SCORE,
    MIN_SCORE,
    SCORE_PRECISION,
)


def weighted_lever_average(
    levers: Mapping[str, Optional[float]],
    weights: Mapping[str, float],
) -> Optional[float]:
    """
    Unrounded weighted average of the levers that have both a value and a weight.

    Args:
        levers: Lever name -> score (None means not rated)
        weights: Lever name -> weight; missing names count as zero

    Returns:
        The average, or None when the total weight used is zero
    """
    weighted_sum = 0.0
    total_weight = 0.0

    for name, value in levers.items():
        weight = weights.get(name, 0) or 0
        if value is None or weight <= 0:
            continue
        weighted_sum += value * weight
        total_weight += weight

    if total_weight <= 0:
        return None

    return weighted_sum / total_weight


def round_half_up(value: float, places: int = 0) -> float:
    """Round half away from zero (2.5 -> 3), unlike round()'s half-to-even."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_score(score: float) -> float:
    """Round to display precision, half away from zero."""
    return round_half_up(score, SCORE_PRECISION)


def format_score(score: Optional[float]) -> str:
    """Format a score for display ("3.8"), or "-" when unavailable."""
    if score is None:
        return "-"
    return f"{round_score(score):.{SCORE_PRECISION}f}"


def is_score_at_or_above(score: float, threshold: float) -> bool:
    """Compare using rounded values so thresholds match what is displayed."""
    return round_score(score) >= round_score(threshold)


def _finalize(raw: Optional[float]) -> Optional[float]:
    if raw is None or not math.isfinite(raw):
        return None
    return round_score(max(MIN_SCORE, min(MAX_SCORE, raw)))


def compute_impact_score(
    levers: LeverScores,
    weights: Optional[Mapping[str, float]] = None,
) -> Optional[float]:
    """
    Impact score on the 0-5 scale, rounded to one decimal place.

    Args:
        levers: The use case's lever scores
        weights: Impact lever weights (defaults to 20 each)

    Returns:
        Score, or None when no impact lever carries weight
    """
    if weights is None:
        weights = DEFAULT_IMPACT_WEIGHTS
    return _finalize(weighted_lever_average(levers.impact_levers(), weights))


def compute_effort_score(
    levers: LeverScores,
    weights: Optional[Mapping[str, float]] = None,
) -> Optional[float]:
    """
    Effort score on the 0-5 scale, rounded to one decimal place.

    Args:
        levers: The use case's lever scores
        weights: Effort lever weights (defaults to 20 each)

    Returns:
        Score, or None when no effort lever carries weight
    """
    if weights is None:
        weights = DEFAULT_EFFORT_WEIGHTS
    return _finalize(weighted_lever_average(levers.effort_levers(), weights))
