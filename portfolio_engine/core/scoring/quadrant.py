"""Quadrant classification from impact and effort.

A score equal to the threshold counts as high on its axis:

    impact >= t and effort <  t  -> Quick Win
    impact >= t and effort >= t  -> Strategic Bet
    impact <  t and effort <  t  -> Experimental
    impact <  t and effort >= t  -> Watchlist
"""

from portfolio_engine.core.schemas_use_case import Quadrant
from portfolio_engine.core.scoring.types import DEFAULT_THRESHOLD


def classify_quadrant(
    impact_score: float,
    effort_score: float,
    threshold: float = DEFAULT_THRESHOLD,
) -> Quadrant:
    """Map an (impact, effort) pair to its quadrant."""
    high_impact = impact_score >= threshold
    high_effort = effort_score >= threshold

    if high_impact and not high_effort:
        return Quadrant.QUICK_WIN
    if high_impact:
        return Quadrant.STRATEGIC_BET
    if not high_effort:
        return Quadrant.EXPERIMENTAL
    return Quadrant.WATCHLIST
