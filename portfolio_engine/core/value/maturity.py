"""KPI maturity derivation.

Rules are evaluated in list order and the first rule whose conditions all
hold wins, so callers order rules from most to least advanced. A missing
score fails any rule that names it.
"""

from typing import Mapping, Optional

from portfolio_engine.core.logging import get_logger
from portfolio_engine.core.schemas_value import (
    MatchedCondition,
    MaturityCondition,
    MaturityDerivationResult,
    MaturityLevel,
    MaturityRule,
    ValueRange,
)

logger = get_logger(__name__)

DEFAULT_FOUNDATIONAL_RANGE = ValueRange(min=0, max=10)


def condition_holds(score: Optional[float], condition: MaturityCondition) -> bool:
    """True when the score is present and within the condition's bounds."""
    if score is None:
        return False
    if condition.min is not None and score < condition.min:
        return False
    if condition.max is not None and score > condition.max:
        return False
    return True


def _match_rule(
    scores: Mapping[str, Optional[float]], rule: MaturityRule
) -> Optional[dict[str, MatchedCondition]]:
    matched: dict[str, MatchedCondition] = {}
    for score_name, condition in rule.conditions.items():
        score = scores.get(score_name)
        if not condition_holds(score, condition):
            return None
        matched[score_name] = MatchedCondition(actual=score, required=condition)
    return matched


def derive_maturity_level(
    scores: Mapping[str, Optional[float]],
    maturity_rules: list[MaturityRule],
) -> MaturityDerivationResult:
    """
    Derive the maturity tier for one KPI.

    Args:
        scores: Lever name -> score (None or absent means unrated)
        maturity_rules: Rules ordered most advanced first

    Returns:
        The first satisfied rule's tier, else the foundational rule's tier,
        else a low-confidence foundational default of 0-10
    """
    for rule in maturity_rules:
        matched = _match_rule(scores, rule)
        if matched is not None:
            logger.debug(f"Maturity rule matched: {rule.level.value} ({len(matched)} conditions)")
            return MaturityDerivationResult(
                level=rule.level,
                range=rule.range,
                confidence=rule.confidence,
                matched_conditions=matched,
            )

    foundational = next(
        (r for r in maturity_rules if r.level == MaturityLevel.FOUNDATIONAL), None
    )
    if foundational is not None:
        return MaturityDerivationResult(
            level=MaturityLevel.FOUNDATIONAL,
            range=foundational.range,
            confidence=foundational.confidence,
        )

    logger.debug("No maturity rule matched and no foundational rule, using default range")
    return MaturityDerivationResult(
        level=MaturityLevel.FOUNDATIONAL,
        range=DEFAULT_FOUNDATIONAL_RANGE,
        confidence="low",
    )
