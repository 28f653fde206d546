"""Override resolution.

Manual values supersede calculated ones field by field. A use case may carry
a manual quadrant while relying on calculated impact and effort, or the
reverse; nothing requires the three manual fields to be set together.

When no manual quadrant is set, the quadrant is always classified from the
effective impact and effort, never from a stored calculated quadrant.
"""

import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from portfolio_engine.core.logging import get_logger, log_with_context
from portfolio_engine.core.schemas_use_case import OverrideRequest, Quadrant, UseCase
from portfolio_engine.core.scoring.levers import compute_effort_score, compute_impact_score
from portfolio_engine.core.scoring.quadrant import classify_quadrant
from portfolio_engine.core.scoring.types import OverrideStatus, ScoringConfig, UseCaseScoring

logger = get_logger(__name__)

OVERRIDE_FIELDS = ("manual_impact_score", "manual_effort_score", "manual_quadrant")


class OverrideValidationError(Exception):
    """Raised when an override is written without a reason or a value."""


# =============================================================================
# Read path
# =============================================================================


def score_use_case(use_case: UseCase, config: Optional[ScoringConfig] = None) -> UseCaseScoring:
    """Calculated impact, effort and quadrant, ignoring overrides."""
    config = config or ScoringConfig()
    impact = compute_impact_score(use_case.levers, config.impact_weights)
    effort = compute_effort_score(use_case.levers, config.effort_weights)

    quadrant = None
    if impact is not None and effort is not None:
        quadrant = classify_quadrant(impact, effort, config.threshold)

    return UseCaseScoring(impact_score=impact, effort_score=effort, quadrant=quadrant)


def get_effective_impact_score(
    use_case: UseCase, config: Optional[ScoringConfig] = None
) -> Optional[float]:
    """Manual impact if set, else the calculated impact."""
    if use_case.manual_impact_score is not None:
        return use_case.manual_impact_score
    config = config or ScoringConfig()
    return compute_impact_score(use_case.levers, config.impact_weights)


def get_effective_effort_score(
    use_case: UseCase, config: Optional[ScoringConfig] = None
) -> Optional[float]:
    """Manual effort if set, else the calculated effort."""
    if use_case.manual_effort_score is not None:
        return use_case.manual_effort_score
    config = config or ScoringConfig()
    return compute_effort_score(use_case.levers, config.effort_weights)


def get_effective_quadrant(
    use_case: UseCase, config: Optional[ScoringConfig] = None
) -> Optional[Quadrant]:
    """
    Manual quadrant if set, else classified from the effective scores.

    Returns None only when there is no manual quadrant and one of the
    effective scores cannot be computed (no weighted levers).
    """
    if use_case.manual_quadrant is not None:
        return use_case.manual_quadrant

    config = config or ScoringConfig()
    impact = get_effective_impact_score(use_case, config)
    effort = get_effective_effort_score(use_case, config)
    if impact is None or effort is None:
        return None

    return classify_quadrant(impact, effort, config.threshold)


def _overridden_fields(use_case: UseCase) -> list[str]:
    return [name for name in OVERRIDE_FIELDS if getattr(use_case, name) is not None]


def has_manual_overrides(use_case: UseCase) -> bool:
    """True iff any manual field is set."""
    return bool(_overridden_fields(use_case))


def get_override_status(
    use_case: UseCase, config: Optional[ScoringConfig] = None
) -> OverrideStatus:
    """Side-by-side calculated and effective values for display."""
    config = config or ScoringConfig()
    calculated = score_use_case(use_case, config)
    overridden = _overridden_fields(use_case)

    return OverrideStatus(
        has_overrides=bool(overridden),
        override_count=len(overridden),
        overridden_fields=overridden,
        reason=use_case.override_reason,
        calculated_impact=calculated.impact_score,
        calculated_effort=calculated.effort_score,
        calculated_quadrant=calculated.quadrant,
        effective_impact=get_effective_impact_score(use_case, config),
        effective_effort=get_effective_effort_score(use_case, config),
        effective_quadrant=get_effective_quadrant(use_case, config),
    )


# =============================================================================
# Write path
# =============================================================================


def apply_override(
    use_case: UseCase, request: Union[OverrideRequest, dict[str, Any]]
) -> UseCase:
    """
    Return a copy of the use case with the requested manual values set.

    Fields absent from the request keep their current manual value. Lever
    scores are never touched.

    Raises:
        OverrideValidationError: If the request has no reason or no value
    """
    if not isinstance(request, OverrideRequest):
        try:
            request = OverrideRequest.model_validate(request)
        except ValidationError as e:
            raise OverrideValidationError(str(e)) from e

    update: dict[str, Any] = {"override_reason": request.reason}
    for name in OVERRIDE_FIELDS:
        value = getattr(request, name)
        if value is not None:
            update[name] = value

    log_with_context(
        logger,
        logging.INFO,
        "Override applied",
        use_case_id=use_case.id,
        fields=",".join(k for k in update if k != "override_reason"),
    )
    return use_case.model_copy(update=update)


def clear_overrides(use_case: UseCase) -> UseCase:
    """Return a copy with every manual value and the reason cleared."""
    update: dict[str, Any] = {name: None for name in OVERRIDE_FIELDS}
    update["override_reason"] = None
    log_with_context(logger, logging.INFO, "Overrides cleared", use_case_id=use_case.id)
    return use_case.model_copy(update=update)
