"""Pydantic models and defaults for impact/effort scoring."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from portfolio_engine.core.logging import get_logger
from portfolio_engine.core.schemas_use_case import (
    EFFORT_LEVERS,
    IMPACT_LEVERS,
    Quadrant,
)

logger = get_logger(__name__)


# =============================================================================
# Defaults - each weight map is a percentage split expected to sum to 100
# =============================================================================

DEFAULT_IMPACT_WEIGHTS: dict[str, float] = {name: 20 for name in IMPACT_LEVERS}
DEFAULT_EFFORT_WEIGHTS: dict[str, float] = {name: 20 for name in EFFORT_LEVERS}

DEFAULT_THRESHOLD = 2.5
SCORE_PRECISION = 1
MIN_SCORE = 0.0
MAX_SCORE = 5.0


def _check_weight_map(weights: dict[str, float], known: tuple[str, ...], axis: str) -> dict[str, float]:
    negative = [name for name, w in weights.items() if w < 0]
    if negative:
        raise ValueError(f"{axis} weights must be non-negative: {', '.join(negative)}")

    unknown = [name for name in weights if name not in known]
    if unknown:
        logger.warning(f"{axis} weights name unknown levers (ignored): {', '.join(unknown)}")

    total = sum(weights.values())
    if abs(total - 100) > 1e-9:
        logger.warning(f"{axis} weights sum to {total}, expected 100")

    return weights


class ScoringConfig(BaseModel):
    """Weights and threshold threaded through every scoring call."""

    impact_weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_IMPACT_WEIGHTS),
        description="Impact lever -> weight (percent)",
    )
    effort_weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_EFFORT_WEIGHTS),
        description="Effort lever -> weight (percent)",
    )
    threshold: float = Field(
        default=DEFAULT_THRESHOLD, ge=MIN_SCORE, le=MAX_SCORE, description="Quadrant midpoint"
    )

    @field_validator("impact_weights")
    @classmethod
    def impact_weights_valid(cls, v: dict[str, float]) -> dict[str, float]:
        return _check_weight_map(v, IMPACT_LEVERS, "Impact")

    @field_validator("effort_weights")
    @classmethod
    def effort_weights_valid(cls, v: dict[str, float]) -> dict[str, float]:
        return _check_weight_map(v, EFFORT_LEVERS, "Effort")

    @classmethod
    def from_metadata(cls, metadata: Optional[dict[str, Any]]) -> "ScoringConfig":
        """
        Build a config from the metadata store's scoring model.

        Expected shape::

            {
                "scoring_model": {
                    "business_value": {"revenue_impact": 30, ...},
                    "feasibility": {"data_readiness": 25, ...},
                },
                "scoring_threshold": 2.5,
            }

        Each missing piece falls back to its default.
        """
        metadata = metadata or {}
        scoring_model = metadata.get("scoring_model") or {}

        kwargs: dict[str, Any] = {}
        if scoring_model.get("business_value"):
            kwargs["impact_weights"] = scoring_model["business_value"]
        if scoring_model.get("feasibility"):
            kwargs["effort_weights"] = scoring_model["feasibility"]
        if metadata.get("scoring_threshold") is not None:
            kwargs["threshold"] = metadata["scoring_threshold"]

        return cls(**kwargs)

    @classmethod
    def from_settings(cls, settings=None) -> "ScoringConfig":
        """Default weights with the threshold taken from environment settings."""
        if settings is None:
            from portfolio_engine.core.config import get_settings

            settings = get_settings()
        return cls(threshold=settings.SCORING_THRESHOLD)


class UseCaseScoring(BaseModel):
    """Calculated scores for a use case, ignoring any override."""

    impact_score: Optional[float] = Field(None, description="None when no lever carries weight")
    effort_score: Optional[float] = Field(None, description="None when no lever carries weight")
    quadrant: Optional[Quadrant] = None


class OverrideStatus(BaseModel):
    """Calculated vs effective values for display and audit."""

    has_overrides: bool
    override_count: int = 0
    overridden_fields: list[str] = Field(default_factory=list)
    reason: Optional[str] = None

    calculated_impact: Optional[float] = None
    calculated_effort: Optional[float] = None
    calculated_quadrant: Optional[Quadrant] = None

    effective_impact: Optional[float] = None
    effective_effort: Optional[float] = None
    effective_quadrant: Optional[Quadrant] = None
