"""Pydantic schemas for use-case records and manual overrides.

These models map to the plain records the use-case store supplies. Every
lever and override field is explicitly optional so that the per-field
fallback rules in ``portfolio_engine.core.scoring.overrides`` can be checked
without presence tests on loose dicts.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from portfolio_engine.core.schemas_value import ValueRealization


class Quadrant(str, Enum):
    """Impact vs effort prioritization label."""

    QUICK_WIN = "Quick Win"
    STRATEGIC_BET = "Strategic Bet"
    EXPERIMENTAL = "Experimental"
    WATCHLIST = "Watchlist"


IMPACT_LEVERS: tuple[str, ...] = (
    "revenue_impact",
    "cost_savings",
    "risk_reduction",
    "broker_partner_experience",
    "strategic_fit",
)

EFFORT_LEVERS: tuple[str, ...] = (
    "data_readiness",
    "technical_complexity",
    "change_impact",
    "model_risk",
    "adoption_readiness",
)

ALL_LEVERS: tuple[str, ...] = IMPACT_LEVERS + EFFORT_LEVERS


class LeverScores(BaseModel):
    """The ten 1-5 ratings that drive impact and effort.

    The model admits the relaxed [0,5] range; the strict [1,5] policy is
    applied by ``validate_lever_scores`` on the write path.
    """

    # Impact levers
    revenue_impact: Optional[int] = Field(None, ge=0, le=5)
    cost_savings: Optional[int] = Field(None, ge=0, le=5)
    risk_reduction: Optional[int] = Field(None, ge=0, le=5)
    broker_partner_experience: Optional[int] = Field(None, ge=0, le=5)
    strategic_fit: Optional[int] = Field(None, ge=0, le=5)

    # Effort levers
    data_readiness: Optional[int] = Field(None, ge=0, le=5)
    technical_complexity: Optional[int] = Field(None, ge=0, le=5)
    change_impact: Optional[int] = Field(None, ge=0, le=5)
    model_risk: Optional[int] = Field(None, ge=0, le=5)
    adoption_readiness: Optional[int] = Field(None, ge=0, le=5)

    def impact_levers(self) -> dict[str, Optional[int]]:
        return {name: getattr(self, name) for name in IMPACT_LEVERS}

    def effort_levers(self) -> dict[str, Optional[int]]:
        return {name: getattr(self, name) for name in EFFORT_LEVERS}


class UseCase(BaseModel):
    """A use case as consumed by scoring and value estimation."""

    id: Optional[str] = None
    title: str = ""
    levers: LeverScores = Field(default_factory=LeverScores)
    processes: list[str] = Field(
        default_factory=list, description="Business process tags"
    )

    # Manual overrides, resolved per field
    manual_impact_score: Optional[float] = Field(None, ge=0, le=5)
    manual_effort_score: Optional[float] = Field(None, ge=0, le=5)
    manual_quadrant: Optional[Quadrant] = None
    override_reason: Optional[str] = None

    # Reporting context
    phase_id: Optional[str] = Field(None, description="Derived delivery phase id")
    value_realization: Optional[ValueRealization] = None

    @field_validator("manual_quadrant", mode="before")
    @classmethod
    def blank_quadrant_is_none(cls, v):
        """Treat an empty stored quadrant as no override."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class OverrideRequest(BaseModel):
    """A user-initiated manual override.

    At least one manual value is required, and every override must carry a
    reason so the divergence from calculated scores stays auditable.
    """

    manual_impact_score: Optional[float] = Field(None, ge=0, le=5)
    manual_effort_score: Optional[float] = Field(None, ge=0, le=5)
    manual_quadrant: Optional[Quadrant] = None
    reason: str = Field(..., description="Why the calculated value is superseded")

    @field_validator("reason")
    @classmethod
    def reason_not_empty(cls, v: str) -> str:
        """Ensure reason is not just whitespace."""
        if not v or not v.strip():
            raise ValueError("Override reason cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def has_a_value(self) -> "OverrideRequest":
        if (
            self.manual_impact_score is None
            and self.manual_effort_score is None
            and self.manual_quadrant is None
        ):
            raise ValueError("Override must set at least one manual value")
        return self
