"""Impact/effort scoring.

Provides the prioritization pipeline for a use case:
- Lever aggregation: five weighted levers -> impact, five -> effort (0-5)
- Quadrant classification against a configurable midpoint
- Per-field manual override resolution

Usage:
    from portfolio_engine.core.scoring import ScoringConfig, get_override_status

    status = get_override_status(use_case, ScoringConfig.from_metadata(metadata))
    print(f"{status.effective_quadrant} ({status.effective_impact}/{status.effective_effort})")
"""

from portfolio_engine.core.scoring.levers import (
    compute_effort_score,
    compute_impact_score,
    format_score,
    is_score_at_or_above,
    round_score,
    weighted_lever_average,
)
from portfolio_engine.core.scoring.overrides import (
    OverrideValidationError,
    apply_override,
    clear_overrides,
    get_effective_effort_score,
    get_effective_impact_score,
    get_effective_quadrant,
    get_override_status,
    has_manual_overrides,
    score_use_case,
)
from portfolio_engine.core.scoring.quadrant import classify_quadrant
from portfolio_engine.core.scoring.types import (
    DEFAULT_EFFORT_WEIGHTS,
    DEFAULT_IMPACT_WEIGHTS,
    DEFAULT_THRESHOLD,
    OverrideStatus,
    ScoringConfig,
    UseCaseScoring,
)
from portfolio_engine.core.scoring.validation import (
    LeverScoreValidationError,
    ensure_valid_lever_scores,
    validate_lever_scores,
)

__all__ = [
    "compute_impact_score",
    "compute_effort_score",
    "weighted_lever_average",
    "round_score",
    "format_score",
    "is_score_at_or_above",
    "classify_quadrant",
    "score_use_case",
    "get_effective_impact_score",
    "get_effective_effort_score",
    "get_effective_quadrant",
    "has_manual_overrides",
    "get_override_status",
    "apply_override",
    "clear_overrides",
    "OverrideValidationError",
    "validate_lever_scores",
    "ensure_valid_lever_scores",
    "LeverScoreValidationError",
    "ScoringConfig",
    "UseCaseScoring",
    "OverrideStatus",
    "DEFAULT_IMPACT_WEIGHTS",
    "DEFAULT_EFFORT_WEIGHTS",
    "DEFAULT_THRESHOLD",
]
