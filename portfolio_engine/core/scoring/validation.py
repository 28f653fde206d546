"""Lever score validation for the write path.

Scoring functions assume clean input. Callers run these checks before a
record is stored or scored.
"""

from typing import Literal

from portfolio_engine.core.schemas_use_case import ALL_LEVERS, LeverScores

LeverScorePolicy = Literal["strict", "relaxed"]

POLICY_RANGES: dict[str, tuple[int, int]] = {
    "strict": (1, 5),
    "relaxed": (0, 5),
}


class LeverScoreValidationError(Exception):
    """Raised when lever scores fall outside the active policy range."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def validate_lever_scores(levers: LeverScores, policy: LeverScorePolicy = "strict") -> list[str]:
    """
    Check every rated lever against the policy range.

    Unrated levers (None) are not errors.

    Returns:
        Human-readable error messages, empty when valid
    """
    low, high = POLICY_RANGES[policy]
    errors: list[str] = []

    for name in ALL_LEVERS:
        value = getattr(levers, name)
        if value is not None and not (low <= value <= high):
            errors.append(f"{name} must be between {low} and {high}")

    return errors


def ensure_valid_lever_scores(levers: LeverScores, policy: LeverScorePolicy = "strict") -> None:
    """Raise LeverScoreValidationError if any lever is out of range."""
    errors = validate_lever_scores(levers, policy)
    if errors:
        raise LeverScoreValidationError(errors)
