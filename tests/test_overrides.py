"""Unit tests for override resolution in portfolio_engine/core/scoring/overrides.py.

Tests coverage:
- get_effective_* - per-field precedence of manual values over calculated ones
- has_manual_overrides() / get_override_status() - display helpers
- apply_override() / clear_overrides() - write path with required reason
"""

import pytest

from portfolio_engine.core.schemas_use_case import OverrideRequest, Quadrant
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
from portfolio_engine.core.scoring.types import ScoringConfig


# =============================================================================
# Read path
# =============================================================================


class TestEffectiveScores:
    def test_no_overrides_uses_calculated(self, make_use_case):
        uc = make_use_case(impact=4, effort=2)
        assert get_effective_impact_score(uc) == 4.0
        assert get_effective_effort_score(uc) == 2.0
        assert get_effective_quadrant(uc) == Quadrant.QUICK_WIN

    def test_manual_quadrant_keeps_calculated_scores(self, make_use_case):
        """A manual quadrant does not imply manual impact or effort."""
        uc = make_use_case(impact=1, effort=1, manual_quadrant="Strategic Bet")
        assert get_effective_quadrant(uc) == Quadrant.STRATEGIC_BET
        assert get_effective_impact_score(uc) == 1.0
        assert get_effective_effort_score(uc) == 1.0

    def test_manual_effort_reclassifies_quadrant(self, make_use_case):
        """Quadrant follows the effective scores, not the calculated quadrant.

        High impact with low effort (4.0 / 1.5) classifies as Quick Win under
        the quadrant rule in quadrant.py; see DESIGN.md "Decisions".
        """
        uc = make_use_case(impact=4, effort=4, manual_effort_score=1.5)

        assert score_use_case(uc).quadrant == Quadrant.STRATEGIC_BET
        assert get_effective_impact_score(uc) == 4.0
        assert get_effective_effort_score(uc) == 1.5
        assert get_effective_quadrant(uc) == Quadrant.QUICK_WIN

    def test_manual_impact_only(self, make_use_case):
        uc = make_use_case(impact=4, effort=4, manual_impact_score=2.0)
        assert get_effective_impact_score(uc) == 2.0
        assert get_effective_effort_score(uc) == 4.0
        assert get_effective_quadrant(uc) == Quadrant.WATCHLIST

    def test_manual_zero_score_is_honoured(self, make_use_case):
        uc = make_use_case(impact=4, manual_impact_score=0.0)
        assert get_effective_impact_score(uc) == 0.0

    def test_config_threshold_applies(self, make_use_case):
        uc = make_use_case(impact=4, effort=1)
        config = ScoringConfig(threshold=4.5)
        assert get_effective_quadrant(uc, config) == Quadrant.EXPERIMENTAL

    def test_config_weights_apply(self, make_use_case):
        uc = make_use_case(impact=2, effort=2)
        uc.levers.revenue_impact = 5
        config = ScoringConfig(impact_weights={"revenue_impact": 100})
        assert get_effective_impact_score(uc, config) == 5.0

    def test_unscorable_use_case_has_no_quadrant(self, make_use_case):
        uc = make_use_case()
        config = ScoringConfig(impact_weights={}, effort_weights={})
        assert get_effective_impact_score(uc, config) is None
        assert get_effective_quadrant(uc, config) is None

    def test_unscorable_use_case_keeps_manual_quadrant(self, make_use_case):
        uc = make_use_case(manual_quadrant=Quadrant.WATCHLIST)
        config = ScoringConfig(impact_weights={}, effort_weights={})
        assert get_effective_quadrant(uc, config) == Quadrant.WATCHLIST


class TestHasManualOverrides:
    def test_none_set(self, make_use_case):
        assert has_manual_overrides(make_use_case()) is False

    @pytest.mark.parametrize(
        "field,value",
        [
            ("manual_impact_score", 3.0),
            ("manual_effort_score", 2.0),
            ("manual_quadrant", "Watchlist"),
        ],
    )
    def test_any_field_set(self, make_use_case, field, value):
        assert has_manual_overrides(make_use_case(**{field: value})) is True

    def test_blank_quadrant_is_not_an_override(self, make_use_case):
        uc = make_use_case(manual_quadrant="")
        assert uc.manual_quadrant is None
        assert has_manual_overrides(uc) is False


class TestOverrideStatus:
    def test_reports_calculated_and_effective(self, make_use_case):
        uc = make_use_case(
            impact=4,
            effort=4,
            manual_effort_score=1.5,
            override_reason="Vendor platform already in place",
        )
        status = get_override_status(uc)

        assert status.has_overrides is True
        assert status.override_count == 1
        assert status.overridden_fields == ["manual_effort_score"]
        assert status.reason == "Vendor platform already in place"
        assert status.calculated_effort == 4.0
        assert status.calculated_quadrant == Quadrant.STRATEGIC_BET
        assert status.effective_effort == 1.5
        assert status.effective_quadrant == Quadrant.QUICK_WIN

    def test_no_overrides(self, make_use_case):
        status = get_override_status(make_use_case(impact=2, effort=2))
        assert status.has_overrides is False
        assert status.override_count == 0
        assert status.effective_quadrant == status.calculated_quadrant == Quadrant.EXPERIMENTAL


# =============================================================================
# Write path
# =============================================================================


class TestApplyOverride:
    def test_sets_values_and_reason(self, make_use_case):
        uc = make_use_case(impact=4, effort=4)
        updated = apply_override(
            uc, {"manual_quadrant": "Quick Win", "reason": "  Board priority  "}
        )

        assert updated.manual_quadrant == Quadrant.QUICK_WIN
        assert updated.override_reason == "Board priority"
        assert updated.levers == uc.levers

    def test_original_is_unchanged(self, make_use_case):
        uc = make_use_case()
        apply_override(uc, OverrideRequest(manual_impact_score=4.5, reason="Exec sponsor"))
        assert uc.manual_impact_score is None
        assert uc.override_reason is None

    def test_keeps_existing_manual_fields(self, make_use_case):
        uc = make_use_case(manual_impact_score=4.0, override_reason="First pass")
        updated = apply_override(uc, {"manual_effort_score": 2.0, "reason": "Second pass"})
        assert updated.manual_impact_score == 4.0
        assert updated.manual_effort_score == 2.0
        assert updated.override_reason == "Second pass"

    def test_missing_reason_rejected(self, make_use_case):
        with pytest.raises(OverrideValidationError):
            apply_override(make_use_case(), {"manual_impact_score": 4.0})

    def test_blank_reason_rejected(self, make_use_case):
        with pytest.raises(OverrideValidationError) as exc_info:
            apply_override(make_use_case(), {"manual_impact_score": 4.0, "reason": "   "})
        assert "reason cannot be empty" in str(exc_info.value)

    def test_no_values_rejected(self, make_use_case):
        with pytest.raises(OverrideValidationError) as exc_info:
            apply_override(make_use_case(), {"reason": "Nothing to change"})
        assert "at least one manual value" in str(exc_info.value)

    def test_out_of_range_score_rejected(self, make_use_case):
        with pytest.raises(OverrideValidationError):
            apply_override(make_use_case(), {"manual_impact_score": 7, "reason": "Too high"})


def test_clear_overrides(make_use_case):
    uc = make_use_case(
        manual_impact_score=4.0,
        manual_effort_score=2.0,
        manual_quadrant="Quick Win",
        override_reason="Workshop outcome",
    )
    cleared = clear_overrides(uc)

    assert has_manual_overrides(cleared) is False
    assert cleared.override_reason is None
    assert has_manual_overrides(uc) is True
