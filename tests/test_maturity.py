"""Unit tests for derive_maturity_level() in portfolio_engine/core/value/maturity.py."""

from portfolio_engine.core.schemas_value import (
    MaturityCondition,
    MaturityLevel,
    MaturityRule,
    ValueRange,
)
from portfolio_engine.core.value.library import DEFAULT_KPI_LIBRARY
from portfolio_engine.core.value.maturity import condition_holds, derive_maturity_level

COST_RULES = DEFAULT_KPI_LIBRARY["cost_per_transaction"].maturity_rules


def _rule(level, conditions, low, high, confidence="medium"):
    return MaturityRule(
        level=level,
        conditions={name: MaturityCondition(**bounds) for name, bounds in conditions.items()},
        range=ValueRange(min=low, max=high),
        confidence=confidence,
    )


class TestDeriveMaturityLevel:
    def test_advanced_match_reports_conditions(self):
        result = derive_maturity_level({"data_readiness": 4, "change_impact": 2}, COST_RULES)

        assert result.level == MaturityLevel.ADVANCED
        assert result.range == ValueRange(min=25, max=35)
        assert result.confidence == "high"
        assert set(result.matched_conditions) == {"data_readiness", "change_impact"}
        assert result.matched_conditions["data_readiness"].actual == 4
        assert result.matched_conditions["change_impact"].required.max == 2

    def test_developing_when_advanced_fails(self):
        result = derive_maturity_level({"data_readiness": 4, "change_impact": 3}, COST_RULES)
        assert result.level == MaturityLevel.DEVELOPING
        assert result.range == ValueRange(min=15, max=25)

    def test_first_match_wins(self):
        """Rule order decides, not rule level."""
        result = derive_maturity_level(
            {"data_readiness": 5, "change_impact": 1}, list(reversed(COST_RULES))
        )
        assert result.level == MaturityLevel.FOUNDATIONAL

    def test_missing_score_fails_condition(self):
        result = derive_maturity_level({"change_impact": 1}, COST_RULES)
        assert result.level == MaturityLevel.FOUNDATIONAL
        assert result.matched_conditions == {}

    def test_none_score_fails_condition(self):
        result = derive_maturity_level({"data_readiness": None, "change_impact": 1}, COST_RULES)
        assert result.level == MaturityLevel.FOUNDATIONAL

    def test_falls_back_to_foundational_rule(self):
        rules = [
            _rule(MaturityLevel.ADVANCED, {"data_readiness": {"min": 4}}, 20, 30),
            _rule(MaturityLevel.FOUNDATIONAL, {"data_readiness": {"min": 5}}, 1, 2, "low"),
        ]
        result = derive_maturity_level({"data_readiness": 3}, rules)

        assert result.level == MaturityLevel.FOUNDATIONAL
        assert result.range == ValueRange(min=1, max=2)
        assert result.matched_conditions == {}

    def test_default_range_without_foundational_rule(self):
        rules = [_rule(MaturityLevel.ADVANCED, {"data_readiness": {"min": 4}}, 20, 30)]
        result = derive_maturity_level({"data_readiness": 1}, rules)

        assert result.level == MaturityLevel.FOUNDATIONAL
        assert result.range == ValueRange(min=0, max=10)
        assert result.confidence == "low"

    def test_no_rules(self):
        result = derive_maturity_level({}, [])
        assert result.range == ValueRange(min=0, max=10)


class TestConditionHolds:
    def test_bounds_are_inclusive(self):
        assert condition_holds(3, MaturityCondition(min=3)) is True
        assert condition_holds(2, MaturityCondition(max=2)) is True
        assert condition_holds(3, MaturityCondition(min=3, max=3)) is True

    def test_outside_bounds(self):
        assert condition_holds(2, MaturityCondition(min=3)) is False
        assert condition_holds(4, MaturityCondition(max=3)) is False

    def test_unbounded_condition(self):
        assert condition_holds(0, MaturityCondition()) is True

    def test_none_never_holds(self):
        assert condition_holds(None, MaturityCondition()) is False
