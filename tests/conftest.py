"""Pytest configuration and fixtures."""

import os

import pytest

from portfolio_engine.core.schemas_use_case import LeverScores, UseCase


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["ENGINE_ENV"] = "test"


@pytest.fixture
def make_levers():
    """Build LeverScores with every impact lever and every effort lever set."""

    def _make(impact: int = 3, effort: int = 3, **overrides) -> LeverScores:
        values = {
            "revenue_impact": impact,
            "cost_savings": impact,
            "risk_reduction": impact,
            "broker_partner_experience": impact,
            "strategic_fit": impact,
            "data_readiness": effort,
            "technical_complexity": effort,
            "change_impact": effort,
            "model_risk": effort,
            "adoption_readiness": effort,
        }
        values.update(overrides)
        return LeverScores(**values)

    return _make


@pytest.fixture
def make_use_case(make_levers):
    """Build a UseCase from uniform impact/effort levers plus field overrides."""

    def _make(impact: int = 3, effort: int = 3, **fields) -> UseCase:
        fields.setdefault("id", "uc-1")
        fields.setdefault("title", "Claims triage assistant")
        return UseCase(levers=make_levers(impact, effort), **fields)

    return _make
