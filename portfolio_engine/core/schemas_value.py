"""Pydantic schemas for KPI reference data and value realization.

KPI definitions, maturity rules and industry benchmarks are reference data
supplied by the metadata store. Value estimates and portfolio summaries are
derived on demand and never authoritative.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class MaturityLevel(str, Enum):
    """Readiness tier a use case reaches for a given KPI."""

    ADVANCED = "advanced"
    DEVELOPING = "developing"
    FOUNDATIONAL = "foundational"


Confidence = Literal["high", "medium", "low"]


# =============================================================================
# Reference data
# =============================================================================


class ValueRange(BaseModel):
    """Inclusive numeric range (percent, hours, points or currency)."""

    min: float = Field(..., description="Lower bound")
    max: float = Field(..., description="Upper bound")

    @model_validator(mode="after")
    def check_order(self) -> "ValueRange":
        if self.min > self.max:
            raise ValueError(f"Range min {self.min} exceeds max {self.max}")
        return self


class MaturityCondition(BaseModel):
    """Optional bounds a single lever score must satisfy."""

    min: Optional[float] = Field(None, description="Score must be >= min")
    max: Optional[float] = Field(None, description="Score must be <= max")


class MaturityRule(BaseModel):
    """A maturity tier and the lever conditions that unlock it.

    An empty ``conditions`` map always matches, so it acts as the fallback.
    """

    level: MaturityLevel
    conditions: dict[str, MaturityCondition] = Field(
        default_factory=dict, description="Lever name -> bounds"
    )
    range: ValueRange = Field(..., description="Expected improvement for this tier")
    confidence: Confidence


class IndustryBenchmark(BaseModel):
    """Reference baseline for a KPI within a single business process."""

    baseline_value: float
    baseline_unit: str = Field(..., description="e.g. 'GBP', 'minutes', 'hours/FTE/month'")
    baseline_source: str = ""
    improvement_range: ValueRange
    improvement_unit: str = "%"
    typical_timeline: str = ""
    maturity_tiers: dict[MaturityLevel, ValueRange] = Field(
        default_factory=dict, description="Per-tier improvement range"
    )


class KpiDefinition(BaseModel):
    """A benchmarked business metric and the processes it applies to."""

    id: str
    name: str
    description: str = ""
    unit: str
    direction: Literal["increase", "decrease"]
    applicable_processes: list[str] = Field(default_factory=list)
    industry_benchmarks: dict[str, IndustryBenchmark] = Field(
        default_factory=dict, description="Canonical process name -> benchmark"
    )
    maturity_rules: list[MaturityRule] = Field(
        default_factory=list, description="Ordered most advanced first"
    )


# =============================================================================
# Derived results
# =============================================================================


class MatchedCondition(BaseModel):
    """A lever condition that held, with the score that satisfied it."""

    actual: float
    required: MaturityCondition


class MaturityDerivationResult(BaseModel):
    """Outcome of evaluating a KPI's maturity rules against lever scores."""

    level: MaturityLevel
    range: ValueRange
    confidence: Confidence
    matched_conditions: dict[str, MatchedCondition] = Field(default_factory=dict)


class ApplicableKpi(BaseModel):
    """A KPI that applies to at least one of a use case's processes."""

    kpi_id: str
    kpi: KpiDefinition
    matched_processes: list[str] = Field(default_factory=list)
    industry_benchmark: Optional[IndustryBenchmark] = None
    benchmark_process: Optional[str] = None


class ValueEstimate(BaseModel):
    """Estimated annual value of one KPI for one use case."""

    kpi_id: str
    kpi_name: str
    maturity_level: MaturityLevel
    expected_range: ValueRange
    confidence: Confidence
    benchmark: Optional[IndustryBenchmark] = None
    benchmark_process: Optional[str] = None
    estimated_annual_value: Optional[ValueRange] = Field(
        None, description="Whole currency units, min and max converted independently"
    )
    currency: str = "GBP"


class TotalEstimatedValue(BaseModel):
    """Sum of per-KPI estimated annual values."""

    min: float = 0
    max: float = 0
    currency: str = "GBP"


# =============================================================================
# Value realization (tracked and estimated)
# =============================================================================


class InvestmentData(BaseModel):
    """Tracked investment entered for a use case."""

    initial_investment: float = Field(..., ge=0)
    ongoing_monthly_cost: float = Field(default=0, ge=0)
    currency: str = "GBP"


class CalculatedMetrics(BaseModel):
    """Tracked metrics refreshed from actuals."""

    current_roi: Optional[float] = None
    projected_breakeven_month: Optional[str] = Field(
        None, description="ISO month, e.g. '2027-03'"
    )
    cumulative_value_gbp: Optional[float] = None
    last_calculated: Optional[datetime] = None


class ValueRealization(BaseModel):
    """Value block attached to a use case.

    A block with ``investment`` is tracked. A block with only KPI estimates
    is estimated and only contributes to portfolio totals.
    """

    selected_kpis: list[str] = Field(default_factory=list)
    investment: Optional[InvestmentData] = None
    calculated_metrics: CalculatedMetrics = Field(default_factory=CalculatedMetrics)
    derived: bool = False
    derived_at: Optional[datetime] = None
    kpi_estimates: list[ValueEstimate] = Field(default_factory=list)
    total_estimated_value: Optional[TotalEstimatedValue] = None

    def is_tracked(self) -> bool:
        return self.investment is not None


class ValueEstimateOptions(BaseModel):
    """Parameters for converting improvement ranges into annual value."""

    volume_multiplier: float = Field(default=1000, gt=0)
    hourly_rate: Optional[float] = Field(
        None, gt=0, description="Defaults to the currency's standard rate"
    )
    currency_code: str = "GBP"

    @classmethod
    def from_settings(cls, settings=None) -> "ValueEstimateOptions":
        """Build options from environment settings."""
        if settings is None:
            from portfolio_engine.core.config import get_settings

            settings = get_settings()
        return cls(
            volume_multiplier=settings.VALUE_VOLUME_MULTIPLIER,
            hourly_rate=settings.DEFAULT_HOURLY_RATE,
            currency_code=settings.DEFAULT_CURRENCY,
        )


# =============================================================================
# Portfolio summary
# =============================================================================


class BreakdownBucket(BaseModel):
    """Tracked investment and value for one phase or quadrant."""

    investment: float = 0
    value: float = 0
    count: int = 0


class PortfolioValueSummary(BaseModel):
    """Aggregate value across a set of use cases."""

    total_investment: float = 0
    cumulative_value: float = 0
    portfolio_roi: Optional[float] = Field(
        None, description="Percent; None when total_investment is 0"
    )
    avg_breakeven_months: Optional[int] = None
    use_cases_with_value: int = 0
    tracked_count: int = 0
    estimated_count: int = 0
    by_phase: dict[str, BreakdownBucket] = Field(default_factory=dict)
    by_quadrant: dict[str, BreakdownBucket] = Field(default_factory=dict)
