"""Portfolio value aggregation and tracked-value metrics.

Tracked use cases (with explicit investment) feed totals, phase and quadrant
breakdowns and the breakeven average. Estimated-only use cases feed the
cumulative value and the count of use cases with value, and nothing else:
attributing a rough estimate to a phase or quadrant would overstate its
confidence.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

from portfolio_engine.core.logging import get_logger
from portfolio_engine.core.metrics import track_performance
from portfolio_engine.core.schemas_use_case import UseCase
from portfolio_engine.core.schemas_value import (
    BreakdownBucket,
    CalculatedMetrics,
    InvestmentData,
    PortfolioValueSummary,
    ValueRealization,
)
from portfolio_engine.core.scoring.levers import round_half_up
from portfolio_engine.core.scoring.overrides import get_effective_quadrant
from portfolio_engine.core.scoring.types import ScoringConfig

logger = get_logger(__name__)

UNKNOWN_BUCKET = "unknown"


# =============================================================================
# Tracked-value metrics
# =============================================================================


def calculate_total_investment(investment: InvestmentData) -> float:
    """First-year investment: initial plus twelve months of running cost."""
    return investment.initial_investment + investment.ongoing_monthly_cost * 12


def calculate_roi(cumulative_value: float, total_investment: float) -> Optional[float]:
    """ROI percent, or None when there is no investment to divide by."""
    if total_investment <= 0:
        return None
    return (cumulative_value - total_investment) / total_investment * 100


def calculate_breakeven_month(
    total_investment: float,
    monthly_value: float,
    start: Optional[datetime] = None,
) -> Optional[str]:
    """
    ISO month ('YYYY-MM') when cumulative monthly value covers the investment.

    Returns None when monthly value is not positive.
    """
    if monthly_value <= 0:
        return None

    start = start or datetime.now(timezone.utc)
    months = -(-total_investment // monthly_value)  # ceil
    breakeven = start + relativedelta(months=int(months))
    return breakeven.strftime("%Y-%m")


def months_until(month: str, now: datetime) -> Optional[int]:
    """Whole calendar months from ``now`` to an ISO month/date, None if unparseable."""
    try:
        target = dateutil_parser.isoparse(month)
    except (ValueError, TypeError):
        logger.warning(f"Unparseable breakeven month: {month!r}")
        return None
    return (target.year - now.year) * 12 + (target.month - now.month)


def update_calculated_metrics(
    value_realization: ValueRealization,
    cumulative_value: float,
    monthly_value: float,
    now: Optional[datetime] = None,
) -> ValueRealization:
    """Refresh ROI, breakeven and cumulative value on a tracked block."""
    now = now or datetime.now(timezone.utc)

    if value_realization.investment is None:
        metrics = CalculatedMetrics(cumulative_value_gbp=cumulative_value, last_calculated=now)
    else:
        total_investment = calculate_total_investment(value_realization.investment)
        metrics = CalculatedMetrics(
            current_roi=calculate_roi(cumulative_value, total_investment),
            projected_breakeven_month=calculate_breakeven_month(
                total_investment, monthly_value, now
            ),
            cumulative_value_gbp=cumulative_value,
            last_calculated=now,
        )

    return value_realization.model_copy(update={"calculated_metrics": metrics})


# =============================================================================
# Aggregation
# =============================================================================


def _estimated_value(vr: ValueRealization) -> float:
    if vr.total_estimated_value is not None:
        total = vr.total_estimated_value.max or vr.total_estimated_value.min
        if total:
            return total
    return sum(
        e.estimated_annual_value.max
        for e in vr.kpi_estimates
        if e.estimated_annual_value is not None
    )


def _add_to_bucket(buckets: dict[str, BreakdownBucket], key: str, investment: float, value: float):
    bucket = buckets.setdefault(key, BreakdownBucket())
    bucket.investment += investment
    bucket.value += value
    bucket.count += 1


def aggregate_portfolio_value(
    use_cases: Iterable[UseCase],
    config: Optional[ScoringConfig] = None,
    now: Optional[datetime] = None,
) -> PortfolioValueSummary:
    """
    Summarize investment and value across use cases.

    Args:
        use_cases: Use cases with optional value blocks
        config: Scoring config for resolving effective quadrants
        now: Reference time for breakeven months (defaults to now, UTC)

    Returns:
        PortfolioValueSummary; ROI and breakeven average are None when undefined
    """
    config = config or ScoringConfig()
    now = now or datetime.now(timezone.utc)
    summary = PortfolioValueSummary()

    breakeven_total = 0
    breakeven_count = 0

    with track_performance("Portfolio aggregation") as perf:
        for use_case in use_cases:
            perf.record_use_case()
            vr = use_case.value_realization
            if vr is None:
                perf.record_skipped()
                continue

            if not vr.is_tracked():
                value = _estimated_value(vr)
                if value > 0:
                    summary.cumulative_value += value
                    summary.use_cases_with_value += 1
                    summary.estimated_count += 1
                    perf.record_estimated()
                else:
                    perf.record_skipped()
                continue

            investment = calculate_total_investment(vr.investment)
            value = vr.calculated_metrics.cumulative_value_gbp or 0

            summary.total_investment += investment
            summary.cumulative_value += value
            summary.use_cases_with_value += 1
            summary.tracked_count += 1
            perf.record_tracked()

            quadrant = get_effective_quadrant(use_case, config)
            _add_to_bucket(summary.by_phase, use_case.phase_id or UNKNOWN_BUCKET, investment, value)
            _add_to_bucket(
                summary.by_quadrant,
                quadrant.value if quadrant is not None else UNKNOWN_BUCKET,
                investment,
                value,
            )

            breakeven_month = vr.calculated_metrics.projected_breakeven_month
            if breakeven_month:
                months = months_until(breakeven_month, now)
                if months is not None and months > 0:
                    breakeven_total += months
                    breakeven_count += 1

    summary.portfolio_roi = calculate_roi(summary.cumulative_value, summary.total_investment)
    if breakeven_count > 0:
        summary.avg_breakeven_months = int(round_half_up(breakeven_total / breakeven_count))

    return summary
