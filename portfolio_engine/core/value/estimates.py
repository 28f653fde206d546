"""KPI value estimation for reporting.

For each applicable KPI the maturity tier picks an improvement range (the
benchmark's per-tier range when a benchmark exists for the matched
process). The range is converted to an annual value, bound by bound:

- monetary baseline:  baseline * (range% / 100) * volume_multiplier
- anything else:      range (monthly hours) * hourly_rate * 12

These are estimates for display, rounded to whole currency units, not
financial commitments.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from portfolio_engine.core.currency import get_hourly_rate
from portfolio_engine.core.logging import get_logger, log_with_context
from portfolio_engine.core.metrics import timer, track_performance
from portfolio_engine.core.schemas_use_case import UseCase
from portfolio_engine.core.schemas_value import (
    IndustryBenchmark,
    KpiDefinition,
    TotalEstimatedValue,
    ValueEstimate,
    ValueEstimateOptions,
    ValueRange,
    ValueRealization,
)
from portfolio_engine.core.scoring.levers import round_half_up
from portfolio_engine.core.value.kpis import get_applicable_kpis
from portfolio_engine.core.value.maturity import derive_maturity_level

logger = get_logger(__name__)

MONETARY_UNITS = ("gbp", "usd", "eur", "cad", "£", "$", "€")
HOUR_BASED_UNITS = ("hours", "hour", "hrs", "hr", "fte")
MONTHS_PER_YEAR = 12


def is_monetary_unit(unit: str) -> bool:
    unit = unit.lower()
    return any(m in unit for m in MONETARY_UNITS)


def is_hour_based_unit(unit: str) -> bool:
    unit = unit.lower()
    return any(h in unit for h in HOUR_BASED_UNITS)


def _annual_value(
    expected_range: ValueRange,
    benchmark: Optional[IndustryBenchmark],
    volume_multiplier: float,
    hourly_rate: float,
) -> ValueRange:
    if benchmark is not None and is_monetary_unit(benchmark.baseline_unit):
        baseline = benchmark.baseline_value
        return ValueRange(
            min=round_half_up(baseline * (expected_range.min / 100) * volume_multiplier),
            max=round_half_up(baseline * (expected_range.max / 100) * volume_multiplier),
        )

    # Hour-based benchmarks, other units and no benchmark all use hours semantics
    return ValueRange(
        min=round_half_up(expected_range.min * hourly_rate * MONTHS_PER_YEAR),
        max=round_half_up(expected_range.max * hourly_rate * MONTHS_PER_YEAR),
    )


def derive_value_estimates(
    processes: list[str],
    scores: Mapping[str, Optional[float]],
    kpi_library: Mapping[str, KpiDefinition],
    volume_multiplier: Optional[float] = None,
    options: Optional[ValueEstimateOptions] = None,
) -> list[ValueEstimate]:
    """
    Estimate annual value for every KPI applicable to the processes.

    Args:
        processes: The use case's business process tags
        scores: Lever name -> score used by maturity rules
        kpi_library: KPI id -> definition
        volume_multiplier: Annual volume applied to monetary baselines
            (defaults to options.volume_multiplier, 1000)
        options: Hourly rate and currency (defaults: currency's standard rate, GBP)

    Returns:
        One ValueEstimate per applicable KPI, in applicability order
    """
    options = options or ValueEstimateOptions()
    if volume_multiplier is None:
        volume_multiplier = options.volume_multiplier
    hourly_rate = options.hourly_rate or get_hourly_rate(options.currency_code)

    estimates: list[ValueEstimate] = []
    with timer("KPI applicability"):
        applicable_kpis = get_applicable_kpis(processes, kpi_library)

    for applicable in applicable_kpis:
        kpi = applicable.kpi
        maturity = derive_maturity_level(scores, kpi.maturity_rules)

        expected_range = maturity.range
        benchmark = applicable.industry_benchmark
        if benchmark is not None:
            expected_range = benchmark.maturity_tiers.get(maturity.level, maturity.range)

        estimates.append(
            ValueEstimate(
                kpi_id=applicable.kpi_id,
                kpi_name=kpi.name,
                maturity_level=maturity.level,
                expected_range=expected_range,
                confidence=maturity.confidence,
                benchmark=benchmark,
                benchmark_process=applicable.benchmark_process,
                estimated_annual_value=_annual_value(
                    expected_range, benchmark, volume_multiplier, hourly_rate
                ),
                currency=options.currency_code,
            )
        )

    return estimates


def calculate_total_estimated_value(
    estimates: Iterable[ValueEstimate], currency: str = "GBP"
) -> TotalEstimatedValue:
    """Sum min and max annual values across estimates that have one."""
    total = TotalEstimatedValue(currency=currency)
    for estimate in estimates:
        if estimate.estimated_annual_value is not None:
            total.min += estimate.estimated_annual_value.min
            total.max += estimate.estimated_annual_value.max
    return total


def derive_value_realization(
    use_case: UseCase,
    kpi_library: Mapping[str, KpiDefinition],
    options: Optional[ValueEstimateOptions] = None,
    existing: Optional[ValueRealization] = None,
    now: Optional[datetime] = None,
) -> Optional[ValueRealization]:
    """
    Build the estimated value block for a use case.

    Tracked investment, metrics and selected KPIs on ``existing`` are kept.

    Returns:
        The derived block, or None when the use case has no processes
    """
    if not use_case.processes:
        return None

    options = options or ValueEstimateOptions()
    now = now or datetime.now(timezone.utc)

    estimates = derive_value_estimates(
        use_case.processes,
        use_case.levers.model_dump(),
        kpi_library,
        options=options,
    )
    total = calculate_total_estimated_value(estimates, options.currency_code)
    log_with_context(
        logger,
        logging.DEBUG,
        "Value estimates derived",
        use_case_id=use_case.id,
        kpis=len(estimates),
        total_min=total.min,
        total_max=total.max,
        currency=total.currency,
    )

    base = existing or ValueRealization()
    return base.model_copy(
        update={
            "derived": True,
            "derived_at": now,
            "kpi_estimates": estimates,
            "total_estimated_value": total,
        }
    )


def derive_value_realizations(
    use_cases: Iterable[UseCase],
    kpi_library: Mapping[str, KpiDefinition],
    options: Optional[ValueEstimateOptions] = None,
    overwrite: bool = False,
    now: Optional[datetime] = None,
) -> list[UseCase]:
    """
    Attach derived value blocks across a portfolio.

    Use cases that already have a value block are left as they are unless
    ``overwrite`` is set.
    """
    results: list[UseCase] = []
    with track_performance("Value derivation") as perf:
        for use_case in use_cases:
            perf.record_use_case()
            if use_case.value_realization is not None and not overwrite:
                perf.record_skipped()
                results.append(use_case)
                continue

            block = derive_value_realization(
                use_case, kpi_library, options, existing=use_case.value_realization, now=now
            )
            if block is None:
                perf.record_skipped()
                results.append(use_case)
                continue

            perf.record_estimated()
            results.append(use_case.model_copy(update={"value_realization": block}))

    return results
