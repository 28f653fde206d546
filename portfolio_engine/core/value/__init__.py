"""KPI value realization.

- Maturity derivation: first matching rule wins, with a foundational fallback
- Applicability: fuzzy process matching against each KPI's processes
- Estimation: improvement ranges -> annual value ranges
- Portfolio: tracked vs estimated aggregation, ROI and breakeven

Usage:
    from portfolio_engine.core.value import DEFAULT_KPI_LIBRARY, derive_value_estimates

    estimates = derive_value_estimates(use_case.processes, use_case.levers.model_dump(), DEFAULT_KPI_LIBRARY)
"""

from portfolio_engine.core.value.estimates import (
    calculate_total_estimated_value,
    derive_value_estimates,
    derive_value_realization,
    derive_value_realizations,
    is_hour_based_unit,
    is_monetary_unit,
)
from portfolio_engine.core.value.kpis import (
    find_matching_process,
    get_applicable_kpis,
    normalize_process_name,
)
from portfolio_engine.core.value.library import (
    DEFAULT_KPI_LIBRARY,
    PROCESS_KPI_MAPPING,
    load_kpi_library,
)
from portfolio_engine.core.value.maturity import derive_maturity_level
from portfolio_engine.core.value.portfolio import (
    aggregate_portfolio_value,
    calculate_breakeven_month,
    calculate_roi,
    calculate_total_investment,
    update_calculated_metrics,
)

__all__ = [
    "derive_maturity_level",
    "normalize_process_name",
    "find_matching_process",
    "get_applicable_kpis",
    "derive_value_estimates",
    "calculate_total_estimated_value",
    "derive_value_realization",
    "derive_value_realizations",
    "is_monetary_unit",
    "is_hour_based_unit",
    "aggregate_portfolio_value",
    "calculate_roi",
    "calculate_breakeven_month",
    "calculate_total_investment",
    "update_calculated_metrics",
    "DEFAULT_KPI_LIBRARY",
    "PROCESS_KPI_MAPPING",
    "load_kpi_library",
]
