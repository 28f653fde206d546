"""Default KPI library for insurance operations.

Seed reference data used when the metadata store has no value realization
config. Benchmarks are keyed by the canonical process names in each KPI's
``applicable_processes``.
"""

from typing import Any, Optional

from portfolio_engine.core.logging import get_logger
from portfolio_engine.core.schemas_value import KpiDefinition

logger = get_logger(__name__)

CLAIMS = "Claims Management"
UNDERWRITING = "Underwriting & Triage"
SUBMISSION = "Submission & Quote"
RISK_CONSULTING = "Risk Consulting"
REINSURANCE = "Reinsurance"
COMPLIANCE = "Regulatory & Compliance"
FINANCE = "Financial Management"
SALES = "Sales & Distribution (Including Broker Relationships)"
CUSTOMER_SERVICING = "Customer Servicing"
POLICY_SERVICING = "Policy Servicing"
BILLING = "Billing"
GENERAL = "General"
PRODUCT = "Product & Rating"
HR = "Human Resources"


def _range(low: float, high: float) -> dict[str, float]:
    return {"min": low, "max": high}


def _benchmark(
    value: float,
    unit: str,
    source: str,
    improvement: tuple[float, float],
    improvement_unit: str,
    timeline: str,
    foundational: tuple[float, float],
    developing: tuple[float, float],
    advanced: tuple[float, float],
) -> dict[str, Any]:
    return {
        "baseline_value": value,
        "baseline_unit": unit,
        "baseline_source": source,
        "improvement_range": _range(*improvement),
        "improvement_unit": improvement_unit,
        "typical_timeline": timeline,
        "maturity_tiers": {
            "foundational": _range(*foundational),
            "developing": _range(*developing),
            "advanced": _range(*advanced),
        },
    }


def _rules(
    advanced: dict[str, dict[str, float]],
    advanced_range: tuple[float, float],
    developing: dict[str, dict[str, float]],
    developing_range: tuple[float, float],
    foundational_range: tuple[float, float],
) -> list[dict[str, Any]]:
    return [
        {"level": "advanced", "conditions": advanced, "range": _range(*advanced_range), "confidence": "high"},
        {"level": "developing", "conditions": developing, "range": _range(*developing_range), "confidence": "medium"},
        {"level": "foundational", "conditions": {}, "range": _range(*foundational_range), "confidence": "low"},
    ]


_KPI_DATA: list[dict[str, Any]] = [
    {
        "id": "cycle_time_reduction",
        "name": "Cycle Time Reduction",
        "description": "Reduction in end-to-end processing time",
        "unit": "%",
        "direction": "decrease",
        "applicable_processes": [
            CLAIMS, UNDERWRITING, SUBMISSION, POLICY_SERVICING, BILLING, FINANCE,
            COMPLIANCE, REINSURANCE, CUSTOMER_SERVICING, PRODUCT, HR,
        ],
        "industry_benchmarks": {
            CLAIMS: _benchmark(45, "minutes", "McKinsey Insurance Operations 2024", (40, 70), "%",
                               "6-12 months", (20, 30), (40, 50), (60, 70)),
            UNDERWRITING: _benchmark(120, "minutes", "BCG Insurance Benchmarks 2024", (30, 60), "%",
                                     "9-18 months", (15, 25), (30, 45), (50, 60)),
            SUBMISSION: _benchmark(60, "minutes", "Deloitte Insurance Study 2023", (35, 65), "%",
                                   "6-12 months", (20, 30), (35, 50), (55, 65)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}, "technical_complexity": {"max": 2}, "adoption_readiness": {"min": 4}},
            (60, 70),
            {"data_readiness": {"min": 3}, "technical_complexity": {"max": 3}},
            (40, 50),
            (20, 30),
        ),
    },
    {
        "id": "cost_per_transaction",
        "name": "Cost Per Transaction Reduction",
        "description": "Reduction in cost to process each transaction",
        "unit": "%",
        "direction": "decrease",
        "applicable_processes": [
            CLAIMS, UNDERWRITING, SUBMISSION, POLICY_SERVICING, BILLING, FINANCE, REINSURANCE,
        ],
        "industry_benchmarks": {
            CLAIMS: _benchmark(125, "GBP", "McKinsey Insurance Operations 2024", (20, 35), "%",
                               "6-12 months", (8, 15), (20, 28), (30, 35)),
            UNDERWRITING: _benchmark(450, "GBP", "BCG Insurance Benchmarks 2024", (15, 30), "%",
                                     "9-18 months", (8, 12), (15, 22), (25, 30)),
            BILLING: _benchmark(35, "GBP", "Deloitte Insurance Study 2023", (25, 45), "%",
                                "3-6 months", (15, 22), (28, 36), (40, 45)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}, "change_impact": {"max": 2}},
            (25, 35),
            {"data_readiness": {"min": 3}},
            (15, 25),
            (8, 15),
        ),
    },
    {
        "id": "fte_efficiency",
        "name": "FTE Efficiency Gain",
        "description": "FTE hours saved or reallocated per month",
        "unit": "hours/month",
        "direction": "increase",
        "applicable_processes": [
            CLAIMS, UNDERWRITING, SUBMISSION, POLICY_SERVICING, BILLING, FINANCE, COMPLIANCE,
            RISK_CONSULTING, SALES, CUSTOMER_SERVICING, GENERAL, PRODUCT, HR,
        ],
        "industry_benchmarks": {
            CLAIMS: _benchmark(160, "hours/FTE/month", "Industry Average", (15, 40), "%",
                               "6-12 months", (50, 100), (200, 400), (500, 800)),
            UNDERWRITING: _benchmark(160, "hours/FTE/month", "Industry Average", (20, 45), "%",
                                     "9-18 months", (80, 150), (250, 450), (600, 1000)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}, "adoption_readiness": {"min": 4}},
            (500, 1000),
            {"data_readiness": {"min": 3}},
            (200, 500),
            (50, 200),
        ),
    },
    {
        "id": "accuracy_improvement",
        "name": "Accuracy Improvement",
        "description": "Improvement in decision or data accuracy",
        "unit": "%",
        "direction": "increase",
        "applicable_processes": [
            CLAIMS, UNDERWRITING, POLICY_SERVICING, BILLING, FINANCE, COMPLIANCE, REINSURANCE, PRODUCT,
        ],
        "industry_benchmarks": {
            CLAIMS: _benchmark(85, "% accuracy", "Industry Average", (5, 12), "percentage points",
                               "6-12 months", (2, 4), (5, 8), (10, 12)),
            UNDERWRITING: _benchmark(82, "% accuracy", "BCG Insurance Benchmarks 2024", (8, 15),
                                     "percentage points", "12-18 months", (3, 6), (8, 11), (13, 15)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}, "technical_complexity": {"max": 3}},
            (10, 15),
            {"data_readiness": {"min": 3}},
            (5, 10),
            (2, 5),
        ),
    },
    {
        "id": "loss_ratio_reduction",
        "name": "Loss Ratio Reduction",
        "description": "Reduction in claims loss ratio",
        "unit": "percentage points",
        "direction": "decrease",
        "applicable_processes": [CLAIMS, RISK_CONSULTING, UNDERWRITING],
        "industry_benchmarks": {
            CLAIMS: _benchmark(65, "% loss ratio", "McKinsey Insurance Operations 2024", (1, 5),
                               "percentage points", "12-24 months", (0.5, 1.5), (2, 3.5), (4, 5)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}, "adoption_readiness": {"min": 4}},
            (4, 5),
            {"data_readiness": {"min": 3}},
            (2, 3.5),
            (0.5, 1.5),
        ),
    },
    {
        "id": "customer_satisfaction",
        "name": "Customer/Broker Satisfaction",
        "description": "Improvement in NPS or satisfaction scores",
        "unit": "NPS points",
        "direction": "increase",
        "applicable_processes": [CUSTOMER_SERVICING, SALES, RISK_CONSULTING, CLAIMS],
        "industry_benchmarks": {
            CUSTOMER_SERVICING: _benchmark(35, "NPS", "Industry Average", (5, 20), "NPS points",
                                           "6-12 months", (3, 7), (8, 14), (15, 20)),
        },
        "maturity_rules": _rules(
            {"adoption_readiness": {"min": 4}, "change_impact": {"max": 2}},
            (15, 20),
            {"adoption_readiness": {"min": 3}},
            (8, 14),
            (3, 7),
        ),
    },
    {
        "id": "decision_consistency",
        "name": "Decision Consistency",
        "description": "Improvement in consistency of underwriting decisions",
        "unit": "%",
        "direction": "increase",
        "applicable_processes": [UNDERWRITING, CLAIMS],
        "industry_benchmarks": {
            UNDERWRITING: _benchmark(72, "% consistency", "Industry Average", (10, 25), "percentage points",
                                     "6-12 months", (5, 10), (12, 18), (20, 25)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}, "technical_complexity": {"max": 2}},
            (20, 25),
            {"data_readiness": {"min": 3}},
            (12, 18),
            (5, 10),
        ),
    },
    {
        "id": "conversion_rate",
        "name": "Conversion Rate Improvement",
        "description": "Improvement in quote-to-bind or lead-to-policy conversion",
        "unit": "percentage points",
        "direction": "increase",
        "applicable_processes": [SUBMISSION, SALES],
        "industry_benchmarks": {
            SUBMISSION: _benchmark(25, "% conversion", "Industry Average", (3, 10), "percentage points",
                                   "6-12 months", (1, 3), (4, 7), (8, 10)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}, "adoption_readiness": {"min": 4}},
            (8, 10),
            {"data_readiness": {"min": 3}},
            (4, 7),
            (1, 3),
        ),
    },
    {
        "id": "compliance_rate",
        "name": "Compliance Rate Improvement",
        "description": "Improvement in regulatory compliance and audit pass rates",
        "unit": "%",
        "direction": "increase",
        "applicable_processes": [COMPLIANCE],
        "industry_benchmarks": {
            COMPLIANCE: _benchmark(88, "% compliance", "Industry Average", (5, 10), "percentage points",
                                   "6-12 months", (2, 4), (5, 7), (8, 10)),
        },
        "maturity_rules": _rules(
            {"data_readiness": {"min": 4}},
            (8, 10),
            {"data_readiness": {"min": 3}},
            (5, 7),
            (2, 4),
        ),
    },
]

DEFAULT_KPI_LIBRARY: dict[str, KpiDefinition] = {
    kpi["id"]: KpiDefinition.model_validate(kpi) for kpi in _KPI_DATA
}

# Reference only; applicability is decided by each KPI's applicable_processes
PROCESS_KPI_MAPPING: dict[str, list[str]] = {
    CLAIMS: ["cycle_time_reduction", "cost_per_transaction", "fte_efficiency", "accuracy_improvement", "loss_ratio_reduction"],
    UNDERWRITING: ["cycle_time_reduction", "cost_per_transaction", "fte_efficiency", "accuracy_improvement", "decision_consistency"],
    SUBMISSION: ["cycle_time_reduction", "cost_per_transaction", "fte_efficiency", "conversion_rate"],
    RISK_CONSULTING: ["fte_efficiency", "customer_satisfaction", "loss_ratio_reduction"],
    REINSURANCE: ["cycle_time_reduction", "cost_per_transaction", "accuracy_improvement"],
    COMPLIANCE: ["cycle_time_reduction", "fte_efficiency", "accuracy_improvement", "compliance_rate"],
    FINANCE: ["cycle_time_reduction", "cost_per_transaction", "fte_efficiency", "accuracy_improvement"],
    SALES: ["conversion_rate", "customer_satisfaction", "fte_efficiency"],
    CUSTOMER_SERVICING: ["cycle_time_reduction", "customer_satisfaction", "fte_efficiency"],
    POLICY_SERVICING: ["cycle_time_reduction", "cost_per_transaction", "fte_efficiency", "accuracy_improvement"],
    BILLING: ["cycle_time_reduction", "cost_per_transaction", "fte_efficiency", "accuracy_improvement"],
    GENERAL: ["fte_efficiency", "cost_per_transaction"],
    PRODUCT: ["cycle_time_reduction", "accuracy_improvement", "fte_efficiency"],
    HR: ["fte_efficiency", "cycle_time_reduction"],
}


def load_kpi_library(metadata: Optional[dict[str, Any]]) -> dict[str, KpiDefinition]:
    """
    KPI library from the metadata store, or the default library.

    Reads ``metadata["value_realization_config"]["kpi_library"]``, a mapping of
    KPI id -> definition dict.
    """
    config = (metadata or {}).get("value_realization_config") or {}
    raw_library = config.get("kpi_library")
    if not raw_library:
        return dict(DEFAULT_KPI_LIBRARY)

    library = {
        kpi_id: KpiDefinition.model_validate({"id": kpi_id, **definition})
        for kpi_id, definition in raw_library.items()
    }
    logger.debug(f"Loaded {len(library)} KPIs from metadata")
    return library
