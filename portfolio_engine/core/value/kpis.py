"""KPI applicability by fuzzy business-process matching.

Process taxonomies are punctuated inconsistently across sources
("Sales & Distribution" vs "sales and distribution (including broker
relationships)"), so names are normalized before comparison and a match on
either side containing the other counts.
"""

import re
from typing import Mapping, Optional

from portfolio_engine.core.logging import get_logger
from portfolio_engine.core.schemas_value import ApplicableKpi, KpiDefinition

logger = get_logger(__name__)

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
_SEPARATORS = re.compile(r"[-_]")
_WHITESPACE = re.compile(r"\s+")


def normalize_process_name(name: str) -> str:
    """Lower-case, drop parentheticals, '&' -> 'and', collapse hyphens and spaces."""
    normalized = name.lower()
    normalized = _PARENTHETICAL.sub("", normalized)
    normalized = normalized.replace("&", " and ")
    normalized = _SEPARATORS.sub(" ", normalized)
    normalized = _WHITESPACE.sub(" ", normalized)
    return normalized.strip()


def find_matching_process(process: str, applicable_processes: list[str]) -> Optional[str]:
    """
    Find the KPI process name matching a use case's process tag.

    Returns:
        The canonical KPI-side process name, or None
    """
    if process in applicable_processes:
        return process

    normalized_input = normalize_process_name(process)
    if not normalized_input:
        return None

    for kpi_process in applicable_processes:
        normalized_kpi = normalize_process_name(kpi_process)
        if not normalized_kpi:
            continue
        if normalized_input == normalized_kpi:
            return kpi_process
        if normalized_input in normalized_kpi or normalized_kpi in normalized_input:
            return kpi_process

    return None


def get_applicable_kpis(
    processes: list[str],
    kpi_library: Mapping[str, KpiDefinition],
) -> list[ApplicableKpi]:
    """
    KPIs applying to at least one of the given processes.

    Results keep first-seen order. The benchmark comes from the first
    matched KPI process that has one.
    """
    results: dict[str, ApplicableKpi] = {}

    for process in processes:
        for kpi_id, kpi in kpi_library.items():
            matched_kpi_process = find_matching_process(process, kpi.applicable_processes)
            if matched_kpi_process is None:
                continue

            benchmark = kpi.industry_benchmarks.get(matched_kpi_process)
            existing = results.get(kpi_id)

            if existing is None:
                results[kpi_id] = ApplicableKpi(
                    kpi_id=kpi_id,
                    kpi=kpi,
                    matched_processes=[process],
                    industry_benchmark=benchmark,
                    benchmark_process=matched_kpi_process if benchmark else None,
                )
                continue

            if process not in existing.matched_processes:
                existing.matched_processes.append(process)
            if existing.industry_benchmark is None and benchmark is not None:
                existing.industry_benchmark = benchmark
                existing.benchmark_process = matched_kpi_process

    logger.debug(f"{len(results)} applicable KPIs for processes {processes}")
    return list(results.values())
