"""Timing instrumentation for portfolio-level computations."""

import time
from contextlib import contextmanager
from typing import Optional

from portfolio_engine.core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def timer(operation_name: str, log_level: str = "debug"):
    """
    Context manager for timing operations.

    Logs operation duration on completion.

    Args:
        operation_name: Name of the operation being timed
        log_level: Log level ("debug", "info", "warning")

    Usage:
        with timer("KPI applicability"):
            kpis = get_applicable_kpis(processes, library)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000

        extra = {
            "operation": operation_name,
            "duration_ms": round(elapsed_ms, 1),
        }
        log_msg = f"{operation_name} took {elapsed_ms:.1f}ms"

        if log_level == "info":
            logger.info(log_msg, extra={"extra_data": extra})
        elif log_level == "warning":
            logger.warning(log_msg, extra={"extra_data": extra})
        else:
            logger.debug(log_msg, extra={"extra_data": extra})


class PerformanceTracker:
    """
    Track counts and duration for a pass over many use cases.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.start_time: Optional[float] = None
        self.use_cases = 0
        self.tracked = 0
        self.estimated = 0
        self.skipped = 0

    def start(self):
        """Start timing the operation."""
        self.start_time = time.perf_counter()

    def end(self) -> float:
        """
        End timing and log metrics.

        Returns:
            Duration in milliseconds
        """
        if not self.start_time:
            return 0

        elapsed_ms = (time.perf_counter() - self.start_time) * 1000

        extra = {
            "operation": self.operation,
            "duration_ms": round(elapsed_ms, 1),
            **self.summary(),
        }

        logger.debug(
            f"{self.operation}: {elapsed_ms:.1f}ms "
            f"(use cases: {self.use_cases}, tracked: {self.tracked}, "
            f"estimated: {self.estimated}, skipped: {self.skipped})",
            extra={"extra_data": extra},
        )

        return elapsed_ms

    def summary(self) -> dict[str, int]:
        """Counters recorded so far."""
        return {
            "use_cases": self.use_cases,
            "tracked": self.tracked,
            "estimated": self.estimated,
            "skipped": self.skipped,
        }

    def record_use_case(self):
        self.use_cases += 1

    def record_tracked(self):
        self.tracked += 1

    def record_estimated(self):
        self.estimated += 1

    def record_skipped(self):
        self.skipped += 1


@contextmanager
def track_performance(operation: str):
    """
    Context manager yielding a PerformanceTracker that logs on exit.

    Usage:
        with track_performance("Portfolio aggregation") as perf:
            for uc in use_cases:
                perf.record_use_case()
    """
    tracker = PerformanceTracker(operation)
    tracker.start()
    try:
        yield tracker
    finally:
        tracker.end()
