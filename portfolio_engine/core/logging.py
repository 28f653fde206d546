"""Structured logging for the portfolio engine.

Log lines are ``key=value`` pairs. Records about a single use case carry
its ``use_case_id`` (and, for value work, the ``kpi_id``) as first-class
fields so a portfolio run can be filtered down to one record.
"""

import logging
import sys
from typing import Any

# Fields promoted to record attributes rather than nested in extra_data
CONTEXT_FIELDS = ("use_case_id", "kpi_id")

ENV_LOG_LEVELS = {
    "dev": logging.DEBUG,
    "test": logging.INFO,
    "staging": logging.INFO,
    "prod": logging.INFO,
}


def _format_value(value: Any) -> str:
    text = str(value)
    if " " in text or "=" in text:
        return f'"{text}"'
    return text


class StructuredFormatter(logging.Formatter):
    """key=value formatter with use-case context first."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                fields[name] = value

        fields["message"] = record.getMessage()
        fields.update(getattr(record, "extra_data", None) or {})

        if record.exc_info:
            fields["error"] = self.formatException(record.exc_info).splitlines()[-1]

        return " ".join(f"{key}={_format_value(value)}" for key, value in fields.items())


def _level_for_environment() -> int:
    try:
        from portfolio_engine.core.config import get_settings

        return ENV_LOG_LEVELS.get(get_settings().ENGINE_ENV, logging.INFO)
    except Exception:
        # Settings may be invalid at import time; logging must still work
        return logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Logger with a single structured stdout handler.

    The level comes from ENGINE_ENV: DEBUG in dev, INFO elsewhere.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.setLevel(_level_for_environment())
    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **fields: Any) -> None:
    """
    Log with structured fields.

    ``use_case_id`` and ``kpi_id`` become record attributes; every other
    field lands in ``extra_data``.

    Usage:
        log_with_context(logger, logging.INFO, "Override applied",
                         use_case_id=uc.id, fields="manual_quadrant")
    """
    extra: dict[str, Any] = {name: fields.pop(name) for name in CONTEXT_FIELDS if name in fields}
    extra["extra_data"] = fields
    logger.log(level, msg, extra=extra)
