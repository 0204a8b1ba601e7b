"""
structlog setup and the logging helpers used by the request executor.

The SDK only emits events; applications that want JSON or console
output call setup_logging() once at startup.
"""
import logging
import os
import re
import sys
from typing import Any, List, Optional

import structlog

_API_KEY_PATTERN = re.compile(r"(apikey=)[^&\s]+", re.IGNORECASE)


def _renderer(json_logs: Optional[bool]) -> Any:
    if json_logs is None:
        json_logs = os.getenv("ENVIRONMENT", "production") != "development"
    return structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()


def setup_logging(level: str = "INFO", json_logs: Optional[bool] = None) -> None:
    """
    Route SDK events through structlog.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        json_logs: Force JSON (True) or console (False) output; by default
            the console renderer is used only when ENVIRONMENT=development
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _renderer(json_logs),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def redact_api_key(value: Any) -> str:
    """
    Mask the ``apikey`` query parameter in a URL or error message.

    Example:
        >>> redact_api_key("https://x/profile?symbol=AAPL&apikey=secret")
        'https://x/profile?symbol=AAPL&apikey=***'
    """
    text = "" if value is None else str(value)
    return _API_KEY_PATTERN.sub(r"\1***", text)


def log_request_execution(
    endpoint: str,
    duration_ms: float,
    cached: bool,
    error: str | None = None,
    **extra: Any,
) -> None:
    """
    Log request execution metrics in structured format.

    Args:
        endpoint: Logical FMP endpoint (e.g. "profile")
        duration_ms: Execution time in milliseconds
        cached: Whether the result was served from cache
        error: Error message if the request failed
        **extra: Additional context to log

    Example:
        >>> log_request_execution(
        ...     endpoint="profile",
        ...     duration_ms=123.4,
        ...     cached=False,
        ...     attempts=1,
        ... )
    """
    logger = get_logger("request_execution")

    log_data = {
        "endpoint": endpoint,
        "duration_ms": round(duration_ms, 2),
        "cached": cached,
        "error": redact_api_key(error) if error else None,
        **extra,
    }

    if error:
        logger.warning("request_execution_failed", **log_data)
    else:
        logger.debug("request_execution_success", **log_data)
