"""Shared utilities (structured logging)."""

from fmp_sdk.utils.logger import (
    get_logger,
    log_request_execution,
    redact_api_key,
    setup_logging,
)

__all__ = [
    "get_logger",
    "log_request_execution",
    "redact_api_key",
    "setup_logging",
]
