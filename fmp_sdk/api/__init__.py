"""
FMP API request layer.

- FMPClient: request executor (cache, auth, retries, error normalisation)
- Exception hierarchy raised to SDK callers
"""

from fmp_sdk.api.client import FMPClient, resolve_config
from fmp_sdk.api.exceptions import (
    FMPAPIError,
    FMPConfigError,
    FMPError,
    FMPValidationError,
    is_retryable_status,
)

__all__ = [
    "FMPClient",
    "resolve_config",
    "FMPError",
    "FMPAPIError",
    "FMPConfigError",
    "FMPValidationError",
    "is_retryable_status",
]
