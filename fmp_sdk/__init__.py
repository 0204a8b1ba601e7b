"""
Async Python SDK for the Financial Modeling Prep API.

Example:
    >>> from fmp_sdk import FMP, CacheConfig
    >>> async with FMP(api_key="your-api-key", cache=CacheConfig(enabled=True)) as fmp:
    ...     profile = await fmp.company.get_profile("AAPL")
"""

from fmp_sdk.api import (
    FMPAPIError,
    FMPClient,
    FMPConfigError,
    FMPError,
    FMPValidationError,
)
from fmp_sdk.cache import (
    DEFAULT_ENDPOINT_TTLS,
    CacheEntry,
    CacheKeyGenerator,
    CacheProvider,
    CacheTTL,
    EndpointTTLPolicy,
    MemoryCache,
    RedisCacheProvider,
)
from fmp_sdk.fmp import FMP
from fmp_sdk.models import CacheConfig, FMPConfig, Interceptors
from fmp_sdk.resources import IntradayInterval, Period

__version__ = "1.0.0"

__all__ = [
    "FMP",
    "FMPClient",
    # Configuration
    "FMPConfig",
    "CacheConfig",
    "Interceptors",
    # Cache
    "CacheEntry",
    "CacheKeyGenerator",
    "CacheProvider",
    "CacheTTL",
    "DEFAULT_ENDPOINT_TTLS",
    "EndpointTTLPolicy",
    "MemoryCache",
    "RedisCacheProvider",
    # Errors
    "FMPError",
    "FMPAPIError",
    "FMPConfigError",
    "FMPValidationError",
    # Enums
    "IntradayInterval",
    "Period",
]
