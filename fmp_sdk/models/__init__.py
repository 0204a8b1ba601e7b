"""Configuration models."""

from fmp_sdk.models.config import (
    DEFAULT_BASE_URL,
    CacheConfig,
    FMPConfig,
    Interceptors,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "CacheConfig",
    "FMPConfig",
    "Interceptors",
]
