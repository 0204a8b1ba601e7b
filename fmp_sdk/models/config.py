"""
Pydantic configuration models for the FMP client.

Every recognised option is declared here with its default. Models are
frozen: defaults are resolved once when the client is created and never
re-read afterwards.
"""
import os
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fmp_sdk.cache.base import CacheProvider
from fmp_sdk.cache.ttl import CacheTTL

DEFAULT_BASE_URL = "https://financialmodelingprep.com/stable"

KeyGenerator = Callable[[str, Optional[Mapping[str, Any]]], str]


class Interceptors(BaseModel):
    """
    Optional request/response hooks for logging and debugging.

    Each hook is called synchronously at a fixed point of a request:

    - on_request(url, request): before send, with the final outgoing
      URL and httpx.Request
    - on_response(url, response): after a successful response
    - on_error(url, error): after a failure, with the FMPAPIError raised
    """

    model_config = ConfigDict(frozen=True)

    on_request: Optional[Callable[..., Any]] = None
    on_response: Optional[Callable[..., Any]] = None
    on_error: Optional[Callable[..., Any]] = None


class CacheConfig(BaseModel):
    """
    Response cache configuration.

    Example:
        >>> CacheConfig(
        ...     enabled=True,
        ...     endpoint_ttl={"profile": CacheTTL.DAY, "quote": CacheTTL.NONE},
        ... )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    enabled: bool = Field(
        False,
        description="Enable or disable caching",
    )
    default_ttl: int = Field(
        int(CacheTTL.MEDIUM),
        ge=0,
        description="TTL in milliseconds for endpoints without a table entry",
    )
    endpoint_ttl: Dict[str, int] = Field(
        default_factory=dict,
        description="Per-endpoint TTL overrides in milliseconds (0 disables caching)",
    )
    use_default_ttls: bool = Field(
        True,
        description="Apply the built-in per-endpoint TTL table",
    )
    provider: Optional[CacheProvider] = Field(
        None,
        description="Cache backend; None uses a MemoryCache",
    )
    max_size: int = Field(
        1000,
        ge=1,
        description="Capacity of the default MemoryCache",
    )
    key_generator: Optional[KeyGenerator] = Field(
        None,
        description="Custom function(endpoint, params) -> cache key",
    )

    @field_validator("endpoint_ttl")
    @classmethod
    def _check_endpoint_ttl(cls, value: Dict[str, int]) -> Dict[str, int]:
        for endpoint, ttl in value.items():
            if ttl < 0:
                raise ValueError(f"TTL for endpoint '{endpoint}' must be >= 0")
        return value


class FMPConfig(BaseModel):
    """
    FMP client configuration.

    Example:
        >>> config = FMPConfig(api_key="demo", cache=CacheConfig(enabled=True))
        >>> config.timeout
        30.0
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(
        ...,
        description="Financial Modeling Prep API key",
    )
    base_url: str = Field(
        DEFAULT_BASE_URL,
        description="Base URL for the FMP API",
    )
    timeout: float = Field(
        30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    retries: int = Field(
        3,
        ge=0,
        description="Retry attempts for transient failures",
    )
    retry_backoff: float = Field(
        0.3,
        ge=0,
        description="Base delay in seconds, doubled after each attempt",
    )
    max_retry_delay: float = Field(
        30.0,
        ge=0,
        description="Upper bound in seconds for any single retry delay",
    )
    interceptors: Interceptors = Field(default_factory=Interceptors)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("API key is required")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @staticmethod
    def env_options(**overrides: Any) -> Dict[str, Any]:
        """
        Collect configuration options from environment variables.

        Reads FMP_API_KEY, FMP_BASE_URL, FMP_TIMEOUT and FMP_RETRIES;
        keyword overrides take precedence.
        """
        values: Dict[str, Any] = {}

        env_map = {
            "api_key": "FMP_API_KEY",
            "base_url": "FMP_BASE_URL",
            "timeout": "FMP_TIMEOUT",
            "retries": "FMP_RETRIES",
        }
        for field_name, env_name in env_map.items():
            env_value = os.getenv(env_name)
            if env_value:
                values[field_name] = env_value

        values.update(overrides)
        values.setdefault("api_key", "")
        return values

    @classmethod
    def from_env(cls, **overrides: Any) -> "FMPConfig":
        """Build a configuration from environment variables (see env_options)."""
        return cls(**cls.env_options(**overrides))
