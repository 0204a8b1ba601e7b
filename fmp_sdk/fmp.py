"""
FMP SDK entry point.

The FMP class wires one FMPClient to every resource grouping and
exposes the cache-management operations callers use when the TTL model
is not enough.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from fmp_sdk.api.client import FMPClient
from fmp_sdk.cache.base import CacheProvider
from fmp_sdk.models.config import FMPConfig
from fmp_sdk.resources import (
    AnalystResource,
    CompanyResource,
    FinancialsResource,
    MarketResource,
    NewsResource,
    PerformanceResource,
)


class FMP:
    """
    Financial Modeling Prep API client.

    Attributes:
        company: Company profiles, quotes and symbols
        market: Historical, intraday and cross-asset prices
        financials: Financial statements, ratios and key metrics
        analyst: Estimates, price targets and grades
        news: Stock news and press releases
        performance: Market movers and sector performance

    Example:
        >>> from fmp_sdk import FMP, CacheConfig
        >>>
        >>> async with FMP(api_key="your-api-key", cache=CacheConfig(enabled=True)) as fmp:
        ...     profile = await fmp.company.get_profile("AAPL")
        ...     quote = await fmp.company.get_quote("AAPL")
    """

    def __init__(
        self,
        config: Optional[FMPConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **options: Any,
    ) -> None:
        """
        Create a client.

        Args:
            config: Complete configuration; alternatively pass FMPConfig
                fields (api_key, base_url, cache, ...) as keyword options
            transport: Optional httpx transport

        Raises:
            FMPConfigError: If the configuration is invalid
        """
        self.client = FMPClient(config, transport=transport, **options)

        self.company = CompanyResource(self.client)
        self.market = MarketResource(self.client)
        self.financials = FinancialsResource(self.client)
        self.analyst = AnalystResource(self.client)
        self.news = NewsResource(self.client)
        self.performance = PerformanceResource(self.client)

    @classmethod
    def from_env(cls, *, transport: Optional[httpx.AsyncBaseTransport] = None, **overrides: Any) -> FMP:
        """Create a client configured from FMP_* environment variables."""
        return cls(transport=transport, **FMPConfig.env_options(**overrides))

    async def __aenter__(self) -> FMP:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def clear_cache(self) -> None:
        """
        Clear all cached responses.

        Example:
            >>> await fmp.clear_cache()
        """
        await self.client.clear_cache()

    async def invalidate_cache(
        self, endpoint: str, params: Optional[Mapping[str, Any]] = None
    ) -> bool:
        """
        Drop the cached response for one endpoint and parameter set.

        Example:
            >>> await fmp.invalidate_cache("profile", {"symbol": "AAPL"})
            True
        """
        return await self.client.invalidate_cache(endpoint, params)

    def get_cache_provider(self) -> Optional[CacheProvider]:
        """
        Get the cache provider instance, or None when caching is disabled.

        Example:
            >>> provider = fmp.get_cache_provider()
            >>> if provider is not None:
            ...     has_entry = provider.has("profile?symbol=AAPL")
        """
        return self.client.get_cache_provider()
