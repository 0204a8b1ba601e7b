"""TTL (Time To Live) policies for FMP endpoints.

This module defines the TTL presets, the built-in per-endpoint table
and the policy object that resolves a TTL for any endpoint at request
time. All values are in milliseconds; 0 means "never cache".
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional

import structlog

logger = structlog.get_logger(__name__)


class CacheTTL(IntEnum):
    """
    Cache TTL presets for different data freshness requirements.

    - Real-time data (quotes, intraday): never cached
    - Aggregate market data (movers, sectors): 1 minute
    - News and analyst data: 1 hour
    - Static or historical data (profiles, statements): 24 hours

    Values are in milliseconds.
    """

    NONE = 0
    SHORT = 60 * 1000  # 1 minute
    MEDIUM = 5 * 60 * 1000  # 5 minutes
    LONG = 60 * 60 * 1000  # 1 hour
    DAY = 24 * 60 * 60 * 1000  # 24 hours


INTRADAY_INTERVALS = ("1min", "5min", "15min", "30min", "1hour", "4hour")

_DEFAULTS = {
    # Real-time quotes
    "quote": CacheTTL.NONE,
    "quote-short": CacheTTL.NONE,
    "batch-quote": CacheTTL.NONE,
    "batch-quote-short": CacheTTL.NONE,
    "aftermarket-quote": CacheTTL.NONE,
    "aftermarket-trade": CacheTTL.NONE,
    "batch-aftermarket-quote": CacheTTL.NONE,
    "pre-post-market-quote": CacheTTL.NONE,
    "forex": CacheTTL.NONE,
    "crypto": CacheTTL.NONE,
    "batch-forex-quotes": CacheTTL.NONE,
    "batch-crypto-quotes": CacheTTL.NONE,
    # Intraday charts
    "historical-chart": CacheTTL.NONE,
    # Live market aggregates
    "stock-price-change": CacheTTL.SHORT,
    "sector-performance": CacheTTL.SHORT,
    "sector-performance-snapshot": CacheTTL.SHORT,
    "gainers": CacheTTL.SHORT,
    "losers": CacheTTL.SHORT,
    "most-active": CacheTTL.SHORT,
    "biggest-gainers": CacheTTL.SHORT,
    "biggest-losers": CacheTTL.SHORT,
    "most-actives": CacheTTL.SHORT,
    # News and analyst data
    "news": CacheTTL.LONG,
    "stock-news": CacheTTL.LONG,
    "news/stock": CacheTTL.LONG,
    "press-releases": CacheTTL.LONG,
    "news/press-releases": CacheTTL.LONG,
    "analyst-estimates": CacheTTL.LONG,
    "price-target": CacheTTL.LONG,
    "price-target-summary": CacheTTL.LONG,
    "price-target-consensus": CacheTTL.LONG,
    "analyst-recommendations": CacheTTL.LONG,
    "stock-grade": CacheTTL.LONG,
    "grades": CacheTTL.LONG,
    # Static and historical data
    "profile": CacheTTL.DAY,
    "profile-cik": CacheTTL.DAY,
    "income-statement": CacheTTL.DAY,
    "balance-sheet-statement": CacheTTL.DAY,
    "cash-flow-statement": CacheTTL.DAY,
    "ratios": CacheTTL.DAY,
    "key-metrics": CacheTTL.DAY,
    "financial-scores": CacheTTL.DAY,
    "financial-growth": CacheTTL.DAY,
    "sec-filings": CacheTTL.DAY,
    "historical-price-eod": CacheTTL.DAY,
    "historical-price-eod/full": CacheTTL.DAY,
    "historical-price-eod/light": CacheTTL.DAY,
    "historical-dividends": CacheTTL.DAY,
    "historical-stock-splits": CacheTTL.DAY,
    "etf-holdings": CacheTTL.DAY,
    "etf-info": CacheTTL.DAY,
    "stock-list": CacheTTL.DAY,
    "etf-list": CacheTTL.DAY,
    "cik-list": CacheTTL.DAY,
    "available-exchanges": CacheTTL.DAY,
    "available-sectors": CacheTTL.DAY,
    "available-industries": CacheTTL.DAY,
    "available-countries": CacheTTL.DAY,
    "key-executives": CacheTTL.DAY,
    "company-notes": CacheTTL.DAY,
    "stock-peers": CacheTTL.DAY,
    "employee-count": CacheTTL.DAY,
    "historical-employee-count": CacheTTL.DAY,
    "esg-ratings": CacheTTL.DAY,
    "esg-benchmark": CacheTTL.DAY,
    "dcf": CacheTTL.DAY,
    "levered-dcf": CacheTTL.DAY,
    "advanced-dcf": CacheTTL.DAY,
    "sic-codes": CacheTTL.DAY,
    "cot-report": CacheTTL.DAY,
    "cot-analysis": CacheTTL.DAY,
}

# Intraday charts are addressed per interval (historical-chart/1hour)
_DEFAULTS.update(
    {f"historical-chart/{interval}": CacheTTL.NONE for interval in INTRADAY_INTERVALS}
)

DEFAULT_ENDPOINT_TTLS: Mapping[str, int] = MappingProxyType(
    {endpoint: int(ttl) for endpoint, ttl in _DEFAULTS.items()}
)


class EndpointTTLPolicy:
    """
    Resolve the cache TTL for an endpoint.

    The table is built once by merging the built-in defaults (unless
    disabled) with caller overrides, which win. Endpoints missing from
    the table fall back to ``default_ttl``. Resolution is an exact
    string match.

    Example:
        >>> policy = EndpointTTLPolicy(default_ttl=300_000, endpoint_ttl={"quote": 5_000})
        >>> policy.resolve("quote")
        5000
        >>> policy.resolve("profile")
        86400000
        >>> policy.resolve("unknown-endpoint")
        300000
    """

    def __init__(
        self,
        default_ttl: int = CacheTTL.MEDIUM,
        endpoint_ttl: Optional[Mapping[str, int]] = None,
        use_default_ttls: bool = True,
    ) -> None:
        if default_ttl < 0:
            raise ValueError("default_ttl must be >= 0")

        table = dict(DEFAULT_ENDPOINT_TTLS) if use_default_ttls else {}
        for endpoint, ttl in (endpoint_ttl or {}).items():
            if ttl < 0:
                raise ValueError(f"TTL for endpoint '{endpoint}' must be >= 0")
            table[endpoint] = int(ttl)

        self.default_ttl = int(default_ttl)
        self._table: Mapping[str, int] = MappingProxyType(table)

        logger.debug(
            "ttl_policy_built",
            endpoints=len(table),
            default_ttl=self.default_ttl,
            use_default_ttls=use_default_ttls,
        )

    @property
    def table(self) -> Mapping[str, int]:
        """Read-only merged endpoint table."""
        return self._table

    def resolve(self, endpoint: str) -> int:
        """
        Determine the TTL for endpoint.

        Args:
            endpoint: Logical endpoint identifier (e.g. "profile")

        Returns:
            TTL in milliseconds; 0 means the cache is bypassed
        """
        return self._table.get(endpoint, self.default_ttl)

    def should_cache(self, endpoint: str) -> bool:
        return self.resolve(endpoint) > 0
