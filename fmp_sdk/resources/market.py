"""Historical, intraday and cross-asset price data."""

from enum import Enum
from typing import Any, List, Optional, Union

from fmp_sdk.resources.base import (
    BaseResource,
    validate_choice,
    validate_date_range,
    validate_symbol,
)


class IntradayInterval(str, Enum):
    """Intraday chart resolution."""

    ONE_MINUTE = "1min"
    FIVE_MINUTES = "5min"
    FIFTEEN_MINUTES = "15min"
    THIRTY_MINUTES = "30min"
    ONE_HOUR = "1hour"
    FOUR_HOURS = "4hour"


class MarketResource(BaseResource):
    """Market data endpoints."""

    async def get_historical_prices(
        self,
        symbol: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> List[Any]:
        """
        Daily end-of-day prices.

        Args:
            symbol: Stock symbol
            from_date: Start date (YYYY-MM-DD)
            to_date: End date (YYYY-MM-DD)
        """
        symbol = validate_symbol(symbol)
        validate_date_range(from_date, to_date)

        return await self._get(
            "historical-price-eod/full",
            {"symbol": symbol, "from": from_date, "to": to_date},
        )

    async def get_intraday_chart(
        self,
        symbol: str,
        interval: Union[IntradayInterval, str] = IntradayInterval.ONE_HOUR,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> List[Any]:
        """Intraday bars; never served from cache by default."""
        symbol = validate_symbol(symbol)
        validate_date_range(from_date, to_date)
        interval = validate_choice(IntradayInterval, interval, "interval")

        return await self._get(
            f"historical-chart/{interval.value}",
            {"symbol": symbol, "from": from_date, "to": to_date},
        )

    async def get_forex_quotes(self) -> List[Any]:
        return await self._get("batch-forex-quotes")

    async def get_crypto_quotes(self) -> List[Any]:
        return await self._get("batch-crypto-quotes")
