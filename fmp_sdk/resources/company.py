"""Company profiles, quotes and reference symbols."""

from typing import Any, List, Optional, Sequence

from fmp_sdk.api.exceptions import FMPValidationError
from fmp_sdk.resources.base import BaseResource, validate_symbol


class CompanyResource(BaseResource):
    """
    Company data endpoints.

    Example:
        >>> profile = await fmp.company.get_profile("AAPL")
        >>> quote = await fmp.company.get_quote("AAPL")
    """

    async def get_profile(self, symbol: str) -> List[Any]:
        """Company profile (cached for a day by default)."""
        return await self._get("profile", {"symbol": validate_symbol(symbol)})

    async def get_quote(self, symbol: str) -> List[Any]:
        """Real-time quote; never served from cache by default."""
        return await self._get("quote", {"symbol": validate_symbol(symbol)})

    async def get_quotes(self, symbols: Sequence[str]) -> List[Any]:
        """Real-time quotes for several symbols in one request."""
        if not symbols:
            raise FMPValidationError("At least one symbol is required", field="symbols")

        return await self._get(
            "batch-quote",
            {"symbols": [validate_symbol(symbol, field="symbols") for symbol in symbols]},
        )

    async def get_stock_peers(self, symbol: str) -> List[Any]:
        return await self._get("stock-peers", {"symbol": validate_symbol(symbol)})

    async def get_key_executives(self, symbol: str) -> List[Any]:
        return await self._get("key-executives", {"symbol": validate_symbol(symbol)})

    async def get_symbols_list(self, exchange: Optional[str] = None) -> List[Any]:
        """All tradable symbols, optionally restricted to one exchange."""
        params = {"exchange": exchange.upper()} if exchange else None
        return await self._get("stock-list", params)
