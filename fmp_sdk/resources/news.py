"""Stock news and press releases."""

from typing import Any, List, Optional, Sequence, Union

from fmp_sdk.api.exceptions import FMPValidationError
from fmp_sdk.resources.base import BaseResource, validate_limit, validate_symbol


class NewsResource(BaseResource):
    """News endpoints."""

    async def get_stock_news(
        self,
        tickers: Optional[Union[str, Sequence[str]]] = None,
        limit: int = 50,
    ) -> List[Any]:
        """
        Latest stock news, optionally filtered by tickers.

        Args:
            tickers: One symbol, a comma-separated string or a list of symbols
            limit: Maximum number of articles
        """
        if isinstance(tickers, str):
            tickers = [part for part in tickers.split(",") if part.strip()]

        symbols = [validate_symbol(ticker, field="tickers") for ticker in tickers or []]

        return await self._get(
            "stock-news",
            {"tickers": symbols or None, "limit": validate_limit(limit)},
        )

    async def get_press_releases(self, symbol: str, page: int = 0) -> List[Any]:
        if page < 0:
            raise FMPValidationError("Must be >= 0", field="page")

        return await self._get(
            "press-releases",
            {"symbol": validate_symbol(symbol), "page": page},
        )
