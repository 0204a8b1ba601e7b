"""Financial statements, ratios and key metrics."""

from typing import Any, List, Optional, Union

from fmp_sdk.resources.base import (
    BaseResource,
    Period,
    validate_choice,
    validate_limit,
    validate_symbol,
)


class FinancialsResource(BaseResource):
    """
    Financial statement endpoints.

    Every method takes a symbol, a period (annual or quarter) and an
    optional row limit.
    """

    async def _statement(
        self,
        endpoint: str,
        symbol: str,
        period: Union[Period, str],
        limit: Optional[int],
    ) -> List[Any]:
        return await self._get(
            endpoint,
            {
                "symbol": validate_symbol(symbol),
                "period": validate_choice(Period, period, "period").value,
                "limit": validate_limit(limit),
            },
        )

    async def get_income_statement(
        self, symbol: str, period: Union[Period, str] = Period.ANNUAL, limit: Optional[int] = None
    ) -> List[Any]:
        return await self._statement("income-statement", symbol, period, limit)

    async def get_balance_sheet(
        self, symbol: str, period: Union[Period, str] = Period.ANNUAL, limit: Optional[int] = None
    ) -> List[Any]:
        return await self._statement("balance-sheet-statement", symbol, period, limit)

    async def get_cash_flow_statement(
        self, symbol: str, period: Union[Period, str] = Period.ANNUAL, limit: Optional[int] = None
    ) -> List[Any]:
        return await self._statement("cash-flow-statement", symbol, period, limit)

    async def get_ratios(
        self, symbol: str, period: Union[Period, str] = Period.ANNUAL, limit: Optional[int] = None
    ) -> List[Any]:
        return await self._statement("ratios", symbol, period, limit)

    async def get_key_metrics(
        self, symbol: str, period: Union[Period, str] = Period.ANNUAL, limit: Optional[int] = None
    ) -> List[Any]:
        return await self._statement("key-metrics", symbol, period, limit)
