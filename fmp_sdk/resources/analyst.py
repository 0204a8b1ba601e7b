"""Analyst estimates, price targets and grades."""

from typing import Any, List, Optional, Union

from fmp_sdk.resources.base import (
    BaseResource,
    Period,
    validate_choice,
    validate_limit,
    validate_symbol,
)


class AnalystResource(BaseResource):
    """Analyst data endpoints (cached for an hour by default)."""

    async def get_estimates(
        self,
        symbol: str,
        period: Union[Period, str] = Period.ANNUAL,
        limit: Optional[int] = None,
    ) -> List[Any]:
        return await self._get(
            "analyst-estimates",
            {
                "symbol": validate_symbol(symbol),
                "period": validate_choice(Period, period, "period").value,
                "limit": validate_limit(limit),
            },
        )

    async def get_price_targets(self, symbol: str) -> List[Any]:
        return await self._get("price-target", {"symbol": validate_symbol(symbol)})

    async def get_price_target_summary(self, symbol: str) -> Optional[Any]:
        """Price target summary, unwrapped from the single-element list FMP returns."""
        result = await self._get("price-target-summary", {"symbol": validate_symbol(symbol)})
        if isinstance(result, list):
            return result[0] if result else None
        return result

    async def get_grades(self, symbol: str) -> List[Any]:
        return await self._get("grades", {"symbol": validate_symbol(symbol)})
