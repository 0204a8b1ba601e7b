"""Market movers and sector performance."""

from typing import Any, List, Optional

from fmp_sdk.resources.base import BaseResource, validate_date


class PerformanceResource(BaseResource):
    """Aggregate market data (cached for a minute by default)."""

    async def get_gainers(self) -> List[Any]:
        return await self._get("biggest-gainers")

    async def get_losers(self) -> List[Any]:
        return await self._get("biggest-losers")

    async def get_most_active(self) -> List[Any]:
        return await self._get("most-actives")

    async def get_sector_performance(self, snapshot_date: Optional[str] = None) -> List[Any]:
        """Sector performance, for a given trading day when snapshot_date is set."""
        validate_date(snapshot_date, "date")
        return await self._get("sector-performance-snapshot", {"date": snapshot_date})
