"""
Resource groupings wrapping FMP endpoints.

Each resource turns method arguments into query parameters and calls
FMPClient.get(); caching, retries and error handling live in the client.
"""

from fmp_sdk.resources.analyst import AnalystResource
from fmp_sdk.resources.base import BaseResource, Period
from fmp_sdk.resources.company import CompanyResource
from fmp_sdk.resources.financials import FinancialsResource
from fmp_sdk.resources.market import IntradayInterval, MarketResource
from fmp_sdk.resources.news import NewsResource
from fmp_sdk.resources.performance import PerformanceResource

__all__ = [
    "AnalystResource",
    "BaseResource",
    "CompanyResource",
    "FinancialsResource",
    "IntradayInterval",
    "MarketResource",
    "NewsResource",
    "PerformanceResource",
    "Period",
]
