"""Unit tests for resource groupings.

Resources only build query parameters; the client is mocked.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from fmp_sdk.api.exceptions import FMPValidationError
from fmp_sdk.resources import (
    AnalystResource,
    CompanyResource,
    FinancialsResource,
    IntradayInterval,
    MarketResource,
    NewsResource,
    PerformanceResource,
    Period,
)
from fmp_sdk.resources.base import validate_date_range, validate_symbol


@pytest.fixture
def client():
    mock = MagicMock()
    mock.get = AsyncMock(return_value=[{"symbol": "AAPL"}])
    return mock


class TestValidation:
    """Test argument validation helpers."""

    def test_symbol_is_upper_cased(self):
        assert validate_symbol(" aapl ") == "AAPL"

    @pytest.mark.parametrize("symbol", ["BRK.B", "^GSPC", "EURUSD=X", "BTC-USD"])
    def test_symbol_special_characters(self, symbol):
        assert validate_symbol(symbol) == symbol

    def test_empty_symbol(self):
        with pytest.raises(FMPValidationError) as exc_info:
            validate_symbol("")

        assert exc_info.value.field == "symbol"
        assert "Symbol is required" in str(exc_info.value)

    def test_malformed_symbol(self):
        with pytest.raises(FMPValidationError):
            validate_symbol("AAPL; DROP")

    def test_date_range(self):
        """Test a start after the end is rejected."""
        validate_date_range("2024-01-01", "2024-12-31")

        with pytest.raises(FMPValidationError) as exc_info:
            validate_date_range("2024-12-31", "2024-01-01")

        assert exc_info.value.field == "from"

    def test_bad_date_format(self):
        with pytest.raises(FMPValidationError):
            validate_date_range("01/02/2024", None)


class TestCompanyResource:
    """Test CompanyResource."""

    @pytest.mark.asyncio
    async def test_get_profile(self, client):
        result = await CompanyResource(client).get_profile("aapl")

        assert result == [{"symbol": "AAPL"}]
        client.get.assert_awaited_once_with("profile", {"symbol": "AAPL"})

    @pytest.mark.asyncio
    async def test_get_quote(self, client):
        await CompanyResource(client).get_quote("MSFT")

        client.get.assert_awaited_once_with("quote", {"symbol": "MSFT"})

    @pytest.mark.asyncio
    async def test_get_quotes(self, client):
        await CompanyResource(client).get_quotes(["aapl", "msft"])

        client.get.assert_awaited_once_with("batch-quote", {"symbols": ["AAPL", "MSFT"]})

    @pytest.mark.asyncio
    async def test_get_quotes_requires_symbols(self, client):
        """Test an empty symbol list fails before any request."""
        with pytest.raises(FMPValidationError):
            await CompanyResource(client).get_quotes([])

        client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_symbols_list(self, client):
        resource = CompanyResource(client)

        await resource.get_symbols_list()
        client.get.assert_awaited_with("stock-list", None)

        await resource.get_symbols_list("nasdaq")
        client.get.assert_awaited_with("stock-list", {"exchange": "NASDAQ"})

    @pytest.mark.asyncio
    async def test_peers_and_executives(self, client):
        resource = CompanyResource(client)

        await resource.get_stock_peers("AAPL")
        client.get.assert_awaited_with("stock-peers", {"symbol": "AAPL"})

        await resource.get_key_executives("AAPL")
        client.get.assert_awaited_with("key-executives", {"symbol": "AAPL"})


class TestMarketResource:
    """Test MarketResource."""

    @pytest.mark.asyncio
    async def test_get_historical_prices(self, client):
        await MarketResource(client).get_historical_prices("AAPL", "2024-01-01", "2024-02-01")

        client.get.assert_awaited_once_with(
            "historical-price-eod/full",
            {"symbol": "AAPL", "from": "2024-01-01", "to": "2024-02-01"},
        )

    @pytest.mark.asyncio
    async def test_get_intraday_chart(self, client):
        """Test the interval becomes part of the endpoint path."""
        await MarketResource(client).get_intraday_chart("AAPL", IntradayInterval.FIVE_MINUTES)

        client.get.assert_awaited_once_with(
            "historical-chart/5min",
            {"symbol": "AAPL", "from": None, "to": None},
        )

    @pytest.mark.asyncio
    async def test_get_intraday_chart_string_interval(self, client):
        await MarketResource(client).get_intraday_chart("AAPL", "1hour")

        assert client.get.await_args.args[0] == "historical-chart/1hour"

    @pytest.mark.asyncio
    async def test_invalid_interval(self, client):
        with pytest.raises(FMPValidationError) as exc_info:
            await MarketResource(client).get_intraday_chart("AAPL", "2min")

        assert exc_info.value.field == "interval"

    @pytest.mark.asyncio
    async def test_forex_and_crypto(self, client):
        resource = MarketResource(client)

        await resource.get_forex_quotes()
        client.get.assert_awaited_with("batch-forex-quotes", None)

        await resource.get_crypto_quotes()
        client.get.assert_awaited_with("batch-crypto-quotes", None)


class TestFinancialsResource:
    """Test FinancialsResource."""

    @pytest.mark.parametrize(
        "method,endpoint",
        [
            ("get_income_statement", "income-statement"),
            ("get_balance_sheet", "balance-sheet-statement"),
            ("get_cash_flow_statement", "cash-flow-statement"),
            ("get_ratios", "ratios"),
            ("get_key_metrics", "key-metrics"),
        ],
    )
    @pytest.mark.asyncio
    async def test_statement_endpoints(self, client, method, endpoint):
        await getattr(FinancialsResource(client), method)("aapl", Period.QUARTER, 4)

        client.get.assert_awaited_once_with(
            endpoint, {"symbol": "AAPL", "period": "quarter", "limit": 4}
        )

    @pytest.mark.asyncio
    async def test_defaults(self, client):
        await FinancialsResource(client).get_income_statement("AAPL")

        client.get.assert_awaited_once_with(
            "income-statement", {"symbol": "AAPL", "period": "annual", "limit": None}
        )

    @pytest.mark.asyncio
    async def test_invalid_period(self, client):
        with pytest.raises(FMPValidationError) as exc_info:
            await FinancialsResource(client).get_ratios("AAPL", "monthly")

        assert exc_info.value.field == "period"

    @pytest.mark.asyncio
    async def test_invalid_limit(self, client):
        with pytest.raises(FMPValidationError):
            await FinancialsResource(client).get_key_metrics("AAPL", limit=0)


class TestAnalystResource:
    """Test AnalystResource."""

    @pytest.mark.asyncio
    async def test_get_estimates(self, client):
        await AnalystResource(client).get_estimates("AAPL", "quarter", 2)

        client.get.assert_awaited_once_with(
            "analyst-estimates", {"symbol": "AAPL", "period": "quarter", "limit": 2}
        )

    @pytest.mark.asyncio
    async def test_price_target_summary_unwraps_list(self, client):
        client.get.return_value = [{"symbol": "AAPL", "lastMonthAvgPriceTarget": 210.0}]

        result = await AnalystResource(client).get_price_target_summary("AAPL")

        assert result == {"symbol": "AAPL", "lastMonthAvgPriceTarget": 210.0}
        client.get.assert_awaited_once_with("price-target-summary", {"symbol": "AAPL"})

    @pytest.mark.asyncio
    async def test_price_target_summary_empty(self, client):
        client.get.return_value = []

        assert await AnalystResource(client).get_price_target_summary("AAPL") is None

    @pytest.mark.asyncio
    async def test_targets_and_grades(self, client):
        resource = AnalystResource(client)

        await resource.get_price_targets("AAPL")
        client.get.assert_awaited_with("price-target", {"symbol": "AAPL"})

        await resource.get_grades("AAPL")
        client.get.assert_awaited_with("grades", {"symbol": "AAPL"})


class TestNewsResource:
    """Test NewsResource."""

    @pytest.mark.asyncio
    async def test_stock_news_with_ticker_string(self, client):
        await NewsResource(client).get_stock_news("aapl,msft", limit=10)

        client.get.assert_awaited_once_with("stock-news", {"tickers": ["AAPL", "MSFT"], "limit": 10})

    @pytest.mark.asyncio
    async def test_stock_news_without_tickers(self, client):
        await NewsResource(client).get_stock_news()

        client.get.assert_awaited_once_with("stock-news", {"tickers": None, "limit": 50})

    @pytest.mark.asyncio
    async def test_press_releases(self, client):
        await NewsResource(client).get_press_releases("AAPL", page=2)

        client.get.assert_awaited_once_with("press-releases", {"symbol": "AAPL", "page": 2})

    @pytest.mark.asyncio
    async def test_press_releases_negative_page(self, client):
        with pytest.raises(FMPValidationError):
            await NewsResource(client).get_press_releases("AAPL", page=-1)


class TestPerformanceResource:
    """Test PerformanceResource."""

    @pytest.mark.parametrize(
        "method,endpoint",
        [
            ("get_gainers", "biggest-gainers"),
            ("get_losers", "biggest-losers"),
            ("get_most_active", "most-actives"),
        ],
    )
    @pytest.mark.asyncio
    async def test_movers(self, client, method, endpoint):
        await getattr(PerformanceResource(client), method)()

        client.get.assert_awaited_once_with(endpoint, None)

    @pytest.mark.asyncio
    async def test_sector_performance(self, client):
        await PerformanceResource(client).get_sector_performance("2024-06-03")

        client.get.assert_awaited_once_with("sector-performance-snapshot", {"date": "2024-06-03"})

    @pytest.mark.asyncio
    async def test_sector_performance_bad_date(self, client):
        with pytest.raises(FMPValidationError):
            await PerformanceResource(client).get_sector_performance("June 3")
