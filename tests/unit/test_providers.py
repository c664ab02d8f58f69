"""
Unit tests for the OHLCV data providers, using httpx.MockTransport.
"""
import pytest
import httpx
from datetime import datetime, timezone
from decimal import Decimal

from cryptoquant.data_providers import (
    BinanceOhlcvProvider,
    CoinMarketCapOhlcvProvider,
    Interval,
    NoDataError,
    ProviderError,
    RateLimitExceededError,
    SlidingWindowRateLimiter,
)
from cryptoquant.data_providers import binance_provider


START = datetime(2024, 1, 1, tzinfo=timezone.utc)
END = datetime(2024, 1, 4, tzinfo=timezone.utc)


def cmc_quote(time_open: str, close: float) -> dict:
    return {
        "time_open": time_open,
        "time_close": time_open,
        "quote": {
            "USD": {
                "open": close - 1,
                "high": close + 2,
                "low": close - 2,
                "close": close,
                "volume": 12345.5,
                "market_cap": 1e12,
                "timestamp": time_open,
            }
        },
    }


def cmc_payload(quotes) -> dict:
    return {
        "status": {"error_code": 0, "error_message": None, "credit_count": 1},
        "data": {"id": 1, "name": "Bitcoin", "symbol": "BTC", "quotes": quotes},
    }


def make_cmc(handler, **kwargs) -> CoinMarketCapOhlcvProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CoinMarketCapOhlcvProvider(
        api_key="test-key",
        base_url="https://cmc.test",
        client=client,
        **kwargs,
    )


def make_binance(handler, **kwargs) -> BinanceOhlcvProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return BinanceOhlcvProvider(base_url="https://binance.test", client=client, **kwargs)


def kline(open_time: datetime, close: str) -> list:
    ms = int(open_time.timestamp() * 1000)
    return [ms, close, close, close, close, "100.5", ms + 86_399_999, "0", 10, "0", "0", "0"]


@pytest.mark.unit
class TestCoinMarketCapProvider:
    
    @pytest.mark.asyncio
    async def test_fetch_candles(self):
        requests = []
        
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=cmc_payload([
                cmc_quote("2024-01-02T00:00:00.000Z", 43000.0),
                cmc_quote("2024-01-01T00:00:00.000Z", 42000.0),
            ]))
        
        provider = make_cmc(handler)
        candles = await provider.get_ohlcv("btc", START, END, Interval.DAY_1)
        await provider.close()
        
        assert len(candles) == 2
        # Sorted oldest first
        assert candles[0].timestamp == START
        assert candles[0].close == Decimal("42000.0")
        assert candles[1].high == Decimal("43002.0")
        assert candles[1].volume == Decimal("12345.5")
        
        request = requests[0]
        assert request.url.path == "/v1/cryptocurrency/ohlcv/historical"
        assert request.url.params["symbol"] == "BTC"
        assert request.url.params["interval"] == "daily"
        assert request.url.params["convert"] == "USD"
        assert request.headers["X-CMC_PRO_API_KEY"] == "test-key"
    
    @pytest.mark.asyncio
    async def test_hourly_interval(self):
        seen = {}
        
        def handler(request: httpx.Request) -> httpx.Response:
            seen["interval"] = request.url.params["interval"]
            return httpx.Response(200, json=cmc_payload([
                cmc_quote("2024-01-01T00:00:00.000Z", 42000.0),
            ]))
        
        provider = make_cmc(handler)
        await provider.get_ohlcv("BTC", START, END, Interval.HOUR_1)
        
        assert seen["interval"] == "hourly"
    
    @pytest.mark.asyncio
    async def test_symbol_keyed_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={
                "status": {"error_code": 0},
                "data": {"BTC": [{"quotes": [cmc_quote("2024-01-01T00:00:00.000Z", 1.5)]}]},
            })
        
        provider = make_cmc(handler)
        candles = await provider.get_ohlcv("BTC", START, END)
        
        assert [c.close for c in candles] == [Decimal("1.5")]
    
    @pytest.mark.asyncio
    async def test_empty_quotes(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=cmc_payload([]))
        
        provider = make_cmc(handler)
        with pytest.raises(NoDataError) as exc_info:
            await provider.get_ohlcv("BTC", START, END)
        assert exc_info.value.symbol == "BTC"
    
    @pytest.mark.asyncio
    async def test_api_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={
                "status": {"error_code": 1002, "error_message": "API key missing."}
            })
        
        provider = make_cmc(handler)
        with pytest.raises(ProviderError) as exc_info:
            await provider.get_ohlcv("BTC", START, END)
        
        assert exc_info.value.status_code == 401
        assert "API key missing." in str(exc_info.value)
    
    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)
        
        provider = make_cmc(handler)
        with pytest.raises(ProviderError):
            await provider.get_ohlcv("BTC", START, END)
    
    @pytest.mark.asyncio
    async def test_rate_limited(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=cmc_payload([
                cmc_quote("2024-01-01T00:00:00.000Z", 1.0),
            ]))
        
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
        provider = make_cmc(handler, rate_limiter=limiter)
        await provider.get_ohlcv("BTC", START, END)
        
        with pytest.raises(RateLimitExceededError):
            await provider.get_ohlcv("BTC", START, END)


@pytest.mark.unit
class TestBinanceProvider:
    
    @pytest.mark.asyncio
    async def test_fetch_candles(self):
        requests = []
        
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[
                kline(START, "42000.10"),
                kline(datetime(2024, 1, 2, tzinfo=timezone.utc), "43000.20"),
            ])
        
        provider = make_binance(handler)
        candles = await provider.get_ohlcv("btc", START, END)
        await provider.close()
        
        assert [c.close for c in candles] == [Decimal("42000.10"), Decimal("43000.20")]
        assert candles[0].timestamp == START
        assert candles[0].volume == Decimal("100.5")
        
        params = requests[0].url.params
        assert requests[0].url.path == "/api/v3/klines"
        assert params["symbol"] == "BTCUSDT"
        assert params["interval"] == "1d"
        assert params["startTime"] == str(int(START.timestamp() * 1000))
        assert params["endTime"] == str(int(END.timestamp() * 1000))
    
    @pytest.mark.asyncio
    async def test_pagination(self, monkeypatch):
        monkeypatch.setattr(binance_provider, "KLINES_LIMIT", 2)
        days = [datetime(2024, 1, d, tzinfo=timezone.utc) for d in (1, 2, 3)]
        start_times = []
        
        def handler(request: httpx.Request) -> httpx.Response:
            start_ms = int(request.url.params["startTime"])
            start_times.append(start_ms)
            page = [kline(d, "1") for d in days if d.timestamp() * 1000 >= start_ms]
            return httpx.Response(200, json=page[:2])
        
        provider = make_binance(handler)
        candles = await provider.get_ohlcv("ETH", START, END)
        
        assert [c.timestamp for c in candles] == days
        assert len(start_times) == 2
    
    @pytest.mark.asyncio
    async def test_unknown_pair(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"code": -1121, "msg": "Invalid symbol."})
        
        provider = make_binance(handler)
        with pytest.raises(NoDataError):
            await provider.get_ohlcv("NOPE", START, END)
    
    @pytest.mark.asyncio
    async def test_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)
        
        provider = make_binance(handler)
        with pytest.raises(ProviderError) as exc_info:
            await provider.get_ohlcv("BTC", START, END)
        assert exc_info.value.status_code == 503
    
    @pytest.mark.asyncio
    async def test_custom_quote_asset(self):
        seen = {}
        
        def handler(request: httpx.Request) -> httpx.Response:
            seen["symbol"] = request.url.params["symbol"]
            return httpx.Response(200, json=[kline(START, "1")])
        
        provider = make_binance(handler, quote_asset="BUSD")
        await provider.get_ohlcv("sol", START, END, Interval.HOUR_1)
        
        assert seen["symbol"] == "SOLBUSD"
