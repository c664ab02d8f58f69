"""
Binance OHLCV Data Provider.
Implements OhlcvDataProvider against the public /api/v3/klines endpoint.
"""
import httpx
import logging
from typing import List, Optional
from decimal import Decimal
from datetime import datetime, timezone
from .interfaces import (
    Candle,
    Interval,
    NoDataError,
    OhlcvDataProvider,
    ProviderError,
)
from .rate_limiter import SlidingWindowRateLimiter
from cryptoquant.config import settings

logger = logging.getLogger(__name__)

KLINES_LIMIT = 1000  # Binance max per request


def _to_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


class BinanceOhlcvProvider(OhlcvDataProvider):
    """Binance implementation of OhlcvDataProvider."""
    
    name = "binance"
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        quote_asset: str = "USDT",
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.BINANCE_BASE_URL).rstrip("/") + "/api/v3"
        self.quote_asset = quote_asset
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            max_requests=settings.RATE_LIMIT_REQUESTS_PER_MINUTE,
            window_seconds=60,
        )
        self.client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    
    def _map_interval(self, interval: Interval) -> str:
        """Map internal interval to Binance interval."""
        mapping = {
            Interval.HOUR_1: "1h",
            Interval.DAY_1: "1d",
        }
        return mapping.get(interval, "1d")
    
    def _symbol_to_pair(self, symbol: str) -> str:
        """Convert symbol to Binance trading pair."""
        return f"{symbol.upper()}{self.quote_asset}"
    
    async def _fetch_klines(self, pair: str, interval: str, start_ms: int, end_ms: int) -> list:
        params = {
            "symbol": pair,
            "interval": interval,
            "startTime": start_ms,
            "endTime": end_ms,
            "limit": KLINES_LIMIT,
        }
        self.rate_limiter.record_request()
        logger.debug(f"Binance klines request {params}")
        try:
            response = await self.client.get(f"{self.base_url}/klines", params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            # Unknown pairs come back as 400 with code -1121
            if status_code == 400:
                return []
            logger.error(f"Binance API error {status_code} for {pair}")
            raise ProviderError(f"Binance API error {status_code}", status_code=status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Binance request failed for {pair}: {e}")
            raise ProviderError(f"Binance request failed: {e}") from e
        return response.json()
    
    async def get_ohlcv(
        self,
        symbol: str,
        start_time: datetime,
        end_time: datetime,
        interval: Interval = Interval.DAY_1
    ) -> List[Candle]:
        """Get OHLCV candles for a symbol and window, paging through klines."""
        pair = self._symbol_to_pair(symbol)
        binance_interval = self._map_interval(interval)
        start_ms, end_ms = _to_ms(start_time), _to_ms(end_time)
        
        candles: List[Candle] = []
        while start_ms <= end_ms:
            klines = await self._fetch_klines(pair, binance_interval, start_ms, end_ms)
            for kline in klines:
                # Binance kline format: [open time, open, high, low, close, volume, ...]
                candles.append(Candle(
                    timestamp=datetime.fromtimestamp(kline[0] / 1000, tz=timezone.utc),
                    open=Decimal(str(kline[1])),
                    high=Decimal(str(kline[2])),
                    low=Decimal(str(kline[3])),
                    close=Decimal(str(kline[4])),
                    volume=Decimal(str(kline[5]))
                ))
            if len(klines) < KLINES_LIMIT:
                break
            start_ms = klines[-1][0] + 1
        
        if not candles:
            raise NoDataError(symbol.upper())
        
        logger.info(f"Fetched {len(candles)} candles for {pair} from Binance")
        return candles
    
    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
