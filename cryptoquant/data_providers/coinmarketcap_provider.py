"""
CoinMarketCap OHLCV Data Provider.
Implements OhlcvDataProvider against /v1/cryptocurrency/ohlcv/historical.
"""
import httpx
import logging
from typing import Any, Dict, List, Optional
from decimal import Decimal
from datetime import datetime
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

OHLCV_PATH = "/v1/cryptocurrency/ohlcv/historical"
QUOTE_CURRENCY = "USD"


def _parse_time(value: str) -> datetime:
    """CMC timestamps look like 2024-01-01T00:00:00.000Z."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class CoinMarketCapOhlcvProvider(OhlcvDataProvider):
    """CoinMarketCap implementation of OhlcvDataProvider."""
    
    name = "coinmarketcap"
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.COINMARKETCAP_API_KEY
        self.base_url = (base_url or settings.COINMARKETCAP_BASE_URL).rstrip("/")
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            max_requests=settings.RATE_LIMIT_REQUESTS_PER_MINUTE,
            window_seconds=60,
        )
        self.client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        if not self.api_key:
            logger.warning("COINMARKETCAP_API_KEY is not set; requests will be rejected upstream")
    
    def _map_interval(self, interval: Interval) -> str:
        """Map internal interval to CMC interval."""
        mapping = {
            Interval.HOUR_1: "hourly",
            Interval.DAY_1: "daily",
        }
        return mapping.get(interval, "daily")
    
    def _extract_quotes(self, symbol: str, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = payload.get("data") or {}
        # Symbol queries may come back keyed by symbol, optionally as a list.
        if "quotes" not in data:
            data = data.get(symbol) or {}
            if isinstance(data, list):
                data = data[0] if data else {}
        return data.get("quotes") or []
    
    def _parse_quote(self, quote: Dict[str, Any]) -> Candle:
        usd = quote["quote"][QUOTE_CURRENCY]
        return Candle(
            timestamp=_parse_time(quote["time_open"]),
            open=Decimal(str(usd["open"])),
            high=Decimal(str(usd["high"])),
            low=Decimal(str(usd["low"])),
            close=Decimal(str(usd["close"])),
            volume=Decimal(str(usd.get("volume") or 0)),
        )
    
    async def get_ohlcv(
        self,
        symbol: str,
        start_time: datetime,
        end_time: datetime,
        interval: Interval = Interval.DAY_1
    ) -> List[Candle]:
        """Get OHLCV candles for a symbol and window."""
        symbol = symbol.upper()
        params = {
            "symbol": symbol,
            "time_start": start_time.isoformat(),
            "time_end": end_time.isoformat(),
            "interval": self._map_interval(interval),
            "convert": QUOTE_CURRENCY,
        }
        headers = {
            "X-CMC_PRO_API_KEY": self.api_key,
            "Accept": "application/json",
        }
        
        self.rate_limiter.record_request()
        logger.debug(f"CMC request {OHLCV_PATH} {params}")
        try:
            response = await self.client.get(
                f"{self.base_url}{OHLCV_PATH}", params=params, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"CMC request failed for {symbol}: {e}")
            raise ProviderError(f"CoinMarketCap request failed: {e}") from e
        
        if response.status_code != 200:
            message = response.reason_phrase
            try:
                status = response.json().get("status") or {}
                message = status.get("error_message") or message
            except ValueError:
                pass
            logger.error(f"CMC API error {response.status_code} for {symbol}: {message}")
            raise ProviderError(
                f"CoinMarketCap API error {response.status_code}: {message}",
                status_code=response.status_code,
            )
        
        payload = response.json()
        status = payload.get("status") or {}
        logger.debug(f"CMC credits used: {status.get('credit_count', 'N/A')}")
        
        try:
            candles = [self._parse_quote(q) for q in self._extract_quotes(symbol, payload)]
        except (KeyError, TypeError) as e:
            raise ProviderError(f"Unexpected CoinMarketCap payload for {symbol}: {e}") from e
        
        if not candles:
            raise NoDataError(symbol)
        
        candles.sort(key=lambda c: c.timestamp)
        logger.info(f"Fetched {len(candles)} candles for {symbol} from CoinMarketCap")
        return candles
    
    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
