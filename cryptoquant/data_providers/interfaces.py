"""
Data Provider Interfaces.
A provider returns the ordered OHLCV candles of one symbol over a time window.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from enum import Enum

from cryptoquant.error_models import ErrorCode


class Interval(str, Enum):
    """Candle interval enumeration."""
    HOUR_1 = "1h"
    DAY_1 = "1d"


class Candle:
    """OHLCV Candle data as returned by providers (datetime open time)."""
    def __init__(
        self,
        timestamp: datetime,
        open: Decimal,
        high: Decimal,
        low: Decimal,
        close: Decimal,
        volume: Decimal
    ):
        self.timestamp = timestamp
        self.open = open
        self.high = high
        self.low = low
        self.close = close
        self.volume = volume
    
    def __repr__(self) -> str:
        return f"Candle({self.timestamp.isoformat()}, close={self.close})"


class ProviderError(Exception):
    """Upstream data provider failure."""
    error_code = ErrorCode.UPSTREAM_ERROR
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NoDataError(ProviderError):
    """The symbol/window combination yielded no candles."""
    error_code = ErrorCode.NO_DATA
    
    def __init__(self, symbol: str, message: Optional[str] = None):
        super().__init__(message or f"No OHLCV data available for {symbol}")
        self.symbol = symbol


class RateLimitExceededError(ProviderError):
    """Request budget for the current window is exhausted."""
    error_code = ErrorCode.RATE_LIMIT_EXCEEDED
    
    def __init__(self, max_requests: int, window_seconds: float, retry_after: float):
        super().__init__(
            f"Rate limit exceeded: {max_requests} requests per {window_seconds:g}s "
            f"(retry after {retry_after:.1f}s)"
        )
        self.retry_after = retry_after


class OhlcvDataProvider(ABC):
    """Interface for OHLCV time-series providers."""
    
    name: str = "provider"
    
    @abstractmethod
    async def get_ohlcv(
        self,
        symbol: str,
        start_time: datetime,
        end_time: datetime,
        interval: Interval = Interval.DAY_1
    ) -> List[Candle]:
        """
        Get candles for a symbol between start_time and end_time, oldest first.
        
        Raises:
            NoDataError: nothing was returned for the symbol/window
            ProviderError: upstream failure
        """
        pass
    
    async def close(self):
        """Release provider resources."""
        pass
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
