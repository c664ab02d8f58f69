"""
OHLCV data providers.
"""
from .interfaces import (
    Candle,
    Interval,
    NoDataError,
    OhlcvDataProvider,
    ProviderError,
    RateLimitExceededError,
)
from .rate_limiter import SlidingWindowRateLimiter
from .coinmarketcap_provider import CoinMarketCapOhlcvProvider
from .binance_provider import BinanceOhlcvProvider

__all__ = [
    "Candle",
    "Interval",
    "NoDataError",
    "OhlcvDataProvider",
    "ProviderError",
    "RateLimitExceededError",
    "SlidingWindowRateLimiter",
    "CoinMarketCapOhlcvProvider",
    "BinanceOhlcvProvider",
]
