"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, List
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cryptoquant.data_providers import Candle, Interval, NoDataError, OhlcvDataProvider


FIRST_CANDLE = datetime(2024, 1, 2, tzinfo=timezone.utc)
NOW = datetime(2024, 4, 1, tzinfo=timezone.utc)


def build_candles(closes, start: datetime = FIRST_CANDLE) -> List[Candle]:
    """Daily provider candles with a 1-unit high/low spread around each close."""
    candles = []
    for i, close in enumerate(closes):
        close = Decimal(str(close))
        candles.append(Candle(
            timestamp=start + timedelta(days=i),
            open=close,
            high=close + 1,
            low=close - 1,
            close=close,
            volume=Decimal("1000"),
        ))
    return candles


class FakeProvider(OhlcvDataProvider):
    """In-memory provider serving fixed closes per symbol."""
    
    name = "fake"
    
    def __init__(self, closes_by_symbol: Dict[str, list]):
        self.closes_by_symbol = closes_by_symbol
        self.calls = []
        self.closed = False
    
    async def get_ohlcv(self, symbol, start_time, end_time, interval=Interval.DAY_1):
        self.calls.append((symbol, start_time, end_time, interval))
        closes = self.closes_by_symbol.get(symbol)
        if not closes:
            raise NoDataError(symbol)
        return build_candles(closes)
    
    async def close(self):
        self.closed = True


@pytest.fixture
def fixed_now() -> datetime:
    return NOW


@pytest.fixture
def candle_factory():
    """Build provider candles from a list of closes."""
    return build_candles


@pytest.fixture
def fake_provider() -> FakeProvider:
    """
    BTC rises steadily, ETH falls steadily, DOGE has too few candles for
    most indicators. SOL covers a week: enough for price action, too short
    for any indicator.
    """
    return FakeProvider({
        "BTC": [100 + i for i in range(90)],
        "ETH": [300 - i for i in range(90)],
        "DOGE": [1, 2, 3, 2, 1],
        "SOL": [20 + i for i in range(8)],
    })


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Reset settings to test values before each test."""
    # Override environment variables for testing
    monkeypatch.setenv("SENTRY_DSN", "")  # Disable Sentry in tests
    monkeypatch.setenv("COINMARKETCAP_API_KEY", "test-key")
