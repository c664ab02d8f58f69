"""
Candle builders shared by the analytics tests.
"""
from decimal import Decimal

from ..types import Candle

DAY_MS = 86_400_000
START_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z


def make_candles(closes, volumes=None, spread="1"):
    """Daily candles with high/low ``spread`` around each close."""
    spread = Decimal(spread)
    if volumes is None:
        volumes = [1000] * len(closes)
    candles = []
    for i, (close, volume) in enumerate(zip(closes, volumes)):
        close = Decimal(str(close))
        candles.append(Candle(
            timestamp=START_MS + i * DAY_MS,
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
            volume=Decimal(str(volume)),
        ))
    return candles


def linear_closes(count, start=100, step=1):
    return [Decimal(start + i * step) for i in range(count)]
