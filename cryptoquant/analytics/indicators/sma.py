"""
SMA (Simple Moving Average) Indicator

Formula:
- SMA(t) = sum(close[t-period+1..t]) / period
- Signal: bullish if current price > current SMA, else bearish
"""
from decimal import Decimal
from typing import List

from ..errors import InsufficientDataError
from ..types import (
    HISTORY_LENGTH,
    MovingAverageResult,
    PriceInput,
    SignalTag,
    extract_closes,
)


def sma_series(values: List[Decimal], period: int, metric: str = "") -> List[Decimal]:
    """
    Rolling simple average.

    Element i is the mean of values[i .. i+period-1], so the result is
    ``len(values) - period + 1`` long.
    """
    if period <= 0:
        raise ValueError("period must be positive")
    if len(values) < period:
        raise InsufficientDataError(metric or f"SMA({period})", period, len(values))

    divisor = Decimal(period)
    return [
        sum(values[i:i + period], Decimal(0)) / divisor
        for i in range(len(values) - period + 1)
    ]


def calculate_sma(data: PriceInput, period: int = 20) -> MovingAverageResult:
    """
    Calculate Simple Moving Average over the trailing ``period`` closes.

    Args:
        data: List of Candle objects or List of closing prices
        period: SMA period (e.g., 20, 50, 200)

    Raises:
        InsufficientDataError: fewer than ``period`` prices
    """
    closes = extract_closes(data)
    averages = sma_series(closes, period)
    current = averages[-1]
    price = closes[-1]

    return MovingAverageResult(
        kind="sma",
        period=period,
        value=current,
        price=price,
        signal=SignalTag.BULLISH if price > current else SignalTag.BEARISH,
        history=tuple(averages[-HISTORY_LENGTH:]),
    )
