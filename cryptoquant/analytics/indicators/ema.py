"""
EMA (Exponential Moving Average) Indicator

Formula:
- multiplier = 2 / (period + 1)
- EMA(0) = close(0)
- EMA(today) = (close(today) - EMA(yesterday)) * multiplier + EMA(yesterday)
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


def ema_series(values: List[Decimal], period: int) -> List[Decimal]:
    """
    Full-length EMA series seeded with the first value.

    Returns a list aligned with ``values`` (same length).
    """
    if period <= 0:
        raise ValueError("period must be positive")
    if not values:
        return []

    multiplier = Decimal(2) / Decimal(period + 1)
    ema_values = [values[0]]
    for value in values[1:]:
        previous = ema_values[-1]
        ema_values.append((value - previous) * multiplier + previous)
    return ema_values


def calculate_ema(data: PriceInput, period: int = 20) -> MovingAverageResult:
    """
    Calculate Exponential Moving Average (EMA).

    Args:
        data: List of Candle objects or List of closing prices
        period: EMA period (e.g., 12, 26, 50)

    Returns:
        MovingAverageResult with the latest EMA value and signal
        (bullish if price > EMA, else bearish).

    Raises:
        InsufficientDataError: fewer than ``period`` prices
    """
    closes = extract_closes(data)
    if len(closes) < period:
        raise InsufficientDataError(f"EMA({period})", period, len(closes))

    ema_values = ema_series(closes, period)
    current = ema_values[-1]
    price = closes[-1]

    return MovingAverageResult(
        kind="ema",
        period=period,
        value=current,
        price=price,
        signal=SignalTag.BULLISH if price > current else SignalTag.BEARISH,
        history=tuple(ema_values[-HISTORY_LENGTH:]),
    )
