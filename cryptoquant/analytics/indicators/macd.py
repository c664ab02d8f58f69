"""
MACD (Moving Average Convergence Divergence) Indicator

Default parameters:
- Fast EMA: 12
- Slow EMA: 26
- Signal EMA: 9

Steps:
1. Compute EMA12 and EMA26 over the closes
2. MACD line = EMA12 - EMA26, from the first index where EMA26 has a full
   period behind it
3. Signal line = EMA9(MACD line)
4. Histogram = MACD - Signal

Signal is bullish when MACD > Signal, bearish otherwise. The most recent
crossover is the last sign change of the histogram. Divergence compares the
direction of price and of the MACD line over the trailing 10 points.
"""
from decimal import Decimal
from typing import List

from ..errors import InsufficientDataError
from ..types import (
    HISTORY_LENGTH,
    CrossoverTag,
    MACDResult,
    PriceInput,
    SignalTag,
    extract_closes,
)
from .ema import ema_series

DIVERGENCE_LOOKBACK = 10


def detect_crossover(histogram: List[Decimal]) -> CrossoverTag:
    """Most recent sign change of MACD minus Signal."""
    for i in range(len(histogram) - 1, 0, -1):
        previous, current = histogram[i - 1], histogram[i]
        if previous <= 0 < current:
            return CrossoverTag.BULLISH
        if previous >= 0 > current:
            return CrossoverTag.BEARISH
    return CrossoverTag.NONE


def detect_divergence(
    closes: List[Decimal],
    macd_line: List[Decimal],
    lookback: int = DIVERGENCE_LOOKBACK,
) -> CrossoverTag:
    """
    Price and MACD moving in opposite directions over the lookback.

    Price falling while MACD rises is a bullish divergence; price rising while
    MACD falls is bearish.
    """
    span = min(lookback, len(closes), len(macd_line))
    if span < 2:
        return CrossoverTag.NONE

    price_change = closes[-1] - closes[-span]
    macd_change = macd_line[-1] - macd_line[-span]

    if price_change < 0 < macd_change:
        return CrossoverTag.BULLISH
    if price_change > 0 > macd_change:
        return CrossoverTag.BEARISH
    return CrossoverTag.NONE


def calculate_macd(
    data: PriceInput,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    Args:
        data: List of Candle objects or List of closing prices
        fast_period: Fast EMA period (default: 12)
        slow_period: Slow EMA period (default: 26)
        signal_period: Signal EMA period (default: 9)

    Raises:
        InsufficientDataError: fewer than ``slow_period + signal_period`` prices
    """
    if fast_period >= slow_period:
        raise ValueError("fast_period must be shorter than slow_period")

    closes = extract_closes(data)
    required = slow_period + signal_period
    if len(closes) < required:
        raise InsufficientDataError(
            f"MACD({fast_period},{slow_period},{signal_period})", required, len(closes)
        )

    fast_ema = ema_series(closes, fast_period)
    slow_ema = ema_series(closes, slow_period)

    start = slow_period - 1
    macd_line = [fast - slow for fast, slow in zip(fast_ema[start:], slow_ema[start:])]
    signal_line = ema_series(macd_line, signal_period)
    histogram = [m - s for m, s in zip(macd_line, signal_line)]

    current_macd = macd_line[-1]
    current_signal = signal_line[-1]

    return MACDResult(
        fast_period=fast_period,
        slow_period=slow_period,
        signal_period=signal_period,
        macd_line=current_macd,
        signal_line=current_signal,
        histogram=histogram[-1],
        signal=SignalTag.BULLISH if current_macd > current_signal else SignalTag.BEARISH,
        crossover=detect_crossover(histogram),
        divergence=detect_divergence(closes, macd_line),
        macd_history=tuple(macd_line[-HISTORY_LENGTH:]),
        signal_history=tuple(signal_line[-HISTORY_LENGTH:]),
        histogram_history=tuple(histogram[-HISTORY_LENGTH:]),
    )
