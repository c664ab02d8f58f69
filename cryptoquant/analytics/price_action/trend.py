"""
Trend Analysis

Direction:
- change = (mean(second half) - mean(first half)) / mean(first half) * 100
- bullish if change > +5, bearish if change < -5, sideways otherwise

Strength:
- slope of the least-squares line of close vs. index
- strength = |slope| / mean(close)

Sub-windows (short 7, medium 20, long = full series) use the two-point rule:
first vs. last close of the trailing window with the same +/-5% band.
"""
from decimal import Decimal
from typing import List, Optional, Sequence

from ..errors import InsufficientDataError
from ..statistics import ZERO, mean
from ..types import PriceInput, TrendAnalysis, TrendDirection, extract_closes

TREND_THRESHOLD_PERCENT = Decimal(5)
SHORT_TERM_WINDOW = 7
MEDIUM_TERM_WINDOW = 20

HUNDRED = Decimal(100)


def classify_change(change_percent: Decimal) -> TrendDirection:
    if change_percent > TREND_THRESHOLD_PERCENT:
        return TrendDirection.BULLISH
    if change_percent < -TREND_THRESHOLD_PERCENT:
        return TrendDirection.BEARISH
    return TrendDirection.SIDEWAYS


def percent_change(start: Decimal, end: Decimal) -> Decimal:
    """(end - start) / start * 100; 0 when start is 0."""
    if start == 0:
        return ZERO
    return (end - start) / start * HUNDRED


def linear_regression_slope(values: Sequence[Decimal]) -> Decimal:
    """Least-squares slope of values against their index."""
    n = len(values)
    if n < 2:
        raise InsufficientDataError("linear regression", 2, n)

    x_mean = Decimal(n - 1) / Decimal(2)
    y_mean = mean(values)
    numerator = ZERO
    denominator = ZERO
    for i, y in enumerate(values):
        dx = Decimal(i) - x_mean
        numerator += dx * (y - y_mean)
        denominator += dx * dx
    return numerator / denominator


def window_direction(closes: List[Decimal], window: Optional[int] = None) -> TrendDirection:
    """Two-point direction over the trailing ``window`` closes (whole series if longer)."""
    segment = closes[-window:] if window else closes
    return classify_change(percent_change(segment[0], segment[-1]))


def analyze_trend(data: PriceInput) -> TrendAnalysis:
    """
    Analyze trend direction and strength.

    Args:
        data: List of Candle objects or List of closing prices

    Raises:
        InsufficientDataError: fewer than 2 prices
    """
    closes = extract_closes(data)
    if len(closes) < 2:
        raise InsufficientDataError("trend", 2, len(closes))

    half = len(closes) // 2
    change = percent_change(mean(closes[:half]), mean(closes[half:]))

    slope = linear_regression_slope(closes)
    average = mean(closes)
    strength = abs(slope) / average if average != 0 else ZERO

    return TrendAnalysis(
        direction=classify_change(change),
        change_percent=change,
        slope=slope,
        strength=strength,
        short_term=window_direction(closes, SHORT_TERM_WINDOW),
        medium_term=window_direction(closes, MEDIUM_TERM_WINDOW),
        long_term=window_direction(closes),
    )
