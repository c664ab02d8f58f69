"""
Support/Resistance and Pivot Points

Support and resistance are the single global min(low) and max(high) of the
window. Distances are measured from the latest close, in percent of it.

Classic pivots from the most recent candle:
- pivot = (H + L + C) / 3
- R1 = 2 * pivot - L,  S1 = 2 * pivot - H
- R2 = pivot + (H - L), S2 = pivot - (H - L)
"""
from decimal import Decimal
from typing import Sequence

from ..errors import InsufficientDataError
from ..statistics import ZERO
from ..types import (
    Candle,
    PivotPoints,
    SupportResistance,
    candles_to_highs,
    candles_to_lows,
)

HUNDRED = Decimal(100)


def find_support_resistance(candles: Sequence[Candle]) -> SupportResistance:
    if not candles:
        raise InsufficientDataError("support/resistance", 1, 0)

    support = min(candles_to_lows(candles))
    resistance = max(candles_to_highs(candles))
    price = candles[-1].close

    if price == 0:
        to_support = ZERO
        to_resistance = ZERO
    else:
        to_support = (price - support) / price * HUNDRED
        to_resistance = (resistance - price) / price * HUNDRED

    return SupportResistance(
        support=support,
        resistance=resistance,
        current_price=price,
        distance_to_support_percent=to_support,
        distance_to_resistance_percent=to_resistance,
    )


def calculate_pivot_points(candles: Sequence[Candle]) -> PivotPoints:
    """Classic floor-trader pivots from the latest candle."""
    if not candles:
        raise InsufficientDataError("pivot points", 1, 0)

    last = candles[-1]
    high, low, close = last.high, last.low, last.close
    pivot = (high + low + close) / Decimal(3)
    spread = high - low

    return PivotPoints(
        pivot=pivot,
        r1=2 * pivot - low,
        s1=2 * pivot - high,
        r2=pivot + spread,
        s2=pivot - spread,
    )
