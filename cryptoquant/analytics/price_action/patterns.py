"""
Pattern Flags

Naive structure flags, not chart-pattern recognition:
- higher/lower highs and lows compare the last two swing points of the
  high and low series (a swing high is above its left neighbour and not
  below its right neighbour; swing lows mirror that)
- breakout/breakdown: latest close beyond the highest high / lowest low of
  the candles before it
- near support/resistance: latest close within 2% of the level
"""
from decimal import Decimal
from typing import List, Optional, Sequence

from ..errors import InsufficientDataError
from ..types import (
    Candle,
    PatternFlags,
    SupportResistance,
    candles_to_highs,
    candles_to_lows,
)
from .levels import find_support_resistance

PROXIMITY_PERCENT = Decimal(2)


def _swing_highs(values: List[Decimal]) -> List[Decimal]:
    return [
        values[i]
        for i in range(1, len(values) - 1)
        if values[i] > values[i - 1] and values[i] >= values[i + 1]
    ]


def _swing_lows(values: List[Decimal]) -> List[Decimal]:
    return [
        values[i]
        for i in range(1, len(values) - 1)
        if values[i] < values[i - 1] and values[i] <= values[i + 1]
    ]


def detect_patterns(
    candles: Sequence[Candle],
    levels: Optional[SupportResistance] = None,
) -> PatternFlags:
    """
    Detect basic price structure flags.

    Args:
        candles: Candle series, oldest first
        levels: Pre-computed support/resistance (computed if not provided)

    Raises:
        InsufficientDataError: fewer than 3 candles
    """
    if len(candles) < 3:
        raise InsufficientDataError("patterns", 3, len(candles))

    if levels is None:
        levels = find_support_resistance(candles)

    highs = candles_to_highs(candles)
    lows = candles_to_lows(candles)
    swing_highs = _swing_highs(highs)
    swing_lows = _swing_lows(lows)

    higher_highs = lower_highs = False
    if len(swing_highs) >= 2:
        higher_highs = swing_highs[-1] > swing_highs[-2]
        lower_highs = swing_highs[-1] < swing_highs[-2]

    higher_lows = lower_lows = False
    if len(swing_lows) >= 2:
        higher_lows = swing_lows[-1] > swing_lows[-2]
        lower_lows = swing_lows[-1] < swing_lows[-2]

    close = candles[-1].close

    return PatternFlags(
        higher_highs=higher_highs,
        higher_lows=higher_lows,
        lower_highs=lower_highs,
        lower_lows=lower_lows,
        breakout=close > max(highs[:-1]),
        breakdown=close < min(lows[:-1]),
        near_support=levels.distance_to_support_percent <= PROXIMITY_PERCENT,
        near_resistance=levels.distance_to_resistance_percent <= PROXIMITY_PERCENT,
    )
