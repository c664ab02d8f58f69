"""
Price-action analysis of one candle series.
"""
from typing import Sequence

from ..errors import InsufficientDataError
from ..types import Candle, PriceActionAnalysis
from .levels import calculate_pivot_points, find_support_resistance
from .patterns import detect_patterns
from .trend import analyze_trend
from .volatility import analyze_volatility
from .volume_profile import analyze_volume_profile

PRICE_ACTION_MIN_CANDLES = 7


def analyze_price_action(candles: Sequence[Candle]) -> PriceActionAnalysis:
    """
    Combine trend, volatility, volume, levels, pivots and pattern flags.

    Raises:
        InsufficientDataError: fewer than PRICE_ACTION_MIN_CANDLES candles
    """
    if len(candles) < PRICE_ACTION_MIN_CANDLES:
        raise InsufficientDataError("price action", PRICE_ACTION_MIN_CANDLES, len(candles))

    levels = find_support_resistance(candles)

    return PriceActionAnalysis(
        price=candles[-1].close,
        data_points=len(candles),
        trend=analyze_trend(candles),
        volatility=analyze_volatility(candles),
        volume=analyze_volume_profile(candles),
        levels=levels,
        pivots=calculate_pivot_points(candles),
        patterns=detect_patterns(candles, levels),
    )
