"""
Price Action Module
Trend, volatility regime, volume, levels and pattern flags.
"""

from .trend import analyze_trend, linear_regression_slope
from .volatility import analyze_volatility
from .volume_profile import analyze_volume_profile
from .levels import calculate_pivot_points, find_support_resistance
from .patterns import detect_patterns
from .analyzer import PRICE_ACTION_MIN_CANDLES, analyze_price_action

__all__ = [
    "analyze_trend",
    "linear_regression_slope",
    "analyze_volatility",
    "analyze_volume_profile",
    "calculate_pivot_points",
    "find_support_resistance",
    "detect_patterns",
    "PRICE_ACTION_MIN_CANDLES",
    "analyze_price_action",
]
