"""
Technical Indicators Module
Pure functions for technical analysis.
"""

from .sma import calculate_sma, sma_series
from .ema import calculate_ema, ema_series
from .rsi import calculate_rsi, rsi_series
from .macd import calculate_macd
from .bollinger import calculate_bollinger_bands
from .volume_sma import calculate_volume_sma
from .technical import SUPPORTED_INDICATORS, calculate_technical_indicators

__all__ = [
    "calculate_sma",
    "sma_series",
    "calculate_ema",
    "ema_series",
    "calculate_rsi",
    "rsi_series",
    "calculate_macd",
    "calculate_bollinger_bands",
    "calculate_volume_sma",
    "SUPPORTED_INDICATORS",
    "calculate_technical_indicators",
]
