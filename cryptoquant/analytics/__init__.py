"""
CryptoQuant Analytics Engine
Pure, deterministic indicator, price-action, risk and signal calculations
over OHLCV candle series.
"""

from .types import Candle
from .errors import AnalyticsError, InsufficientDataError, MismatchedSeriesError
from .statistics import (
    calculate_returns,
    covariance,
    kurtosis,
    mean,
    skewness,
    stddev,
    variance,
)
from .indicators import (
    SUPPORTED_INDICATORS,
    calculate_bollinger_bands,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_technical_indicators,
    calculate_volume_sma,
)
from .price_action import PRICE_ACTION_MIN_CANDLES, analyze_price_action
from .risk import DEFAULT_RISK_CONFIG, RiskConfig, calculate_risk_metrics
from .signals import STRATEGY_PROFILES, generate_trading_signal
from .performance import calculate_price_performance

__all__ = [
    # Types
    "Candle",
    # Errors
    "AnalyticsError",
    "InsufficientDataError",
    "MismatchedSeriesError",
    # Statistics
    "calculate_returns",
    "covariance",
    "kurtosis",
    "mean",
    "skewness",
    "stddev",
    "variance",
    # Indicators
    "SUPPORTED_INDICATORS",
    "calculate_bollinger_bands",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "calculate_technical_indicators",
    "calculate_volume_sma",
    # Price action
    "PRICE_ACTION_MIN_CANDLES",
    "analyze_price_action",
    # Risk
    "DEFAULT_RISK_CONFIG",
    "RiskConfig",
    "calculate_risk_metrics",
    # Signals
    "STRATEGY_PROFILES",
    "generate_trading_signal",
    # Performance
    "calculate_price_performance",
]
