"""
Signals Module
Strategy profiles and weighted signal aggregation.
"""

from .profiles import (
    SIGNAL_FAMILIES,
    STRATEGY_PROFILES,
    StrategyProfile,
    get_strategy_profile,
)
from .aggregator import aggregate_signals, collect_signals, generate_trading_signal

__all__ = [
    "SIGNAL_FAMILIES",
    "STRATEGY_PROFILES",
    "StrategyProfile",
    "get_strategy_profile",
    "aggregate_signals",
    "collect_signals",
    "generate_trading_signal",
]
