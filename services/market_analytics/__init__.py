"""
Market Analytics service: technical indicators, price action, trading
signals, risk metrics and price performance for crypto symbols.
"""
from cryptoquant.error_models import to_error_response
from .service import DEFAULT_TIMEFRAME, MarketAnalyticsService, create_analytics_service

__all__ = [
    "DEFAULT_TIMEFRAME",
    "MarketAnalyticsService",
    "create_analytics_service",
    "to_error_response",
]
