"""
Volatility Regime

Steps:
1. Simple returns of the close series
2. daily = stddev(returns)   (population)
3. annualized = daily * sqrt(252)
4. regime: low below 0.3, high above 0.8, moderate otherwise
"""
from decimal import Decimal

from ..errors import InsufficientDataError
from ..statistics import calculate_returns, stddev
from ..types import PriceInput, RiskLevel, VolatilityAnalysis, extract_closes

TRADING_DAYS_PER_YEAR = 252
LOW_VOLATILITY = Decimal("0.3")
HIGH_VOLATILITY = Decimal("0.8")


def analyze_volatility(data: PriceInput) -> VolatilityAnalysis:
    """
    Classify the volatility regime of a price series.

    Raises:
        InsufficientDataError: fewer than 3 prices
    """
    closes = extract_closes(data)
    if len(closes) < 3:
        raise InsufficientDataError("volatility", 3, len(closes))

    daily = stddev(calculate_returns(closes))
    annualized = daily * Decimal(TRADING_DAYS_PER_YEAR).sqrt()

    if annualized < LOW_VOLATILITY:
        regime = RiskLevel.LOW
    elif annualized > HIGH_VOLATILITY:
        regime = RiskLevel.HIGH
    else:
        regime = RiskLevel.MODERATE

    return VolatilityAnalysis(
        daily_volatility=daily,
        annualized_volatility=annualized,
        regime=regime,
    )
