"""
Price Performance Summary

- total return      = (end - start) / start
- annualized return = (1 + total) ^ (365 / days) - 1
- best/worst day    = max/min simple daily return
- volatility and Sharpe ratio follow the risk calculator, with the same
  annual decimal risk-free rate

All returns are reported in percent.
"""
from decimal import Decimal
from typing import Sequence

from .errors import InsufficientDataError
from .risk.config import DEFAULT_RISK_CONFIG, RiskConfig
from .risk.risk_metrics import annualize_volatility, calculate_sharpe_ratio
from .statistics import ZERO, calculate_returns, mean, stddev
from .types import (
    Candle,
    PricePerformance,
    candles_to_highs,
    candles_to_lows,
    candles_to_volumes,
)

HUNDRED = Decimal(100)
DAYS_PER_YEAR = Decimal(365)


def calculate_price_performance(
    candles: Sequence[Candle],
    config: RiskConfig = DEFAULT_RISK_CONFIG,
) -> PricePerformance:
    """
    Summarize how a symbol performed over the candle window.

    Raises:
        InsufficientDataError: fewer than 2 candles
    """
    if len(candles) < 2:
        raise InsufficientDataError("price performance", 2, len(candles))

    first, last = candles[0], candles[-1]
    start_price, end_price = first.close, last.close
    start_date, end_date = first.opened_at, last.opened_at
    days = (end_date - start_date).days

    total = (end_price - start_price) / start_price if start_price != 0 else ZERO
    growth = Decimal(1) + total
    if days > 0 and growth > 0:
        annualized = growth ** (DAYS_PER_YEAR / Decimal(days)) - Decimal(1)
    else:
        annualized = total

    returns = calculate_returns(candles)

    return PricePerformance(
        start_price=start_price,
        end_price=end_price,
        start_date=start_date,
        end_date=end_date,
        days=days,
        total_return_percent=total * HUNDRED,
        annualized_return_percent=annualized * HUNDRED,
        highest_price=max(candles_to_highs(candles)),
        lowest_price=min(candles_to_lows(candles)),
        average_volume=mean(candles_to_volumes(candles)),
        best_day_percent=max(returns) * HUNDRED,
        worst_day_percent=min(returns) * HUNDRED,
        positive_days=sum(1 for r in returns if r > 0),
        negative_days=sum(1 for r in returns if r < 0),
        annualized_volatility=annualize_volatility(stddev(returns), config.periods_per_year),
        sharpe_ratio=calculate_sharpe_ratio(
            returns, config.risk_free_rate, config.periods_per_year
        ),
    )
