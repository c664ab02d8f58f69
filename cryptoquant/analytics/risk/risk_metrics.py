"""
Return-series Risk Metrics

Formulas:
- volatility          = stddev(returns)
- downside deviation  = stddev(returns below target)
- VaR(c)              = sorted(returns)[floor((1 - c) * n)] * 100
- ES(c)               = mean(returns <= VaR threshold) * 100
- annualized return   = (1 + mean(returns)) ^ periods - 1
- Sharpe              = (annualized return - rf) / (volatility * sqrt(periods))
- Sortino             = (annualized return - rf) / (downside deviation * sqrt(periods))

Ratios with a zero denominator are reported as 0.
"""
from decimal import ROUND_FLOOR, Decimal
from typing import List, Sequence, Union

from ..errors import InsufficientDataError
from ..statistics import ZERO, mean, stddev
from ..types import to_decimal

HUNDRED = Decimal(100)
ONE = Decimal(1)

Number = Union[Decimal, float, int, str]


def _require_returns(returns: Sequence[Decimal], metric: str) -> None:
    if not returns:
        raise InsufficientDataError(metric, 1, 0)


def _confidence(confidence: Number) -> Decimal:
    level = to_decimal(confidence)
    if not ZERO < level < ONE:
        raise ValueError(f"confidence must be in (0, 1), got {confidence}")
    return level


def calculate_volatility(returns: Sequence[Decimal]) -> Decimal:
    _require_returns(returns, "volatility")
    return stddev(returns)


def annualize_volatility(volatility: Decimal, periods_per_year: int = 365) -> Decimal:
    return volatility * Decimal(periods_per_year).sqrt()


def annualize_return(returns: Sequence[Decimal], periods_per_year: int = 365) -> Decimal:
    """Compound the mean periodic return over a year."""
    _require_returns(returns, "annualized return")
    return (ONE + mean(returns)) ** periods_per_year - ONE


def calculate_downside_deviation(
    returns: Sequence[Decimal],
    target: Number = 0,
) -> Decimal:
    """Standard deviation of the returns strictly below ``target``."""
    _require_returns(returns, "downside deviation")
    threshold = to_decimal(target)
    below = [r for r in returns if r < threshold]
    if not below:
        return ZERO
    return stddev(below)


def var_rank(n: int, confidence: Number) -> int:
    """Index into the ascending-sorted returns for historical VaR."""
    level = _confidence(confidence)
    rank = int(((ONE - level) * Decimal(n)).to_integral_value(rounding=ROUND_FLOOR))
    return min(rank, n - 1)


def calculate_var(returns: Sequence[Decimal], confidence: Number = Decimal("0.95")) -> Decimal:
    """
    Historical-simulation Value-at-Risk, in percent.

    A negative value is a loss.
    """
    _require_returns(returns, "VaR")
    ordered = sorted(returns)
    return ordered[var_rank(len(ordered), confidence)] * HUNDRED


def calculate_expected_shortfall(
    returns: Sequence[Decimal],
    confidence: Number = Decimal("0.95"),
) -> Decimal:
    """Mean of the returns at or below the VaR threshold, in percent."""
    _require_returns(returns, "expected shortfall")
    ordered = sorted(returns)
    threshold = ordered[var_rank(len(ordered), confidence)]
    tail: List[Decimal] = [r for r in ordered if r <= threshold]
    if not tail:
        return threshold * HUNDRED
    return mean(tail) * HUNDRED


def calculate_sharpe_ratio(
    returns: Sequence[Decimal],
    risk_free_rate: Number = Decimal("0.05"),
    periods_per_year: int = 365,
) -> Decimal:
    _require_returns(returns, "Sharpe ratio")
    annual_volatility = annualize_volatility(stddev(returns), periods_per_year)
    if annual_volatility == 0:
        return ZERO
    excess = annualize_return(returns, periods_per_year) - to_decimal(risk_free_rate)
    return excess / annual_volatility


def calculate_sortino_ratio(
    returns: Sequence[Decimal],
    risk_free_rate: Number = Decimal("0.05"),
    target: Number = 0,
    periods_per_year: int = 365,
) -> Decimal:
    _require_returns(returns, "Sortino ratio")
    annual_downside = annualize_volatility(
        calculate_downside_deviation(returns, target), periods_per_year
    )
    if annual_downside == 0:
        return ZERO
    excess = annualize_return(returns, periods_per_year) - to_decimal(risk_free_rate)
    return excess / annual_downside
