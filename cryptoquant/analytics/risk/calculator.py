"""
Risk metrics for one candle series, optionally against a benchmark.
"""
from typing import Optional, Sequence

from ..errors import InsufficientDataError
from ..statistics import calculate_returns, kurtosis, skewness, stddev
from ..types import Candle, RiskMetrics
from .assessment import assess_risk
from .benchmark import align_series, calculate_benchmark_metrics
from .config import DEFAULT_RISK_CONFIG, RiskConfig
from .drawdown import calculate_max_drawdown
from .risk_metrics import (
    annualize_return,
    annualize_volatility,
    calculate_downside_deviation,
    calculate_expected_shortfall,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_var,
)


def calculate_risk_metrics(
    candles: Sequence[Candle],
    benchmark: Optional[Sequence[Candle]] = None,
    config: RiskConfig = DEFAULT_RISK_CONFIG,
) -> RiskMetrics:
    """
    Calculate the full risk profile of a candle series.

    Args:
        candles: Asset candles, oldest first
        benchmark: Benchmark candles (optional); aligned on the most recent end
        config: Risk-free rate, confidence levels and observation minimum

    Raises:
        InsufficientDataError: fewer than ``config.min_observations`` returns,
            for the asset or for the aligned benchmark
    """
    required = config.min_observations + 1
    if len(candles) < required:
        raise InsufficientDataError("risk metrics", required, len(candles))

    returns = calculate_returns(candles)
    periods = config.periods_per_year
    rf = config.risk_free_rate

    daily_volatility = stddev(returns)
    annualized_volatility = annualize_volatility(daily_volatility, periods)
    sharpe = calculate_sharpe_ratio(returns, rf, periods)
    drawdown = calculate_max_drawdown(candles, config)
    skew = skewness(returns)
    excess_kurtosis = kurtosis(returns)

    benchmark_metrics = None
    if benchmark is not None:
        benchmark_returns = calculate_returns(benchmark) if len(benchmark) >= 2 else []
        aligned, aligned_benchmark = align_series(returns, benchmark_returns)
        if len(aligned) < config.min_observations:
            raise InsufficientDataError(
                "benchmark metrics", config.min_observations, len(aligned)
            )
        benchmark_metrics = calculate_benchmark_metrics(
            aligned, aligned_benchmark, rf, periods
        )

    return RiskMetrics(
        observations=len(returns),
        volatility=daily_volatility,
        annualized_volatility=annualized_volatility,
        downside_deviation=calculate_downside_deviation(returns, config.target_return),
        value_at_risk={
            level: calculate_var(returns, level) for level in config.confidence_levels
        },
        expected_shortfall={
            level: calculate_expected_shortfall(returns, level)
            for level in config.confidence_levels
        },
        sharpe_ratio=sharpe,
        sortino_ratio=calculate_sortino_ratio(returns, rf, config.target_return, periods),
        annualized_return=annualize_return(returns, periods),
        skewness=skew,
        kurtosis=excess_kurtosis,
        max_drawdown=drawdown,
        assessment=assess_risk(
            annualized_volatility,
            sharpe,
            drawdown.max_drawdown_percent,
            excess_kurtosis,
            skew,
        ),
        benchmark=benchmark_metrics,
    )
