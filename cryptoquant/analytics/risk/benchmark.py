"""
Benchmark-relative Metrics

Series of different length are aligned by trimming both to the shorter
length from the most recent end.

- beta        = cov(asset, bench) / var(bench)   (1 when < 2 points or var 0)
- alpha       = R_asset - (rf + beta * (R_bench - rf))   (annualized returns)
- correlation = cov / (sigma_asset * sigma_bench), clamped to [-1, 1]
- tracking error = stddev(asset - bench) * sqrt(periods)
"""
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from ..errors import InsufficientDataError
from ..statistics import ZERO, covariance, stddev, variance
from ..types import BenchmarkMetrics, to_decimal
from .risk_metrics import Number, annualize_return, annualize_volatility

ONE = Decimal(1)
CORRELATION_PLACES = Decimal("1e-12")


def align_series(
    asset: Sequence[Decimal],
    benchmark: Sequence[Decimal],
) -> Tuple[List[Decimal], List[Decimal]]:
    """Trim both series to the shorter length, keeping the most recent values."""
    n = min(len(asset), len(benchmark))
    return list(asset[len(asset) - n:]), list(benchmark[len(benchmark) - n:])


def calculate_beta(asset: Sequence[Decimal], benchmark: Sequence[Decimal]) -> Decimal:
    a, b = align_series(asset, benchmark)
    if len(a) < 2:
        return ONE
    benchmark_variance = variance(b)
    if benchmark_variance == 0:
        return ONE
    return covariance(a, b) / benchmark_variance


def calculate_alpha(
    asset: Sequence[Decimal],
    benchmark: Sequence[Decimal],
    risk_free_rate: Number = Decimal("0.05"),
    periods_per_year: int = 365,
    beta: Optional[Decimal] = None,
) -> Decimal:
    """Jensen's alpha on annualized returns."""
    a, b = align_series(asset, benchmark)
    if not a:
        raise InsufficientDataError("alpha", 1, 0)
    if beta is None:
        beta = calculate_beta(a, b)
    rf = to_decimal(risk_free_rate)
    asset_return = annualize_return(a, periods_per_year)
    benchmark_return = annualize_return(b, periods_per_year)
    return asset_return - (rf + beta * (benchmark_return - rf))


def calculate_correlation(asset: Sequence[Decimal], benchmark: Sequence[Decimal]) -> Decimal:
    """Pearson correlation, rounded to 12 places."""
    a, b = align_series(asset, benchmark)
    if not a:
        raise InsufficientDataError("correlation", 1, 0)
    denominator = stddev(a) * stddev(b)
    if denominator == 0:
        return ZERO
    value = (covariance(a, b) / denominator).quantize(CORRELATION_PLACES)
    return max(-ONE, min(ONE, value))


def calculate_tracking_error(
    asset: Sequence[Decimal],
    benchmark: Sequence[Decimal],
    periods_per_year: int = 365,
) -> Decimal:
    a, b = align_series(asset, benchmark)
    if not a:
        raise InsufficientDataError("tracking error", 1, 0)
    differences = [x - y for x, y in zip(a, b)]
    return annualize_volatility(stddev(differences), periods_per_year)


def calculate_benchmark_metrics(
    asset: Sequence[Decimal],
    benchmark: Sequence[Decimal],
    risk_free_rate: Number = Decimal("0.05"),
    periods_per_year: int = 365,
) -> BenchmarkMetrics:
    a, b = align_series(asset, benchmark)
    beta = calculate_beta(a, b)
    return BenchmarkMetrics(
        beta=beta,
        alpha=calculate_alpha(a, b, risk_free_rate, periods_per_year, beta=beta),
        correlation=calculate_correlation(a, b),
        tracking_error=calculate_tracking_error(a, b, periods_per_year),
        observations=len(a),
    )
