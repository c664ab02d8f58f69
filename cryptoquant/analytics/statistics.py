"""
Return and statistics primitives.

Formulas:
- return[i] = (close[i] - close[i-1]) / close[i-1]
- variance = sum((x - mean)^2) / N            (population)
- covariance = sum((a - mean_a)(b - mean_b)) / N
- skewness = mean((x - mean)^3) / sigma^3
- kurtosis = mean((x - mean)^4) / sigma^4 - 3  (excess)

Skewness and kurtosis are 0 for a series with zero standard deviation.
"""
from decimal import Decimal
from typing import List, Sequence

from .errors import InsufficientDataError, MismatchedSeriesError
from .types import PriceInput, extract_closes

ZERO = Decimal(0)


def calculate_returns(data: PriceInput) -> List[Decimal]:
    """
    Simple returns of a price or candle series.

    Returns a list one element shorter than the input. A zero previous close
    contributes a 0 return.
    """
    closes = extract_closes(data)
    if len(closes) < 2:
        raise InsufficientDataError("returns", 2, len(closes))

    return [
        (current - previous) / previous if previous != 0 else ZERO
        for previous, current in zip(closes, closes[1:])
    ]


def _require(values: Sequence[Decimal], metric: str, minimum: int = 1) -> None:
    if len(values) < minimum:
        raise InsufficientDataError(metric, minimum, len(values))


def mean(values: Sequence[Decimal]) -> Decimal:
    _require(values, "mean")
    return sum(values, ZERO) / Decimal(len(values))


def covariance(a: Sequence[Decimal], b: Sequence[Decimal]) -> Decimal:
    """Population covariance of two element-wise paired series."""
    if len(a) != len(b):
        raise MismatchedSeriesError("covariance", len(a), len(b))
    _require(a, "covariance")

    mean_a = mean(a)
    mean_b = mean(b)
    total = sum(((x - mean_a) * (y - mean_b) for x, y in zip(a, b)), ZERO)
    return total / Decimal(len(a))


def variance(values: Sequence[Decimal]) -> Decimal:
    """Population variance (denominator N)."""
    _require(values, "variance")
    return covariance(values, values)


def stddev(values: Sequence[Decimal]) -> Decimal:
    return variance(values).sqrt()


def _central_moment(values: Sequence[Decimal], order: int) -> Decimal:
    m = mean(values)
    return sum(((x - m) ** order for x in values), ZERO) / Decimal(len(values))


def skewness(values: Sequence[Decimal]) -> Decimal:
    _require(values, "skewness")
    sigma = stddev(values)
    if sigma == 0:
        return ZERO
    return _central_moment(values, 3) / sigma ** 3


def kurtosis(values: Sequence[Decimal]) -> Decimal:
    """Excess kurtosis (raw kurtosis minus 3)."""
    _require(values, "kurtosis")
    sigma = stddev(values)
    if sigma == 0:
        return ZERO
    return _central_moment(values, 4) / sigma ** 4 - Decimal(3)
