"""
Analytics Engine exceptions.

Zero-variance inputs are not errors here: those computations saturate to a
fixed sentinel (RSI epsilon floor, Sharpe/correlation 0, beta 1).
"""
from cryptoquant.error_models import ErrorCode


class AnalyticsError(Exception):
    """Base class for analytics errors."""
    error_code = ErrorCode.INVALID_INPUT


class InsufficientDataError(AnalyticsError):
    """Series shorter than the minimum an operation needs."""
    error_code = ErrorCode.INSUFFICIENT_DATA

    def __init__(self, metric: str, required: int, actual: int):
        self.metric = metric
        self.required = required
        self.actual = actual
        super().__init__(
            f"{metric} requires at least {required} data points, got {actual}"
        )


class MismatchedSeriesError(AnalyticsError, ValueError):
    """Two paired series differ in length where pairing is required."""
    error_code = ErrorCode.INVALID_INPUT

    def __init__(self, metric: str, left: int, right: int):
        self.metric = metric
        self.left = left
        self.right = right
        super().__init__(
            f"{metric} requires series of equal length, got {left} and {right}"
        )
