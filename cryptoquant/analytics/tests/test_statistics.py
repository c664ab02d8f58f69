"""
Unit tests for return and statistics primitives.
"""
import unittest
from decimal import Decimal
from ..errors import InsufficientDataError, MismatchedSeriesError
from ..statistics import (
    calculate_returns,
    covariance,
    kurtosis,
    mean,
    skewness,
    stddev,
    variance,
)
from .helpers import make_candles


class TestReturns(unittest.TestCase):
    
    def test_simple_returns(self):
        returns = calculate_returns([100, 110, 99])
        self.assertEqual(returns, [Decimal("0.1"), Decimal("-0.1")])
    
    def test_returns_from_candles(self):
        returns = calculate_returns(make_candles([100, 110, 99]))
        self.assertEqual(len(returns), 2)
    
    def test_zero_previous_close_gives_zero_return(self):
        returns = calculate_returns([0, 5, 10])
        self.assertEqual(returns, [Decimal(0), Decimal(1)])
    
    def test_single_price_is_insufficient(self):
        with self.assertRaises(InsufficientDataError) as ctx:
            calculate_returns([100])
        self.assertEqual(ctx.exception.required, 2)
        self.assertEqual(ctx.exception.actual, 1)


class TestMoments(unittest.TestCase):
    
    def test_mean(self):
        self.assertEqual(mean([Decimal(1), Decimal(2), Decimal(3), Decimal(4)]), Decimal("2.5"))
    
    def test_population_variance_and_stddev(self):
        values = [Decimal(v) for v in (2, 4, 4, 4, 5, 5, 7, 9)]
        self.assertEqual(variance(values), Decimal(4))
        self.assertEqual(stddev(values), Decimal(2))
    
    def test_covariance_requires_equal_lengths(self):
        with self.assertRaises(MismatchedSeriesError):
            covariance([Decimal(1), Decimal(2)], [Decimal(1)])
    
    def test_mismatched_series_is_value_error(self):
        with self.assertRaises(ValueError):
            covariance([Decimal(1)], [])
    
    def test_empty_series_is_insufficient(self):
        with self.assertRaises(InsufficientDataError) as ctx:
            mean([])
        self.assertEqual(ctx.exception.required, 1)
        self.assertEqual(ctx.exception.actual, 0)
    
    def test_symmetric_series_has_no_skew(self):
        self.assertEqual(skewness([Decimal(1), Decimal(2), Decimal(3)]), Decimal(0))
    
    def test_excess_kurtosis(self):
        values = [Decimal(v) for v in (1, 2, 3, 4, 5)]
        self.assertAlmostEqual(float(kurtosis(values)), -1.3, places=10)
    
    def test_constant_series_moments_are_zero(self):
        values = [Decimal(7)] * 5
        self.assertEqual(stddev(values), Decimal(0))
        self.assertEqual(skewness(values), Decimal(0))
        self.assertEqual(kurtosis(values), Decimal(0))


if __name__ == '__main__':
    unittest.main()
