"""
Unit tests for benchmark-relative metrics.
"""
import unittest
from decimal import Decimal
from ..risk.benchmark import (
    align_series,
    calculate_alpha,
    calculate_benchmark_metrics,
    calculate_beta,
    calculate_correlation,
    calculate_tracking_error,
)

RETURNS = [Decimal("0.01"), Decimal("-0.02"), Decimal("0.03"), Decimal("0")]


class TestBenchmarkMetrics(unittest.TestCase):
    
    def test_identity(self):
        """A series measured against itself."""
        self.assertEqual(calculate_beta(RETURNS, RETURNS), Decimal(1))
        self.assertEqual(calculate_correlation(RETURNS, RETURNS), Decimal(1))
        self.assertEqual(calculate_tracking_error(RETURNS, RETURNS), Decimal(0))
        self.assertAlmostEqual(float(calculate_alpha(RETURNS, RETURNS)), 0.0, places=12)
    
    def test_inverse_correlation(self):
        inverse = [-r for r in RETURNS]
        self.assertEqual(calculate_correlation(RETURNS, inverse), Decimal(-1))
    
    def test_levered_beta(self):
        doubled = [r * 2 for r in RETURNS]
        self.assertEqual(calculate_beta(doubled, RETURNS), Decimal(2))
    
    def test_jensen_alpha_with_levered_asset(self):
        """
        Benchmark 0.1, 0, 0.1, 0 over 4 periods; asset doubles it, so beta = 2.
        R_bench = 1.05^4 - 1 = 0.21550625, R_asset = 1.1^4 - 1 = 0.4641;
        alpha = 0.4641 - (0.05 + 2 * (0.21550625 - 0.05)) = 0.0830875.
        """
        benchmark = [Decimal("0.1"), Decimal("0"), Decimal("0.1"), Decimal("0")]
        asset = [r * 2 for r in benchmark]

        alpha = calculate_alpha(asset, benchmark, Decimal("0.05"), periods_per_year=4)
        self.assertAlmostEqual(float(alpha), 0.0830875, places=9)

    def test_tracking_error_on_differing_series(self):
        """Differences are 0.1, 0, 0.1, 0: stddev 0.05, times sqrt(4)."""
        benchmark = [Decimal("0.1"), Decimal("0"), Decimal("0.1"), Decimal("0")]
        asset = [r * 2 for r in benchmark]

        result = calculate_tracking_error(asset, benchmark, periods_per_year=4)
        self.assertAlmostEqual(float(result), 0.1, places=12)

    def test_metrics_against_levered_asset(self):
        benchmark = [Decimal("0.1"), Decimal("0"), Decimal("0.1"), Decimal("0")]
        asset = [r * 2 for r in benchmark]

        result = calculate_benchmark_metrics(asset, benchmark, Decimal("0.05"), periods_per_year=4)

        self.assertEqual(result.beta, Decimal(2))
        self.assertEqual(result.correlation, Decimal(1))
        self.assertAlmostEqual(float(result.alpha), 0.0830875, places=9)
        self.assertAlmostEqual(float(result.tracking_error), 0.1, places=12)

    def test_beta_degenerate_inputs(self):
        self.assertEqual(calculate_beta([Decimal("0.01")], [Decimal("0.02")]), Decimal(1))
        self.assertEqual(calculate_beta(RETURNS, [Decimal("0.01")] * 4), Decimal(1))
    
    def test_correlation_with_flat_series(self):
        self.assertEqual(calculate_correlation(RETURNS, [Decimal(0)] * 4), Decimal(0))
    
    def test_correlation_is_bounded(self):
        other = [Decimal("0.02"), Decimal("0.01"), Decimal("-0.01"), Decimal("0.005")]
        value = calculate_correlation(RETURNS, other)
        self.assertGreaterEqual(value, -1)
        self.assertLessEqual(value, 1)
    
    def test_align_keeps_most_recent(self):
        a, b = align_series([1, 2, 3, 4], [10, 20])
        self.assertEqual(a, [3, 4])
        self.assertEqual(b, [10, 20])
    
    def test_metrics_on_unequal_lengths(self):
        longer = [Decimal("0.05"), Decimal("-0.04")] + RETURNS
        result = calculate_benchmark_metrics(longer, RETURNS)
        
        self.assertEqual(result.observations, 4)
        self.assertEqual(result.beta, Decimal(1))
        self.assertEqual(result.correlation, Decimal(1))


if __name__ == '__main__':
    unittest.main()
