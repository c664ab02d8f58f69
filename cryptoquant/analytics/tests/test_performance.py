"""
Unit tests for the price performance summary.
"""
import unittest
from dataclasses import replace
from decimal import Decimal
from ..errors import InsufficientDataError
from ..performance import calculate_price_performance
from ..risk import RiskConfig
from ..risk.risk_metrics import calculate_sharpe_ratio
from ..statistics import calculate_returns
from .helpers import make_candles


class TestPricePerformance(unittest.TestCase):
    
    def setUp(self):
        self.candles = make_candles([100, 110, 99, 120], volumes=[10, 20, 30, 40])
    
    def test_summary(self):
        result = calculate_price_performance(self.candles)
        
        self.assertEqual(result.start_price, Decimal(100))
        self.assertEqual(result.end_price, Decimal(120))
        self.assertEqual(result.days, 3)
        self.assertEqual(result.total_return_percent, Decimal(20))
        self.assertAlmostEqual(float(result.best_day_percent), 21.2121, places=3)
        self.assertEqual(result.worst_day_percent, Decimal(-10))
        self.assertEqual(result.positive_days, 2)
        self.assertEqual(result.negative_days, 1)
        self.assertEqual(result.highest_price, Decimal(121))
        self.assertEqual(result.lowest_price, Decimal(98))
        self.assertEqual(result.average_volume, Decimal(25))
    
    def test_annualized_return_compounds(self):
        result = calculate_price_performance(self.candles)
        self.assertGreater(result.annualized_return_percent, result.total_return_percent)
    
    def test_sharpe_uses_configured_rate(self):
        config = RiskConfig(risk_free_rate=Decimal("0.02"))
        result = calculate_price_performance(self.candles, config)
        
        expected = calculate_sharpe_ratio(calculate_returns(self.candles), Decimal("0.02"), 365)
        self.assertEqual(result.sharpe_ratio, expected)
    
    def test_same_day_candles(self):
        """No elapsed days: annualized return falls back to the total."""
        candles = make_candles([100, 105])
        candles[1] = replace(candles[1], timestamp=candles[0].timestamp)
        result = calculate_price_performance(candles)
        
        self.assertEqual(result.days, 0)
        self.assertEqual(result.annualized_return_percent, result.total_return_percent)
    
    def test_insufficient_data(self):
        with self.assertRaises(InsufficientDataError):
            calculate_price_performance(make_candles([100]))


if __name__ == '__main__':
    unittest.main()
