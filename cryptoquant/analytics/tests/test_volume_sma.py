"""
Unit tests for Volume SMA.
"""
import unittest
from decimal import Decimal
from ..errors import InsufficientDataError
from ..indicators.volume_sma import calculate_volume_sma
from ..types import VolumeTag
from .helpers import make_candles


class TestVolumeSMA(unittest.TestCase):
    
    def test_high_volume(self):
        """SMA = (19 * 100 + 200) / 20 = 105; 200 > 1.5 * 105."""
        candles = make_candles([100] * 20, volumes=[100] * 19 + [200])
        result = calculate_volume_sma(candles)
        
        self.assertEqual(result.value, Decimal(105))
        self.assertEqual(result.current_volume, Decimal(200))
        self.assertEqual(result.signal, VolumeTag.HIGH)
    
    def test_low_volume(self):
        """SMA = (19 * 100 + 40) / 20 = 97; 40 < 0.5 * 97."""
        candles = make_candles([100] * 20, volumes=[100] * 19 + [40])
        result = calculate_volume_sma(candles)
        
        self.assertEqual(result.value, Decimal(97))
        self.assertEqual(result.signal, VolumeTag.LOW)
    
    def test_normal_volume(self):
        result = calculate_volume_sma(make_candles([100] * 25))
        self.assertEqual(result.ratio, Decimal(1))
        self.assertEqual(result.signal, VolumeTag.NORMAL)
    
    def test_zero_volume(self):
        result = calculate_volume_sma(make_candles([100] * 20, volumes=[0] * 20))
        self.assertEqual(result.ratio, Decimal(0))
        self.assertEqual(result.signal, VolumeTag.NORMAL)
    
    def test_insufficient_data(self):
        with self.assertRaises(InsufficientDataError) as ctx:
            calculate_volume_sma(make_candles([100] * 5))
        self.assertIn("VolumeSMA", ctx.exception.metric)


if __name__ == '__main__':
    unittest.main()
