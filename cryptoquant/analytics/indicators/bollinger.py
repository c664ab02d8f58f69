"""
Bollinger Bands Indicator

Default parameters: period 20, 2 standard deviations.

Formula:
- middle = SMA(period)
- upper  = middle + k * sigma
- lower  = middle - k * sigma
  (sigma = population standard deviation of the trailing window)
- band_width     = (upper - lower) / middle * 100
- price_position = (price - lower) / (upper - lower) * 100

Signal: overbought above position 80, oversold below 20, neutral otherwise.
Squeeze: tight below width 10, wide above 20, normal otherwise.
"""
from decimal import Decimal
from typing import Union

from ..errors import InsufficientDataError
from ..statistics import mean, stddev
from ..types import (
    BollingerResult,
    PriceInput,
    SignalTag,
    SqueezeTag,
    extract_closes,
    to_decimal,
)

HUNDRED = Decimal(100)
# Position reported when the bands collapse onto the middle line.
FLAT_BAND_POSITION = Decimal(50)


def calculate_bollinger_bands(
    data: PriceInput,
    period: int = 20,
    num_std: Union[Decimal, int, float] = 2,
) -> BollingerResult:
    """
    Calculate Bollinger Bands over the trailing ``period`` closes.

    Args:
        data: List of Candle objects or List of closing prices
        period: Window length (default: 20)
        num_std: Band multiplier k (default: 2)

    Raises:
        InsufficientDataError: fewer than ``period`` prices
    """
    closes = extract_closes(data)
    if period <= 0:
        raise ValueError("period must be positive")
    if len(closes) < period:
        raise InsufficientDataError(f"Bollinger({period})", period, len(closes))

    k = to_decimal(num_std)
    window = closes[-period:]
    middle = mean(window)
    sigma = stddev(window)
    upper = middle + k * sigma
    lower = middle - k * sigma
    price = closes[-1]

    band_width = (upper - lower) / middle * HUNDRED if middle != 0 else Decimal(0)
    if upper == lower:
        position = FLAT_BAND_POSITION
    else:
        position = (price - lower) / (upper - lower) * HUNDRED

    if position > 80:
        signal = SignalTag.OVERBOUGHT
    elif position < 20:
        signal = SignalTag.OVERSOLD
    else:
        signal = SignalTag.NEUTRAL

    if band_width < 10:
        squeeze = SqueezeTag.TIGHT
    elif band_width > 20:
        squeeze = SqueezeTag.WIDE
    else:
        squeeze = SqueezeTag.NORMAL

    return BollingerResult(
        period=period,
        num_std=k,
        upper=upper,
        middle=middle,
        lower=lower,
        price=price,
        band_width=band_width,
        price_position=position,
        signal=signal,
        squeeze=squeeze,
    )
