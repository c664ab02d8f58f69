"""
Volume Profile

ratio = current volume / mean volume over the window.
A spike is flagged when the current volume exceeds twice the average.
"""
from decimal import Decimal
from typing import Sequence

from ..errors import InsufficientDataError
from ..statistics import ZERO, mean
from ..types import Candle, VolumeProfile, candles_to_volumes

SPIKE_MULTIPLE = Decimal(2)


def analyze_volume_profile(candles: Sequence[Candle]) -> VolumeProfile:
    volumes = candles_to_volumes(candles)
    if not volumes:
        raise InsufficientDataError("volume profile", 1, 0)

    current = volumes[-1]
    average = mean(volumes)
    ratio = current / average if average != 0 else ZERO

    return VolumeProfile(
        current_volume=current,
        average_volume=average,
        volume_ratio=ratio,
        volume_spike=ratio > SPIKE_MULTIPLE,
    )
