"""
Volume SMA Indicator

Rolling mean of candle volume. The current volume is compared to it:
- high:   volume > 1.5 x SMA
- low:    volume < 0.5 x SMA
- normal: otherwise
"""
from decimal import Decimal
from typing import Sequence

from ..types import (
    HISTORY_LENGTH,
    Candle,
    VolumeSMAResult,
    VolumeTag,
    candles_to_volumes,
)
from .sma import sma_series

HIGH_VOLUME_MULTIPLE = Decimal("1.5")
LOW_VOLUME_MULTIPLE = Decimal("0.5")


def calculate_volume_sma(candles: Sequence[Candle], period: int = 20) -> VolumeSMAResult:
    """
    Calculate the volume moving average and classify the current volume.

    Raises:
        InsufficientDataError: fewer than ``period`` candles
    """
    volumes = candles_to_volumes(candles)
    averages = sma_series(volumes, period, metric=f"VolumeSMA({period})")
    current_sma = averages[-1]
    current_volume = volumes[-1]

    if current_sma == 0:
        ratio = Decimal(0)
        signal = VolumeTag.NORMAL
    else:
        ratio = current_volume / current_sma
        if current_volume > HIGH_VOLUME_MULTIPLE * current_sma:
            signal = VolumeTag.HIGH
        elif current_volume < LOW_VOLUME_MULTIPLE * current_sma:
            signal = VolumeTag.LOW
        else:
            signal = VolumeTag.NORMAL

    return VolumeSMAResult(
        period=period,
        value=current_sma,
        current_volume=current_volume,
        ratio=ratio,
        signal=signal,
        history=tuple(averages[-HISTORY_LENGTH:]),
    )
