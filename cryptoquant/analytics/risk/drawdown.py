"""
Maximum Drawdown

Single pass tracking the running peak close:
- drawdown[i] = (peak - close[i]) / peak
- the largest drawdown is kept with the indices of its peak and trough

Reported as a non-negative percentage. A series that never declines has
peak == trough (the first candle).
"""
from decimal import Decimal
from typing import Sequence

from ..errors import InsufficientDataError
from ..statistics import ZERO
from ..types import Candle, DrawdownDescriptor
from .config import DEFAULT_RISK_CONFIG, RiskConfig

HUNDRED = Decimal(100)


def calculate_max_drawdown(
    candles: Sequence[Candle],
    config: RiskConfig = DEFAULT_RISK_CONFIG,
) -> DrawdownDescriptor:
    """
    Find the worst peak-to-trough decline.

    Raises:
        InsufficientDataError: fewer than ``config.min_observations`` returns
    """
    required = config.min_observations + 1
    if len(candles) < required:
        raise InsufficientDataError("max drawdown", required, len(candles))

    peak_index = 0
    worst = ZERO
    worst_peak = 0
    worst_trough = 0
    for i, candle in enumerate(candles):
        if candle.close > candles[peak_index].close:
            peak_index = i
        peak = candles[peak_index].close
        if peak <= 0:
            continue
        drawdown = (peak - candle.close) / peak
        if drawdown > worst:
            worst = drawdown
            worst_peak = peak_index
            worst_trough = i

    start = candles[worst_peak].opened_at
    end = candles[worst_trough].opened_at

    return DrawdownDescriptor(
        max_drawdown_percent=worst * HUNDRED,
        peak_price=candles[worst_peak].close,
        trough_price=candles[worst_trough].close,
        start_date=start,
        end_date=end,
        duration_days=(end - start).days,
    )
