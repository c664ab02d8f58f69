"""
RSI (Relative Strength Index) Indicator

Default period: 14

Formula:
1. Compute gains and losses:
   gain[i] = max(close[i] - close[i-1], 0)
   loss[i] = max(close[i-1] - close[i], 0)

2. Seed average gain and loss with the simple mean of the first period:
   avgGain = sum(gain[1..14]) / 14
   avgLoss = sum(loss[1..14]) / 14

3. For each next value, use Wilder's smoothing:
   avgGain = (prevAvgGain * (period - 1) + currentGain) / period
   avgLoss = (prevAvgLoss * (period - 1) + currentLoss) / period

4. RS = avgGain / max(avgLoss, 0.01)
   RSI = 100 - (100 / (1 + RS))

Signal: overbought above 70, oversold below 30, neutral otherwise.
"""
from decimal import Decimal
from typing import List

from ..errors import InsufficientDataError
from ..types import HISTORY_LENGTH, PriceInput, RSIResult, SignalTag, extract_closes

# Floor on the average loss; keeps RS finite on an unbroken run of gains.
RSI_EPSILON = Decimal("0.01")
OVERBOUGHT_LEVEL = Decimal(70)
OVERSOLD_LEVEL = Decimal(30)

HUNDRED = Decimal(100)


def _rsi_value(avg_gain: Decimal, avg_loss: Decimal) -> Decimal:
    rs = avg_gain / max(avg_loss, RSI_EPSILON)
    return HUNDRED - (HUNDRED / (Decimal(1) + rs))


def rsi_series(closes: List[Decimal], period: int = 14) -> List[Decimal]:
    """
    RSI values from the first fully seeded point onward.

    The result has ``len(closes) - period`` elements.
    """
    if period <= 0:
        raise ValueError("period must be positive")
    if len(closes) < period + 1:
        raise InsufficientDataError(f"RSI({period})", period + 1, len(closes))

    changes = [current - previous for previous, current in zip(closes, closes[1:])]
    gains = [max(change, Decimal(0)) for change in changes]
    losses = [max(-change, Decimal(0)) for change in changes]

    divisor = Decimal(period)
    avg_gain = sum(gains[:period], Decimal(0)) / divisor
    avg_loss = sum(losses[:period], Decimal(0)) / divisor
    values = [_rsi_value(avg_gain, avg_loss)]

    smoothing = Decimal(period - 1)
    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * smoothing + gain) / divisor
        avg_loss = (avg_loss * smoothing + loss) / divisor
        values.append(_rsi_value(avg_gain, avg_loss))

    return values


def interpret_rsi(value: Decimal) -> SignalTag:
    if value > OVERBOUGHT_LEVEL:
        return SignalTag.OVERBOUGHT
    if value < OVERSOLD_LEVEL:
        return SignalTag.OVERSOLD
    return SignalTag.NEUTRAL


def calculate_rsi(data: PriceInput, period: int = 14) -> RSIResult:
    """
    Calculate RSI (Relative Strength Index) using Wilder's smoothing.

    Args:
        data: List of Candle objects or List of closing prices
        period: RSI period (default: 14)

    Raises:
        InsufficientDataError: fewer than ``period + 1`` prices
    """
    values = rsi_series(extract_closes(data), period)
    current = values[-1]

    return RSIResult(
        period=period,
        value=current,
        signal=interpret_rsi(current),
        history=tuple(values[-HISTORY_LENGTH:]),
    )
