"""
Technical indicator set.

Computes a requested selection of indicators over one candle series.
Indicators whose window does not fit the series are listed in
``IndicatorSet.unavailable`` rather than failing the whole set.
"""
from typing import Dict, Iterable, Optional, Sequence

from ..errors import InsufficientDataError
from ..types import Candle, IndicatorSet, candles_to_closes
from .bollinger import calculate_bollinger_bands
from .ema import calculate_ema
from .macd import calculate_macd
from .rsi import calculate_rsi
from .sma import calculate_sma
from .volume_sma import calculate_volume_sma

SUPPORTED_INDICATORS = ("rsi", "macd", "sma", "ema", "bollinger", "volume_sma")


def calculate_technical_indicators(
    candles: Sequence[Candle],
    indicators: Optional[Iterable[str]] = None,
    sma_periods: Sequence[int] = (20, 50),
    ema_periods: Sequence[int] = (12, 26),
    rsi_period: int = 14,
    macd_periods: Sequence[int] = (12, 26, 9),
    bollinger_period: int = 20,
    bollinger_std: int = 2,
    volume_period: int = 20,
) -> IndicatorSet:
    """
    Calculate the selected indicators for a candle series.

    Args:
        candles: Candle series, oldest first
        indicators: Names from SUPPORTED_INDICATORS (default: all)

    Raises:
        ValueError: unknown indicator name
        InsufficientDataError: not a single requested indicator fits the series
    """
    requested = list(indicators) if indicators is not None else list(SUPPORTED_INDICATORS)
    unknown = [name for name in requested if name not in SUPPORTED_INDICATORS]
    if unknown:
        raise ValueError(
            f"Unknown indicator(s) {', '.join(unknown)}. "
            f"Must be one of: {', '.join(SUPPORTED_INDICATORS)}"
        )
    if not candles:
        raise InsufficientDataError("technical indicators", 1, 0)

    closes = candles_to_closes(candles)
    computed: Dict[str, object] = {}
    sma: Dict[int, object] = {}
    ema: Dict[int, object] = {}
    unavailable: Dict[str, str] = {}

    def attempt(name: str, compute):
        try:
            return compute()
        except InsufficientDataError as e:
            unavailable[name] = str(e)
            return None

    if "rsi" in requested:
        computed["rsi"] = attempt("rsi", lambda: calculate_rsi(closes, rsi_period))
    if "macd" in requested:
        computed["macd"] = attempt("macd", lambda: calculate_macd(closes, *macd_periods))
    if "sma" in requested:
        for period in sma_periods:
            result = attempt(f"sma_{period}", lambda p=period: calculate_sma(closes, p))
            if result is not None:
                sma[period] = result
    if "ema" in requested:
        for period in ema_periods:
            result = attempt(f"ema_{period}", lambda p=period: calculate_ema(closes, p))
            if result is not None:
                ema[period] = result
    if "bollinger" in requested:
        computed["bollinger"] = attempt(
            "bollinger",
            lambda: calculate_bollinger_bands(closes, bollinger_period, bollinger_std),
        )
    if "volume_sma" in requested:
        computed["volume_sma"] = attempt(
            "volume_sma", lambda: calculate_volume_sma(candles, volume_period)
        )

    if not sma and not ema and not any(v is not None for v in computed.values()):
        minimum = min(
            rsi_period + 1,
            macd_periods[1] + macd_periods[2],
            bollinger_period,
            volume_period,
            *sma_periods,
            *ema_periods,
        )
        raise InsufficientDataError("technical indicators", minimum, len(candles))

    return IndicatorSet(
        price=closes[-1],
        data_points=len(candles),
        rsi=computed.get("rsi"),
        macd=computed.get("macd"),
        sma=sma,
        ema=ema,
        bollinger=computed.get("bollinger"),
        volume_sma=computed.get("volume_sma"),
        unavailable=unavailable,
    )
