"""
Signal Aggregator

1. Map every available indicator reading to bullish/bearish/neutral
2. Weight it by its family's profile weight (shared within the family)
3. bullish% = bullish weight / total weight * 100, same for bearish%
4. buy if bullish% > threshold, sell if bearish% > threshold, else hold
5. confidence = min(|bullish% - bearish%|, 100)

Consensus counts signals rather than weight: at least 70% agreeing is
strong, a plain majority is weak, anything else is mixed.
"""
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple, Union

from ..types import (
    Consensus,
    CrossoverTag,
    Direction,
    IndicatorSet,
    PriceActionAnalysis,
    Signal,
    SignalAggregate,
    SignalTag,
    TrendDirection,
    VolumeTag,
)
from .profiles import StrategyProfile, get_strategy_profile

HUNDRED = Decimal(100)
SUPER_MAJORITY = Decimal("0.7")

_TAG_DIRECTIONS = {
    SignalTag.BULLISH: Direction.BULLISH,
    SignalTag.BEARISH: Direction.BEARISH,
    SignalTag.NEUTRAL: Direction.NEUTRAL,
    # Oscillator extremes read as mean-reversion.
    SignalTag.OVERSOLD: Direction.BULLISH,
    SignalTag.OVERBOUGHT: Direction.BEARISH,
}

_TREND_DIRECTIONS = {
    TrendDirection.BULLISH: Direction.BULLISH,
    TrendDirection.BEARISH: Direction.BEARISH,
    TrendDirection.SIDEWAYS: Direction.NEUTRAL,
}


def _family_signals(
    indicators: Optional[IndicatorSet],
    price_action: Optional[PriceActionAnalysis],
) -> List[Tuple[str, str, Direction]]:
    """(family, source, direction) for every reading that is present."""
    readings: List[Tuple[str, str, Direction]] = []

    if indicators is not None:
        if indicators.rsi is not None:
            readings.append(("rsi", "rsi", _TAG_DIRECTIONS[indicators.rsi.signal]))

        macd = indicators.macd
        if macd is not None:
            readings.append(("macd", "macd", _TAG_DIRECTIONS[macd.signal]))
            if macd.crossover != CrossoverTag.NONE:
                readings.append(
                    ("macd", "macd_crossover", Direction(macd.crossover.value))
                )

        for period, result in sorted(indicators.sma.items()):
            readings.append(("moving_averages", f"sma_{period}", _TAG_DIRECTIONS[result.signal]))
        for period, result in sorted(indicators.ema.items()):
            readings.append(("moving_averages", f"ema_{period}", _TAG_DIRECTIONS[result.signal]))

        if indicators.bollinger is not None:
            readings.append(
                ("bollinger", "bollinger", _TAG_DIRECTIONS[indicators.bollinger.signal])
            )

    if price_action is not None:
        trend = price_action.trend
        readings.append(("trend", "trend", _TREND_DIRECTIONS[trend.direction]))
        readings.append(("trend", "short_term_trend", _TREND_DIRECTIONS[trend.short_term]))

        high_volume = price_action.volume.volume_spike or (
            indicators is not None
            and indicators.volume_sma is not None
            and indicators.volume_sma.signal == VolumeTag.HIGH
        )
        # Heavy volume confirms the prevailing trend; otherwise it says nothing.
        direction = _TREND_DIRECTIONS[trend.direction] if high_volume else Direction.NEUTRAL
        readings.append(("volume", "volume", direction))

    return readings


def collect_signals(
    indicators: Optional[IndicatorSet],
    price_action: Optional[PriceActionAnalysis] = None,
    strategy: Union[str, StrategyProfile] = "moderate",
) -> List[Signal]:
    """Turn indicator and price-action readings into weighted signals."""
    profile = get_strategy_profile(strategy)
    readings = _family_signals(indicators, price_action)

    counts = {}
    for family, _, _ in readings:
        counts[family] = counts.get(family, 0) + 1

    return [
        Signal(
            source=source,
            direction=direction,
            weight=profile.weight_for(family) / Decimal(counts[family]),
        )
        for family, source, direction in readings
    ]


def _consensus(signals: Sequence[Signal]) -> Consensus:
    total = len(signals)
    if total == 0:
        return Consensus.MIXED
    bullish = sum(1 for s in signals if s.direction == Direction.BULLISH)
    bearish = sum(1 for s in signals if s.direction == Direction.BEARISH)

    if Decimal(bullish) / Decimal(total) >= SUPER_MAJORITY:
        return Consensus.STRONG_BULLISH
    if Decimal(bearish) / Decimal(total) >= SUPER_MAJORITY:
        return Consensus.STRONG_BEARISH
    if bullish > bearish:
        return Consensus.WEAK_BULLISH
    if bearish > bullish:
        return Consensus.WEAK_BEARISH
    return Consensus.MIXED


def aggregate_signals(
    signals: Sequence[Signal],
    strategy: Union[str, StrategyProfile] = "moderate",
) -> SignalAggregate:
    """
    Combine weighted signals into one buy/sell/hold decision.

    Args:
        signals: Contributing signals with their weights
        strategy: Profile name or StrategyProfile supplying the threshold

    Returns:
        SignalAggregate; hold with confidence 0 when there is no weight at all
    """
    profile = get_strategy_profile(strategy)
    total = sum((s.weight for s in signals), Decimal(0))

    if total == 0:
        return SignalAggregate(
            overall_signal=Direction.HOLD,
            confidence_score=Decimal(0),
            contributing_signals=tuple(signals),
            bullish_percent=Decimal(0),
            bearish_percent=Decimal(0),
            consensus=Consensus.MIXED,
            strategy=profile.name,
            threshold=profile.threshold,
        )

    bullish_weight = sum(
        (s.weight for s in signals if s.direction == Direction.BULLISH), Decimal(0)
    )
    bearish_weight = sum(
        (s.weight for s in signals if s.direction == Direction.BEARISH), Decimal(0)
    )
    bullish_percent = bullish_weight / total * HUNDRED
    bearish_percent = bearish_weight / total * HUNDRED

    if bullish_percent > profile.threshold:
        overall = Direction.BUY
    elif bearish_percent > profile.threshold:
        overall = Direction.SELL
    else:
        overall = Direction.HOLD

    return SignalAggregate(
        overall_signal=overall,
        confidence_score=min(abs(bullish_percent - bearish_percent), HUNDRED),
        contributing_signals=tuple(signals),
        bullish_percent=bullish_percent,
        bearish_percent=bearish_percent,
        consensus=_consensus(signals),
        strategy=profile.name,
        threshold=profile.threshold,
    )


def generate_trading_signal(
    indicators: Optional[IndicatorSet],
    price_action: Optional[PriceActionAnalysis] = None,
    strategy: Union[str, StrategyProfile] = "moderate",
) -> SignalAggregate:
    profile = get_strategy_profile(strategy)
    return aggregate_signals(collect_signals(indicators, price_action, profile), profile)
