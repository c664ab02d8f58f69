"""
Data structures for the Analytics Engine.

Every indicator and metric returns its own frozen result record so that
callers pattern-match on the record type (or its ``kind``) instead of
probing dictionaries for optional keys.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union


class SignalTag(str, Enum):
    """Qualitative reading attached to an indicator value."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"


class VolumeTag(str, Enum):
    HIGH = "high"
    LOW = "low"
    NORMAL = "normal"


class SqueezeTag(str, Enum):
    TIGHT = "tight"
    NORMAL = "normal"
    WIDE = "wide"


class CrossoverTag(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NONE = "none"


class TrendDirection(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Direction(str, Enum):
    """Direction carried by a single contributing signal or the aggregate."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class Consensus(str, Enum):
    STRONG_BULLISH = "strong_bullish"
    WEAK_BULLISH = "weak_bullish"
    MIXED = "mixed"
    WEAK_BEARISH = "weak_bearish"
    STRONG_BEARISH = "strong_bearish"


@dataclass(frozen=True)
class Candle:
    """
    Canonical candle type.

    timestamp: ms since epoch
    open, high, low, close, volume: Decimal values
    """
    timestamp: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal

    @classmethod
    def from_provider_candle(cls, candle) -> 'Candle':
        """
        Convert from data provider Candle (with datetime timestamp).
        """
        if isinstance(candle.timestamp, datetime):
            timestamp_ms = int(candle.timestamp.timestamp() * 1000)
        else:
            timestamp_ms = int(candle.timestamp)

        return cls(
            timestamp=timestamp_ms,
            open=to_decimal(candle.open),
            high=to_decimal(candle.high),
            low=to_decimal(candle.low),
            close=to_decimal(candle.close),
            volume=to_decimal(candle.volume),
        )

    @property
    def opened_at(self) -> datetime:
        """Candle open time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)


# Trailing values kept on each indicator result for crossover detection.
HISTORY_LENGTH = 10

PriceInput = Union[Sequence[Candle], Sequence[Decimal], Sequence[float], Sequence[int]]


def to_decimal(value) -> Decimal:
    """Convert a number to Decimal without inheriting float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def extract_closes(data: PriceInput) -> List[Decimal]:
    """Closing prices from candles, or the prices themselves as Decimals."""
    if data and isinstance(data[0], Candle):
        return candles_to_closes(data)
    return [to_decimal(d) for d in data]


def candles_to_closes(candles: Sequence[Candle]) -> List[Decimal]:
    """Extract closing prices from candles array."""
    return [candle.close for candle in candles]


def candles_to_highs(candles: Sequence[Candle]) -> List[Decimal]:
    """Extract high prices from candles array."""
    return [candle.high for candle in candles]


def candles_to_lows(candles: Sequence[Candle]) -> List[Decimal]:
    """Extract low prices from candles array."""
    return [candle.low for candle in candles]


def candles_to_volumes(candles: Sequence[Candle]) -> List[Decimal]:
    """Extract volumes from candles array."""
    return [candle.volume for candle in candles]


# Indicator results

@dataclass(frozen=True)
class MovingAverageResult:
    """SMA or EMA reading; ``kind`` tells which."""
    kind: str
    period: int
    value: Decimal
    price: Decimal
    signal: SignalTag
    history: Tuple[Decimal, ...]


@dataclass(frozen=True)
class RSIResult:
    period: int
    value: Decimal
    signal: SignalTag
    history: Tuple[Decimal, ...]
    kind: str = "rsi"


@dataclass(frozen=True)
class MACDResult:
    fast_period: int
    slow_period: int
    signal_period: int
    macd_line: Decimal
    signal_line: Decimal
    histogram: Decimal
    signal: SignalTag
    crossover: CrossoverTag
    divergence: CrossoverTag
    macd_history: Tuple[Decimal, ...]
    signal_history: Tuple[Decimal, ...]
    histogram_history: Tuple[Decimal, ...]
    kind: str = "macd"


@dataclass(frozen=True)
class BollingerResult:
    period: int
    num_std: Decimal
    upper: Decimal
    middle: Decimal
    lower: Decimal
    price: Decimal
    band_width: Decimal
    price_position: Decimal
    signal: SignalTag
    squeeze: SqueezeTag
    kind: str = "bollinger"


@dataclass(frozen=True)
class VolumeSMAResult:
    period: int
    value: Decimal
    current_volume: Decimal
    ratio: Decimal
    signal: VolumeTag
    history: Tuple[Decimal, ...]
    kind: str = "volume_sma"


@dataclass(frozen=True)
class IndicatorSet:
    """All indicators computed for one candle series."""
    price: Decimal
    data_points: int
    rsi: Optional[RSIResult] = None
    macd: Optional[MACDResult] = None
    sma: Dict[int, MovingAverageResult] = field(default_factory=dict)
    ema: Dict[int, MovingAverageResult] = field(default_factory=dict)
    bollinger: Optional[BollingerResult] = None
    volume_sma: Optional[VolumeSMAResult] = None
    unavailable: Dict[str, str] = field(default_factory=dict)


# Price-action results

@dataclass(frozen=True)
class TrendAnalysis:
    direction: TrendDirection
    change_percent: Decimal
    slope: Decimal
    strength: Decimal
    short_term: TrendDirection
    medium_term: TrendDirection
    long_term: TrendDirection


@dataclass(frozen=True)
class VolatilityAnalysis:
    daily_volatility: Decimal
    annualized_volatility: Decimal
    regime: RiskLevel


@dataclass(frozen=True)
class VolumeProfile:
    current_volume: Decimal
    average_volume: Decimal
    volume_ratio: Decimal
    volume_spike: bool


@dataclass(frozen=True)
class SupportResistance:
    support: Decimal
    resistance: Decimal
    current_price: Decimal
    distance_to_support_percent: Decimal
    distance_to_resistance_percent: Decimal


@dataclass(frozen=True)
class PivotPoints:
    pivot: Decimal
    r1: Decimal
    s1: Decimal
    r2: Decimal
    s2: Decimal


@dataclass(frozen=True)
class PatternFlags:
    higher_highs: bool = False
    higher_lows: bool = False
    lower_highs: bool = False
    lower_lows: bool = False
    breakout: bool = False
    breakdown: bool = False
    near_support: bool = False
    near_resistance: bool = False

    def active(self) -> List[str]:
        """Names of the flags that are set."""
        return [f.name for f in fields(self) if getattr(self, f.name)]


@dataclass(frozen=True)
class PriceActionAnalysis:
    price: Decimal
    data_points: int
    trend: TrendAnalysis
    volatility: VolatilityAnalysis
    volume: VolumeProfile
    levels: SupportResistance
    pivots: PivotPoints
    patterns: PatternFlags


# Risk results

@dataclass(frozen=True)
class DrawdownDescriptor:
    """The single worst peak-to-trough decline in the window."""
    max_drawdown_percent: Decimal
    peak_price: Decimal
    trough_price: Decimal
    start_date: datetime
    end_date: datetime
    duration_days: int


@dataclass(frozen=True)
class BenchmarkMetrics:
    beta: Decimal
    alpha: Decimal
    correlation: Decimal
    tracking_error: Decimal
    observations: int


@dataclass(frozen=True)
class RiskAssessment:
    score: Decimal
    level: RiskLevel
    concerns: Tuple[str, ...]


@dataclass(frozen=True)
class RiskMetrics:
    observations: int
    volatility: Decimal
    annualized_volatility: Decimal
    downside_deviation: Decimal
    value_at_risk: Dict[Decimal, Decimal]
    expected_shortfall: Dict[Decimal, Decimal]
    sharpe_ratio: Decimal
    sortino_ratio: Decimal
    annualized_return: Decimal
    skewness: Decimal
    kurtosis: Decimal
    max_drawdown: DrawdownDescriptor
    assessment: RiskAssessment
    benchmark: Optional[BenchmarkMetrics] = None

    @property
    def risk_level(self) -> RiskLevel:
        return self.assessment.level

    @property
    def risk_concerns(self) -> Tuple[str, ...]:
        return self.assessment.concerns


# Signals

@dataclass(frozen=True)
class Signal:
    """One contributing signal."""
    source: str
    direction: Direction
    weight: Decimal


@dataclass(frozen=True)
class SignalAggregate:
    overall_signal: Direction
    confidence_score: Decimal
    contributing_signals: Tuple[Signal, ...]
    bullish_percent: Decimal
    bearish_percent: Decimal
    consensus: Consensus
    strategy: str
    threshold: Decimal


# Performance

@dataclass(frozen=True)
class PricePerformance:
    start_price: Decimal
    end_price: Decimal
    start_date: datetime
    end_date: datetime
    days: int
    total_return_percent: Decimal
    annualized_return_percent: Decimal
    highest_price: Decimal
    lowest_price: Decimal
    average_volume: Decimal
    best_day_percent: Decimal
    worst_day_percent: Decimal
    positive_days: int
    negative_days: int
    annualized_volatility: Decimal
    sharpe_ratio: Decimal
