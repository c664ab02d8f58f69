"""
Pydantic models for the Market Analytics service.
Response models built from the analytics engine's result records.
"""
from pydantic import BaseModel
from typing import Dict, List, Optional
from decimal import Decimal
from datetime import datetime

from cryptoquant.analytics.types import (
    BollingerResult,
    DrawdownDescriptor,
    IndicatorSet,
    MACDResult,
    MovingAverageResult,
    PriceActionAnalysis,
    PricePerformance,
    RiskMetrics,
    RSIResult,
    SignalAggregate,
    VolumeSMAResult,
)


def format_confidence(level: Decimal) -> str:
    """0.95 -> '95%', 0.975 -> '97.5%'."""
    return f"{(level * 100).normalize():f}%"


# Technical indicators

class MovingAverageModel(BaseModel):
    kind: str  # "sma" | "ema"
    period: int
    value: Decimal
    price: Decimal
    signal: str  # "bullish" | "bearish"

    @classmethod
    def from_result(cls, result: MovingAverageResult) -> "MovingAverageModel":
        return cls(
            kind=result.kind,
            period=result.period,
            value=result.value,
            price=result.price,
            signal=result.signal.value,
        )


class RSIModel(BaseModel):
    period: int
    value: Decimal
    signal: str  # "overbought" | "oversold" | "neutral"

    @classmethod
    def from_result(cls, result: RSIResult) -> "RSIModel":
        return cls(period=result.period, value=result.value, signal=result.signal.value)


class MACDModel(BaseModel):
    macd_line: Decimal
    signal_line: Decimal
    histogram: Decimal
    signal: str
    crossover: str  # "bullish" | "bearish" | "none"
    divergence: str

    @classmethod
    def from_result(cls, result: MACDResult) -> "MACDModel":
        return cls(
            macd_line=result.macd_line,
            signal_line=result.signal_line,
            histogram=result.histogram,
            signal=result.signal.value,
            crossover=result.crossover.value,
            divergence=result.divergence.value,
        )


class BollingerModel(BaseModel):
    upper: Decimal
    middle: Decimal
    lower: Decimal
    band_width: Decimal
    price_position: Decimal
    signal: str
    squeeze: str  # "tight" | "normal" | "wide"

    @classmethod
    def from_result(cls, result: BollingerResult) -> "BollingerModel":
        return cls(
            upper=result.upper,
            middle=result.middle,
            lower=result.lower,
            band_width=result.band_width,
            price_position=result.price_position,
            signal=result.signal.value,
            squeeze=result.squeeze.value,
        )


class VolumeSMAModel(BaseModel):
    period: int
    value: Decimal
    current_volume: Decimal
    ratio: Decimal
    signal: str  # "high" | "low" | "normal"

    @classmethod
    def from_result(cls, result: VolumeSMAResult) -> "VolumeSMAModel":
        return cls(
            period=result.period,
            value=result.value,
            current_volume=result.current_volume,
            ratio=result.ratio,
            signal=result.signal.value,
        )


class TechnicalIndicatorsResponse(BaseModel):
    """Response model for the technical indicators operation."""
    symbol: str
    timeframe: str
    current_price: Decimal
    data_points: int
    rsi: Optional[RSIModel] = None
    macd: Optional[MACDModel] = None
    sma: Dict[str, MovingAverageModel] = {}
    ema: Dict[str, MovingAverageModel] = {}
    bollinger: Optional[BollingerModel] = None
    volume_sma: Optional[VolumeSMAModel] = None
    unavailable: Dict[str, str] = {}
    timestamp: datetime

    @classmethod
    def build(cls, symbol: str, timeframe: str, result: IndicatorSet, timestamp: datetime):
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            current_price=result.price,
            data_points=result.data_points,
            rsi=RSIModel.from_result(result.rsi) if result.rsi else None,
            macd=MACDModel.from_result(result.macd) if result.macd else None,
            sma={f"sma_{p}": MovingAverageModel.from_result(r) for p, r in result.sma.items()},
            ema={f"ema_{p}": MovingAverageModel.from_result(r) for p, r in result.ema.items()},
            bollinger=BollingerModel.from_result(result.bollinger) if result.bollinger else None,
            volume_sma=VolumeSMAModel.from_result(result.volume_sma) if result.volume_sma else None,
            unavailable=dict(result.unavailable),
            timestamp=timestamp,
        )


# Price action

class TrendModel(BaseModel):
    direction: str  # "bullish" | "bearish" | "sideways"
    change_percent: Decimal
    slope: Decimal
    strength: Decimal
    short_term: str
    medium_term: str
    long_term: str


class VolatilityModel(BaseModel):
    daily_volatility: Decimal
    annualized_volatility: Decimal
    regime: str  # "low" | "moderate" | "high"


class VolumeProfileModel(BaseModel):
    current_volume: Decimal
    average_volume: Decimal
    volume_ratio: Decimal
    volume_spike: bool


class SupportResistanceModel(BaseModel):
    support: Decimal
    resistance: Decimal
    distance_to_support_percent: Decimal
    distance_to_resistance_percent: Decimal


class PivotPointsModel(BaseModel):
    pivot: Decimal
    r1: Decimal
    s1: Decimal
    r2: Decimal
    s2: Decimal


class PriceActionResponse(BaseModel):
    """Response model for the price action operation."""
    symbol: str
    timeframe: str
    current_price: Decimal
    data_points: int
    trend: TrendModel
    volatility: VolatilityModel
    volume: VolumeProfileModel
    support_resistance: SupportResistanceModel
    pivot_points: PivotPointsModel
    patterns: List[str]
    timestamp: datetime

    @classmethod
    def build(cls, symbol: str, timeframe: str, result: PriceActionAnalysis, timestamp: datetime):
        trend = result.trend
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            current_price=result.price,
            data_points=result.data_points,
            trend=TrendModel(
                direction=trend.direction.value,
                change_percent=trend.change_percent,
                slope=trend.slope,
                strength=trend.strength,
                short_term=trend.short_term.value,
                medium_term=trend.medium_term.value,
                long_term=trend.long_term.value,
            ),
            volatility=VolatilityModel(
                daily_volatility=result.volatility.daily_volatility,
                annualized_volatility=result.volatility.annualized_volatility,
                regime=result.volatility.regime.value,
            ),
            volume=VolumeProfileModel(
                current_volume=result.volume.current_volume,
                average_volume=result.volume.average_volume,
                volume_ratio=result.volume.volume_ratio,
                volume_spike=result.volume.volume_spike,
            ),
            support_resistance=SupportResistanceModel(
                support=result.levels.support,
                resistance=result.levels.resistance,
                distance_to_support_percent=result.levels.distance_to_support_percent,
                distance_to_resistance_percent=result.levels.distance_to_resistance_percent,
            ),
            pivot_points=PivotPointsModel(
                pivot=result.pivots.pivot,
                r1=result.pivots.r1,
                s1=result.pivots.s1,
                r2=result.pivots.r2,
                s2=result.pivots.s2,
            ),
            patterns=result.patterns.active(),
            timestamp=timestamp,
        )


# Trading signals

class SignalModel(BaseModel):
    source: str
    direction: str
    weight: Decimal


class TradingSignalResponse(BaseModel):
    """Response model for the trading signals operation."""
    symbol: str
    timeframe: str
    strategy: str
    overall_signal: str  # "buy" | "sell" | "hold"
    confidence_score: Decimal
    bullish_percent: Decimal
    bearish_percent: Decimal
    threshold: Decimal
    consensus: str
    signals: List[SignalModel]
    timestamp: datetime

    @classmethod
    def build(cls, symbol: str, timeframe: str, result: SignalAggregate, timestamp: datetime):
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            strategy=result.strategy,
            overall_signal=result.overall_signal.value,
            confidence_score=result.confidence_score,
            bullish_percent=result.bullish_percent,
            bearish_percent=result.bearish_percent,
            threshold=result.threshold,
            consensus=result.consensus.value,
            signals=[
                SignalModel(source=s.source, direction=s.direction.value, weight=s.weight)
                for s in result.contributing_signals
            ],
            timestamp=timestamp,
        )


# Risk metrics

class DrawdownModel(BaseModel):
    max_drawdown_percent: Decimal
    peak_price: Decimal
    trough_price: Decimal
    start_date: datetime
    end_date: datetime
    duration_days: int

    @classmethod
    def from_result(cls, result: DrawdownDescriptor) -> "DrawdownModel":
        return cls(
            max_drawdown_percent=result.max_drawdown_percent,
            peak_price=result.peak_price,
            trough_price=result.trough_price,
            start_date=result.start_date,
            end_date=result.end_date,
            duration_days=result.duration_days,
        )


class BenchmarkModel(BaseModel):
    symbol: str
    beta: Decimal
    alpha: Decimal
    correlation: Decimal
    tracking_error: Decimal
    observations: int


class RiskMetricsResponse(BaseModel):
    """Response model for the risk metrics operation."""
    symbol: str
    timeframe: str
    observations: int
    risk_free_rate: Decimal  # Annual decimal
    volatility: Decimal
    annualized_volatility: Decimal
    downside_deviation: Decimal
    value_at_risk: Dict[str, Decimal]  # Keyed by confidence, e.g. "95%"
    expected_shortfall: Dict[str, Decimal]
    sharpe_ratio: Decimal
    sortino_ratio: Decimal
    annualized_return: Decimal
    skewness: Decimal
    kurtosis: Decimal
    max_drawdown: DrawdownModel
    benchmark: Optional[BenchmarkModel] = None
    risk_score: Decimal
    risk_level: str  # "low" | "moderate" | "high"
    risk_concerns: List[str]
    timestamp: datetime

    @classmethod
    def build(
        cls,
        symbol: str,
        timeframe: str,
        result: RiskMetrics,
        risk_free_rate: Decimal,
        timestamp: datetime,
        benchmark_symbol: Optional[str] = None,
    ):
        benchmark = None
        if result.benchmark is not None:
            benchmark = BenchmarkModel(
                symbol=benchmark_symbol or "",
                beta=result.benchmark.beta,
                alpha=result.benchmark.alpha,
                correlation=result.benchmark.correlation,
                tracking_error=result.benchmark.tracking_error,
                observations=result.benchmark.observations,
            )
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            observations=result.observations,
            risk_free_rate=risk_free_rate,
            volatility=result.volatility,
            annualized_volatility=result.annualized_volatility,
            downside_deviation=result.downside_deviation,
            value_at_risk={format_confidence(k): v for k, v in result.value_at_risk.items()},
            expected_shortfall={
                format_confidence(k): v for k, v in result.expected_shortfall.items()
            },
            sharpe_ratio=result.sharpe_ratio,
            sortino_ratio=result.sortino_ratio,
            annualized_return=result.annualized_return,
            skewness=result.skewness,
            kurtosis=result.kurtosis,
            max_drawdown=DrawdownModel.from_result(result.max_drawdown),
            benchmark=benchmark,
            risk_score=result.assessment.score,
            risk_level=result.risk_level.value,
            risk_concerns=list(result.risk_concerns),
            timestamp=timestamp,
        )


# Price performance

class PricePerformanceResponse(BaseModel):
    """Response model for the price performance operation."""
    symbol: str
    timeframe: str
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
    timestamp: datetime

    @classmethod
    def build(cls, symbol: str, timeframe: str, result: PricePerformance, timestamp: datetime):
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            start_price=result.start_price,
            end_price=result.end_price,
            start_date=result.start_date,
            end_date=result.end_date,
            days=result.days,
            total_return_percent=result.total_return_percent,
            annualized_return_percent=result.annualized_return_percent,
            highest_price=result.highest_price,
            lowest_price=result.lowest_price,
            average_volume=result.average_volume,
            best_day_percent=result.best_day_percent,
            worst_day_percent=result.worst_day_percent,
            positive_days=result.positive_days,
            negative_days=result.negative_days,
            annualized_volatility=result.annualized_volatility,
            sharpe_ratio=result.sharpe_ratio,
            timestamp=timestamp,
        )


# Comparisons

class ComparisonFailure(BaseModel):
    """A symbol that could not be analyzed during a comparison."""
    symbol: str
    error_code: str
    message: str


class TechnicalStrengthEntry(BaseModel):
    rank: int
    symbol: str
    overall_signal: str
    confidence_score: Decimal
    strength_score: Decimal  # bullish% - bearish%, from -100 to 100
    consensus: str
    current_price: Decimal


class TechnicalStrengthComparisonResponse(BaseModel):
    """Response model for compare_technical_strength."""
    timeframe: str
    strategy: str
    rankings: List[TechnicalStrengthEntry]
    failed: List[ComparisonFailure] = []
    timestamp: datetime


class PerformanceComparisonResponse(BaseModel):
    """Response model for compare_price_performance."""
    timeframe: str
    rankings: List[PricePerformanceResponse]  # Best total return first
    best_performer: Optional[str] = None
    worst_performer: Optional[str] = None
    failed: List[ComparisonFailure] = []
    timestamp: datetime
