"""
Main business logic service for Market Analytics.
Fetches candles through a data provider, runs the pure analytics engine and
returns pydantic response models, caching each result by operation and
parameters.
"""
import dataclasses
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from cryptoquant.analytics import (
    Candle as AnalyticsCandle,
    calculate_price_performance,
    calculate_risk_metrics,
    calculate_technical_indicators,
    analyze_price_action,
    generate_trading_signal,
)
from cryptoquant.analytics.errors import AnalyticsError, InsufficientDataError
from cryptoquant.analytics.risk import RiskConfig
from cryptoquant.cache_manager import CacheManager, generate_cache_key
from cryptoquant.config import settings as default_settings
from cryptoquant.data_providers import (
    BinanceOhlcvProvider,
    CoinMarketCapOhlcvProvider,
    Interval,
    OhlcvDataProvider,
    ProviderError,
)
from cryptoquant.error_models import to_error_response
from cryptoquant.sentry_init import configure_logging, init_sentry
from cryptoquant.validators import (
    timeframe_to_days,
    validate_coin_symbol,
    validate_confidence_levels,
    validate_indicators,
    validate_risk_free_rate,
    validate_strategy,
    validate_symbols,
    validate_timeframe,
)
from .models import (
    ComparisonFailure,
    PerformanceComparisonResponse,
    PriceActionResponse,
    PricePerformanceResponse,
    RiskMetricsResponse,
    TechnicalIndicatorsResponse,
    TechnicalStrengthComparisonResponse,
    TechnicalStrengthEntry,
    TradingSignalResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEFRAME = "90d"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MarketAnalyticsService:
    """
    Service for market analytics operations.
    
    Every operation validates its inputs, fetches candles for the requested
    timeframe and hands them to the analytics engine. Engine and provider
    exceptions propagate to the caller, except in the comparison operations
    which report failed symbols alongside the successful ones.
    """
    
    def __init__(
        self,
        provider: OhlcvDataProvider,
        cache: Optional[CacheManager] = None,
        risk_config: Optional[RiskConfig] = None,
        default_strategy: str = "moderate",
        interval: Interval = Interval.DAY_1,
        technical_ttl: int = 300,
        historical_ttl: int = 600,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.provider = provider
        self.cache = cache or CacheManager(default_ttl=technical_ttl)
        self.risk_config = risk_config or RiskConfig()
        self.default_strategy = validate_strategy(default_strategy)
        self.interval = interval
        self.technical_ttl = technical_ttl
        self.historical_ttl = historical_ttl
        self._clock = clock
    
    async def _cached(
        self,
        operation: str,
        params: Dict[str, Any],
        ttl: int,
        compute: Callable[[], Awaitable[Any]],
    ) -> Any:
        key = generate_cache_key(operation, params)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        result = await compute()
        self.cache.set(key, result, ttl)
        return result
    
    async def _get_candles(self, symbol: str, timeframe: str) -> List[AnalyticsCandle]:
        """Fetch candles for the timeframe window ending now."""
        async def fetch() -> List[AnalyticsCandle]:
            end_time = self._clock()
            start_time = end_time - timedelta(days=timeframe_to_days(timeframe))
            logger.debug(f"Fetching {symbol} {timeframe} candles from {self.provider.name}")
            provider_candles = await self.provider.get_ohlcv(
                symbol, start_time, end_time, self.interval
            )
            return [AnalyticsCandle.from_provider_candle(c) for c in provider_candles]
        
        return await self._cached(
            "ohlcv",
            {"symbol": symbol, "timeframe": timeframe, "interval": self.interval.value},
            self.technical_ttl,
            fetch,
        )
    
    async def get_technical_indicators(
        self,
        symbol: str,
        timeframe: str = DEFAULT_TIMEFRAME,
        indicators: Optional[Iterable[str]] = None,
    ) -> TechnicalIndicatorsResponse:
        """Calculate the selected technical indicators (default: all)."""
        symbol = validate_coin_symbol(symbol)
        timeframe = validate_timeframe(timeframe)
        selected = validate_indicators(indicators) if indicators is not None else None
        
        async def compute() -> TechnicalIndicatorsResponse:
            candles = await self._get_candles(symbol, timeframe)
            result = calculate_technical_indicators(candles, selected)
            if result.unavailable:
                logger.info(
                    f"{symbol} {timeframe}: indicators unavailable: {', '.join(result.unavailable)}"
                )
            return TechnicalIndicatorsResponse.build(symbol, timeframe, result, self._clock())
        
        params = {"symbol": symbol, "timeframe": timeframe, "indicators": sorted(selected or [])}
        return await self._cached("technical_indicators", params, self.technical_ttl, compute)
    
    async def analyze_price_action(
        self,
        symbol: str,
        timeframe: str = DEFAULT_TIMEFRAME,
    ) -> PriceActionResponse:
        symbol = validate_coin_symbol(symbol)
        timeframe = validate_timeframe(timeframe)
        
        async def compute() -> PriceActionResponse:
            candles = await self._get_candles(symbol, timeframe)
            result = analyze_price_action(candles)
            return PriceActionResponse.build(symbol, timeframe, result, self._clock())
        
        params = {"symbol": symbol, "timeframe": timeframe}
        return await self._cached("price_action", params, self.technical_ttl, compute)
    
    async def generate_trading_signals(
        self,
        symbol: str,
        timeframe: str = DEFAULT_TIMEFRAME,
        strategy: Optional[str] = None,
    ) -> TradingSignalResponse:
        """Aggregate indicator and price-action signals into buy/sell/hold."""
        symbol = validate_coin_symbol(symbol)
        timeframe = validate_timeframe(timeframe)
        strategy = validate_strategy(strategy or self.default_strategy)
        
        async def compute() -> TradingSignalResponse:
            candles = await self._get_candles(symbol, timeframe)
            price_action = analyze_price_action(candles)
            try:
                indicators = calculate_technical_indicators(candles)
            except InsufficientDataError as e:
                # Short windows still aggregate the price-action signals.
                logger.info(f"{symbol} {timeframe}: no indicator signals ({e})")
                indicators = None
            result = generate_trading_signal(indicators, price_action, strategy)
            logger.info(
                f"{symbol} {timeframe} {strategy}: {result.overall_signal.value} "
                f"(confidence {result.confidence_score:.2f})"
            )
            return TradingSignalResponse.build(symbol, timeframe, result, self._clock())
        
        params = {"symbol": symbol, "timeframe": timeframe, "strategy": strategy}
        return await self._cached("trading_signals", params, self.technical_ttl, compute)
    
    def _risk_config_for(self, confidence_levels=None, risk_free_rate=None) -> RiskConfig:
        overrides = {}
        if confidence_levels is not None:
            overrides["confidence_levels"] = tuple(validate_confidence_levels(confidence_levels))
        if risk_free_rate is not None:
            overrides["risk_free_rate"] = validate_risk_free_rate(risk_free_rate)
        if not overrides:
            return self.risk_config
        return dataclasses.replace(self.risk_config, **overrides)
    
    async def calculate_risk_metrics(
        self,
        symbol: str,
        timeframe: str = DEFAULT_TIMEFRAME,
        benchmark_symbol: Optional[str] = None,
        confidence_levels: Optional[Iterable] = None,
        risk_free_rate=None,
    ) -> RiskMetricsResponse:
        """
        Calculate risk metrics, optionally relative to a benchmark symbol.
        
        Args:
            risk_free_rate: Annual decimal (0.05 == 5%); defaults to configuration
        """
        symbol = validate_coin_symbol(symbol)
        timeframe = validate_timeframe(timeframe)
        if benchmark_symbol is not None:
            benchmark_symbol = validate_coin_symbol(benchmark_symbol)
        config = self._risk_config_for(confidence_levels, risk_free_rate)
        
        async def compute() -> RiskMetricsResponse:
            candles = await self._get_candles(symbol, timeframe)
            benchmark = None
            if benchmark_symbol is not None:
                benchmark = await self._get_candles(benchmark_symbol, timeframe)
            result = calculate_risk_metrics(candles, benchmark, config)
            return RiskMetricsResponse.build(
                symbol,
                timeframe,
                result,
                config.risk_free_rate,
                self._clock(),
                benchmark_symbol=benchmark_symbol,
            )
        
        params = {
            "symbol": symbol,
            "timeframe": timeframe,
            "benchmark": benchmark_symbol,
            "confidence_levels": [str(c) for c in config.confidence_levels],
            "risk_free_rate": str(config.risk_free_rate),
        }
        return await self._cached("risk_metrics", params, self.historical_ttl, compute)
    
    async def analyze_price_performance(
        self,
        symbol: str,
        timeframe: str = DEFAULT_TIMEFRAME,
    ) -> PricePerformanceResponse:
        symbol = validate_coin_symbol(symbol)
        timeframe = validate_timeframe(timeframe)
        
        async def compute() -> PricePerformanceResponse:
            candles = await self._get_candles(symbol, timeframe)
            result = calculate_price_performance(candles, self.risk_config)
            return PricePerformanceResponse.build(symbol, timeframe, result, self._clock())
        
        params = {"symbol": symbol, "timeframe": timeframe}
        return await self._cached("price_performance", params, self.historical_ttl, compute)
    
    def _failure(self, symbol: str, exc: Exception) -> ComparisonFailure:
        error, _ = to_error_response(exc)
        logger.warning(f"Comparison skipped {symbol}: {exc}")
        return ComparisonFailure(
            symbol=symbol, error_code=error.error_code.value, message=error.message
        )
    
    async def compare_technical_strength(
        self,
        symbols: Iterable[str],
        timeframe: str = DEFAULT_TIMEFRAME,
        strategy: Optional[str] = None,
    ) -> TechnicalStrengthComparisonResponse:
        """Rank symbols by bullish% minus bearish% of their aggregate signal."""
        symbols = validate_symbols(symbols)
        timeframe = validate_timeframe(timeframe)
        strategy = validate_strategy(strategy or self.default_strategy)
        
        scored = []
        failed = []
        for symbol in symbols:
            try:
                signal = await self.generate_trading_signals(symbol, timeframe, strategy)
                candles = await self._get_candles(symbol, timeframe)
            except (AnalyticsError, ProviderError) as e:
                failed.append(self._failure(symbol, e))
                continue
            score = signal.bullish_percent - signal.bearish_percent
            scored.append((score, symbol, signal, candles[-1].close))
        
        scored.sort(key=lambda item: item[0], reverse=True)
        rankings = [
            TechnicalStrengthEntry(
                rank=i + 1,
                symbol=symbol,
                overall_signal=signal.overall_signal,
                confidence_score=signal.confidence_score,
                strength_score=score,
                consensus=signal.consensus,
                current_price=price,
            )
            for i, (score, symbol, signal, price) in enumerate(scored)
        ]
        return TechnicalStrengthComparisonResponse(
            timeframe=timeframe,
            strategy=strategy,
            rankings=rankings,
            failed=failed,
            timestamp=self._clock(),
        )
    
    async def compare_price_performance(
        self,
        symbols: Iterable[str],
        timeframe: str = DEFAULT_TIMEFRAME,
    ) -> PerformanceComparisonResponse:
        """Rank symbols by total return over the timeframe."""
        symbols = validate_symbols(symbols)
        timeframe = validate_timeframe(timeframe)
        
        performances = []
        failed = []
        for symbol in symbols:
            try:
                performances.append(await self.analyze_price_performance(symbol, timeframe))
            except (AnalyticsError, ProviderError) as e:
                failed.append(self._failure(symbol, e))
        
        performances.sort(key=lambda p: p.total_return_percent, reverse=True)
        return PerformanceComparisonResponse(
            timeframe=timeframe,
            rankings=performances,
            best_performer=performances[0].symbol if performances else None,
            worst_performer=performances[-1].symbol if performances else None,
            failed=failed,
            timestamp=self._clock(),
        )
    
    def get_cache_stats(self) -> Dict[str, Any]:
        return self.cache.get_stats()
    
    def get_rate_limit_status(self) -> Dict[str, Any]:
        rate_limiter = getattr(self.provider, "rate_limiter", None)
        if rate_limiter is None:
            return {}
        return rate_limiter.get_stats()
    
    async def close(self):
        """Close provider connections."""
        await self.provider.close()


def create_analytics_service(settings=None) -> MarketAnalyticsService:
    """Build the service wired from configuration."""
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    init_sentry()
    if settings.DATA_PROVIDER == "binance":
        provider = BinanceOhlcvProvider(base_url=settings.BINANCE_BASE_URL)
    else:
        provider = CoinMarketCapOhlcvProvider(
            api_key=settings.COINMARKETCAP_API_KEY,
            base_url=settings.COINMARKETCAP_BASE_URL,
        )
    cache = CacheManager(
        default_ttl=settings.CACHE_TTL_SECONDS,
        max_keys=settings.CACHE_MAX_KEYS,
    )
    logger.info(f"Market analytics service using {provider.name} provider")
    return MarketAnalyticsService(
        provider=provider,
        cache=cache,
        risk_config=RiskConfig.from_settings(settings),
        default_strategy=settings.DEFAULT_STRATEGY,
        technical_ttl=settings.CACHE_TTL_SECONDS,
        historical_ttl=settings.CACHE_HISTORICAL_TTL_SECONDS,
    )
