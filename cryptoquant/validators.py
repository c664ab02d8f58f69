"""
Validation utilities for service inputs.
Each validator returns the normalized value or raises ValueError.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List


# Common regex patterns
COIN_SYMBOL_PATTERN = re.compile(r'^[A-Z0-9]{1,10}$')

MAX_SYMBOLS = 50
MIN_PERIOD = 2
MAX_PERIOD = 200
MAX_RISK_FREE_RATE = Decimal("0.5")

TIMEFRAME_DAYS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "180d": 180,
    "1y": 365,
}

VALID_STRATEGIES = ['conservative', 'moderate', 'aggressive']
VALID_INDICATORS = ['rsi', 'macd', 'sma', 'ema', 'bollinger', 'volume_sma']


def validate_coin_symbol(symbol: str) -> str:
    """
    Validate cryptocurrency symbol format.
    Requirements:
    - 1-10 characters
    - Letters and numbers only (normalized to uppercase)
    """
    normalized = (symbol or "").strip().upper()
    if not COIN_SYMBOL_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid symbol '{symbol}': must be 1-10 letters and numbers only (e.g., BTC, ETH)"
        )
    return normalized


def validate_symbols(symbols: Iterable[str]) -> List[str]:
    """Validate a list of symbols (1 to 50 entries)."""
    symbols = list(symbols)
    if not symbols:
        raise ValueError("At least one symbol is required")
    if len(symbols) > MAX_SYMBOLS:
        raise ValueError(f"Maximum {MAX_SYMBOLS} symbols allowed")
    return [validate_coin_symbol(s) for s in symbols]


def validate_timeframe(timeframe: str) -> str:
    if timeframe not in TIMEFRAME_DAYS:
        raise ValueError(
            f"Invalid timeframe. Must be one of: {', '.join(TIMEFRAME_DAYS)}"
        )
    return timeframe


def timeframe_to_days(timeframe: str) -> int:
    return TIMEFRAME_DAYS[validate_timeframe(timeframe)]


def validate_period(period: int) -> int:
    """Indicator period: integer between 2 and 200."""
    if isinstance(period, bool) or not isinstance(period, int):
        raise ValueError("Period must be an integer")
    if not (MIN_PERIOD <= period <= MAX_PERIOD):
        raise ValueError(f"Period must be between {MIN_PERIOD} and {MAX_PERIOD}")
    return period


def _to_decimal(value, name: str) -> Decimal:
    try:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{name} must be a number")


def validate_confidence_levels(levels: Iterable) -> List[Decimal]:
    """Confidence levels strictly between 0 and 1, returned sorted ascending."""
    result = []
    for level in levels:
        value = _to_decimal(level, "Confidence level")
        if not (Decimal(0) < value < Decimal(1)):
            raise ValueError("Confidence levels must be numbers between 0 and 1 (exclusive)")
        result.append(value)
    if not result:
        raise ValueError("At least one confidence level is required")
    return sorted(result)


def validate_risk_free_rate(rate) -> Decimal:
    """Annual risk-free rate as a decimal (0.05 == 5%), between 0 and 0.5."""
    value = _to_decimal(rate, "Risk-free rate")
    if not (Decimal(0) <= value <= MAX_RISK_FREE_RATE):
        raise ValueError(
            f"Risk-free rate must be an annual decimal between 0 and {MAX_RISK_FREE_RATE} (e.g., 0.05 for 5%)"
        )
    return value


def validate_strategy(strategy: str) -> str:
    if (strategy or "").lower() not in VALID_STRATEGIES:
        raise ValueError(
            f"Invalid strategy. Must be one of: {', '.join(VALID_STRATEGIES)}"
        )
    return strategy.lower()


def validate_indicators(indicators: Iterable[str]) -> List[str]:
    result = []
    for indicator in indicators:
        name = indicator.lower()
        if name not in VALID_INDICATORS:
            raise ValueError(
                f"Invalid indicator '{indicator}'. Must be one of: {', '.join(VALID_INDICATORS)}"
            )
        result.append(name)
    return result


def validate_percentage(value: float, min_val: float = 0.0, max_val: float = 100.0) -> float:
    """Validate percentage value."""
    if not (min_val <= value <= max_val):
        raise ValueError(f"Percentage must be between {min_val} and {max_val}")
    return value
