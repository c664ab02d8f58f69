"""
Strategy Profiles

Each profile assigns a weight to every indicator family and a decision
threshold on the 0-100 bullish/bearish percentage scale. A family's weight
is shared evenly among the signals it contributes.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Union

SIGNAL_FAMILIES = ("rsi", "macd", "moving_averages", "bollinger", "trend", "volume")


@dataclass(frozen=True)
class StrategyProfile:
    name: str
    weights: Dict[str, Decimal]
    threshold: Decimal

    def weight_for(self, family: str) -> Decimal:
        return self.weights.get(family, Decimal(0))


STRATEGY_PROFILES: Dict[str, StrategyProfile] = {
    "conservative": StrategyProfile(
        name="conservative",
        weights={
            "rsi": Decimal("0.15"),
            "macd": Decimal("0.20"),
            "moving_averages": Decimal("0.25"),
            "bollinger": Decimal("0.10"),
            "trend": Decimal("0.25"),
            "volume": Decimal("0.05"),
        },
        threshold=Decimal(70),
    ),
    "moderate": StrategyProfile(
        name="moderate",
        weights={
            "rsi": Decimal("0.20"),
            "macd": Decimal("0.20"),
            "moving_averages": Decimal("0.20"),
            "bollinger": Decimal("0.15"),
            "trend": Decimal("0.15"),
            "volume": Decimal("0.10"),
        },
        threshold=Decimal(60),
    ),
    "aggressive": StrategyProfile(
        name="aggressive",
        weights={
            "rsi": Decimal("0.25"),
            "macd": Decimal("0.25"),
            "moving_averages": Decimal("0.15"),
            "bollinger": Decimal("0.15"),
            "trend": Decimal("0.10"),
            "volume": Decimal("0.10"),
        },
        threshold=Decimal(55),
    ),
}


def get_strategy_profile(strategy: Union[str, StrategyProfile]) -> StrategyProfile:
    """Resolve a profile by name (case-insensitive) or pass one through."""
    if isinstance(strategy, StrategyProfile):
        return strategy
    profile = STRATEGY_PROFILES.get(str(strategy).lower())
    if profile is None:
        raise ValueError(
            f"Unknown strategy '{strategy}'. "
            f"Must be one of: {', '.join(STRATEGY_PROFILES)}"
        )
    return profile
