"""
Risk configuration.

The risk-free rate is always an annual decimal (0.05 means 5% a year) and
is used the same way by the risk calculator and the performance summary.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from ..types import to_decimal


@dataclass(frozen=True)
class RiskConfig:
    risk_free_rate: Decimal = Decimal("0.05")
    confidence_levels: Tuple[Decimal, ...] = (Decimal("0.95"), Decimal("0.99"))
    target_return: Decimal = Decimal(0)
    periods_per_year: int = 365
    min_observations: int = 10

    def __post_init__(self):
        object.__setattr__(self, "risk_free_rate", to_decimal(self.risk_free_rate))
        object.__setattr__(self, "target_return", to_decimal(self.target_return))
        object.__setattr__(
            self,
            "confidence_levels",
            tuple(to_decimal(level) for level in self.confidence_levels),
        )
        if not Decimal(0) <= self.risk_free_rate < Decimal(1):
            raise ValueError(
                f"risk_free_rate must be an annual decimal in [0, 1), got {self.risk_free_rate}"
            )
        for level in self.confidence_levels:
            if not Decimal(0) < level < Decimal(1):
                raise ValueError(f"confidence level must be in (0, 1), got {level}")
        if self.periods_per_year <= 0:
            raise ValueError("periods_per_year must be positive")

    @classmethod
    def from_settings(cls, settings) -> "RiskConfig":
        """Build from application settings (RISK_FREE_RATE)."""
        return cls(risk_free_rate=to_decimal(settings.RISK_FREE_RATE))


DEFAULT_RISK_CONFIG = RiskConfig()
