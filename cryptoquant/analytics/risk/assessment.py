"""
Overall Risk Assessment

Score starts at 50 and is adjusted by fixed deltas:
- annualized volatility > 1.0  -> +20 (high_volatility)
                        > 0.5  -> +10
                        < 0.2  -> -10
- Sharpe ratio < 0             -> +10 (negative_risk_adjusted_return)
               > 1             -> -10
- max drawdown > 50%           -> +20 (large_drawdowns)
               > 20%           -> +10
               < 10%           -> -5
- excess kurtosis > 3          -> +5  (fat_tails)
- skewness < -1                -> concern only (negative_skew)

Clamp to 0-100. Level: low below 40, high above 70, moderate otherwise.
"""
from decimal import Decimal

from ..types import RiskAssessment, RiskLevel

BASE_SCORE = Decimal(50)


def assess_risk(
    annualized_volatility: Decimal,
    sharpe_ratio: Decimal,
    max_drawdown_percent: Decimal,
    kurtosis: Decimal = Decimal(0),
    skewness: Decimal = Decimal(0),
) -> RiskAssessment:
    score = BASE_SCORE
    concerns = []

    if annualized_volatility > 1:
        score += 20
        concerns.append("high_volatility")
    elif annualized_volatility > Decimal("0.5"):
        score += 10
    elif annualized_volatility < Decimal("0.2"):
        score -= 10

    if sharpe_ratio < 0:
        score += 10
        concerns.append("negative_risk_adjusted_return")
    elif sharpe_ratio > 1:
        score -= 10

    if max_drawdown_percent > 50:
        score += 20
        concerns.append("large_drawdowns")
    elif max_drawdown_percent > 20:
        score += 10
    elif max_drawdown_percent < 10:
        score -= 5

    if kurtosis > 3:
        score += 5
        concerns.append("fat_tails")

    if skewness < -1:
        concerns.append("negative_skew")

    score = max(Decimal(0), min(score, Decimal(100)))

    if score < 40:
        level = RiskLevel.LOW
    elif score > 70:
        level = RiskLevel.HIGH
    else:
        level = RiskLevel.MODERATE

    return RiskAssessment(score=score, level=level, concerns=tuple(concerns))
