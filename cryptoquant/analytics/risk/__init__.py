"""
Risk Module
Return-series risk metrics, drawdown, benchmark metrics and assessment.
"""

from .config import DEFAULT_RISK_CONFIG, RiskConfig
from .risk_metrics import (
    annualize_return,
    annualize_volatility,
    calculate_downside_deviation,
    calculate_expected_shortfall,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_var,
    calculate_volatility,
)
from .benchmark import (
    align_series,
    calculate_alpha,
    calculate_benchmark_metrics,
    calculate_beta,
    calculate_correlation,
    calculate_tracking_error,
)
from .drawdown import calculate_max_drawdown
from .assessment import assess_risk
from .calculator import calculate_risk_metrics

__all__ = [
    "DEFAULT_RISK_CONFIG",
    "RiskConfig",
    "annualize_return",
    "annualize_volatility",
    "calculate_downside_deviation",
    "calculate_expected_shortfall",
    "calculate_sharpe_ratio",
    "calculate_sortino_ratio",
    "calculate_var",
    "calculate_volatility",
    "align_series",
    "calculate_alpha",
    "calculate_benchmark_metrics",
    "calculate_beta",
    "calculate_correlation",
    "calculate_tracking_error",
    "calculate_max_drawdown",
    "assess_risk",
    "calculate_risk_metrics",
]
