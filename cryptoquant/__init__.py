"""
CryptoQuant: quantitative analytics over crypto OHLCV data.
"""
from .config import settings

__all__ = [
    "settings",
]
