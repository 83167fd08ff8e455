"""
Strategy implementations for AI opponents.
"""
from .base import Strategy, StrategyConfig
from .upgrade import UpgradeStrategy
from .duplicate import DuplicateStrategy
from .hedge import HedgeStrategy

__all__ = [
    "Strategy",
    "StrategyConfig",
    "UpgradeStrategy",
    "DuplicateStrategy",
    "HedgeStrategy",
]
