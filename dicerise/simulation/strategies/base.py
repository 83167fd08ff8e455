"""
Base classes for strategy implementations.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional, Any
from dataclasses import dataclass
from ...core.player import Choice, Player


@dataclass
class StrategyConfig:
    """Configuration for a strategy."""
    name: str
    description: str
    parameters: Dict[str, Any]


class Strategy(ABC):
    """Abstract base class for AI opponent strategies."""
    
    def __init__(self, config: Optional[StrategyConfig] = None):
        self.config = config or self.get_default_config()
        self.setup(**self.config.parameters)
    
    @abstractmethod
    def setup(self, **kwargs):
        """Initialize strategy with parameters."""
        pass
    
    def choose_die(self, player: Player) -> int:
        """Pick the die to roll this round (the best one by default)."""
        return player.best_die
    
    @abstractmethod
    def choose(self, player: Player) -> Choice:
        """Decide between duplicating and upgrading the die just won with."""
        pass
    
    @classmethod
    @abstractmethod
    def get_default_config(cls) -> StrategyConfig:
        """Get default configuration for this strategy."""
        pass
    
    def get_description(self) -> str:
        """Get human-readable description of the strategy."""
        return f"{self.config.name}: {self.config.description}"
