"""
Registry for managing and accessing different strategies.
"""
from typing import Dict, Type, List
from ..core.errors import InvalidGameSetup
from .strategies import (
    Strategy, StrategyConfig, UpgradeStrategy, DuplicateStrategy, HedgeStrategy
)


class StrategyRegistry:
    """Registry for managing available strategies."""
    
    def __init__(self):
        self._strategies: Dict[str, Type[Strategy]] = {}
        self._register_default_strategies()
    
    def _register_default_strategies(self):
        """Register all built-in strategies."""
        self.register(UpgradeStrategy)
        self.register(DuplicateStrategy)
        self.register(HedgeStrategy)
    
    def register(self, strategy_class: Type[Strategy]):
        """Register a new strategy class."""
        config = strategy_class.get_default_config()
        self._strategies[config.name.lower()] = strategy_class
    
    def get_strategy(self, name: str, **kwargs) -> Strategy:
        """Get a strategy instance by name with optional parameter overrides."""
        strategy_class = self._strategies.get(name.lower())
        if not strategy_class:
            raise InvalidGameSetup(f"Unknown strategy: {name}")
        
        config = strategy_class.get_default_config()
        if kwargs:
            config.parameters.update(kwargs)
        
        return strategy_class(config)
    
    def list_strategies(self) -> List[str]:
        """List all available strategy names."""
        return list(self._strategies.keys())
    
    def get_all_strategies_info(self) -> Dict[str, StrategyConfig]:
        """Get information about all registered strategies."""
        return {
            name: strategy_class.get_default_config()
            for name, strategy_class in self._strategies.items()
        }


# Global registry instance
strategy_registry = StrategyRegistry()
