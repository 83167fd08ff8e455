"""
Duplicate-first strategy implementation.
"""
from ...core.player import Choice, Player
from .base import Strategy, StrategyConfig


class DuplicateStrategy(Strategy):
    """Grow the collection: always take a second copy of the winning die."""
    
    def setup(self, **kwargs):
        pass
    
    def choose(self, player: Player) -> Choice:
        return Choice.DUPLICATE
    
    @classmethod
    def get_default_config(cls) -> StrategyConfig:
        return StrategyConfig(
            name="Duplicate",
            description="Always duplicate the winning die",
            parameters={}
        )
