"""
Upgrade-first strategy implementation.
"""
from ...core.player import Choice, Player
from .base import Strategy, StrategyConfig


class UpgradeStrategy(Strategy):
    """Always climb the ladder; duplicate only at the top tier."""
    
    def setup(self, **kwargs):
        pass
    
    def choose(self, player: Player) -> Choice:
        return Choice.UPGRADE if player.can_upgrade else Choice.DUPLICATE
    
    @classmethod
    def get_default_config(cls) -> StrategyConfig:
        return StrategyConfig(
            name="Upgrade",
            description="Upgrade the winning die unless it is already a D100",
            parameters={}
        )
