"""
Hedging strategy implementation.
"""
from ...core.player import Choice, Player
from .base import Strategy, StrategyConfig


class HedgeStrategy(Strategy):
    """Duplicate while holding few dice, then upgrade."""
    
    def setup(self, min_dice: int = 2):
        self.min_dice = min_dice
    
    def choose(self, player: Player) -> Choice:
        # Spare dice soak up losses before the best die is at risk
        if len(player.dice) < self.min_dice or not player.can_upgrade:
            return Choice.DUPLICATE
        return Choice.UPGRADE
    
    @classmethod
    def get_default_config(cls) -> StrategyConfig:
        return StrategyConfig(
            name="Hedge",
            description="Duplicate until holding enough spare dice, then upgrade",
            parameters={"min_dice": 2}
        )
