"""Simulation module for Dicerise."""
from .game_simulator import GameSimulator, SimulationResult
from .strategies import Strategy
from .strategy_registry import strategy_registry

__all__ = [
    "GameSimulator",
    "SimulationResult",
    "Strategy",
    "strategy_registry",
]
