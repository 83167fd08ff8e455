"""
Single place for default game configuration.
"""
from enum import Enum


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Number of terminal-tier dice a player needs to win
DIFFICULTY_TARGETS = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 5,
}

AI_NAMES = ["Aria", "Bram", "Cleo", "Dax", "Ember", "Finn", "Gwen"]

HUMAN_NAME = "You"
MIN_OPPONENTS = 1
MAX_OPPONENTS = len(AI_NAMES)
DEFAULT_OPPONENTS = 2
DEFAULT_STRATEGY = "upgrade"

# Pacing delays for the terminal front end, in seconds
ROLL_DELAY = 0.6
RESOLVE_DELAY = 1.2

# Safety limit for all-AI games
MAX_SIMULATION_ROUNDS = 1000
