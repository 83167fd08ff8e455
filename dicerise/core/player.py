"""Player management for Dicerise."""
from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum
import logging
from .dice import (
    DieRoll, RandomSource, LOWEST_TIER, TERMINAL_TIER, die_name, is_terminal, next_tier
)
from .errors import InvalidDieSelection, InvariantViolation


logger = logging.getLogger(__name__)


class PlayerType(Enum):
    """Types of players."""
    HUMAN = "human"
    AI = "ai"


class Choice(Enum):
    """What a round winner does with the die they rolled."""
    DUPLICATE = "duplicate"
    UPGRADE = "upgrade"


@dataclass
class Player:
    """Represents a player in the game."""
    name: str
    player_type: PlayerType = PlayerType.AI
    dice: List[int] = field(default_factory=lambda: [LOWEST_TIER])
    made_first_choice: bool = False
    eliminated: bool = False
    chosen_die: Optional[int] = LOWEST_TIER
    round_score: int = 0
    round_rolls: List[int] = field(default_factory=list)

    @property
    def is_human(self) -> bool:
        return self.player_type == PlayerType.HUMAN

    @property
    def is_protected(self) -> bool:
        """The starting die is safe until the first duplicate/upgrade."""
        return not self.made_first_choice

    @property
    def terminal_count(self) -> int:
        """Number of terminal-tier dice held."""
        return self.dice.count(TERMINAL_TIER)

    @property
    def best_die(self) -> int:
        return max(self.dice) if self.dice else 0

    @property
    def can_upgrade(self) -> bool:
        return self.chosen_die is not None and not is_terminal(self.chosen_die)

    def select_die(self, tier: int):
        """Choose the die to roll this round."""
        if self.eliminated:
            raise InvalidDieSelection(f"{self.name} is eliminated")
        if tier not in self.dice:
            raise InvalidDieSelection(f"{self.name} has no {die_name(tier)} (holding {self.dice})")
        self.chosen_die = tier

    def roll_for_round(self, rng: RandomSource) -> DieRoll:
        """Roll the chosen die as many times as it has sides."""
        if self.eliminated:
            raise InvariantViolation(f"{self.name} is eliminated and cannot roll")
        if self.chosen_die not in self.dice:
            raise InvalidDieSelection(f"{self.name} has not chosen a die they hold")

        sides = self.chosen_die
        roll = DieRoll(sides, [rng.roll(sides) for _ in range(sides)])
        self.round_rolls = roll.values
        self.round_score = roll.total
        logger.debug("%s rolled %s: %s", self.name, die_name(sides), roll.total)
        return roll

    def choose_loss(self, rng: RandomSource) -> Optional[int]:
        """Draw the index of the die to forfeit without removing it; None if nothing can be lost."""
        if not self.dice:
            return None

        eligible = list(range(len(self.dice)))

        # A protected player never loses the starting die
        if self.is_protected and LOWEST_TIER in self.dice:
            if len(self.dice) == 1:
                return None
            eligible.remove(self.dice.index(LOWEST_TIER))

        return rng.pick(eligible)

    def remove_die(self, index: int) -> int:
        """Remove the die at `index`; an empty hand eliminates the player."""
        lost = self.dice.pop(index)
        if not self.dice:
            self.eliminated = True
        return lost

    def lose_random_die(self, rng: RandomSource) -> Optional[int]:
        """Forfeit one random die; returns the tier lost or None."""
        index = self.choose_loss(rng)
        if index is None:
            return None
        return self.remove_die(index)

    def apply_choice(self, choice: Choice) -> int:
        """Duplicate or upgrade the chosen die; returns the die before the choice."""
        if self.chosen_die not in self.dice:
            raise InvalidDieSelection(f"{self.name} does not hold the chosen die")

        previous = self.chosen_die
        self.made_first_choice = True

        if choice == Choice.DUPLICATE:
            self.dice.append(previous)
        else:
            # Upgrade is a no-op at the terminal tier
            self.dice[self.dice.index(previous)] = next_tier(previous)

        self.dice.sort(reverse=True)
        return previous

    def default_choice(self) -> Choice:
        """Fixed AI policy: upgrade while possible, else duplicate."""
        return Choice.UPGRADE if self.can_upgrade else Choice.DUPLICATE

    def __str__(self):
        dice = " ".join(die_name(d) for d in self.dice) or "no dice"
        return f"{self.name} ({dice})"
