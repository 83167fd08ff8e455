"""Die tiers, roll results and the random sources that drive them."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar
import random


# Upgrade ladder, lowest first. The last entry is the terminal tier.
DIE_TIERS = (4, 6, 8, 10, 12, 20, 100)
LOWEST_TIER = DIE_TIERS[0]
TERMINAL_TIER = DIE_TIERS[-1]

T = TypeVar("T")


def _tier_index(tier: int) -> int:
    try:
        return DIE_TIERS.index(tier)
    except ValueError:
        raise ValueError(f"Unknown die tier: {tier}") from None


def is_terminal(tier: int) -> bool:
    """Check if a tier is the top of the ladder."""
    return _tier_index(tier) == len(DIE_TIERS) - 1


def next_tier(tier: int) -> int:
    """Return the successor of a tier (the terminal tier maps to itself)."""
    idx = _tier_index(tier)
    return DIE_TIERS[min(idx + 1, len(DIE_TIERS) - 1)]


def die_name(tier: int) -> str:
    return f"D{tier}"


@dataclass
class DieRoll:
    """One player's roll for a round: `sides` faces rolled `sides` times."""
    sides: int
    values: List[int]

    def __post_init__(self):
        _tier_index(self.sides)
        if len(self.values) != self.sides:
            raise ValueError(f"A {die_name(self.sides)} is rolled {self.sides} times, got {len(self.values)} values")
        if not all(1 <= v <= self.sides for v in self.values):
            raise ValueError(f"All values must be between 1 and {self.sides}")

    @property
    def total(self) -> int:
        return sum(self.values)

    def __str__(self) -> str:
        return f"DieRoll({die_name(self.sides)}: {self.total})"


class RandomSource(ABC):
    """Source of every random decision the engine makes."""

    @abstractmethod
    def roll(self, sides: int) -> int:
        """Roll a single die face in [1, sides]."""
        pass

    @abstractmethod
    def pick(self, items: Sequence[T]) -> T:
        """Pick one item uniformly from a non-empty sequence."""
        pass

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy of `items`."""
        remaining = list(items)
        result = []
        while remaining:
            item = self.pick(remaining)
            remaining.remove(item)
            result.append(item)
        return result


class SystemRandomSource(RandomSource):
    """Random source backed by `random.Random`, optionally seeded."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def roll(self, sides: int) -> int:
        return self._random.randint(1, sides)

    def pick(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        return self._random.choice(items)

    def shuffled(self, items: Sequence[T]) -> List[T]:
        result = list(items)
        self._random.shuffle(result)
        return result


class ScriptedRandomSource(RandomSource):
    """Replays fixed rolls and picks (for testing/replays).

    `rolls` are returned in order by `roll`; `picks` are indexes into the
    sequence passed to `pick`. Running out of script raises `IndexError`.
    """

    def __init__(self, rolls: Optional[Sequence[int]] = None, picks: Optional[Sequence[int]] = None):
        self.rolls = list(rolls or [])
        self.picks = list(picks or [])

    def add_rolls(self, values: Sequence[int]):
        self.rolls.extend(values)

    def add_picks(self, indexes: Sequence[int]):
        self.picks.extend(indexes)

    def roll(self, sides: int) -> int:
        if not self.rolls:
            raise IndexError("Scripted rolls exhausted")
        value = self.rolls.pop(0)
        if not 1 <= value <= sides:
            raise ValueError(f"Scripted roll {value} is not valid for a {die_name(sides)}")
        return value

    def pick(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        if not self.picks:
            raise IndexError("Scripted picks exhausted")
        return items[self.picks.pop(0)]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        # Scripted sessions keep the given order.
        return list(items)
