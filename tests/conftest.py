import pytest
from dicerise.core.dice import ScriptedRandomSource
from dicerise.core.player import Player, PlayerType


@pytest.fixture
def rng():
    """Random source with an empty script; tests add rolls and picks."""
    return ScriptedRandomSource()


@pytest.fixture
def make_player():
    def _make(name, human=False, dice=None, made_first_choice=False, chosen_die=None):
        dice = list(dice) if dice is not None else [4]
        return Player(
            name,
            PlayerType.HUMAN if human else PlayerType.AI,
            dice=dice,
            made_first_choice=made_first_choice,
            eliminated=not dice,
            chosen_die=chosen_die if chosen_die is not None else (max(dice) if dice else None),
        )
    return _make
