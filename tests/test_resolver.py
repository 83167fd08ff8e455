"""
Tests for round resolution: winner selection, ties and die losses.
"""
import pytest
from dicerise.core.dice import ScriptedRandomSource
from dicerise.core.errors import InvalidDieSelection, InvariantViolation
from dicerise.core.resolver import RoundResolver


def roll_round(resolver, players, pool, scripts):
    """Script each player's rolls in seat order, then roll and resolve."""
    for values in scripts:
        resolver.rng.add_rolls(values)
    resolver.roll(players)
    return resolver.resolve(players, pool, round_number=1)


class TestWinner:

    def test_highest_total_wins(self, make_player):
        players = [make_player("You", human=True), make_player("Aria"), make_player("Bram")]
        resolver = RoundResolver(ScriptedRandomSource())
        pool = []
        outcome = roll_round(resolver, players, pool, [[4, 4, 4, 4], [1, 1, 1, 1], [2, 2, 2, 2]])

        assert outcome.winner is players[0]
        assert outcome.max_score == 16
        assert outcome.max_score == max(outcome.scores.values())
        assert not outcome.was_tie
        assert [p.name for p in outcome.losers] == ["Aria", "Bram"]
        assert outcome.scores == {"You": 16, "Aria": 4, "Bram": 8}

    def test_tie_broken_by_random_pick(self, make_player):
        players = [make_player("You", human=True), make_player("Aria"), make_player("Bram")]
        resolver = RoundResolver(ScriptedRandomSource(picks=[1]))
        outcome = roll_round(resolver, players, [], [[4, 4, 4, 4], [1, 1, 1, 1], [4, 4, 4, 4]])

        assert outcome.was_tie
        assert [p.name for p in outcome.tied] == ["You", "Bram"]
        assert outcome.winner.name == "Bram"
        assert outcome.winner.round_score == outcome.max_score
        assert [p.name for p in outcome.losers] == ["You", "Aria"]


class TestLosses:

    def test_protected_losers_keep_their_d4(self, make_player):
        players = [make_player("You", human=True), make_player("Aria"), make_player("Bram")]
        resolver = RoundResolver(ScriptedRandomSource())
        pool = []
        outcome = roll_round(resolver, players, pool, [[1, 1, 1, 1], [4, 4, 4, 4], [2, 2, 2, 2]])

        assert outcome.losses == {"You": None, "Bram": None}
        assert outcome.eliminated == []
        assert pool == []
        assert players[0].dice == [4]

    def test_unprotected_loser_is_eliminated(self, make_player):
        players = [
            make_player("You", human=True),
            make_player("Aria", made_first_choice=True),
            make_player("Bram"),
        ]
        resolver = RoundResolver(ScriptedRandomSource(picks=[0]))
        pool = []
        outcome = roll_round(resolver, players, pool, [[4, 4, 4, 4], [1, 1, 1, 1], [1, 1, 1, 1]])

        assert outcome.losses == {"Aria": 4, "Bram": None}
        assert outcome.eliminated == [players[1]]
        assert players[1].eliminated
        assert players[1].dice == []
        assert pool == [4]
        assert outcome.pool == [4]

    def test_losses_processed_in_seat_order(self, make_player):
        players = [
            make_player("You", human=True),
            make_player("Aria", dice=[8, 6], made_first_choice=True, chosen_die=6),
            make_player("Bram", dice=[10, 4], made_first_choice=True, chosen_die=4),
        ]
        resolver = RoundResolver(ScriptedRandomSource(picks=[0, 1]))
        pool = [12]
        outcome = roll_round(resolver, players, pool, [[4, 4, 4, 4], [1] * 6, [1, 1, 1, 1]])

        assert outcome.losses == {"Aria": 8, "Bram": 4}
        assert players[1].dice == [6]
        assert players[2].dice == [10]
        assert pool == [12, 8, 4]

    def test_winner_never_loses(self, make_player):
        players = [
            make_player("You", human=True, made_first_choice=True),
            make_player("Aria", made_first_choice=True),
        ]
        resolver = RoundResolver(ScriptedRandomSource(picks=[0]))
        outcome = roll_round(resolver, players, [], [[4, 4, 4, 4], [1, 1, 1, 1]])
        assert "You" not in outcome.losses
        assert players[0].dice == [4]

    def test_failed_draw_removes_no_dice(self, make_player):
        players = [
            make_player("You", human=True),
            make_player("Aria", dice=[6, 4], made_first_choice=True),
            make_player("Bram", dice=[6, 4], made_first_choice=True),
        ]
        # Only Aria's loss is scripted
        resolver = RoundResolver(ScriptedRandomSource(picks=[0]))
        pool = [8]
        with pytest.raises(IndexError):
            roll_round(resolver, players, pool, [[4, 4, 4, 4], [1] * 6, [1] * 6])

        assert players[1].dice == [6, 4]
        assert players[2].dice == [6, 4]
        assert pool == [8]


class TestOutcomeSummary:

    def test_lists_losses_and_eliminations(self, make_player):
        players = [
            make_player("You", human=True),
            make_player("Aria", made_first_choice=True),
            make_player("Bram"),
        ]
        resolver = RoundResolver(ScriptedRandomSource(picks=[0]))
        outcome = roll_round(resolver, players, [], [[4, 4, 4, 4], [1, 1, 1, 1], [1, 1, 1, 1]])

        summary = str(outcome).splitlines()
        assert summary[0] == "Round 1: You wins with 16"
        assert "  Aria lost a D4" in summary
        assert "  Bram is protected and keeps their dice" in summary
        assert summary[-1] == "  Aria has been eliminated"


class TestPreconditions:

    def test_no_active_players(self):
        resolver = RoundResolver(ScriptedRandomSource())
        with pytest.raises(InvariantViolation):
            resolver.resolve([], [])
        with pytest.raises(InvariantViolation):
            resolver.roll([])

    def test_empty_dice_not_eliminated(self, make_player):
        player = make_player("Aria")
        player.dice = []
        resolver = RoundResolver(ScriptedRandomSource())
        with pytest.raises(InvariantViolation):
            resolver.resolve([player, make_player("Bram")], [])

    def test_unrolled_player(self, make_player):
        resolver = RoundResolver(ScriptedRandomSource())
        with pytest.raises(InvariantViolation):
            resolver.resolve([make_player("Aria"), make_player("Bram")], [])

    def test_invalid_selection_rolls_nobody(self, make_player):
        players = [make_player("Aria"), make_player("Bram", chosen_die=6)]
        rng = ScriptedRandomSource(rolls=[1, 1, 1, 1])
        resolver = RoundResolver(rng)
        with pytest.raises(InvalidDieSelection):
            resolver.roll(players)
        assert rng.rolls == [1, 1, 1, 1]
        assert players[0].round_rolls == []
