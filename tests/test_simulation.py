"""
Tests for all-AI game simulation.
"""
import pytest
from dicerise.core.dice import SystemRandomSource
from dicerise.core.errors import InvalidGameSetup
from dicerise.simulation import GameSimulator


class TestGameSimulator:

    def test_results_add_up(self):
        simulator = GameSimulator(num_workers=1, seed=7)
        result = simulator.simulate_games(["upgrade", "duplicate", "hedge"], num_simulations=20)

        assert result.num_simulations == 20
        assert set(result.win_rates) == {"Upgrade 1", "Duplicate 2", "Hedge 3"}
        assert abs(sum(result.win_rates.values()) + result.no_winner_rate - 1.0) < 1e-9
        assert result.round_distribution.shape == (20,)
        assert result.avg_rounds >= 1
        assert sum(result.win_reasons.values()) == 20

    def test_seeded_runs_repeat(self):
        first = GameSimulator(num_workers=1, seed=11).simulate_games(["upgrade", "upgrade"], 10)
        second = GameSimulator(num_workers=1, seed=11).simulate_games(["upgrade", "upgrade"], 10)
        assert first.round_distribution.tolist() == second.round_distribution.tolist()
        assert first.win_rates == second.win_rates

    def test_round_limit(self):
        # Three untouched starting D4s cannot finish a game in one round
        game = GameSimulator.play_game(["upgrade"] * 3, "easy", SystemRandomSource(1), max_rounds=1)
        assert game["winner"] is None
        assert game["reason"] == "round_limit"
        assert game["rounds"] == 1

    def test_parallel_workers(self):
        result = GameSimulator(num_workers=2, seed=3).simulate_games(["upgrade", "hedge"], 6)
        assert result.num_simulations == 6

    def test_needs_two_strategies(self):
        with pytest.raises(InvalidGameSetup):
            GameSimulator(num_workers=1).simulate_games(["upgrade"], 5)

    def test_unknown_strategy(self):
        with pytest.raises(InvalidGameSetup):
            GameSimulator(num_workers=1).simulate_games(["upgrade", "bluff"], 5)

    def test_summary_text(self):
        result = GameSimulator(num_workers=1, seed=5).simulate_games(["upgrade", "duplicate"], 4)
        summary = str(result)
        assert summary.startswith("Simulation Results (4 games):")
        assert "Win Rates:" in summary
        assert "Upgrade 1:" in summary
        assert "Duplicate 2:" in summary
