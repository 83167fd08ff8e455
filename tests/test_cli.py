"""
Tests for the terminal front end.
"""
from click.testing import CliRunner
from rich.console import Console
from dicerise.cli.__main__ import main
from dicerise.cli.pacing import PacedSession
from dicerise.core.dice import ScriptedRandomSource
from dicerise.core.game import Phase, create_session


class TestPacedSession:

    def test_fast_session_runs_engine_calls(self):
        rng = ScriptedRandomSource(rolls=[4] * 4 + [1] * 4)
        session = create_session("easy", 1, ["Bram"], rng=rng)
        paced = PacedSession(session, Console(quiet=True), fast=True)

        outcome = paced.execute_round()
        assert outcome.winner is session.human
        assert paced.apply_winner_choice("upgrade") == 4
        paced.after_results()
        assert session.phase == Phase.CONTINUE


class TestCommand:

    def test_simulate(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--simulate", "5", "--workers", "1", "--seed", "2", "-l", "upgrade", "-l", "hedge"])
        assert result.exit_code == 0, result.output
        assert "Average game length" in result.output

    def test_rejects_bad_opponent_count(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--opponents", "9"])
        assert result.exit_code != 0

    def test_unknown_lineup_strategy_is_a_usage_error(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--simulate", "3", "--workers", "1", "-l", "upgrade", "-l", "bluff"])
        assert result.exit_code == 2
        assert "bluff" in result.output

    def test_single_seat_lineup_is_a_usage_error(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--simulate", "3", "--workers", "1", "-l", "upgrade"])
        assert result.exit_code == 2
        assert "at least two strategies" in result.output

    def test_simulate_needs_a_positive_count(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--simulate", "0"])
        assert result.exit_code == 2

    def test_default_lineup_uses_default_opponents(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--simulate", "2", "--workers", "1", "--seed", "4"])
        assert result.exit_code == 0, result.output
        assert "Upgrade 3" in result.output
        assert "Upgrade 4" not in result.output

    def test_list_strategies(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--list-strategies"])
        assert result.exit_code == 0, result.output
        for name in ("upgrade", "duplicate", "hedge"):
            assert name in result.output
