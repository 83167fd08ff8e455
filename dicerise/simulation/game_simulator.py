"""Game simulation engine for Dicerise."""
import numpy as np
from typing import List, Dict, Optional, Union
from dataclasses import dataclass
from concurrent.futures import ProcessPoolExecutor, as_completed
from collections import Counter
import logging
import multiprocessing
from ..core.config import Difficulty, MAX_SIMULATION_ROUNDS
from ..core.dice import RandomSource, SystemRandomSource
from ..core.errors import InvalidGameSetup
from ..core.game import GameSession, Phase
from ..core.player import Player, PlayerType
from .strategy_registry import strategy_registry


logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Results from game simulations."""
    num_simulations: int
    win_rates: Dict[str, float]  # Seat name -> win rate
    no_winner_rate: float  # Games cut off by the round limit
    avg_rounds: float  # Average number of rounds per game
    round_distribution: np.ndarray  # Rounds played in each game
    win_reasons: Dict[str, int]  # "target" / "last_standing" -> count

    def __str__(self) -> str:
        lines = [f"Simulation Results ({self.num_simulations} games):"]
        lines.append(f"Average game length: {self.avg_rounds:.1f} rounds")
        lines.append("\nWin Rates:")
        for seat, rate in sorted(self.win_rates.items(), key=lambda x: x[1], reverse=True):
            lines.append(f"  {seat}: {rate:.1%}")
        if self.no_winner_rate:
            lines.append(f"  (unfinished): {self.no_winner_rate:.1%}")
        return "\n".join(lines)


def seat_names(strategy_names: List[str]) -> List[str]:
    """Name each seat after its strategy, e.g. 'Upgrade 1'."""
    return [f"{name.capitalize()} {i + 1}" for i, name in enumerate(strategy_names)]


class GameSimulator:
    """Simulates all-AI Dicerise games with various strategy line-ups."""

    def __init__(self, num_workers: Optional[int] = None, seed: Optional[int] = None):
        self.num_workers = num_workers or multiprocessing.cpu_count()
        self.seed = seed

    def simulate_games(
        self,
        strategy_names: List[str],
        num_simulations: int = 1000,
        difficulty: Union[Difficulty, str] = Difficulty.EASY,
        max_rounds: int = MAX_SIMULATION_ROUNDS,
    ) -> SimulationResult:
        """Simulate multiple games with the given strategies.

        Args:
            strategy_names: One registered strategy name per seat
            num_simulations: Number of games to simulate
            difficulty: Difficulty setting selecting the D100 target
            max_rounds: Games still running after this many rounds have no winner
        """
        if len(strategy_names) < 2:
            raise InvalidGameSetup("A simulation needs at least two strategies")
        for name in strategy_names:
            strategy_registry.get_strategy(name)
        if isinstance(difficulty, Difficulty):
            difficulty = difficulty.value

        if self.num_workers == 1:
            results = self._run_simulations(strategy_names, num_simulations, difficulty, max_rounds, self.seed)
            return self._aggregate_results(results, strategy_names)

        simulations_per_worker = num_simulations // self.num_workers
        remaining = num_simulations % self.num_workers

        futures = []
        with ProcessPoolExecutor(max_workers=self.num_workers) as executor:
            for i in range(self.num_workers):
                n_sims = simulations_per_worker + (1 if i < remaining else 0)
                if n_sims > 0:
                    # Different seed per worker
                    worker_seed = None if self.seed is None else self.seed + i
                    future = executor.submit(
                        GameSimulator._run_simulations,
                        strategy_names,
                        n_sims,
                        difficulty,
                        max_rounds,
                        worker_seed
                    )
                    futures.append(future)

            all_results = []
            for future in as_completed(futures):
                all_results.extend(future.result())

        return self._aggregate_results(all_results, strategy_names)

    @staticmethod
    def _run_simulations(
        strategy_names: List[str],
        num_simulations: int,
        difficulty: str,
        max_rounds: int,
        seed: Optional[int]
    ) -> List[Dict]:
        """Run a batch of games in one worker."""
        rng = SystemRandomSource(seed)
        return [
            GameSimulator.play_game(strategy_names, difficulty, rng, max_rounds)
            for _ in range(num_simulations)
        ]

    @staticmethod
    def play_game(
        strategy_names: List[str],
        difficulty: Union[Difficulty, str],
        rng: RandomSource,
        max_rounds: int = MAX_SIMULATION_ROUNDS
    ) -> Dict:
        """Play one all-AI game to the end (or the round limit)."""
        names = seat_names(strategy_names)
        players = [Player(name, PlayerType.AI) for name in names]
        strategies = {
            name: strategy_registry.get_strategy(strategy)
            for name, strategy in zip(names, strategy_names)
        }
        session = GameSession(players, difficulty, rng=rng, strategies=strategies)
        session.start_round()

        while not session.is_over:
            if session.phase == Phase.CONTINUE:
                if session.round >= max_rounds:
                    logger.warning("Game stopped after %d rounds without a winner", max_rounds)
                    break
                session.next_round()
            session.execute_round()

        result = session.result
        return {
            "winner": result.winner.name if result and result.winner else None,
            "reason": result.reason if result else "round_limit",
            "rounds": session.round,
            "pool_size": len(session.pool),
        }

    def _aggregate_results(self, results: List[Dict], strategy_names: List[str]) -> SimulationResult:
        """Aggregate results from multiple simulations."""
        names = seat_names(strategy_names)
        num_games = len(results)
        wins = Counter(r["winner"] for r in results if r["winner"] is not None)
        reasons = Counter(r["reason"] for r in results)
        rounds = np.array([r["rounds"] for r in results])

        win_rates = {name: wins.get(name, 0) / num_games if num_games else 0.0 for name in names}
        unfinished = sum(1 for r in results if r["winner"] is None)

        result = SimulationResult(
            num_simulations=num_games,
            win_rates=win_rates,
            no_winner_rate=unfinished / num_games if num_games else 0.0,
            avg_rounds=float(np.mean(rounds)) if num_games else 0.0,
            round_distribution=rounds,
            win_reasons=dict(reasons),
        )
        logger.info("%s", result)
        return result
