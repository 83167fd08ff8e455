"""Game session: round sequencing and the phase state machine."""
from typing import Dict, List, Optional, Sequence, Union
from enum import Enum
import logging
from .config import (
    AI_NAMES, DIFFICULTY_TARGETS, HUMAN_NAME, MAX_OPPONENTS, MIN_OPPONENTS, Difficulty
)
from .dice import RandomSource, SystemRandomSource, die_name
from .errors import (
    InvalidChoicePhase, InvalidDieSelection, InvalidGameSetup, InvalidPhase
)
from .player import Choice, Player, PlayerType
from .resolver import RoundOutcome, RoundResolver
from .victory import WinResult, WinStatus, evaluate_win


logger = logging.getLogger(__name__)


class Phase(Enum):
    SETUP = "setup"
    SELECT_DIE = "select-die"
    ROLLING = "rolling"
    RESOLVING = "resolving"
    CHOICE = "choice"
    CONTINUE = "continue"
    OVER = "over"


def parse_difficulty(difficulty: Union[Difficulty, str]) -> Difficulty:
    if isinstance(difficulty, Difficulty):
        return difficulty
    try:
        return Difficulty(str(difficulty).lower())
    except ValueError:
        raise InvalidGameSetup(f"Unknown difficulty: {difficulty}") from None


class GameSession:
    """Owns the players, the pool and the round counter for one play-through.

    Seat 0 is reserved for the human player when there is one. AI players
    decide through `strategies` (name -> object with `choose_die(player)`
    and `choose(player)`); players without a strategy roll their best die
    and use the fixed upgrade-first policy.
    """

    def __init__(
        self,
        players: List[Player],
        difficulty: Union[Difficulty, str] = Difficulty.EASY,
        rng: Optional[RandomSource] = None,
        strategies: Optional[Dict[str, object]] = None,
        target_count: Optional[int] = None,
    ):
        if len(players) < 2:
            raise InvalidGameSetup("A game needs at least two players")
        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise InvalidGameSetup(f"Player names must be unique: {names}")
        if any(p.is_human for p in players[1:]):
            raise InvalidGameSetup("Only seat 0 may hold the human player")

        self.players = players
        self.difficulty = parse_difficulty(difficulty)
        self.target_count = target_count if target_count is not None else DIFFICULTY_TARGETS[self.difficulty]
        if self.target_count < 1:
            raise InvalidGameSetup("Target count must be at least 1")
        self.rng = rng or SystemRandomSource()
        self.strategies = strategies or {}
        self.resolver = RoundResolver(self.rng)
        self.pool: List[int] = []
        self.round = 0
        self.phase = Phase.SETUP
        self.last_outcome: Optional[RoundOutcome] = None
        self.result: Optional[WinResult] = None

    @property
    def human(self) -> Optional[Player]:
        """The human player, if seat 0 holds one."""
        if self.players[0].is_human:
            return self.players[0]
        return None

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players if not p.eliminated]

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.OVER

    @property
    def needs_die_selection(self) -> bool:
        """True when the human has a real choice of die this round."""
        human = self.human
        return (
            self.phase == Phase.SELECT_DIE
            and human is not None
            and not human.eliminated
            and len(human.dice) > 1
        )

    def get_player(self, player_id: Union[int, str]) -> Player:
        if isinstance(player_id, int):
            if 0 <= player_id < len(self.players):
                return self.players[player_id]
        else:
            for player in self.players:
                if player.name == player_id:
                    return player
        raise InvalidDieSelection(f"Unknown player: {player_id}")

    def start_round(self):
        """Begin the next round and let AI players pick their dice."""
        if self.phase not in (Phase.SETUP, Phase.CONTINUE):
            raise InvalidPhase(f"Cannot start a round during {self.phase.value}")

        self.round += 1
        self.phase = Phase.SELECT_DIE
        logger.info("Round %d begins", self.round)

        for player in self.active_players:
            player.round_score = 0
            player.round_rolls = []
            if player.is_human:
                if len(player.dice) == 1:
                    player.chosen_die = player.dice[0]
                elif player.chosen_die not in player.dice:
                    player.chosen_die = None
            else:
                player.chosen_die = self._ai_die(player)

    def next_round(self):
        """Acknowledge the round result and move on."""
        if self.phase != Phase.CONTINUE:
            raise InvalidPhase(f"Cannot continue during {self.phase.value}")
        self.start_round()

    def select_die(self, player_id: Union[int, str], tier: int):
        """Set a human player's die for the current round."""
        if self.phase != Phase.SELECT_DIE:
            raise InvalidPhase(f"Dice are not being selected (phase is {self.phase.value})")
        player = self.get_player(player_id)
        if not player.is_human:
            raise InvalidDieSelection(f"{player.name} is not a human player")
        player.select_die(tier)

    def execute_round(self) -> RoundOutcome:
        """Roll for every active player and resolve the round.

        An AI winner's choice is applied straight away and the win check
        runs; a human winner leaves the session in the CHOICE phase.
        """
        if self.phase != Phase.SELECT_DIE:
            raise InvalidPhase(f"Cannot roll during {self.phase.value}")

        active = self.active_players
        self.resolver.check_players(self.players)
        for player in active:
            if player.chosen_die not in player.dice:
                raise InvalidDieSelection(f"{player.name} must choose one of {player.dice}")

        try:
            self.phase = Phase.ROLLING
            self.resolver.roll(active)

            self.phase = Phase.RESOLVING
            outcome = self.resolver.resolve(active, self.pool, self.round)
        except Exception:
            # Nothing has been lost yet, so the round can be rolled again
            self.phase = Phase.SELECT_DIE
            raise
        self.last_outcome = outcome
        logger.debug("%s", outcome)

        winner = outcome.winner
        if winner.is_human:
            self.phase = Phase.CHOICE
            return outcome

        choice = self._ai_choice(winner)
        outcome.previous_die = winner.apply_choice(choice)
        outcome.choice = choice
        self._log_choice(winner, choice, outcome.previous_die)
        self._finish_round()
        return outcome

    def apply_winner_choice(self, choice: Union[Choice, str]) -> int:
        """Apply the human winner's duplicate/upgrade; returns the die they rolled."""
        if self.phase != Phase.CHOICE or self.last_outcome is None:
            raise InvalidChoicePhase("No choice is pending")
        try:
            choice = Choice(choice)
        except ValueError:
            raise InvalidChoicePhase(f"Unknown choice: {choice}") from None

        winner = self.last_outcome.winner
        if choice == Choice.UPGRADE and not winner.can_upgrade:
            raise InvalidChoicePhase(f"{die_name(winner.chosen_die)} cannot be upgraded any further")

        previous = winner.apply_choice(choice)
        self.last_outcome.choice = choice
        self.last_outcome.previous_die = previous
        self._log_choice(winner, choice, previous)
        self._finish_round()
        return previous

    def evaluate_win(self) -> WinResult:
        """Check the win conditions without changing any state."""
        return evaluate_win(self.players, self.target_count)

    def _ai_die(self, player: Player) -> int:
        strategy = self.strategies.get(player.name)
        tier = strategy.choose_die(player) if strategy else player.best_die
        if tier not in player.dice:
            logger.warning("%s does not hold a %s, rolling their best die instead", player.name, die_name(tier))
            tier = player.best_die
        return tier

    def _ai_choice(self, player: Player) -> Choice:
        strategy = self.strategies.get(player.name)
        choice = strategy.choose(player) if strategy else player.default_choice()
        if choice == Choice.UPGRADE and not player.can_upgrade:
            logger.warning("%s cannot upgrade a %s, duplicating instead", player.name, die_name(player.chosen_die))
            choice = Choice.DUPLICATE
        return choice

    def _log_choice(self, player: Player, choice: Choice, previous: int):
        if choice == Choice.DUPLICATE:
            logger.info("%s duplicated their %s", player.name, die_name(previous))
        else:
            logger.info("%s upgraded to %s", player.name, die_name(player.best_die))

    def _finish_round(self):
        self.resolver.check_players(self.players)
        result = self.evaluate_win()
        if result.is_over:
            self.phase = Phase.OVER
            self.result = result
            if result.status == WinStatus.WINNER:
                logger.info("%s wins the game in round %d", result.winner.name, self.round)
            else:
                logger.info("Game over in round %d, no winner", self.round)
        else:
            self.phase = Phase.CONTINUE

    def get_game_state(self) -> dict:
        """Get current game state."""
        return {
            "players": [
                {
                    "name": p.name,
                    "is_human": p.is_human,
                    "dice": list(p.dice),
                    "chosen_die": p.chosen_die,
                    "protected": p.is_protected,
                    "eliminated": p.eliminated,
                    "round_score": p.round_score,
                    "terminal_count": p.terminal_count,
                }
                for p in self.players
            ],
            "pool": list(self.pool),
            "round": self.round,
            "difficulty": self.difficulty.value,
            "target_count": self.target_count,
            "phase": self.phase.value,
            "winner": self.result.winner.name if self.result and self.result.winner else None,
        }


def create_session(
    difficulty: Union[Difficulty, str],
    opponent_count: int,
    opponent_names: Optional[Sequence[str]] = None,
    rng: Optional[RandomSource] = None,
    human_name: str = HUMAN_NAME,
    strategies: Optional[Dict[str, object]] = None,
) -> GameSession:
    """Create and start a session with one human and `opponent_count` AI players."""
    if not MIN_OPPONENTS <= opponent_count <= MAX_OPPONENTS:
        raise InvalidGameSetup(f"Opponent count must be between {MIN_OPPONENTS} and {MAX_OPPONENTS}")

    rng = rng or SystemRandomSource()
    if opponent_names is None:
        opponent_names = rng.shuffled(AI_NAMES)
    if len(opponent_names) < opponent_count:
        raise InvalidGameSetup(f"Need {opponent_count} opponent names, got {len(opponent_names)}")

    players = [Player(human_name, PlayerType.HUMAN)]
    players.extend(Player(name, PlayerType.AI) for name in opponent_names[:opponent_count])

    session = GameSession(players, difficulty, rng=rng, strategies=strategies)
    session.start_round()
    return session
