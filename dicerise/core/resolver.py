"""Round resolution: rolling, winner selection and die losses."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
from .dice import DieRoll, RandomSource, die_name
from .errors import InvalidDieSelection, InvariantViolation
from .player import Choice, Player


logger = logging.getLogger(__name__)


@dataclass
class RoundOutcome:
    """Everything a renderer needs to show the result of one round."""
    round_number: int
    winner: Player
    tied: List[Player]
    losers: List[Player]
    losses: Dict[str, Optional[int]]  # Loser name -> tier lost (None if protected)
    eliminated: List[Player] = field(default_factory=list)
    scores: Dict[str, int] = field(default_factory=dict)
    rolls: Dict[str, DieRoll] = field(default_factory=dict)
    pool: List[int] = field(default_factory=list)
    # Filled in when the winner's choice was applied automatically
    choice: Optional[Choice] = None
    previous_die: Optional[int] = None

    @property
    def max_score(self) -> int:
        return self.winner.round_score

    @property
    def was_tie(self) -> bool:
        return len(self.tied) > 1

    def __str__(self) -> str:
        lines = [f"Round {self.round_number}: {self.winner.name} wins with {self.max_score}"]
        for loser in self.losers:
            lost = self.losses.get(loser.name)
            if lost is None:
                lines.append(f"  {loser.name} is protected and keeps their dice")
            else:
                lines.append(f"  {loser.name} lost a {die_name(lost)}")
        for player in self.eliminated:
            lines.append(f"  {player.name} has been eliminated")
        return "\n".join(lines)


class RoundResolver:
    """Rolls and resolves a single round for the active players."""

    def __init__(self, rng: RandomSource):
        self.rng = rng

    @staticmethod
    def check_players(players: List[Player]):
        """Raise if any player breaks the dice/elimination invariant."""
        for player in players:
            if not player.dice and not player.eliminated:
                raise InvariantViolation(f"{player.name} has no dice but is not eliminated")
            if player.dice and player.eliminated:
                raise InvariantViolation(f"{player.name} is eliminated but still holds dice")

    def roll(self, active: List[Player]) -> Dict[str, DieRoll]:
        """Roll for every active player, in seat order."""
        if not active:
            raise InvariantViolation("Cannot roll a round with no active players")
        # Validate every selection before anyone rolls
        for player in active:
            if player.chosen_die not in player.dice:
                raise InvalidDieSelection(f"{player.name} has not chosen a die they hold")
        return {player.name: player.roll_for_round(self.rng) for player in active}

    def resolve(self, active: List[Player], pool: List[int], round_number: int = 0) -> RoundOutcome:
        """Pick the winner and make every other active player forfeit a die.

        Args:
            active: Non-eliminated players in seat order, all already rolled
            pool: Shared pool; lost dice are appended to it
            round_number: Round being resolved, for reporting
        """
        if not active:
            raise InvariantViolation("Cannot resolve a round with no active players")
        self.check_players(active)
        for player in active:
            if player.eliminated:
                raise InvariantViolation(f"{player.name} is eliminated but was passed as active")
            if player.chosen_die is None or len(player.round_rolls) != player.chosen_die:
                raise InvariantViolation(f"{player.name} has not rolled this round")
        rolls = {p.name: DieRoll(p.chosen_die, list(p.round_rolls)) for p in active}

        max_score = max(p.round_score for p in active)
        tied = [p for p in active if p.round_score == max_score]
        winner = tied[0] if len(tied) == 1 else self.rng.pick(tied)

        logger.info("Round %d: %s wins with %d", round_number, winner.name, max_score)

        losers = [p for p in active if p is not winner]
        losses: Dict[str, Optional[int]] = {}
        eliminated = []
        # Every draw happens before any die moves
        picks = [(loser, loser.choose_loss(self.rng)) for loser in losers]
        for loser, index in picks:
            lost = None if index is None else loser.remove_die(index)
            losses[loser.name] = lost
            if lost is not None:
                pool.append(lost)
                logger.info("%s lost a %s to the pool", loser.name, die_name(lost))
            if not loser.dice:
                loser.eliminated = True
                eliminated.append(loser)
                logger.info("%s has been eliminated", loser.name)

        return RoundOutcome(
            round_number=round_number,
            winner=winner,
            tied=tied,
            losers=losers,
            losses=losses,
            eliminated=eliminated,
            scores={p.name: p.round_score for p in active},
            rolls=rolls,
            pool=list(pool),
        )
