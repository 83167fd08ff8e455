"""Win condition checks."""
from dataclasses import dataclass
from typing import List, Optional
from enum import Enum
from .player import Player


class WinStatus(Enum):
    CONTINUE = "continue"
    WINNER = "winner"
    NO_WINNER = "no_winner"


@dataclass(frozen=True)
class WinResult:
    """Result of a win check."""
    status: WinStatus
    winner: Optional[Player] = None
    reason: str = ""

    @property
    def is_over(self) -> bool:
        return self.status != WinStatus.CONTINUE


def evaluate_win(players: List[Player], target_count: int) -> WinResult:
    """Check terminal conditions, first match wins.

    1. Any player (eliminated or not) holding `target_count` terminal dice
    2. A single player left standing
    3. The human in seat 0 is out
    """
    for player in players:
        if player.terminal_count >= target_count:
            return WinResult(WinStatus.WINNER, player, "target")

    alive = [p for p in players if not p.eliminated]
    if len(alive) == 1:
        return WinResult(WinStatus.WINNER, alive[0], "last_standing")

    if players and players[0].is_human and players[0].eliminated:
        return WinResult(WinStatus.NO_WINNER, None, "human_eliminated")

    return WinResult(WinStatus.CONTINUE)
