"""Cosmetic pacing around the synchronous engine calls."""
import time
from typing import Union
from rich.console import Console
from ..core.config import RESOLVE_DELAY, ROLL_DELAY
from ..core.game import GameSession
from ..core.player import Choice
from ..core.resolver import RoundOutcome


class PacedSession:
    """Wraps a session so rolls and results appear with a short delay.

    Every engine call completes before the pause starts, so the delays
    never split a logical step.
    """

    def __init__(self, session: GameSession, console: Console, fast: bool = False):
        self.session = session
        self.console = console
        self.roll_delay = 0.0 if fast else ROLL_DELAY
        self.resolve_delay = 0.0 if fast else RESOLVE_DELAY

    def _pause(self, message: str, seconds: float):
        if seconds <= 0:
            return
        with self.console.status(message):
            time.sleep(seconds)

    def execute_round(self) -> RoundOutcome:
        outcome = self.session.execute_round()
        self._pause("[bold green]Rolling...", self.roll_delay)
        return outcome

    def apply_winner_choice(self, choice: Union[Choice, str]) -> int:
        return self.session.apply_winner_choice(choice)

    def after_results(self):
        """Let the round result sink in before moving on."""
        self._pause("[dim]Resolving...", self.resolve_delay)
