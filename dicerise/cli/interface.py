import numpy as np
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt, Confirm
from typing import List, Optional
from ..core.config import (
    AI_NAMES, DEFAULT_OPPONENTS, DEFAULT_STRATEGY, MAX_OPPONENTS, MIN_OPPONENTS,
    Difficulty
)
from ..core.dice import SystemRandomSource, die_name, next_tier
from ..core.errors import DiceGameError
from ..core.game import GameSession, Phase, create_session
from ..core.player import Choice
from ..core.resolver import RoundOutcome
from ..core.victory import WinStatus
from ..simulation import GameSimulator
from ..simulation.strategy_registry import strategy_registry
from .pacing import PacedSession


console = Console()


class InteractiveCLI:
    """Interactive command-line interface for Dicerise."""

    def __init__(
        self,
        difficulty: Optional[str] = None,
        opponents: Optional[int] = None,
        seed: Optional[int] = None,
        fast: bool = False,
        strategy: str = DEFAULT_STRATEGY,
    ):
        self.difficulty = difficulty
        self.opponents = opponents
        self.seed = seed
        self.fast = fast
        self.strategy = strategy
        self.session: Optional[GameSession] = None

    def display_players(self, session: GameSession):
        """Display every player's dice."""
        table = Table(title=f"Round {session.round}  ·  Goal: {session.target_count}× D100")
        table.add_column("Player", style="cyan")
        table.add_column("Dice", style="magenta")
        table.add_column("D100s", style="yellow")
        table.add_column("Status", style="green")

        for player in session.players:
            name = f"{player.name} (you)" if player.is_human else player.name
            dice = " ".join(
                f"[bold]{die_name(d)}[/bold]" if d == player.chosen_die else die_name(d)
                for d in player.dice
            )
            if player.eliminated:
                status = "[red]ELIMINATED[/red]"
            elif player.is_protected:
                status = "🛡 Protected"
            else:
                status = ""
            table.add_row(name, dice or "-", f"{player.terminal_count}/{session.target_count}", status)

        console.print(table)
        if session.pool:
            console.print(f"[dim]Pool: {' '.join(die_name(d) for d in session.pool[-20:])}[/dim]")

    def display_outcome(self, outcome: RoundOutcome):
        """Display round results, highest score first."""
        table = Table(title=f"Round {outcome.round_number} Results")
        table.add_column("Player", style="cyan")
        table.add_column("Die", style="magenta")
        table.add_column("Score", style="yellow")
        table.add_column("Result", style="green")

        ranked = sorted(outcome.scores.items(), key=lambda x: x[1], reverse=True)
        for name, score in ranked:
            roll = outcome.rolls[name]
            if name == outcome.winner.name:
                result = "👑 Winner"
            elif outcome.losses.get(name) is None:
                result = "Protected"
            else:
                result = f"[red]Lost {die_name(outcome.losses[name])}[/red]"
            table.add_row(name, die_name(roll.sides), f"{score:,}", result)

        console.print(table)

        if outcome.was_tie:
            tied = ", ".join(p.name for p in outcome.tied)
            console.print(f"[yellow]Tie between {tied}! {outcome.winner.name} takes it.[/yellow]")
        for player in outcome.eliminated:
            console.print(f"[bold red]{player.name} has been eliminated![/bold red]")
        if outcome.choice is not None:
            if outcome.choice == Choice.DUPLICATE:
                console.print(f"[cyan]{outcome.winner.name} duplicated their {die_name(outcome.previous_die)}.[/cyan]")
            else:
                console.print(f"[cyan]{outcome.winner.name} upgraded to {die_name(next_tier(outcome.previous_die))}.[/cyan]")

    def select_die(self, session: GameSession):
        """Ask the human which die to roll."""
        human = session.human
        choices = [str(d) for d in sorted(set(human.dice), reverse=True)]
        default = str(human.chosen_die) if human.chosen_die in human.dice else choices[0]

        while True:
            tier = IntPrompt.ask(
                "\n[cyan]Which die will you roll?[/cyan]",
                choices=choices,
                default=int(default)
            )
            try:
                session.select_die(0, tier)
                break
            except DiceGameError as e:
                console.print(f"[red]{e}[/red]")

        console.print(f"[dim]You're rolling a {die_name(tier)} — {tier} times[/dim]")

    def ask_choice(self, session: GameSession, paced: PacedSession):
        """Ask the human winner to duplicate or upgrade."""
        human = session.human
        current = die_name(human.chosen_die)
        console.print(f"\n[bold green]You won the round with your {current}![/bold green]")
        console.print(f"  duplicate: get a 2nd {current}")
        if human.can_upgrade:
            console.print(f"  upgrade:   {current} → {die_name(next_tier(human.chosen_die))}")
            choices = [c.value for c in Choice]
        else:
            console.print("  [dim]Already at D100 — duplicate instead[/dim]")
            choices = [Choice.DUPLICATE.value]

        while True:
            choice = Prompt.ask("[cyan]Your choice[/cyan]", choices=choices, default=choices[-1])
            try:
                paced.apply_winner_choice(choice)
                break
            except DiceGameError as e:
                console.print(f"[red]{e}[/red]")

    def setup_game(self) -> GameSession:
        """Ask for any settings not given on the command line."""
        difficulty = self.difficulty or Prompt.ask(
            "[cyan]Difficulty[/cyan]",
            choices=[d.value for d in Difficulty],
            default=Difficulty.EASY.value
        )
        opponents = self.opponents
        while opponents is None or not MIN_OPPONENTS <= opponents <= MAX_OPPONENTS:
            opponents = IntPrompt.ask(
                f"[cyan]Number of opponents ({MIN_OPPONENTS}-{MAX_OPPONENTS})[/cyan]",
                default=DEFAULT_OPPONENTS
            )

        rng = SystemRandomSource(self.seed)
        names = rng.shuffled(AI_NAMES)[:opponents]
        strategies = {name: strategy_registry.get_strategy(self.strategy) for name in names}
        return create_session(difficulty, opponents, names, rng=rng, strategies=strategies)

    def play_game(self):
        """Play one full game interactively."""
        session = self.setup_game()
        self.session = session
        paced = PacedSession(session, console, fast=self.fast)

        console.print(Panel.fit(
            f"Collect [bold]{session.target_count}× D100[/bold] or outlast everyone.\n"
            f"Opponents: {', '.join(p.name for p in session.players[1:])}",
            title=f"{session.difficulty.value.capitalize()} game",
            border_style="blue"
        ))

        while not session.is_over:
            console.rule(f"Round {session.round}")
            self.display_players(session)

            if session.needs_die_selection:
                self.select_die(session)

            outcome = paced.execute_round()
            self.display_outcome(outcome)

            if session.phase == Phase.CHOICE:
                self.ask_choice(session, paced)
            paced.after_results()

            if session.is_over:
                break
            if not Confirm.ask("\n[yellow]Continue to the next round?[/yellow]", default=True):
                console.print("[dim]Game abandoned.[/dim]")
                return
            session.next_round()

        self.show_game_over(session)

    def show_game_over(self, session: GameSession):
        """Display the final result."""
        result = session.result
        self.display_players(session)

        if result.status == WinStatus.NO_WINNER:
            title, body, style = "☠️  ELIMINATED", "You ran out of dice. Better luck next time!", "red"
        elif result.winner.is_human:
            if result.reason == "target":
                body = f"You reached {session.target_count}× D100 — the dice are yours!"
            else:
                body = "Everyone else is out of dice — the table is yours!"
            title, style = "🏆 YOU WIN!", "green"
        else:
            if result.reason == "target":
                body = f"{result.winner.name} collected {session.target_count}× D100 first."
            else:
                body = f"{result.winner.name} is the last one standing."
            title, style = f"💀 {result.winner.name} Wins", "red"

        body += f"\nRound {session.round}  ·  Pool: {len(session.pool)} dice"
        if result.winner is not None and result.winner.is_human and session.pool:
            body += f"\nYour reward: {' '.join(die_name(d) for d in session.pool)}"
        console.print(Panel(body, title=title, border_style=style))

    def list_strategies(self):
        """Show every registered strategy with its default parameters."""
        table = Table(title="Strategies")
        table.add_column("Name", style="cyan")
        table.add_column("Description", style="green")
        table.add_column("Parameters", style="magenta")

        for name, config in strategy_registry.get_all_strategies_info().items():
            params = ", ".join(f"{k}={v}" for k, v in config.parameters.items())
            table.add_row(name, config.description, params or "-")

        console.print(table)

    def run_simulation(self, num_simulations: int, strategies: List[str], num_workers: Optional[int] = None):
        """Simulate all-AI games and show the win rates."""
        difficulty = self.difficulty or Difficulty.EASY.value
        simulator = GameSimulator(num_workers=num_workers, seed=self.seed)

        with console.status(f"[bold green]Simulating {num_simulations:,} games..."):
            result = simulator.simulate_games(strategies, num_simulations, difficulty)

        table = Table(title=f"Game Results ({result.num_simulations} games, {difficulty})")
        table.add_column("Seat", style="cyan")
        table.add_column("Win Rate", style="green")
        table.add_column("Games Won", style="blue")

        for seat, rate in sorted(result.win_rates.items(), key=lambda x: x[1], reverse=True):
            table.add_row(seat, f"{rate:.1%}", str(int(round(rate * result.num_simulations))))

        console.print(table)
        console.print(f"\nAverage game length: {result.avg_rounds:.1f} rounds")
        if result.num_simulations:
            console.print(
                f"Shortest: {int(result.round_distribution.min())}  ·  "
                f"Median: {float(np.median(result.round_distribution)):.0f}  ·  "
                f"Longest: {int(result.round_distribution.max())}"
            )
        if result.no_winner_rate:
            console.print(f"[yellow]Unfinished (round limit): {result.no_winner_rate:.1%}[/yellow]")

    def run(self):
        """Main CLI loop."""
        console.print(Panel.fit(
            "[bold cyan]Welcome to Dicerise![/bold cyan]\n"
            "Roll big, upgrade your dice, reach the D100",
            border_style="blue"
        ))

        while True:
            self.play_game()
            if not Confirm.ask("\n[cyan]Play again?[/cyan]", default=True):
                console.print("[yellow]Thanks for playing![/yellow]")
                break
            # Setup prompts come back for the next game
            self.difficulty = None
            self.opponents = None

