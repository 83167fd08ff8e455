import logging
import click
from rich.logging import RichHandler
from ..core.config import DEFAULT_OPPONENTS, DEFAULT_STRATEGY, Difficulty, MAX_OPPONENTS, MIN_OPPONENTS
from ..core.errors import DiceGameError
from ..simulation.strategy_registry import strategy_registry
from .interface import InteractiveCLI


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@click.command()
@click.option('--difficulty', '-d', type=click.Choice([d.value for d in Difficulty]), help='Number of D100s needed to win')
@click.option('--opponents', '-o', type=click.IntRange(MIN_OPPONENTS, MAX_OPPONENTS), help='Number of computer opponents')
@click.option('--seed', type=int, help='Seed the dice for a repeatable game')
@click.option('--fast', is_flag=True, help='Skip the pauses between steps')
@click.option('--strategy', type=click.Choice(strategy_registry.list_strategies()), default=DEFAULT_STRATEGY,
              show_default=True, help='Strategy used by computer opponents')
@click.option('--simulate', '-s', type=click.IntRange(min=1), metavar='GAMES', help='Simulate all-AI games instead of playing')
@click.option('--lineup', '-l', type=click.Choice(strategy_registry.list_strategies()), multiple=True,
              help='Strategy per seat for --simulate (repeatable)')
@click.option('--workers', type=click.IntRange(min=1), help='Worker processes for --simulate')
@click.option('--list-strategies', 'show_strategies', is_flag=True, help='Describe the available strategies and exit')
@click.option('--verbose', '-v', is_flag=True, help='Log every roll and loss')
def main(difficulty, opponents, seed, fast, strategy, simulate, lineup, workers, show_strategies, verbose):
    """Dicerise - roll big, upgrade your dice, reach the D100."""
    configure_logging(verbose)
    cli = InteractiveCLI(difficulty=difficulty, opponents=opponents, seed=seed, fast=fast, strategy=strategy)

    if show_strategies:
        cli.list_strategies()
    elif simulate:
        strategies = list(lineup) or [strategy] * ((opponents or DEFAULT_OPPONENTS) + 1)
        click.echo(f"Running {simulate} simulated games...")
        try:
            cli.run_simulation(simulate, strategies, num_workers=workers)
        except DiceGameError as e:
            raise click.UsageError(str(e))
    else:
        cli.run()


if __name__ == "__main__":
    main()
