"""CLI command for playing in the terminal."""

from __future__ import annotations

import logging

import click

from solitaire.cards.schema import Variant
from solitaire.session.config import GameConfig
from solitaire.playtest.session import PlaytestSession, SessionConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--variant",
    type=click.Choice([v.value for v in Variant]),
    default=Variant.KLONDIKE.value,
    help="Which solitaire to play",
)
@click.option("--draw", "draw_count", type=click.Choice(["1", "3"]), default="1", help="Klondike draw mode")
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option("--auto/--no-auto", default=False, help="Auto-move cards to foundations after each move")
@click.option("--debug", is_flag=True, help="Show stock contents and hidden card count")
@click.option("--show-rules/--no-rules", default=True, help="Display rules at start")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    variant: str,
    draw_count: str,
    seed: int | None,
    auto: bool,
    debug: bool,
    show_rules: bool,
    verbose: bool,
):
    """Play Klondike or FreeCell in the terminal."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    game_config = GameConfig(
        variant=Variant(variant),
        draw_count=int(draw_count),
        seed=seed,
        auto_solve=auto,
    )
    session = PlaytestSession(game_config, SessionConfig(debug=debug, show_rules=show_rules))

    result = session.run(input_fn=input, output_fn=click.echo)

    if result.won:
        click.echo(f"\nWon in {result.moves} moves with {result.score} points.")
    else:
        click.echo(f"\nFinished with {result.score} points after {result.moves} moves.")
    click.echo(f"Replay with --variant {result.variant} --seed {result.seed}")


if __name__ == "__main__":
    main()
