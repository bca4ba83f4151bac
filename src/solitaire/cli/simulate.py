"""CLI command for batch simulation."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from solitaire.cards.schema import Variant
from solitaire.session.config import GameConfig
from solitaire.simulation.engine import GameEngine
from solitaire.simulation.players import GreedyPlayer, RandomPlayer

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration.

    Args:
        verbose: Enable verbose (DEBUG) logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


@click.command()
@click.option(
    "--variant",
    type=click.Choice([v.value for v in Variant]),
    default=Variant.KLONDIKE.value,
)
@click.option("--draw", "draw_count", type=click.Choice(["1", "3"]), default="1", help="Klondike draw mode")
@click.option("-n", "--games", type=int, default=100, help="Number of games to play")
@click.option("--seed", type=int, default=0, help="Seed of the first game; game i uses seed + i")
@click.option(
    "--player",
    type=click.Choice(["random", "greedy"]),
    default="greedy",
    help="Automated player strategy",
)
@click.option("--max-steps", type=int, default=1000, help="Step limit per game")
@click.option("--auto/--no-auto", default=True, help="Run the foundation auto-solver between moves")
@click.option("--output", type=click.Path(), default=None, help="Write per-game results as JSON lines")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    variant: str,
    draw_count: str,
    games: int,
    seed: int,
    player: str,
    max_steps: int,
    auto: bool,
    output: str | None,
    verbose: bool,
):
    """Play many seeded games with an automated player and report the win rate."""
    setup_logging(verbose)

    engine = GameEngine(max_steps=max_steps)
    results = []
    for i in range(games):
        config = GameConfig(
            variant=Variant(variant),
            draw_count=int(draw_count),
            seed=seed + i,
            auto_solve=auto,
        )
        ai = GreedyPlayer(seed=seed + i) if player == "greedy" else RandomPlayer(seed=seed + i)
        result = engine.simulate_game(config, ai)
        logger.debug(
            f"  Seed {result.seed}: {'won' if result.won else 'lost'} after {result.steps} steps, "
            f"{result.final_state.foundation_count()} cards home"
        )
        results.append(result)

    wins = sum(1 for r in results if r.won)
    avg_home = sum(r.final_state.foundation_count() for r in results) / max(len(results), 1)
    click.echo(f"Games: {len(results)}")
    click.echo(f"Wins: {wins} ({100.0 * wins / max(len(results), 1):.1f}%)")
    click.echo(f"Avg cards on foundations: {avg_home:.1f}")

    if output:
        path = Path(output)
        with open(path, "w") as f:
            for r in results:
                f.write(json.dumps({
                    "seed": r.seed,
                    "won": r.won,
                    "steps": r.steps,
                    "foundation_cards": r.final_state.foundation_count(),
                    "score": r.final_state.score,
                }) + "\n")
        click.echo(f"Results saved to {path}")


if __name__ == "__main__":
    main()
