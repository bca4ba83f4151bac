"""Automated game simulation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from solitaire.simulation.state import GameState
from solitaire.simulation.deal import new_game
from solitaire.simulation.executor import apply_move, draw_from_stock
from solitaire.simulation.autosolve import auto_move_to_foundations, is_won
from solitaire.simulation.movegen import generate_legal_moves
from solitaire.simulation.players import AIPlayer
from solitaire.session.config import GameConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameResult:
    """Result of a simulated game."""

    seed: int
    won: bool
    steps: int
    final_state: GameState
    history: tuple[GameState, ...]  # State after each step

    def __init__(
        self,
        seed: int,
        won: bool,
        steps: int,
        final_state: GameState,
        history: List[GameState],
    ) -> None:
        object.__setattr__(self, "seed", seed)
        object.__setattr__(self, "won", won)
        object.__setattr__(self, "steps", steps)
        object.__setattr__(self, "final_state", final_state)
        object.__setattr__(self, "history", tuple(history))


def position_key(state: GameState) -> tuple:
    """Card layout of a state, ignoring the move and score counters."""
    return (state.stock, state.waste, state.foundations, state.tableau, state.free_cells)


class GameEngine:
    """Plays solitaire games with an automated player."""

    def __init__(self, max_steps: int = 1000) -> None:
        self.max_steps = max_steps

    def simulate_game(self, config: GameConfig, player: AIPlayer) -> GameResult:
        """Play one game until it is won, stuck, or out of steps.

        Moves and draws that would recreate an earlier position are not
        offered to the player, so play cannot loop forever.
        """
        state = new_game(config.variant, config.draw_count, config.seed)
        history: List[GameState] = [state]
        seen = {position_key(state)}

        while len(history) - 1 < self.max_steps and not is_won(state):
            if config.auto_solve:
                state, executed = auto_move_to_foundations(state)
                if executed:
                    seen.add(position_key(state))
                    history.append(state)
                    continue

            candidates = []
            for move in generate_legal_moves(state):
                if position_key(apply_move(state, move)) not in seen:
                    candidates.append(move)

            choice = player.choose_move(state, candidates)
            if choice is None:
                next_state = draw_from_stock(state)
                if position_key(next_state) in seen:
                    if not candidates:
                        logger.debug(f"Seed {config.seed}: stuck after {len(history) - 1} steps")
                        break
                    next_state = apply_move(state, candidates[0])
            else:
                next_state = apply_move(state, choice)

            seen.add(position_key(next_state))
            history.append(next_state)
            state = next_state

        return GameResult(
            seed=config.seed,
            won=is_won(state),
            steps=len(history) - 1,
            final_state=state,
            history=history,
        )
