"""Greedy foundation auto-solver and win detection."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from solitaire.cards.deck import Card
from solitaire.simulation.state import GameState
from solitaire.simulation.moves import FoundationRef, TableauRef, FreeCellRef, Move, MoveSource
from solitaire.simulation.validation import is_valid_foundation_move
from solitaire.simulation.executor import apply_move

logger = logging.getLogger(__name__)

FULL_FOUNDATION = 13


def is_won(state: GameState) -> bool:
    """All four foundations hold a complete suit."""
    return all(len(f) == FULL_FOUNDATION for f in state.foundations)


def _exposed_cards(state: GameState) -> Iterator[tuple[MoveSource, Card]]:
    """Free cells first, then the top of each tableau column."""
    for i, card in enumerate(state.free_cells):
        if card is not None:
            yield FreeCellRef(i), card
    for i, column in enumerate(state.tableau):
        if column and column[-1].face_up:
            yield TableauRef(i), column[-1]


def find_foundation_move(state: GameState) -> Optional[Move]:
    """First exposed card that can go to a foundation, scanning in fixed order."""
    for source, card in _exposed_cards(state):
        for f_idx, foundation in enumerate(state.foundations):
            if is_valid_foundation_move(card, foundation):
                return Move(source=source, target=FoundationRef(f_idx))
    return None


def auto_move_to_foundations(
    state: GameState,
    should_stop: Optional[Callable[[], bool]] = None,
) -> tuple[GameState, list[Move]]:
    """Move every currently playable card to the foundations.

    The scan restarts after each successful move and ends when a full pass
    finds nothing. This never takes cards back off a foundation, so it can
    miss wins that need such a retraction.

    Args:
        state: Starting state
        should_stop: Checked between moves; returning True ends the loop early

    Returns:
        (final state, moves executed in order)
    """
    executed: list[Move] = []
    while should_stop is None or not should_stop():
        move = find_foundation_move(state)
        if move is None:
            break
        state = apply_move(state, move)
        executed.append(move)

    if executed:
        logger.debug(f"Auto-solve moved {len(executed)} card(s) to foundations")
    return state, executed
