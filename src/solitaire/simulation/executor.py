"""Move execution and the Klondike stock/waste cycle."""

from __future__ import annotations

import logging

from solitaire.simulation.state import GameState, Pile, FOUNDATION_POINTS
from solitaire.simulation.deal import VALID_DRAW_COUNTS
from solitaire.simulation.moves import (
    WasteRef, FoundationRef, TableauRef, FreeCellRef,
    Move, MoveSource, MoveTarget, MoveResult, IllegalMoveError,
)
from solitaire.simulation.validation import check_move, lift_cards

logger = logging.getLogger(__name__)


def _replace_at(piles: tuple, index: int, pile) -> tuple:
    return piles[:index] + (pile,) + piles[index + 1:]


def _remove_from_source(state: GameState, source: MoveSource, count: int) -> GameState:
    """Take ``count`` cards off the source tail, flipping a newly exposed card."""
    if isinstance(source, WasteRef):
        return state.copy_with(waste=state.waste[:-count])

    if isinstance(source, FoundationRef):
        pile = state.foundations[source.index][:-count]
        return state.copy_with(
            foundations=_replace_at(state.foundations, source.index, pile),
            score=state.score - FOUNDATION_POINTS * count,
        )

    if isinstance(source, FreeCellRef):
        return state.copy_with(free_cells=_replace_at(state.free_cells, source.index, None))

    assert isinstance(source, TableauRef)
    column: Pile = state.tableau[source.index][:-count]
    if column and not column[-1].face_up:
        column = column[:-1] + (column[-1].face_up_copy(),)
    return state.copy_with(tableau=_replace_at(state.tableau, source.index, column))


def _add_to_target(state: GameState, target: MoveTarget, cards: Pile) -> GameState:
    if isinstance(target, FoundationRef):
        pile = state.foundations[target.index] + cards
        return state.copy_with(
            foundations=_replace_at(state.foundations, target.index, pile),
            score=state.score + FOUNDATION_POINTS * len(cards),
        )

    if isinstance(target, FreeCellRef):
        return state.copy_with(free_cells=_replace_at(state.free_cells, target.index, cards[0]))

    column = state.tableau[target.index] + cards
    return state.copy_with(tableau=_replace_at(state.tableau, target.index, column))


def execute_move(state: GameState, source: MoveSource, target: MoveTarget) -> MoveResult:
    """Validate and perform a move.

    Illegal moves leave the state untouched and report why.

    Args:
        state: Current state
        source: Where the cards are lifted from
        target: Where they are dropped

    Returns:
        MoveResult holding the new state, or the old one plus a reason
    """
    reason = check_move(state, source, target)
    if reason is not None:
        logger.debug(f"Rejected {source} -> {target}: {reason.value}")
        return MoveResult(state=state, reason=reason)

    cards, _ = lift_cards(state, source)
    new_state = _remove_from_source(state, source, len(cards))
    new_state = _add_to_target(new_state, target, cards)
    new_state = new_state.copy_with(moves=state.moves + 1)

    logger.debug(f"Moved {' '.join(str(c) for c in cards)}: {source} -> {target}")
    return MoveResult(state=new_state, cards_moved=len(cards))


def apply_move(state: GameState, move: Move) -> GameState:
    """Perform a move known to be legal.

    Raises:
        IllegalMoveError: If the move is rejected after all
    """
    result = execute_move(state, move.source, move.target)
    if result.reason is not None:
        raise IllegalMoveError(move, result.reason)
    return result.state


def draw_from_stock(state: GameState) -> GameState:
    """Draw up to ``draw_count`` cards, or recycle the waste.

    Drawing counts as a move; recycling does not. With both piles empty
    the state is returned unchanged.
    """
    if state.stock:
        take = min(state.draw_count, len(state.stock))
        drawn = tuple(c.face_up_copy() for c in reversed(state.stock[-take:]))
        return state.copy_with(
            stock=state.stock[:-take],
            waste=state.waste + drawn,
            moves=state.moves + 1,
        )

    if state.waste:
        logger.debug(f"Recycling {len(state.waste)} waste cards into the stock")
        return state.copy_with(
            stock=tuple(c.face_down_copy() for c in reversed(state.waste)),
            waste=(),
        )

    return state


def set_draw_count(state: GameState, draw_count: int) -> GameState:
    """Switch between draw-1 and draw-3."""
    if draw_count not in VALID_DRAW_COUNTS:
        raise ValueError(f"draw_count must be 1 or 3, got {draw_count}")
    return state.copy_with(draw_count=draw_count)
