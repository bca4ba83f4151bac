"""Move legality checks.

Everything here is a pure function of its arguments: nothing mutates the
state it inspects. Ordinary illegal moves come back as a RejectReason;
only descriptors that point outside the table raise InvalidLocationError.
"""

from __future__ import annotations

from typing import Optional, Sequence

from solitaire.cards.deck import Card
from solitaire.cards.schema import Rank
from solitaire.simulation.state import GameState, VariantRules, Pile, DECK_SIZE
from solitaire.simulation.moves import (
    StockRef, WasteRef, FoundationRef, TableauRef, FreeCellRef,
    MoveSource, MoveTarget, RejectReason, InvalidLocationError,
)


def is_valid_sequence(cards: Sequence[Card]) -> bool:
    """Check that cards alternate color and descend by one, bottom to top."""
    for upper, lower in zip(cards, cards[1:]):
        if upper.color == lower.color:
            return False
        if upper.value != lower.value + 1:
            return False
    return True


def is_valid_foundation_move(card: Card, foundation: Pile) -> bool:
    """Check a single card against a foundation pile."""
    if not foundation:
        return card.rank == Rank.ACE
    top = foundation[-1]
    return card.suit == top.suit and card.value == top.value + 1


def is_valid_tableau_move(cards: Sequence[Card], column: Pile, rules: VariantRules) -> bool:
    """Check a group of cards against a destination column.

    Args:
        cards: Lifted group, bottom card first
        column: Destination column
        rules: Variant rules (decides what an empty column accepts)
    """
    if not cards or not is_valid_sequence(cards):
        return False

    lead = cards[0]
    if not column:
        return rules.empty_column_rank is None or lead.rank == rules.empty_column_rank

    top = column[-1]
    return top.face_up and top.color != lead.color and top.value == lead.value + 1


def is_valid_free_cell_move(
    cards: Sequence[Card],
    free_cells: Sequence[Optional[Card]],
    cell_index: int,
) -> bool:
    """A free cell takes exactly one card, and only when empty."""
    return len(cards) == 1 and free_cells[cell_index] is None


def max_movable_cards(state: GameState) -> int:
    """Largest group that may move in one step.

    FreeCell: (empty free cells + 1) * 2 ** (empty columns). Klondike has no
    limit beyond the run itself.
    """
    if not state.rules.supermove_limit:
        return DECK_SIZE
    return (state.empty_free_cells() + 1) * 2 ** state.empty_columns()


def _check_index(index: int, count: int, what: str) -> None:
    if not 0 <= index < count:
        raise InvalidLocationError(f"No {what} {index} (have {count})")


def validate_target(state: GameState, target: MoveTarget) -> None:
    """Raise InvalidLocationError if ``target`` is not a legal drop pile."""
    if isinstance(target, FoundationRef):
        _check_index(target.index, len(state.foundations), "foundation")
    elif isinstance(target, TableauRef):
        _check_index(target.index, len(state.tableau), "tableau column")
    elif isinstance(target, FreeCellRef):
        _check_index(target.index, len(state.free_cells), "free cell")
    else:
        raise InvalidLocationError(f"{target!r} cannot receive cards")


def lift_cards(state: GameState, source: MoveSource) -> tuple[Pile, Optional[RejectReason]]:
    """Resolve a source descriptor to the group of cards it would lift.

    Returns:
        (cards, reason): cards is empty whenever reason is set
    """
    if isinstance(source, StockRef):
        if not state.stock:
            return (), RejectReason.EMPTY_SOURCE
        # Stock cards are face-down; they only move by drawing
        return (), RejectReason.INVALID_SEQUENCE

    if isinstance(source, WasteRef):
        if not state.waste:
            return (), RejectReason.EMPTY_SOURCE
        return (state.waste[-1],), None

    if isinstance(source, FoundationRef):
        _check_index(source.index, len(state.foundations), "foundation")
        pile = state.foundations[source.index]
        if not pile:
            return (), RejectReason.EMPTY_SOURCE
        return (pile[-1],), None

    if isinstance(source, FreeCellRef):
        _check_index(source.index, len(state.free_cells), "free cell")
        card = state.free_cells[source.index]
        if card is None:
            return (), RejectReason.EMPTY_SOURCE
        return (card,), None

    if isinstance(source, TableauRef):
        _check_index(source.index, len(state.tableau), "tableau column")
        column = state.tableau[source.index]
        if not column:
            return (), RejectReason.EMPTY_SOURCE
        offset = len(column) - 1 if source.offset is None else source.offset
        _check_index(offset, len(column), f"card in column {source.index}, offset")
        cards = column[offset:]
        if not all(c.face_up for c in cards) or not is_valid_sequence(cards):
            return (), RejectReason.INVALID_SEQUENCE
        return cards, None

    raise InvalidLocationError(f"Unknown pile descriptor {source!r}")


def _same_pile(source: MoveSource, target: MoveTarget) -> bool:
    return type(source) is type(target) and getattr(source, "index", None) == target.index


def check_move(state: GameState, source: MoveSource, target: MoveTarget) -> Optional[RejectReason]:
    """Decide whether moving from ``source`` to ``target`` is legal.

    Returns:
        None if the move is legal, otherwise the first reason it is not
    """
    validate_target(state, target)
    cards, reason = lift_cards(state, source)
    if reason is not None:
        return reason

    if _same_pile(source, target):
        return RejectReason.DESTINATION_RULE_VIOLATION

    if len(cards) > max_movable_cards(state):
        return RejectReason.SUPERMOVE_CAPACITY_EXCEEDED

    if isinstance(target, FoundationRef):
        legal = len(cards) == 1 and is_valid_foundation_move(cards[0], state.foundations[target.index])
    elif isinstance(target, TableauRef):
        legal = is_valid_tableau_move(cards, state.tableau[target.index], state.rules)
    else:
        legal = is_valid_free_cell_move(cards, state.free_cells, target.index)

    return None if legal else RejectReason.DESTINATION_RULE_VIOLATION
