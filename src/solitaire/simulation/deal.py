"""Variant-specific dealing of a fresh game."""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from solitaire.cards.deck import Card, create_deck, shuffle
from solitaire.cards.schema import Variant
from solitaire.simulation.state import GameState, FOUNDATION_COUNT, rules_for

logger = logging.getLogger(__name__)

VALID_DRAW_COUNTS = (1, 3)
# FreeCell: first four columns get one extra card
FREECELL_COLUMN_SIZES = (7, 7, 7, 7, 6, 6, 6, 6)


def _check_draw_count(draw_count: int) -> None:
    if draw_count not in VALID_DRAW_COUNTS:
        raise ValueError(f"draw_count must be 1 or 3, got {draw_count}")


def deal_klondike(cards: Sequence[Card], draw_count: int = 1) -> GameState:
    """Deal Klondike: column i gets i+1 cards, only the last face-up.

    The remaining cards form the face-down stock, in deck order, with the
    last card on top.
    """
    _check_draw_count(draw_count)
    rules = rules_for(Variant.KLONDIKE)
    idx = 0
    tableau: list[tuple[Card, ...]] = []
    for col in range(rules.tableau_columns):
        column = []
        for row in range(col + 1):
            card = cards[idx]
            idx += 1
            column.append(card.face_up_copy() if row == col else card.face_down_copy())
        tableau.append(tuple(column))

    stock = tuple(c.face_down_copy() for c in cards[idx:])

    return GameState(
        variant=Variant.KLONDIKE,
        stock=stock,
        waste=(),
        foundations=((),) * FOUNDATION_COUNT,
        tableau=tuple(tableau),
        free_cells=(),
        draw_count=draw_count,
    )


def deal_freecell(cards: Sequence[Card]) -> GameState:
    """Deal FreeCell: 7,7,7,7,6,6,6,6 cards, everything face-up."""
    rules = rules_for(Variant.FREECELL)
    idx = 0
    tableau: list[tuple[Card, ...]] = []
    for size in FREECELL_COLUMN_SIZES:
        tableau.append(tuple(c.face_up_copy() for c in cards[idx:idx + size]))
        idx += size

    return GameState(
        variant=Variant.FREECELL,
        stock=(),
        waste=(),
        foundations=((),) * FOUNDATION_COUNT,
        tableau=tuple(tableau),
        free_cells=(None,) * rules.free_cells,
    )


def deal(variant: Variant, cards: Sequence[Card], draw_count: int = 1) -> GameState:
    """Deal an already-ordered deck for the given variant."""
    if len(cards) != 52:
        raise ValueError(f"Expected a 52-card deck, got {len(cards)} cards")
    if variant == Variant.KLONDIKE:
        return deal_klondike(cards, draw_count)
    return deal_freecell(cards)


def new_game(
    variant: Variant,
    draw_count: int = 1,
    seed: Optional[int] = None,
) -> GameState:
    """Build, shuffle and deal a fresh game.

    Args:
        variant: Which solitaire to deal
        draw_count: Klondike draw mode (1 or 3); ignored by FreeCell
        seed: Shuffle seed (None for an unseeded shuffle)

    Returns:
        Freshly dealt GameState with zeroed counters
    """
    _check_draw_count(draw_count)
    rng = random.Random(seed)
    cards = shuffle(create_deck(), rng)
    logger.debug(f"Dealing {variant.value} (seed={seed}, draw={draw_count})")
    return deal(variant, cards, draw_count)
