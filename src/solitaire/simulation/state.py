"""Immutable game state representation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Optional

from solitaire.cards.deck import Card
from solitaire.cards.schema import Rank, Variant, RANK_VALUES

FOUNDATION_COUNT = 4
FOUNDATION_POINTS = 10
DECK_SIZE = 52


@dataclass(frozen=True)
class VariantRules:
    """Table layout and rule switches for one variant."""

    variant: Variant
    tableau_columns: int
    free_cells: int
    uses_stock: bool
    # Klondike only accepts a King into an empty column
    empty_column_rank: Optional[Rank]
    supermove_limit: bool


KLONDIKE_RULES = VariantRules(
    variant=Variant.KLONDIKE,
    tableau_columns=7,
    free_cells=0,
    uses_stock=True,
    empty_column_rank=Rank.KING,
    supermove_limit=False,
)

FREECELL_RULES = VariantRules(
    variant=Variant.FREECELL,
    tableau_columns=8,
    free_cells=4,
    uses_stock=False,
    empty_column_rank=None,
    supermove_limit=True,
)

_RULES = {
    Variant.KLONDIKE: KLONDIKE_RULES,
    Variant.FREECELL: FREECELL_RULES,
}


def rules_for(variant: Variant) -> VariantRules:
    """Look up the rules for a variant."""
    return _RULES[variant]


Pile = tuple[Card, ...]


@dataclass(frozen=True)
class GameState:
    """Immutable solitaire state.

    Every pile is a tuple with index 0 at the bottom and index -1 on top.
    Free cells are a tuple of optional cards (empty for Klondike).
    """

    variant: Variant
    stock: Pile
    waste: Pile
    foundations: tuple[Pile, ...]
    tableau: tuple[Pile, ...]
    free_cells: tuple[Optional[Card], ...] = ()
    moves: int = 0
    score: int = 0
    draw_count: int = 1

    def copy_with(self, **changes) -> "GameState":  # type: ignore
        """Create a new state with specified changes."""
        current = {
            "variant": self.variant,
            "stock": self.stock,
            "waste": self.waste,
            "foundations": self.foundations,
            "tableau": self.tableau,
            "free_cells": self.free_cells,
            "moves": self.moves,
            "score": self.score,
            "draw_count": self.draw_count,
        }
        current.update(changes)
        return GameState(**current)

    @property
    def rules(self) -> VariantRules:
        return rules_for(self.variant)

    def all_cards(self) -> list[Card]:
        """Every card on the table, in no particular order."""
        cards: list[Card] = list(self.stock) + list(self.waste)
        for pile in self.foundations:
            cards.extend(pile)
        for column in self.tableau:
            cards.extend(column)
        cards.extend(c for c in self.free_cells if c is not None)
        return cards

    def foundation_count(self) -> int:
        return sum(len(f) for f in self.foundations)

    def empty_free_cells(self) -> int:
        return sum(1 for c in self.free_cells if c is None)

    def empty_columns(self) -> int:
        return sum(1 for col in self.tableau if not col)


def check_invariants(state: GameState) -> list[str]:
    """Check structural invariants.

    Returns:
        Human-readable descriptions of every violation (empty if consistent)
    """
    problems: list[str] = []

    counts = Counter(card.identity for card in state.all_cards())
    if len(counts) != DECK_SIZE:
        problems.append(f"expected {DECK_SIZE} distinct cards, found {len(counts)}")
    duplicates = [f"{r.value}{s.value}" for (s, r), n in counts.items() if n > 1]
    if duplicates:
        problems.append(f"duplicate cards: {', '.join(sorted(duplicates))}")

    for i, pile in enumerate(state.foundations):
        for height, card in enumerate(pile):
            if card.suit != pile[0].suit or RANK_VALUES[card.rank] != height + 1:
                problems.append(f"foundation {i} broken at height {height + 1}: {card}")
                break
            if not card.face_up:
                problems.append(f"foundation {i} holds face-down {card}")
                break

    for i, column in enumerate(state.tableau):
        face_up = [c for c in column if c.face_up]
        if column and not column[-1].face_up:
            problems.append(f"column {i} has a face-down top card")
        if state.variant == Variant.KLONDIKE:
            first_up = next((j for j, c in enumerate(column) if c.face_up), len(column))
            if any(not c.face_up for c in column[first_up:]):
                problems.append(f"column {i} has a face-down card above a face-up one")
        elif len(face_up) != len(column):
            problems.append(f"column {i} has face-down cards in FreeCell")

    if len(state.free_cells) != state.rules.free_cells:
        problems.append(f"expected {state.rules.free_cells} free cells, found {len(state.free_cells)}")

    if any(c.face_up for c in state.stock):
        problems.append("stock holds a face-up card")
    if any(not c.face_up for c in state.waste):
        problems.append("waste holds a face-down card")

    return problems
