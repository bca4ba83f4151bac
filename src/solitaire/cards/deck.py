"""Card value type and deck factory."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from solitaire.cards.schema import Rank, Suit, Color, RANK_VALUES, SUIT_COLORS


@dataclass(frozen=True)
class Card:
    """Immutable playing card.

    The face-up flag is part of the value: flipping a card yields a new
    Card with the same identity.
    """

    suit: Suit
    rank: Rank
    face_up: bool = False

    @property
    def identity(self) -> tuple[Suit, Rank]:
        return (self.suit, self.rank)

    @property
    def value(self) -> int:
        """Numeric rank, Ace=1 through King=13."""
        return RANK_VALUES[self.rank]

    @property
    def color(self) -> Color:
        return SUIT_COLORS[self.suit]

    def face_up_copy(self) -> "Card":
        return self if self.face_up else replace(self, face_up=True)

    def face_down_copy(self) -> "Card":
        return replace(self, face_up=False) if self.face_up else self

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"


def create_deck() -> tuple[Card, ...]:
    """Build a standard 52-card deck, all cards face-down."""
    return tuple(Card(suit=suit, rank=rank) for suit in Suit for rank in Rank)


def shuffle(cards: Iterable[Card], rng: Optional[random.Random] = None) -> tuple[Card, ...]:
    """Return a uniformly random permutation of ``cards``.

    The input is copied before shuffling, so callers never observe their
    own sequence being reordered.

    Args:
        cards: Cards to permute
        rng: Random source (defaults to a fresh unseeded ``random.Random``)

    Returns:
        New tuple holding the same cards in random order
    """
    rng = rng or random.Random()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return tuple(shuffled)
