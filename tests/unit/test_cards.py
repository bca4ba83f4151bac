"""Tests for the card model and deck factory."""

import random

import pytest
from solitaire.cards.deck import Card, create_deck, shuffle
from solitaire.cards.schema import Rank, Suit, Color, RANK_VALUES


def test_card_immutability() -> None:
    """Test Card is immutable."""
    card = Card(suit=Suit.HEARTS, rank=Rank.ACE)
    assert card.rank == Rank.ACE

    with pytest.raises(AttributeError):
        card.face_up = True  # type: ignore


def test_flipping_keeps_identity() -> None:
    card = Card(suit=Suit.SPADES, rank=Rank.QUEEN)
    up = card.face_up_copy()

    assert up.face_up is True
    assert card.face_up is False
    assert up.identity == card.identity
    assert up.face_down_copy() == card


def test_flipping_is_noop_when_already_there() -> None:
    card = Card(suit=Suit.SPADES, rank=Rank.QUEEN, face_up=True)
    assert card.face_up_copy() is card


def test_rank_values_cover_ace_to_king() -> None:
    assert RANK_VALUES[Rank.ACE] == 1
    assert RANK_VALUES[Rank.TEN] == 10
    assert RANK_VALUES[Rank.KING] == 13
    assert sorted(RANK_VALUES.values()) == list(range(1, 14))


def test_colors() -> None:
    assert Card(Suit.HEARTS, Rank.TWO).color == Color.RED
    assert Card(Suit.DIAMONDS, Rank.TWO).color == Color.RED
    assert Card(Suit.CLUBS, Rank.TWO).color == Color.BLACK
    assert Card(Suit.SPADES, Rank.TWO).color == Color.BLACK


def test_str() -> None:
    assert str(Card(Suit.HEARTS, Rank.TEN)) == "10H"


class TestDeck:
    """Tests for create_deck and shuffle."""

    def test_deck_has_52_unique_face_down_cards(self):
        deck = create_deck()

        assert len(deck) == 52
        assert len({c.identity for c in deck}) == 52
        assert all(not c.face_up for c in deck)

    def test_shuffle_is_a_permutation(self):
        deck = create_deck()
        shuffled = shuffle(deck, random.Random(1))

        assert sorted(c.identity for c in shuffled) == sorted(c.identity for c in deck)

    def test_shuffle_does_not_touch_input(self):
        cards = list(create_deck())
        before = list(cards)

        shuffle(cards, random.Random(3))

        assert cards == before

    def test_shuffle_is_seedable(self):
        deck = create_deck()
        assert shuffle(deck, random.Random(42)) == shuffle(deck, random.Random(42))
        assert shuffle(deck, random.Random(42)) != shuffle(deck, random.Random(43))
