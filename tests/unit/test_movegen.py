"""Tests for legal move generation."""

from solitaire.cards.deck import Card
from solitaire.cards.schema import Rank, Suit, Variant
from solitaire.simulation.state import GameState
from solitaire.simulation.deal import new_game
from solitaire.simulation.moves import (
    WasteRef, FoundationRef, TableauRef, FreeCellRef, Move,
)
from solitaire.simulation.validation import check_move
from solitaire.simulation.movegen import generate_legal_moves, find_quick_move


def make_card(rank: str, suit: str, face_up: bool = True) -> Card:
    """Helper to create cards."""
    return Card(suit=Suit(suit), rank=Rank(rank), face_up=face_up)


def make_freecell_state(columns, free_cells=(None, None, None, None), foundations=None) -> GameState:
    tableau = tuple(tuple(col) for col in columns) + ((),) * (8 - len(columns))
    return GameState(
        variant=Variant.FREECELL,
        stock=(),
        waste=(),
        foundations=foundations or ((), (), (), ()),
        tableau=tableau,
        free_cells=tuple(free_cells),
    )


def test_generated_moves_are_legal() -> None:
    for variant in Variant:
        state = new_game(variant, seed=21)
        for move in generate_legal_moves(state):
            assert check_move(state, move.source, move.target) is None


def test_fresh_freecell_offers_free_cell_moves() -> None:
    state = new_game(Variant.FREECELL, seed=21)
    moves = generate_legal_moves(state)

    for i in range(8):
        assert Move(TableauRef(i, len(state.tableau[i]) - 1), FreeCellRef(0)) in moves


def test_skips_whole_column_to_empty_column() -> None:
    state = make_freecell_state([[make_card("K", "S"), make_card("Q", "H")]])
    moves = generate_legal_moves(state)

    assert not any(m.source == TableauRef(0, 0) and isinstance(m.target, TableauRef) for m in moves)
    assert Move(TableauRef(0, 1), TableauRef(1)) in moves


def test_no_foundation_to_foundation() -> None:
    foundations = ((make_card("A", "H"),), (), (), ())
    state = make_freecell_state([[make_card("9", "C")]], foundations=foundations)
    moves = generate_legal_moves(state)

    assert not any(isinstance(m.source, FoundationRef) and isinstance(m.target, FoundationRef) for m in moves)


def test_waste_moves_in_klondike() -> None:
    state = GameState(
        variant=Variant.KLONDIKE,
        stock=(),
        waste=(make_card("A", "D"),),
        foundations=((), (), (), ()),
        tableau=((make_card("2", "C"),),) + ((),) * 6,
    )
    moves = generate_legal_moves(state)

    assert Move(WasteRef(), FoundationRef(0)) in moves
    assert Move(WasteRef(), TableauRef(0)) in moves


class TestQuickMove:
    """Tests for find_quick_move."""

    def test_prefers_foundation(self):
        state = make_freecell_state([[make_card("A", "S")]])
        assert find_quick_move(state, TableauRef(0)) == Move(TableauRef(0), FoundationRef(0))

    def test_falls_back_to_first_empty_cell(self):
        cells = (make_card("3", "D"), None, None, None)
        state = make_freecell_state([[make_card("5", "D")]], free_cells=cells)
        assert find_quick_move(state, TableauRef(0)) == Move(TableauRef(0), FreeCellRef(1))

    def test_runs_are_not_quick_moved(self):
        state = make_freecell_state([[make_card("3", "S"), make_card("2", "H")]])
        assert find_quick_move(state, TableauRef(0, 0)) is None

    def test_empty_source(self):
        state = make_freecell_state([])
        assert find_quick_move(state, TableauRef(0)) is None
