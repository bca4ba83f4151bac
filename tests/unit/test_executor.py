"""Tests for move execution and the stock/waste cycle."""

import pytest
from solitaire.cards.deck import Card
from solitaire.cards.schema import Rank, Suit, Variant
from solitaire.simulation.state import GameState
from solitaire.simulation.deal import new_game
from solitaire.simulation.moves import (
    WasteRef, FoundationRef, TableauRef, FreeCellRef,
    Move, RejectReason, IllegalMoveError,
)
from solitaire.simulation.executor import (
    execute_move, apply_move, draw_from_stock, set_draw_count,
)


def make_card(rank: str, suit: str, face_up: bool = True) -> Card:
    """Helper to create cards."""
    return Card(suit=Suit(suit), rank=Rank(rank), face_up=face_up)


def make_state(variant, columns, stock=(), waste=(), foundations=None, free_cells=None, draw_count=1):
    """Build a state with padded columns."""
    width = 7 if variant == Variant.KLONDIKE else 8
    tableau = tuple(tuple(col) for col in columns) + ((),) * (width - len(columns))
    if free_cells is None:
        free_cells = () if variant == Variant.KLONDIKE else (None,) * 4
    return GameState(
        variant=variant,
        stock=tuple(stock),
        waste=tuple(waste),
        foundations=foundations or ((), (), (), ()),
        tableau=tableau,
        free_cells=tuple(free_cells),
        draw_count=draw_count,
    )


class TestFoundationMoves:
    """Moves onto and off foundations."""

    def test_two_of_clubs_rejected_on_empty_foundation(self):
        state = make_state(Variant.FREECELL, [[make_card("2", "C")]])

        result = execute_move(state, TableauRef(0), FoundationRef(2))

        assert not result.ok
        assert result.reason == RejectReason.DESTINATION_RULE_VIOLATION
        assert result.state is state

    def test_two_of_clubs_on_ace_of_clubs_scores(self):
        foundations = ((), (), (make_card("A", "C"),), ())
        state = make_state(Variant.FREECELL, [[make_card("2", "C")]], foundations=foundations)

        result = execute_move(state, TableauRef(0), FoundationRef(2))

        assert result.ok
        assert result.state.foundations[2] == (make_card("A", "C"), make_card("2", "C"))
        assert result.state.tableau[0] == ()
        assert result.state.score == state.score + 10
        assert result.state.moves == 1

    def test_moving_off_foundation_returns_points(self):
        foundations = ((make_card("A", "H"), make_card("2", "H")), (), (), ())
        state = make_state(Variant.KLONDIKE, [[make_card("3", "S")]], foundations=foundations)
        state = state.copy_with(score=20)

        result = execute_move(state, FoundationRef(0), TableauRef(0))

        assert result.ok
        assert result.state.score == 10
        assert result.state.tableau[0][-1] == make_card("2", "H")


class TestTableauMoves:
    """Moves between columns."""

    def test_exposed_card_flips_face_up(self):
        columns = [
            [make_card("5", "D", face_up=False), make_card("9", "S")],
            [make_card("10", "H")],
        ]
        state = make_state(Variant.KLONDIKE, columns)

        result = execute_move(state, TableauRef(0), TableauRef(1))

        assert result.ok
        assert result.state.tableau[0] == (make_card("5", "D", face_up=True),)
        assert result.state.tableau[1] == (make_card("10", "H"), make_card("9", "S"))

    def test_run_keeps_order(self):
        run = [make_card("Q", "H"), make_card("J", "C"), make_card("10", "D")]
        columns = [[make_card("4", "S")] + run, [make_card("K", "S")]]
        state = make_state(Variant.KLONDIKE, columns)

        result = execute_move(state, TableauRef(0, 1), TableauRef(1))

        assert result.ok
        assert result.cards_moved == 3
        assert result.state.tableau[1] == (make_card("K", "S"), *run)
        assert result.state.tableau[0] == (make_card("4", "S"),)

    def test_tableau_move_does_not_score(self):
        state = make_state(Variant.KLONDIKE, [[make_card("Q", "H")], [make_card("K", "S")]])
        result = execute_move(state, TableauRef(0), TableauRef(1))

        assert result.state.score == 0
        assert result.state.moves == 1

    def test_waste_to_tableau(self):
        waste = [make_card("3", "C"), make_card("Q", "D")]
        state = make_state(Variant.KLONDIKE, [[make_card("K", "S")]], waste=waste)

        result = execute_move(state, WasteRef(), TableauRef(0))

        assert result.ok
        assert result.state.waste == (make_card("3", "C"),)
        assert result.state.tableau[0][-1] == make_card("Q", "D")


class TestSupermove:
    """FreeCell capacity scenario: one empty cell, no empty columns."""

    def make_supermove_state(self) -> GameState:
        cells = (make_card("2", "D"), make_card("3", "D"), make_card("4", "D"), None)
        columns = [
            [make_card("9", "S"), make_card("8", "H"), make_card("7", "C")],
            [make_card("10", "H")],
            [make_card("9", "C")],
        ] + [[make_card("2", "S")]] * 5
        return make_state(Variant.FREECELL, columns, free_cells=cells)

    def test_three_card_run_rejected(self):
        state = self.make_supermove_state()

        result = execute_move(state, TableauRef(0, 0), TableauRef(1))

        assert result.reason == RejectReason.SUPERMOVE_CAPACITY_EXCEEDED
        assert result.state is state

    def test_two_card_run_accepted(self):
        state = self.make_supermove_state()

        result = execute_move(state, TableauRef(0, 1), TableauRef(2))

        assert result.ok
        assert result.state.tableau[2] == (
            make_card("9", "C"), make_card("8", "H"), make_card("7", "C"),
        )


class TestFreeCells:
    """Moves into and out of free cells."""

    def test_into_and_out_of_cell(self):
        state = make_state(Variant.FREECELL, [[make_card("7", "S")], [make_card("8", "D")]])

        parked = execute_move(state, TableauRef(0), FreeCellRef(1))
        assert parked.ok
        assert parked.state.free_cells == (None, make_card("7", "S"), None, None)

        back = execute_move(parked.state, FreeCellRef(1), TableauRef(1))
        assert back.ok
        assert back.state.free_cells == (None, None, None, None)
        assert back.state.tableau[1] == (make_card("8", "D"), make_card("7", "S"))
        assert back.state.moves == 2


def test_apply_move_raises_on_illegal() -> None:
    state = make_state(Variant.FREECELL, [[make_card("2", "C")]])
    move = Move(source=TableauRef(0), target=FoundationRef(0))

    with pytest.raises(IllegalMoveError) as excinfo:
        apply_move(state, move)

    assert excinfo.value.reason == RejectReason.DESTINATION_RULE_VIOLATION


def test_rejection_leaves_input_untouched() -> None:
    state = new_game(Variant.FREECELL, seed=8)
    before = state.copy_with()

    execute_move(state, TableauRef(0, 0), TableauRef(1))

    assert state == before


class TestDrawFromStock:
    """Tests for the Klondike stock/waste cycle."""

    def make_stock_state(self, ranks, draw_count=1, waste=()):
        stock = [make_card(r, "S", face_up=False) for r in ranks]
        return make_state(Variant.KLONDIKE, [], stock=stock, waste=waste, draw_count=draw_count)

    def test_draw_one(self):
        state = self.make_stock_state(["2", "3", "4"])

        drawn = draw_from_stock(state)

        assert drawn.waste == (make_card("4", "S"),)
        assert [c.rank for c in drawn.stock] == [Rank.TWO, Rank.THREE]
        assert drawn.moves == 1

    def test_draw_three_in_draw_order(self):
        state = self.make_stock_state(["2", "3", "4", "5"], draw_count=3)

        drawn = draw_from_stock(state)

        assert drawn.waste == (make_card("5", "S"), make_card("4", "S"), make_card("3", "S"))
        assert drawn.stock == (make_card("2", "S", face_up=False),)

    def test_draw_three_with_two_left(self):
        state = self.make_stock_state(["2", "3"], draw_count=3)

        drawn = draw_from_stock(state)

        assert len(drawn.waste) == 2
        assert drawn.stock == ()

    def test_recycle_reverses_waste_face_down(self):
        waste = (make_card("2", "S"), make_card("3", "S"), make_card("4", "S"))
        state = self.make_stock_state([], waste=waste)

        recycled = draw_from_stock(state)

        assert recycled.waste == ()
        assert recycled.stock == tuple(c.face_down_copy() for c in reversed(waste))
        assert recycled.moves == state.moves

    def test_recycled_stock_draws_oldest_waste_card_first(self):
        waste = (make_card("2", "S"), make_card("3", "S"))
        state = draw_from_stock(self.make_stock_state([], waste=waste))

        assert draw_from_stock(state).waste == (make_card("2", "S"),)

    def test_both_empty_is_noop(self):
        state = self.make_stock_state([])
        assert draw_from_stock(state) is state

    def test_freecell_draw_is_noop(self):
        state = new_game(Variant.FREECELL, seed=2)
        assert draw_from_stock(state) is state

    def test_full_cycle_restores_stock(self):
        state = new_game(Variant.KLONDIKE, draw_count=3, seed=4)
        original = state.stock

        while state.stock:
            state = draw_from_stock(state)
        assert len(state.waste) == 24

        state = draw_from_stock(state)

        assert state.stock == original
        assert state.waste == ()


def test_set_draw_count() -> None:
    state = new_game(Variant.KLONDIKE, seed=1)

    assert set_draw_count(state, 3).draw_count == 3
    with pytest.raises(ValueError):
        set_draw_count(state, 2)
