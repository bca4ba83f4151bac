"""Stateful engine facade used by renderers and input layers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from solitaire.cards.schema import Variant
from solitaire.simulation.state import GameState
from solitaire.simulation.deal import new_game
from solitaire.simulation.moves import (
    Move, MoveResult, MoveSource, MoveTarget, RejectReason,
)
from solitaire.simulation.validation import lift_cards
from solitaire.simulation.executor import execute_move, draw_from_stock, set_draw_count
from solitaire.simulation.autosolve import auto_move_to_foundations, is_won
from solitaire.simulation.movegen import find_quick_move
from solitaire.session.config import GameConfig

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


class SolitaireGame:
    """Owns the single active GameState of a play session.

    All mutation goes through the move executor or the stock draw. Callers
    get immutable snapshots, either by asking or by registering listeners.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """Initialize and deal the first game."""
        self.config = config or GameConfig()
        self._change_listeners: list[StateListener] = []
        self._win_listeners: list[StateListener] = []
        self._busy = False
        self._win_reported = False
        self.move_history: list[dict] = []
        self.state: GameState = self._deal()

    # Listener registration

    def on_change(self, listener: StateListener) -> None:
        """Call ``listener`` with the new snapshot after every mutation."""
        self._change_listeners.append(listener)

    def on_win(self, listener: StateListener) -> None:
        """Call ``listener`` once per game, when it is first won."""
        self._win_listeners.append(listener)

    # Queries

    def snapshot(self) -> GameState:
        return self.state

    @property
    def is_won(self) -> bool:
        return is_won(self.state)

    # Control

    def new_game(
        self,
        variant: Optional[Variant] = None,
        draw_count: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> GameState:
        """Discard the current game and deal a new one.

        Omitted arguments keep the current variant and draw mode; an omitted
        seed picks a fresh one.
        """
        with self._exclusive():
            self.config = GameConfig(
                variant=variant or self.config.variant,
                draw_count=draw_count or self.config.draw_count,
                seed=seed,
                auto_solve=self.config.auto_solve,
            )
            self.state = self._deal()
        self._notify_change()
        return self.state

    def set_draw_count(self, draw_count: int) -> None:
        """Switch the Klondike draw mode for the rest of this game."""
        with self._exclusive():
            self.state = set_draw_count(self.state, draw_count)
            self.config.draw_count = draw_count
        self._notify_change()

    def draw(self) -> bool:
        """Draw from the stock, recycling the waste when the stock is empty.

        Returns:
            True if anything changed
        """
        with self._exclusive():
            new_state = draw_from_stock(self.state)
            if new_state == self.state:
                return False
            self.state = new_state
            self._record("draw", f"stock {len(new_state.stock)}, waste {len(new_state.waste)}")
        self._notify_change()
        return True

    def attempt_move(self, source: MoveSource, target: MoveTarget) -> MoveResult:
        """Try to move cards; the state is unchanged on rejection."""
        with self._exclusive():
            result = self._execute(source, target)
        if result.ok:
            self._after_move()
        return result

    def quick_move(self, source: MoveSource) -> MoveResult:
        """Send a single card to a foundation, else to a free cell."""
        with self._exclusive():
            _, reason = lift_cards(self.state, source)
            if reason is not None:
                return MoveResult(state=self.state, reason=reason)
            move = find_quick_move(self.state, source)
            if move is None:
                return MoveResult(state=self.state, reason=RejectReason.DESTINATION_RULE_VIOLATION)
            result = self._execute(move.source, move.target)
        if result.ok:
            self._after_move()
        return result

    def request_auto_solve(self, should_stop: Optional[Callable[[], bool]] = None) -> list[Move]:
        """Harvest every card that can currently go to a foundation.

        Returns:
            Moves executed, in order
        """
        with self._exclusive():
            self.state, executed = self._run_auto_solve(should_stop)
        if executed:
            self._after_move()
        return executed

    # Internals

    def _deal(self) -> GameState:
        self._win_reported = False
        self.move_history = []
        logger.info(
            f"New {self.config.variant.value} game (seed={self.config.seed}, "
            f"draw={self.config.draw_count})"
        )
        return new_game(self.config.variant, self.config.draw_count, self.config.seed)

    def _execute(self, source: MoveSource, target: MoveTarget) -> MoveResult:
        """Apply a move to the held state; caller holds the exclusive guard."""
        result = execute_move(self.state, source, target)
        if not result.ok:
            return result
        self.state = result.state
        self._record("move", str(Move(source, target)))
        if self.config.auto_solve:
            self.state, _ = self._run_auto_solve(None)
        return MoveResult(state=self.state, cards_moved=result.cards_moved)

    def _run_auto_solve(self, should_stop: Optional[Callable[[], bool]]) -> tuple[GameState, list[Move]]:
        state, executed = auto_move_to_foundations(self.state, should_stop)
        first = state.moves - len(executed)
        for i, move in enumerate(executed, start=1):
            self._record("auto", str(move), moves=first + i)
        return state, executed

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        if self._busy:
            raise RuntimeError("Engine call made while another call is in progress")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _record(self, action: str, detail: str, moves: Optional[int] = None) -> None:
        """Record an action in history."""
        self.move_history.append({
            "moves": self.state.moves if moves is None else moves,
            "action": action,
            "detail": detail,
        })

    def _after_move(self) -> None:
        self._notify_change()
        if not self._win_reported and is_won(self.state):
            self._win_reported = True
            logger.info(f"Game won in {self.state.moves} moves, score {self.state.score}")
            for listener in self._win_listeners:
                listener(self.state)

    def _notify_change(self) -> None:
        for listener in self._change_listeners:
            listener(self.state)
