"""Automated player implementations."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import List, Optional

from solitaire.simulation.state import GameState
from solitaire.simulation.moves import WasteRef, FoundationRef, TableauRef, FreeCellRef, Move


class AIPlayer(ABC):
    """Base class for automated players."""

    @abstractmethod
    def choose_move(self, state: GameState, legal_moves: List[Move]) -> Optional[Move]:
        """Choose a move, or None to draw from the stock."""
        pass


class RandomPlayer(AIPlayer):
    """Player that chooses uniformly among moves and drawing."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def choose_move(self, state: GameState, legal_moves: List[Move]) -> Optional[Move]:
        can_draw = bool(state.stock or state.waste)
        options = len(legal_moves) + (1 if can_draw else 0)
        if options == 0:
            return None
        pick = self.rng.randrange(options)
        return legal_moves[pick] if pick < len(legal_moves) else None


class GreedyPlayer(AIPlayer):
    """Prefers foundation plays, then moves that uncover cards.

    Moves off a foundation are never chosen.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def choose_move(self, state: GameState, legal_moves: List[Move]) -> Optional[Move]:
        candidates = [m for m in legal_moves if not isinstance(m.source, FoundationRef)]
        if not candidates:
            return None

        scored = sorted(candidates, key=lambda m: self._score(state, m), reverse=True)
        best_score = self._score(state, scored[0])
        if best_score <= 0 and (state.stock or state.waste):
            # Nothing constructive on the table; draw instead
            return None

        # Randomly pick among ties
        ties = [m for m in scored if self._score(state, m) == best_score]
        return self.rng.choice(ties)

    def _score(self, state: GameState, move: Move) -> int:
        source, target = move.source, move.target
        if isinstance(target, FoundationRef):
            return 100
        if isinstance(source, TableauRef) and isinstance(target, TableauRef):
            column = state.tableau[source.index]
            offset = source.offset if source.offset is not None else len(column) - 1
            if offset > 0 and not column[offset - 1].face_up:
                return 50
            if offset == 0:
                return 30
            # Splitting a run between columns rarely helps
            return 0
        if isinstance(source, WasteRef):
            return 40
        if isinstance(source, FreeCellRef):
            return 20
        if isinstance(target, FreeCellRef):
            return 5
        return 0
