"""Legal move generation."""

from __future__ import annotations

from typing import List, Optional

from solitaire.simulation.state import GameState
from solitaire.simulation.moves import (
    WasteRef, FoundationRef, TableauRef, FreeCellRef,
    Move, MoveSource, MoveTarget,
)
from solitaire.simulation.validation import check_move, lift_cards


def _sources(state: GameState) -> List[MoveSource]:
    sources: List[MoveSource] = []
    if state.waste:
        sources.append(WasteRef())
    sources.extend(FreeCellRef(i) for i, c in enumerate(state.free_cells) if c is not None)
    sources.extend(FoundationRef(i) for i, f in enumerate(state.foundations) if f)
    for i, column in enumerate(state.tableau):
        for offset, card in enumerate(column):
            if card.face_up:
                sources.append(TableauRef(i, offset))
    return sources


def _targets(state: GameState) -> List[MoveTarget]:
    targets: List[MoveTarget] = [FoundationRef(i) for i in range(len(state.foundations))]
    targets.extend(TableauRef(i) for i in range(len(state.tableau)))
    targets.extend(FreeCellRef(i) for i in range(len(state.free_cells)))
    return targets


def _is_pointless(state: GameState, source: MoveSource, target: MoveTarget) -> bool:
    """Moves that cannot change the position in any useful way."""
    if isinstance(source, FoundationRef) and isinstance(target, FoundationRef):
        return True
    if isinstance(source, FreeCellRef) and isinstance(target, FreeCellRef):
        return True
    # Relocating a whole column into another empty column
    if (isinstance(source, TableauRef) and source.offset == 0
            and isinstance(target, TableauRef) and not state.tableau[target.index]):
        return True
    return False


def generate_legal_moves(state: GameState) -> List[Move]:
    """Generate every legal card transfer in the current state.

    Drawing from the stock is not a card transfer and is not included.
    """
    moves: List[Move] = []
    targets = _targets(state)

    for source in _sources(state):
        for target in targets:
            if _is_pointless(state, source, target):
                continue
            if check_move(state, source, target) is None:
                moves.append(Move(source=source, target=target))

    return moves


def find_quick_move(state: GameState, source: MoveSource) -> Optional[Move]:
    """Double-click policy: first legal foundation, then first empty free cell.

    Only single cards are quick-moved.
    """
    cards, reason = lift_cards(state, source)
    if reason is not None or len(cards) != 1:
        return None

    candidates: List[MoveTarget] = [FoundationRef(i) for i in range(len(state.foundations))]
    candidates.extend(FreeCellRef(i) for i in range(len(state.free_cells)))
    for target in candidates:
        if check_move(state, source, target) is None:
            return Move(source=source, target=target)
    return None
