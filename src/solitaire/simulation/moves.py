"""Pile descriptors, moves and rejection reasons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from solitaire.simulation.state import GameState


@dataclass(frozen=True)
class StockRef:
    """The Klondike stock."""

    def __str__(self) -> str:
        return "stock"


@dataclass(frozen=True)
class WasteRef:
    """The Klondike waste pile."""

    def __str__(self) -> str:
        return "waste"


@dataclass(frozen=True)
class FoundationRef:
    """One of the four foundations."""

    index: int

    def __str__(self) -> str:
        return f"foundation {self.index + 1}"


@dataclass(frozen=True)
class TableauRef:
    """A tableau column.

    ``offset`` is the position of the first lifted card when used as a
    source (None lifts only the top card). It is ignored for targets.
    """

    index: int
    offset: Optional[int] = None

    def __str__(self) -> str:
        if self.offset is None:
            return f"column {self.index + 1}"
        return f"column {self.index + 1}:{self.offset + 1}"


@dataclass(frozen=True)
class FreeCellRef:
    """A FreeCell holding slot."""

    index: int

    def __str__(self) -> str:
        return f"cell {self.index + 1}"


PileRef = Union[StockRef, WasteRef, FoundationRef, TableauRef, FreeCellRef]
MoveSource = PileRef
MoveTarget = Union[FoundationRef, TableauRef, FreeCellRef]


class RejectReason(Enum):
    """Why a proposed move was refused."""

    INVALID_SEQUENCE = "invalid_sequence"
    SUPERMOVE_CAPACITY_EXCEEDED = "supermove_capacity_exceeded"
    DESTINATION_RULE_VIOLATION = "destination_rule_violation"
    EMPTY_SOURCE = "empty_source"


class InvalidLocationError(ValueError):
    """A descriptor does not name a pile or card that exists.

    Raised for caller bugs, never for ordinary illegal moves.
    """


class IllegalMoveError(Exception):
    """Raised by ``apply_move`` when asked to apply a rejected move."""

    def __init__(self, move: "Move", reason: RejectReason) -> None:
        super().__init__(f"Illegal move {move}: {reason.value}")
        self.move = move
        self.reason = reason


@dataclass(frozen=True)
class Move:
    """A transfer from one pile to another."""

    source: MoveSource
    target: MoveTarget

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of an attempted move.

    ``state`` is the new state on success and the untouched input state on
    rejection.
    """

    state: GameState
    reason: Optional[RejectReason] = None
    cards_moved: int = 0

    @property
    def ok(self) -> bool:
        return self.reason is None
