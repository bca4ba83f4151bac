"""Text command parsing for the terminal adapter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from solitaire.simulation.moves import (
    StockRef, WasteRef, FoundationRef, TableauRef, FreeCellRef,
    MoveSource, MoveTarget,
)


class CommandType(Enum):
    """Kinds of player command."""

    DRAW = "draw"
    MOVE = "move"
    QUICK = "quick"
    AUTO = "auto"
    HINT = "hint"
    NEW = "new"
    MODE = "mode"
    QUIT = "quit"


@dataclass
class Command:
    """Result of parsing one line of input."""

    kind: Optional[CommandType] = None
    source: Optional[MoveSource] = None
    target: Optional[MoveTarget] = None
    draw_count: Optional[int] = None
    error: Optional[str] = None


_PILE = re.compile(r"^(?P<kind>[swfct])(?P<index>\d+)?(?::(?P<offset>\d+))?$")

_KEYWORDS = {
    "d": CommandType.DRAW, "draw": CommandType.DRAW,
    "a": CommandType.AUTO, "auto": CommandType.AUTO,
    "h": CommandType.HINT, "hint": CommandType.HINT,
    "n": CommandType.NEW, "new": CommandType.NEW,
    "q": CommandType.QUIT, "quit": CommandType.QUIT, "exit": CommandType.QUIT,
    "x": CommandType.QUIT,
}

HELP = (
    "Piles: s=stock w=waste f1-f4=foundations c1-c4=free cells t1-t8=columns "
    "(t3:2 lifts column 3 from its 2nd card)\n"
    "Commands: <from> <to> | m <from> <to> | p <from> (quick move) | d (draw) | "
    "a (auto) | h (hint) | mode 1|3 | n (new) | q or x (quit)"
)


def parse_pile(token: str) -> Optional[MoveSource]:
    """Parse a pile token such as ``w``, ``f2`` or ``t3:4`` (1-indexed)."""
    match = _PILE.match(token)
    if not match:
        return None

    kind = match.group("kind")
    index = match.group("index")
    offset = match.group("offset")

    if kind in ("s", "w"):
        if index is not None or offset is not None:
            return None
        return StockRef() if kind == "s" else WasteRef()

    if index is None or int(index) < 1:
        return None
    idx = int(index) - 1

    if kind == "t":
        if offset is None:
            return TableauRef(idx)
        if int(offset) < 1:
            return None
        return TableauRef(idx, int(offset) - 1)

    if offset is not None:
        return None
    return FoundationRef(idx) if kind == "f" else FreeCellRef(idx)


class CommandParser:
    """Turns raw input lines into commands."""

    def parse(self, raw: str) -> Command:
        tokens = raw.strip().lower().split()
        if not tokens:
            return Command(error="Enter a command (h for hints).")

        head = tokens[0]
        if head in _KEYWORDS and len(tokens) == 1:
            return Command(kind=_KEYWORDS[head])

        if head == "mode":
            if len(tokens) == 2 and tokens[1] in ("1", "3"):
                return Command(kind=CommandType.MODE, draw_count=int(tokens[1]))
            return Command(error="Usage: mode 1|3")

        if head == "p":
            if len(tokens) != 2:
                return Command(error="Usage: p <from>")
            source = parse_pile(tokens[1])
            if source is None:
                return Command(error=f"Unknown pile '{tokens[1]}'")
            return Command(kind=CommandType.QUICK, source=source)

        if head == "m":
            tokens = tokens[1:]

        if len(tokens) != 2:
            return Command(error=f"Invalid input '{raw.strip()}'.\n{HELP}")

        source = parse_pile(tokens[0])
        target = parse_pile(tokens[1])
        if source is None:
            return Command(error=f"Unknown pile '{tokens[0]}'")
        if not isinstance(target, (FoundationRef, TableauRef, FreeCellRef)):
            return Command(error=f"Cannot drop cards on '{tokens[1]}'")
        return Command(kind=CommandType.MOVE, source=source, target=target)
