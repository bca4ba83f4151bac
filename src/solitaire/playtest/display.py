"""Terminal display for game state and moves."""

from __future__ import annotations

from typing import Optional

from solitaire.cards.deck import Card
from solitaire.cards.schema import Variant
from solitaire.simulation.state import GameState
from solitaire.simulation.moves import Move


# Unicode card symbols
SUIT_SYMBOLS = {"H": "♥", "D": "♦", "C": "♣", "S": "♠"}
FACE_DOWN = "##"
EMPTY = "--"


def format_card(card: Optional[Card]) -> str:
    """Format card with unicode suit symbol."""
    if card is None:
        return EMPTY
    if not card.face_up:
        return FACE_DOWN
    suit_symbol = SUIT_SYMBOLS.get(card.suit.value, card.suit.value)
    return f"{card.rank.value}{suit_symbol}"


class StateRenderer:
    """Renders the table to terminal text."""

    def render(self, state: GameState, debug: bool = False) -> str:
        """Render every pile plus the move and score counters."""
        lines: list[str] = []

        title = "Klondike" if state.variant == Variant.KLONDIKE else "FreeCell"
        lines.append(f"=== {title} | Moves: {state.moves} | Score: {state.score} ===")
        lines.append("")

        if state.rules.uses_stock:
            shown = "  ".join(format_card(c) for c in state.waste[-state.draw_count:])
            lines.append(f"Stock: [{len(state.stock)}]  Waste: {shown or EMPTY}")

        foundations = "  ".join(
            f"f{i + 1}:{format_card(pile[-1] if pile else None)}"
            for i, pile in enumerate(state.foundations)
        )
        lines.append(f"Foundations: {foundations}")

        if state.free_cells:
            cells = "  ".join(f"c{i + 1}:{format_card(c)}" for i, c in enumerate(state.free_cells))
            lines.append(f"Cells: {cells}")

        lines.append("")
        for i, column in enumerate(state.tableau):
            cards = " ".join(format_card(c) for c in column)
            lines.append(f"t{i + 1}: {cards or EMPTY}")

        # Debug mode
        if debug:
            lines.append("")
            lines.append("--- Debug Info ---")
            stock = ", ".join(format_card(c.face_up_copy()) for c in reversed(state.stock))
            lines.append(f"Stock (top first): [{stock}]")
            hidden = sum(1 for col in state.tableau for c in col if not c.face_up)
            lines.append(f"Face-down tableau cards: {hidden}")

        return "\n".join(lines)


class MovePresenter:
    """Presents legal moves as hints."""

    def present(self, moves: list[Move], state: GameState, limit: int = 5) -> str:
        """List up to ``limit`` moves in human-readable form."""
        if not moves:
            if state.stock or state.waste:
                return "No card moves available. Try drawing [d]."
            return "No legal moves available."

        options = [f"[{i + 1}] {move}" for i, move in enumerate(moves[:limit])]
        more = f" (+{len(moves) - limit} more)" if len(moves) > limit else ""
        return "Hints: " + "  ".join(options) + more
