"""Rule explanation for each variant."""

from __future__ import annotations

from solitaire.simulation.state import VariantRules


class RuleExplainer:
    """Explains variant rules in a few lines."""

    def explain_rules(self, rules: VariantRules, draw_count: int = 1) -> str:
        """Generate condensed rule summary."""
        lines: list[str] = []

        name = rules.variant.value.capitalize()
        lines.append(f"=== {name} ===")
        lines.append("")
        lines.append("Goal: Build all four foundations from Ace to King by suit")
        lines.append(f"Setup: {self._explain_setup(rules)}")
        lines.append("Columns: Build down in alternating colors")
        lines.append(f"Empty columns: {self._explain_empty_column(rules)}")

        if rules.uses_stock:
            lines.append(f"Stock: Draw {draw_count} at a time, unlimited passes")
        if rules.free_cells:
            lines.append(f"Free cells: {rules.free_cells}, one card each")
        if rules.supermove_limit:
            lines.append("Runs: Move up to (empty cells + 1) x 2^(empty columns) cards at once")

        return "\n".join(lines)

    def _explain_setup(self, rules: VariantRules) -> str:
        if rules.uses_stock:
            return (f"{rules.tableau_columns} columns of 1 to {rules.tableau_columns} cards, "
                    "top card face-up; the rest form the stock")
        return f"All 52 cards dealt face-up into {rules.tableau_columns} columns"

    def _explain_empty_column(self, rules: VariantRules) -> str:
        if rules.empty_column_rank is None:
            return "Any card or run"
        return f"Only a {rules.empty_column_rank.name.capitalize()} or a run headed by one"
