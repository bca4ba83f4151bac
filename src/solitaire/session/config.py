"""Game configuration."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from solitaire.cards.schema import Variant
from solitaire.simulation.deal import VALID_DRAW_COUNTS


@dataclass
class GameConfig:
    """Configuration for one game."""

    variant: Variant = Variant.KLONDIKE
    draw_count: int = 1
    seed: Optional[int] = None
    # Run the foundation auto-solver after every successful move
    auto_solve: bool = False

    def __post_init__(self):
        """Validate draw mode and generate seed if not provided."""
        if self.draw_count not in VALID_DRAW_COUNTS:
            raise ValueError(f"draw_count must be 1 or 3, got {self.draw_count}")
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)
