"""Move-legality and game-state engine for Klondike and FreeCell."""

__version__ = "0.1.0"
