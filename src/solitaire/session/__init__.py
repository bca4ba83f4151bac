"""Stateful engine boundary for renderers and input layers."""

from solitaire.session.config import GameConfig
from solitaire.session.game import SolitaireGame

__all__ = [
    "GameConfig",
    "SolitaireGame",
]
