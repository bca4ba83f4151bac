"""Terminal front end for playing solitaire."""

from solitaire.playtest.display import StateRenderer, MovePresenter, format_card
from solitaire.playtest.rules import RuleExplainer
from solitaire.playtest.input import CommandParser, Command, CommandType, parse_pile
from solitaire.playtest.session import PlaytestSession, SessionConfig, PlaytestResult

__all__ = [
    "StateRenderer",
    "MovePresenter",
    "format_card",
    "RuleExplainer",
    "CommandParser",
    "Command",
    "CommandType",
    "parse_pile",
    "PlaytestSession",
    "SessionConfig",
    "PlaytestResult",
]
