"""Interactive terminal session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from solitaire.session.config import GameConfig
from solitaire.session.game import SolitaireGame
from solitaire.simulation.moves import InvalidLocationError
from solitaire.simulation.movegen import generate_legal_moves
from solitaire.playtest.display import StateRenderer, MovePresenter
from solitaire.playtest.rules import RuleExplainer
from solitaire.playtest.input import CommandParser, CommandType, HELP

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Configuration for a terminal session."""

    debug: bool = False
    show_rules: bool = True
    max_commands: int = 10_000


@dataclass
class PlaytestResult:
    """Outcome of a terminal session."""

    variant: str
    seed: int
    won: bool
    moves: int
    score: int
    quit_early: bool = False


_REASON_TEXT = {
    "invalid_sequence": "Those cards cannot be lifted together.",
    "supermove_capacity_exceeded": "Not enough free cells or empty columns for that many cards.",
    "destination_rule_violation": "That move is not allowed there.",
    "empty_source": "There is no card there.",
}


class PlaytestSession:
    """Drives a SolitaireGame from typed commands."""

    def __init__(self, game_config: GameConfig, config: SessionConfig):
        """Initialize session."""
        self.config = config
        self.game = SolitaireGame(game_config)
        self.renderer = StateRenderer()
        self.presenter = MovePresenter()
        self.explainer = RuleExplainer()
        self.parser = CommandParser()
        self.won = False
        self.game.on_win(self._handle_win)

    def _handle_win(self, state) -> None:
        self.won = True

    def run(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> PlaytestResult:
        """Run the session until the game is won or the player quits.

        Args:
            input_fn: Function to read a line (default: input)
            output_fn: Function to output text (default: print)

        Returns:
            PlaytestResult with the game outcome
        """
        if self.config.show_rules:
            state = self.game.snapshot()
            output_fn(self.explainer.explain_rules(state.rules, state.draw_count))
            output_fn("")
            output_fn(HELP)
            output_fn(f"Seed: {self.game.config.seed} (use --seed {self.game.config.seed} to replay)")

        quit_early = False
        for _ in range(self.config.max_commands):
            output_fn("")
            output_fn(self.renderer.render(self.game.snapshot(), self.config.debug))

            if self.won:
                output_fn("\n=== You Win! ===")
                break

            try:
                raw = input_fn("> ")
            except (EOFError, KeyboardInterrupt):
                quit_early = True
                break

            command = self.parser.parse(raw)
            if command.error:
                output_fn(command.error)
                continue
            if command.kind == CommandType.QUIT:
                quit_early = True
                break

            message = self._dispatch(command)
            if message:
                output_fn(message)

        state = self.game.snapshot()
        return PlaytestResult(
            variant=state.variant.value,
            seed=self.game.config.seed,
            won=self.won,
            moves=state.moves,
            score=state.score,
            quit_early=quit_early,
        )

    def _dispatch(self, command) -> str:
        """Apply one command and return feedback text (may be empty)."""
        if command.kind == CommandType.DRAW:
            return "" if self.game.draw() else "Nothing to draw."

        if command.kind == CommandType.AUTO:
            executed = self.game.request_auto_solve()
            return f"Moved {len(executed)} card(s) to the foundations."

        if command.kind == CommandType.HINT:
            state = self.game.snapshot()
            return self.presenter.present(generate_legal_moves(state), state)

        if command.kind == CommandType.NEW:
            self.won = False
            self.game.new_game()
            return f"New game, seed {self.game.config.seed}"

        if command.kind == CommandType.MODE:
            self.game.set_draw_count(command.draw_count)
            return f"Drawing {command.draw_count} at a time."

        try:
            if command.kind == CommandType.QUICK:
                result = self.game.quick_move(command.source)
            else:
                result = self.game.attempt_move(command.source, command.target)
        except InvalidLocationError as e:
            logger.debug(f"Bad pile reference: {e}")
            return f"No such pile: {e}"

        if result.ok:
            return ""
        return _REASON_TEXT[result.reason.value]
