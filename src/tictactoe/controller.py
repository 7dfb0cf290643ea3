"""Maps pointer and keyboard input onto a :class:`GameState`."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Protocol, Sequence

from .game import FIRST_PLAYER, GameState, MoveError, Outcome

logger = logging.getLogger(__name__)

GRID_SIZE = 3


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class DisplayAdapter(Protocol):
    """Paints cells; keeps its own index-to-element mapping."""

    def render(self, cells: Sequence[str]) -> None: ...

    def mark_cell(self, index: int, mark: str) -> None: ...

    def disable_cells(self) -> None: ...

    def enable_cells(self) -> None: ...

    def focus_cell(self, index: int) -> None: ...

    def highlight_line(self, line: Sequence[int]) -> None: ...


class MessageSurface(Protocol):
    """Status line (turn/result) plus a transient advisory message."""

    def show_status(self, text: str) -> None: ...

    def show_message(self, text: str) -> None: ...

    def clear_message(self) -> None: ...


def move_focus(direction: Direction, index: int) -> int:
    """Neighbour of ``index`` in ``direction``; stays put at the grid edge."""
    row, col = divmod(index, GRID_SIZE)
    if direction is Direction.UP and row > 0:
        return index - GRID_SIZE
    if direction is Direction.DOWN and row < GRID_SIZE - 1:
        return index + GRID_SIZE
    if direction is Direction.LEFT and col > 0:
        return index - 1
    if direction is Direction.RIGHT and col < GRID_SIZE - 1:
        return index + 1
    return index


def turn_text(player: str) -> str:
    return f"Turn: {player}"


def result_text(outcome: Outcome) -> str:
    if outcome.winner:
        return f"Result: {outcome.winner} wins"
    return "Result: Draw (tie)"


class InteractionController:
    """
    Bridges input events to the game and drives the display and messages.

    Every event runs to completion (move, outcome check, display update)
    before returning. Keyboard support is optional; without it there is
    no focus cursor and directional/confirm events are rejected.
    """

    def __init__(
        self,
        state: GameState,
        display: DisplayAdapter,
        messages: MessageSurface,
        keyboard: bool = True,
    ) -> None:
        self.state = state
        self.display = display
        self.messages = messages
        self.keyboard = keyboard
        self.focus: Optional[int] = 0 if keyboard else None

    def start(self) -> None:
        self.on_reset()

    # ---- input events ----

    def on_cell_selected(self, index: int) -> Optional[Outcome]:
        try:
            outcome = self.state.apply_move(index)
        except MoveError as exc:
            logger.info(f"Rejected move at {index!r}: {exc}")
            self.messages.show_message(str(exc))
            return None

        self.display.mark_cell(index, self.state.board[index])
        if self.keyboard:
            self.focus = index
            self.display.focus_cell(index)

        if outcome is None:
            self.messages.show_status(turn_text(self.state.current_player))
            self.messages.clear_message()
            return None

        logger.info(result_text(outcome))
        self.messages.show_status(result_text(outcome))
        self.messages.clear_message()
        self.display.highlight_line(outcome.line)
        self.display.disable_cells()
        return outcome

    def on_directional_input(self, direction: Direction) -> int:
        self._require_keyboard()
        direction = Direction(direction)
        self.focus = move_focus(direction, self.focus)
        logger.debug(f"Focus moved {direction.value} to {self.focus}")
        self.display.focus_cell(self.focus)
        return self.focus

    def on_confirm(self) -> Optional[Outcome]:
        self._require_keyboard()
        return self.on_cell_selected(self.focus)

    def on_reset(self) -> None:
        self.state.reset()
        self.display.render(self.state.snapshot())
        self.display.highlight_line(())
        self.messages.show_status(turn_text(FIRST_PLAYER))
        self.messages.clear_message()
        self.display.enable_cells()
        if self.keyboard:
            self.focus = 0
            self.display.focus_cell(0)

    def _require_keyboard(self) -> None:
        if not self.keyboard:
            raise RuntimeError("Keyboard navigation is not enabled for this game")
