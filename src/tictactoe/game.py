"""Core rules for two-player tic-tac-toe on a fixed 3x3 grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Player = str  # "X" or "O"

EMPTY = ""
FIRST_PLAYER: Player = "X"
SECOND_PLAYER: Player = "O"
BOARD_CELLS = 9

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


# ---------- Errors ----------


class MoveError(ValueError):
    """Base class for rejected moves; the message is safe to show to players."""

    advisory = "That move is not allowed."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.advisory)


class InvalidIndex(MoveError):
    advisory = "Pick a square between 1 and 9."


class GameOver(MoveError):
    advisory = "Game over. Press Restart to play again."


class CellOccupied(MoveError):
    advisory = "That square is already taken!"


# ---------- Outcome ----------


@dataclass(frozen=True)
class Outcome:
    """Result of a finished game: a winner with its line, or a draw."""

    winner: Optional[Player] = None
    line: Tuple[int, ...] = ()
    drawn: bool = False

    @classmethod
    def win(cls, player: Player, line: Sequence[int]) -> "Outcome":
        return cls(winner=player, line=tuple(line))

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(drawn=True)


def other_player(player: Player) -> Player:
    return SECOND_PLAYER if player == FIRST_PLAYER else FIRST_PLAYER


def winning_line(board: Sequence[str]) -> Optional[Tuple[int, int, int]]:
    """Return the first completed triple on ``board`` or ``None``."""
    for a, b, c in WINNING_LINES:
        v = board[a]
        if v != EMPTY and v == board[b] == board[c]:
            return (a, b, c)
    return None


def detect_outcome(board: Sequence[str]) -> Optional[Outcome]:
    """
    Classify ``board`` without touching it.

    A completed triple wins even when it fills the last square, so the
    win check has to run before the full-board check.
    """
    line = winning_line(board)
    if line is not None:
        return Outcome.win(board[line[0]], line)
    if all(c != EMPTY for c in board):
        return Outcome.draw()
    return None


# ---------- Game ----------


def _empty_board() -> List[str]:
    return [EMPTY] * BOARD_CELLS


@dataclass
class GameState:
    board: List[str] = field(default_factory=_empty_board)
    current_player: Player = FIRST_PLAYER
    over: bool = False

    # ---- API used by the controller ----

    def apply_move(self, index: int) -> Optional[Outcome]:
        """Place the current player's mark at ``index``.

        Returns the outcome when the move ends the game, otherwise ``None``
        after handing the turn to the other player. Rejected moves raise a
        :class:`MoveError` subclass and leave the state untouched.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndex()
        if not 0 <= index < BOARD_CELLS:
            raise InvalidIndex()
        if self.over:
            raise GameOver()
        if self.board[index] != EMPTY:
            raise CellOccupied()

        player = self.current_player
        self.board[index] = player
        logger.debug(f"{player} played cell {index}")
        outcome = detect_outcome(self.board)
        if outcome is not None:
            self.over = True
            return outcome

        self.current_player = other_player(player)
        return None

    def reset(self) -> None:
        self.board, self.current_player, self.over = (
            _empty_board(),
            FIRST_PLAYER,
            False,
        )

    @property
    def outcome(self) -> Optional[Outcome]:
        return detect_outcome(self.board)

    def snapshot(self) -> List[str]:
        return list(self.board)

    def empty_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.board) if c == EMPTY]
