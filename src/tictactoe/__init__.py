"""Tic-tac-toe package exposing game rules, the input controller, and the web application."""

from .controller import Direction, InteractionController
from .game import CellOccupied, GameOver, GameState, InvalidIndex, Outcome
from .ui import app

__all__ = [
    "CellOccupied",
    "Direction",
    "GameOver",
    "GameState",
    "InteractionController",
    "InvalidIndex",
    "Outcome",
    "app",
]
