"""FastAPI-powered web UI for playing tic-tac-toe on one device."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .controller import Direction, InteractionController
from .game import BOARD_CELLS, EMPTY, GameState

logger = logging.getLogger(__name__)


@dataclass
class SessionView:
    """Display adapter and message surface backed by plain fields.

    The browser repaints from these fields, so every directive from the
    controller just updates the view model.
    """

    cells: List[str] = field(default_factory=lambda: [EMPTY] * BOARD_CELLS)
    enabled: bool = True
    focus: Optional[int] = None
    line: List[int] = field(default_factory=list)
    status: str = ""
    message: str = ""

    # DisplayAdapter
    def render(self, cells: Sequence[str]) -> None:
        self.cells = list(cells)

    def mark_cell(self, index: int, mark: str) -> None:
        self.cells[index] = mark

    def disable_cells(self) -> None:
        self.enabled = False

    def enable_cells(self) -> None:
        self.enabled = True

    def focus_cell(self, index: int) -> None:
        self.focus = index

    def highlight_line(self, line: Sequence[int]) -> None:
        self.line = list(line)

    # MessageSurface
    def show_status(self, text: str) -> None:
        self.status = text

    def show_message(self, text: str) -> None:
        self.message = text

    def clear_message(self) -> None:
        self.message = ""


@dataclass
class GameSession:
    """Container for one game, its controller and the view it drives."""

    controller: InteractionController
    view: SessionView
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Tic-Tac-Toe", description="Two-player tic-tac-toe on one device")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    keyboard: bool = Field(
        default=True,
        description="Enable the keyboard focus cursor",
    )


class SelectRequest(BaseModel):
    """Pointer selection of a cell; range is checked by the game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", strict=True)


class FocusRequest(BaseModel):
    direction: Direction


def _create_session(keyboard: bool) -> tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    view = SessionView()
    controller = InteractionController(GameState(), view, view, keyboard=keyboard)
    controller.start()
    session = GameSession(controller=controller, view=view)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info(f"Created game {session_id} (keyboard={keyboard})")
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        state = session.controller.state
        view = session.view
        outcome = state.outcome if state.over else None
        return {
            "id": game_id,
            "cells": list(view.cells),
            "currentPlayer": state.current_player,
            "over": state.over,
            "winner": outcome.winner if outcome else None,
            "drawn": bool(outcome and outcome.drawn),
            "winningLine": list(view.line),
            "enabled": view.enabled,
            "focus": view.focus,
            "status": view.status,
            "message": view.message,
            "keyboard": session.controller.keyboard,
        }


def _keyboard_event(session: GameSession, handler, *args) -> None:
    with session.lock:
        try:
            handler(*args)
        except RuntimeError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/game")
def create_game(request: Optional[NewGameRequest] = None) -> Dict[str, object]:
    keyboard = request.keyboard if request is not None else True
    game_id, session = _create_session(keyboard)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/select")
def select_cell(game_id: str, request: SelectRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.controller.on_cell_selected(request.cell_index)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/focus")
def move_focus(game_id: str, request: FocusRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _keyboard_event(session, session.controller.on_directional_input, request.direction)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/confirm")
def confirm_cell(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    _keyboard_event(session, session.controller.on_confirm)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.controller.on_reset()
    logger.info(f"Reset game {game_id}")
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(460px, 100%);
      }
      h1 {
        margin: 0 0 1rem;
        text-align: center;
        letter-spacing: 0.06em;
      }
      #status {
        text-align: center;
        font-size: 1.1rem;
        font-weight: 600;
        margin: 0 auto 0.5rem;
      }
      #message {
        text-align: center;
        min-height: 1.25rem;
        color: #b00020;
        font-weight: 600;
        margin-bottom: 1rem;
      }
      .board-grid {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        margin: 0 auto 1.25rem;
      }
      .cell {
        aspect-ratio: 1 / 1;
        font-size: clamp(2rem, 8vw, 3rem);
        font-weight: 700;
        background: rgba(255, 255, 255, 0.95);
        border: 2px solid rgba(80, 100, 160, 0.25);
        border-radius: 10px;
        cursor: pointer;
        font-family: inherit;
      }
      .cell.x {
        color: #f04a6a;
      }
      .cell.o {
        color: #3a7bff;
      }
      .cell.focused {
        outline: 3px solid #3a66ff;
        outline-offset: 2px;
      }
      .cell.winning {
        box-shadow: 0 0 0 3px rgba(58, 102, 255, 0.55);
      }
      .board-grid.disabled .cell {
        cursor: default;
        opacity: 0.6;
      }
      .controls {
        display: flex;
        justify-content: center;
      }
      .controls button {
        font-size: 1rem;
        padding: 0.55rem 0.95rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: white;
        cursor: pointer;
        font-family: inherit;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic-Tac-Toe</h1>
      <div id=\"status\">Setting up your game…</div>
      <div id=\"message\" role=\"status\"></div>
      <div id=\"board\" class=\"board-grid\" role=\"grid\" tabindex=\"0\"></div>
      <div class=\"controls\">
        <button id=\"restart\" type=\"button\">Restart</button>
      </div>
    </main>
    <script>
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const messageEl = document.getElementById('message');
      const restartButton = document.getElementById('restart');
      const keys = { ArrowUp: 'up', ArrowDown: 'down', ArrowLeft: 'left', ArrowRight: 'right' };

      let gameId = null;
      let isRequestPending = false;
      const cellEls = [];

      function createBoard() {
        for (let i = 0; i < 9; i++) {
          const cell = document.createElement('button');
          cell.type = 'button';
          cell.className = 'cell';
          cell.setAttribute('aria-label', `Cell ${i + 1}`);
          cell.addEventListener('click', () => post(`/api/game/${gameId}/select`, { cellIndex: i }));
          boardEl.appendChild(cell);
          cellEls.push(cell);
        }
      }

      function render(state) {
        gameId = state.id;
        state.cells.forEach((value, i) => {
          const cell = cellEls[i];
          cell.textContent = value;
          cell.classList.toggle('x', value === 'X');
          cell.classList.toggle('o', value === 'O');
          cell.classList.toggle('focused', state.focus === i);
          cell.classList.toggle('winning', state.winningLine.includes(i));
        });
        boardEl.classList.toggle('disabled', !state.enabled);
        statusEl.textContent = state.status;
        messageEl.textContent = state.message;
        if (state.keyboard && state.focus !== null) {
          cellEls[state.focus].focus();
        }
      }

      async function post(url, body) {
        if (isRequestPending) return;
        isRequestPending = true;
        try {
          const response = await fetch(url, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: body === undefined ? undefined : JSON.stringify(body),
          });
          const payload = await response.json();
          if (!response.ok) {
            messageEl.textContent = payload?.detail || 'Request failed';
            return;
          }
          render(payload);
        } catch (error) {
          messageEl.textContent = 'Network error. Please try again.';
        } finally {
          isRequestPending = false;
        }
      }

      boardEl.addEventListener('keydown', (event) => {
        if (!gameId) return;
        if (keys[event.key]) {
          event.preventDefault();
          post(`/api/game/${gameId}/focus`, { direction: keys[event.key] });
        } else if (event.key === 'Enter' || event.key === ' ') {
          event.preventDefault();
          post(`/api/game/${gameId}/confirm`);
        }
      });
      restartButton.addEventListener('click', () => post(`/api/game/${gameId}/reset`));

      createBoard();
      post('/api/game', { keyboard: true });
    </script>
  </body>
</html>
"""
