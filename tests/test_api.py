"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tictactoe.ui import app


client = TestClient(app)


def _new_game(**payload):
    response = client.post("/api/game", json=payload)
    assert response.status_code == 200
    return response.json()


def _select(game_id, index):
    response = client.post(f"/api/game/{game_id}/select", json={"cellIndex": index})
    assert response.status_code == 200
    return response.json()


def test_create_game_returns_fresh_board():
    state = _new_game()
    assert state["cells"] == [""] * 9
    assert state["currentPlayer"] == "X"
    assert state["over"] is False
    assert state["enabled"] is True
    assert state["focus"] == 0
    assert state["status"] == "Turn: X"
    assert state["message"] == ""
    assert state["keyboard"] is True


def test_create_game_without_body():
    response = client.post("/api/game")
    assert response.status_code == 200
    assert response.json()["keyboard"] is True


def test_select_cell_and_reject_duplicate():
    game_id = _new_game()["id"]
    state = _select(game_id, 0)
    assert state["cells"][0] == "X"
    assert state["currentPlayer"] == "O"
    assert state["status"] == "Turn: O"

    duplicate = _select(game_id, 0)
    assert duplicate["message"] == "That square is already taken!"
    assert duplicate["currentPlayer"] == "O"
    assert duplicate["cells"] == state["cells"]


def test_out_of_range_cell_is_advisory():
    game_id = _new_game()["id"]
    state = _select(game_id, 9)
    assert state["message"] == "Pick a square between 1 and 9."
    assert state["cells"] == [""] * 9


def test_non_integer_cell_is_rejected():
    game_id = _new_game()["id"]
    response = client.post(f"/api/game/{game_id}/select", json={"cellIndex": "two"})
    assert response.status_code == 422


def test_win_then_game_over():
    game_id = _new_game()["id"]
    for index in (0, 3, 1, 4):
        _select(game_id, index)
    state = _select(game_id, 2)
    assert state["over"] is True
    assert state["winner"] == "X"
    assert state["drawn"] is False
    assert state["winningLine"] == [0, 1, 2]
    assert state["enabled"] is False
    assert state["status"] == "Result: X wins"

    after = _select(game_id, 5)
    assert after["message"] == "Game over. Press Restart to play again."
    assert after["cells"][5] == ""


def test_draw_game():
    game_id = _new_game()["id"]
    for index in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        state = _select(game_id, index)
    assert state["over"] is True
    assert state["drawn"] is True
    assert state["winner"] is None
    assert state["status"] == "Result: Draw (tie)"


def test_keyboard_focus_and_confirm():
    game_id = _new_game()["id"]
    response = client.post(f"/api/game/{game_id}/focus", json={"direction": "down"})
    assert response.status_code == 200
    assert response.json()["focus"] == 3

    response = client.post(f"/api/game/{game_id}/focus", json={"direction": "right"})
    assert response.json()["focus"] == 4

    response = client.post(f"/api/game/{game_id}/confirm")
    assert response.status_code == 200
    state = response.json()
    assert state["cells"][4] == "X"
    assert state["currentPlayer"] == "O"


def test_unknown_direction_is_rejected():
    game_id = _new_game()["id"]
    response = client.post(f"/api/game/{game_id}/focus", json={"direction": "diagonal"})
    assert response.status_code == 422


def test_pointer_only_game_rejects_keyboard_events():
    state = _new_game(keyboard=False)
    assert state["focus"] is None
    game_id = state["id"]
    response = client.post(f"/api/game/{game_id}/focus", json={"direction": "up"})
    assert response.status_code == 400
    assert response.json()["detail"]
    response = client.post(f"/api/game/{game_id}/confirm")
    assert response.status_code == 400


def test_reset_clears_finished_game():
    game_id = _new_game()["id"]
    for index in (0, 3, 1, 4, 2):
        _select(game_id, index)
    response = client.post(f"/api/game/{game_id}/reset")
    assert response.status_code == 200
    state = response.json()
    assert state["cells"] == [""] * 9
    assert state["over"] is False
    assert state["enabled"] is True
    assert state["winningLine"] == []
    assert state["focus"] == 0
    assert state["status"] == "Turn: X"


def test_games_do_not_share_state():
    first = _new_game()["id"]
    second = _new_game()["id"]
    _select(first, 4)
    state = client.get(f"/api/game/{second}").json()
    assert state["cells"] == [""] * 9


def test_missing_game_returns_404():
    response = client.get("/api/game/missing")
    assert response.status_code == 404
    response = client.post("/api/game/missing/select", json={"cellIndex": 0})
    assert response.status_code == 404


def test_index_serves_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "Tic-Tac-Toe" in response.text
