from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Board,
    Cell,
    EventRecorder,
    GameConfig,
    GameEvent,
    GameOver,
    OrbTransit,
    event_name,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)


class GameSession:
    """The one board this process serves, with the events it has emitted since the last request.

    Board is not reentrant; every route goes through the lock because the dev
    server handles requests on several threads.
    """

    def __init__(self, config: GameConfig) -> None:
        self.lock = threading.Lock()
        self.recorder = EventRecorder()
        self.config = config
        self.board = Board(config.width, config.height, config.num_players, sink=self.recorder)

    def restart(self, config: GameConfig) -> None:
        self.config = config
        self.recorder.drain()
        self.board = Board(config.width, config.height, config.num_players, sink=self.recorder)


session = GameSession(GameConfig.from_env())


# ---------- JSON conversion ----------

def cell_to_json(cell: Cell) -> Dict[str, Any]:
    return {"orbs": int(cell.orb_count), "owner": int(cell.owner_id), "capacity": int(cell.capacity)}


def transit_to_json(t: OrbTransit) -> Dict[str, Any]:
    return {"from": [t.from_row, t.from_col], "to": [t.to_row, t.to_col], "player": t.player_id}


def event_to_json(e: GameEvent) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": event_name(e)}
    if isinstance(e, GameOver):
        out["winner"] = e.winner
    return out


def state_to_json(b: Board) -> Dict[str, Any]:
    return {
        "width": int(b.width),
        "height": int(b.height),
        "numPlayers": int(b.num_players),
        "currentPlayer": int(b.current_player),
        "moveCount": int(b.move_count),
        "gameOver": bool(b.game_over),
        "winner": b.winner,
        "scores": [b.get_player_score(p) for p in b.players()],
        "cells": [[cell_to_json(cell) for cell in row] for row in b.cells],
    }


def _json_object() -> Optional[Dict[str, Any]]:
    """The request's JSON body as a dict ({} when absent); None when it is some other JSON value."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _strict_int(value: Any, name: str) -> int:
    # bool is an int subclass; floats would truncate silently
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def _optional_int(body: Dict[str, Any], key: str) -> Optional[int]:
    value = body.get(key)
    if value is None:
        return None
    return _strict_int(value, key)


def _parse_move(body: Dict[str, Any]) -> Tuple[int, int]:
    mv = body.get("move")
    if not isinstance(mv, (list, tuple)) or len(mv) != 2:
        raise ValueError("move must be [row, col]")
    return _strict_int(mv[0], "row"), _strict_int(mv[1], "col")


def _legal_json(b: Board) -> List[List[int]]:
    return [[r, c] for (r, c) in b.legal_moves()]


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_object()
    if body is None:
        return jsonify({"ok": False, "error": "body must be a JSON object"}), 400
    try:
        config = session.config.with_overrides(
            width=_optional_int(body, "width"),
            height=_optional_int(body, "height"),
            num_players=_optional_int(body, "players"),
        )
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad config: {e}"}), 400
    with session.lock:
        session.restart(config)
        logger.info("New %dx%d game for %d players", config.width, config.height, config.num_players)
        return jsonify({"ok": True, "state": state_to_json(session.board), "legalMoves": _legal_json(session.board)})


@app.get("/api/state")
def api_state() -> Any:
    with session.lock:
        return jsonify({"ok": True, "state": state_to_json(session.board)})


@app.get("/api/legal")
def api_legal() -> Any:
    with session.lock:
        return jsonify({"ok": True, "legalMoves": _legal_json(session.board)})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_object()
    if body is None:
        return jsonify({"ok": False, "error": "body must be a JSON object"}), 400
    try:
        row, col = _parse_move(body)
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    with session.lock:
        board = session.board
        if not board.make_move(row, col):
            error = "Game is over" if board.is_game_over() else "Illegal move"
            return jsonify({
                "ok": False,
                "error": error,
                "state": state_to_json(board),
                "legalMoves": _legal_json(board),
            }), 400
        events = session.recorder.drain()
        return jsonify({
            "ok": True,
            "state": state_to_json(board),
            "events": [event_to_json(e) for e in events],
            "transits": [transit_to_json(t) for t in board.last_transits],
            "explosions": board.last_explosions,
            "legalMoves": _legal_json(board),
        })


@app.post("/api/reset")
def api_reset() -> Any:
    with session.lock:
        session.board.reset()
        events = session.recorder.drain()
        return jsonify({
            "ok": True,
            "state": state_to_json(session.board),
            "events": [event_to_json(e) for e in events],
        })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if os.getenv("CHAIN_REACTION_DEBUG") else logging.INFO)
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
