from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException

from civsim.commands import apply_command, is_mutating
from civsim.render_ascii import render_map_ascii
from civsim.snapshot import game_snapshot
from civsim.turn_engine import GameState
from scenarios.standard import build_game


app = FastAPI(title="Hex Civ Sim")

# game_id -> GameState. Games live only as long as the process.
GAMES: Dict[str, GameState] = {}


def _load_game(game_id: str) -> GameState:
    game = GAMES.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="No such game")
    return game


def _tail(lines: list[str], n: int = 50) -> list[str]:
    if n <= 0:
        return []
    return lines[-n:]


def _apply_command(game: GameState, viewer: str, command: str) -> list[str]:
    viewer = viewer.strip() or game.current_nation.name
    if game.get_nation_by_name(viewer) is None:
        raise HTTPException(status_code=400, detail=f"Unknown nation {viewer!r}")
    if is_mutating(command) and game.current_nation.name != viewer:
        raise HTTPException(status_code=403, detail="Not your turn")
    return apply_command(game, viewer, command)


def _ui_state(game_id: str, viewer: str) -> dict[str, Any]:
    game = _load_game(game_id)
    viewer_nation = game.get_nation_by_name(viewer) or game.current_nation

    return {
        "game_id": game_id,
        "viewer": viewer_nation.name,
        "active_nation": game.current_nation.name,
        "turn_number": game.turn_number,
        "map_text": render_map_ascii(game, viewer_nation),
        "log_tail": "\n".join(_tail(game.log, 60)),
        "snapshot": game_snapshot(game),
    }


@app.get("/games")
def list_games():
    return {"games": sorted(GAMES)}


@app.post("/games")
def create_game(payload: Optional[Dict[str, Any]] = None):
    seed = (payload or {}).get("seed")
    game_id = str(uuid.uuid4())
    GAMES[game_id] = build_game(seed=int(seed) if seed is not None else None)
    return {"game_id": game_id}


@app.get("/games/{game_id}/state")
def get_state(game_id: str, viewer: str = "Red"):
    return _ui_state(game_id, viewer)


@app.post("/games/{game_id}/command")
def post_command(game_id: str, payload: Dict[str, Any]):
    viewer = str(payload.get("viewer", ""))
    command = str(payload.get("command", ""))
    game = _load_game(game_id)

    out = _apply_command(game, viewer, command)
    return {"events": out, "state": _ui_state(game_id, viewer or game.current_nation.name)}
