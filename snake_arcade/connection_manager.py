"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket

from .game import GameState
from .grid import cells_to_list

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.connections.add(ws)

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception:
                logger.debug("Dropping connection after failed send", exc_info=True)
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def build_welcome_msg(game: GameState) -> str:
    snap = game.snapshot()
    return json.dumps({
        "type": "welcome",
        "grid": snap["grid"],
        "cell_size": snap["cell_size"],
        "high_score": game.high_score,
    })


def build_state_msg(game: GameState) -> str:
    snap = game.snapshot()
    return json.dumps({
        "type": "state",
        "grid": snap["grid"],
        "cell_size": snap["cell_size"],
        "snake": cells_to_list(snap["snake"]),
        "food": list(snap["food"]) if snap["food"] is not None else None,
        "heading": list(snap["heading"]),
        "score": snap["score"],
        "high_score": snap["high_score"],
        "speed": snap["speed"],
        "phase": snap["phase"],
        "show_restart": snap["show_restart"],
        "won": snap["won"],
    })


def build_game_over_msg(game: GameState) -> str:
    return json.dumps({
        "type": "game_over",
        "score": game.score,
        "high_score": game.high_score,
        "reason": game.crash_reason,
        "won": game.won,
    })


def build_error_msg(detail: str) -> str:
    return json.dumps({"type": "error", "detail": detail})
