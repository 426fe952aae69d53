"""FastAPI application — HTTP routes, WebSocket endpoint, game loop wiring."""

import asyncio
import json
import logging
import os

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse

from .config import load_settings
from .connection_manager import (
    ConnectionManager, build_error_msg, build_game_over_msg, build_state_msg, build_welcome_msg,
)
from .constants import DIRECTIONS
from .game import GameState
from .highscore import SQLiteStore
from .scheduler import Scheduler, TickDriver

logger = logging.getLogger(__name__)

settings = load_settings()
game = GameState()
manager = ConnectionManager()
driver: Optional[TickDriver] = None
_pending: set[asyncio.Task] = set()

HTML_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "index.html")


def _send_later(*messages: str):
    """Queue messages for broadcast without blocking the tick that produced them."""
    async def send():
        for message in messages:
            await manager.broadcast(message)

    task = asyncio.get_running_loop().create_task(send())
    _pending.add(task)
    task.add_done_callback(_pending.discard)


def on_tick(outcome: Optional[str]):
    if outcome is None:
        return
    messages = [build_state_msg(game)]
    if outcome in ("crashed", "won"):
        messages.append(build_game_over_msg(game))
    _send_later(*messages)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global driver
    store = SQLiteStore(settings.db_path)
    game.reset()
    game.use_store(store)
    driver = TickDriver(game, Scheduler(), on_tick=on_tick)
    logger.info("High score store at %s (best %d)", settings.db_path, game.high_score)
    try:
        yield
    finally:
        driver.close()
        driver = None
        store.close()


app = FastAPI(lifespan=lifespan)


@app.get("/")
async def serve_index():
    return FileResponse(HTML_PATH, media_type="text/html")


@app.get("/health")
async def health():
    return {"status": "ok", "phase": game.phase.value}


async def handle_message(ws: WebSocket, msg) -> None:
    if not isinstance(msg, dict):
        await manager.send_personal(ws, build_error_msg("message must be a JSON object"))
        return
    kind = msg.get("type")
    if kind == "start":
        if game.start():
            await manager.broadcast(build_state_msg(game))
    elif kind == "reset":
        game.reset()
        await manager.broadcast(build_state_msg(game))
    elif kind == "input":
        key = msg.get("key")
        direction = msg.get("direction")
        if isinstance(key, str):
            game.handle_key(key)
        elif isinstance(direction, str) and direction in DIRECTIONS:
            game.handle_input(direction)
        else:
            logger.warning("Bad input message %r", msg)
            await manager.send_personal(ws, build_error_msg("input needs a string key or a known direction"))
    else:
        logger.warning("Unknown message type %r", kind)
        await manager.send_personal(ws, build_error_msg(f"unknown message type: {kind!r}"))


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    try:
        await manager.send_personal(ws, build_welcome_msg(game))
        await manager.send_personal(ws, build_state_msg(game))
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Discarding malformed message: %.80r", raw)
                await manager.send_personal(ws, build_error_msg("invalid JSON"))
                continue
            await handle_message(ws, msg)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("Connection handler failed")
    finally:
        manager.disconnect(ws)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Snake server starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
