"""Runtime settings read from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 8765
    db_path: str = "snake_arcade.db"
    log_level: str = "INFO"


def load_settings() -> Settings:
    load_dotenv()
    raw_port = os.getenv("SNAKE_PORT", "8765")
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"SNAKE_PORT must be an integer, got {raw_port!r}")
    if not 0 < port < 65536:
        raise ValueError(f"SNAKE_PORT out of range: {port}")
    return Settings(
        host=os.getenv("SNAKE_HOST", "0.0.0.0"),
        port=port,
        db_path=os.getenv("SNAKE_DB_PATH", "snake_arcade.db"),
        log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
    )
