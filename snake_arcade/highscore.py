"""
Durable key/value storage for the best-ever score.
"""
import logging
import sqlite3
from typing import Optional

from .constants import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class MemoryStore:
    """Dict-backed store, lost when the process exits."""

    def __init__(self, initial: Optional[dict] = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value) -> None:
        self.values[key] = str(value)

    def close(self):
        pass


class SQLiteStore:
    def __init__(self, db_path="snake_arcade.db"):
        self.db_path = db_path
        self.conn = None
        self._init_db()

    def _init_db(self):
        """Open the database and create the settings table."""
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        cursor = self.conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')
        self.conn.commit()

    def get(self, key: str) -> Optional[str]:
        cursor = self.conn.cursor()
        cursor.execute('SELECT value FROM kv WHERE key = ?', (key,))
        row = cursor.fetchone()
        if row:
            return row[0]
        return None

    def set(self, key: str, value) -> None:
        cursor = self.conn.cursor()
        cursor.execute('''
            INSERT INTO kv (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                           updated_at = CURRENT_TIMESTAMP
        ''', (key, str(value)))
        self.conn.commit()

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None


def load_high_score(store) -> int:
    raw = store.get(HIGH_SCORE_KEY)
    if raw is None:
        return 0
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring unreadable high score %r", raw)
        return 0
    return max(0, value)


def save_high_score(store, score: int) -> None:
    store.set(HIGH_SCORE_KEY, score)
