"""SQLite storage for the saved Deck of Fate reading history."""

import json
import logging
import sqlite3

from malazan.config import Config
from malazan.models import FateCard, Reading

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS readings (
    id TEXT PRIMARY KEY,
    ordinal INTEGER NOT NULL,
    timestamp TEXT NOT NULL,
    cards TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_readings_ordinal ON readings(ordinal);
"""


class ReadingStore:
    """SQLite wrapper holding the most-recent reading list."""

    def __init__(self, config: Config) -> None:
        self.db_path = config.resolved_db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Database not initialized. Call init_db() first.")
        return self._conn

    def init_db(self) -> None:
        """Create database and tables."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(SCHEMA_SQL)
        logger.info("Database initialized at %s", self.db_path)

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def list_readings(self) -> list[Reading]:
        """Saved readings, newest first."""
        rows = self.conn.execute(
            "SELECT id, timestamp, cards FROM readings ORDER BY ordinal"
        ).fetchall()
        return [
            Reading(
                id=r["id"],
                timestamp=r["timestamp"],
                cards=[FateCard(**c) for c in json.loads(r["cards"])],
            )
            for r in rows
        ]

    def replace_readings(self, readings: list[Reading]) -> None:
        """Overwrite the whole stored list with readings, in order."""
        with self.conn:
            self.conn.execute("DELETE FROM readings")
            self.conn.executemany(
                "INSERT INTO readings (id, ordinal, timestamp, cards) VALUES (?, ?, ?, ?)",
                [
                    (
                        r.id,
                        i,
                        r.timestamp,
                        json.dumps([c.model_dump() for c in r.cards]),
                    )
                    for i, r in enumerate(readings)
                ],
            )

    def clear(self) -> None:
        self.replace_readings([])
