"""SQLite repositories for persisted state."""

from __future__ import annotations

import json
import sqlite3
from typing import Any


class SnapshotRepository:
    """Key/value store for full state snapshots."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def save(self, key: str, payload: dict[str, Any]) -> None:
        self._connection.execute(
            """
            INSERT INTO snapshots (key, payload_json)
            VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET
                payload_json = excluded.payload_json,
                updated_at = CURRENT_TIMESTAMP
            """,
            (key, json.dumps(payload, ensure_ascii=False)),
        )
        self._connection.commit()

    def load_raw(self, key: str) -> str | None:
        row = self._connection.execute(
            "SELECT payload_json FROM snapshots WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return str(row["payload_json"])

    def delete(self, key: str) -> None:
        self._connection.execute("DELETE FROM snapshots WHERE key = ?", (key,))
        self._connection.commit()
