"""Audit trail of tournament changes and rejected operations."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from pathlib import Path

from scorer.db.database import get_connection

CHECK_IN = "CHECK_IN"
REMOVE_PLAYER = "REMOVE_PLAYER"
START_TOURNAMENT = "START_TOURNAMENT"
ELIMINATE = "ELIMINATE"
ELIMINATE_AT = "ELIMINATE_AT"
EDIT_RANK = "EDIT_RANK"
REMOVE_SCORE = "REMOVE_SCORE"
CLEAR_ALL = "CLEAR_ALL"
EXPORT_FILE = "EXPORT_FILE"
ERROR = "ERROR"

EVENT_TYPES = [
    CHECK_IN,
    REMOVE_PLAYER,
    START_TOURNAMENT,
    ELIMINATE,
    ELIMINATE_AT,
    EDIT_RANK,
    REMOVE_SCORE,
    CLEAR_ALL,
    EXPORT_FILE,
    ERROR,
]


@dataclass(frozen=True)
class AuditEvent:
    id: int
    event_type: str
    title: str
    details: str
    level: str
    context: dict[str, object]
    created_at: str

    @property
    def player(self) -> str:
        return str(self.context.get("player") or "")

    @property
    def rank_change(self) -> str:
        """``"old -> new"`` for rank edits, the single rank otherwise, or ``""``."""
        old_rank = self.context.get("old_rank")
        rank = self.context.get("rank")
        if old_rank is not None and rank is not None:
            return f"{old_rank} -> {rank}"
        if rank is not None:
            return str(rank)
        if old_rank is not None:
            return f"{old_rank} -> -"
        return ""


class AuditLogService:
    def __init__(self, connection: sqlite3.Connection | None = None) -> None:
        self._connection = connection or get_connection()

    def log_event(
        self,
        event_type: str,
        title: str,
        details: str,
        level: str = "info",
        context: dict[str, object] | None = None,
    ) -> int:
        context_json = json.dumps(context or {}, ensure_ascii=False)
        with self._connection:
            cursor = self._connection.execute(
                """
                INSERT INTO audit_log (event_type, title, details, level, context_json)
                VALUES (?, ?, ?, ?, ?)
                """,
                (event_type, title, details, level, context_json),
            )
        return int(cursor.lastrowid)

    def list_events(
        self,
        event_type: str | None = None,
        query: str = "",
        player: str | None = None,
    ) -> list[AuditEvent]:
        """Newest first. ``player`` matches the event's player case-insensitively."""
        clauses: list[str] = []
        params: list[object] = []

        if event_type:
            clauses.append("event_type = ?")
            params.append(event_type)

        text = query.strip()
        if text:
            clauses.append("(title LIKE ? OR details LIKE ?)")
            params.extend([f"%{text}%", f"%{text}%"])

        where_sql = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._connection.execute(
            f"""
            SELECT id, event_type, title, details, level, context_json, created_at
            FROM audit_log
            {where_sql}
            ORDER BY id DESC
            """,
            params,
        ).fetchall()
        events = [self._row_to_event(row) for row in rows]

        if player and player.strip():
            key = player.strip().casefold()
            events = [event for event in events if event.player.casefold() == key]
        return events

    def player_names(self) -> list[str]:
        """Every player mentioned in the log, sorted case-insensitively."""
        names: dict[str, str] = {}
        for event in self.list_events():
            if event.player:
                names.setdefault(event.player.casefold(), event.player)
        return sorted(names.values(), key=str.casefold)

    def export_txt(
        self,
        path: str | Path,
        event_type: str | None = None,
        query: str = "",
        player: str | None = None,
    ) -> Path:
        output_path = Path(path)
        lines = []
        for event in self.list_events(event_type=event_type, query=query, player=player):
            line = f"[{event.created_at}] {event.level.upper()} {event.event_type}"
            if event.player:
                line += f" | {event.player}"
            if event.rank_change:
                line += f" | rank {event.rank_change}"
            lines.append(f"{line} | {event.title} | {event.details}")
        output_path.write_text("\n".join(lines), encoding="utf-8")
        return output_path

    @staticmethod
    def _row_to_event(row: sqlite3.Row) -> AuditEvent:
        try:
            context = json.loads(row["context_json"] or "{}")
        except json.JSONDecodeError:
            context = {}
        if not isinstance(context, dict):
            context = {}

        return AuditEvent(
            id=int(row["id"]),
            event_type=str(row["event_type"]),
            title=str(row["title"]),
            details=str(row["details"] or ""),
            level=str(row["level"] or "info"),
            context=context,
            created_at=str(row["created_at"]),
        )
