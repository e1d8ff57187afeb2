from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Callable, TypeVar

from scorer.db.database import get_connection
from scorer.db.repositories import SnapshotRepository
from scorer.domain.errors import LedgerError
from scorer.domain.leaderboard import LeaderboardEntry, project, validate
from scorer.domain.ledger import EliminationLedger, PlayerRecord
from scorer.services.audit_log import (
    AuditLogService,
    CHECK_IN,
    CLEAR_ALL,
    EDIT_RANK,
    ELIMINATE,
    ERROR,
    ELIMINATE_AT,
    EXPORT_FILE,
    REMOVE_PLAYER,
    REMOVE_SCORE,
    START_TOURNAMENT,
)
from scorer.services.export_service import ExportService
from scorer.services.snapshot import ledger_to_snapshot, loads_snapshot

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "tournamentData"

T = TypeVar("T")


class TournamentService:
    """Owns one ledger and persists it after every successful mutation."""

    def __init__(
        self,
        connection: sqlite3.Connection | None = None,
        snapshot_key: str = DEFAULT_SNAPSHOT_KEY,
    ) -> None:
        self._connection = connection or get_connection()
        self._snapshots = SnapshotRepository(self._connection)
        self._audit_log = AuditLogService(self._connection)
        self._export_service = ExportService()
        self._snapshot_key = snapshot_key
        self._ledger = self._load()

    @property
    def ledger(self) -> EliminationLedger:
        return self._ledger

    @property
    def audit_log(self) -> AuditLogService:
        return self._audit_log

    # --- load / save boundary ---

    def _load(self) -> EliminationLedger:
        raw = self._snapshots.load_raw(self._snapshot_key)
        try:
            return loads_snapshot(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("Stored snapshot '%s' is unreadable, starting empty: %s", self._snapshot_key, exc)
            return EliminationLedger()

    def reload(self) -> EliminationLedger:
        self._ledger = self._load()
        return self._ledger

    def save(self) -> None:
        self._snapshots.save(self._snapshot_key, ledger_to_snapshot(self._ledger))

    # --- views ---

    def leaderboard(self) -> list[LeaderboardEntry]:
        return project(self._ledger)

    def issues(self) -> list[str]:
        return list(validate(self._ledger))

    # --- mutations ---

    def check_in(self, name: str) -> PlayerRecord:
        player = self._run("check-in", lambda: self._ledger.add_player(name))
        self._commit(
            CHECK_IN,
            "Player checked in",
            f"{player.name}; total players: {self._ledger.total_players}",
            {"player": player.name},
        )
        return player

    def remove_player(self, name: str) -> PlayerRecord:
        player = self._run("remove player", lambda: self._ledger.remove_player(name))
        self._commit(
            REMOVE_PLAYER,
            "Player removed",
            f"{player.name}; total players: {self._ledger.total_players}",
            {"player": player.name},
        )
        return player

    def start_tournament(self) -> None:
        self._run("start tournament", self._ledger.start)
        self._commit(
            START_TOURNAMENT,
            "Tournament started",
            f"Players: {self._ledger.total_players}",
            {"total_players": self._ledger.total_players},
        )

    def eliminate(self, name: str) -> PlayerRecord:
        player = self._run("eliminate", lambda: self._ledger.eliminate_next(name))
        self._commit(
            ELIMINATE,
            "Player eliminated",
            f"{player.name} -> rank {player.elimination_rank}",
            {"player": player.name, "rank": player.elimination_rank},
        )
        return player

    def eliminate_at(self, name: str, position: int | str) -> PlayerRecord:
        player = self._run(
            "eliminate at rank", lambda: self._ledger.eliminate_at_rank(name, position)
        )
        self._commit(
            ELIMINATE_AT,
            "Missed elimination inserted",
            f"{player.name} -> rank {player.elimination_rank}",
            {"player": player.name, "rank": player.elimination_rank},
        )
        return player

    def edit_rank(self, name: str, position: int | str) -> PlayerRecord:
        old_rank = self._current_rank(name)
        player = self._run("edit rank", lambda: self._ledger.move_rank(name, position))
        self._commit(
            EDIT_RANK,
            "Elimination rank edited",
            f"{player.name}: {old_rank} -> {player.elimination_rank}",
            {"player": player.name, "old_rank": old_rank, "rank": player.elimination_rank},
        )
        return player

    def remove_score(self, name: str) -> PlayerRecord:
        old_rank = self._current_rank(name)
        player = self._run("remove score", lambda: self._ledger.clear_rank(name))
        self._commit(
            REMOVE_SCORE,
            "Score removed",
            f"{player.name} (was rank {old_rank})",
            {"player": player.name, "old_rank": old_rank},
        )
        return player

    def clear_all(self) -> None:
        self._ledger.clear()
        self._snapshots.delete(self._snapshot_key)
        self._audit_log.log_event(CLEAR_ALL, "All data cleared", "Players and scores removed")
        logger.info("All tournament data cleared")

    def export_leaderboard(self, path: str | Path) -> Path:
        output_path = Path(path)
        header_lines = [
            "Tournament leaderboard",
            f"Total players: {self._ledger.total_players}",
        ]
        self._export_service.export_leaderboard_xlsx(
            str(output_path), self.leaderboard(), header_lines
        )
        self._audit_log.log_event(
            EXPORT_FILE,
            "Leaderboard exported",
            str(output_path),
            context={"path": str(output_path)},
        )
        return output_path

    # --- internals ---

    def _current_rank(self, name: str) -> int | None:
        player = self._ledger.find_player(name)
        return player.elimination_rank if player else None

    def _run(self, operation: str, action: Callable[[], T]) -> T:
        try:
            return action()
        except LedgerError as exc:
            logger.warning("%s rejected: %s", operation, exc)
            self._audit_log.log_event(
                ERROR,
                f"Rejected: {operation}",
                str(exc),
                level="warning",
                context={"operation": operation, "error": type(exc).__name__},
            )
            raise

    def _commit(
        self,
        event_type: str,
        title: str,
        details: str,
        context: dict[str, object],
    ) -> None:
        self.save()
        self._audit_log.log_event(event_type, title, details, context=context)
        logger.info("%s: %s", title, details)

        issues = self.issues()
        if issues:
            logger.warning("Elimination order issues detected: %s", "; ".join(issues))
