"""JSON-shaped state snapshot.

Stored ranks are taken as-is on load so a corrupted snapshot stays
visible to the validator instead of being silently repaired.
"""

from __future__ import annotations

import json
from typing import Any

from scorer.domain.ledger import EliminationLedger, PlayerRecord

# Keys used by the browser version of the scorer.
LEGACY_RANK_KEY = "eliminationOrder"
LEGACY_NEXT_RANK_KEY = "nextEliminationOrder"


def _player_to_dict(player: PlayerRecord) -> dict[str, Any]:
    return {
        "name": player.name,
        "eliminated": player.eliminated,
        "eliminationRank": player.elimination_rank,
        "eliminationPoints": player.elimination_points,
        "bonusPoints": player.bonus_points,
    }


def _player_from_dict(data: dict[str, Any]) -> PlayerRecord:
    rank = data.get("eliminationRank", data.get(LEGACY_RANK_KEY))
    elimination_rank = int(rank) if rank is not None else None
    # An eliminated flag without a rank loads as an active player.
    return PlayerRecord(
        name=str(data.get("name") or ""),
        eliminated=bool(data.get("eliminated", False)) and elimination_rank is not None,
        elimination_rank=elimination_rank,
        elimination_points=int(data.get("eliminationPoints") or 0),
        bonus_points=int(data.get("bonusPoints") or 0),
    )


def ledger_to_snapshot(ledger: EliminationLedger) -> dict[str, Any]:
    return {
        "players": [_player_to_dict(player) for player in ledger.players],
        "totalPlayers": ledger.total_players,
        "nextEliminationRank": ledger.next_elimination_rank,
    }


def ledger_from_snapshot(data: dict[str, Any] | None) -> EliminationLedger:
    if data is None:
        return EliminationLedger()
    if not isinstance(data, dict):
        raise ValueError("Snapshot must be a JSON object.")

    raw_players = data.get("players") or []
    if not isinstance(raw_players, list):
        raise ValueError("Snapshot 'players' must be a list.")
    players = [_player_from_dict(item) for item in raw_players if isinstance(item, dict)]

    next_rank = data.get("nextEliminationRank", data.get(LEGACY_NEXT_RANK_KEY))
    return EliminationLedger(
        players=players,
        total_players=int(data.get("totalPlayers") or 0),
        next_elimination_rank=int(next_rank or 1),
    )


def loads_snapshot(text: str | None) -> EliminationLedger:
    if not text:
        return EliminationLedger()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Snapshot is not valid JSON: {exc}") from exc
    return ledger_from_snapshot(data)
