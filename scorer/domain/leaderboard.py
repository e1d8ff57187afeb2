from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from scorer.domain.ledger import EliminationLedger
from scorer.domain.points import podium_label


@dataclass(frozen=True)
class LeaderboardEntry:
    position: int
    name: str
    elimination_rank: int | None
    elimination_points: int
    bonus_points: int
    total_points: int
    podium: str | None = None


def validate(ledger: EliminationLedger) -> Iterator[str]:
    """Yield a description of every gap or shared slot in ranks 1..E.

    Detection only: the ledger is never modified here.
    """
    eliminated = ledger.eliminated_players()
    holders: dict[int, list[str]] = {}
    for player in eliminated:
        holders.setdefault(player.elimination_rank, []).append(player.name)

    for rank in range(1, len(eliminated) + 1):
        names = holders.get(rank, [])
        if not names:
            yield f"Missing rank {rank} in elimination sequence"
        elif len(names) > 1:
            yield f"Rank {rank} has duplicate holders: {', '.join(names)}"


def project(ledger: EliminationLedger) -> list[LeaderboardEntry]:
    """Eliminated players by total points, highest first.

    Ties keep check-in order (stable sort, no secondary key).
    """
    ranked = sorted(
        ledger.eliminated_players(),
        key=lambda player: player.total_points,
        reverse=True,
    )
    return [
        LeaderboardEntry(
            position=index,
            name=player.name,
            elimination_rank=player.elimination_rank,
            elimination_points=player.elimination_points,
            bonus_points=player.bonus_points,
            total_points=player.total_points,
            podium=podium_label(index),
        )
        for index, player in enumerate(ranked, start=1)
    ]
