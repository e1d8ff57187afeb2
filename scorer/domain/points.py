from __future__ import annotations

from typing import Mapping


# Players still in the tournament after this elimination -> bonus.
BONUS_BY_REMAINING: Mapping[int, int] = {
    0: 20,
    1: 15,
    2: 10,
}

PODIUM_LABELS: tuple[str, ...] = ("1st", "2nd", "3rd")


def bonus_points_for_rank(rank: int | None, total_players: int) -> int:
    """Return the bonus for an elimination rank given the current player count."""
    if rank is None:
        return 0
    if not isinstance(rank, int) or isinstance(rank, bool):
        raise TypeError("Rank must be an integer or None.")
    remaining = total_players - rank
    return BONUS_BY_REMAINING.get(remaining, 0)


def podium_label(position: int) -> str | None:
    if 1 <= position <= len(PODIUM_LABELS):
        return PODIUM_LABELS[position - 1]
    return None
