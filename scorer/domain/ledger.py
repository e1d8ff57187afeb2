"""Elimination-order ledger.

Ranks are 1-based: rank 1 is the first player knocked out, rank
``total_players`` is the winner. Eliminated ranks stay contiguous under
every operation; inserts, edits and removals shift the neighbouring
sub-range by one instead of rebuilding the order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from scorer.domain.errors import DuplicatePlayer, InvalidPlayerState, InvalidRank
from scorer.domain.points import bonus_points_for_rank


@dataclass
class PlayerRecord:
    name: str
    eliminated: bool = False
    elimination_rank: int | None = None
    elimination_points: int = 0
    bonus_points: int = 0

    @property
    def total_points(self) -> int:
        return self.elimination_points + self.bonus_points

    @property
    def key(self) -> str:
        return _name_key(self.name)


def _name_key(name: str) -> str:
    return name.strip().casefold()


class EliminationLedger:
    def __init__(
        self,
        players: Iterable[PlayerRecord] | None = None,
        total_players: int = 0,
        next_elimination_rank: int = 1,
    ) -> None:
        self._players: list[PlayerRecord] = list(players or [])
        self.total_players = total_players
        self.next_elimination_rank = next_elimination_rank

    # --- queries ---

    @property
    def players(self) -> list[PlayerRecord]:
        return list(self._players)

    @property
    def is_active(self) -> bool:
        return self.total_players > 0

    @property
    def players_remaining(self) -> int:
        return self.total_players - (self.next_elimination_rank - 1)

    def eliminated_players(self) -> list[PlayerRecord]:
        return [player for player in self._players if player.eliminated]

    def active_players(self) -> list[PlayerRecord]:
        return [player for player in self._players if not player.eliminated]

    def find_player(self, name: str) -> PlayerRecord | None:
        key = _name_key(name)
        for player in self._players:
            if player.key == key:
                return player
        return None

    def get_player(self, name: str) -> PlayerRecord:
        player = self.find_player(name)
        if player is None:
            raise InvalidPlayerState(f"Player '{name}' not found.")
        return player

    # --- check-in ---

    def add_player(self, name: str) -> PlayerRecord:
        """Check a player in; mid-tournament this also grows the field."""
        clean_name = name.strip()
        if not clean_name:
            raise InvalidPlayerState("Player name must not be empty.")
        if self.find_player(clean_name) is not None:
            raise DuplicatePlayer(f"Player '{clean_name}' already exists.")

        player = PlayerRecord(name=clean_name)
        self._players.append(player)
        if self.is_active:
            self.total_players += 1
            self.recompute_all_bonuses()
        return player

    def remove_player(self, name: str) -> PlayerRecord:
        """Remove an active player; eliminated players need clear_rank first."""
        player = self.get_player(name)
        if player.eliminated:
            raise InvalidPlayerState(
                f"Cannot remove {player.name}: already eliminated. Remove their score first."
            )

        self._players.remove(player)
        if self.is_active:
            self.total_players -= 1
            self.recompute_all_bonuses()
        return player

    def start(self) -> None:
        if not self._players:
            raise InvalidPlayerState("Add players before starting the tournament.")
        self.total_players = len(self._players)
        self.next_elimination_rank = 1
        for player in self._players:
            self._reset(player)

    def clear(self) -> None:
        self._players = []
        self.total_players = 0
        self.next_elimination_rank = 1

    # --- elimination order ---

    def eliminate_next(self, name: str) -> PlayerRecord:
        player = self._get_active(name)
        rank = self.next_elimination_rank
        if not self.is_active:
            raise InvalidRank("No tournament is active.")
        if rank > self.total_players:
            raise InvalidRank(
                f"Next elimination rank {rank} exceeds the field of {self.total_players}."
            )

        self._assign_rank(player, rank)
        self.next_elimination_rank += 1
        return player

    def eliminate_at_rank(self, name: str, position: int | str) -> PlayerRecord:
        """Backfill a missed elimination at ``position``."""
        player = self._get_active(name)
        rank = self._parse_position(position)

        self._shift_ranks(lambda current: current >= rank, 1)
        self._assign_rank(player, rank)
        self._update_next_rank()
        return player

    def move_rank(self, name: str, new_position: int | str) -> PlayerRecord:
        player = self._get_eliminated(name)
        new_rank = self._parse_position(new_position)
        old_rank = player.elimination_rank

        if new_rank < old_rank:
            self._shift_ranks(lambda current: new_rank <= current < old_rank, 1, exclude=player)
        elif new_rank > old_rank:
            self._shift_ranks(lambda current: old_rank < current <= new_rank, -1, exclude=player)

        self._assign_rank(player, new_rank)
        self._update_next_rank()
        return player

    def clear_rank(self, name: str) -> PlayerRecord:
        player = self._get_eliminated(name)
        removed_rank = player.elimination_rank

        self._shift_ranks(lambda current: current > removed_rank, -1, exclude=player)
        self._reset(player)
        self._update_next_rank()
        return player

    # --- scoring ---

    def recompute_bonus(self, player: PlayerRecord) -> int:
        player.bonus_points = bonus_points_for_rank(player.elimination_rank, self.total_players)
        return player.bonus_points

    def recompute_all_bonuses(self) -> None:
        for player in self._players:
            if player.eliminated:
                self.recompute_bonus(player)

    # --- internals ---

    def _shift_ranks(
        self,
        predicate: Callable[[int], bool],
        delta: int,
        exclude: PlayerRecord | None = None,
    ) -> None:
        for player in self._players:
            if not player.eliminated or player is exclude:
                continue
            if player.elimination_rank is not None and predicate(player.elimination_rank):
                self._assign_rank(player, player.elimination_rank + delta)

    def _assign_rank(self, player: PlayerRecord, rank: int) -> None:
        player.eliminated = True
        player.elimination_rank = rank
        player.elimination_points = rank
        self.recompute_bonus(player)

    @staticmethod
    def _reset(player: PlayerRecord) -> None:
        player.eliminated = False
        player.elimination_rank = None
        player.elimination_points = 0
        player.bonus_points = 0

    def _update_next_rank(self) -> None:
        ranks = [
            player.elimination_rank
            for player in self._players
            if player.eliminated and player.elimination_rank is not None
        ]
        self.next_elimination_rank = max(ranks) + 1 if ranks else 1

    def _get_active(self, name: str) -> PlayerRecord:
        player = self.get_player(name)
        if player.eliminated:
            raise InvalidPlayerState(f"{player.name} is already eliminated.")
        return player

    def _get_eliminated(self, name: str) -> PlayerRecord:
        player = self.get_player(name)
        if not player.eliminated or player.elimination_rank is None:
            raise InvalidPlayerState(f"{player.name} has not been eliminated.")
        return player

    def _parse_position(self, value: int | str) -> int:
        if isinstance(value, bool):
            raise InvalidRank("Rank must be an integer.")
        if isinstance(value, int):
            position = value
        elif isinstance(value, str):
            text = value.strip()
            if not (text.isascii() and text.isdigit()):
                raise InvalidRank(f"Rank must be an integer, got '{value}'.")
            position = int(text)
        else:
            raise InvalidRank("Rank must be an integer.")

        if not self.is_active:
            raise InvalidRank("No tournament is active.")
        if position < 1 or position > self.total_players:
            raise InvalidRank(
                f"Please enter a valid elimination rank (1-{self.total_players})."
            )
        return position
