from __future__ import annotations


class LedgerError(ValueError):
    """Base class for rejected ledger operations."""


class InvalidRank(LedgerError):
    """Position is out of range or not an integer."""


class InvalidPlayerState(LedgerError):
    """Player is missing or not in the state the operation expects."""


class DuplicatePlayer(LedgerError):
    """A player with the same name (case-insensitive) already exists."""
