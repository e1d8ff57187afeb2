from __future__ import annotations

from types import GeneratorType

from scorer.domain.leaderboard import project, validate
from scorer.domain.ledger import EliminationLedger, PlayerRecord


def _scenario_ledger() -> EliminationLedger:
    ledger = EliminationLedger()
    for name in ["A", "B", "C", "D", "E"]:
        ledger.add_player(name)
    ledger.start()
    for name in ["A", "B", "C"]:
        ledger.eliminate_next(name)
    ledger.eliminate_at_rank("D", 2)
    return ledger


def _eliminated(name: str, rank: int) -> PlayerRecord:
    return PlayerRecord(
        name=name,
        eliminated=True,
        elimination_rank=rank,
        elimination_points=rank,
        bonus_points=0,
    )


def test_validate_is_lazy_and_empty_for_consistent_ledger() -> None:
    ledger = _scenario_ledger()
    issues = validate(ledger)
    assert isinstance(issues, GeneratorType)
    assert list(issues) == []


def test_validate_reports_duplicates_and_gaps() -> None:
    ledger = EliminationLedger(
        players=[
            _eliminated("Ann", 1),
            _eliminated("Bob", 1),
            _eliminated("Cid", 3),
            PlayerRecord(name="Dee"),
        ],
        total_players=4,
        next_elimination_rank=4,
    )

    assert list(validate(ledger)) == [
        "Rank 1 has duplicate holders: Ann, Bob",
        "Missing rank 2 in elimination sequence",
    ]


def test_validate_does_not_mutate() -> None:
    players = [_eliminated("Ann", 2), _eliminated("Bob", 2)]
    ledger = EliminationLedger(players=players, total_players=5, next_elimination_rank=3)

    list(validate(ledger))

    assert [player.elimination_rank for player in ledger.players] == [2, 2]
    assert ledger.next_elimination_rank == 3


def test_validate_with_nobody_eliminated() -> None:
    ledger = EliminationLedger(players=[PlayerRecord(name="Ann")], total_players=1)
    assert list(validate(ledger)) == []


def test_project_sorts_by_total_and_tags_podium() -> None:
    entries = project(_scenario_ledger())

    assert [entry.name for entry in entries] == ["C", "B", "D", "A"]
    assert [entry.total_points for entry in entries] == [19, 13, 2, 1]
    assert [entry.podium for entry in entries] == ["1st", "2nd", "3rd", None]
    assert [entry.position for entry in entries] == [1, 2, 3, 4]
    assert entries[0].elimination_rank == 4
    assert entries[0].bonus_points == 15


def test_project_ties_keep_check_in_order() -> None:
    ledger = EliminationLedger(
        players=[_eliminated("Zed", 2), _eliminated("Amy", 2), _eliminated("Max", 1)],
        total_players=10,
        next_elimination_rank=3,
    )

    entries = project(ledger)

    assert [entry.name for entry in entries] == ["Zed", "Amy", "Max"]


def test_project_skips_active_players() -> None:
    ledger = EliminationLedger()
    for name in ["A", "B"]:
        ledger.add_player(name)
    ledger.start()

    assert project(ledger) == []

    ledger.eliminate_next("B")
    assert [entry.name for entry in project(ledger)] == ["B"]
