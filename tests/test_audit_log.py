from pathlib import Path

from scorer.db.database import get_connection
from scorer.services.audit_log import AuditLogService, EDIT_RANK, ELIMINATE, REMOVE_SCORE


def test_log_event_writes_and_filters_records(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "scorer.db")
    service = AuditLogService(connection)

    service.log_event(ELIMINATE, "Player eliminated", "Alice -> rank 1", context={"player": "Alice"})
    service.log_event(REMOVE_SCORE, "Score removed", "Bob (was rank 2)", level="warning", context={"player": "Bob"})

    all_events = service.list_events()
    assert len(all_events) == 2
    assert all_events[0].event_type == REMOVE_SCORE

    eliminate_events = service.list_events(event_type=ELIMINATE)
    assert len(eliminate_events) == 1
    assert eliminate_events[0].details == "Alice -> rank 1"
    assert eliminate_events[0].context == {"player": "Alice"}

    search_events = service.list_events(query="Bob")
    assert len(search_events) == 1
    assert search_events[0].level == "warning"
    connection.close()


def test_export_log_creates_txt_file(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "scorer.db")
    service = AuditLogService(connection)

    service.log_event(ELIMINATE, "Player eliminated", "Carol -> rank 3")
    output_path = service.export_txt(tmp_path / "audit.txt")

    assert output_path.exists()
    content = output_path.read_text(encoding="utf-8")
    assert "ELIMINATE" in content
    assert "Carol -> rank 3" in content
    connection.close()


def test_events_filter_by_player_and_describe_rank_changes(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "scorer.db")
    service = AuditLogService(connection)

    service.log_event(ELIMINATE, "Player eliminated", "alice -> rank 1", context={"player": "alice", "rank": 1})
    service.log_event(ELIMINATE, "Player eliminated", "Bob -> rank 2", context={"player": "Bob", "rank": 2})
    service.log_event(
        EDIT_RANK, "Elimination rank edited", "Alice: 1 -> 2", context={"player": "Alice", "old_rank": 1, "rank": 2}
    )
    service.log_event(REMOVE_SCORE, "Score removed", "Bob (was rank 1)", context={"player": "Bob", "old_rank": 1})

    alice_events = service.list_events(player="ALICE")
    assert [event.event_type for event in alice_events] == [EDIT_RANK, ELIMINATE]
    assert [event.rank_change for event in alice_events] == ["1 -> 2", "1"]
    assert service.list_events(event_type=REMOVE_SCORE, player="bob")[0].rank_change == "1 -> -"
    assert service.player_names() == ["Alice", "Bob"]

    output_path = service.export_txt(tmp_path / "bob.txt", player="Bob")
    lines = output_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert "| Bob | rank 1 -> - | Score removed |" in lines[0]
    connection.close()
