from pathlib import Path

from openpyxl import load_workbook

from scorer.db.database import get_connection
from scorer.services.audit_log import EXPORT_FILE
from scorer.services.tournament_service import TournamentService


def _seed(service: TournamentService) -> None:
    for name in ["Ann", "Bob", "Cid", "Dee"]:
        service.check_in(name)
    service.start_tournament()
    for name in ["Ann", "Bob", "Cid"]:
        service.eliminate(name)


def test_export_leaderboard_xlsx(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "scorer.db")
    service = TournamentService(connection)
    _seed(service)

    output = service.export_leaderboard(tmp_path / "leaderboard.xlsx")

    workbook = load_workbook(output)
    sheet = workbook.active
    assert sheet.cell(row=1, column=1).value == "Tournament leaderboard"
    assert sheet.cell(row=2, column=1).value == "Total players: 4"
    assert [sheet.cell(row=3, column=col).value for col in range(1, 6)] == [
        "Place",
        "Player",
        "Elimination",
        "Bonus",
        "Total",
    ]
    # T=4: Cid rank 3 -> 15, Bob rank 2 -> 10, Ann rank 1 -> 0
    assert [sheet.cell(row=4, column=col).value for col in range(1, 6)] == [1, "Cid", 3, 15, 18]
    assert [sheet.cell(row=5, column=col).value for col in range(1, 6)] == [2, "Bob", 2, 10, 12]
    assert [sheet.cell(row=6, column=col).value for col in range(1, 6)] == [3, "Ann", 1, None, 1]
    assert sheet.freeze_panes == "A4"

    assert service.audit_log.list_events(event_type=EXPORT_FILE)[0].context == {"path": str(output)}
    connection.close()
