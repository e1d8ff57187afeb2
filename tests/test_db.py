import json
import tempfile
import unittest
from pathlib import Path

from scorer.db.database import get_connection
from scorer.db.repositories import SnapshotRepository


class SnapshotRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = Path(self.temp_dir.name) / "test.db"
        self.connection = get_connection(self.db_path)
        self.snapshots = SnapshotRepository(self.connection)

    def tearDown(self) -> None:
        self.connection.close()
        self.temp_dir.cleanup()

    def test_snapshot_save_overwrite_delete(self) -> None:
        self.assertIsNone(self.snapshots.load_raw("tournamentData"))

        self.snapshots.save("tournamentData", {"players": [], "totalPlayers": 0})
        self.assertEqual(
            json.loads(self.snapshots.load_raw("tournamentData")),
            {"players": [], "totalPlayers": 0},
        )

        self.snapshots.save("tournamentData", {"players": [{"name": "Ива"}], "totalPlayers": 1})
        loaded = json.loads(self.snapshots.load_raw("tournamentData"))
        self.assertEqual(loaded["players"][0]["name"], "Ива")
        count = self.connection.execute("SELECT COUNT(*) FROM snapshots").fetchone()[0]
        self.assertEqual(count, 1)

        self.snapshots.delete("tournamentData")
        self.assertIsNone(self.snapshots.load_raw("tournamentData"))

    def test_load_raw_returns_stored_text_unparsed(self) -> None:
        with self.connection:
            self.connection.execute(
                "INSERT INTO snapshots (key, payload_json) VALUES (?, ?)",
                ("broken", "[1, 2, 3]"),
            )
        self.assertEqual(self.snapshots.load_raw("broken"), "[1, 2, 3]")

    def test_schema_is_idempotent(self) -> None:
        self.snapshots.save("a", {"x": 1})
        second = get_connection(self.db_path)
        try:
            self.assertEqual(json.loads(SnapshotRepository(second).load_raw("a")), {"x": 1})
        finally:
            second.close()


if __name__ == "__main__":
    unittest.main()
