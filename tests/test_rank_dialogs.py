import unittest

from scorer.ui.rank_dialogs import rank_spin_range


class RankSpinRangeTests(unittest.TestCase):
    def test_range_covers_current_rank(self) -> None:
        cases = [
            (2, 5, (1, 5)),
            (5, 5, (1, 5)),
            (4, 3, (1, 4)),
            (7, 5, (1, 7)),
            (1, 0, (1, 1)),
        ]
        for current_rank, total_players, expected in cases:
            with self.subTest(current_rank=current_rank, total_players=total_players):
                self.assertEqual(rank_spin_range(current_rank, total_players), expected)


if __name__ == "__main__":
    unittest.main()
