from __future__ import annotations

from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from scorer.domain.leaderboard import LeaderboardEntry

LEADERBOARD_COLUMNS = ["Place", "Player", "Elimination", "Bonus", "Total"]

PODIUM_FILLS = {
    "1st": "FFD700",
    "2nd": "C0C0C0",
    "3rd": "CD7F32",
}


class ExportService:
    def export_leaderboard_xlsx(
        self,
        path: str,
        entries: Sequence[LeaderboardEntry],
        header_lines: Iterable[str] = (),
    ) -> None:
        header_list = list(header_lines)
        rows = [
            [
                entry.position,
                entry.name,
                entry.elimination_points,
                entry.bonus_points if entry.bonus_points > 0 else None,
                entry.total_points,
            ]
            for entry in entries
        ]
        workbook = self._build_workbook(header_list, LEADERBOARD_COLUMNS, rows)
        sheet = workbook.active

        first_data_row = len(header_list) + 2
        for offset, entry in enumerate(entries):
            color = PODIUM_FILLS.get(entry.podium or "")
            if color is None:
                continue
            fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
            for column in range(1, len(LEADERBOARD_COLUMNS) + 1):
                sheet.cell(row=first_data_row + offset, column=column).fill = fill

        workbook.save(path)

    @staticmethod
    def _build_workbook(
        header_lines: Iterable[str],
        columns: Sequence[str],
        rows: Sequence[Sequence[object]],
    ) -> Workbook:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Leaderboard"

        current_row = 1
        for line in header_lines:
            sheet.cell(row=current_row, column=1, value=line)
            current_row += 1

        header_row = current_row
        header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
        for column, header_text in enumerate(columns, start=1):
            cell = sheet.cell(row=header_row, column=column, value=header_text)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.fill = header_fill

        current_row += 1
        alignment = Alignment(horizontal="left", vertical="top", wrap_text=True)
        for row in rows:
            for column, value in enumerate(row, start=1):
                cell = sheet.cell(row=current_row, column=column, value=value)
                cell.alignment = alignment
            current_row += 1

        sheet.freeze_panes = f"A{header_row + 1}"

        for column_index in range(1, len(columns) + 1):
            max_length = len(str(columns[column_index - 1]))
            for row_index in range(header_row + 1, current_row):
                value = sheet.cell(row=row_index, column=column_index).value
                if value is None:
                    continue
                max_length = max(max_length, len(str(value)))
            sheet.column_dimensions[get_column_letter(column_index)].width = min(max_length + 2, 60)

        return workbook
