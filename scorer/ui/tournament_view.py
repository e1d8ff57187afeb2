from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtGui import QBrush, QColor, QStandardItem, QStandardItemModel
from PySide6.QtWidgets import (
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from scorer.domain.leaderboard import LeaderboardEntry
from scorer.services.tournament_service import TournamentService
from scorer.ui.audit_log_dialog import AuditLogDialog
from scorer.ui.rank_dialogs import EditRankDialog, EliminateAtDialog

PODIUM_COLORS = {
    "1st": "#FFF3B0",
    "2nd": "#E5E5E5",
    "3rd": "#F3D2B3",
}


class TournamentView(QWidget):
    check_in_requested = Signal()

    def __init__(self, service: TournamentService) -> None:
        super().__init__()
        self._service = service
        self._entries: list[LeaderboardEntry] = []

        layout = QVBoxLayout(self)
        self.header_label = QLabel(self)
        layout.addWidget(self.header_label)

        self.warning_label = QLabel(self)
        self.warning_label.setWordWrap(True)
        self.warning_label.setStyleSheet("color: #9C2A00;")
        layout.addWidget(self.warning_label)

        self.leaderboard_table = QTableView(self)
        self.leaderboard_table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.leaderboard_table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.leaderboard_table.setSortingEnabled(False)
        self.leaderboard_table.doubleClicked.connect(self._edit_selected)
        layout.addWidget(self.leaderboard_table)

        layout.addWidget(QLabel("Active players (click to eliminate):", self))
        self._players_grid = QGridLayout()
        layout.addLayout(self._players_grid)

        layout.addLayout(self._build_actions())
        self.refresh()

    def _build_actions(self) -> QHBoxLayout:
        actions_layout = QHBoxLayout()
        back_btn = QPushButton("Back to check-in", self)
        self.add_missing_btn = QPushButton("Add missed player", self)
        edit_btn = QPushButton("Edit selected", self)
        export_btn = QPushButton("Export XLSX", self)
        log_btn = QPushButton("Audit log", self)

        back_btn.clicked.connect(self._back_to_check_in)
        self.add_missing_btn.clicked.connect(self._add_missing_player)
        edit_btn.clicked.connect(self._edit_selected)
        export_btn.clicked.connect(self._export_xlsx)
        log_btn.clicked.connect(self._open_audit_log)

        actions_layout.addWidget(back_btn)
        actions_layout.addWidget(self.add_missing_btn)
        actions_layout.addWidget(edit_btn)
        actions_layout.addStretch(1)
        actions_layout.addWidget(export_btn)
        actions_layout.addWidget(log_btn)
        return actions_layout

    def refresh(self) -> None:
        ledger = self._service.ledger
        if not ledger.is_active:
            self.header_label.setText("No tournament in progress.")
            self.warning_label.setVisible(False)
            self.add_missing_btn.setVisible(False)
            self._entries = []
            self.leaderboard_table.setModel(QStandardItemModel(self))
            self._set_player_buttons([])
            return

        self.header_label.setText(
            f"Total players: {ledger.total_players} | "
            f"Next elimination: {ledger.next_elimination_rank} | "
            f"Players remaining: {ledger.players_remaining}"
        )
        self.add_missing_btn.setVisible(
            bool(ledger.eliminated_players()) and bool(ledger.active_players())
        )

        issues = self._service.issues()
        if issues:
            lines = "\n".join(f"• {issue}" for issue in issues)
            self.warning_label.setText(
                f"Elimination order issues detected:\n{lines}\n"
                "Please fix these issues by editing player ranks."
            )
        self.warning_label.setVisible(bool(issues))

        self._entries = self._service.leaderboard()
        self._set_leaderboard_table(self._entries)
        self._set_player_buttons(sorted(ledger.players, key=lambda player: player.name.casefold()))

    def _set_leaderboard_table(self, entries: list[LeaderboardEntry]) -> None:
        headers = ["Place", "Player", "Elimination", "Bonus", "Total"]
        model = QStandardItemModel(self)
        model.setColumnCount(len(headers))
        model.setHorizontalHeaderLabels(headers)

        for entry in entries:
            values = [
                entry.position,
                entry.name,
                entry.elimination_points,
                entry.bonus_points if entry.bonus_points > 0 else "-",
                entry.total_points,
            ]
            row_items = [QStandardItem(str(value)) for value in values]
            color = PODIUM_COLORS.get(entry.podium or "")
            if color:
                for item in row_items:
                    item.setBackground(QBrush(QColor(color)))
            model.appendRow(row_items)

        self.leaderboard_table.setModel(model)
        self.leaderboard_table.resizeColumnsToContents()

    def _set_player_buttons(self, players) -> None:
        while self._players_grid.count():
            item = self._players_grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        columns = 6
        for index, player in enumerate(players):
            button = QPushButton(player.name, self)
            button.setEnabled(not player.eliminated)
            if not player.eliminated:
                button.clicked.connect(lambda _checked=False, name=player.name: self._eliminate(name))
            self._players_grid.addWidget(button, index // columns, index % columns)

    def _back_to_check_in(self) -> None:
        self.check_in_requested.emit()

    def _eliminate(self, name: str) -> None:
        try:
            self._service.eliminate(name)
        except ValueError as exc:
            QMessageBox.warning(self, "Eliminate", str(exc))
        self.refresh()

    def _add_missing_player(self) -> None:
        ledger = self._service.ledger
        active = [player.name for player in ledger.active_players()]
        if not active:
            QMessageBox.warning(self, "Add missed player", "No active players to add.")
            return
        dialog = EliminateAtDialog(
            active_names=active,
            default_position=ledger.next_elimination_rank,
            total_players=ledger.total_players,
            parent=self,
        )
        if not dialog.exec():
            return
        try:
            self._service.eliminate_at(dialog.selected_name(), dialog.position())
        except ValueError as exc:
            QMessageBox.warning(self, "Add missed player", str(exc))
        self.refresh()

    def _selected_entry(self) -> LeaderboardEntry | None:
        selection = self.leaderboard_table.selectionModel()
        if selection is None:
            return None
        rows = selection.selectedRows()
        if not rows:
            return None
        row = rows[0].row()
        if 0 <= row < len(self._entries):
            return self._entries[row]
        return None

    def _edit_selected(self, *_args) -> None:
        entry = self._selected_entry()
        if entry is None or entry.elimination_rank is None:
            QMessageBox.warning(self, "Edit rank", "Select an eliminated player first.")
            return
        dialog = EditRankDialog(
            player_name=entry.name,
            current_rank=entry.elimination_rank,
            total_players=self._service.ledger.total_players,
            parent=self,
        )
        if not dialog.exec():
            return
        try:
            if dialog.action == EditRankDialog.ACTION_REMOVE:
                self._service.remove_score(entry.name)
            elif dialog.position() != entry.elimination_rank:
                self._service.edit_rank(entry.name, dialog.position())
        except ValueError as exc:
            QMessageBox.warning(self, "Edit rank", str(exc))
        self.refresh()

    def _export_xlsx(self) -> None:
        if not self._entries:
            QMessageBox.warning(self, "Export", "No players eliminated yet.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Export leaderboard",
            "leaderboard.xlsx",
            "Excel Files (*.xlsx)",
        )
        if not path:
            return
        try:
            exported = self._service.export_leaderboard(path)
        except OSError as exc:
            QMessageBox.critical(self, "Export", str(exc))
            return
        QMessageBox.information(self, "Export", f"Saved: {exported}")

    def _open_audit_log(self) -> None:
        AuditLogDialog(self._service.audit_log, self).exec()
