from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from scorer.services.tournament_service import TournamentService


class CheckInView(QWidget):
    tournament_requested = Signal()

    def __init__(self, service: TournamentService) -> None:
        super().__init__()
        self._service = service
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)

        input_row = QHBoxLayout()
        self.name_input = QLineEdit(self)
        self.name_input.setPlaceholderText("Player name")
        self.name_input.returnPressed.connect(self._add_player)
        add_btn = QPushButton("Add player", self)
        add_btn.clicked.connect(self._add_player)
        input_row.addWidget(self.name_input)
        input_row.addWidget(add_btn)
        layout.addLayout(input_row)

        self.count_label = QLabel(self)
        layout.addWidget(self.count_label)

        self.players_list = QListWidget(self)
        layout.addWidget(self.players_list)

        actions = QHBoxLayout()
        remove_btn = QPushButton("Remove selected", self)
        remove_btn.clicked.connect(self._remove_selected)
        self.start_btn = QPushButton("Start tournament", self)
        self.start_btn.clicked.connect(self._start_tournament)
        self.resume_btn = QPushButton("Resume tournament", self)
        self.resume_btn.clicked.connect(self._resume_tournament)
        clear_btn = QPushButton("Clear all", self)
        clear_btn.clicked.connect(self._clear_all)

        actions.addWidget(remove_btn)
        actions.addStretch(1)
        actions.addWidget(self.start_btn)
        actions.addWidget(self.resume_btn)
        actions.addWidget(clear_btn)
        layout.addLayout(actions)

    def refresh(self) -> None:
        ledger = self._service.ledger
        self.players_list.clear()
        for player in ledger.players:
            indicator = " ✓" if player.eliminated else ""
            item = QListWidgetItem(f"{player.name}{indicator}")
            item.setData(Qt.ItemDataRole.UserRole, player.name)
            self.players_list.addItem(item)

        self.count_label.setText(f"Players: {len(ledger.players)}")
        if ledger.is_active:
            self.start_btn.setVisible(False)
            self.resume_btn.setVisible(True)
        else:
            self.start_btn.setVisible(bool(ledger.players))
            self.resume_btn.setVisible(False)

    def _add_player(self) -> None:
        name = self.name_input.text().strip()
        if not name:
            QMessageBox.warning(self, "Check-in", "Please enter a player name.")
            return
        try:
            self._service.check_in(name)
        except ValueError as exc:
            QMessageBox.warning(self, "Check-in", str(exc))
            return
        self.name_input.clear()
        self.refresh()

    def _remove_selected(self) -> None:
        item = self.players_list.currentItem()
        if item is None:
            QMessageBox.warning(self, "Check-in", "Select a player first.")
            return
        try:
            self._service.remove_player(str(item.data(Qt.ItemDataRole.UserRole)))
        except ValueError as exc:
            QMessageBox.warning(self, "Check-in", str(exc))
            return
        self.refresh()

    def _start_tournament(self) -> None:
        try:
            self._service.start_tournament()
        except ValueError as exc:
            QMessageBox.warning(self, "Start tournament", str(exc))
            return
        self.refresh()
        self.tournament_requested.emit()

    def _resume_tournament(self) -> None:
        if not self._service.ledger.is_active:
            QMessageBox.warning(self, "Resume tournament", "Please start a tournament first.")
            return
        self.tournament_requested.emit()

    def _clear_all(self) -> None:
        answer = QMessageBox.question(
            self,
            "Clear all",
            "This will clear ALL data including players and scores. Are you sure?",
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self._service.clear_all()
        self.refresh()
