from __future__ import annotations

from typing import Iterable

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)


def rank_spin_range(current_rank: int, total_players: int) -> tuple[int, int]:
    """Spin box bounds that still hold a rank pushed past the field."""
    return 1, max(total_players, current_rank, 1)


class EliminateAtDialog(QDialog):
    """Pick an active player and the rank a missed elimination belongs at."""

    def __init__(
        self,
        *,
        active_names: Iterable[str],
        default_position: int,
        total_players: int,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Add missed player")

        layout = QVBoxLayout(self)
        form = QFormLayout()
        self.player_combo = QComboBox(self)
        self.player_combo.addItem("-- Choose player --", "")
        for name in active_names:
            self.player_combo.addItem(name, name)
        form.addRow("Player:", self.player_combo)

        self.position_spin = QSpinBox(self)
        self.position_spin.setRange(1, max(total_players, 1))
        self.position_spin.setValue(min(max(default_position, 1), max(total_players, 1)))
        form.addRow("Elimination rank:", self.position_spin)
        layout.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
            self,
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _on_accept(self) -> None:
        if not self.selected_name():
            QMessageBox.warning(self, "Add missed player", "Please select a player.")
            return
        self.accept()

    def selected_name(self) -> str:
        return str(self.player_combo.currentData() or "")

    def position(self) -> int:
        return int(self.position_spin.value())


class EditRankDialog(QDialog):
    """Edit an eliminated player's rank or remove their score."""

    ACTION_SAVE = "save"
    ACTION_REMOVE = "remove"

    def __init__(
        self,
        *,
        player_name: str,
        current_rank: int,
        total_players: int,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Edit elimination rank")
        self._player_name = player_name
        self._action = ""

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f"Player: {player_name}", self))

        form = QFormLayout()
        self.position_spin = QSpinBox(self)
        self.position_spin.setRange(*rank_spin_range(current_rank, total_players))
        self.position_spin.setValue(current_rank)
        form.addRow("Elimination rank:", self.position_spin)
        layout.addLayout(form)

        button_box = QDialogButtonBox(self)
        save_button = QPushButton("Save", self)
        remove_button = QPushButton("Remove score", self)
        cancel_button = QPushButton("Cancel", self)
        button_box.addButton(save_button, QDialogButtonBox.ButtonRole.AcceptRole)
        button_box.addButton(remove_button, QDialogButtonBox.ButtonRole.DestructiveRole)
        button_box.addButton(cancel_button, QDialogButtonBox.ButtonRole.RejectRole)
        layout.addWidget(button_box)

        save_button.clicked.connect(self._on_save)
        remove_button.clicked.connect(self._on_remove)
        cancel_button.clicked.connect(self.reject)

    def _on_save(self) -> None:
        self._action = self.ACTION_SAVE
        self.accept()

    def _on_remove(self) -> None:
        answer = QMessageBox.question(
            self,
            "Remove score",
            f"Remove score for {self._player_name}? This will allow them to be eliminated again.",
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self._action = self.ACTION_REMOVE
        self.accept()

    @property
    def action(self) -> str:
        return self._action

    def position(self) -> int:
        return int(self.position_spin.value())
