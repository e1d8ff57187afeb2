from __future__ import annotations

import json

from PySide6.QtGui import QStandardItem, QStandardItemModel
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
)

from scorer.services.audit_log import AuditEvent, AuditLogService, EVENT_TYPES

COLUMNS = ["Time", "Event", "Player", "Rank", "Details"]


class AuditLogDialog(QDialog):
    """Tournament history, filterable by event type and player."""

    def __init__(self, audit_log_service: AuditLogService, parent=None) -> None:
        super().__init__(parent)
        self._audit_log_service = audit_log_service
        self._events: list[AuditEvent] = []
        self.setWindowTitle("Audit log")
        self.resize(900, 560)

        layout = QVBoxLayout(self)

        filter_row = QHBoxLayout()
        self._type_filter = QComboBox(self)
        self._type_filter.addItem("All events", "")
        for event_type in EVENT_TYPES:
            self._type_filter.addItem(event_type, event_type)

        self._player_filter = QComboBox(self)
        self._player_filter.addItem("All players", "")
        for name in self._audit_log_service.player_names():
            self._player_filter.addItem(name, name)

        self._search_input = QLineEdit(self)
        self._search_input.setPlaceholderText("Search title and details")

        self._type_filter.currentIndexChanged.connect(self._refresh)
        self._player_filter.currentIndexChanged.connect(self._refresh)
        self._search_input.textChanged.connect(self._refresh)

        filter_row.addWidget(QLabel("Type:", self))
        filter_row.addWidget(self._type_filter)
        filter_row.addWidget(QLabel("Player:", self))
        filter_row.addWidget(self._player_filter)
        filter_row.addWidget(self._search_input, 1)
        layout.addLayout(filter_row)

        self._events_table = QTableView(self)
        self._events_table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self._events_table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self._events_table.setEditTriggers(QTableView.EditTrigger.NoEditTriggers)
        self._events_table.clicked.connect(self._show_context)
        layout.addWidget(self._events_table, 1)

        self._context_label = QLabel("Select an event to see its context.", self)
        self._context_label.setWordWrap(True)
        layout.addWidget(self._context_label)

        buttons_row = QHBoxLayout()
        export_btn = QPushButton("Export to TXT", self)
        export_btn.clicked.connect(self._export_log)
        close_btn = QPushButton("Close", self)
        close_btn.clicked.connect(self.accept)

        buttons_row.addWidget(export_btn)
        buttons_row.addStretch(1)
        buttons_row.addWidget(close_btn)
        layout.addLayout(buttons_row)

        self._refresh()

    def _filters(self) -> dict[str, object]:
        return {
            "event_type": str(self._type_filter.currentData() or "") or None,
            "player": str(self._player_filter.currentData() or "") or None,
            "query": self._search_input.text().strip(),
        }

    def _refresh(self) -> None:
        self._events = self._audit_log_service.list_events(**self._filters())

        model = QStandardItemModel(self)
        model.setColumnCount(len(COLUMNS))
        model.setHorizontalHeaderLabels(COLUMNS)
        for event in self._events:
            details = f"{event.title}: {event.details}" if event.details else event.title
            values = [event.created_at, event.event_type, event.player, event.rank_change, details]
            model.appendRow([QStandardItem(value) for value in values])

        self._events_table.setModel(model)
        self._events_table.resizeColumnsToContents()
        self._context_label.setText("Select an event to see its context.")

    def _show_context(self, index) -> None:
        row = index.row()
        if not 0 <= row < len(self._events):
            return
        context = self._events[row].context
        self._context_label.setText(
            json.dumps(context, ensure_ascii=False, sort_keys=True) if context else "No context."
        )

    def _export_log(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Export audit log",
            "audit_log.txt",
            "Text Files (*.txt)",
        )
        if not path:
            return

        try:
            exported = self._audit_log_service.export_txt(path, **self._filters())
        except OSError as exc:
            QMessageBox.critical(self, "Audit log", str(exc))
            return

        QMessageBox.information(self, "Audit log", f"Exported: {exported}")
