from PySide6.QtWidgets import QMainWindow, QTabWidget

from scorer.services.tournament_service import TournamentService
from scorer.ui.checkin_view import CheckInView
from scorer.ui.tournament_view import TournamentView


class MainWindow(QMainWindow):
    def __init__(self, service: TournamentService | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Tournament Scorer")
        self.setMinimumSize(1024, 640)

        self._service = service or TournamentService()

        self._tabs = QTabWidget()
        self._checkin_view = CheckInView(self._service)
        self._tournament_view = TournamentView(self._service)
        self._tabs.addTab(self._checkin_view, "Check-in")
        self._tabs.addTab(self._tournament_view, "Tournament")
        self._tabs.currentChanged.connect(self._refresh_current)

        self._checkin_view.tournament_requested.connect(self._show_tournament)
        self._tournament_view.check_in_requested.connect(self._show_check_in)

        self.setCentralWidget(self._tabs)
        if self._service.ledger.is_active:
            self._show_tournament()

    def _show_tournament(self) -> None:
        self._tabs.setCurrentWidget(self._tournament_view)
        self._tournament_view.refresh()

    def _show_check_in(self) -> None:
        self._tabs.setCurrentWidget(self._checkin_view)
        self._checkin_view.refresh()

    def _refresh_current(self, index: int) -> None:
        widget = self._tabs.widget(index)
        if widget is self._checkin_view:
            self._checkin_view.refresh()
        elif widget is self._tournament_view:
            self._tournament_view.refresh()
