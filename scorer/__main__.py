from PySide6.QtWidgets import QApplication

from scorer.log_setup import setup_logging
from scorer.ui.main_window import MainWindow


def main() -> int:
    setup_logging()
    app = QApplication([])
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
