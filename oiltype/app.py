"""Application entry point and setup for the oiltype typing trainer."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from oiltype.core.progress import ProgressStore
from oiltype.core.words import WordListRepository
from oiltype.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, load word lists, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("oiltype")
    app.setApplicationDisplayName("oiltype")

    word_lists = WordListRepository()
    progress_store = ProgressStore()
    logging.info("Loaded %d word lists", len(word_lists.all()))

    window = MainWindow(word_lists=word_lists, progress_store=progress_store)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(int(geometry.width() * 0.8), int(geometry.height() * 0.8))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
