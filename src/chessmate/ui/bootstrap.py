"""Start the Qt event loop for a human-vs-computer session."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from chessmate.game.config import SessionConfig

_LOGGER = logging.getLogger(__name__)


def _configure_application(app: QApplication) -> None:
    from chessmate import __version__
    from chessmate.ui.styles.theme import APP_STYLE

    app.setApplicationName("Chessmate")
    app.setApplicationVersion(__version__)
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(config: SessionConfig, argv: list[str] | None = None) -> int:
    """Open the main window for *config* and block until it is closed.

    Returns the Qt exit code.
    """
    from PyQt6.QtWidgets import QApplication

    from chessmate.ui.main_window import MainWindow

    app = QApplication.instance() or QApplication(
        sys.argv if argv is None else argv
    )
    _configure_application(app)

    window = MainWindow(config)
    window.show()
    _LOGGER.info(
        "Session started: human plays %s from %s",
        config.human_color,
        config.starting_board.fen,
    )

    code = app.exec()
    _LOGGER.info("Event loop exited with code %d", code)
    return code
