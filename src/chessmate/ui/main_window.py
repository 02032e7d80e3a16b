"""MainWindow: top-level window assembling all UI components."""

from __future__ import annotations

import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStatusBar,
    QWidget,
)

from chessmate.core.enums import Color, PieceKind
from chessmate.core.types import Position
from chessmate.game.config import SessionConfig
from chessmate.game.controller import GameSessionController, SessionView
from chessmate.game.interfaces import (
    NewGameRequested,
    PromotionPieceChosen,
    SquareClicked,
)
from chessmate.ui.board.board_view import BoardView
from chessmate.ui.opponent_session import OpponentSession
from chessmate.ui.panels.info_panel import InfoPanel

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window: board on the left, info panel on the right."""

    opponent_request = pyqtSignal(object, object, int)

    def __init__(self, config: SessionConfig) -> None:
        super().__init__()
        self.setWindowTitle("Chessmate")
        self.setMinimumSize(720, 560)
        self.resize(900, 640)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self._session = OpponentSession(move_request=self.opponent_request, parent=self)
        self._session.setup()

        self._controller = GameSessionController(config, self._session)
        self._controller.events.on_view_changed.append(self._on_view_changed)
        self._controller.events.on_game_over.append(self._on_game_over)

        self._board_view.board_scene.set_flipped(config.human_color == Color.BLACK)
        self._on_view_changed(self._controller.view())

    @property
    def controller(self) -> GameSessionController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def info_panel(self) -> InfoPanel:
        return self._info_panel

    @property
    def session(self) -> OpponentSession:
        return self._session

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._board_view = BoardView()
        root.addWidget(self._board_view, stretch=3)

        self._info_panel = InfoPanel()
        self._info_panel.setFixedWidth(240)
        root.addWidget(self._info_panel)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel()
        self._status.addWidget(self._status_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        menu_game = menu_bar.addMenu("&Game")
        assert menu_game is not None

        self._act_new_game = QAction("New Game", self)
        self._act_new_game.setShortcut("Ctrl+N")
        self._act_new_game.setEnabled(False)
        self._act_new_game.triggered.connect(self._on_new_game)
        menu_game.addAction(self._act_new_game)

        act_flip = QAction("Flip Board", self)
        act_flip.setShortcut("F")
        act_flip.triggered.connect(self._on_flip)
        menu_game.addAction(act_flip)

        menu_game.addSeparator()

        act_quit = QAction("Quit", self)
        act_quit.setShortcut("Ctrl+Q")
        act_quit.triggered.connect(self.close)
        menu_game.addAction(act_quit)

    # ── Signal wiring ────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        """Connect Qt widget signals."""
        self._board_view.square_clicked.connect(self._on_square_clicked)
        self._board_view.promotion_chosen.connect(self._on_promotion_chosen)
        self._info_panel.new_game_clicked.connect(self._on_new_game)
        self._info_panel.flip_clicked.connect(self._on_flip)

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._session.shutdown()
        super().closeEvent(event)

    # ── Inbound: widget → controller ─────────────────────────────────────

    def _on_square_clicked(self, pos: Position) -> None:
        self._controller.handle(SquareClicked(pos))

    def _on_promotion_chosen(self, kind: PieceKind) -> None:
        self._controller.handle(PromotionPieceChosen(kind))

    def _on_new_game(self) -> None:
        self._controller.handle(NewGameRequested())

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())

    # ── Outbound: controller → widgets ───────────────────────────────────

    def _on_view_changed(self, view: SessionView) -> None:
        self._board_view.board_scene.set_view(view)
        self._info_panel.set_view(view)
        self._act_new_game.setEnabled(view.is_game_over)
        self._status_label.setText(view.board.fen)

    def _on_game_over(self, message: str) -> None:
        _LOGGER.info("Showing result: %s", message)
        self._status.showMessage(message, 5000)
