"""BoardView: QGraphicsView wrapper for the board scene."""

from __future__ import annotations

from PyQt6.QtCore import QSize, Qt, pyqtSignal
from PyQt6.QtGui import QPainter, QResizeEvent
from PyQt6.QtWidgets import QGraphicsView, QSizePolicy

from chessmate.ui.board.board_scene import BoardScene


class BoardView(QGraphicsView):
    """Shows the board scene scaled to the widget, never scrolled.

    Signals:
        square_clicked(Position): Bubbled up from BoardScene.
        promotion_chosen(PieceKind): Bubbled up from BoardScene.
    """

    square_clicked = pyqtSignal(object)
    promotion_chosen = pyqtSignal(object)

    def __init__(self, parent=None) -> None:
        self._scene = BoardScene()
        super().__init__(self._scene, parent)

        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)
        self.setRenderHints(
            QPainter.RenderHint.Antialiasing | QPainter.RenderHint.TextAntialiasing
        )

        self._scene.square_clicked.connect(self.square_clicked.emit)
        self._scene.promotion_chosen.connect(self.promotion_chosen.emit)

    @property
    def board_scene(self) -> BoardScene:
        return self._scene

    def sizeHint(self) -> QSize:
        side = 8 * BoardScene.TILE
        return QSize(side, side)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)
