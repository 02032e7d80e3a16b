"""BoardScene: QGraphicsScene that draws a session view.

The scene only renders :class:`~chessmate.game.controller.SessionView`
snapshots and reports raw clicks; deciding what a click means is the
controller's job.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chessmate.core.enums import PROMOTION_KINDS, Color, PieceKind
from chessmate.core.piece import glyph
from chessmate.core.types import BOARD_SIZE, Position, all_positions
from chessmate.game.controller import SessionView
from chessmate.ui.styles.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders squares, pieces, the selection and the promotion picker.

    Signals:
        square_clicked(Position): A board square was pressed.
        promotion_chosen(PieceKind): A promotion picker entry was pressed.
    """

    square_clicked = pyqtSignal(object)
    promotion_chosen = pyqtSignal(object)

    TILE = 64  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._view: SessionView | None = None
        self._flipped = False

        # Visual layers
        self._square_items: dict[Position, QGraphicsRectItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._piece_items: dict[Position, QGraphicsSimpleTextItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._promotion_items: list[QGraphicsRectItem | QGraphicsSimpleTextItem] = []
        self._promotion_choices: dict[Position, PieceKind] = {}

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_view(self, view: SessionView) -> None:
        """Redraw everything from *view*."""
        self._view = view
        self._sync_pieces()
        self._sync_selection()
        self._sync_promotion()

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation (Black at the bottom)."""
        self._flipped = flipped
        self._draw_board()
        if self._view is not None:
            self.set_view(self._view)

    def is_flipped(self) -> bool:
        return self._flipped

    def promotion_choices(self) -> dict[Position, PieceKind]:
        """Squares currently covered by the promotion picker."""
        return dict(self._promotion_choices)

    def piece_text(self, pos: Position) -> str | None:
        """Glyph drawn on *pos*, if any."""
        item = self._piece_items.get(pos)
        return None if item is None else item.text()

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        self._clear_items(self._coord_items)

        t = self.TILE
        font = QFont("Adwaita Sans", max(8, t // 8))

        for pos in all_positions():
            vc, vr = self._visual_coords(pos)
            color = self._square_color(pos)
            rect = QGraphicsRectItem(vc * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[pos] = rect

            text_color = (
                self._theme.coord_light if pos.is_light else self._theme.coord_dark
            )
            edge_col = 7 if self._flipped else 0
            edge_row = 7 if self._flipped else 0

            # Rank numbers (left edge)
            if pos.col == edge_col:
                self._add_coord(str(pos.row + 1), font, text_color, vc * t + 2, vr * t + 1)

            # File letters (bottom edge)
            if pos.row == edge_row:
                self._add_coord(
                    pos.name[0], font, text_color, vc * t + t - 12, vr * t + t - 16
                )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord(
        self, label: str, font: QFont, color: QColor, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        self.addItem(txt)
        self._coord_items.append(txt)

    def _square_color(self, pos: Position) -> QColor:
        if pos.is_light:
            return self._theme.light_square
        return self._theme.dark_square

    # ── View synchronisation ─────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece glyphs from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._view is None:
            return
        for piece in self._view.board.pieces():
            item = self._make_glyph(piece.kind, piece.color, piece.position)
            item.setZValue(1)
            self._piece_items[piece.position] = item

    def _sync_selection(self) -> None:
        self._clear_items(self._highlight_items)
        if self._view is None or self._view.selected is None:
            return
        rect = self._make_highlight(self._view.selected, self._theme.selected)
        self._highlight_items.append(rect)

    def _sync_promotion(self) -> None:
        """Lay the four promotion choices over the target rank."""
        self._clear_items(self._promotion_items)
        self._promotion_choices.clear()
        if self._view is None or self._view.promotion is None:
            return

        from_sq, to_sq = self._view.promotion
        color = self._view.side_to_move
        first_col = min(from_sq.col, BOARD_SIZE - len(PROMOTION_KINDS))
        for offset, kind in enumerate(PROMOTION_KINDS):
            pos = Position(to_sq.row, first_col + offset)
            rect = self._make_highlight(pos, self._theme.promotion, opaque=True)
            rect.setZValue(2)
            self._promotion_items.append(rect)
            item = self._make_glyph(kind, color, pos)
            item.setZValue(3)
            self._promotion_items.append(item)
            self._promotion_choices[pos] = kind

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is None or self._view is None:
            return super().mousePressEvent(event)

        pos = self._pos_to_square(event.scenePos())
        if pos is None:
            return super().mousePressEvent(event)

        kind = self._promotion_choices.get(pos)
        if kind is not None:
            self.promotion_chosen.emit(kind)
        else:
            self.square_clicked.emit(pos)
        event.accept()

    # ── Item helpers ─────────────────────────────────────────────────────

    def _make_glyph(
        self, kind: PieceKind, color: Color, pos: Position
    ) -> QGraphicsSimpleTextItem:
        """Solid glyph filled with the side's colour and outlined in the other."""
        t = self.TILE
        item = QGraphicsSimpleTextItem(glyph(kind, Color.BLACK))
        item.setFont(QFont("DejaVu Sans", int(t * 0.6)))
        if color == Color.WHITE:
            item.setBrush(QBrush(self._theme.piece_white))
            item.setPen(QPen(self._theme.piece_black, 1))
        else:
            item.setBrush(QBrush(self._theme.piece_black))
            item.setPen(QPen(self._theme.piece_white, 0.5))
        item.setData(0, (int(color), int(kind)))

        vc, vr = self._visual_coords(pos)
        bounds = item.boundingRect()
        item.setPos(
            vc * t + (t - bounds.width()) / 2,
            vr * t + (t - bounds.height()) / 2,
        )
        self.addItem(item)
        return item

    def _make_highlight(
        self, pos: Position, color: QColor, *, opaque: bool = False
    ) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vc, vr = self._visual_coords(pos)
        rect = QGraphicsRectItem(vc * t, vr * t, t, t)
        fill = QColor(color)
        if not opaque:
            fill.setAlpha(170)
        rect.setBrush(QBrush(fill))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect

    def _clear_items(self, items: list) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, pos: Position) -> tuple[int, int]:
        """Board position → visual (column, row), row 0 at the top."""
        if self._flipped:
            return 7 - pos.col, pos.row
        return pos.col, 7 - pos.row

    def _pos_to_square(self, point: QPointF) -> Position | None:
        """Scene point → board position."""
        t = self.TILE
        col = int(point.x() // t)
        row = int(point.y() // t)
        if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
            return None
        if self._flipped:
            return Position(row, 7 - col)
        return Position(7 - row, col)
