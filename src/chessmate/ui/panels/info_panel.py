"""InfoPanel: side to move, captured pieces and game-over message."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessmate.core.enums import Color
from chessmate.game.controller import SessionView
from chessmate.game.interfaces import SessionPhase


class InfoPanel(QWidget):
    """Text read-outs beside the board plus the game buttons.

    Each side's list shows what it has taken, so White's row holds black
    pieces.
    """

    new_game_clicked = pyqtSignal()
    flip_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(8)

        title_font = QFont("Adwaita Sans", 13, QFont.Weight.Bold)
        body_font = QFont("Adwaita Sans", 11)
        glyph_font = QFont("DejaVu Sans", 18)

        self._turn_label = QLabel()
        self._turn_label.setFont(title_font)
        layout.addWidget(self._turn_label)

        self._thinking_label = QLabel("Thinking…")
        self._thinking_label.setObjectName("thinkingLabel")
        self._thinking_label.setFont(body_font)
        self._thinking_label.setVisible(False)
        layout.addWidget(self._thinking_label)

        self._captured_labels: dict[Color, QLabel] = {}
        for color in Color:
            caption = QLabel(f"Captured by {color}")
            caption.setFont(body_font)
            layout.addWidget(caption)
            pieces = QLabel()
            pieces.setObjectName("capturedPieces")
            pieces.setFont(glyph_font)
            pieces.setWordWrap(True)
            pieces.setMinimumHeight(28)
            layout.addWidget(pieces)
            self._captured_labels[color] = pieces

        layout.addStretch(1)

        self._message_label = QLabel()
        self._message_label.setObjectName("gameOverMessage")
        self._message_label.setFont(title_font)
        self._message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message_label.setVisible(False)
        layout.addWidget(self._message_label)

        buttons = QHBoxLayout()
        self._btn_new = QPushButton("New Game")
        self._btn_new.setFont(body_font)
        self._btn_new.setMinimumHeight(36)
        self._btn_new.setVisible(False)
        self._btn_new.clicked.connect(self.new_game_clicked)
        buttons.addWidget(self._btn_new)

        self._btn_flip = QPushButton("Flip Board")
        self._btn_flip.setFont(body_font)
        self._btn_flip.setMinimumHeight(36)
        self._btn_flip.clicked.connect(self.flip_clicked)
        buttons.addWidget(self._btn_flip)
        layout.addLayout(buttons)

    def set_view(self, view: SessionView) -> None:
        """Refresh every label from *view*."""
        if view.is_game_over:
            self._turn_label.setText("Game over")
        else:
            self._turn_label.setText(f"Turn: {view.side_to_move}")

        self._thinking_label.setVisible(
            view.phase == SessionPhase.AWAITING_OPPONENT_MOVE
        )
        for color, label in self._captured_labels.items():
            label.setText(" ".join(view.captured.symbols(color.opposite)))

        self._message_label.setText(view.message or "")
        self._message_label.setVisible(view.message is not None)
        self._btn_new.setVisible(view.is_game_over)

    # ── Read-outs (used by tests and the status bar) ─────────────────────

    def turn_text(self) -> str:
        return self._turn_label.text()

    def captured_text(self, color: Color) -> str:
        """Glyphs of the pieces *color* has captured."""
        return self._captured_labels[color].text()

    def message_text(self) -> str:
        return self._message_label.text()

    def is_new_game_available(self) -> bool:
        return not self._btn_new.isHidden()

    def is_thinking_shown(self) -> bool:
        return not self._thinking_label.isHidden()
