"""Visual theme constants and QSS styles for chessmate."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    selected: QColor  # square picked by the first click
    promotion: QColor  # promotion picker background
    piece_white: QColor
    piece_black: QColor
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            selected=QColor(130, 151, 105),  # sage
            promotion=QColor(130, 151, 105),
            piece_white=QColor(255, 255, 255),
            piece_black=QColor(0, 0, 0),
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
        )


APP_STYLE = """
QMainWindow, QWidget {
    background: #f3f3f3;
}

QLabel {
    color: #202020;
    font-family: "Adwaita Sans", "Helvetica Neue", sans-serif;
}

QLabel#thinkingLabel {
    color: #5a6f45;
    font-style: italic;
}

QLabel#gameOverMessage {
    color: #8b2f1e;
    padding: 8px;
    border: 1px solid #b58863;
    border-radius: 4px;
    background: #f0d9b5;
}

QLabel#capturedPieces {
    color: #303030;
}

QStatusBar QLabel {
    color: #606060;
    font-family: "DejaVu Sans Mono", monospace;
    font-size: 11px;
}

QPushButton {
    background: #e0e0e0;
    color: #202020;
    border: 1px solid #b0b0b0;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #d0d0d0;
}
QPushButton:pressed {
    background: #829769;
}
QPushButton:disabled {
    color: #909090;
}
"""
