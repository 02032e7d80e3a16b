"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessmate.core.enums import Color, PieceKind
from chessmate.core.types import Position

_FEN_CHARS: dict[PieceKind, str] = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}

_UNICODE: dict[tuple[Color, PieceKind], str] = {
    (Color.WHITE, PieceKind.PAWN): "♙",
    (Color.WHITE, PieceKind.KNIGHT): "♘",
    (Color.WHITE, PieceKind.BISHOP): "♗",
    (Color.WHITE, PieceKind.ROOK): "♖",
    (Color.WHITE, PieceKind.QUEEN): "♕",
    (Color.WHITE, PieceKind.KING): "♔",
    (Color.BLACK, PieceKind.PAWN): "♟",
    (Color.BLACK, PieceKind.KNIGHT): "♞",
    (Color.BLACK, PieceKind.BISHOP): "♝",
    (Color.BLACK, PieceKind.ROOK): "♜",
    (Color.BLACK, PieceKind.QUEEN): "♛",
    (Color.BLACK, PieceKind.KING): "♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object: a piece of some kind and color on a square."""

    kind: PieceKind
    color: Color
    position: Position

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]

    @property
    def fen_char(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        char = _FEN_CHARS[self.kind]
        return char.upper() if self.color == Color.WHITE else char

    def moved_to(self, position: Position) -> Piece:
        """Same piece standing on *position*."""
        return Piece(self.kind, self.color, position)

    def __str__(self) -> str:
        return f"{self.fen_char}@{self.position}"


def glyph(kind: PieceKind, color: Color) -> str:
    """Unicode symbol for a piece kind not bound to a square."""
    return _UNICODE[(color, kind)]
