"""Capture ledger: captured pieces grouped by their own color."""

from __future__ import annotations

from dataclasses import dataclass

from chessmate.core.enums import Color
from chessmate.core.piece import Piece


@dataclass(frozen=True, slots=True)
class CaptureSnapshot:
    """Immutable copy of the ledger for display."""

    white: tuple[Piece, ...] = ()
    black: tuple[Piece, ...] = ()

    def of(self, color: Color) -> tuple[Piece, ...]:
        """Captured pieces that belonged to *color*."""
        return self.white if color == Color.WHITE else self.black

    def symbols(self, color: Color) -> str:
        return "".join(piece.symbol for piece in self.of(color))


class CaptureLedger:
    """Append-only record of captured pieces for one session."""

    __slots__ = ("_white", "_black")

    def __init__(self) -> None:
        self._white: list[Piece] = []
        self._black: list[Piece] = []

    def record(self, piece: Piece) -> None:
        """Append *piece* to the list of its own color."""
        if piece.color == Color.WHITE:
            self._white.append(piece)
        else:
            self._black.append(piece)

    def snapshot(self) -> CaptureSnapshot:
        return CaptureSnapshot(tuple(self._white), tuple(self._black))

    def clear(self) -> None:
        self._white.clear()
        self._black.clear()

    def __len__(self) -> int:
        return len(self._white) + len(self._black)
