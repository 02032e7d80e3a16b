"""Move value objects.

A move is one of four immutable variants:

* :class:`PlainMove`: any piece from one square to another.
* :class:`KingSideCastle` / :class:`QueenSideCastle`: castling for the side
  to move; the squares follow from the board.
* :class:`Promotion`: a pawn reaching the last rank, with the chosen kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias, Union

from chessmate.core.enums import PROMOTION_KINDS, PieceKind
from chessmate.core.types import Position

if TYPE_CHECKING:
    from chessmate.core.board import Board

_PROMO_CHARS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class PlainMove:
    from_sq: Position
    to_sq: Position

    def __str__(self) -> str:
        return f"{self.from_sq}{self.to_sq}"


@dataclass(frozen=True, slots=True)
class KingSideCastle:
    def __str__(self) -> str:
        return "O-O"


@dataclass(frozen=True, slots=True)
class QueenSideCastle:
    def __str__(self) -> str:
        return "O-O-O"


@dataclass(frozen=True, slots=True)
class Promotion:
    from_sq: Position
    to_sq: Position
    kind: PieceKind

    def __post_init__(self) -> None:
        if self.kind not in PROMOTION_KINDS:
            raise ValueError(f"Cannot promote to {self.kind.name.lower()}")

    def __str__(self) -> str:
        return f"{self.from_sq}{self.to_sq}{_PROMO_CHARS[self.kind]}"


Move: TypeAlias = Union[PlainMove, KingSideCastle, QueenSideCastle, Promotion]


def move_target(move: Move) -> Position | None:
    """Destination square that may hold a captured piece.

    Castles never capture, so they have no target.
    """
    if isinstance(move, (PlainMove, Promotion)):
        return move.to_sq
    return None


# ── Click gestures → moves ───────────────────────────────────────────────────


def is_promotion_gesture(board: Board, from_sq: Position, to_sq: Position) -> bool:
    """Whether moving from *from_sq* to *to_sq* needs a promotion choice.

    Only the piece kind and the target rank are inspected; legality is
    left to the rules engine once the kind has been chosen.
    """
    piece = board.piece_at(from_sq)
    if piece is None or piece.kind != PieceKind.PAWN:
        return False
    return to_sq.row == piece.color.promotion_rank


def build_move(board: Board, from_sq: Position, to_sq: Position) -> Move:
    """Interpret two clicked squares as a move on *board*.

    A king stepping two columns sideways is a castle; everything else is a
    plain move.
    """
    piece = board.piece_at(from_sq)
    if (
        piece is not None
        and piece.kind == PieceKind.KING
        and from_sq.row == to_sq.row
        and abs(to_sq.col - from_sq.col) == 2
    ):
        if to_sq.col > from_sq.col:
            return KingSideCastle()
        return QueenSideCastle()
    return PlainMove(from_sq, to_sq)
