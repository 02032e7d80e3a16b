"""Board snapshot: an immutable view of one chess position.

The snapshot keeps a private python-chess board for the rules engine and
exposes only read operations in terms of :class:`Position` / :class:`Piece`
/ :class:`Move`.  Applying a move never touches an existing snapshot: the
rules adapter builds a new one (see :mod:`chessmate.core.rules`).
"""

from __future__ import annotations

import chess

from chessmate.core.enums import Color, PieceKind
from chessmate.core.move import (
    KingSideCastle,
    Move,
    PlainMove,
    Promotion,
    QueenSideCastle,
)
from chessmate.core.piece import Piece
from chessmate.core.types import Position

STARTING_FEN = chess.STARTING_FEN


def to_square(pos: Position) -> chess.Square:
    """Position → python-chess square index."""
    return chess.square(pos.col, pos.row)


def from_square(sq: chess.Square) -> Position:
    """python-chess square index → Position."""
    return Position(chess.square_rank(sq), chess.square_file(sq))


def _color_of(flag: chess.Color) -> Color:
    return Color.WHITE if flag == chess.WHITE else Color.BLACK


def _chess_color(color: Color) -> chess.Color:
    return chess.WHITE if color == Color.WHITE else chess.BLACK


class Board:
    """Immutable chess position snapshot."""

    __slots__ = ("_board",)

    def __init__(self, fen: str = STARTING_FEN) -> None:
        self._board = chess.Board(fen)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def default(cls) -> Board:
        """Standard starting position."""
        return cls()

    @classmethod
    def from_fen(cls, fen: str) -> Board:
        """Parse a FEN string; raises ``ValueError`` when it is malformed."""
        return cls(fen)

    @classmethod
    def from_chess(cls, board: chess.Board) -> Board:
        """Snapshot a python-chess board (the argument is copied)."""
        snapshot = cls.__new__(cls)
        snapshot._board = board.copy()
        return snapshot

    def chess_board(self) -> chess.Board:
        """Return a private mutable copy for the rules engine and search."""
        return self._board.copy()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def fen(self) -> str:
        return self._board.fen()

    @property
    def side_to_move(self) -> Color:
        return _color_of(self._board.turn)

    def piece_at(self, pos: Position) -> Piece | None:
        piece = self._board.piece_at(to_square(pos))
        if piece is None:
            return None
        return Piece(PieceKind(piece.piece_type), _color_of(piece.color), pos)

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """All pieces on the board, optionally only those of *color*."""
        result = []
        for sq, piece in sorted(self._board.piece_map().items()):
            owner = _color_of(piece.color)
            if color is not None and owner != color:
                continue
            result.append(Piece(PieceKind(piece.piece_type), owner, from_square(sq)))
        return result

    def has_ally_piece(self, pos: Position, color: Color) -> bool:
        piece = self._board.piece_at(to_square(pos))
        return piece is not None and _color_of(piece.color) == color

    def king_position(self, color: Color) -> Position | None:
        sq = self._board.king(_chess_color(color))
        return None if sq is None else from_square(sq)

    def is_check(self) -> bool:
        """Whether the side to move is in check."""
        return self._board.is_check()

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move, as model moves."""
        return [self.from_engine_move(m) for m in self._board.legal_moves]

    # ── Move conversion ──────────────────────────────────────────────────

    def to_engine_move(self, move: Move) -> chess.Move:
        """Translate a model move into a python-chess move.

        Castles resolve against the side to move: the king's two-square
        step along its back rank.
        """
        if isinstance(move, Promotion):
            return chess.Move(
                to_square(move.from_sq),
                to_square(move.to_sq),
                promotion=int(move.kind),
            )
        if isinstance(move, PlainMove):
            return chess.Move(to_square(move.from_sq), to_square(move.to_sq))

        rank = self.side_to_move.back_rank
        if isinstance(move, KingSideCastle):
            return chess.Move(chess.square(4, rank), chess.square(6, rank))
        if isinstance(move, QueenSideCastle):
            return chess.Move(chess.square(4, rank), chess.square(2, rank))
        raise TypeError(f"Not a move: {move!r}")

    def from_engine_move(self, move: chess.Move) -> Move:
        """Translate a python-chess move legal on this board into a model move."""
        if self._board.is_kingside_castling(move):
            return KingSideCastle()
        if self._board.is_queenside_castling(move):
            return QueenSideCastle()
        if move.promotion is not None:
            return Promotion(
                from_square(move.from_square),
                from_square(move.to_square),
                PieceKind(move.promotion),
            )
        return PlainMove(from_square(move.from_square), from_square(move.to_square))

    # ── Dunder ───────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.fen == other.fen

    def __hash__(self) -> int:
        return hash(self.fen)

    def __repr__(self) -> str:
        return f"Board({self.fen!r})"

    def __str__(self) -> str:
        return self._board.unicode(empty_square="·")
