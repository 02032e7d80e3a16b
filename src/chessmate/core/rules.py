"""Rules engine adapter: legality, move application and terminal detection.

All chess knowledge lives in python-chess; this module only translates
between the model types and the library.
"""

from __future__ import annotations

from typing import Protocol

from chessmate.core.board import Board
from chessmate.core.enums import Color
from chessmate.core.move import KingSideCastle, Move, QueenSideCastle
from chessmate.core.result import (
    Continuing,
    GameResult,
    IllegalMove,
    Stalemate,
    Victory,
)


class IRulesEngine(Protocol):
    """Contract the session controller calls through."""

    def is_legal(self, board: Board, move: Move, color: Color) -> bool: ...

    def apply(self, board: Board, move: Move) -> GameResult: ...


class Rules:
    """Static rule-checker over :class:`Board` snapshots."""

    @staticmethod
    def is_legal(board: Board, move: Move, color: Color) -> bool:
        """Whether *color* may play *move* on *board* right now."""
        if board.side_to_move != color:
            return False
        if not isinstance(move, (KingSideCastle, QueenSideCastle)):
            if not board.has_ally_piece(move.from_sq, color):
                return False

        engine_move = board.to_engine_move(move)
        native = board.chess_board()
        if engine_move not in native.legal_moves:
            return False
        # A two-square king step is only accepted as a castle variant.
        if isinstance(move, KingSideCastle):
            return native.is_kingside_castling(engine_move)
        if isinstance(move, QueenSideCastle):
            return native.is_queenside_castling(engine_move)
        return not native.is_castling(engine_move)

    @staticmethod
    def apply(board: Board, move: Move) -> GameResult:
        """Play *move* for the side to move and classify the outcome."""
        mover = board.side_to_move
        if not Rules.is_legal(board, move, mover):
            return IllegalMove(move)

        native = board.chess_board()
        native.push(board.to_engine_move(move))

        if native.is_checkmate():
            return Victory(mover, Board.from_chess(native))
        if native.is_stalemate():
            return Stalemate(Board.from_chess(native))
        return Continuing(Board.from_chess(native))
