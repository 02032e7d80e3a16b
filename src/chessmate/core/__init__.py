"""Core domain layer: board coordinates, pieces, moves, rules adapter.

Quick start::

    from chessmate.core import Board, Position, PlainMove, Rules

    board = Board.default()
    move = PlainMove(Position.parse("e2"), Position.parse("e4"))
    result = Rules.apply(board, move)
"""

from chessmate.core.board import STARTING_FEN, Board
from chessmate.core.enums import PROMOTION_KINDS, Color, PieceKind
from chessmate.core.move import (
    KingSideCastle,
    Move,
    PlainMove,
    Promotion,
    QueenSideCastle,
    build_move,
    is_promotion_gesture,
    move_target,
)
from chessmate.core.piece import Piece
from chessmate.core.result import (
    Continuing,
    GameResult,
    IllegalMove,
    Stalemate,
    Victory,
    is_terminal,
)
from chessmate.core.rules import IRulesEngine, Rules
from chessmate.core.types import Position

__all__ = [
    # Enums
    "PROMOTION_KINDS",
    "Color",
    "PieceKind",
    # Values
    "Board",
    "Piece",
    "Position",
    "STARTING_FEN",
    # Moves
    "KingSideCastle",
    "Move",
    "PlainMove",
    "Promotion",
    "QueenSideCastle",
    "build_move",
    "is_promotion_gesture",
    "move_target",
    # Results
    "Continuing",
    "GameResult",
    "IllegalMove",
    "Stalemate",
    "Victory",
    "is_terminal",
    # Rules
    "IRulesEngine",
    "Rules",
]
