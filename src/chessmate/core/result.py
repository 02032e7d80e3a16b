"""Outcome of applying a move to a board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from chessmate.core.board import Board
from chessmate.core.enums import Color
from chessmate.core.move import Move


@dataclass(frozen=True, slots=True)
class Continuing:
    """The game goes on from *board*."""

    board: Board


@dataclass(frozen=True, slots=True)
class Victory:
    """Checkmate; *winner* delivered it on *final_board*."""

    winner: Color
    final_board: Board | None = None


@dataclass(frozen=True, slots=True)
class Stalemate:
    """Side to move has no legal move and is not in check."""

    final_board: Board | None = None


@dataclass(frozen=True, slots=True)
class IllegalMove:
    """The move was rejected; the board is unchanged."""

    move: Move


GameResult: TypeAlias = Union[Continuing, Victory, Stalemate, IllegalMove]


def is_terminal(result: GameResult) -> bool:
    return isinstance(result, (Victory, Stalemate))
