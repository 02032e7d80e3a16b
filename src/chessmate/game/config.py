"""Per-session configuration passed into the controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessmate.core.board import Board
from chessmate.core.enums import Color
from chessmate.engine.search import MoveSource


@dataclass(frozen=True)
class SessionConfig:
    """Everything a session needs that is fixed for its lifetime.

    Args:
        opponent_move_source: Picks the computer's reply on a given board.
        starting_board: Board every new game starts from.
        human_color: Side the human plays; the opponent plays the other.
    """

    opponent_move_source: MoveSource
    starting_board: Board = field(default_factory=Board.default)
    human_color: Color = Color.WHITE

    @property
    def opponent_color(self) -> Color:
        return self.human_color.opposite
