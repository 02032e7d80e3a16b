"""Session states, inbound events and the abstract scheduler interface.

The controller depends on :class:`IMoveScheduler`, not on a concrete
thread or event loop: tests use :class:`~chessmate.game.scheduler.DeferredScheduler`,
the GUI uses a Qt worker thread.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING, TypeAlias, Union

from chessmate.core.enums import PieceKind
from chessmate.core.move import Move
from chessmate.core.types import Position

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.engine.search import MoveSource


class EngineContractError(RuntimeError):
    """A collaborator broke its contract (e.g. the opponent played an illegal move).

    This is a bug in the rules engine or the move source, never a
    recoverable session condition.
    """


# ── Session FSM states ───────────────────────────────────────────────────────


class SessionPhase(IntEnum):
    """Display names for the session states."""

    AWAITING_FIRST_CLICK = auto()
    AWAITING_SECOND_CLICK = auto()
    AWAITING_PROMOTION_CHOICE = auto()
    AWAITING_OPPONENT_MOVE = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class AwaitingFirstClick:
    phase = SessionPhase.AWAITING_FIRST_CLICK


@dataclass(frozen=True, slots=True)
class AwaitingSecondClick:
    from_sq: Position
    phase = SessionPhase.AWAITING_SECOND_CLICK


@dataclass(frozen=True, slots=True)
class AwaitingPromotionChoice:
    from_sq: Position
    to_sq: Position
    phase = SessionPhase.AWAITING_PROMOTION_CHOICE


@dataclass(frozen=True, slots=True)
class AwaitingOpponentMove:
    request_id: int
    phase = SessionPhase.AWAITING_OPPONENT_MOVE


@dataclass(frozen=True, slots=True)
class GameOver:
    message: str
    phase = SessionPhase.GAME_OVER


SessionState: TypeAlias = Union[
    AwaitingFirstClick,
    AwaitingSecondClick,
    AwaitingPromotionChoice,
    AwaitingOpponentMove,
    GameOver,
]


# ── Inbound events ───────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SquareClicked:
    position: Position


@dataclass(frozen=True, slots=True)
class PromotionPieceChosen:
    kind: PieceKind


@dataclass(frozen=True, slots=True)
class OpponentMoveReady:
    move: Move
    request_id: int


@dataclass(frozen=True, slots=True)
class NewGameRequested:
    pass


SessionEvent: TypeAlias = Union[
    SquareClicked,
    PromotionPieceChosen,
    OpponentMoveReady,
    NewGameRequested,
]

EventSink = Callable[[SessionEvent], None]


# ── Outbound: opponent move scheduling ───────────────────────────────────────


class IMoveScheduler(ABC):
    """Runs a move source off the event path and delivers the reply.

    Replies must reach the sink as :class:`OpponentMoveReady` events on the
    same thread that delivers every other event, never from inside
    :meth:`request_move`.
    """

    __slots__ = ()

    @abstractmethod
    def bind(self, sink: EventSink) -> None:
        """Set where finished moves are delivered."""

    @abstractmethod
    def request_move(self, source: MoveSource, board: Board, request_id: int) -> None:
        """Start computing ``source(board)`` for *request_id*."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop any pending or running computation."""
