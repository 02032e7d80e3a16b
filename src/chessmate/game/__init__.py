"""Game session layer: controller, capture ledger, scheduling, self-play.

Quick start::

    from chessmate.core import Position
    from chessmate.engine import random_move
    from chessmate.game import (
        DeferredScheduler,
        GameSessionController,
        SessionConfig,
        SquareClicked,
    )

    scheduler = DeferredScheduler()
    ctrl = GameSessionController(SessionConfig(random_move), scheduler)
    ctrl.handle(SquareClicked(Position.parse("e2")))
    ctrl.handle(SquareClicked(Position.parse("e4")))
    scheduler.run_pending()  # opponent replies
"""

from chessmate.game.config import SessionConfig
from chessmate.game.controller import (
    GameEvents,
    GameSessionController,
    SessionView,
    victory_message,
)
from chessmate.game.interfaces import (
    AwaitingFirstClick,
    AwaitingOpponentMove,
    AwaitingPromotionChoice,
    AwaitingSecondClick,
    EngineContractError,
    GameOver,
    IMoveScheduler,
    NewGameRequested,
    OpponentMoveReady,
    PromotionPieceChosen,
    SessionEvent,
    SessionPhase,
    SessionState,
    SquareClicked,
)
from chessmate.game.ledger import CaptureLedger, CaptureSnapshot
from chessmate.game.scheduler import DeferredScheduler
from chessmate.game.selfplay import SelfPlayRecord, play_out

__all__ = [
    # Interfaces
    "EngineContractError",
    "IMoveScheduler",
    "SessionPhase",
    # States
    "AwaitingFirstClick",
    "AwaitingOpponentMove",
    "AwaitingPromotionChoice",
    "AwaitingSecondClick",
    "GameOver",
    "SessionState",
    # Events
    "NewGameRequested",
    "OpponentMoveReady",
    "PromotionPieceChosen",
    "SessionEvent",
    "SquareClicked",
    # Concrete
    "CaptureLedger",
    "CaptureSnapshot",
    "DeferredScheduler",
    "GameEvents",
    "GameSessionController",
    "SelfPlayRecord",
    "SessionConfig",
    "SessionView",
    "play_out",
    "victory_message",
]
