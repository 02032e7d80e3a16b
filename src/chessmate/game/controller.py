"""GameSessionController: the state machine behind a human-vs-computer game.

Turns square clicks and promotion choices into moves, hands the board to the
opponent's move source after every human move, records captures, and stops
the session on checkmate or stalemate.

Events arrive one at a time through :meth:`GameSessionController.handle` and
are processed to completion.  The opponent's reply comes back through the
same method as an :class:`OpponentMoveReady` event.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessmate.core.board import Board
from chessmate.core.enums import PROMOTION_KINDS, Color, PieceKind
from chessmate.core.move import (
    Move,
    Promotion,
    build_move,
    is_promotion_gesture,
    move_target,
)
from chessmate.core.result import Continuing, IllegalMove, Stalemate, Victory
from chessmate.core.rules import IRulesEngine, Rules
from chessmate.core.types import Position
from chessmate.game.config import SessionConfig
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

_LOGGER = logging.getLogger(__name__)

STALEMATE_MESSAGE = "Stalemate!"


def victory_message(winner: Color) -> str:
    return f"{winner} wins!"


# ── Renderable view ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SessionView:
    """Everything the presentation layer may read."""

    board: Board
    phase: SessionPhase
    selected: Position | None
    promotion: tuple[Position, Position] | None
    captured: CaptureSnapshot
    message: str | None

    @property
    def side_to_move(self) -> Color:
        return self.board.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == SessionPhase.GAME_OVER


ViewCallback = Callable[[SessionView], None]
GameOverCallback = Callable[[str], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_view_changed: list[ViewCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameSessionController:
    """Owns the current board, the capture ledger and the session state.

    Thread-safety: every method must be called from the thread that
    delivers events (the GUI thread).  The scheduler is responsible for
    bringing opponent replies back onto that thread.

    Args:
        config: Move source, starting board and the human's color.
        scheduler: Runs the move source off the event path.  Defaults to a
            :class:`DeferredScheduler`, which computes nothing until
            ``run_pending`` is called.
        rules: Rules engine adapter; defaults to :class:`Rules`.
    """

    __slots__ = (
        "_config",
        "_rules",
        "_scheduler",
        "_board",
        "_ledger",
        "_state",
        "_request_counter",
        "events",
    )

    def __init__(
        self,
        config: SessionConfig,
        scheduler: IMoveScheduler | None = None,
        rules: IRulesEngine | None = None,
    ) -> None:
        self._config = config
        self._rules: IRulesEngine = rules if rules is not None else Rules()
        self._scheduler: IMoveScheduler = (
            scheduler if scheduler is not None else DeferredScheduler()
        )
        self._board = config.starting_board
        self._ledger = CaptureLedger()
        self._state: SessionState = AwaitingFirstClick()
        self._request_counter = 0
        self.events = GameEvents()

        self._scheduler.bind(self.handle)
        self._start_game()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def board(self) -> Board:
        return self._board

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def captured(self) -> CaptureSnapshot:
        return self._ledger.snapshot()

    @property
    def is_game_over(self) -> bool:
        return isinstance(self._state, GameOver)

    @property
    def expected_mover(self) -> Color | None:
        """Side the session is waiting on, or ``None`` once the game is over."""
        if isinstance(self._state, GameOver):
            return None
        if isinstance(self._state, AwaitingOpponentMove):
            return self._config.opponent_color
        return self._config.human_color

    def view(self) -> SessionView:
        state = self._state
        selected = state.from_sq if isinstance(state, AwaitingSecondClick) else None
        promotion = (
            (state.from_sq, state.to_sq)
            if isinstance(state, AwaitingPromotionChoice)
            else None
        )
        message = state.message if isinstance(state, GameOver) else None
        return SessionView(
            board=self._board,
            phase=state.phase,
            selected=selected,
            promotion=promotion,
            captured=self._ledger.snapshot(),
            message=message,
        )

    # ── Event entry point ────────────────────────────────────────────────

    def handle(self, event: SessionEvent) -> None:
        """Process one inbound event to completion.

        Raises:
            EngineContractError: The opponent or the rules engine broke
                its contract.  The board is left untouched.
        """
        before = (self._state, self._board, len(self._ledger))

        if isinstance(self._state, GameOver):
            if isinstance(event, NewGameRequested):
                self._new_game()
            else:
                _LOGGER.debug("Game over; ignoring %s", event)
        elif isinstance(event, SquareClicked):
            self._on_square_clicked(event.position)
        elif isinstance(event, PromotionPieceChosen):
            self._on_promotion_chosen(event.kind)
        elif isinstance(event, OpponentMoveReady):
            self._on_opponent_move(event)
        elif isinstance(event, NewGameRequested):
            _LOGGER.debug("New game is only available once the game is over")
        else:
            raise TypeError(f"Unknown session event: {event!r}")

        if (self._state, self._board, len(self._ledger)) != before:
            _LOGGER.debug("Session state: %s", self._state)
            self._emit_view()

    # ── Event handlers ───────────────────────────────────────────────────

    def _on_square_clicked(self, pos: Position) -> None:
        state = self._state
        human = self._config.human_color

        if isinstance(state, AwaitingFirstClick):
            if self._board.has_ally_piece(pos, human):
                self._state = AwaitingSecondClick(pos)
            return

        if isinstance(state, AwaitingSecondClick):
            if pos == state.from_sq:
                self._state = AwaitingFirstClick()
            elif self._board.has_ally_piece(pos, human):
                self._state = AwaitingSecondClick(pos)
            elif is_promotion_gesture(self._board, state.from_sq, pos):
                self._state = AwaitingPromotionChoice(state.from_sq, pos)
            else:
                self._play_human_move(build_move(self._board, state.from_sq, pos))
            return

        # Pending promotion or opponent reply: clicks are ignored.
        _LOGGER.debug("Ignoring click on %s in %s", pos, state)

    def _on_promotion_chosen(self, kind: PieceKind) -> None:
        state = self._state
        if not isinstance(state, AwaitingPromotionChoice):
            _LOGGER.debug("No promotion pending; ignoring %s", kind)
            return
        if kind not in PROMOTION_KINDS:
            _LOGGER.debug("Cannot promote to %s", kind)
            return
        self._play_human_move(Promotion(state.from_sq, state.to_sq, kind))

    def _on_opponent_move(self, event: OpponentMoveReady) -> None:
        state = self._state
        if (
            not isinstance(state, AwaitingOpponentMove)
            or state.request_id != event.request_id
        ):
            _LOGGER.info(
                "Discarding stale opponent reply %s (request %d)",
                event.move,
                event.request_id,
            )
            return

        # Leave the waiting state first so a duplicate reply is stale.
        self._state = AwaitingFirstClick()
        try:
            self._apply_move(event.move, self._config.opponent_color)
        except EngineContractError:
            self._state = state
            raise

    def _play_human_move(self, move: Move) -> None:
        # The selection is consumed whether or not the move stands.
        self._state = AwaitingFirstClick()
        self._apply_move(move, self._config.human_color)

    # ── Move application ─────────────────────────────────────────────────

    def _apply_move(self, move: Move, mover: Color) -> bool:
        """Validate, apply, record any capture and resolve the next state.

        Returns ``False`` when a human move is rejected.  An opponent move
        that fails validation raises :class:`EngineContractError`.
        """
        board = self._board
        from_opponent = mover == self._config.opponent_color

        if board.side_to_move != mover:
            return self._reject(move, f"{mover} is not to move", from_opponent)
        if not self._rules.is_legal(board, move, mover):
            return self._reject(move, "illegal move", from_opponent)

        # Read before the board is replaced: afterwards the piece is gone.
        target = move_target(move)
        captured = board.piece_at(target) if target is not None else None

        result = self._rules.apply(board, move)
        if isinstance(result, IllegalMove):
            raise self._contract_violation(
                f"Rules engine rejected pre-validated move {move}"
            )
        if not isinstance(result, (Continuing, Victory, Stalemate)):
            raise self._contract_violation(f"Unknown game result {result!r}")

        if captured is not None:
            self._ledger.record(captured)

        if isinstance(result, Continuing):
            self._board = result.board
            if result.board.side_to_move == self._config.opponent_color:
                self._request_opponent_move()
            else:
                self._state = AwaitingFirstClick()
        elif isinstance(result, Victory):
            if result.final_board is not None:
                self._board = result.final_board
            self._finish(victory_message(result.winner))
        else:
            if result.final_board is not None:
                self._board = result.final_board
            self._finish(STALEMATE_MESSAGE)
        return True

    def _reject(self, move: Move, reason: str, from_opponent: bool) -> bool:
        if from_opponent:
            raise self._contract_violation(f"Opponent played {move}: {reason}")
        _LOGGER.debug("Rejected %s: %s", move, reason)
        return False

    def _contract_violation(self, message: str) -> EngineContractError:
        _LOGGER.error("%s (board %s)", message, self._board.fen)
        return EngineContractError(message)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        if self._board.side_to_move == self._config.opponent_color:
            self._request_opponent_move()
        else:
            self._state = AwaitingFirstClick()

    def _new_game(self) -> None:
        self._scheduler.cancel()
        self._board = self._config.starting_board
        self._ledger.clear()
        _LOGGER.info("New game")
        self._start_game()

    def _request_opponent_move(self) -> None:
        self._request_counter += 1
        request_id = self._request_counter
        self._state = AwaitingOpponentMove(request_id)
        self._scheduler.request_move(
            self._config.opponent_move_source, self._board, request_id
        )

    def _finish(self, message: str) -> None:
        self._state = GameOver(message)
        _LOGGER.info("Game over: %s", message)
        for cb in self.events.on_game_over:
            cb(message)

    def _emit_view(self) -> None:
        view = self.view()
        for cb in self.events.on_view_changed:
            cb(view)
