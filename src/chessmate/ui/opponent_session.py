"""Opponent move computation on a worker thread for the main UI thread."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from PyQt6.QtCore import QObject, QThread, QTimer

from chessmate.core.board import Board
from chessmate.core.move import KingSideCastle, PlainMove, Promotion, QueenSideCastle
from chessmate.engine.qt_bridge import MoveWorker
from chessmate.engine.search import MoveSource
from chessmate.game.interfaces import (
    EngineContractError,
    EventSink,
    IMoveScheduler,
    OpponentMoveReady,
)

_LOGGER = logging.getLogger(__name__)

_MOVE_TYPES = (PlainMove, KingSideCastle, QueenSideCastle, Promotion)


class MoveRequestSignal(Protocol):
    """Minimal signal interface used by :class:`OpponentSession`."""

    def connect(self, slot: Callable[..., object]) -> object: ...

    def emit(
        self, source_obj: object, board_obj: object, request_id: int
    ) -> object: ...


class OpponentSession(IMoveScheduler):
    """Runs the opponent's move source in a ``QThread``.

    Requests travel to the :class:`MoveWorker` through *move_request* (a
    signal owned by a QObject living in the GUI thread), so the worker
    receives them with queued delivery.  Replies come back on the GUI thread
    and are handed to the bound sink as :class:`OpponentMoveReady` events
    after a short delay, leaving time for the human's move to be drawn.
    """

    _REPLY_DELAY_MS = 150

    __slots__ = (
        "__weakref__",
        "_move_request",
        "_sink",
        "_reply_timer",
        "_pending_reply",
        "_thread",
        "_worker",
        "_pending_request",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        *,
        move_request: MoveRequestSignal,
        parent: QObject | None = None,
    ) -> None:
        self._move_request = move_request
        self._sink: EventSink | None = None

        self._reply_timer = QTimer(parent)
        self._reply_timer.setSingleShot(True)
        self._reply_timer.timeout.connect(self._deliver_pending_reply)
        self._pending_reply: OpponentMoveReady | None = None

        self._thread = QThread(parent)
        self._worker = MoveWorker()
        self._pending_request: int | None = None
        self._is_shutting_down = False
        self._is_started = False

    @property
    def is_thinking(self) -> bool:
        return self._pending_request is not None or self._pending_reply is not None

    def setup(self) -> None:
        """Start the worker thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._thread)
        self._move_request.connect(self._worker.request_move)
        self._worker.move_ready.connect(self._on_move_ready)
        self._worker.search_cancelled.connect(self._on_search_cancelled)
        self._worker.search_error.connect(self._on_search_error)
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Cancel outstanding work and stop the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel()
        self._thread.quit()
        self._thread.wait(2000)
        self._is_started = False

    # ── IMoveScheduler ───────────────────────────────────────────────────

    def bind(self, sink: EventSink) -> None:
        self._sink = sink

    def request_move(self, source: MoveSource, board: Board, request_id: int) -> None:
        """Ask the worker for *source*'s reply to *board*."""
        if not self._is_started or self._is_shutting_down:
            _LOGGER.debug("Session not running; dropping request %d", request_id)
            return
        self._reply_timer.stop()
        self._pending_reply = None
        self._pending_request = request_id
        self._move_request.emit(source, board, request_id)

    def cancel(self) -> None:
        """Forget the outstanding request; its reply will be dropped."""
        self._reply_timer.stop()
        self._pending_reply = None
        self._pending_request = None
        # The worker is busy inside the move source, so a queued call would
        # only arrive after it finishes.  The event is thread-safe.
        self._worker.cancel()

    # ── Worker callbacks (GUI thread) ────────────────────────────────────

    def _on_move_ready(self, request_id: int, move_obj: object) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_request:
            _LOGGER.debug("Dropping reply to cancelled request %d", request_id)
            return
        if not isinstance(move_obj, _MOVE_TYPES):
            self._pending_request = None
            _LOGGER.error("Move source returned %r", move_obj)
            raise EngineContractError(f"Move source returned non-move {move_obj!r}")

        self._pending_request = None
        self._pending_reply = OpponentMoveReady(move_obj, request_id)
        self._reply_timer.start(self._REPLY_DELAY_MS)

    def _on_search_cancelled(self, request_id: int) -> None:
        _LOGGER.debug("Request %d cancelled", request_id)
        if request_id == self._pending_request:
            self._pending_request = None

    def _on_search_error(self, request_id: int, message: str) -> None:
        if self._is_shutting_down or request_id != self._pending_request:
            return
        self._pending_request = None
        _LOGGER.error("Move source failed for request %d: %s", request_id, message)
        raise EngineContractError(f"Move source failed: {message}")

    def _deliver_pending_reply(self) -> None:
        reply = self._pending_reply
        if self._is_shutting_down or reply is None:
            return
        self._pending_reply = None
        if self._sink is None:
            raise RuntimeError("OpponentSession is not bound to a controller")
        self._sink(reply)

