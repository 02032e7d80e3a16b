"""Qt bridge to run a move source in a worker thread."""

from __future__ import annotations

import logging
import threading
from time import perf_counter

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessmate.core.board import Board
from chessmate.engine.search import cancellable

_LOGGER = logging.getLogger(__name__)


class MoveWorker(QObject):
    """Thread-affine worker that computes opponent moves on demand."""

    move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event",)

    def __init__(self) -> None:
        super().__init__()
        self._cancel_event = threading.Event()

    @pyqtSlot(object, object, int)
    def request_move(
        self, source_obj: object, board_obj: object, request_id: int
    ) -> None:
        """Run *source_obj* on *board_obj* and emit the chosen move."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Worker received invalid board")
            return
        if not callable(source_obj):
            self.search_error.emit(request_id, "Worker received invalid move source")
            return

        self._cancel_event.clear()
        started = perf_counter()
        try:
            with cancellable(self._cancel_event.is_set):
                move = source_obj(board_obj)
        except Exception as exc:
            _LOGGER.exception("Move source failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return
        _LOGGER.debug(
            "Request %d answered in %.3fs: %s", request_id, perf_counter() - started, move
        )

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        self.move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Stop the current search and discard its result.

        Called directly from the GUI thread; a queued call would wait behind
        the running search.
        """
        self._cancel_event.set()
