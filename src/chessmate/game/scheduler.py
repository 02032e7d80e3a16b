"""In-process scheduler that runs move sources when asked to."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from chessmate.game.interfaces import EventSink, IMoveScheduler, OpponentMoveReady

if TYPE_CHECKING:
    from chessmate.core.board import Board
    from chessmate.engine.search import MoveSource


class DeferredScheduler(IMoveScheduler):
    """Queues requests and runs them on :meth:`run_pending`.

    Nothing is computed inside :meth:`request_move`, so a reply can never
    re-enter the controller while it is still handling the event that
    asked for it.  Useful for tests and headless play.
    """

    __slots__ = ("_sink", "_jobs")

    def __init__(self) -> None:
        self._sink: EventSink | None = None
        self._jobs: deque[tuple[MoveSource, Board, int]] = deque()

    def bind(self, sink: EventSink) -> None:
        self._sink = sink

    def request_move(self, source: MoveSource, board: Board, request_id: int) -> None:
        self._jobs.append((source, board, request_id))

    def cancel(self) -> None:
        self._jobs.clear()

    @property
    def pending(self) -> int:
        return len(self._jobs)

    def last_request(self) -> tuple[Board, int] | None:
        """Board and id of the most recent queued request, if any."""
        if not self._jobs:
            return None
        _, board, request_id = self._jobs[-1]
        return board, request_id

    def run_pending(self) -> int:
        """Compute and deliver every queued request; return how many ran.

        Requests queued while delivering are left for the next call.
        """
        if self._sink is None:
            raise RuntimeError("DeferredScheduler is not bound to a sink")
        ran = 0
        for _ in range(len(self._jobs)):
            if not self._jobs:
                break
            source, board, request_id = self._jobs.popleft()
            self._sink(OpponentMoveReady(source(board), request_id))
            ran += 1
        return ran
