"""Shared engine search models and the move-source contract."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TypeAlias

from chessmate.core.board import Board
from chessmate.core.move import Move

CancelCheck = Callable[[], bool]

# Board → one legal move for the side to move.
MoveSource: TypeAlias = Callable[[Board], Move]

DEFAULT_DEPTH = 3

_ACTIVE_CANCEL_CHECK: ContextVar[CancelCheck | None] = ContextVar(
    "active_cancel_check", default=None
)


@contextmanager
def cancellable(is_cancelled: CancelCheck) -> Iterator[None]:
    """Let searches started inside the block on this thread poll *is_cancelled*."""
    token = _ACTIVE_CANCEL_CHECK.set(is_cancelled)
    try:
        yield
    finally:
        _ACTIVE_CANCEL_CHECK.reset(token)


def active_cancel_check() -> CancelCheck | None:
    return _ACTIVE_CANCEL_CHECK.get()


class NoLegalMoveError(ValueError):
    """A move source was asked to move on a board with no legal moves."""


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = DEFAULT_DEPTH


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int
