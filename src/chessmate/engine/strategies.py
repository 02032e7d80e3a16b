"""Interchangeable opponent move sources.

Each strategy is a plain ``Board -> Move`` callable; the session controller
only ever sees :data:`~chessmate.engine.search.MoveSource`.
"""

from __future__ import annotations

import logging
import random
from functools import partial
from time import perf_counter

from chessmate.core.board import Board
from chessmate.core.move import Move
from chessmate.engine.minimax import MinimaxSearch
from chessmate.engine.search import (
    DEFAULT_DEPTH,
    CancelCheck,
    MoveSource,
    NoLegalMoveError,
    SearchLimits,
    active_cancel_check,
)

_LOGGER = logging.getLogger(__name__)


def _searched_move(
    board: Board,
    depth: int,
    *,
    prefer_worst: bool,
    is_cancelled: CancelCheck | None,
) -> Move:
    started = perf_counter()
    result = MinimaxSearch().search(
        board,
        SearchLimits(max_depth=depth),
        is_cancelled or active_cancel_check(),
        prefer_worst=prefer_worst,
    )
    if result.best_move is None:
        raise NoLegalMoveError(f"No legal move in position {board.fen}")
    _LOGGER.debug(
        "Searched %d nodes to depth %d in %.3fs: %s (score %d)",
        result.nodes,
        result.depth,
        perf_counter() - started,
        result.best_move,
        result.score_cp,
    )
    return result.best_move


def best_move(
    board: Board,
    depth: int = DEFAULT_DEPTH,
    *,
    is_cancelled: CancelCheck | None = None,
) -> Move:
    """Strongest move found by a fixed-depth search.

    The search stops early once *is_cancelled* (or the check installed by
    :func:`~chessmate.engine.search.cancellable`) returns true, and the best
    move found so far is returned.
    """
    return _searched_move(
        board, depth, prefer_worst=False, is_cancelled=is_cancelled
    )


def worst_move(
    board: Board,
    depth: int = DEFAULT_DEPTH,
    *,
    is_cancelled: CancelCheck | None = None,
) -> Move:
    """Weakest move found by a fixed-depth search; cancels like :func:`best_move`."""
    return _searched_move(board, depth, prefer_worst=True, is_cancelled=is_cancelled)


def random_move(board: Board, rng: random.Random | None = None) -> Move:
    """Uniformly random legal move."""
    moves = board.legal_moves()
    if not moves:
        raise NoLegalMoveError(f"No legal move in position {board.fen}")
    return (rng or random).choice(moves)


STRATEGY_NAMES: tuple[str, ...] = ("best", "worst", "random")


def make_move_source(
    name: str, depth: int = DEFAULT_DEPTH, seed: int | None = None
) -> MoveSource:
    """Build the move source registered under *name*.

    *seed* only affects the random strategy.
    """
    if depth <= 0:
        raise ValueError("Search depth must be >= 1")
    if name == "best":
        return partial(best_move, depth=depth)
    if name == "worst":
        return partial(worst_move, depth=depth)
    if name == "random":
        if seed is None:
            return random_move
        return partial(random_move, rng=random.Random(seed))
    raise ValueError(
        f"Unknown strategy {name!r}; expected one of {', '.join(STRATEGY_NAMES)}"
    )
