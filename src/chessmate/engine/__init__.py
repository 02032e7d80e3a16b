"""Opponent move sources: fixed-depth search, random play, Qt worker bridge."""

from chessmate.engine.minimax import MinimaxSearch
from chessmate.engine.search import (
    DEFAULT_DEPTH,
    MoveSource,
    NoLegalMoveError,
    SearchLimits,
    SearchResult,
    cancellable,
)
from chessmate.engine.strategies import (
    STRATEGY_NAMES,
    best_move,
    make_move_source,
    random_move,
    worst_move,
)

__all__ = [
    "DEFAULT_DEPTH",
    "MinimaxSearch",
    "MoveSource",
    "NoLegalMoveError",
    "STRATEGY_NAMES",
    "SearchLimits",
    "SearchResult",
    "best_move",
    "cancellable",
    "make_move_source",
    "random_move",
    "worst_move",
]
