"""Headless games between two move sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessmate.core.board import Board
from chessmate.core.enums import Color
from chessmate.core.move import Move, move_target
from chessmate.core.result import (
    Continuing,
    GameResult,
    IllegalMove,
    Stalemate,
    Victory,
)
from chessmate.core.rules import IRulesEngine, Rules
from chessmate.engine.search import MoveSource
from chessmate.game.interfaces import EngineContractError
from chessmate.game.ledger import CaptureLedger, CaptureSnapshot

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_PLIES = 200


@dataclass(frozen=True, slots=True)
class SelfPlayRecord:
    """Outcome of :func:`play_out`.

    ``result`` is ``None`` when the ply cap was reached first.
    """

    moves: tuple[Move, ...]
    result: Victory | Stalemate | None
    final_board: Board
    captured: CaptureSnapshot

    @property
    def ply_count(self) -> int:
        return len(self.moves)


def play_out(
    white: MoveSource,
    black: MoveSource,
    board: Board | None = None,
    max_plies: int = DEFAULT_MAX_PLIES,
    rules: IRulesEngine | None = None,
) -> SelfPlayRecord:
    """Let *white* and *black* play each other from *board*.

    Raises:
        EngineContractError: A source returned an illegal move.
    """
    rules = rules if rules is not None else Rules()
    current = board if board is not None else Board.default()
    sources = {Color.WHITE: white, Color.BLACK: black}
    ledger = CaptureLedger()
    moves: list[Move] = []
    outcome: Victory | Stalemate | None = None

    while len(moves) < max_plies:
        mover = current.side_to_move
        move = sources[mover](current)
        if not rules.is_legal(current, move, mover):
            raise EngineContractError(f"{mover} source played illegal move {move}")

        target = move_target(move)
        captured = current.piece_at(target) if target is not None else None

        result: GameResult = rules.apply(current, move)
        if isinstance(result, IllegalMove):
            raise EngineContractError(f"Rules engine rejected validated move {move}")
        if captured is not None:
            ledger.record(captured)
        moves.append(move)
        _LOGGER.debug("%d. %s %s", len(moves), mover, move)

        if isinstance(result, Continuing):
            current = result.board
            continue
        if result.final_board is not None:
            current = result.final_board
        outcome = result
        break

    return SelfPlayRecord(tuple(moves), outcome, current, ledger.snapshot())


def describe(record: SelfPlayRecord) -> str:
    """One-line summary of a finished self-play game."""
    if isinstance(record.result, Victory):
        verdict = f"{record.result.winner} wins"
    elif isinstance(record.result, Stalemate):
        verdict = "Stalemate"
    else:
        verdict = "Unfinished"
    return f"{verdict} after {record.ply_count} plies"
