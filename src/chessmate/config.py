"""Command-line configuration."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from chessmate.core.board import STARTING_FEN, Board
from chessmate.core.enums import Color
from chessmate.engine.search import DEFAULT_DEPTH
from chessmate.engine.strategies import STRATEGY_NAMES, make_move_source
from chessmate.game.config import SessionConfig
from chessmate.game.selfplay import DEFAULT_MAX_PLIES

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Validated launch options."""

    opponent: str = "best"
    depth: int = DEFAULT_DEPTH
    fen: str = STARTING_FEN
    human_color: Color = Color.WHITE
    selfplay: tuple[str, str] | None = None
    max_plies: int = DEFAULT_MAX_PLIES
    seed: int | None = None
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    def starting_board(self) -> Board:
        return Board.from_fen(self.fen)

    def session_config(self) -> SessionConfig:
        """Session settings for a human-vs-computer game."""
        return SessionConfig(
            opponent_move_source=make_move_source(self.opponent, self.depth, self.seed),
            starting_board=self.starting_board(),
            human_color=self.human_color,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessmate",
        description="Play chess against a computer opponent.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--opponent",
        type=str,
        choices=STRATEGY_NAMES,
        default="best",
        help="How the computer picks its moves",
    )

    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help="Search depth in plies for the best/worst strategies",
    )

    parser.add_argument(
        "--fen",
        type=str,
        default=STARTING_FEN,
        help="Starting position",
    )

    parser.add_argument(
        "--play-as",
        type=str,
        choices=["white", "black"],
        default="white",
        help="Side the human plays; the board is flipped for Black",
    )

    parser.add_argument(
        "--selfplay",
        type=str,
        nargs=2,
        metavar=("WHITE", "BLACK"),
        choices=STRATEGY_NAMES,
        default=None,
        help="Play two strategies against each other without a window",
    )

    parser.add_argument(
        "--max-plies",
        type=int,
        default=DEFAULT_MAX_PLIES,
        help="Ply limit for self-play games",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random strategy",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> AppConfig:
    """Parse *argv* into an :class:`AppConfig`; exits with usage on bad input."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.depth < 1:
        parser.error("--depth must be at least 1")
    if args.max_plies < 1:
        parser.error("--max-plies must be at least 1")
    try:
        board = Board.from_fen(args.fen)
    except ValueError as exc:
        parser.error(f"invalid --fen: {exc}")
    if not board.legal_moves():
        parser.error("--fen describes a finished game")

    return AppConfig(
        opponent=args.opponent,
        depth=args.depth,
        fen=board.fen,
        human_color=Color.WHITE if args.play_as == "white" else Color.BLACK,
        selfplay=tuple(args.selfplay) if args.selfplay else None,
        max_plies=args.max_plies,
        seed=args.seed,
        log_level=args.log_level,
    )
