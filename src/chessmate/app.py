"""Application entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from chessmate.config import AppConfig, parse_args
from chessmate.engine.strategies import make_move_source
from chessmate.game.selfplay import describe, play_out

_LOGGER = logging.getLogger(__name__)


def run_selfplay(config: AppConfig) -> int:
    """Play the two configured strategies against each other and print the game."""
    assert config.selfplay is not None
    white_name, black_name = config.selfplay
    record = play_out(
        make_move_source(white_name, config.depth, config.seed),
        make_move_source(black_name, config.depth, config.seed),
        board=config.starting_board(),
        max_plies=config.max_plies,
    )
    for ply, move in enumerate(record.moves, start=1):
        print(f"{ply:>3}. {move}")
    print(record.final_board)
    print(describe(record))
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Launch Chessmate."""
    config = parse_args(argv)
    logging.basicConfig(
        level=config.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _LOGGER.debug("Starting with %s", config)

    if config.selfplay is not None:
        sys.exit(run_selfplay(config))

    from chessmate.ui.bootstrap import run_application

    sys.exit(run_application(config.session_config()))


if __name__ == "__main__":
    main()
