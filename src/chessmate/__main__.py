"""Allow ``python -m chessmate``."""

from chessmate.app import main

main()
