"""Board coordinate value type.

Board layout (row, col), both 0-based:
    row 0 = rank 1 (White's back rank), row 7 = rank 8
    col 0 = file a, col 7 = file h

So ``Position(0, 4)`` is e1 and ``Position(7, 0)`` is a8.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE):
            raise ValueError(f"Position out of range: ({self.row}, {self.col})")

    @classmethod
    def parse(cls, name: str) -> Position:
        """Parse square name, e.g. 'e4' → Position(3, 4)."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(_RANKS.index(name[1]), _FILES.index(name[0]))

    @property
    def name(self) -> str:
        """Human-readable name, e.g. Position(0, 0) → 'a1'."""
        return _FILES[self.col] + _RANKS[self.row]

    @property
    def is_light(self) -> bool:
        """Whether this is a light square (a1 is dark)."""
        return (self.row + self.col) % 2 == 1

    def __str__(self) -> str:
        return self.name


def all_positions() -> list[Position]:
    """All 64 squares, a1 first, h8 last."""
    return [Position(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
