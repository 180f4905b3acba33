"""Square value type and coordinate helpers.

Board layout (row = rank index, col = file index):
    row 0 is White's back rank (rank 1), row 7 is Black's (rank 8)
    col 0 is the a-file, col 7 is the h-file
"""

from __future__ import annotations

from typing import NamedTuple


class Square(NamedTuple):
    """Immutable ``(row, col)`` board coordinate, both in ``[0, 7]``."""

    row: int
    col: int

    def offset(self, drow: int, dcol: int) -> Square | None:
        """Square shifted by ``(drow, dcol)``, or ``None`` if off the board."""
        row = self.row + drow
        col = self.col + dcol
        if 0 <= row < 8 and 0 <= col < 8:
            return Square(row, col)
        return None

    @property
    def ordinal(self) -> int:
        """Flat index 0–63 (a1=0, h1=7, ..., h8=63)."""
        return self.row * 8 + self.col

    @property
    def name(self) -> str:
        return square_name(self)

    def __str__(self) -> str:
        return square_name(self)


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(8) for col in range(8)
)


def is_on_board(row: int, col: int) -> bool:
    """Check whether ``(row, col)`` lies on the 8×8 board."""
    return 0 <= row < 8 and 0 <= col < 8


def make_square(row: int, col: int) -> Square:
    """Create a square, validating both coordinates."""
    if not is_on_board(row, col):
        raise ValueError(f"Square out of range: ({row}, {col})")
    return Square(row, col)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(0, 0)`` → ``'a1'``."""
    return chr(ord("a") + sq.col) + str(sq.row + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(3, 4)``."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(int(name[1]) - 1, ord(name[0]) - ord("a"))
