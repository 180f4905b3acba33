"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from minimate.core.enums import Color, PieceType
from minimate.core.piece import Piece
from minimate.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid with a cached king square per side.

    Alongside the grid the board keeps a 64-byte placement code (one byte
    per square, 0 for empty) that is updated on every write and serves as
    the exact part of a position fingerprint.
    """

    __slots__ = ("_grid", "_codes", "_king_squares")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        self._codes = bytearray(64)
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.row][sq.col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._grid[sq.row][sq.col]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == sq
        ):
            self._king_squares[int(old_piece.color)] = None

        self._grid[sq.row][sq.col] = piece
        self._codes[sq.row * 8 + sq.col] = 0 if piece is None else piece.code
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.row][sq.col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield every ``(square, piece)`` pair, a1 first."""
        grid = self._grid
        for sq in ALL_SQUARES:
            piece = grid[sq.row][sq.col]
            if piece is not None:
                yield sq, piece

    def squares_of(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def count(self, color: Color, piece_type: PieceType) -> int:
        return sum(
            1
            for _, piece in self.occupied()
            if piece.color == color and piece.piece_type == piece_type
        )

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def placement_key(self) -> bytes:
        """Exact, canonical encoding of the piece placement."""
        return bytes(self._codes)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        b._codes = self._codes.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]
        self._codes = bytearray(64)
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, ptype in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(Color.WHITE, ptype)
            b[Square(1, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(7, col)] = Piece(Color.BLACK, ptype)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._codes == other._codes

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(7, -1, -1):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
