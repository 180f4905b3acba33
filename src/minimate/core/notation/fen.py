"""FEN parsing and serialization."""

from __future__ import annotations

from minimate.core.board import Board
from minimate.core.enums import CastlingRights, Color
from minimate.core.piece import Piece
from minimate.core.position import Position
from minimate.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for idx, rank_text in enumerate(ranks):
        row = 7 - idx
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Square(row, col)] = Piece.from_char(ch)
                col += 1
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return board


def _parse_castling(field: str) -> CastlingRights:
    if field == "-":
        return CastlingRights.NONE
    rights = CastlingRights.NONE
    lookup = dict(_CASTLING_CHARS)
    for ch in field:
        right = lookup.get(ch)
        if right is None or rights & right:
            raise ValueError(f"Invalid FEN castling field: {field!r}")
        rights |= right
    return rights


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = _parse_castling(castling_part)

    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_row = 5 if side == Color.WHITE else 2
        if ep.row != expected_row:
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")

    halfmove = int(parts[4]) if len(parts) > 4 else 0
    if halfmove < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    fullmove = int(parts[5]) if len(parts) > 5 else 1
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for row in range(7, -1, -1):
        empty = 0
        text = ""
        for col in range(8):
            piece = pos.board[Square(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{'/'.join(rows)} {side_str} {castling_str or '-'} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
