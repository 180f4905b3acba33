"""Zobrist hashing keys for incremental position hashing."""

from __future__ import annotations

from typing import Final

from minimate.core.enums import CastlingRights
from minimate.core.piece import Piece
from minimate.core.types import Square

_SEED: Final = 0x5F3A91C4D7E20B68
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF


def _splitmix64(state: int) -> int:
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


# Piece codes run 1–12; slot 0 is unused.
_PIECE_KEYS: Final = tuple(
    tuple(_splitmix64(_SEED + code * 64 + ordinal) for ordinal in range(64))
    for code in range(13)
)
_SIDE_TO_MOVE_KEY: Final = _splitmix64(_SEED + 13 * 64)
_CASTLING_KEYS: Final = tuple(_splitmix64(_SEED + 14 * 64 + idx) for idx in range(16))
_EN_PASSANT_KEYS: Final = tuple(
    _splitmix64(_SEED + 15 * 64 + ordinal) for ordinal in range(64)
)


def piece_key(piece: Piece, sq: Square) -> int:
    """Hash key for a specific piece on a square."""
    return _PIECE_KEYS[piece.code][sq.row * 8 + sq.col]


def side_to_move_key() -> int:
    """Toggled in whenever Black is to move."""
    return _SIDE_TO_MOVE_KEY


def castling_key(castling: CastlingRights) -> int:
    return _CASTLING_KEYS[int(castling) & 0xF]


def en_passant_key(ep_square: Square) -> int:
    return _EN_PASSANT_KEYS[ep_square.row * 8 + ep_square.col]
