"""Static evaluation: material balance from one side's point of view."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minimate.core.enums import Color, PieceType

if TYPE_CHECKING:
    from minimate.engine.search import SearchableGame

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 300,
    PieceType.BISHOP: 300,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}


def material_balance(game: SearchableGame) -> int:
    """White material minus Black material."""
    total = 0
    for _, piece in game.pieces():
        value = PIECE_VALUES[piece.piece_type]
        total += value if piece.color == Color.WHITE else -value
    return total


def evaluate(game: SearchableGame, perspective: Color) -> int:
    """Score *game* for *perspective*; positive means *perspective* is ahead.

    A checkmated side has lost its king, so its king value is withdrawn.
    Symmetric: ``evaluate(g, WHITE) == -evaluate(g, BLACK)``.
    """
    score = material_balance(game)
    if game.is_checkmate():
        king = PIECE_VALUES[PieceType.KING]
        score += -king if game.side_to_move == Color.WHITE else king
    return score if perspective == Color.WHITE else -score
