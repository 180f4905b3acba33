"""Notation package: FEN parsing and serialization."""

from minimate.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
