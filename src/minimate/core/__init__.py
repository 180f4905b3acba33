"""Rules layer: board, move generation and game-end detection.

Quick start::

    from minimate.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move)
"""

from minimate.core.board import Board
from minimate.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from minimate.core.move import Move
from minimate.core.move_generator import MoveGenerator
from minimate.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from minimate.core.piece import Piece
from minimate.core.position import Position, PositionKey
from minimate.core.rules import Rules
from minimate.core.types import (
    ALL_SQUARES,
    Square,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "ALL_SQUARES",
    "Square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "PositionKey",
    "Rules",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
