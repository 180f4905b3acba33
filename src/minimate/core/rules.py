"""High-level rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minimate.core.enums import Color, GameResult, PieceType
from minimate.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from minimate.core.move import Move
    from minimate.core.position import Position

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Only automatic draws end the game here: insufficient material,
    # the 75-move rule and fivefold repetition. Claimable draws
    # (50-move, threefold) need a player action and are reported separately.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move) and not gen.generate_legal_moves()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return (
            not gen.is_in_check(position.side_to_move)
            and not gen.generate_legal_moves()
        )

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, K+B vs K+B with same-colored bishops."""
        others = [
            (sq, piece)
            for sq, piece in position.board.occupied()
            if piece.piece_type != PieceType.KING
        ]
        if not others:
            return True
        if len(others) == 1:
            return others[0][1].piece_type in _MINOR_PIECES
        if len(others) == 2:
            (sq_a, a), (sq_b, b) = others
            if (
                a.piece_type == PieceType.BISHOP
                and b.piece_type == PieceType.BISHOP
                and a.color != b.color
            ):
                return (sq_a.row + sq_a.col) % 2 == (sq_b.row + sq_b.col) % 2
        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100

    @staticmethod
    def is_seventy_five_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 150

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

    @staticmethod
    def is_fivefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 5

    @staticmethod
    def is_claimable_draw(position: Position) -> bool:
        """Whether the side to move may claim a draw by rule."""
        return Rules.is_fifty_move_rule(position) or Rules.is_threefold_repetition(
            position
        )

    @staticmethod
    def is_automatic_draw(position: Position) -> bool:
        return (
            Rules.is_insufficient_material(position)
            or Rules.is_seventy_five_move_rule(position)
            or Rules.is_fivefold_repetition(position)
        )

    @staticmethod
    def game_result(
        position: Position, legal_moves: list[Move] | None = None
    ) -> GameResult:
        """Determine the current result.

        *legal_moves* may be passed when the caller has already generated
        them for this position.
        """
        gen = MoveGenerator(position)
        if legal_moves is None:
            legal_moves = gen.generate_legal_moves()

        if not legal_moves:
            if gen.is_in_check(position.side_to_move):
                return (
                    GameResult.BLACK_WINS
                    if position.side_to_move == Color.WHITE
                    else GameResult.WHITE_WINS
                )
            return GameResult.DRAW

        if Rules.is_automatic_draw(position):
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
