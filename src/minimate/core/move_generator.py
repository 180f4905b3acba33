"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minimate.core.enums import CastlingRights, Color, MoveFlag, PieceType
from minimate.core.move import Move
from minimate.core.types import ALL_SQUARES, Square

if TYPE_CHECKING:
    from minimate.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


# -- Precomputed lookup tables ---------------------------------------------

Targets = dict[Square, tuple[Square, ...]]
Rays = dict[Square, tuple[tuple[Square, ...], ...]]


def _build_targets(offsets: tuple[tuple[int, int], ...]) -> Targets:
    table: Targets = {}
    for sq in ALL_SQUARES:
        hops = (sq.offset(dr, dc) for dr, dc in offsets)
        table[sq] = tuple(t for t in hops if t is not None)
    return table


def _build_rays(directions: tuple[tuple[int, int], ...]) -> Rays:
    table: Rays = {}
    for sq in ALL_SQUARES:
        rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            ray: list[Square] = []
            nxt = sq.offset(dr, dc)
            while nxt is not None:
                ray.append(nxt)
                nxt = nxt.offset(dr, dc)
            rays.append(tuple(ray))
        table[sq] = tuple(rays)
    return table


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_RAYS: dict[PieceType, Rays] = {
    ptype: _build_rays(dirs) for ptype, dirs in _SLIDER_DIRS.items()
}


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The generator mutates the position via ``make_move`` / ``unmake_move``
    internally but always restores it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        mover = self._pos.side_to_move
        for move in self.generate_pseudo_legal_moves():
            self._pos.make_move(move)
            if not self.is_in_check(mover):
                legal.append(move)
            self._pos.unmake_move(move)
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        for sq, piece in list(self._board.occupied()):
            if piece.color != color:
                continue
            ptype = piece.piece_type
            if ptype == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            elif ptype == PieceType.KNIGHT:
                self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
            elif ptype == PieceType.KING:
                self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
                self._gen_castling(sq, color, moves)
            else:
                self._gen_sliding(sq, color, _RAYS[ptype][sq], moves)
        return moves

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return self.is_square_attacked(self._board.king_square(color), color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board

        # A pawn of by_color attacks sq from one row "behind" it.
        for dc in (-1, 1):
            src = sq.offset(-by_color.forward, dc)
            if src is not None:
                piece = board[src]
                if (
                    piece is not None
                    and piece.color == by_color
                    and piece.piece_type == PieceType.PAWN
                ):
                    return True

        for ptype, targets in (
            (PieceType.KNIGHT, _KNIGHT_TARGETS),
            (PieceType.KING, _KING_TARGETS),
        ):
            for src in targets[sq]:
                piece = board[src]
                if (
                    piece is not None
                    and piece.color == by_color
                    and piece.piece_type == ptype
                ):
                    return True

        for line_type in (PieceType.BISHOP, PieceType.ROOK):
            for ray in _RAYS[line_type][sq]:
                for src in ray:
                    piece = board[src]
                    if piece is None:
                        continue
                    if piece.color == by_color and piece.piece_type in (
                        line_type,
                        PieceType.QUEEN,
                    ):
                        return True
                    break

        return False

    # -- Piece-specific generators -----------------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step = color.forward
        start_row = 1 if color == Color.WHITE else 6
        last_row = 7 if color == Color.WHITE else 0

        one = sq.offset(step, 0)
        if one is not None and board.is_empty(one):
            self._add_pawn_move(sq, one, last_row, moves)
            if sq.row == start_row:
                two = Square(sq.row + 2 * step, sq.col)
                if board.is_empty(two):
                    moves.append(Move(sq, two, MoveFlag.DOUBLE_PAWN))

        for dc in (-1, 1):
            target_sq = sq.offset(step, dc)
            if target_sq is None:
                continue
            target = board[target_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, target_sq, last_row, moves)
            elif target_sq == self._pos.en_passant:
                moves.append(Move(sq, target_sq, MoveFlag.EN_PASSANT))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, last_row: int, moves: list[Move]
    ) -> None:
        if to_sq.row == last_row:
            for ptype in _PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, MoveFlag.PROMOTION, ptype))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        row = 0 if color == Color.WHITE else 7
        if king_sq != Square(row, 4) or self.is_in_check(color):
            return

        board = self._board
        opponent = color.opposite
        if color == Color.WHITE:
            kingside, queenside = (
                CastlingRights.WHITE_KINGSIDE,
                CastlingRights.WHITE_QUEENSIDE,
            )
        else:
            kingside, queenside = (
                CastlingRights.BLACK_KINGSIDE,
                CastlingRights.BLACK_QUEENSIDE,
            )

        if self._pos.castling & kingside:
            f_sq, g_sq = Square(row, 5), Square(row, 6)
            if (
                board.is_empty(f_sq)
                and board.is_empty(g_sq)
                and not self.is_square_attacked(f_sq, opponent)
                and not self.is_square_attacked(g_sq, opponent)
            ):
                moves.append(Move(king_sq, g_sq, MoveFlag.CASTLE_KINGSIDE))

        if self._pos.castling & queenside:
            b_sq, c_sq, d_sq = Square(row, 1), Square(row, 2), Square(row, 3)
            if (
                board.is_empty(b_sq)
                and board.is_empty(c_sq)
                and board.is_empty(d_sq)
                and not self.is_square_attacked(c_sq, opponent)
                and not self.is_square_attacked(d_sq, opponent)
            ):
                moves.append(Move(king_sq, c_sq, MoveFlag.CASTLE_QUEENSIDE))
