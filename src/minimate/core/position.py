"""Position: complete rules state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from minimate.core import zobrist
from minimate.core.board import Board
from minimate.core.enums import CastlingRights, Color, MoveFlag, PieceType
from minimate.core.move import Move
from minimate.core.piece import Piece
from minimate.core.types import Square


@dataclass(frozen=True, slots=True)
class PositionKey:
    """Fingerprint of a position for transposition lookups.

    Hashes by the incremental Zobrist key but compares by the exact
    placement, side to move, castling rights and en-passant target, so two
    distinct positions never share a cache slot even on a Zobrist collision.
    """

    zobrist: int
    placement: bytes
    side_to_move: Color
    castling: CastlingRights
    en_passant: Square | None

    def __hash__(self) -> int:
        return self.zobrist


@dataclass(slots=True)
class _UndoState:
    """Snapshot saved before each move so it can be undone."""

    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    captured_piece: Piece | None


_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    Square(0, 7): CastlingRights.WHITE_KINGSIDE,
    Square(7, 0): CastlingRights.BLACK_QUEENSIDE,
    Square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

# flag -> (rook from col, rook to col)
_CASTLE_ROOK_COLS: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


class Position:
    """Board + side to move + castling + en passant + clocks.

    :meth:`make_move` / :meth:`unmake_move` work through an internal undo
    stack; the Zobrist key is updated incrementally on every change and the
    key history backs repetition counting.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_hash",
        "_history",
        "_key_stack",
        "_key_counts",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._hash = self._compute_hash()
        self._history: list[_UndoState] = []
        self._key_stack: list[int] = [self._hash]
        self._key_counts: dict[int, int] = {self._hash: 1}

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move*, pushing undo state onto the history stack."""
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            # The captured pawn sits beside the mover, not on the target.
            capture_sq = Square(move.from_sq.row, move.to_sq.col)
        captured = self.board[capture_sq]

        self._history.append(
            _UndoState(
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                captured_piece=captured,
            )
        )

        self._put(move.from_sq, None)
        if captured is not None:
            self._put(capture_sq, None)

        placed = piece
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
        self._put(move.to_sq, placed)

        rook_cols = _CASTLE_ROOK_COLS.get(move.flag)
        if rook_cols is not None:
            row = move.from_sq.row
            rook_from = Square(row, rook_cols[0])
            self._put(Square(row, rook_cols[1]), self.board[rook_from])
            self._put(rook_from, None)

        next_en_passant: Square | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            next_en_passant = Square(
                (move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col
            )
        self._set_en_passant(next_en_passant)
        self._update_castling(move, piece)

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite
        self._hash ^= zobrist.side_to_move_key()
        self._key_stack.append(self._hash)
        self._key_counts[self._hash] = self._key_counts.get(self._hash, 0) + 1

    def unmake_move(self, move: Move) -> None:
        """Undo the last :meth:`make_move`."""
        state = self._history.pop()
        key = self._key_stack.pop()
        remaining = self._key_counts[key] - 1
        if remaining:
            self._key_counts[key] = remaining
        else:
            del self._key_counts[key]

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        board = self.board
        piece = board[move.to_sq]
        assert piece is not None
        if move.flag == MoveFlag.PROMOTION:
            piece = Piece(piece.color, PieceType.PAWN)

        board[move.from_sq] = piece
        if move.flag == MoveFlag.EN_PASSANT:
            board[move.to_sq] = None
            board[Square(move.from_sq.row, move.to_sq.col)] = state.captured_piece
        else:
            board[move.to_sq] = state.captured_piece

        rook_cols = _CASTLE_ROOK_COLS.get(move.flag)
        if rook_cols is not None:
            row = move.from_sq.row
            board[Square(row, rook_cols[0])] = board[Square(row, rook_cols[1])]
            board[Square(row, rook_cols[1])] = None

        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock
        self._hash = self._key_stack[-1]

    # ── Hash bookkeeping ─────────────────────────────────────────────────

    def _put(self, sq: Square, piece: Piece | None) -> None:
        old = self.board[sq]
        if old is not None:
            self._hash ^= zobrist.piece_key(old, sq)
        self.board[sq] = piece
        if piece is not None:
            self._hash ^= zobrist.piece_key(piece, sq)

    def _update_castling(self, move: Move, piece: Piece) -> None:
        rights = self.castling
        if piece.piece_type == PieceType.KING:
            rights &= ~(
                CastlingRights.WHITE_BOTH
                if piece.color == Color.WHITE
                else CastlingRights.BLACK_BOTH
            )
        for sq in (move.from_sq, move.to_sq):
            corner = _ROOK_CORNERS.get(sq)
            if corner is not None:
                rights &= ~corner

        if rights != self.castling:
            self._hash ^= zobrist.castling_key(self.castling)
            self.castling = rights
            self._hash ^= zobrist.castling_key(rights)

    def _set_en_passant(self, en_passant: Square | None) -> None:
        if en_passant == self.en_passant:
            return
        if self.en_passant is not None:
            self._hash ^= zobrist.en_passant_key(self.en_passant)
        self.en_passant = en_passant
        if en_passant is not None:
            self._hash ^= zobrist.en_passant_key(en_passant)

    def _compute_hash(self) -> int:
        key = zobrist.castling_key(self.castling)
        if self.side_to_move == Color.BLACK:
            key ^= zobrist.side_to_move_key()
        if self.en_passant is not None:
            key ^= zobrist.en_passant_key(self.en_passant)
        for sq, piece in self.board.occupied():
            key ^= zobrist.piece_key(piece, sq)
        return key

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent deep copy, repetition history included."""
        pos = Position.__new__(Position)
        pos.board = self.board.copy()
        pos.side_to_move = self.side_to_move
        pos.castling = self.castling
        pos.en_passant = self.en_passant
        pos.halfmove_clock = self.halfmove_clock
        pos.fullmove_number = self.fullmove_number
        pos._hash = self._hash
        pos._history = list(self._history)
        pos._key_stack = self._key_stack.copy()
        pos._key_counts = self._key_counts.copy()
        return pos

    def repetition_count(self) -> int:
        """How many times the current position occurred in its history."""
        return self._key_counts.get(self._key_stack[-1], 0)

    @property
    def zobrist_hash(self) -> int:
        return self._hash

    def fingerprint(self) -> PositionKey:
        return PositionKey(
            zobrist=self._hash,
            placement=self.board.placement_key(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
        )
