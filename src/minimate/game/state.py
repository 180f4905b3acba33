"""Game state: position, move history and terminal flags.

:class:`GameState` is the rules collaborator the engine searches over: it
answers legality and game-end queries, applies moves by ``(from, to)``
coordinates and hands out fully detached clones.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from minimate.core.enums import Color, GameResult, MoveFlag, PieceType
from minimate.core.move import Move
from minimate.core.move_generator import MoveGenerator
from minimate.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from minimate.core.piece import Piece
from minimate.core.position import Position, PositionKey
from minimate.core.rules import Rules
from minimate.core.types import Square

DEFAULT_PROMOTION = PieceType.QUEEN


class IllegalMoveError(ValueError):
    """Raised when a requested move is not legal in the current position."""


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    moved: Piece
    captured: bool = False


class GameState:
    """Position + side to move + move history + terminal flags.

    Legal moves and the game result are computed lazily and cached until
    the next move is applied or undone.
    """

    __slots__ = ("position", "move_history", "_legal", "_result")

    def __init__(self, position: Position | None = None) -> None:
        self.position = position if position is not None else Position()
        self.move_history: list[MoveRecord] = []
        self._legal: list[Move] | None = None
        self._result: GameResult | None = None

    @classmethod
    def from_fen(cls, fen: str = STARTING_FEN) -> GameState:
        return cls(position_from_fen(fen))

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def fen(self) -> str:
        return position_to_fen(self.position)

    @property
    def result(self) -> GameResult:
        if self._result is None:
            self._result = Rules.game_result(self.position, self.legal_moves())
        return self._result

    def pieces(self) -> Iterator[tuple[Square, Piece]]:
        return self.position.board.occupied()

    def piece_at(self, sq: Square) -> Piece | None:
        return self.position.board[sq]

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move (cached)."""
        if self._legal is None:
            self._legal = MoveGenerator(self.position).generate_legal_moves()
        return self._legal

    def legal_moves_from(self, sq: Square) -> list[Square]:
        """Destination squares legal for the piece on *sq*.

        Promotion variants collapse into a single destination; empty when
        *sq* is empty or holds a piece of the side not to move.
        """
        targets: list[Square] = []
        for move in self.legal_moves():
            if move.from_sq == sq and move.to_sq not in targets:
                targets.append(move.to_sq)
        return targets

    def is_in_check(self, color: Color) -> bool:
        return MoveGenerator(self.position).is_in_check(color)

    def is_terminal(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def is_checkmate(self) -> bool:
        return not self.legal_moves() and self.is_in_check(self.side_to_move)

    def is_stalemate(self) -> bool:
        return not self.legal_moves() and not self.is_in_check(self.side_to_move)

    def is_draw(self) -> bool:
        return self.result == GameResult.DRAW

    def fingerprint(self) -> PositionKey:
        return self.position.fingerprint()

    # ── Mutation ─────────────────────────────────────────────────────────

    def resolve_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move:
        """Find the legal :class:`Move` matching the given coordinates."""
        wanted = promotion if promotion is not None else DEFAULT_PROMOTION
        for move in self.legal_moves():
            if move.from_sq != from_sq or move.to_sq != to_sq:
                continue
            if move.flag != MoveFlag.PROMOTION or move.promotion == wanted:
                return move
        raise IllegalMoveError(f"Illegal move: {from_sq}{to_sq}")

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord:
        """Play ``from_sq`` → ``to_sq``; promotions default to a queen."""
        move = self.resolve_move(from_sq, to_sq, promotion)
        board = self.position.board
        moved = board[from_sq]
        assert moved is not None
        captured = board[to_sq] is not None or move.flag == MoveFlag.EN_PASSANT

        self.position.make_move(move)
        record = MoveRecord(move=move, moved=moved, captured=captured)
        self.move_history.append(record)
        self._invalidate()
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None
        record = self.move_history.pop()
        self.position.unmake_move(record.move)
        self._invalidate()
        return record.move

    def clone_detached(self) -> GameState:
        """Independent copy; mutating either side never affects the other."""
        clone = GameState.__new__(GameState)
        clone.position = self.position.copy()
        clone.move_history = list(self.move_history)
        clone._legal = None if self._legal is None else list(self._legal)
        clone._result = self._result
        return clone

    def _invalidate(self) -> None:
        self._legal = None
        self._result = None

    # ── Helpers ──────────────────────────────────────────────────────────

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def __repr__(self) -> str:
        return f"GameState({self.fen!r})"
