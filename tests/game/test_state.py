"""Tests for GameState, the collaborator searched by the engine."""

import pytest

from minimate.core.enums import Color, GameResult, PieceType
from minimate.core.notation import STARTING_FEN
from minimate.core.piece import Piece
from minimate.core.types import parse_square
from minimate.game import GameState, IllegalMoveError


def _sq(name: str):
    return parse_square(name)


class TestQueries:
    def test_initial_state(self) -> None:
        game = GameState()
        assert game.fen == STARTING_FEN
        assert game.side_to_move == Color.WHITE
        assert not game.is_terminal()
        assert game.result == GameResult.IN_PROGRESS
        assert len(game.legal_moves()) == 20
        assert len(list(game.pieces())) == 32

    def test_legal_moves_from(self) -> None:
        game = GameState()
        assert set(game.legal_moves_from(_sq("g1"))) == {_sq("f3"), _sq("h3")}
        assert set(game.legal_moves_from(_sq("e2"))) == {_sq("e3"), _sq("e4")}
        assert game.legal_moves_from(_sq("e4")) == []
        # Black pieces cannot move while White is to move.
        assert game.legal_moves_from(_sq("g8")) == []

    def test_promotion_variants_collapse(self) -> None:
        game = GameState.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        assert game.legal_moves_from(_sq("a7")) == [_sq("a8")]

    def test_checkmate_flags(self) -> None:
        game = GameState.from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        assert game.is_terminal()
        assert game.is_checkmate()
        assert not game.is_stalemate()
        assert game.is_in_check(Color.WHITE)
        assert game.result == GameResult.BLACK_WINS

    def test_stalemate_flags(self) -> None:
        game = GameState.from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert game.is_terminal()
        assert game.is_stalemate()
        assert game.is_draw()
        assert not game.is_checkmate()

    def test_insufficient_material_is_terminal_with_moves_left(self) -> None:
        game = GameState.from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert game.legal_moves()
        assert game.is_terminal()
        assert game.is_draw()


class TestMoves:
    def test_apply_move_records_history(self) -> None:
        game = GameState()
        record = game.apply_move(_sq("e2"), _sq("e4"))
        assert game.side_to_move == Color.BLACK
        assert game.ply_count == 1
        assert record.moved == Piece(Color.WHITE, PieceType.PAWN)
        assert not record.captured
        assert game.piece_at(_sq("e4")) == Piece(Color.WHITE, PieceType.PAWN)

    def test_capture_flag(self) -> None:
        game = GameState.from_fen("4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1")
        record = game.apply_move(_sq("d1"), _sq("d5"))
        assert record.captured

    def test_illegal_move_rejected(self) -> None:
        game = GameState()
        with pytest.raises(IllegalMoveError):
            game.apply_move(_sq("e2"), _sq("e5"))
        with pytest.raises(ValueError):
            game.apply_move(_sq("e7"), _sq("e5"))
        assert game.fen == STARTING_FEN

    def test_promotion_defaults_to_queen(self) -> None:
        game = GameState.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        game.apply_move(_sq("a7"), _sq("a8"))
        assert game.piece_at(_sq("a8")) == Piece(Color.WHITE, PieceType.QUEEN)

    def test_underpromotion_on_request(self) -> None:
        game = GameState.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        game.apply_move(_sq("a7"), _sq("a8"), PieceType.KNIGHT)
        assert game.piece_at(_sq("a8")) == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_castling_by_king_destination(self) -> None:
        game = GameState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        game.apply_move(_sq("e1"), _sq("c1"))
        assert game.piece_at(_sq("d1")) == Piece(Color.WHITE, PieceType.ROOK)

    def test_undo_restores_position_and_flags(self) -> None:
        game = GameState.from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        fen = game.fen
        game.apply_move(_sq("a1"), _sq("a8"))
        assert game.is_checkmate()
        assert game.undo_last_move() is not None
        assert game.fen == fen
        assert not game.is_terminal()
        assert GameState().undo_last_move() is None


class TestDetachedClone:
    def test_clone_shares_no_state(self) -> None:
        game = GameState()
        clone = game.clone_detached()
        assert clone is not game
        assert clone.fingerprint() == game.fingerprint()

        clone.apply_move(_sq("e2"), _sq("e4"))
        assert game.fen == STARTING_FEN
        assert game.ply_count == 0
        assert len(game.legal_moves()) == 20

        game.apply_move(_sq("d2"), _sq("d4"))
        assert clone.piece_at(_sq("d4")) is None
        assert clone.piece_at(_sq("e4")) is not None

    def test_clone_keeps_history(self) -> None:
        game = GameState()
        game.apply_move(_sq("g1"), _sq("f3"))
        clone = game.clone_detached()
        assert clone.ply_count == 1
        clone.undo_last_move()
        assert clone.fen == STARTING_FEN
        assert game.ply_count == 1

    def test_fingerprint_depends_on_side_to_move(self) -> None:
        white = GameState.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        black = GameState.from_fen("4k3/8/8/8/8/8/8/R3K3 b - - 0 1")
        assert white.fingerprint() != black.fingerprint()
