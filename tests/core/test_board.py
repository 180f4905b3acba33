"""Tests for Board placement and Square helpers."""

import pytest

from minimate.core.board import Board
from minimate.core.enums import Color, PieceType
from minimate.core.piece import Piece
from minimate.core.types import Square, make_square, parse_square, square_name


class TestSquare:
    def test_parse_and_name_round_trip(self) -> None:
        assert parse_square("a1") == Square(0, 0)
        assert parse_square("e4") == Square(3, 4)
        assert parse_square("h8") == Square(7, 7)
        assert square_name(Square(3, 4)) == "e4"
        assert str(Square(7, 0)) == "a8"

    def test_parse_rejects_bad_names(self) -> None:
        for name in ("", "i1", "a9", "e44", "E4"):
            with pytest.raises(ValueError):
                parse_square(name)

    def test_make_square_validates_range(self) -> None:
        assert make_square(7, 7) == Square(7, 7)
        with pytest.raises(ValueError):
            make_square(8, 0)
        with pytest.raises(ValueError):
            make_square(0, -1)

    def test_offset_stays_on_board(self) -> None:
        assert Square(0, 0).offset(1, 1) == Square(1, 1)
        assert Square(0, 0).offset(-1, 0) is None
        assert Square(7, 7).offset(0, 1) is None

    def test_ordinal(self) -> None:
        assert Square(0, 0).ordinal == 0
        assert Square(7, 7).ordinal == 63


class TestPiece:
    def test_from_char(self) -> None:
        assert Piece.from_char("N") == Piece(Color.WHITE, PieceType.KNIGHT)
        assert Piece.from_char("q") == Piece(Color.BLACK, PieceType.QUEEN)
        assert str(Piece(Color.BLACK, PieceType.KING)) == "k"

    def test_invalid_char(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_value_equality(self) -> None:
        assert Piece(Color.WHITE, PieceType.PAWN) == Piece(Color.WHITE, PieceType.PAWN)
        assert Piece(Color.WHITE, PieceType.PAWN) != Piece(Color.BLACK, PieceType.PAWN)

    def test_codes_are_unique(self) -> None:
        codes = {Piece(c, t).code for c in Color for t in PieceType}
        assert len(codes) == 12
        assert 0 not in codes


class TestBoard:
    def test_initial_layout(self) -> None:
        b = Board.initial()
        assert b[parse_square("e1")] == Piece(Color.WHITE, PieceType.KING)
        assert b[parse_square("d8")] == Piece(Color.BLACK, PieceType.QUEEN)
        assert b[parse_square("a2")] == Piece(Color.WHITE, PieceType.PAWN)
        assert b.is_empty(parse_square("e4"))
        assert len(list(b.occupied())) == 32

    def test_king_square_tracks_moves(self) -> None:
        b = Board.initial()
        assert b.king_square(Color.WHITE) == parse_square("e1")
        king = b[parse_square("e1")]
        b[parse_square("e1")] = None
        b[parse_square("f2")] = king
        assert b.king_square(Color.WHITE) == parse_square("f2")

    def test_missing_king_raises(self) -> None:
        b = Board()
        with pytest.raises(ValueError):
            b.king_square(Color.BLACK)

    def test_squares_of_and_count(self) -> None:
        b = Board.initial()
        assert len(b.squares_of(Color.WHITE)) == 16
        assert b.count(Color.BLACK, PieceType.PAWN) == 8
        assert b.count(Color.WHITE, PieceType.QUEEN) == 1

    def test_placement_key_follows_writes(self) -> None:
        b = Board.initial()
        before = b.placement_key()
        assert len(before) == 64
        b[parse_square("e4")] = Piece(Color.WHITE, PieceType.PAWN)
        assert b.placement_key() != before
        b[parse_square("e4")] = None
        assert b.placement_key() == before

    def test_copy_is_independent(self) -> None:
        b = Board.initial()
        c = b.copy()
        c[parse_square("e2")] = None
        assert b[parse_square("e2")] == Piece(Color.WHITE, PieceType.PAWN)
        assert b != c

    def test_equality(self) -> None:
        assert Board.initial() == Board.initial()
        assert Board() != Board.initial()
