"""Tests for Qt engine bridge worker."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from minimate.engine.qt_bridge import EngineWorker
from minimate.game import GameState


class TestEngineWorker:
    def test_emits_best_move(self, qapp: object) -> None:
        del qapp
        game = GameState.from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        worker = EngineWorker(max_depth=1, seed=0)

        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(game, 7)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 7
        assert str(best_moves[0][1]) == "a1a8"
        assert best_moves[0][3] > 0
        assert len(errors) == 0

    def test_emits_no_move_when_stalemated(self, qapp: object) -> None:
        del qapp
        game = GameState.from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        worker = EngineWorker(max_depth=2)

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(game, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert no_move[0][1] == -900
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_for_unusable_game(self, qapp: object) -> None:
        del qapp
        worker = EngineWorker()

        errors = QSignalSpy(worker.search_error)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(object(), 3)

        assert len(errors) == 1
        assert errors[0][0] == 3
        assert len(best_moves) == 0

    def test_set_depth(self) -> None:
        worker = EngineWorker(max_depth=3)
        worker.set_depth(1)
        assert worker.max_depth == 1
