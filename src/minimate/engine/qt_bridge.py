"""Qt bridge to run a move decision in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from minimate.engine.search import SearchLimits
from minimate.engine.selector import MoveSelector

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    The host moves the worker to a ``QThread`` and calls
    :meth:`request_move` through a queued connection. The game passed in
    must be a detached clone owned by the request: the worker reads it
    while the UI thread keeps playing on its own copy.
    """

    best_move_ready = pyqtSignal(int, object, int, int)
    search_no_move = pyqtSignal(int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_selector",)

    def __init__(self, *, max_depth: int = 3, seed: int | None = None) -> None:
        super().__init__()
        self._selector = MoveSelector(SearchLimits(max_depth=max_depth, seed=seed))

    @pyqtSlot(object, int)
    def request_move(self, game: object, request_id: int) -> None:
        """Search *game* for its side to move and emit the outcome."""
        try:
            result = self._selector.select(game)  # type: ignore[arg-type]
        except Exception as exc:
            _LOGGER.exception("Search for request %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.score)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.nodes,
        )

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Update search depth (takes effect on the next request)."""
        self._selector.set_depth(max_depth)

    @property
    def max_depth(self) -> int:
        return self._selector.limits.max_depth
