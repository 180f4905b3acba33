"""Fixed-depth minimax search with alpha-beta pruning and a transposition table."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from minimate.engine.evaluation import evaluate
from minimate.engine.search import DetachedCloneError, SearchableGame
from minimate.engine.transposition import Bound, TranspositionTable

if TYPE_CHECKING:
    from minimate.core.enums import Color
    from minimate.core.types import Square


def candidate_moves(
    game: SearchableGame, side: Color
) -> Iterator[tuple[Square, Square]]:
    """Every legal ``(from, to)`` pair for *side*."""
    for sq, piece in list(game.pieces()):
        if piece.color != side:
            continue
        for to_sq in game.legal_moves_from(sq):
            yield sq, to_sq


def detached_copy(game: SearchableGame) -> SearchableGame:
    """Independent clone of *game*; refuses to fall back to shared state."""
    clone_detached = getattr(game, "clone_detached", None)
    if not callable(clone_detached):
        raise DetachedCloneError(
            f"{type(game).__name__} does not provide clone_detached()"
        )
    clone = clone_detached()
    if clone is None or clone is game:
        raise DetachedCloneError(
            f"{type(game).__name__}.clone_detached() did not return a new object"
        )
    return clone


class MinimaxSearch:
    """Alpha-beta minimax scored from a fixed *perspective*.

    :meth:`search` maximizes when the side to move is *perspective* and
    minimizes otherwise. Both cases run through one negamax routine whose
    scores are relative to the side to move; the public wrapper converts.

    One instance serves one top-level decision: its table and counters
    start empty and are dropped together with the instance.
    """

    __slots__ = ("perspective", "nodes", "cache_hits", "_tt")

    def __init__(
        self,
        perspective: Color,
        table: TranspositionTable | None = None,
    ) -> None:
        self.perspective = perspective
        self.nodes = 0
        self.cache_hits = 0
        self._tt = table

    @property
    def table(self) -> TranspositionTable | None:
        return self._tt

    def search(
        self,
        game: SearchableGame,
        depth: int,
        side: Color,
        alpha: int,
        beta: int,
    ) -> int:
        """Minimax value of *game* with *side* to move, seen from ``perspective``."""
        if depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {depth}")
        if side != game.side_to_move:
            raise ValueError(f"{side} is not the side to move")

        if side == self.perspective:
            return self._negamax(game, depth, alpha, beta)
        return -self._negamax(game, depth, -beta, -alpha)

    def _negamax(
        self,
        game: SearchableGame,
        depth: int,
        alpha: int,
        beta: int,
    ) -> int:
        self.nodes += 1
        side = game.side_to_move

        if depth == 0 or game.is_terminal():
            return evaluate(game, side)

        key = None
        if self._tt is not None:
            key = game.fingerprint()
            entry = self._tt.get(key)
            if entry is not None and entry.usable(depth, alpha, beta):
                self.cache_hits += 1
                return entry.score

        alpha_orig = alpha
        best: int | None = None
        for from_sq, to_sq in candidate_moves(game, side):
            child = detached_copy(game)
            child.apply_move(from_sq, to_sq)
            score = -self._negamax(child, depth - 1, -beta, -alpha)

            if best is None or score > best:
                best = score
            if best > alpha:
                alpha = best
            if beta <= alpha:
                break

        if best is None:
            # No moves, yet the collaborator did not flag the game as over.
            return evaluate(game, side)

        if key is not None:
            if best <= alpha_orig:
                bound = Bound.UPPER
            elif best >= beta:
                bound = Bound.LOWER
            else:
                bound = Bound.EXACT
            self._tt.put(key, best, depth, bound)
        return best
