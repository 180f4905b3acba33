"""Top-level move decision: score every root move, break ties at random."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import TYPE_CHECKING

from minimate.engine.evaluation import evaluate
from minimate.engine.minimax import MinimaxSearch, candidate_moves, detached_copy
from minimate.engine.search import (
    INF_SCORE,
    MoveChoice,
    SearchableGame,
    SearchLimits,
    SearchResult,
)
from minimate.engine.transposition import TranspositionTable

if TYPE_CHECKING:
    from minimate.core.enums import Color

_LOGGER = logging.getLogger(__name__)


class MoveSelector:
    """Chooses one move per call using a fresh search and cache.

    Args:
        limits: Depth and cache configuration; ``limits.seed`` seeds the
            tie-break source when *rng* is not given.
        rng: Explicit random source for tie-breaks.
    """

    __slots__ = ("_limits", "_rng")

    def __init__(
        self,
        limits: SearchLimits | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._limits = limits if limits is not None else SearchLimits()
        self._rng = rng if rng is not None else random.Random(self._limits.seed)

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    def set_depth(self, max_depth: int) -> None:
        """Change the default depth (takes effect on the next call)."""
        self._limits = replace(self._limits, max_depth=max_depth)

    def choose_move(
        self,
        game: SearchableGame,
        side: Color | None = None,
        max_depth: int | None = None,
    ) -> MoveChoice | None:
        """Best move for *side*, or ``None`` when it has no legal move."""
        return self.select(game, side, max_depth).best_move

    def select(
        self,
        game: SearchableGame,
        side: Color | None = None,
        max_depth: int | None = None,
    ) -> SearchResult:
        """Run one decision and return the full :class:`SearchResult`."""
        depth = self._limits.max_depth if max_depth is None else max_depth
        if depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {depth}")
        if side is None:
            side = game.side_to_move
        elif side != game.side_to_move:
            raise ValueError(f"{side} is not the side to move")

        # Probe once up front so a broken clone fails before any search.
        detached_copy(game)

        table = (
            TranspositionTable(self._limits.max_tt_entries)
            if self._limits.use_cache
            else None
        )
        engine = MinimaxSearch(side, table)
        child_depth = max(depth - 1, 0)

        best_score = -INF_SCORE
        best: list[MoveChoice] = []
        for from_sq, to_sq in candidate_moves(game, side):
            child = detached_copy(game)
            child.apply_move(from_sq, to_sq)
            score = engine.search(
                child, child_depth, side.opposite, -INF_SCORE, INF_SCORE
            )

            if score > best_score:
                best_score = score
                best = [MoveChoice(from_sq, to_sq)]
            elif score == best_score:
                best.append(MoveChoice(from_sq, to_sq))

        if not best:
            _LOGGER.debug("No legal move for %s", side)
            return SearchResult(
                best_move=None,
                score=evaluate(game, side),
                depth=depth,
                nodes=engine.nodes,
            )

        choice = self._rng.choice(best)
        _LOGGER.debug(
            "Chose %s for %s: score=%d depth=%d nodes=%d cache_hits=%d tied=%d",
            choice,
            side,
            best_score,
            depth,
            engine.nodes,
            engine.cache_hits,
            len(best),
        )
        return SearchResult(
            best_move=choice,
            score=best_score,
            depth=depth,
            nodes=engine.nodes,
            cache_hits=engine.cache_hits,
            tied=len(best),
        )


def choose_move(
    game: SearchableGame,
    side: Color,
    max_depth: int,
    *,
    rng: random.Random | None = None,
    use_cache: bool = True,
) -> MoveChoice | None:
    """One-shot decision; see :meth:`MoveSelector.choose_move`."""
    limits = SearchLimits(max_depth=max_depth, use_cache=use_cache)
    return MoveSelector(limits, rng).choose_move(game, side)
