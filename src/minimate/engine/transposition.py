"""Transposition table scoped to a single move decision."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import IntEnum


class Bound(IntEnum):
    """How a stored score relates to the true value of the node."""

    EXACT = 0
    LOWER = 1  # search failed high; true value >= score
    UPPER = 2  # search failed low; true value <= score


@dataclass(slots=True, frozen=True)
class TTEntry:
    score: int
    depth: int
    bound: Bound = Bound.EXACT

    def usable(self, depth: int, alpha: int, beta: int) -> bool:
        """Whether this entry answers a query of *depth* in ``(alpha, beta)``."""
        if self.depth < depth:
            return False
        if self.bound == Bound.EXACT:
            return True
        if self.bound == Bound.LOWER:
            return self.score >= beta
        return self.score <= alpha


class TranspositionTable:
    """Fingerprint → :class:`TTEntry` memo.

    Keys are trusted: equal keys must mean equal positions. A store never
    replaces an entry searched to a greater depth.
    """

    __slots__ = ("_entries", "_max_entries")

    def __init__(self, max_entries: int = 500_000) -> None:
        self._entries: dict[Hashable, TTEntry] = {}
        self._max_entries = max_entries

    def get(self, key: Hashable) -> TTEntry | None:
        return self._entries.get(key)

    def put(
        self,
        key: Hashable,
        score: int,
        depth: int,
        bound: Bound = Bound.EXACT,
    ) -> None:
        existing = self._entries.get(key)
        if existing is not None and (
            existing.depth > depth
            or (
                existing.depth == depth
                and existing.bound == Bound.EXACT
                and bound != Bound.EXACT
            )
        ):
            return
        if existing is None and len(self._entries) >= self._max_entries:
            self._entries.clear()
        self._entries[key] = TTEntry(score=score, depth=depth, bound=bound)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries
