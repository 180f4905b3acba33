"""Shared engine search models, errors and the collaborator protocol."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from minimate.core.move import PROMOTION_CHARS
from minimate.core.types import square_name

if TYPE_CHECKING:
    from minimate.core.enums import Color, PieceType
    from minimate.core.piece import Piece
    from minimate.core.types import Square

INF_SCORE = 10_000_000


class SearchError(Exception):
    """Base class for engine failures."""


class DetachedCloneError(SearchError):
    """The game object cannot produce an independent copy of itself."""


class SearchableGame(Protocol):
    """What the engine requires from a rules/board collaborator."""

    @property
    def side_to_move(self) -> Color: ...

    def pieces(self) -> Iterable[tuple[Square, Piece]]: ...

    def legal_moves_from(self, sq: Square) -> list[Square]: ...

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> object: ...

    def is_terminal(self) -> bool: ...

    def is_checkmate(self) -> bool: ...

    def is_in_check(self, color: Color) -> bool: ...

    def clone_detached(self) -> SearchableGame: ...

    def fingerprint(self) -> Hashable: ...


@dataclass(slots=True, frozen=True)
class MoveChoice:
    """Move picked by the engine: coordinates plus optional promotion."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += PROMOTION_CHARS.get(self.promotion, "")
        return base


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Configuration for a single move decision."""

    max_depth: int = 3
    use_cache: bool = True
    seed: int | None = None
    max_tt_entries: int = 500_000

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {self.max_depth}")
        if self.max_tt_entries <= 0:
            raise ValueError("Transposition table size must be positive")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Outcome of one top-level decision."""

    best_move: MoveChoice | None
    score: int
    depth: int
    nodes: int
    cache_hits: int = 0
    tied: int = 0
