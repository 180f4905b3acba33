"""Move-selection engine: evaluation, transposition cache, minimax search.

The Qt worker lives in :mod:`minimate.engine.qt_bridge` and is imported
separately so the search itself has no GUI dependency.
"""

from minimate.engine.evaluation import PIECE_VALUES, evaluate, material_balance
from minimate.engine.minimax import MinimaxSearch, candidate_moves, detached_copy
from minimate.engine.search import (
    INF_SCORE,
    DetachedCloneError,
    MoveChoice,
    SearchableGame,
    SearchError,
    SearchLimits,
    SearchResult,
)
from minimate.engine.selector import MoveSelector, choose_move
from minimate.engine.transposition import Bound, TranspositionTable, TTEntry

__all__ = [
    "Bound",
    "DetachedCloneError",
    "INF_SCORE",
    "MinimaxSearch",
    "MoveChoice",
    "MoveSelector",
    "PIECE_VALUES",
    "SearchError",
    "SearchLimits",
    "SearchResult",
    "SearchableGame",
    "TTEntry",
    "TranspositionTable",
    "candidate_moves",
    "choose_move",
    "detached_copy",
    "evaluate",
    "material_balance",
]
