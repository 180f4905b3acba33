"""Game layer: the stateful rules collaborator searched by the engine."""

from minimate.game.state import (
    DEFAULT_PROMOTION,
    GameState,
    IllegalMoveError,
    MoveRecord,
)

__all__ = ["DEFAULT_PROMOTION", "GameState", "IllegalMoveError", "MoveRecord"]
