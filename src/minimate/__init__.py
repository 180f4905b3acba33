"""minimate: fixed-depth minimax move selection for chess."""

from minimate.engine import MoveChoice, MoveSelector, SearchLimits, choose_move
from minimate.game import GameState

__version__ = "0.1.0"

__all__ = ["GameState", "MoveChoice", "MoveSelector", "SearchLimits", "choose_move"]
