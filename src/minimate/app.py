"""Command-line entry point: pick a move for a FEN position."""

from __future__ import annotations

import argparse
import logging
import sys

from minimate.core.notation import STARTING_FEN
from minimate.engine import MoveSelector, SearchLimits
from minimate.game import GameState

_LOGGER = logging.getLogger("minimate.app")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="minimate", description="Choose a move for the side to move."
    )
    parser.add_argument("--fen", default=STARTING_FEN, help="Position in FEN")
    parser.add_argument("--depth", type=int, default=3, help="Search depth in plies")
    parser.add_argument("--seed", type=int, default=None, help="Tie-break seed")
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable the transposition table",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING)
    )

    try:
        game = GameState.from_fen(args.fen)
        limits = SearchLimits(
            max_depth=args.depth, use_cache=not args.no_cache, seed=args.seed
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    result = MoveSelector(limits).select(game)
    _LOGGER.info(
        "score=%d depth=%d nodes=%d cache_hits=%d",
        result.score,
        result.depth,
        result.nodes,
        result.cache_hits,
    )
    print(result.best_move if result.best_move is not None else "(none)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
