"""Play a round in the terminal.

Run with: `python -m blockfall`

Pass ``--help`` to see the options for the board size, the frame rate, the
output surface and logging.  Esc ends the round; arrows move the piece and
``q``/``e`` rotate it.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional

from .board import HEIGHT, WIDTH
from .config import FPS, GameConfig
from .errors import TerminalError
from .game_state import GameState
from .geometry import Size
from .loop import run


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument("--height", type=int, default=HEIGHT, help="Board rows.")
    parser.add_argument("--width", type=int, default=WIDTH, help="Board columns.")
    parser.add_argument("--fps", type=int, default=FPS, help="Target frames per second.")
    parser.add_argument(
        "--surface",
        choices=("terminal", "window"),
        default="terminal",
        help="Draw into the terminal (curses) or a pygame window.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log messages to this file instead of stderr.",
    )
    return parser.parse_args(argv)


def configure_logging(level: str, log_file: Optional[str]) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        filename=log_file,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def make_surface(name: str, config: GameConfig):
    if name == "window":
        from .window import PygameSurface

        return PygameSurface(config)
    from .terminal import CursesSurface

    return CursesSurface(config)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        config = GameConfig(board_size=Size(args.height, args.width), fps=args.fps)
    except ValueError as exc:
        LOGGER.error("Invalid settings: %s", exc)
        return 2

    try:
        with make_surface(args.surface, config) as surface:
            state = GameState.start(config, rng=random.Random(args.seed))
            run(state, surface)
    except TerminalError as exc:
        LOGGER.error("Terminal failure: %s", exc)
        return 1

    if state.game_over:
        print(f"Game over. Score: {state.score}, lines: {state.lines_cleared}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution only
    sys.exit(main())
