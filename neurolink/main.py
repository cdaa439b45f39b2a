from __future__ import annotations

import argparse
import logging
import random
import signal
import sys

from .constants import FRAME_RATE
from .controller import GameController
from .renderer import restore_terminal
from .scenes import IntroScene
from .state import GameState

FAREWELL = "\nNeurolink session terminated.\n"


def handle_interrupt(signum, frame) -> None:
    """Restore the terminal and exit cleanly on SIGINT.

    Only the stateless restore is used here; the ``SystemExit`` unwinds the
    game loop, whose ``finally`` puts the keyboard back into cooked mode.
    """
    restore_terminal()
    sys.exit(0)


def main(argv: list[str] | None = None) -> None:
    """Entry point parsed from command line."""
    parser = argparse.ArgumentParser(description="Run Neurolink")
    parser.add_argument("--seed", type=int, default=None, help="Puzzle seed")
    parser.add_argument(
        "--fps", type=int, default=FRAME_RATE, help="Target frame rate"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "--show-fps", action="store_true", help="Display FPS/tick timing"
    )
    parser.add_argument(
        "--log-file", default=None, help="Write log output to this file"
    )
    args = parser.parse_args(argv)
    if args.fps <= 0:
        parser.error("--fps must be positive")

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG if args.verbose else logging.INFO,
        )
    else:
        # stderr shares the screen with the game, keep it quiet
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    state = GameState(rng=random.Random(args.seed))
    controller = GameController(
        state=state, frame_rate=args.fps, show_fps=args.show_fps
    )
    signal.signal(signal.SIGINT, handle_interrupt)
    try:
        controller.start(IntroScene())
    finally:
        sys.stdout.write(FAREWELL)
        sys.stdout.flush()


if __name__ == "__main__":
    main()
