from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from termblocks.game import GameConfig, GameController, GameLoop, ScoreTracker
from termblocks.terminal import InputUnavailableError, KeyboardInput, TerminalScreen, TerminalView


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="termblocks", description="Falling-block puzzle game for the terminal")
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducible piece sequences")
    p.add_argument("--delay", type=float, default=GameConfig.initial_delay,
                   help="Initial gravity delay in seconds")
    p.add_argument("--no-color", action="store_true", help="Start with colors disabled")
    p.add_argument("--hide-next", action="store_true", help="Start with the next piece preview hidden")
    p.add_argument("--hide-help", action="store_true", help="Start with the key help hidden")
    p.add_argument("--window", action="store_true", help="Play in a pygame window instead of the terminal")
    p.add_argument("--log-file", type=str, default=None, help="Write log records to this file")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    return p


def config_from_args(args: argparse.Namespace) -> GameConfig:
    if args.delay <= 0:
        raise ValueError("--delay must be positive")
    return GameConfig(
        random_seed=args.seed,
        initial_delay=args.delay,
        use_color=not args.no_color,
        show_next=not args.hide_next,
        show_help=not args.hide_help,
    )


def configure_logging(log_file: Optional[str], level: str) -> None:
    # the terminal is the game screen, so records only go to a file
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.getLogger("termblocks").addHandler(logging.NullHandler())


def run_terminal(config: GameConfig) -> ScoreTracker:
    screen = TerminalScreen(sys.stdout, use_color=config.use_color)
    with KeyboardInput() as keyboard:
        try:
            view = TerminalView(screen, show_help=config.show_help)
            game = GameController(config, view=view)
            GameLoop(game, keyboard).run()
        finally:
            screen.show_cursor()
            screen.flush()
    sys.stdout.write("\n")
    return game.score


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
    configure_logging(args.log_file, args.log_level)
    logger.info("starting game with %s", config)

    if args.window:
        # pygame is only needed for the windowed front end
        from termblocks.visualization.human_play import run as run_window

        score = run_window(config)
    else:
        try:
            score = run_terminal(config)
        except InputUnavailableError as exc:
            print(f"termblocks: {exc}", file=sys.stderr)
            return 1
    logger.info(
        "game finished: score %d, level %d, lines %d", score.score, score.level, score.lines_completed
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
