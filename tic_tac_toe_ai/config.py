import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import Final

from tic_tac_toe_ai.game import GameMode

UI_CHOICES: Final = ("terminal", "pygame")
LOG_LEVELS: Final = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_AI_DELAY: Final = 0.5
LOG_FORMAT: Final = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class GameConfig:
    mode: GameMode = GameMode.HUMAN_VS_AI
    uis: tuple[str, ...] = ("terminal",)
    ai_delay: float = DEFAULT_AI_DELAY
    log_level: str = "WARNING"
    log_file: str | None = None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tic-tac-toe-ai", description="Tic-tac-toe with a perfect-play AI.")

    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GameMode],
        default=GameMode.HUMAN_VS_AI.value,
        help="'human' for Human vs Human, 'ai' for Human vs AI (default: %(default)s)",
    )
    parser.add_argument("--ui", nargs="+", choices=UI_CHOICES, default=["terminal"])
    parser.add_argument(
        "--ai-delay",
        type=float,
        default=DEFAULT_AI_DELAY,
        help="seconds to wait before the AI plays (default: %(default)s)",
    )

    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")
    parser.add_argument("--log-file")

    return parser


def parse_config(argv: Sequence[str] | None = None) -> GameConfig:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.ai_delay < 0:
        parser.error("--ai-delay must not be negative")

    return GameConfig(
        mode=GameMode(args.mode),
        uis=tuple(dict.fromkeys(args.ui)),
        ai_delay=args.ai_delay,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def configure_logging(level: str, log_file: str | None = None) -> None:
    handler: logging.Handler
    if log_file:
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("tic_tac_toe_ai")
    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.propagate = False
