"""
Interactive console for the Tetris Stack simulator.
Renders the piece queue and the reserve stack and maps menu choices onto
PieceManager actions.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, TextIO

from loguru import logger

from .config import config
from .generator import PieceGenerator
from .manager import PieceManager
from .types import Action, ActionResult, FailureReason, PieceView

EXIT_CHOICE = 0

MENU = (
    "Actions:",
    "1. Play piece",
    "2. Reserve piece",
    "3. Use reserved piece",
    "4. Swap queue front with reserve top",
    "5. Swap the first 3 queue pieces with the 3 reserve pieces",
    "0. Exit",
)

ACTION_MESSAGES = {
    Action.PLAY: "Piece played",
    Action.RESERVE: "Piece reserved",
    Action.USE_RESERVED: "Reserved piece used",
    Action.SWAP_TOP: "Swapped queue front with reserve top",
    Action.SWAP_TRIPLE: "Swapped 3 queue pieces with 3 reserve pieces",
}

FAILURE_MESSAGES = {
    FailureReason.QUEUE_EMPTY: "Queue of pieces is empty!",
    FailureReason.QUEUE_FULL: "Queue of pieces is full!",
    FailureReason.STACK_EMPTY: "Reserve stack is empty! Nothing to use.",
    FailureReason.STACK_FULL: "Reserve stack is full, cannot reserve.",
    FailureReason.INSUFFICIENT_QUEUE_DEPTH: "Not enough pieces in the queue",
    FailureReason.INSUFFICIENT_STACK_DEPTH: "Not enough pieces in the reserve",
}

RULE = "=" * 50
CLEAR_SEQUENCE = "\033[2J\033[H"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def format_pieces(pieces: Sequence[PieceView]) -> str:
    if not pieces:
        return "[EMPTY]"
    return " ".join(f"[{kind} {pid}]" for kind, pid in pieces)


def render_state(manager: PieceManager) -> str:
    queue, stack = manager.state_snapshot()
    lines = [
        RULE,
        "TETRIS STACK".center(len(RULE)),
        RULE,
        "Current state:",
        "",
        f"Queue of pieces: {format_pieces(queue)}",
        f"Reserve stack (Top -> Base): {format_pieces(stack)}",
        "-" * len(RULE),
    ]
    return "\n".join(lines)


def describe_result(result: ActionResult) -> str:
    if result.success:
        pieces = " ".join(str(p) for p in result.pieces)
        return f"[ACTION] {ACTION_MESSAGES[result.action]}: {pieces}"
    message = FAILURE_MESSAGES[result.reason]
    if result.required is not None:
        message = f"{message} (need {result.required})."
    return f"[WARNING] {message}"


def parse_choice(raw: str) -> Optional[int]:
    """Menu number for ``raw``, or None when it is not a known option."""
    try:
        choice = int(raw.strip())
    except ValueError:
        return None
    if choice == EXIT_CHOICE or choice in {a.value for a in Action}:
        return choice
    return None


@dataclass
class ConsoleSession:
    manager: PieceManager
    out: TextIO = field(default_factory=lambda: sys.stdout)
    input_fn: Callable[[str], str] = input
    clear_screen: bool = config.CLEAR_SCREEN
    pause: bool = config.PAUSE

    def echo(self, text: str = "") -> None:
        print(text, file=self.out)

    def _clear(self) -> None:
        if self.clear_screen:
            self.out.write(CLEAR_SEQUENCE)
            self.out.flush()

    def _pause(self) -> None:
        if self.pause:
            try:
                self.input_fn("\nPress Enter to continue...")
            except EOFError:
                pass

    def show_state(self) -> None:
        self._clear()
        self.echo(render_state(self.manager))

    def handle(self, choice: int) -> ActionResult:
        result = self.manager.apply(choice)
        if result.success:
            logger.info(f"{result.action.name.lower()}: {[str(p) for p in result.pieces]}")
        else:
            logger.info(f"{result.action.name.lower()} rejected: {result.reason.value}")
        self.echo()
        self.echo(describe_result(result))
        return result

    def run(self) -> None:
        """Menu loop until the user picks 0 or stdin is closed."""
        while True:
            self.show_state()
            self.echo("\n".join(MENU))
            self.echo("-" * len(RULE))
            try:
                raw = self.input_fn("Option: ")
            except EOFError:
                self.echo()
                break
            choice = parse_choice(raw)
            if choice is None:
                self.echo("\n[ERROR] Invalid option. Try again.")
                self._pause()
                continue
            if choice == EXIT_CHOICE:
                break
            self.handle(choice)
            self._pause()
        self.echo("\nLeaving Tetris Stack...")

    def replay(self, choices: Sequence[int]) -> List[ActionResult]:
        """Apply ``choices`` without prompting, rendering after each one."""
        results = []
        self.echo(render_state(self.manager))
        for choice in choices:
            results.append(self.handle(choice))
            self.echo(render_state(self.manager))
        return results


def parse_actions(value: str) -> List[int]:
    choices = []
    for token in value.split(","):
        if not token.strip():
            continue
        choice = parse_choice(token)
        if choice is None or choice == EXIT_CHOICE:
            raise argparse.ArgumentTypeError(f"invalid action: {token!r}")
        choices.append(choice)
    return choices


def parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid log level: {value!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tetris Stack: upcoming-piece queue and reserve stack simulator"
    )
    parser.add_argument("--seed", type=int, default=config.SEED)
    parser.add_argument(
        "--actions",
        type=parse_actions,
        default=None,
        help="Comma separated menu choices (1-5) to replay without prompting",
    )
    parser.add_argument(
        "--no-clear",
        dest="clear",
        action="store_false",
        default=config.CLEAR_SCREEN,
        help="Do not clear the terminal between turns",
    )
    parser.add_argument(
        "--no-pause",
        dest="pause",
        action="store_false",
        default=config.PAUSE,
        help="Do not wait for Enter after each action",
    )
    parser.add_argument(
        "--log-level",
        type=parse_log_level,
        default=config.LOG_LEVEL,
        help="loguru level for stderr (TETRIS_LOG_LEVEL)",
    )
    return parser


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    manager = PieceManager(generator=PieceGenerator(seed=args.seed))
    manager.initialize()
    logger.info(f"Session started with seed={args.seed}")

    if args.actions is not None:
        ConsoleSession(manager, clear_screen=False, pause=False).replay(args.actions)
        return 0

    ConsoleSession(manager, clear_screen=args.clear, pause=args.pause).run()
    return 0
