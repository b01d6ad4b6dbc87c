from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict

from loguru import logger

from .config import config
from .errors import PieceContainerError
from .generator import PieceGenerator
from .ring_queue import CircularQueue
from .stack import BoundedStack
from .types import Action, ActionResult, FailureReason, StateSnapshot


@dataclass(slots=True)
class PieceManager:
    """Session aggregate owning the upcoming-pieces queue and the reserve stack.

    Every action validates its preconditions before touching either container,
    so a rejected action leaves the session exactly as it was. Actions that
    take a piece out of the queue (play, reserve) refill it right away; swaps
    and use_reserved never do.
    """

    generator: PieceGenerator = field(default_factory=PieceGenerator)
    queue: CircularQueue = field(
        default_factory=lambda: CircularQueue(config.QUEUE_CAPACITY)
    )
    stack: BoundedStack = field(
        default_factory=lambda: BoundedStack(config.STACK_CAPACITY)
    )
    _handlers: Dict[Action, Callable[[], ActionResult]] = field(
        init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._handlers = {
            Action.PLAY: self.play,
            Action.RESERVE: self.reserve,
            Action.USE_RESERVED: self.use_reserved,
            Action.SWAP_TOP: self.swap_top,
            Action.SWAP_TRIPLE: self.swap_triple,
        }

    # --- Session ---
    def initialize(self) -> None:
        """Fill the queue to capacity. The stack is left as is (empty on a new session)."""
        while not self.queue.is_full():
            self.queue.enqueue(self.generator.next())
        logger.debug(f"Session initialized: queue={self.queue!r}")

    def state_snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            queue=tuple((p.kind, p.id) for p in self.queue.snapshot()),
            stack=tuple((p.kind, p.id) for p in self.stack.snapshot()),
        )

    def apply(self, action: Action | int) -> ActionResult:
        return self._handlers[Action(action)]()

    def _refill(self) -> None:
        self.queue.enqueue(self.generator.next())

    # --- Actions ---
    def play(self) -> ActionResult:
        if self.queue.is_empty():
            return ActionResult.failure(Action.PLAY, FailureReason.QUEUE_EMPTY)
        played = self.queue.dequeue()
        self._refill()
        logger.debug(f"Played {played}")
        return ActionResult.ok(Action.PLAY, played)

    def reserve(self) -> ActionResult:
        if self.stack.is_full():
            return ActionResult.failure(Action.RESERVE, FailureReason.STACK_FULL)
        if self.queue.is_empty():
            return ActionResult.failure(Action.RESERVE, FailureReason.QUEUE_EMPTY)
        piece = self.queue.dequeue()
        self.stack.push(piece)
        self._refill()
        logger.debug(f"Reserved {piece}")
        return ActionResult.ok(Action.RESERVE, piece)

    def use_reserved(self) -> ActionResult:
        if self.stack.is_empty():
            return ActionResult.failure(Action.USE_RESERVED, FailureReason.STACK_EMPTY)
        used = self.stack.pop()
        logger.debug(f"Used reserved {used}")
        return ActionResult.ok(Action.USE_RESERVED, used)

    def swap_top(self) -> ActionResult:
        if self.queue.is_empty():
            return ActionResult.failure(Action.SWAP_TOP, FailureReason.QUEUE_EMPTY)
        if self.stack.is_empty():
            return ActionResult.failure(Action.SWAP_TOP, FailureReason.STACK_EMPTY)
        front, top = self._exchange(0)
        logger.debug(f"Swapped queue front {front} with stack top {top}")
        return ActionResult.ok(Action.SWAP_TOP, front, top)

    def swap_triple(self) -> ActionResult:
        depth = config.SWAP_DEPTH
        try:
            self.queue.require_depth(depth)
            self.stack.require_depth(depth)
        except PieceContainerError as e:
            return ActionResult.failure(
                Action.SWAP_TRIPLE, e.reason, required=getattr(e, "required", None)
            )
        from_queue = []
        from_stack = []
        for i in range(depth):
            front, top = self._exchange(i)
            from_queue.append(front)
            from_stack.append(top)
        logger.debug(f"Triple swap: queue {from_queue} <-> stack {from_stack}")
        return ActionResult.ok(Action.SWAP_TRIPLE, *from_queue, *from_stack)

    def _exchange(self, position: int):
        """Positional exchange of queue offset ``position`` and stack depth ``position``."""
        from_queue = self.queue.peek_at(position)
        from_stack = self.stack.replace_at(position, from_queue)
        self.queue.replace_at(position, from_stack)
        return from_queue, from_stack
