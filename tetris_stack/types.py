from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Piece:
    """Opaque game piece. Immutable, so containers can hold it by value."""

    kind: str  # one of config.PIECE_KINDS
    id: int  # unique for the process lifetime

    def __str__(self) -> str:
        return f"[{self.kind} {self.id}]"


class Action(IntEnum):
    """Menu actions; values match the console menu numbers."""

    PLAY = 1
    RESERVE = 2
    USE_RESERVED = 3
    SWAP_TOP = 4
    SWAP_TRIPLE = 5


class FailureReason(Enum):
    QUEUE_EMPTY = "queue_empty"
    QUEUE_FULL = "queue_full"
    STACK_EMPTY = "stack_empty"
    STACK_FULL = "stack_full"
    INSUFFICIENT_QUEUE_DEPTH = "insufficient_queue_depth"
    INSUFFICIENT_STACK_DEPTH = "insufficient_stack_depth"


@dataclass(frozen=True, slots=True)
class ActionResult:
    action: Action
    success: bool
    pieces: Tuple[Piece, ...] = field(default_factory=tuple)
    reason: Optional[FailureReason] = None
    required: Optional[int] = None  # depth needed, for the insufficient-depth reasons

    @classmethod
    def ok(cls, action: Action, *pieces: Piece) -> "ActionResult":
        return cls(action=action, success=True, pieces=tuple(pieces))

    @classmethod
    def failure(
        cls, action: Action, reason: FailureReason, required: Optional[int] = None
    ) -> "ActionResult":
        return cls(action=action, success=False, reason=reason, required=required)

    def __bool__(self) -> bool:
        return self.success


PieceView = Tuple[str, int]


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Read-only view for rendering: queue front-to-back, stack top-to-base."""

    queue: Tuple[PieceView, ...]
    stack: Tuple[PieceView, ...]

    def __iter__(self):
        # Allows ``queue, stack = manager.state_snapshot()``
        yield self.queue
        yield self.stack
