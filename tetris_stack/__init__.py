"""
Tetris Stack
Upcoming-piece queue and reserve stack for a block-stacking puzzle game.
"""

from .config import config
from .errors import (
    InsufficientQueueDepth,
    InsufficientStackDepth,
    PieceContainerError,
    QueueEmpty,
    QueueFull,
    StackEmpty,
    StackFull,
)
from .generator import PieceGenerator
from .manager import PieceManager
from .ring_queue import CircularQueue
from .stack import BoundedStack
from .types import Action, ActionResult, FailureReason, Piece, StateSnapshot

__all__ = [
    "config",
    "Piece",
    "Action",
    "ActionResult",
    "FailureReason",
    "StateSnapshot",
    "PieceGenerator",
    "CircularQueue",
    "BoundedStack",
    "PieceManager",
    "PieceContainerError",
    "QueueEmpty",
    "QueueFull",
    "StackEmpty",
    "StackFull",
    "InsufficientQueueDepth",
    "InsufficientStackDepth",
]
