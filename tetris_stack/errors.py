"""
Exceptions raised by the piece containers.
Every error is a precondition violation; none of them is fatal.
"""

from .types import FailureReason


class PieceContainerError(Exception):
    """Base class for queue and stack precondition violations."""

    reason: FailureReason

    def __init__(self, message: str | None = None):
        super().__init__(message or self.reason.value.replace("_", " "))


class QueueEmpty(PieceContainerError):
    reason = FailureReason.QUEUE_EMPTY


class QueueFull(PieceContainerError):
    reason = FailureReason.QUEUE_FULL


class StackEmpty(PieceContainerError):
    reason = FailureReason.STACK_EMPTY


class StackFull(PieceContainerError):
    reason = FailureReason.STACK_FULL


class InsufficientDepth(PieceContainerError):
    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"{self.reason.value.replace('_', ' ')}: "
            f"required {required}, available {available}"
        )


class InsufficientQueueDepth(InsufficientDepth):
    reason = FailureReason.INSUFFICIENT_QUEUE_DEPTH


class InsufficientStackDepth(InsufficientDepth):
    reason = FailureReason.INSUFFICIENT_STACK_DEPTH
