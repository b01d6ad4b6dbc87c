"""
Bounded circular queue of pieces: the "next pieces" feed.
Storage is a fixed ring of slots; wraparound never shows in ordering.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .config import config
from .errors import InsufficientQueueDepth, QueueEmpty, QueueFull
from .types import Piece


class CircularQueue:
    """Fixed-capacity FIFO container backed by a ring buffer."""

    __slots__ = ("_slots", "_head", "_tail", "_count")

    def __init__(self, capacity: int = config.QUEUE_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._slots: List[Optional[Piece]] = [None] * capacity
        self._head = 0  # next slot to remove
        self._tail = 0  # next free slot
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.snapshot())

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self.capacity

    def enqueue(self, piece: Piece) -> None:
        """Append ``piece`` at the back. Raises QueueFull without touching live data."""
        if self.is_full():
            raise QueueFull()
        self._slots[self._tail] = piece
        self._tail = (self._tail + 1) % self.capacity
        self._count += 1

    def dequeue(self) -> Piece:
        """Remove and return the front piece. Raises QueueEmpty when empty."""
        if self.is_empty():
            raise QueueEmpty()
        piece = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % self.capacity
        self._count -= 1
        return piece

    def _index(self, offset: int) -> int:
        if self.is_empty():
            raise QueueEmpty()
        if not 0 <= offset < self._count:
            raise IndexError(f"queue offset {offset} out of range [0, {self._count})")
        return (self._head + offset) % self.capacity

    def peek_front(self) -> Piece:
        return self.peek_at(0)

    def peek_at(self, offset: int) -> Piece:
        return self._slots[self._index(offset)]

    def replace_at(self, offset: int, piece: Piece) -> Piece:
        """Overwrite the logical element at ``offset`` and return the old one."""
        i = self._index(offset)
        old = self._slots[i]
        self._slots[i] = piece
        return old

    def require_depth(self, depth: int) -> None:
        if self._count < depth:
            raise InsufficientQueueDepth(required=depth, available=self._count)

    def snapshot(self) -> Tuple[Piece, ...]:
        """Front-to-back view of the live pieces."""
        n = self.capacity
        return tuple(self._slots[(self._head + k) % n] for k in range(self._count))

    def __repr__(self) -> str:
        return f"CircularQueue({list(self.snapshot())!r}, capacity={self.capacity})"
