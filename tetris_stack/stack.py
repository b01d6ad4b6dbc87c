"""
Bounded stack of pieces: the reserve holding area.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .config import config
from .errors import InsufficientStackDepth, StackEmpty, StackFull
from .types import Piece


class BoundedStack:
    """Fixed-capacity LIFO container. ``top == -1`` means empty."""

    __slots__ = ("_slots", "_top")

    def __init__(self, capacity: int = config.STACK_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._slots: List[Optional[Piece]] = [None] * capacity
        self._top = -1

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def top(self) -> int:
        return self._top

    def __len__(self) -> int:
        return self._top + 1

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.snapshot())

    def is_empty(self) -> bool:
        return self._top == -1

    def is_full(self) -> bool:
        return self._top == self.capacity - 1

    def push(self, piece: Piece) -> None:
        if self.is_full():
            raise StackFull()
        self._top += 1
        self._slots[self._top] = piece

    def pop(self) -> Piece:
        if self.is_empty():
            raise StackEmpty()
        piece = self._slots[self._top]
        self._slots[self._top] = None
        self._top -= 1
        return piece

    def _index(self, depth: int) -> int:
        if self.is_empty():
            raise StackEmpty()
        if not 0 <= depth <= self._top:
            raise IndexError(f"stack depth {depth} out of range [0, {self._top + 1})")
        return self._top - depth

    def peek_top(self) -> Piece:
        return self.peek_at(0)

    def peek_at(self, depth: int) -> Piece:
        """Piece ``depth`` positions below the top (0 is the top)."""
        return self._slots[self._index(depth)]

    def replace_at(self, depth: int, piece: Piece) -> Piece:
        i = self._index(depth)
        old = self._slots[i]
        self._slots[i] = piece
        return old

    def require_depth(self, depth: int) -> None:
        if len(self) < depth:
            raise InsufficientStackDepth(required=depth, available=len(self))

    def snapshot(self) -> Tuple[Piece, ...]:
        """Top-to-base view."""
        return tuple(self._slots[i] for i in range(self._top, -1, -1))

    def __repr__(self) -> str:
        return f"BoundedStack({list(self.snapshot())!r}, capacity={self.capacity})"
