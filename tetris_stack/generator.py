from __future__ import annotations

from dataclasses import dataclass, field
from itertools import cycle
from typing import Iterator, Optional, Sequence

import numpy as np

from .config import config
from .types import Piece


@dataclass(slots=True)
class PieceGenerator:
    """Produces pieces with strictly increasing ids.

    Kinds are drawn uniformly from ``config.PIECE_KINDS``. Passing ``kinds``
    switches to scripted mode, cycling through the given sequence instead,
    which keeps scenarios reproducible without relying on a seed.
    Ids are plain ints and keep widening; they never wrap.
    """

    seed: Optional[int] = None
    kinds: Optional[Sequence[str]] = None
    start_id: int = 0
    rng: np.random.Generator = field(init=False, repr=False)
    _next_id: int = field(init=False, repr=False)
    _script: Optional[Iterator[str]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.start_id < 0:
            raise ValueError("start_id must be non-negative")
        self.rng = np.random.default_rng(
            self.seed if self.seed is not None else config.SEED
        )
        self._next_id = self.start_id
        if self.kinds is not None:
            kinds = list(self.kinds)
            if not kinds:
                raise ValueError("kinds must not be empty")
            unknown = [k for k in kinds if k not in config.PIECE_KINDS]
            if unknown:
                raise ValueError(f"Unknown piece kinds: {unknown}")
            self._script = cycle(kinds)

    def peek_id(self) -> int:
        return self._next_id

    def next(self) -> Piece:
        if self._script is not None:
            kind = next(self._script)
        else:
            kind = config.PIECE_KINDS[int(self.rng.integers(len(config.PIECE_KINDS)))]
        piece = Piece(kind=kind, id=self._next_id)
        self._next_id += 1
        return piece

    __next__ = next

    def __iter__(self) -> "PieceGenerator":
        return self
