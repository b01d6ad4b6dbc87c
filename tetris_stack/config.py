import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_seed() -> int | None:
    raw = os.getenv("TETRIS_SEED")
    return int(raw) if raw not in (None, "") else None


@dataclass(slots=True)
class Config:
    # --- Constants (not configurable) ---
    QUEUE_CAPACITY: int = 5
    STACK_CAPACITY: int = 3
    SWAP_DEPTH: int = 3  # pieces exchanged by a triple swap
    PIECE_KINDS: str = "IOTLSZJ"

    # --- Runtime settings ---
    SEED: int | None = _env_seed()
    LOG_LEVEL: str = os.getenv("TETRIS_LOG_LEVEL", "WARNING").upper()
    CLEAR_SCREEN: bool = _env_flag("TETRIS_CLEAR_SCREEN", "true")
    PAUSE: bool = _env_flag("TETRIS_PAUSE", "true")

    def __post_init__(self):
        if self.SWAP_DEPTH > min(self.QUEUE_CAPACITY, self.STACK_CAPACITY):
            raise ValueError("SWAP_DEPTH must fit in both queue and stack")
        if not self.PIECE_KINDS or any(len(k) != 1 for k in self.PIECE_KINDS):
            raise ValueError("PIECE_KINDS must be single characters")


config = Config()
