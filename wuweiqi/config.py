from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

DEFAULT_INITIAL_STONES = {"solo": 15, "duel": 15}


class GameMode(str, Enum):
    SOLO = "solo"
    DUEL = "duel"

    def player_ids(self) -> Tuple[int, ...]:
        return (1,) if self is GameMode.SOLO else (1, 2)


@dataclass(frozen=True)
class GameConfig:
    initial_stones: Optional[int] = None
    coverage_min: float = 0.25
    coverage_max: float = 0.5
    max_selection_attempts: int = 100

    def __post_init__(self) -> None:
        if self.initial_stones is not None and self.initial_stones <= 0:
            raise ValueError("initial_stones must be positive")
        if not 0.0 <= self.coverage_min <= self.coverage_max <= 1.0:
            raise ValueError("coverage bounds must satisfy 0 <= coverage_min <= coverage_max <= 1")
        if self.max_selection_attempts < 0:
            raise ValueError("max_selection_attempts must be non-negative")

    def stones_for(self, mode: GameMode) -> int:
        if self.initial_stones is not None:
            return self.initial_stones
        return DEFAULT_INITIAL_STONES[GameMode(mode).value]
