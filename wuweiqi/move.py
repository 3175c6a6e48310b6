from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Orientation
from .state import GameState, MoveRecord


class PlacementError(str, Enum):
    GAME_ALREADY_OVER = "GAME_ALREADY_OVER"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    NO_STONES_REMAINING = "NO_STONES_REMAINING"


@dataclass(frozen=True)
class Placement:
    row: int
    col: int
    orientation: Orientation

    def rotated(self, quarter_turns: int = 1) -> "Placement":
        return Placement(self.row, self.col, Orientation(self.orientation).rotate(quarter_turns))


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a confirmed placement.

    When ``error`` is set the request was rejected: ``state`` is the unchanged
    input state and ``move`` is None. Otherwise ``move`` is the record that was
    appended, legal or not.
    """

    state: GameState
    move: Optional[MoveRecord] = None
    error: Optional[PlacementError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def rejected(state: GameState, error: PlacementError) -> "PlacementResult":
        return PlacementResult(state, None, error)

    @staticmethod
    def accepted(state: GameState, move: MoveRecord) -> "PlacementResult":
        return PlacementResult(state, move, None)
