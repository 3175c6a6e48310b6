from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import hashlib
from typing import Iterable, List, Optional, Tuple

BOARD_SIZE = 9
CENTER = BOARD_SIZE // 2


class Orientation(IntEnum):
    """Direction the white eye of a stone points to."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def rotate(self, quarter_turns: int = 1) -> "Orientation":
        return Orientation((self.value + quarter_turns) % 4)

    @classmethod
    def from_rotation_count(cls, rotation_count: int) -> "Orientation":
        # Python's modulo is already non-negative for negative counts.
        return cls(rotation_count % 4)

    @classmethod
    def parse(cls, value: "Orientation | int | str") -> "Orientation":
        if isinstance(value, Orientation):
            return value
        if isinstance(value, str):
            text = value.strip().upper()
            for orientation in cls:
                if orientation.name == text or orientation.name[0] == text:
                    return orientation
            if text.isdigit():
                return cls(int(text))
            raise ValueError(f"unknown orientation {value!r}")
        return cls(value)


@dataclass(frozen=True)
class Stone:
    orientation: Orientation


Cell = Optional[Stone]
Row = Tuple[Cell, ...]


def is_edge(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    last = size - 1
    return row == 0 or row == last or col == 0 or col == last


def is_corner(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    last = size - 1
    return row in (0, last) and col in (0, last)


def manhattan_distance(r1: int, c1: int, r2: int, c2: int) -> int:
    return abs(r1 - r2) + abs(c1 - c2)


def orthogonal_neighbors(row: int, col: int, size: int = BOARD_SIZE) -> List[Tuple[int, int]]:
    candidates = [(row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)]
    return [(r, c) for r, c in candidates if 0 <= r < size and 0 <= c < size]


def diagonal_neighbors(row: int, col: int, size: int = BOARD_SIZE) -> List[Tuple[int, int]]:
    candidates = [(row - 1, col - 1), (row - 1, col + 1), (row + 1, col - 1), (row + 1, col + 1)]
    return [(r, c) for r, c in candidates if 0 <= r < size and 0 <= c < size]


@dataclass(frozen=True)
class Board:
    """Immutable square grid; placing a stone returns a new board.

    Rows that are not touched by a placement are shared between the old and
    the new board, so earlier snapshots stay valid for as long as they are
    referenced.
    """

    rows: Tuple[Row, ...]

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> "Board":
        if size <= 0:
            raise ValueError("board size must be positive")
        empty_row: Row = (None,) * size
        return cls((empty_row,) * size)

    @property
    def size(self) -> int:
        return len(self.rows)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def stone_at(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise ValueError(f"cell ({row}, {col}) is off the board")
        return self.rows[row][col]

    def is_occupied(self, row: int, col: int) -> bool:
        return self.stone_at(row, col) is not None

    def place(self, row: int, col: int, orientation: Orientation) -> "Board":
        if self.is_occupied(row, col):
            raise ValueError(f"cell ({row}, {col}) is already occupied")
        old_row = self.rows[row]
        new_row = old_row[:col] + (Stone(Orientation(orientation)),) + old_row[col + 1 :]
        return Board(self.rows[:row] + (new_row,) + self.rows[row + 1 :])

    def occupied_cells(self) -> Iterable[Tuple[int, int, Stone]]:
        for r, cells in enumerate(self.rows):
            for c, stone in enumerate(cells):
                if stone is not None:
                    yield r, c, stone

    def stone_count(self) -> int:
        return sum(1 for _ in self.occupied_cells())

    def is_empty(self) -> bool:
        return all(stone is None for cells in self.rows for stone in cells)

    def canonical_key(self) -> Tuple:
        return tuple((r, c, int(stone.orientation)) for r, c, stone in self.occupied_cells())

    def stable_hash(self) -> str:
        return hashlib.sha256(repr(self.canonical_key()).encode("utf-8")).hexdigest()
