from __future__ import annotations

import string
from dataclasses import dataclass
from typing import List, Tuple

from .board import BOARD_SIZE, Orientation
from .config import GameMode
from .state import GameState, MoveRecord

COLUMN_LETTERS = string.ascii_uppercase[:BOARD_SIZE]


def cell_label(row: int, col: int) -> str:
    """Board coordinates as shown to players: column letter, then rank counted from the bottom."""
    return f"{COLUMN_LETTERS[col]}{BOARD_SIZE - row}"


def parse_cell_label(label: str) -> Tuple[int, int]:
    text = label.strip().upper()
    if len(text) < 2 or text[0] not in COLUMN_LETTERS or not text[1:].isdigit():
        raise ValueError(f"invalid cell label {label!r}")
    rank = int(text[1:])
    if not 1 <= rank <= BOARD_SIZE:
        raise ValueError(f"invalid cell label {label!r}")
    return BOARD_SIZE - rank, COLUMN_LETTERS.index(text[0])


def orientation_name(orientation: Orientation | int) -> str:
    return Orientation(orientation).name.capitalize()


def format_move(move: MoveRecord, mode: GameMode = GameMode.SOLO) -> str:
    prefix = f"P{move.player}: " if mode == GameMode.DUEL else ""
    mark = "○" if move.legal else "✕"
    return f"{prefix}{cell_label(move.row, move.col)}{orientation_name(move.orientation)[0]} → {mark}"


def recent_moves(state: GameState, count: int = 5) -> List[MoveRecord]:
    """The last ``count`` moves, newest first."""
    if count <= 0:
        return []
    return list(reversed(state.move_log[-count:]))


@dataclass(frozen=True)
class PlayerStats:
    player_id: int
    stones_placed: int
    moves_taken: int
    illegal_attempts: int


def final_stats(state: GameState) -> List[PlayerStats]:
    stats = []
    for player in state.players:
        illegal = sum(1 for m in state.move_log if m.player == player.player_id and not m.legal)
        stats.append(PlayerStats(player.player_id, player.stones_placed, player.moves_taken, illegal))
    return stats


def result_headline(state: GameState) -> str:
    if not state.is_over:
        return "Game in progress"
    if state.mode == GameMode.SOLO:
        return "Congratulations!"
    return f"Player {state.winner} Wins!"
