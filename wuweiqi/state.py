from __future__ import annotations

import hashlib
import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from .board import Board, Orientation
from .config import GameConfig, GameMode
from .selector import ActiveRuleSet, select_rule_set

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class Player:
    player_id: int
    initial_stones: int
    stones_remaining: int
    moves_taken: int = 0

    @property
    def stones_placed(self) -> int:
        return self.initial_stones - self.stones_remaining


@dataclass(frozen=True)
class MoveRecord:
    row: int
    col: int
    orientation: Orientation
    player: int
    legal: bool
    sequence_index: int

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "orientation": int(self.orientation),
            "player": self.player,
            "legal": self.legal,
            "sequence_index": self.sequence_index,
        }


@dataclass
class GameState:
    config: GameConfig
    mode: GameMode
    board: Board
    rule_set: ActiveRuleSet
    players: List[Player]
    current_player: int
    move_log: List[MoveRecord] = field(default_factory=list)
    phase: Phase = Phase.IN_PROGRESS
    winner: Optional[int] = None
    rng_seed: Optional[int] = None

    def copy(self) -> "GameState":
        # Board, rule set, players and records are immutable; only the lists need copying.
        return replace(self, players=list(self.players), move_log=list(self.move_log))

    def player(self, player_id: int) -> Player:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise ValueError(f"no player with id {player_id}")

    @property
    def active_player(self) -> Player:
        return self.player(self.current_player)

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.GAME_OVER

    def state_key(self) -> Tuple:
        return (
            self.mode.value,
            self.rule_set.ids(),
            self.board.canonical_key(),
            tuple((p.player_id, p.stones_remaining, p.moves_taken) for p in self.players),
            self.current_player,
            tuple((m.row, m.col, int(m.orientation), m.player, m.legal) for m in self.move_log),
            self.phase.value,
            self.winner,
        )

    def stable_hash(self) -> str:
        return hashlib.sha256(repr(self.state_key()).encode("utf-8")).hexdigest()


def new_game(
    mode: GameMode | str = GameMode.SOLO,
    config: GameConfig | None = None,
    rng_seed: Optional[int] = None,
    rule_set: Optional[ActiveRuleSet] = None,
) -> GameState:
    mode = GameMode(mode)
    config = config or GameConfig()
    if rule_set is None:
        rng = random.Random(rng_seed)
        rule_set = select_rule_set(
            min_coverage=config.coverage_min,
            max_coverage=config.coverage_max,
            max_attempts=config.max_selection_attempts,
            rng=rng,
        )
    stones = config.stones_for(mode)
    players = [Player(player_id=pid, initial_stones=stones, stones_remaining=stones) for pid in mode.player_ids()]
    logger.debug("new %s game, hidden rules: %s", mode.value, list(rule_set.ids()))
    return GameState(
        config=config,
        mode=mode,
        board=Board.empty(),
        rule_set=rule_set,
        players=players,
        current_player=players[0].player_id,
        rng_seed=rng_seed,
    )


def reset_game(state: GameState, rng_seed: Optional[int] = None) -> GameState:
    """Start over with the same mode and config and a freshly drawn rule set."""
    return new_game(mode=state.mode, config=state.config, rng_seed=rng_seed)


def get_active_rule_set(state: GameState) -> ActiveRuleSet:
    return state.rule_set


def reveal_rules(state: GameState) -> List[dict]:
    if not state.is_over:
        raise RuntimeError("hidden rules are only revealed once the game is over")
    return [rule.to_dict() for rule in state.rule_set]
