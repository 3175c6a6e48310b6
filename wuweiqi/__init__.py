"""Wuweiqi core engine package: place stones, discover the hidden rules."""

from .board import BOARD_SIZE, Board, Orientation, Stone
from .catalog import ALL_RULES, Rule, RuleKind, get_rule
from .config import GameConfig, GameMode
from .engine import confirm_placement, replay_move_log
from .hints import HintLadder, get_hint
from .move import Placement, PlacementError, PlacementResult
from .selector import ActiveRuleSet, select_rule_set
from .state import GameState, MoveRecord, Phase, Player, get_active_rule_set, new_game, reset_game, reveal_rules

__all__ = [
    "BOARD_SIZE",
    "Board",
    "Orientation",
    "Stone",
    "ALL_RULES",
    "Rule",
    "RuleKind",
    "get_rule",
    "GameConfig",
    "GameMode",
    "confirm_placement",
    "replay_move_log",
    "HintLadder",
    "get_hint",
    "Placement",
    "PlacementError",
    "PlacementResult",
    "ActiveRuleSet",
    "select_rule_set",
    "GameState",
    "MoveRecord",
    "Phase",
    "Player",
    "get_active_rule_set",
    "new_game",
    "reset_game",
    "reveal_rules",
]
