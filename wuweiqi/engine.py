from __future__ import annotations

import logging
from typing import Iterable, Optional

from .board import Board, Orientation
from .config import GameMode
from .move import PlacementError, PlacementResult
from .selector import ActiveRuleSet
from .state import GameState, MoveRecord, Phase, Player

logger = logging.getLogger(__name__)


def is_legal(row: int, col: int, orientation: Orientation, rule_set: ActiveRuleSet, board: Board) -> bool:
    return not any(rule.is_illegal(row, col, orientation, board) for rule in rule_set)


def check_placement(state: GameState, row: int, col: int) -> Optional[PlacementError]:
    """Caller-side preconditions of a placement; says nothing about the hidden rules."""
    if state.phase == Phase.GAME_OVER:
        return PlacementError.GAME_ALREADY_OVER
    if not state.board.in_bounds(row, col):
        return PlacementError.OUT_OF_BOUNDS
    if state.board.is_occupied(row, col):
        return PlacementError.CELL_OCCUPIED
    if state.active_player.stones_remaining <= 0:
        return PlacementError.NO_STONES_REMAINING
    return None


def _replace_player(state: GameState, player: Player) -> None:
    state.players = [player if p.player_id == player.player_id else p for p in state.players]


def _advance_player(state: GameState) -> None:
    if state.mode != GameMode.DUEL or state.phase == Phase.GAME_OVER:
        return
    ids = [p.player_id for p in state.players]
    state.current_player = ids[(ids.index(state.current_player) + 1) % len(ids)]


def _record(state: GameState, row: int, col: int, orientation: Orientation, legal: bool) -> MoveRecord:
    move = MoveRecord(
        row=row,
        col=col,
        orientation=orientation,
        player=state.current_player,
        legal=legal,
        sequence_index=len(state.move_log),
    )
    state.move_log.append(move)
    return move


def _apply_legal(state: GameState, row: int, col: int, orientation: Orientation) -> MoveRecord:
    player = state.active_player
    state.board = state.board.place(row, col, orientation)
    player = Player(
        player_id=player.player_id,
        initial_stones=player.initial_stones,
        stones_remaining=player.stones_remaining - 1,
        moves_taken=player.moves_taken + 1,
    )
    _replace_player(state, player)
    move = _record(state, row, col, orientation, legal=True)
    if player.stones_remaining == 0:
        state.phase = Phase.GAME_OVER
        state.winner = player.player_id
        logger.info("player %d placed the last stone after %d moves", player.player_id, player.moves_taken)
    return move


def _apply_illegal(state: GameState, row: int, col: int, orientation: Orientation) -> MoveRecord:
    player = state.active_player
    _replace_player(state, Player(player.player_id, player.initial_stones, player.stones_remaining, player.moves_taken + 1))
    return _record(state, row, col, orientation, legal=False)


def confirm_placement(state: GameState, row: int, col: int, orientation: Orientation | int) -> PlacementResult:
    orientation = Orientation(orientation)
    error = check_placement(state, row, col)
    if error is not None:
        logger.debug("placement at (%d, %d) rejected: %s", row, col, error.value)
        return PlacementResult.rejected(state, error)

    legal = is_legal(row, col, orientation, state.rule_set, state.board)
    new_state = state.copy()
    if legal:
        move = _apply_legal(new_state, row, col, orientation)
    else:
        move = _apply_illegal(new_state, row, col, orientation)
    _advance_player(new_state)
    logger.debug(
        "move %d: player %d at (%d, %d) %s -> %s",
        move.sequence_index,
        move.player,
        row,
        col,
        orientation.name,
        "legal" if legal else "illegal",
    )
    return PlacementResult.accepted(new_state, move)


def replay_move_log(initial_state: GameState, moves: Iterable[MoveRecord]) -> GameState:
    state = initial_state.copy()
    for move in moves:
        if move.player != state.current_player:
            raise ValueError(f"move {move.sequence_index} was played by {move.player}, expected {state.current_player}")
        result = confirm_placement(state, move.row, move.col, move.orientation)
        if not result.ok:
            raise ValueError(f"move {move.sequence_index} rejected: {result.error.value}")
        if result.move.legal != move.legal:
            raise ValueError(f"move {move.sequence_index} legality changed on replay")
        state = result.state
    return state
