import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wuweiqi.board import Board, Orientation
from wuweiqi.config import GameConfig, GameMode
from wuweiqi.engine import confirm_placement, is_legal, replay_move_log
from wuweiqi.move import PlacementError
from wuweiqi.selector import ActiveRuleSet
from wuweiqi.state import MoveRecord, Phase, Player, get_active_rule_set, new_game, reset_game, reveal_rules

SUM_EVEN = ActiveRuleSet.of("sum_even")


def _game(mode=GameMode.SOLO, stones=None, rule_set=SUM_EVEN):
    return new_game(mode=mode, config=GameConfig(initial_stones=stones), rng_seed=0, rule_set=rule_set)


def test_sum_even_scenario():
    state = _game()

    illegal = confirm_placement(state, 0, 0, Orientation.NORTH)
    assert illegal.ok
    assert illegal.move.legal is False
    assert illegal.state.board.is_empty()
    assert illegal.state.player(1).stones_remaining == 15
    assert illegal.state.player(1).moves_taken == 1

    legal = confirm_placement(illegal.state, 0, 1, Orientation.NORTH)
    assert legal.ok
    assert legal.move.legal is True
    assert legal.state.board.is_occupied(0, 1)
    assert legal.state.player(1).stones_remaining == 14
    assert legal.state.player(1).moves_taken == 2
    assert legal.state.move_log[-1].legal is True
    assert [m.sequence_index for m in legal.state.move_log] == [0, 1]


def test_confirm_placement_leaves_input_state_untouched():
    state = _game()
    key = state.state_key()
    result = confirm_placement(state, 0, 1, Orientation.EAST)
    assert result.state is not state
    assert state.state_key() == key
    assert state.move_log == []
    assert state.board.is_empty()


def test_legal_placement_changes_one_cell_and_one_counter():
    state = _game(mode=GameMode.DUEL)
    result = confirm_placement(state, 2, 3, Orientation.WEST)
    assert result.move.legal
    assert result.state.board.stone_count() == state.board.stone_count() + 1
    before = {p.player_id: p.stones_remaining for p in state.players}
    after = {p.player_id: p.stones_remaining for p in result.state.players}
    assert before[1] - after[1] == 1
    assert before[2] == after[2]


def test_rejections_leave_state_unchanged():
    state = confirm_placement(_game(), 0, 1, Orientation.NORTH).state

    occupied = confirm_placement(state, 0, 1, Orientation.SOUTH)
    assert not occupied.ok
    assert occupied.error == PlacementError.CELL_OCCUPIED
    assert occupied.move is None
    assert occupied.state is state
    assert len(state.move_log) == 1

    off_board = confirm_placement(state, 9, 0, Orientation.NORTH)
    assert off_board.error == PlacementError.OUT_OF_BOUNDS
    assert confirm_placement(state, -1, 3, Orientation.NORTH).error == PlacementError.OUT_OF_BOUNDS


def test_no_stones_remaining_is_rejected():
    state = _game(mode=GameMode.DUEL)
    state.players[0] = Player(player_id=1, initial_stones=15, stones_remaining=0, moves_taken=15)
    result = confirm_placement(state, 0, 1, Orientation.NORTH)
    assert result.error == PlacementError.NO_STONES_REMAINING
    assert result.state.move_log == []


def test_single_stone_solo_game_ends_on_first_legal_placement():
    state = _game(stones=1)
    state = confirm_placement(state, 0, 0, Orientation.NORTH).state
    assert state.phase == Phase.IN_PROGRESS

    result = confirm_placement(state, 0, 1, Orientation.NORTH)
    assert result.state.phase == Phase.GAME_OVER
    assert result.state.winner == 1
    assert result.state.current_player == 1

    after = confirm_placement(result.state, 1, 1, Orientation.NORTH)
    assert after.error == PlacementError.GAME_ALREADY_OVER


def test_duel_alternates_after_every_attempt():
    state = _game(mode=GameMode.DUEL)
    assert state.current_player == 1

    state = confirm_placement(state, 0, 0, Orientation.NORTH).state  # illegal
    assert state.current_player == 2
    assert state.player(1).moves_taken == 1
    assert state.player(1).stones_remaining == 15

    state = confirm_placement(state, 0, 1, Orientation.NORTH).state  # legal
    assert state.current_player == 1
    assert state.move_log[-1].player == 2
    assert state.player(2).stones_remaining == 14

    # rejected requests do not pass the turn
    rejected = confirm_placement(state, 0, 1, Orientation.NORTH)
    assert rejected.state.current_player == 1


def test_duel_winner_is_the_player_who_empties_first():
    state = _game(mode=GameMode.DUEL, stones=2)
    # P1 legal, P2 legal, P1 illegal, P2 legal
    for row, col in [(0, 1), (0, 3), (0, 0)]:
        state = confirm_placement(state, row, col, Orientation.NORTH).state
    assert state.phase == Phase.IN_PROGRESS
    assert [p.stones_remaining for p in state.players] == [1, 1]

    state = confirm_placement(state, 2, 1, Orientation.NORTH).state
    assert state.phase == Phase.GAME_OVER
    assert state.winner == 2
    assert state.current_player == 2
    assert state.player(1).stones_remaining == 1


def test_solo_never_changes_player():
    state = _game()
    for row, col in [(0, 0), (0, 1), (2, 2), (2, 3)]:
        state = confirm_placement(state, row, col, Orientation.NORTH).state
        assert state.current_player == 1
    assert len(state.players) == 1


def test_is_legal_is_pure():
    rule_set = ActiveRuleSet.of("adjacent_forbidden", "west_forbidden")
    board = Board.empty().place(4, 4, Orientation.NORTH)
    key = board.canonical_key()
    results = [is_legal(4, 5, Orientation.NORTH, rule_set, board) for _ in range(5)]
    assert results == [False] * 5
    assert is_legal(6, 6, Orientation.NORTH, rule_set, board)
    assert not is_legal(6, 6, Orientation.WEST, rule_set, board)
    assert board.canonical_key() == key


def test_empty_rule_set_allows_everything():
    assert is_legal(0, 0, Orientation.NORTH, ActiveRuleSet(()), Board.empty())


def test_replay_reproduces_state():
    initial = _game(mode=GameMode.DUEL, rule_set=ActiveRuleSet.of("sum_even", "adjacent_forbidden"))
    state = initial
    for row, col, orientation in [(0, 0, 0), (0, 1, 1), (0, 2, 2), (4, 5, 3), (3, 5, 0)]:
        state = confirm_placement(state, row, col, Orientation(orientation)).state

    replayed = replay_move_log(initial, state.move_log)
    assert replayed.state_key() == state.state_key()
    assert replayed.stable_hash() == state.stable_hash()


def test_replay_detects_tampered_log():
    initial = _game()
    state = confirm_placement(initial, 0, 1, Orientation.NORTH).state
    forged = MoveRecord(row=0, col=1, orientation=Orientation.NORTH, player=1, legal=False, sequence_index=0)
    with pytest.raises(ValueError):
        replay_move_log(initial, [forged])
    with pytest.raises(ValueError):
        replay_move_log(state, state.move_log)


def test_reveal_only_after_game_over():
    state = _game(stones=1)
    assert get_active_rule_set(state) == SUM_EVEN
    with pytest.raises(RuntimeError):
        reveal_rules(state)
    state = confirm_placement(state, 0, 1, Orientation.NORTH).state
    revealed = reveal_rules(state)
    assert [rule["id"] for rule in revealed] == ["sum_even"]
    assert revealed[0]["name"] == "Even Sum Forbidden"


def test_reset_replaces_the_whole_state():
    state = _game(mode=GameMode.DUEL, stones=4)
    state = confirm_placement(state, 0, 1, Orientation.NORTH).state
    fresh = reset_game(state, rng_seed=99)
    assert fresh.board.is_empty()
    assert fresh.move_log == []
    assert fresh.mode == GameMode.DUEL
    assert fresh.current_player == 1
    assert [p.stones_remaining for p in fresh.players] == [4, 4]
    assert 1 <= len(fresh.rule_set) <= 4


def test_new_game_defaults():
    state = new_game("duel", rng_seed=3)
    assert state.mode == GameMode.DUEL
    assert [p.player_id for p in state.players] == [1, 2]
    assert all(p.stones_remaining == 15 and p.moves_taken == 0 for p in state.players)
    assert state.phase == Phase.IN_PROGRESS
    assert state.winner is None
    assert new_game("duel", rng_seed=3).rule_set == state.rule_set


def test_invalid_config_and_mode():
    with pytest.raises(ValueError):
        GameConfig(initial_stones=0)
    with pytest.raises(ValueError):
        GameConfig(coverage_min=0.6, coverage_max=0.5)
    with pytest.raises(ValueError):
        GameConfig(max_selection_attempts=-1)
    with pytest.raises(ValueError):
        new_game("team")
