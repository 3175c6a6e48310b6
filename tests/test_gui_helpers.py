import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wuweiqi.board import Orientation
from wuweiqi.config import GameConfig, GameMode
from wuweiqi.gui import PlacementDraft, cell_at, describe_players, eye_offset, resolve_screenshot_path
from wuweiqi.selector import ActiveRuleSet
from wuweiqi.state import new_game


def _draft(mode=GameMode.SOLO, stones=None):
    state = new_game(mode, GameConfig(initial_stones=stones), rule_set=ActiveRuleSet.of("sum_even"))
    return PlacementDraft(state)


def test_pending_placement_keeps_rotation_when_moved():
    draft = _draft()
    draft.rotate()
    ok, reason = draft.select_cell(0, 1)
    assert ok, reason
    assert draft.orientation == Orientation.EAST

    draft.rotate()
    draft.select_cell(2, 3)
    assert (draft.pending.row, draft.pending.col) == (2, 3)
    assert draft.orientation == Orientation.SOUTH
    # the preview rotation outside the pending stone is untouched
    assert draft.rotation_count == 1


def test_rotation_count_is_cumulative():
    draft = _draft()
    draft.rotate(-1)
    assert draft.rotation_count == -1
    assert draft.orientation == Orientation.WEST
    for _ in range(5):
        draft.rotate()
    assert draft.rotation_count == 4
    assert draft.orientation == Orientation.NORTH


def test_cancel_and_confirm():
    draft = _draft()
    assert draft.confirm() is None

    draft.select_cell(0, 1)
    draft.cancel()
    assert draft.pending is None
    assert draft.confirm() is None
    assert draft.state.move_log == []

    draft.select_cell(0, 1)
    result = draft.confirm()
    assert result.ok and result.move.legal
    assert draft.pending is None
    assert draft.state.board.is_occupied(0, 1)
    assert draft.last_result is result


def test_select_cell_refuses_occupied_cell():
    draft = _draft()
    draft.select_cell(0, 1)
    draft.confirm()
    ok, reason = draft.select_cell(0, 1)
    assert not ok
    assert reason == "CELL_OCCUPIED"
    assert draft.pending is None


def test_select_cell_refused_after_game_over():
    draft = _draft(stones=1)
    draft.select_cell(0, 1)
    draft.confirm()
    assert draft.state.is_over
    ok, reason = draft.select_cell(3, 4)
    assert not ok
    assert reason == "GAME_ALREADY_OVER"


def test_cell_at_maps_pixels_to_cells():
    assert cell_at((24, 24), (24, 24), 56) == (0, 0)
    assert cell_at((24 + 56 * 3 + 10, 24 + 56 * 2 + 55), (24, 24), 56) == (2, 3)
    assert cell_at((10, 30), (24, 24), 56) is None
    assert cell_at((24 + 56 * 9, 30), (24, 24), 56) is None


def test_eye_offset_points_the_right_way():
    assert eye_offset(Orientation.NORTH, 10) == (0, -10)
    assert eye_offset(Orientation.EAST, 10) == (10, 0)
    assert eye_offset(Orientation.SOUTH, 10) == (0, 10)
    assert eye_offset(Orientation.WEST, 10) == (-10, 0)


def test_describe_players_marks_current_player():
    draft = _draft(mode=GameMode.DUEL)
    lines = describe_players(draft.state)
    assert lines[0].startswith("▶ Player 1")
    assert lines[1].startswith("  Player 2")
    assert describe_players(_draft().state)[0].startswith("▶ You: 15 stones")


def test_resolve_screenshot_path_reads_env(tmp_path, monkeypatch):
    monkeypatch.delenv("WUWEIQI_GUI_SCREENSHOT_PATH", raising=False)
    assert resolve_screenshot_path() is None
    path = tmp_path / "shot.png"
    monkeypatch.setenv("WUWEIQI_GUI_SCREENSHOT_PATH", str(path))
    assert resolve_screenshot_path() == path
