import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wuweiqi.board import Board, Orientation, Stone, diagonal_neighbors, is_corner, is_edge, orthogonal_neighbors


def test_place_returns_new_board_and_keeps_snapshot():
    empty = Board.empty()
    board = empty.place(4, 4, Orientation.EAST)

    assert empty.is_empty()
    assert board.stone_at(4, 4) == Stone(Orientation.EAST)
    assert board.stone_count() == 1
    # untouched rows are shared with the previous snapshot
    assert board.rows[0] is empty.rows[0]
    assert board.rows[4] is not empty.rows[4]


def test_place_on_occupied_cell_raises():
    board = Board.empty().place(0, 0, Orientation.NORTH)
    with pytest.raises(ValueError):
        board.place(0, 0, Orientation.SOUTH)


def test_off_board_lookup_raises():
    board = Board.empty()
    assert not board.in_bounds(9, 0)
    with pytest.raises(ValueError):
        board.stone_at(-1, 2)


def test_orientation_rotation_and_parsing():
    assert Orientation.NORTH.rotate() == Orientation.EAST
    assert Orientation.NORTH.rotate(-1) == Orientation.WEST
    assert Orientation.from_rotation_count(-1) == Orientation.WEST
    assert Orientation.from_rotation_count(6) == Orientation.SOUTH
    assert Orientation.parse("n") == Orientation.NORTH
    assert Orientation.parse("West") == Orientation.WEST
    assert Orientation.parse(2) == Orientation.SOUTH
    with pytest.raises(ValueError):
        Orientation.parse("x")


def test_geometry_helpers():
    assert is_edge(0, 4) and is_edge(4, 8)
    assert not is_edge(1, 1)
    assert is_corner(8, 0) and not is_corner(0, 4)
    assert sorted(orthogonal_neighbors(0, 0)) == [(0, 1), (1, 0)]
    assert len(orthogonal_neighbors(4, 4)) == 4
    assert diagonal_neighbors(8, 8) == [(7, 7)]


def test_stable_hash_depends_on_stones_only():
    a = Board.empty().place(1, 2, Orientation.WEST).place(3, 3, Orientation.NORTH)
    b = Board.empty().place(3, 3, Orientation.NORTH).place(1, 2, Orientation.WEST)
    assert a == b
    assert a.stable_hash() == b.stable_hash()
    assert a.stable_hash() != Board.empty().stable_hash()
