"""Catalog of hidden rules.

Every rule describes placements that are ILLEGAL. A rule is a plain value: a
``RuleKind`` tag plus the parameters that kind needs. ``Rule.is_illegal``
dispatches on the tag, so rules stay hashable, comparable and serializable
for the end-of-game reveal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from .board import (
    Board,
    CENTER,
    Orientation,
    diagonal_neighbors,
    is_corner,
    is_edge,
    manhattan_distance,
    orthogonal_neighbors,
)


class RuleKind(str, Enum):
    PARITY = "PARITY"
    EDGE = "EDGE"
    INTERIOR = "INTERIOR"
    CORNER = "CORNER"
    HALF = "HALF"
    DIAGONAL = "DIAGONAL"
    ORIENTATION = "ORIENTATION"
    ADJACENT = "ADJACENT"
    ISOLATED = "ISOLATED"
    DIAGONAL_NEIGHBOR = "DIAGONAL_NEIGHBOR"
    POINTS = "POINTS"
    DISTANCE = "DISTANCE"
    LINE = "LINE"
    ORIENTED_HALF = "ORIENTED_HALF"
    EDGE_OUTWARD = "EDGE_OUTWARD"


DYNAMIC_KINDS: FrozenSet[RuleKind] = frozenset(
    {RuleKind.ADJACENT, RuleKind.ISOLATED, RuleKind.DIAGONAL_NEIGHBOR}
)


@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    description: str
    kind: RuleKind
    weight: float = 1.0
    # axis: "row", "col", "sum" or "product" (PARITY); "row" or "col" (HALF, LINE, ORIENTED_HALF);
    # "main" or "anti" (DIAGONAL).
    axis: Optional[str] = None
    parity: Optional[int] = None
    # side: "low" is the half before the middle line, "high" the half after it.
    side: Optional[str] = None
    # threshold: DISTANCE uses it as a radius around the center, LINE as the line index.
    threshold: Optional[int] = None
    # comparison: "within" (distance <= threshold) or "beyond" (distance > threshold).
    comparison: Optional[str] = None
    orientation: Optional[Orientation] = None
    points: Tuple[Tuple[int, int], ...] = ()

    @property
    def is_dynamic(self) -> bool:
        return self.kind in DYNAMIC_KINDS

    def is_illegal(self, row: int, col: int, orientation: Orientation, board: Board) -> bool:
        return _PREDICATES[self.kind](self, row, col, Orientation(orientation), board)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "kind": self.kind.value,
            "weight": self.weight,
            "dynamic": self.is_dynamic,
        }
        for key in ("axis", "parity", "side", "threshold", "comparison"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.orientation is not None:
            data["orientation"] = self.orientation.name
        if self.points:
            data["points"] = [list(p) for p in self.points]
        return data


def rule_from_dict(data: dict) -> Rule:
    orientation = data.get("orientation")
    return Rule(
        id=data["id"],
        name=data["name"],
        description=data["description"],
        kind=RuleKind(data["kind"]),
        weight=data.get("weight", 1.0),
        axis=data.get("axis"),
        parity=data.get("parity"),
        side=data.get("side"),
        threshold=data.get("threshold"),
        comparison=data.get("comparison"),
        orientation=None if orientation is None else Orientation[orientation],
        points=tuple(tuple(p) for p in data.get("points", ())),
    )


# --- Predicates ----------------------------------------------------------------


def _axis_value(axis: Optional[str], row: int, col: int) -> int:
    if axis == "row":
        return row
    if axis == "col":
        return col
    if axis == "sum":
        return row + col
    if axis == "product":
        return row * col
    raise ValueError(f"unknown axis {axis!r}")


def _in_half(axis: Optional[str], side: Optional[str], row: int, col: int, size: int) -> bool:
    value = _axis_value(axis, row, col)
    middle = size // 2
    if side == "low":
        return value < middle
    if side == "high":
        return value > middle
    raise ValueError(f"unknown side {side!r}")


def _parity(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return _axis_value(rule.axis, row, col) % 2 == rule.parity


def _edge(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return is_edge(row, col, board.size)


def _interior(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return not is_edge(row, col, board.size)


def _corner(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return is_corner(row, col, board.size)


def _half(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return _in_half(rule.axis, rule.side, row, col, board.size)


def _diagonal(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    if rule.axis == "main":
        return row == col
    return row + col == board.size - 1


def _orientation(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return orientation == rule.orientation


def _adjacent(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return any(board.is_occupied(r, c) for r, c in orthogonal_neighbors(row, col, board.size))


def _isolated(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    # The first stone of a game is never considered isolated.
    if board.is_empty():
        return False
    return not _adjacent(rule, row, col, orientation, board)


def _diagonal_neighbor(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return any(board.is_occupied(r, c) for r, c in diagonal_neighbors(row, col, board.size))


def _points(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return (row, col) in rule.points


def _distance(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    middle = board.size // 2
    distance = manhattan_distance(row, col, middle, middle)
    if rule.comparison == "within":
        return distance <= rule.threshold
    return distance > rule.threshold


def _line(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return _axis_value(rule.axis, row, col) == rule.threshold


def _oriented_half(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    return orientation == rule.orientation and _in_half(rule.axis, rule.side, row, col, board.size)


def _edge_outward(rule: Rule, row: int, col: int, orientation: Orientation, board: Board) -> bool:
    last = board.size - 1
    return (
        (row == 0 and orientation == Orientation.NORTH)
        or (row == last and orientation == Orientation.SOUTH)
        or (col == 0 and orientation == Orientation.WEST)
        or (col == last and orientation == Orientation.EAST)
    )


Predicate = Callable[[Rule, int, int, Orientation, Board], bool]

_PREDICATES: Dict[RuleKind, Predicate] = {
    RuleKind.PARITY: _parity,
    RuleKind.EDGE: _edge,
    RuleKind.INTERIOR: _interior,
    RuleKind.CORNER: _corner,
    RuleKind.HALF: _half,
    RuleKind.DIAGONAL: _diagonal,
    RuleKind.ORIENTATION: _orientation,
    RuleKind.ADJACENT: _adjacent,
    RuleKind.ISOLATED: _isolated,
    RuleKind.DIAGONAL_NEIGHBOR: _diagonal_neighbor,
    RuleKind.POINTS: _points,
    RuleKind.DISTANCE: _distance,
    RuleKind.LINE: _line,
    RuleKind.ORIENTED_HALF: _oriented_half,
    RuleKind.EDGE_OUTWARD: _edge_outward,
}


# --- Catalog -------------------------------------------------------------------

STAR_POINTS = ((2, 2), (2, 4), (2, 6), (4, 2), (4, 4), (4, 6), (6, 2), (6, 4), (6, 6))


def _parity_rule(rule_id: str, name: str, description: str, axis: str, parity: int) -> Rule:
    return Rule(rule_id, name, description, RuleKind.PARITY, axis=axis, parity=parity)


def _half_rule(rule_id: str, name: str, description: str, axis: str, side: str) -> Rule:
    return Rule(rule_id, name, description, RuleKind.HALF, axis=axis, side=side)


def _orientation_rule(orientation: Orientation) -> Rule:
    label = orientation.name.capitalize()
    return Rule(
        f"{orientation.name.lower()}_forbidden",
        f"{label} Forbidden",
        f"Yin-yang pointing {label} is illegal",
        RuleKind.ORIENTATION,
        weight=0.8,
        orientation=orientation,
    )


ALL_RULES: Tuple[Rule, ...] = (
    # Row and column parity
    _parity_rule("even_row", "Even Row Forbidden", "Stones in even-numbered rows are illegal", "row", 0),
    _parity_rule("odd_row", "Odd Row Forbidden", "Stones in odd-numbered rows are illegal", "row", 1),
    _parity_rule("even_col", "Even Column Forbidden", "Stones in even-numbered columns are illegal", "col", 0),
    _parity_rule("odd_col", "Odd Column Forbidden", "Stones in odd-numbered columns are illegal", "col", 1),
    # Edges and corners
    Rule("edge_forbidden", "Edge Forbidden", "Stones on the edge are illegal", RuleKind.EDGE),
    Rule("center_forbidden", "Center Forbidden", "Stones not on the edge are illegal", RuleKind.INTERIOR),
    Rule("corner_forbidden", "Corner Forbidden", "Stones in corners are illegal", RuleKind.CORNER, weight=0.3),
    # Halves of the board
    _half_rule("top_half", "Top Half Forbidden", "Stones in top half (rows 0-3) are illegal", "row", "low"),
    _half_rule("bottom_half", "Bottom Half Forbidden", "Stones in bottom half (rows 5-8) are illegal", "row", "high"),
    _half_rule("left_half", "Left Half Forbidden", "Stones in left half (cols 0-3) are illegal", "col", "low"),
    _half_rule("right_half", "Right Half Forbidden", "Stones in right half (cols 5-8) are illegal", "col", "high"),
    # Diagonals
    Rule(
        "main_diagonal",
        "Main Diagonal Forbidden",
        "Stones on the main diagonal (row=col) are illegal",
        RuleKind.DIAGONAL,
        weight=0.3,
        axis="main",
    ),
    Rule(
        "anti_diagonal",
        "Anti-Diagonal Forbidden",
        "Stones on the anti-diagonal (row+col=8) are illegal",
        RuleKind.DIAGONAL,
        weight=0.3,
        axis="anti",
    ),
    # Where the white eye points
    *(_orientation_rule(o) for o in Orientation),
    # Neighbors, these look at the stones already on the board
    Rule(
        "adjacent_forbidden",
        "Adjacent Forbidden",
        "Stones adjacent to other stones are illegal",
        RuleKind.ADJACENT,
        weight=0.7,
    ),
    Rule(
        "isolated_forbidden",
        "Isolation Forbidden",
        "Stones NOT adjacent to other stones are illegal (after first)",
        RuleKind.ISOLATED,
        weight=0.7,
    ),
    Rule(
        "diagonal_neighbor_forbidden",
        "Diagonal Neighbor Forbidden",
        "Stones diagonally adjacent to other stones are illegal",
        RuleKind.DIAGONAL_NEIGHBOR,
        weight=0.6,
    ),
    # Arithmetic on the coordinates
    _parity_rule("sum_even", "Even Sum Forbidden", "Positions where row+col is even are illegal", "sum", 0),
    _parity_rule("sum_odd", "Odd Sum Forbidden", "Positions where row+col is odd are illegal", "sum", 1),
    _parity_rule("product_even", "Even Product Forbidden", "Positions where row*col is even are illegal", "product", 0),
    # Special points
    Rule(
        "star_points",
        "Star Points Forbidden",
        "Traditional Go star points (3,3), (3,6), etc. are illegal",
        RuleKind.POINTS,
        weight=0.3,
        points=STAR_POINTS,
    ),
    Rule(
        "center_point",
        "Center Point Forbidden",
        "The center point (4,4) is illegal",
        RuleKind.POINTS,
        weight=0.1,
        points=((CENTER, CENTER),),
    ),
    # Distance from the center
    Rule(
        "near_center",
        "Near Center Forbidden",
        "Stones within 2 steps of center are illegal",
        RuleKind.DISTANCE,
        weight=0.5,
        threshold=2,
        comparison="within",
    ),
    Rule(
        "far_from_center",
        "Far From Center Forbidden",
        "Stones more than 3 steps from center are illegal",
        RuleKind.DISTANCE,
        weight=0.6,
        threshold=3,
        comparison="beyond",
    ),
    # Middle lines
    Rule("middle_row", "Middle Row Forbidden", "Row 4 (the middle) is illegal", RuleKind.LINE, weight=0.3, axis="row", threshold=CENTER),
    Rule("middle_col", "Middle Column Forbidden", "Column 4 (the middle) is illegal", RuleKind.LINE, weight=0.3, axis="col", threshold=CENTER),
    # Orientation and position together
    Rule(
        "north_in_north",
        "North in North Forbidden",
        "North-pointing stones in top half are illegal",
        RuleKind.ORIENTED_HALF,
        weight=0.4,
        axis="row",
        side="low",
        orientation=Orientation.NORTH,
    ),
    Rule(
        "east_on_east",
        "East on East Forbidden",
        "East-pointing stones in right half are illegal",
        RuleKind.ORIENTED_HALF,
        weight=0.4,
        axis="col",
        side="high",
        orientation=Orientation.EAST,
    ),
    Rule(
        "edge_orientation",
        "Edge Orientation Forbidden",
        "Stones on edge must not point outward",
        RuleKind.EDGE_OUTWARD,
        weight=0.3,
    ),
)

RULES_BY_ID: Dict[str, Rule] = {rule.id: rule for rule in ALL_RULES}

CONTRADICTORY_PAIRS: FrozenSet[FrozenSet[str]] = frozenset(
    frozenset(pair)
    for pair in (
        ("even_row", "odd_row"),
        ("even_col", "odd_col"),
        ("edge_forbidden", "center_forbidden"),
        ("top_half", "bottom_half"),
        ("left_half", "right_half"),
        ("adjacent_forbidden", "isolated_forbidden"),
        ("sum_even", "sum_odd"),
        ("near_center", "far_from_center"),
    )
)

FALLBACK_RULE_ID = "sum_even"


def get_rule(rule_id: str) -> Rule:
    try:
        return RULES_BY_ID[rule_id]
    except KeyError:
        raise KeyError(f"unknown rule id {rule_id!r}") from None


def are_contradictory(first: Rule, second: Rule) -> bool:
    return frozenset((first.id, second.id)) in CONTRADICTORY_PAIRS
