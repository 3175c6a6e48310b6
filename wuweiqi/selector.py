"""Random selection of the hidden rule set for one game.

A candidate set is built greedily from a shuffled catalog and kept only when
its legal coverage on an empty board falls inside the requested band. The
search is capped by ``max_attempts`` and falls back to a single known rule,
so it always terminates with a playable set.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .board import BOARD_SIZE, Board, Orientation
from .catalog import ALL_RULES, FALLBACK_RULE_ID, Rule, are_contradictory, get_rule, rule_from_dict

logger = logging.getLogger(__name__)

MIN_RULES = 1
MAX_RULES = 4


@dataclass(frozen=True)
class ActiveRuleSet:
    rules: Tuple[Rule, ...]
    is_fallback: bool = False

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def ids(self) -> Tuple[str, ...]:
        return tuple(rule.id for rule in self.rules)

    def to_dict(self) -> dict:
        return {"rules": [rule.to_dict() for rule in self.rules], "fallback": self.is_fallback}

    @classmethod
    def from_dict(cls, data: dict) -> "ActiveRuleSet":
        return cls(tuple(rule_from_dict(r) for r in data["rules"]), bool(data.get("fallback", False)))

    @classmethod
    def of(cls, *rule_ids: str) -> "ActiveRuleSet":
        return cls(tuple(get_rule(rule_id) for rule_id in rule_ids))


def fallback_rule_set() -> ActiveRuleSet:
    return ActiveRuleSet((get_rule(FALLBACK_RULE_ID),), is_fallback=True)


def legal_coverage(rules: Sequence[Rule], board_size: int = BOARD_SIZE) -> float:
    """Fraction of cells of an empty board where at least one orientation is legal."""
    board = Board.empty(board_size)
    coverable = 0
    for row in range(board_size):
        for col in range(board_size):
            for orientation in Orientation:
                if not any(rule.is_illegal(row, col, orientation, board) for rule in rules):
                    coverable += 1
                    break
    return coverable / (board_size * board_size)


def _draw_candidate(catalog: Sequence[Rule], rng: random.Random) -> List[Rule]:
    wanted = rng.randint(MIN_RULES, MAX_RULES)
    shuffled = list(catalog)
    rng.shuffle(shuffled)
    selected: List[Rule] = []
    for rule in shuffled:
        if len(selected) >= wanted:
            break
        if any(are_contradictory(rule, existing) for existing in selected):
            continue
        selected.append(rule)
    return selected


def select_rule_set(
    catalog: Sequence[Rule] = ALL_RULES,
    min_coverage: float = 0.25,
    max_coverage: float = 0.5,
    max_attempts: int = 100,
    rng: Optional[random.Random] = None,
) -> ActiveRuleSet:
    rng = rng or random.Random()
    for attempt in range(max_attempts):
        candidate = _draw_candidate(catalog, rng)
        coverage = legal_coverage(candidate)
        logger.debug(
            "rule selection attempt %d: %s -> coverage %.3f",
            attempt + 1,
            [rule.id for rule in candidate],
            coverage,
        )
        if candidate and min_coverage <= coverage <= max_coverage:
            return ActiveRuleSet(tuple(candidate))

    logger.info("no rule set within coverage [%.2f, %.2f] after %d attempts, using fallback", min_coverage, max_coverage, max_attempts)
    return fallback_rule_set()
