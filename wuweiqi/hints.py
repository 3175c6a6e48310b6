"""Progressive hints about the hidden rules.

Level 1 is pure atmosphere, level 2 names the broad category of one hidden
rule, level 3 paraphrases its description. Only level 3 leaks anything
specific, and never more than one rule per hint.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Optional

from .catalog import Rule
from .selector import ActiveRuleSet

MAX_HINT_LEVEL = 3

NO_RESTRICTIONS = "There are no restrictions."

GENERIC_HINTS = (
    "Consider the geometry of your position...",
    "The orientation may matter...",
    "Numbers hold secrets...",
    "Neighbors can be friends or foes...",
    "The center is not always the answer...",
)

CATEGORY_HINTS = {
    "row": "Rows have meaning...",
    "column": "Columns have meaning...",
    "orientation": "Which way do you face?",
    "neighbor": "Mind your neighbors...",
    "edge": "Boundaries matter...",
    "other": "The pattern is there, look deeper...",
}

_ORIENTATION_WORDS = ("orientation", "north", "south", "east", "west")
_NEIGHBOR_WORDS = ("adjacent", "neighbor")

_SOFTENINGS = (
    (re.compile(r"\b(are|is) illegal\b"), "might be significant"),
    (re.compile(r"\billegal\b"), "significant"),
    (re.compile(r"\bmust not\b"), "might not"),
)


def classify_rule(rule: Rule) -> str:
    rule_id = rule.id
    if "row" in rule_id:
        return "row"
    if "col" in rule_id:
        return "column"
    if any(word in rule_id for word in _ORIENTATION_WORDS):
        return "orientation"
    if any(word in rule_id for word in _NEIGHBOR_WORDS):
        return "neighbor"
    if "edge" in rule_id:
        return "edge"
    return "other"


def soften(description: str) -> str:
    for pattern, replacement in _SOFTENINGS:
        description = pattern.sub(replacement, description)
    return description


def clamp_level(level: int) -> int:
    return max(1, min(level, MAX_HINT_LEVEL))


def get_hint(rule_set: ActiveRuleSet, level: int, rng: Optional[random.Random] = None) -> str:
    if len(rule_set) == 0:
        return NO_RESTRICTIONS
    rng = rng or random.Random()
    rule = rng.choice(rule_set.rules)
    level = clamp_level(level)
    if level == 1:
        return rng.choice(GENERIC_HINTS)
    if level == 2:
        return CATEGORY_HINTS[classify_rule(rule)]
    return soften(rule.description)


@dataclass
class HintLadder:
    """Hint progression of one game: each request climbs one level, up to 3."""

    rule_set: ActiveRuleSet
    rng: random.Random = field(default_factory=random.Random)
    level: int = 0

    @property
    def remaining(self) -> int:
        return MAX_HINT_LEVEL - self.level

    def request(self) -> str:
        self.level = min(self.level + 1, MAX_HINT_LEVEL)
        return get_hint(self.rule_set, self.level, self.rng)
