"""
Recommendation engine: matches a Profile against a KnowledgeBase and ranks
the proposed algorithms.

Algorithm
---------
    1. Start an empty ``ScoreTable`` (explicit insertion-ordered table).
    2. For each rule in KB order, if every ``(attribute, value)`` pair of its
       condition equals the profile's value (an empty condition always
       matches), then for each distinct candidate of the rule:
         - create its ``ScoreEntry`` if new (recording its insertion index),
         - add ``rule.weight`` to its score,
         - append ``rule.rationale`` to its rationale lines.
    3. Convert entries to ``Recommendation`` values.
    4. Sort by score descending; equal scores keep insertion order
       (secondary sort key = insertion index).

``evaluate()`` is a pure function: no I/O, no hidden state, inputs are never
mutated, and identical inputs always produce identical output.

Error handling
--------------
A raw profile mapping is validated with ``parse_profile()`` before any rule
is examined; ``InvalidProfile`` aborts the evaluation with no partial result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from algo_advisor.knowledge.base import KnowledgeBase
from algo_advisor.models.profile import Profile, parse_profile
from algo_advisor.models.recommendation import Recommendation
from algo_advisor.models.rule import Rule

logger = logging.getLogger(__name__)


@dataclass
class ScoreEntry:
    """Accumulated evidence for one output during a single evaluation.

    Attributes:
        output:    Algorithm name.
        order:     Insertion index (0 = first output introduced).
        score:     Running sum of matching rule weights.
        rationale: One line per matching rule, KB order, repeats kept.
    """

    output:    str
    order:     int
    score:     float = 0.0
    rationale: list[str] = field(default_factory=list)


class ScoreTable:
    """Insertion-ordered table of ``ScoreEntry`` objects keyed by output."""

    def __init__(self) -> None:
        self._order:   list[str] = []
        self._entries: dict[str, ScoreEntry] = {}

    def add(self, output: str, weight: float, rationale: str) -> ScoreEntry:
        entry = self._entries.get(output)
        if entry is None:
            entry = ScoreEntry(output=output, order=len(self._order))
            self._entries[output] = entry
            self._order.append(output)
        entry.score += weight
        entry.rationale.append(rationale)
        return entry

    def entries(self) -> list[ScoreEntry]:
        """Return entries in insertion order."""
        return [self._entries[name] for name in self._order]

    def __len__(self) -> int:
        return len(self._order)


def rule_matches(rule: Rule, profile: Profile) -> bool:
    """Return True if every condition of ``rule`` holds for ``profile``."""
    return all(
        profile.value_of(attribute) == required
        for attribute, required in rule.condition
    )


def matching_rules(
    profile: Profile | Mapping[str, Any],
    kb:      KnowledgeBase,
) -> list[Rule]:
    """Return the rules of ``kb`` that match ``profile``, in KB order.

    Raises:
        InvalidProfile: If ``profile`` is a mapping that fails validation.
    """
    snapshot = parse_profile(profile)
    return [rule for rule in kb.rules() if rule_matches(rule, snapshot)]


def evaluate(
    profile: Profile | Mapping[str, Any],
    kb:      KnowledgeBase,
) -> list[Recommendation]:
    """Score and rank every output proposed by the rules matching ``profile``.

    Args:
        profile: A ``Profile`` or a complete canonical profile mapping.
        kb:      Validated knowledge base.

    Returns:
        Recommendations sorted by score descending, ties in first-insertion
        order.  Empty when no rule matches.

    Raises:
        InvalidProfile: If ``profile`` is a mapping that is missing an
            attribute, names an unknown one, or carries an out-of-domain value.
    """
    matched = matching_rules(profile, kb)

    table = ScoreTable()
    for rule in matched:
        for output in rule.distinct_candidates():
            table.add(output, rule.weight, rule.rationale)

    ranked = sorted(table.entries(), key=lambda e: (-e.score, e.order))

    logger.debug(
        "Matched rules %s -> %d recommendations.",
        [r.id for r in matched],
        len(ranked),
    )

    return [
        Recommendation(output=e.output, score=e.score, rationale=tuple(e.rationale))
        for e in ranked
    ]


def top_n(recommendations: list[Recommendation], n: int) -> list[Recommendation]:
    """Return the first ``n`` recommendations.

    Raises:
        ValueError: If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}.")
    return recommendations[:n]
