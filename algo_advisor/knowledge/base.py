"""
Knowledge base: the ordered, validated, immutable rule collection.

A ``KnowledgeBase`` is constructed once (typically at process start),
validated in full, and frozen.  There are no mutation operations.

Validation rules (all raise ``InvalidKnowledgeBase``)
------------------------------------------------------
- Duplicate rule ``id``.
- ``weight <= 0`` or non-finite.
- ``condition`` key that is not a recognized profile attribute, or a value
  outside (or of a different type than) that attribute's domain.
- Empty ``candidates``.

Authoring order is preserved: it determines rationale ordering and is the
tie-break input of the recommendation engine.

Usage
-----
    from algo_advisor.knowledge.base import KnowledgeBase

    kb = KnowledgeBase([
        {"id": "time", "weight": 0.9, "condition": {"problemType": "time-series"},
         "candidates": ["ARIMA", "Prophet", "LSTM"],
         "rationale": "Temporal dependency breaks random split assumptions."},
    ])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from algo_advisor.exceptions import InvalidKnowledgeBase
from algo_advisor.models.rule import Rule

logger = logging.getLogger(__name__)


class KnowledgeBase:
    """Frozen, ordered collection of ``Rule`` objects."""

    __slots__ = ("_rules", "_by_id")

    def __init__(self, rules: Iterable[Rule | Mapping[str, Any]]) -> None:
        """Validate and freeze ``rules``.

        Args:
            rules: ``Rule`` instances or plain authoring dicts, in KB order.

        Raises:
            InvalidKnowledgeBase: On the first structural violation found.
        """
        parsed: list[Rule] = []
        by_id: dict[str, Rule] = {}

        for index, raw in enumerate(rules):
            rule = _parse_rule(index, raw)
            if rule.id in by_id:
                raise InvalidKnowledgeBase(
                    f"duplicate rule id (first defined at index "
                    f"{parsed.index(by_id[rule.id])}, repeated at index {index}).",
                    rule_id=rule.id,
                )
            by_id[rule.id] = rule
            parsed.append(rule)

        self._rules: tuple[Rule, ...] = tuple(parsed)
        self._by_id: Mapping[str, Rule] = by_id
        logger.info("Knowledge base loaded with %d rules.", len(self._rules))

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError("KnowledgeBase is immutable.")
        object.__setattr__(self, name, value)

    def rules(self) -> tuple[Rule, ...]:
        """Return all rules in authoring order."""
        return self._rules

    def rule_ids(self) -> list[str]:
        return [r.id for r in self._rules]

    def get(self, rule_id: str) -> Rule:
        """Look up a single rule by id.

        Raises:
            KeyError: If ``rule_id`` is not in the knowledge base.
        """
        if rule_id not in self._by_id:
            raise KeyError(
                f"Rule '{rule_id}' not found.  Available rules: {self.rule_ids()}"
            )
        return self._by_id[rule_id]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"KnowledgeBase(rules={len(self._rules)})"


def _parse_rule(index: int, raw: Rule | Mapping[str, Any]) -> Rule:
    """Turn one authoring entry into a validated ``Rule``."""
    if isinstance(raw, Rule):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidKnowledgeBase(
            f"entry at index {index} must be a mapping, got {type(raw).__name__}."
        )

    rule_id = raw.get("id")
    try:
        return Rule.model_validate(dict(raw))
    except ValidationError as exc:
        raise InvalidKnowledgeBase(
            _describe_errors(exc),
            rule_id=str(rule_id) if rule_id is not None else None,
        ) from exc


def _describe_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "rule"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
