"""
Knowledge-base rule: a weighted condition → candidate-outputs mapping.

A rule proposes every output in ``candidates`` with strength ``weight`` when
all of its ``condition`` equality tests hold against a profile.  ``rationale``
explains the rule as a whole and is attached to each candidate it proposes.

Condition values are normalized to the attribute's declared type at
construction (``bool`` or the attribute's ``StrEnum``), so matching never
relies on cross-type equality.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from algo_advisor.taxonomy.profile_taxonomy import normalize_value


class Rule(BaseModel):
    """One authored recommendation rule.

    Attributes:
        id:         Unique, stable identifier (never reused).
        weight:     Evidentiary strength; strictly positive, finite.
        condition:  ``(attribute, required value)`` pairs in authoring order,
                    all of which must hold (logical AND).  Stored as a tuple
                    so a built rule cannot be edited in place.  Empty means
                    "matches every profile".
        candidates: Ordered output identifiers proposed by this rule.
        rationale:  Justification shown next to each proposed candidate.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    weight: float = Field(gt=0, allow_inf_nan=False)
    condition: tuple[tuple[str, Any], ...] = ()
    candidates: tuple[str, ...] = Field(min_length=1)
    rationale: str

    @field_validator("weight", mode="before")
    @classmethod
    def validate_weight_type(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(
                f"weight must be a number, got {type(v).__name__} {v!r}."
            )
        return v

    @field_validator("condition", mode="before")
    @classmethod
    def validate_condition(cls, v: Any) -> tuple[tuple[str, Any], ...]:
        if isinstance(v, Mapping):
            items = list(v.items())
        elif isinstance(v, (list, tuple)):
            if not all(isinstance(pair, (list, tuple)) and len(pair) == 2 for pair in v):
                raise ValueError("condition pairs must be (attribute, value).")
            items = [tuple(pair) for pair in v]
        else:
            raise ValueError(f"condition must be a mapping, got {type(v).__name__}.")

        normalized: list[tuple[str, Any]] = []
        seen: set[str] = set()
        for attribute, required in items:
            if attribute in seen:
                raise ValueError(f"condition repeats attribute '{attribute}'.")
            seen.add(attribute)
            try:
                normalized.append((attribute, normalize_value(attribute, required)))
            except KeyError:
                raise ValueError(
                    f"condition references unrecognized attribute '{attribute}'."
                ) from None
        return tuple(normalized)

    @field_validator("candidates")
    @classmethod
    def validate_candidates(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for name in v:
            if not name.strip():
                raise ValueError("candidate names must be non-empty strings.")
        return v

    def distinct_candidates(self) -> list[str]:
        """Return ``candidates`` with repeats removed, first occurrence kept."""
        seen: set[str] = set()
        distinct: list[str] = []
        for name in self.candidates:
            if name not in seen:
                seen.add(name)
                distinct.append(name)
        return distinct

    def condition_map(self) -> dict[str, Any]:
        """Return a fresh ``attribute -> required value`` dict of the condition."""
        return dict(self.condition)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON authoring shape of this rule."""
        data = self.model_dump(mode="json")
        data["condition"] = {attribute: value for attribute, value in data["condition"]}
        return data
