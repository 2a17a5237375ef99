"""
Dataset profile — the declared characteristics that drive rule matching.

``Profile`` is a frozen snapshot: the surrounding UI replaces it with a new
instance (``Profile.updated()``) whenever the user changes a control, and the
engine treats each instance as an immutable input.

Python field names are snake_case; the canonical wire names (used in rule
conditions and in the profile JSON shape) are the camelCase aliases::

    {"problemType": "classification", "gaussian": true, "classImbalance": false,
     "pGreaterThanN": false, "errorFocus": "fp"}

Defaults exist for the UI's initial state only.  ``parse_profile()`` is the
strict entry point used by the engine for raw mappings: it never defaults a
missing attribute.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from algo_advisor.exceptions import InvalidProfile
from algo_advisor.taxonomy.profile_taxonomy import (
    RECOGNIZED_ATTRIBUTES,
    ErrorFocus,
    ProblemType,
    ProfileAttribute,
    normalize_value,
)


class Profile(BaseModel):
    """Declared dataset characteristics.

    Attributes:
        problem_type:     Task kind (alias ``problemType``).
        gaussian:         Features are approximately Gaussian (alias ``gaussian``).
        class_imbalance:  Target classes are imbalanced (alias ``classImbalance``).
        p_greater_than_n: More features than observations (alias ``pGreaterThanN``).
        error_focus:      Costlier error type (alias ``errorFocus``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    problem_type: ProblemType = Field(
        default=ProblemType.CLASSIFICATION, alias="problemType"
    )
    gaussian: bool = Field(default=False, strict=True)
    class_imbalance: bool = Field(default=False, alias="classImbalance", strict=True)
    p_greater_than_n: bool = Field(default=False, alias="pGreaterThanN", strict=True)
    error_focus: ErrorFocus = Field(
        default=ErrorFocus.FALSE_POSITIVE, alias="errorFocus"
    )

    def value_of(self, attribute: str) -> bool | ProblemType | ErrorFocus:
        """Return the value of a canonical (camelCase) attribute name.

        Raises:
            KeyError: If ``attribute`` is not a recognized attribute name.
        """
        if attribute not in RECOGNIZED_ATTRIBUTES:
            raise KeyError(f"Unknown profile attribute '{attribute}'.")
        return getattr(self, _FIELD_BY_ATTRIBUTE[attribute])

    def updated(self, attribute: str, value: Any) -> "Profile":
        """Return a copy with one attribute replaced (validated).

        Raises:
            InvalidProfile: If ``attribute`` is unknown or ``value`` is out of domain.
        """
        data = self.to_dict()
        data[attribute] = value
        return parse_profile(data)

    def to_dict(self) -> dict[str, Any]:
        """Return the canonical JSON-compatible shape (camelCase keys)."""
        return self.model_dump(by_alias=True, mode="json")


_FIELD_BY_ATTRIBUTE: dict[str, str] = {
    ProfileAttribute.PROBLEM_TYPE:     "problem_type",
    ProfileAttribute.GAUSSIAN:         "gaussian",
    ProfileAttribute.CLASS_IMBALANCE:  "class_imbalance",
    ProfileAttribute.P_GREATER_THAN_N: "p_greater_than_n",
    ProfileAttribute.ERROR_FOCUS:      "error_focus",
}


def parse_profile(raw: Profile | Mapping[str, Any]) -> Profile:
    """Validate a raw profile mapping into a ``Profile``.

    Every recognized attribute must be present under its canonical name and
    carry a value of the attribute's declared type.  Nothing is defaulted.

    Args:
        raw: A ``Profile`` (returned unchanged) or a mapping of canonical
             attribute names to values.

    Returns:
        Validated ``Profile``.

    Raises:
        InvalidProfile: On a missing, unrecognized, or out-of-domain attribute.
    """
    if isinstance(raw, Profile):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidProfile(f"expected a mapping, got {type(raw).__name__}.")

    for key in raw:
        if key not in RECOGNIZED_ATTRIBUTES:
            raise InvalidProfile("unrecognized attribute.", attribute=str(key))

    values: dict[str, Any] = {}
    for attribute in ProfileAttribute:
        if attribute.value not in raw:
            raise InvalidProfile("missing required attribute.", attribute=attribute.value)
        try:
            values[attribute.value] = normalize_value(attribute.value, raw[attribute.value])
        except ValueError as exc:
            raise InvalidProfile(str(exc), attribute=attribute.value) from exc

    return Profile.model_validate(values)
