"""
Profile taxonomy: the closed vocabulary of dataset characteristics.

Two kinds of attribute describe every profile:
  - enum attributes    — ``problemType`` (``ProblemType``), ``errorFocus`` (``ErrorFocus``)
  - boolean attributes — ``gaussian``, ``classImbalance``, ``pGreaterThanN``

``ProfileAttribute`` lists the canonical (camelCase) attribute names used in
rule conditions and in the profile JSON shape.  ``ATTRIBUTE_DOMAINS`` is the
integrity contract: every ``ProfileAttribute`` maps to its declared type
(``bool`` or a ``StrEnum`` subclass).

Usage example::

    from algo_advisor.taxonomy.profile_taxonomy import ProblemType, normalize_value

    normalize_value("problemType", "time-series")   # -> ProblemType.TIME_SERIES

This module has NO imports from any other ``algo_advisor`` package.
"""

from enum import StrEnum


class ProblemType(StrEnum):
    """Kind of analysis task the dataset is meant for."""

    CLASSIFICATION = "classification"
    """Predict a discrete label."""

    REGRESSION = "regression"
    """Predict a continuous target."""

    CLUSTERING = "clustering"
    """Group unlabeled observations."""

    TIME_SERIES = "time-series"
    """Forecast values ordered in time."""


class ErrorFocus(StrEnum):
    """Which error type is more costly for the task."""

    FALSE_POSITIVE = "fp"
    """False alarms are expensive; favour precision."""

    FALSE_NEGATIVE = "fn"
    """Missed positives are expensive; favour recall."""


class ProfileAttribute(StrEnum):
    """Canonical names of the recognized profile attributes (display order)."""

    PROBLEM_TYPE = "problemType"
    GAUSSIAN = "gaussian"
    CLASS_IMBALANCE = "classImbalance"
    P_GREATER_THAN_N = "pGreaterThanN"
    ERROR_FOCUS = "errorFocus"


# Declared value type of each attribute.
ATTRIBUTE_DOMAINS: dict[ProfileAttribute, type] = {
    ProfileAttribute.PROBLEM_TYPE:     ProblemType,
    ProfileAttribute.GAUSSIAN:         bool,
    ProfileAttribute.CLASS_IMBALANCE:  bool,
    ProfileAttribute.P_GREATER_THAN_N: bool,
    ProfileAttribute.ERROR_FOCUS:      ErrorFocus,
}

RECOGNIZED_ATTRIBUTES: frozenset[str] = frozenset(a.value for a in ProfileAttribute)


def domain_values(attribute: str) -> list:
    """Return every legal value of ``attribute`` in declaration order.

    Raises:
        KeyError: If ``attribute`` is not a recognized attribute name.
    """
    if attribute not in RECOGNIZED_ATTRIBUTES:
        raise KeyError(f"Unknown profile attribute '{attribute}'.")
    domain = ATTRIBUTE_DOMAINS[ProfileAttribute(attribute)]
    if domain is bool:
        return [False, True]
    return list(domain)


def normalize_value(attribute: str, value: object) -> bool | StrEnum:
    """Coerce ``value`` to the declared type of ``attribute``.

    Booleans must already be ``bool`` (``1``, ``"true"`` are rejected).  Enum
    attributes accept either a member or its exact string value.

    Raises:
        KeyError:   If ``attribute`` is not recognized.
        ValueError: If ``value`` is outside the attribute's domain.
    """
    if attribute not in RECOGNIZED_ATTRIBUTES:
        raise KeyError(f"Unknown profile attribute '{attribute}'.")
    domain = ATTRIBUTE_DOMAINS[ProfileAttribute(attribute)]

    if domain is bool:
        if type(value) is not bool:
            raise ValueError(
                f"'{attribute}' requires a boolean, got {type(value).__name__} {value!r}."
            )
        return value

    if isinstance(value, domain):
        return value
    if type(value) is not str or value not in {m.value for m in domain}:
        raise ValueError(
            f"'{attribute}' must be one of {[m.value for m in domain]}, got {value!r}."
        )
    return domain(value)
