"""
Advisory notes: static guidance keyed by individual profile values.

The lookup is a plain table ``(attribute, value) -> AdvisoryNote``; each
profile value maps to zero or one note.  It is independent of the scoring
engine — the UI shows both side by side.

Also exposes the two static lists shown under the notes:
  - ``GENERAL_TIPS``     — workflow tips that apply to every profile.
  - ``MODEL_CHECKLIST``  — what to tune for each model family.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from algo_advisor.models.profile import Profile, parse_profile
from algo_advisor.taxonomy.profile_taxonomy import (
    ErrorFocus,
    ProblemType,
    ProfileAttribute,
    normalize_value,
)


@dataclass(frozen=True)
class AdvisoryNote:
    """One advisory line.

    Attributes:
        attribute: Canonical attribute name that triggered the note.
        title:     Short heading, e.g. ``"Time-Series"``.
        text:      The advice itself.
    """

    attribute: str
    title:     str
    text:      str


def _note(attribute: ProfileAttribute, title: str, text: str) -> AdvisoryNote:
    return AdvisoryNote(attribute=attribute.value, title=title, text=text)


ADVISORY_NOTES: dict[tuple[str, Any], AdvisoryNote] = {
    (ProfileAttribute.PROBLEM_TYPE, ProblemType.CLASSIFICATION): _note(
        ProfileAttribute.PROBLEM_TYPE, "Classification",
        "Metrics must be chosen first because accuracy can hide imbalance.",
    ),
    (ProfileAttribute.PROBLEM_TYPE, ProblemType.REGRESSION): _note(
        ProfileAttribute.PROBLEM_TYPE, "Regression",
        "Linear models reveal bias–variance behavior.",
    ),
    (ProfileAttribute.PROBLEM_TYPE, ProblemType.CLUSTERING): _note(
        ProfileAttribute.PROBLEM_TYPE, "Clustering",
        "No labels exist, validation relies on structure.",
    ),
    (ProfileAttribute.PROBLEM_TYPE, ProblemType.TIME_SERIES): _note(
        ProfileAttribute.PROBLEM_TYPE, "Time-Series",
        "Random splits cause leakage.",
    ),
    (ProfileAttribute.GAUSSIAN, False): _note(
        ProfileAttribute.GAUSSIAN, "Non-Gaussian",
        "Tree models work better due to no distribution assumptions.",
    ),
    (ProfileAttribute.GAUSSIAN, True): _note(
        ProfileAttribute.GAUSSIAN, "Gaussian",
        "Linear & discriminant models are statistically efficient.",
    ),
    (ProfileAttribute.CLASS_IMBALANCE, True): _note(
        ProfileAttribute.CLASS_IMBALANCE, "Imbalance",
        "Use Precision/Recall instead of Accuracy.",
    ),
    (ProfileAttribute.ERROR_FOCUS, ErrorFocus.FALSE_POSITIVE): _note(
        ProfileAttribute.ERROR_FOCUS, "FP Costly",
        "Precision minimizes false alarms.",
    ),
    (ProfileAttribute.ERROR_FOCUS, ErrorFocus.FALSE_NEGATIVE): _note(
        ProfileAttribute.ERROR_FOCUS, "FN Costly",
        "Recall avoids missing positives.",
    ),
    (ProfileAttribute.P_GREATER_THAN_N, True): _note(
        ProfileAttribute.P_GREATER_THAN_N, "p ≫ n",
        "Regularization or PCA is mandatory.",
    ),
}

# Display order of the notes panel.
NOTE_ORDER: tuple[ProfileAttribute, ...] = (
    ProfileAttribute.PROBLEM_TYPE,
    ProfileAttribute.GAUSSIAN,
    ProfileAttribute.CLASS_IMBALANCE,
    ProfileAttribute.ERROR_FOCUS,
    ProfileAttribute.P_GREATER_THAN_N,
)

GENERAL_TIPS: tuple[str, ...] = (
    "Always compare against a simple baseline.",
    "EDA quality matters more than hyperparameter tuning.",
    "Cross-validation beats a single split.",
    "Tree models are safest for messy real-world data.",
)

# (model family, what to tune)
MODEL_CHECKLIST: tuple[tuple[str, str], ...] = (
    ("Linear / Logistic",  "Tune L1 vs L2 regularization."),
    ("LDA / QDA",          "Validate Gaussian assumption & covariance."),
    ("Decision Tree",      "Tune max depth, min samples per leaf."),
    ("Random Forest",      "Tune n_estimators, max_features."),
    ("Boosting",           "Tune learning rate before adding trees."),
    ("SVM",                "Tune C and kernel choice."),
    ("K-Means",            "Experiment with K and distance metric."),
    ("Time-Series Models", "Validate trend & seasonality."),
)


def note_for(attribute: str, value: Any) -> AdvisoryNote | None:
    """Return the note for one ``(attribute, value)`` pair, or None.

    ``value`` is checked against the attribute's domain first, so ``0`` or
    ``1`` never stands in for a boolean.

    Raises:
        KeyError:   If ``attribute`` is not a recognized profile attribute.
        ValueError: If ``value`` is outside the attribute's domain.
    """
    return ADVISORY_NOTES.get((attribute, normalize_value(attribute, value)))


def advisory_notes(profile: Profile | Mapping[str, Any]) -> list[AdvisoryNote]:
    """Return the advisory notes that apply to ``profile``, in display order.

    Raises:
        InvalidProfile: If ``profile`` is a mapping that fails validation.
    """
    snapshot = parse_profile(profile)
    notes: list[AdvisoryNote] = []
    for attribute in NOTE_ORDER:
        note = note_for(attribute, snapshot.value_of(attribute))
        if note is not None:
            notes.append(note)
    return notes
