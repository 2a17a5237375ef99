"""
Recommendation report output: JSON serialisation, ASCII text formatting,
and JSON file writing.

All formatters return plain multi-line strings suitable for ``typer.echo()``.
No third-party dependencies (no ``rich``, no ``colorama``).

Text layout
-----------
    1. LDA                                       90%
         - Gaussian data allows optimal linear boundaries.
    2. QDA                                       85%
         - Different class spread requires curved boundaries.

Scores are shown as ``round(score * 100)`` percent; a score above 1.0 (several
rules agreeing) prints above 100%.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from algo_advisor.models.profile import Profile
from algo_advisor.models.recommendation import Recommendation
from algo_advisor.recommendations.notes import (
    GENERAL_TIPS,
    MODEL_CHECKLIST,
    AdvisoryNote,
)

logger = logging.getLogger(__name__)

EMPTY_PLACEHOLDER = "Select options to see recommendations"

_NAME_WIDTH = 40


def recommendations_to_dicts(recs: list[Recommendation]) -> list[dict[str, Any]]:
    return [r.to_dict() for r in recs]


def recommendations_to_json(recs: list[Recommendation], indent: int | None = 2) -> str:
    """Serialise recommendations to the canonical JSON array shape."""
    return json.dumps(recommendations_to_dicts(recs), indent=indent, ensure_ascii=False)


def format_score_pct(score: float) -> str:
    """Return ``score`` as a whole-number percentage, e.g. ``1.6 -> "160%"``."""
    return f"{round(score * 100)}%"


def format_recommendations(recs: list[Recommendation]) -> str:
    """Render a ranked list as numbered entries with rationale lines."""
    if not recs:
        return f"  {EMPTY_PLACEHOLDER}"

    lines: list[str] = []
    for rank, rec in enumerate(recs, start=1):
        head = f"{rank:>2}. {rec.output}"
        lines.append(f"{head:<{_NAME_WIDTH}} {format_score_pct(rec.score):>6}")
        for reason in rec.rationale:
            lines.append(f"      - {reason}")
    return "\n".join(lines)


def format_notes(notes: list[AdvisoryNote]) -> str:
    if not notes:
        return "  (no advisory notes)"
    return "\n".join(f"  * {n.title}: {n.text}" for n in notes)


def format_tips() -> str:
    return "\n".join(f"  * {tip}" for tip in GENERAL_TIPS)


def format_checklist() -> str:
    return "\n".join(f"  [ ] {family}: {hint}" for family, hint in MODEL_CHECKLIST)


def write_recommendation_json(
    recs:        list[Recommendation],
    profile:     Profile,
    output_path: Path,
) -> Path:
    """Write a recommendation report document to ``output_path``.

    Document shape::

        {"generated_at": "...Z", "profile": {...}, "recommendations": [...]}

    Args:
        recs:        Ranked recommendations from ``evaluate()``.
        profile:     The profile they were computed for.
        output_path: Destination file (parent directories are created).

    Returns:
        ``output_path``.
    """
    payload = {
        "generated_at":    datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "profile":         profile.to_dict(),
        "recommendations": recommendations_to_dicts(recs),
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    logger.info("Wrote %d recommendations to %s", len(recs), output_path)
    return output_path
