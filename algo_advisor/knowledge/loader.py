"""
Knowledge-base loader: JSON file → validated ``KnowledgeBase``.

File format
-----------
A JSON array of rule objects in knowledge-base order::

    [
      {"_comment": "Objects whose keys all start with an underscore are ignored."},
      {
        "id": "time",
        "weight": 0.9,
        "condition": {"problemType": "time-series"},
        "candidates": ["ARIMA", "Prophet", "LSTM"],
        "rationale": "Temporal dependency breaks random split assumptions."
      }
    ]

Validation is delegated to ``KnowledgeBase``; a malformed file therefore
raises ``InvalidKnowledgeBase`` exactly as an invalid embedded table would.

Usage
-----
    from algo_advisor.knowledge.loader import resolve_knowledge_base

    kb = resolve_knowledge_base(config.knowledge_base.kb_file)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from algo_advisor.exceptions import InvalidKnowledgeBase
from algo_advisor.knowledge.base import KnowledgeBase
from algo_advisor.knowledge.reference import reference_knowledge_base

log = logging.getLogger(__name__)


def _is_comment_entry(record: Any) -> bool:
    """True for an object whose keys all start with ``_`` (e.g. ``_comment``)."""
    return (
        isinstance(record, dict)
        and bool(record)
        and all(isinstance(key, str) and key.startswith("_") for key in record)
    )


def read_rule_records(kb_path: Path) -> list[dict[str, Any]]:
    """Read the raw rule dicts from a KB JSON file, dropping comment entries.

    Raises:
        FileNotFoundError:    If ``kb_path`` does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        InvalidKnowledgeBase: If the top-level value is not an array.
    """
    if not kb_path.exists():
        raise FileNotFoundError(f"Knowledge base file not found: {kb_path}")

    raw: Any = json.loads(kb_path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise InvalidKnowledgeBase(
            f"{kb_path} must contain a JSON array of rules, got {type(raw).__name__}."
        )
    records = [r for r in raw if not _is_comment_entry(r)]
    skipped = len(raw) - len(records)
    if skipped:
        log.debug("Skipped %d comment entries in %s", skipped, kb_path)
    return records


def load_knowledge_base(kb_path: Path) -> KnowledgeBase:
    """Load, validate, and freeze a knowledge base from a JSON file."""
    log.info("Loading knowledge base from %s", kb_path)
    return KnowledgeBase(read_rule_records(kb_path))


def resolve_knowledge_base(kb_file: Optional[str | Path] = None) -> KnowledgeBase:
    """Return the KB from ``kb_file``, or the embedded reference KB when ``None``."""
    if kb_file is None:
        return reference_knowledge_base()
    return load_knowledge_base(Path(kb_file))
