"""
Shared pytest fixtures for the Algorithm Advisor test suite.

Provides:
  - ``reference_kb``: the embedded ten-rule reference knowledge base.
  - ``make_profile``: factory for complete canonical profile dicts.
  - ``make_rule``: factory for rule authoring dicts.
  - ``config_file``: a minimal TOML config written to ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from algo_advisor.knowledge.base import KnowledgeBase
from algo_advisor.knowledge.reference import reference_knowledge_base


@pytest.fixture
def reference_kb() -> KnowledgeBase:
    return reference_knowledge_base()


@pytest.fixture
def make_profile() -> Callable[..., dict[str, Any]]:
    """Return a factory producing a complete profile dict with overrides."""

    def _make(**overrides: Any) -> dict[str, Any]:
        profile: dict[str, Any] = {
            "problemType":    "classification",
            "gaussian":       False,
            "classImbalance": False,
            "pGreaterThanN":  False,
            "errorFocus":     "fp",
        }
        profile.update(overrides)
        return profile

    return _make


@pytest.fixture
def make_rule() -> Callable[..., dict[str, Any]]:
    """Return a factory producing a rule authoring dict with overrides."""

    def _make(rule_id: str = "r1", **overrides: Any) -> dict[str, Any]:
        rule: dict[str, Any] = {
            "id":         rule_id,
            "weight":     0.5,
            "condition":  {},
            "candidates": ["Baseline"],
            "rationale":  f"Rationale for {rule_id}.",
        }
        rule.update(overrides)
        return rule

    return _make


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write a minimal config TOML and clear ALGO_ADVISOR_* env overrides."""
    for var in ("ALGO_ADVISOR_KB_FILE", "ALGO_ADVISOR_LOG_LEVEL", "ALGO_ADVISOR_DEBUG"):
        monkeypatch.delenv(var, raising=False)

    path = tmp_path / "default.toml"
    path.write_text(
        """\
[recommend]
top_n = 0
show_notes = true
show_tips = false

[profile_defaults]
problem_type = "classification"
gaussian = true
class_imbalance = false
p_greater_than_n = false
error_focus = "fp"

[logging]
level = "WARNING"
""",
        encoding="utf-8",
    )
    return path
