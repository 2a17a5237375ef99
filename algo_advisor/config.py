"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``ALGO_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands receive an ``AppConfig`` instance — never raw dicts or
individual env var lookups scattered through the codebase.  The engine
itself takes no configuration: it only sees a Profile and a KnowledgeBase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from algo_advisor.models.profile import Profile
from algo_advisor.taxonomy.profile_taxonomy import ErrorFocus, ProblemType

# ── Sub-config models ─────────────────────────────────────────────────────────


class KnowledgeBaseConfig(BaseModel):
    """Where the rule set comes from."""

    model_config = ConfigDict(frozen=True)

    kb_file: Optional[str] = None   # None → embedded reference KB


class RecommendConfig(BaseModel):
    """Output shaping for the ``recommend`` command."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 0                  # 0 → show every recommendation
    show_notes: bool = True
    show_tips: bool = False

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"top_n must be >= 0, got {v}.")
        return v


class ProfileDefaultsConfig(BaseModel):
    """Initial profile used when a CLI flag is not given."""

    model_config = ConfigDict(frozen=True)

    problem_type: ProblemType = ProblemType.CLASSIFICATION
    gaussian: bool = False
    class_imbalance: bool = False
    p_greater_than_n: bool = False
    error_focus: ErrorFocus = ErrorFocus.FALSE_POSITIVE

    def to_profile(self) -> Profile:
        return Profile(
            problem_type=self.problem_type,
            gaussian=self.gaussian,
            class_imbalance=self.class_imbalance,
            p_greater_than_n=self.p_greater_than_n,
            error_focus=self.error_focus,
        )


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "WARNING"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    knowledge_base: KnowledgeBaseConfig = KnowledgeBaseConfig()
    recommend: RecommendConfig = RecommendConfig()
    profile_defaults: ProfileDefaultsConfig = ProfileDefaultsConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply ALGO_ADVISOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ALGO_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      ALGO_ADVISOR_KB_FILE    → raw["knowledge_base"]["kb_file"]
      ALGO_ADVISOR_LOG_LEVEL  → raw["logging"]["level"]
      ALGO_ADVISOR_DEBUG      → raw["debug"]
    """
    if kb_file := os.environ.get("ALGO_ADVISOR_KB_FILE"):
        raw.setdefault("knowledge_base", {})["kb_file"] = kb_file

    if log_level := os.environ.get("ALGO_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("ALGO_ADVISOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        knowledge_base=KnowledgeBaseConfig(**raw.get("knowledge_base", {})),
        recommend=RecommendConfig(**raw.get("recommend", {})),
        profile_defaults=ProfileDefaultsConfig(**raw.get("profile_defaults", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
