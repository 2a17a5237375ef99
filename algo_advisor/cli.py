"""
Algorithm Advisor — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the knowledge base / profile.
  4. Evaluate.
  5. Report result to stdout.

Exit codes: 0 success, 1 configuration or knowledge-base error,
2 invalid profile.

Install and run::

    pip install -e .
    algo-advisor --help
    algo-advisor recommend --problem-type classification --gaussian --error-focus fp
    algo-advisor recommend --profile-json profile.json --json
    algo-advisor notes --problem-type time-series --tips
    algo-advisor validate-kb --kb config/knowledge/reference_kb.json
    algo-advisor validate-config --full
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from algo_advisor.taxonomy.profile_taxonomy import ErrorFocus, ProblemType

app = typer.Typer(
    name="algo-advisor",
    help="Rule-based algorithm recommendations from declared dataset characteristics.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from algo_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config) -> None:
    """Set up logging from config."""
    from algo_advisor.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _load_kb_or_exit(kb_file: Optional[str]):
    """Resolve the knowledge base; any structural problem is fatal (exit 1)."""
    from algo_advisor.exceptions import InvalidKnowledgeBase
    from algo_advisor.knowledge.loader import resolve_knowledge_base

    try:
        return resolve_knowledge_base(kb_file)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] Knowledge base is not valid JSON: {exc}", err=True)
        raise typer.Exit(code=1)
    except InvalidKnowledgeBase as exc:
        typer.echo(f"[ERROR] Invalid knowledge base: {exc}", err=True)
        raise typer.Exit(code=1)


def _build_profile_or_exit(
    config,
    profile_json: Optional[str],
    problem_type: Optional[ProblemType],
    gaussian: Optional[bool],
    class_imbalance: Optional[bool],
    p_greater_than_n: Optional[bool],
    error_focus: Optional[ErrorFocus],
):
    """Build the Profile from a JSON file, or from config defaults + flags."""
    from algo_advisor.exceptions import InvalidProfile
    from algo_advisor.models.profile import parse_profile

    try:
        if profile_json:
            path = Path(profile_json)
            if not path.exists():
                typer.echo(f"[ERROR] Profile file not found: {path}", err=True)
                raise typer.Exit(code=2)
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                typer.echo(f"[ERROR] Profile file is not valid JSON: {exc}", err=True)
                raise typer.Exit(code=2)
            return parse_profile(raw)

        profile = config.profile_defaults.to_profile()
        overrides = {
            "problemType":    problem_type,
            "gaussian":       gaussian,
            "classImbalance": class_imbalance,
            "pGreaterThanN":  p_greater_than_n,
            "errorFocus":     error_focus,
        }
        for attribute, value in overrides.items():
            if value is not None:
                profile = profile.updated(attribute, value)
        return profile
    except InvalidProfile as exc:
        typer.echo(f"[ERROR] Invalid profile: {exc}", err=True)
        raise typer.Exit(code=2)


# Shared option declarations
_PROFILE_JSON_OPT = typer.Option(
    None, "--profile-json", "-p",
    help="JSON file with a complete profile (overrides the individual flags).",
)
_PROBLEM_TYPE_OPT = typer.Option(None, "--problem-type", help="Task kind.")
_GAUSSIAN_OPT = typer.Option(
    None, "--gaussian/--non-gaussian", help="Feature distribution shape.",
)
_IMBALANCE_OPT = typer.Option(
    None, "--class-imbalance/--balanced", help="Target classes are imbalanced.",
)
_P_GT_N_OPT = typer.Option(
    None, "--p-greater-than-n/--n-greater-than-p",
    help="More features than observations (high dimensional).",
)
_ERROR_FOCUS_OPT = typer.Option(
    None, "--error-focus", help="Costlier error: fp (false positives) or fn.",
)
_CONFIG_OPT = typer.Option(None, "--config", help="Path to TOML config file.")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("recommend")
def recommend(
    profile_json: Optional[str] = _PROFILE_JSON_OPT,
    problem_type: Optional[ProblemType] = _PROBLEM_TYPE_OPT,
    gaussian: Optional[bool] = _GAUSSIAN_OPT,
    class_imbalance: Optional[bool] = _IMBALANCE_OPT,
    p_greater_than_n: Optional[bool] = _P_GT_N_OPT,
    error_focus: Optional[ErrorFocus] = _ERROR_FOCUS_OPT,
    kb_file: Optional[str] = typer.Option(
        None, "--kb", help="Knowledge base JSON file (default: config / embedded rules).",
    ),
    top: Optional[int] = typer.Option(
        None, "--top", min=0, help="Show only the top N recommendations (0 = all).",
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the recommendation list as JSON only.",
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Also write a JSON report to this file.",
    ),
    show_notes: Optional[bool] = typer.Option(
        None, "--notes/--no-notes", help="Show advisory notes under the ranking.",
    ),
    show_tips: Optional[bool] = typer.Option(
        None, "--tips/--no-tips", help="Show general tips and the model checklist.",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Rank candidate algorithms for a dataset profile."""
    from algo_advisor.recommendations.engine import evaluate, top_n
    from algo_advisor.recommendations.notes import advisory_notes
    from algo_advisor.recommendations.reporter import (
        format_checklist,
        format_notes,
        format_recommendations,
        format_tips,
        recommendations_to_json,
        write_recommendation_json,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    kb = _load_kb_or_exit(kb_file or config.knowledge_base.kb_file)
    profile = _build_profile_or_exit(
        config, profile_json, problem_type, gaussian,
        class_imbalance, p_greater_than_n, error_focus,
    )

    recs = evaluate(profile, kb)

    limit = config.recommend.top_n if top is None else top
    if limit:
        recs = top_n(recs, limit)

    if output:
        write_recommendation_json(recs, profile, Path(output))

    if as_json:
        typer.echo(recommendations_to_json(recs))
        return

    typer.echo("Profile: " + json.dumps(profile.to_dict(), ensure_ascii=False))
    typer.echo("")
    typer.echo("Recommended models:")
    typer.echo(format_recommendations(recs))

    if config.recommend.show_notes if show_notes is None else show_notes:
        typer.echo("")
        typer.echo("Notes:")
        typer.echo(format_notes(advisory_notes(profile)))

    if config.recommend.show_tips if show_tips is None else show_tips:
        typer.echo("")
        typer.echo("Tips & tricks:")
        typer.echo(format_tips())
        typer.echo("")
        typer.echo("Model comparison checklist:")
        typer.echo(format_checklist())

    if output:
        typer.echo("")
        typer.echo(f"[OK] Report written to {output}")


@app.command("notes")
def notes(
    profile_json: Optional[str] = _PROFILE_JSON_OPT,
    problem_type: Optional[ProblemType] = _PROBLEM_TYPE_OPT,
    gaussian: Optional[bool] = _GAUSSIAN_OPT,
    class_imbalance: Optional[bool] = _IMBALANCE_OPT,
    p_greater_than_n: Optional[bool] = _P_GT_N_OPT,
    error_focus: Optional[ErrorFocus] = _ERROR_FOCUS_OPT,
    show_tips: bool = typer.Option(
        False, "--tips", help="Also show general tips and the model checklist.",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print the advisory notes that apply to a dataset profile."""
    from algo_advisor.recommendations.notes import advisory_notes
    from algo_advisor.recommendations.reporter import (
        format_checklist,
        format_notes,
        format_tips,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    profile = _build_profile_or_exit(
        config, profile_json, problem_type, gaussian,
        class_imbalance, p_greater_than_n, error_focus,
    )

    typer.echo("Notes:")
    typer.echo(format_notes(advisory_notes(profile)))
    if show_tips:
        typer.echo("")
        typer.echo("Tips & tricks:")
        typer.echo(format_tips())
        typer.echo("")
        typer.echo("Model comparison checklist:")
        typer.echo(format_checklist())


@app.command("validate-kb")
def validate_kb(
    kb_file: Optional[str] = typer.Option(
        None, "--kb", help="Knowledge base JSON file (default: config / embedded rules).",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Load and validate a knowledge base, then list its rules.

    Exits with code 1 if the knowledge base fails validation.
    """
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    source = kb_file or config.knowledge_base.kb_file
    kb = _load_kb_or_exit(source)

    typer.echo(f"Knowledge base: {source or '(embedded reference rules)'}")
    typer.echo(f"  Rules: {len(kb)}")
    for rule in kb:
        cond = ", ".join(f"{k}={v}" for k, v in rule.to_dict()["condition"].items())
        typer.echo(
            f"  {rule.id:<12} w={rule.weight:<5} "
            f"[{cond or 'always'}] -> {', '.join(rule.candidates)}"
        )
    typer.echo("")
    typer.echo("[OK] Knowledge base valid.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Knowledge base:   {config.knowledge_base.kb_file or '(embedded)'}")
    typer.echo(f"  Top N:            {config.recommend.top_n or 'all'}")
    typer.echo(f"  Default profile:  {json.dumps(config.profile_defaults.to_profile().to_dict())}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
