"""Tests for recommendation JSON serialisation and text formatting."""

from __future__ import annotations

import json

from algo_advisor.models.profile import Profile
from algo_advisor.models.recommendation import Recommendation
from algo_advisor.recommendations.engine import evaluate
from algo_advisor.recommendations.notes import advisory_notes
from algo_advisor.recommendations.reporter import (
    EMPTY_PLACEHOLDER,
    format_checklist,
    format_notes,
    format_recommendations,
    format_score_pct,
    format_tips,
    recommendations_to_json,
    write_recommendation_json,
)


def _recs() -> list[Recommendation]:
    return [
        Recommendation(output="Random Forest", score=0.8 + 0.7, rationale=("a", "b")),
        Recommendation(output="Decision Tree", score=0.8, rationale=("a",)),
    ]


class TestFormatScorePct:
    def test_rounds_to_whole_percent(self):
        assert format_score_pct(0.85) == "85%"
        assert format_score_pct(0.875) == "88%"

    def test_combined_score_exceeds_hundred(self):
        assert format_score_pct(0.8 + 0.7) == "150%"
        assert format_score_pct(1.6) == "160%"


class TestRecommendationsToJson:
    def test_canonical_shape(self):
        parsed = json.loads(recommendations_to_json(_recs()))
        assert parsed[0] == {
            "output": "Random Forest", "score": 0.8 + 0.7, "rationale": ["a", "b"],
        }
        assert [p["output"] for p in parsed] == ["Random Forest", "Decision Tree"]

    def test_empty(self):
        assert json.loads(recommendations_to_json([])) == []

    def test_non_ascii_rationale_preserved(self, reference_kb, make_profile):
        recs = evaluate(make_profile(pGreaterThanN=True), reference_kb)
        text = recommendations_to_json(recs)
        assert "→" in text


class TestFormatRecommendations:
    def test_ranked_lines_with_rationale(self):
        text = format_recommendations(_recs())
        lines = text.splitlines()
        assert lines[0].lstrip().startswith("1. Random Forest")
        assert lines[0].endswith("150%")
        assert lines[1].strip() == "- a"
        assert lines[3].lstrip().startswith("2. Decision Tree")

    def test_empty_placeholder(self):
        assert EMPTY_PLACEHOLDER in format_recommendations([])


class TestFormatNotesAndStatic:
    def test_notes(self):
        text = format_notes(advisory_notes(Profile()))
        assert "Classification: Metrics must be chosen first" in text

    def test_no_notes(self):
        assert "no advisory notes" in format_notes([])

    def test_tips_and_checklist(self):
        assert format_tips().count("\n") == 3
        assert "[ ] SVM: Tune C and kernel choice." in format_checklist()


class TestWriteRecommendationJson:
    def test_document_written(self, tmp_path):
        out = tmp_path / "reports" / "recs.json"
        path = write_recommendation_json(_recs(), Profile(gaussian=True), out)
        assert path == out
        doc = json.loads(out.read_text(encoding="utf-8"))
        assert set(doc) == {"generated_at", "profile", "recommendations"}
        assert doc["profile"]["gaussian"] is True
        assert doc["generated_at"].endswith("Z")
        assert len(doc["recommendations"]) == 2
