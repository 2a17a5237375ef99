"""
Tests for algo_advisor/knowledge/base.py and knowledge/reference.py.

What we test
------------
KnowledgeBase():
  - Accepts Rule instances and authoring dicts; preserves authoring order.
  - Rejects duplicate ids, non-positive weights, unknown condition keys,
    out-of-domain condition values, empty candidates, non-mapping entries.
  - Is immutable after construction.
  - get() / rule_ids() / __len__ / __iter__.

reference_knowledge_base():
  - Ten valid rules in the documented order.
  - Built once and cached.
"""

from __future__ import annotations

import pytest

from algo_advisor.exceptions import InvalidKnowledgeBase
from algo_advisor.knowledge.base import KnowledgeBase
from algo_advisor.knowledge.reference import REFERENCE_RULES, reference_knowledge_base
from algo_advisor.models.rule import Rule


class TestKnowledgeBaseConstruction:
    def test_preserves_authoring_order(self, make_rule):
        kb = KnowledgeBase([make_rule("b"), make_rule("a"), make_rule("c")])
        assert kb.rule_ids() == ["b", "a", "c"]

    def test_accepts_rule_instances(self, make_rule):
        rule = Rule.model_validate(make_rule("x"))
        kb = KnowledgeBase([rule])
        assert kb.rules() == (rule,)

    def test_empty_knowledge_base_is_valid(self):
        kb = KnowledgeBase([])
        assert len(kb) == 0
        assert kb.rules() == ()

    def test_duplicate_id(self, make_rule):
        with pytest.raises(InvalidKnowledgeBase, match="duplicate") as exc_info:
            KnowledgeBase([make_rule("dup"), make_rule("other"), make_rule("dup")])
        assert exc_info.value.rule_id == "dup"

    @pytest.mark.parametrize("weight", [0, 0.0, -1])
    def test_non_positive_weight(self, make_rule, weight):
        with pytest.raises(InvalidKnowledgeBase) as exc_info:
            KnowledgeBase([make_rule("w", weight=weight)])
        assert exc_info.value.rule_id == "w"
        assert "weight" in exc_info.value.reason

    def test_unknown_condition_key(self, make_rule):
        with pytest.raises(InvalidKnowledgeBase, match="unrecognized attribute"):
            KnowledgeBase([make_rule(condition={"nRows": 1000})])

    def test_condition_value_out_of_domain(self, make_rule):
        with pytest.raises(InvalidKnowledgeBase, match="must be one of"):
            KnowledgeBase([make_rule(condition={"problemType": "ranking"})])

    def test_condition_value_wrong_type(self, make_rule):
        with pytest.raises(InvalidKnowledgeBase, match="boolean"):
            KnowledgeBase([make_rule(condition={"classImbalance": "yes"})])

    def test_empty_candidates(self, make_rule):
        with pytest.raises(InvalidKnowledgeBase) as exc_info:
            KnowledgeBase([make_rule("empty", candidates=[])])
        assert exc_info.value.rule_id == "empty"

    def test_non_mapping_entry(self):
        with pytest.raises(InvalidKnowledgeBase, match="index 0"):
            KnowledgeBase(["not a rule"])

    def test_missing_id_reports_no_rule_id(self, make_rule):
        raw = make_rule()
        del raw["id"]
        with pytest.raises(InvalidKnowledgeBase) as exc_info:
            KnowledgeBase([raw])
        assert exc_info.value.rule_id is None


class TestKnowledgeBaseAccess:
    def test_get(self, make_rule):
        kb = KnowledgeBase([make_rule("a"), make_rule("b", weight=0.2)])
        assert kb.get("b").weight == 0.2

    def test_get_unknown(self, make_rule):
        kb = KnowledgeBase([make_rule("a")])
        with pytest.raises(KeyError):
            kb.get("zzz")

    def test_iteration_matches_rules(self, make_rule):
        kb = KnowledgeBase([make_rule("a"), make_rule("b")])
        assert list(kb) == list(kb.rules())

    def test_immutable(self, make_rule):
        kb = KnowledgeBase([make_rule("a")])
        with pytest.raises(AttributeError):
            kb._rules = ()

    def test_source_list_changes_do_not_leak(self, make_rule):
        source = [make_rule("a")]
        kb = KnowledgeBase(source)
        source.append(make_rule("b"))
        assert kb.rule_ids() == ["a"]


class TestReferenceKnowledgeBase:
    def test_ten_rules_in_order(self, reference_kb):
        assert reference_kb.rule_ids() == [
            "lda", "qda", "tree", "imbalance", "p_gt_n",
            "fp", "fn", "regression", "clustering", "time",
        ]

    def test_weights_within_unit_interval(self, reference_kb):
        for rule in reference_kb:
            assert 0.0 < rule.weight <= 1.0

    def test_built_once(self):
        assert reference_knowledge_base() is reference_knowledge_base()

    def test_matches_authoring_table(self, reference_kb):
        assert len(reference_kb) == len(REFERENCE_RULES)
        for rule, raw in zip(reference_kb, REFERENCE_RULES):
            assert rule.to_dict() == {**raw, "candidates": list(raw["candidates"])}
