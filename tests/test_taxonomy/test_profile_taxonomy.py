"""Tests for profile taxonomy integrity — enums, domains, value normalization."""

from __future__ import annotations

import pytest

from algo_advisor.taxonomy.profile_taxonomy import (
    ATTRIBUTE_DOMAINS,
    RECOGNIZED_ATTRIBUTES,
    ErrorFocus,
    ProblemType,
    ProfileAttribute,
    domain_values,
    normalize_value,
)


class TestEnums:
    def test_problem_types(self):
        assert {m.value for m in ProblemType} == {
            "classification", "regression", "clustering", "time-series",
        }

    def test_error_focus(self):
        assert {m.value for m in ErrorFocus} == {"fp", "fn"}

    def test_time_series_value_keeps_hyphen(self):
        assert ProblemType.TIME_SERIES == "time-series"


class TestAttributeDomains:
    def test_every_attribute_has_a_domain(self):
        assert set(ATTRIBUTE_DOMAINS) == set(ProfileAttribute)

    def test_recognized_attribute_names(self):
        assert RECOGNIZED_ATTRIBUTES == {
            "problemType", "gaussian", "classImbalance", "pGreaterThanN", "errorFocus",
        }

    def test_boolean_domain_values(self):
        assert domain_values("gaussian") == [False, True]

    def test_enum_domain_values_in_declaration_order(self):
        assert domain_values("errorFocus") == [ErrorFocus.FALSE_POSITIVE, ErrorFocus.FALSE_NEGATIVE]

    def test_unknown_attribute_raises_key_error(self):
        with pytest.raises(KeyError):
            domain_values("sampleSize")


class TestNormalizeValue:
    def test_enum_string_becomes_member(self):
        value = normalize_value("problemType", "time-series")
        assert value is ProblemType.TIME_SERIES

    def test_enum_member_passes_through(self):
        assert normalize_value("errorFocus", ErrorFocus.FALSE_NEGATIVE) is ErrorFocus.FALSE_NEGATIVE

    def test_bool_passes_through(self):
        assert normalize_value("classImbalance", True) is True

    @pytest.mark.parametrize("bad", [1, 0, "true", "false", None])
    def test_non_bool_rejected_for_boolean_attribute(self, bad):
        with pytest.raises(ValueError, match="boolean"):
            normalize_value("gaussian", bad)

    @pytest.mark.parametrize("bad", ["unknown", "FP", "", True, None])
    def test_out_of_domain_enum_value_rejected(self, bad):
        with pytest.raises(ValueError, match="must be one of"):
            normalize_value("errorFocus", bad)

    def test_member_of_other_enum_rejected(self):
        with pytest.raises(ValueError):
            normalize_value("problemType", ErrorFocus.FALSE_POSITIVE)

    def test_unknown_attribute_raises_key_error(self):
        with pytest.raises(KeyError):
            normalize_value("problem_type", "regression")
