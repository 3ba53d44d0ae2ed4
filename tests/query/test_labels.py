# tests/query/test_labels.py

import pytest

from costgraph.core.exceptions import InvalidLabelFilterError
from costgraph.query.labels import MATCH_NOTHING, LabelFilter, compile_label_filter


def test_two_keys_two_values_compile_to_and_of_ors():
    label_filter = compile_label_filter({"app": {"web", "api"}, "tier": ["frontend", "backend"]})

    assert label_filter.expression == (
        "(eq(key, $lk0) AND (eq(value, $lv0_0) OR eq(value, $lv0_1)))"
        " AND "
        "(eq(key, $lk1) AND (eq(value, $lv1_0) OR eq(value, $lv1_1)))"
    )
    assert label_filter.variables == {
        "$lk0": "app",
        "$lv0_0": "api",
        "$lv0_1": "web",
        "$lk1": "tier",
        "$lv1_0": "backend",
        "$lv1_1": "frontend",
    }


def test_value_order_does_not_change_the_filter():
    first = compile_label_filter({"app": ["web", "api"]})
    second = compile_label_filter({"app": ["api", "web"]})

    assert first == second


def test_key_order_does_not_change_the_filter():
    first = compile_label_filter({"tier": ["db"], "app": ["web"]})
    second = compile_label_filter({"app": ["web"], "tier": ["db"]})

    assert first.expression == second.expression
    assert first.variables == second.variables


def test_single_string_value_is_accepted():
    label_filter = compile_label_filter({"app": "web"})

    assert label_filter.clauses == ("(eq(key, $lk0) AND (eq(value, $lv0_0)))",)
    assert label_filter.variables == {"$lk0": "app", "$lv0_0": "web"}


def test_duplicate_values_are_collapsed():
    label_filter = compile_label_filter({"app": ["web", "web"]})

    assert list(label_filter.variables.values()) == ["app", "web"]


def test_empty_mapping_matches_nothing():
    label_filter = compile_label_filter({})

    assert label_filter.is_empty
    assert label_filter.expression == MATCH_NOTHING
    assert label_filter.variables == {}


def test_key_without_values_matches_nothing():
    label_filter = compile_label_filter({"app": ["web"], "tier": []})

    assert label_filter == LabelFilter.match_nothing()


def test_caller_text_never_reaches_the_expression():
    hostile = 'web") OR has(isPod) OR eq(name, "x'
    label_filter = compile_label_filter({"app": [hostile]})

    assert hostile not in label_filter.expression
    assert hostile in label_filter.variables.values()


@pytest.mark.parametrize(
    "labels",
    [{"": ["web"]}, {"app": [1]}, {"app": 5}, {1: ["a"], "app": ["web"]}],
)
def test_malformed_mappings_are_rejected(labels):
    with pytest.raises(InvalidLabelFilterError):
        compile_label_filter(labels)
