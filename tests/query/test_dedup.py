# tests/query/test_dedup.py

from costgraph.models.graph import Pod
from costgraph.query.dedup import remove_duplicates


def _pods(uids):
    return [Pod(uid=uid, name=f"pod-{uid}") for uid in uids]


def test_first_occurrence_order_is_kept():
    assert remove_duplicates(_pods(["a", "b", "a", "c", "b"])) == ["a", "b", "c"]


def test_empty_input_gives_empty_output():
    assert remove_duplicates([]) == []


def test_each_identifier_appears_once():
    uids = ["0x3", "0x1", "0x3", "0x3", "0x2", "0x1"]

    result = remove_duplicates(_pods(uids))

    assert len(result) <= len(uids)
    assert sorted(result) == sorted(set(uids))
    assert result == ["0x3", "0x1", "0x2"]


def test_entities_without_identifier_are_skipped():
    assert remove_duplicates(_pods(["", "a", ""])) == ["a"]


def test_custom_key():
    assert remove_duplicates(_pods(["a", "b", "a"]), key="name") == ["pod-a", "pod-b"]
