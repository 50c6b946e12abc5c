import pytest

from shelfkit.diff.structured import find_json_conflicts, json_kind, try_parse_json


@pytest.mark.parametrize(
    "value",
    [
        None,
        0,
        "text",
        [],
        {},
        [1, [2, [3]], {"a": None}],
        {"a": {"b": [True, False, None, 1.5, "x"]}, "c": []},
    ],
)
def test_value_has_no_conflicts_with_itself(value):
    assert find_json_conflicts(value, value) == []


def test_key_only_in_shelved_is_single_conflict():
    assert find_json_conflicts({"a": 1}, {"a": 1, "b": 2}) == [("b",)]


def test_key_only_in_current_is_conflict():
    assert find_json_conflicts({"a": 1, "gone": 2}, {"a": 1}) == [("gone",)]


def test_type_mismatch_stops_descent():
    assert find_json_conflicts({"a": [1, 2]}, {"a": {"0": 1}}) == [("a",)]
    assert find_json_conflicts([], {}) == [()]


def test_arrays_compare_by_index():
    assert find_json_conflicts([1, 2, 3], [1, 5]) == [(1,), (2,)]
    assert find_json_conflicts([1], [1, 2, 3]) == [(1,), (2,)]


def test_collects_every_conflict_in_document_order():
    current = {"a": 1, "b": {"c": [1, {"d": True}]}, "e": "x"}
    shelved = {"a": 2, "b": {"c": [1, {"d": False}]}, "e": "x", "f": None}
    assert find_json_conflicts(current, shelved) == [("a",), ("b", "c", 1, "d"), ("f",)]


def test_primitives_are_typed_like_json():
    assert find_json_conflicts(True, 1) == [()]
    assert find_json_conflicts(None, 0) == [()]
    assert find_json_conflicts(1, 1.0) == []
    assert find_json_conflicts(None, None) == []


def test_paths_are_unique():
    conflicts = find_json_conflicts({"a": [1, 2], "b": {"x": 1}}, {"a": [3], "b": {"y": 1}})
    assert len(conflicts) == len(set(conflicts))


def test_json_kind():
    assert json_kind(False) == "boolean"
    assert json_kind(3) == "number"
    assert json_kind({}) == "object"
    with pytest.raises(TypeError):
        json_kind(object())


def test_try_parse_json():
    ok = try_parse_json('{"a": [1, 2]}')
    assert ok.success and ok.data == {"a": [1, 2]}
    assert not try_parse_json("{").success
    assert not try_parse_json("NaN").success
    bad = try_parse_json("// comment\n{}")
    assert bad.success is False and bad.error
