from __future__ import annotations

from utilkit.core.utils.arrays import array_flatten, is_array


def test_is_array() -> None:
    assert is_array([]) and is_array((1,))
    assert not is_array("ab") and not is_array({"a": 1})


def test_array_flatten_fully_flattens() -> None:
    assert array_flatten([1, [2, [3, [4, (5,)]]]]) == [1, 2, 3, 4, 5]
    assert array_flatten([]) == []


def test_array_flatten_keeps_mappings_and_strings_whole() -> None:
    assert array_flatten([["ab"], [{"a": [1]}]]) == ["ab", {"a": [1]}]


def test_array_flatten_remove_duplicates() -> None:
    assert array_flatten([1, [1, 2], [[2, {"a": 1}]], {"a": 1}], remove_duplicates=True) == [1, 2, {"a": 1}]


def test_array_flatten_does_not_mutate_input() -> None:
    value = [1, [2, [3]]]
    array_flatten(value, remove_duplicates=True)
    assert value == [1, [2, [3]]]
