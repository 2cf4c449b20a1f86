from __future__ import annotations

import copy

import pytest

from utilkit.core.exceptions import InvalidArgumentError
from utilkit.core.utils.defaults import configure_defaults
from utilkit.core.utils.merge import MergeStrategy, array_merge, deep_merge, object_merge


# ---------------------------------------------------------------------------
# object_merge
# ---------------------------------------------------------------------------


def test_object_merge_later_scalars_win() -> None:
    merged = object_merge([{"a": 1, "b": 2}, {"b": 3, "c": 4}])
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_object_merge_keeps_first_appearance_key_order() -> None:
    merged = object_merge([{"b": 1, "a": 1}, {"c": 1, "b": 2}])
    assert list(merged) == ["b", "a", "c"]


def test_object_merge_none_is_a_value() -> None:
    assert object_merge([{"a": 1}, {"a": None}]) == {"a": None}


def test_object_merge_skips_non_mapping_inputs() -> None:
    assert object_merge([{"a": 1}, None, [1, 2], "x", {"b": 2}]) == {"a": 1, "b": 2}


def test_object_merge_single_and_empty_inputs() -> None:
    assert object_merge([]) == {}
    assert object_merge([{"a": {"b": 1}}]) == {"a": {"b": 1}}


def test_object_merge_nested_mappings_merge_recursively() -> None:
    merged = object_merge([{"x": {"a": 1, "n": {"k": 1}}}, {"x": {"b": 2, "n": {"j": 2}}}])
    assert merged == {"x": {"a": 1, "b": 2, "n": {"k": 1, "j": 2}}}


def test_object_merge_without_traverse_replaces_nested_mappings() -> None:
    merged = object_merge([{"x": {"a": 1}}, {"x": {"b": 2}}], traverse=False)
    assert merged == {"x": {"b": 2}}


def test_object_merge_does_not_mutate_or_alias_inputs() -> None:
    first = {"x": {"a": 1}, "tags": ["a"]}
    second = {"x": {"b": 2}, "tags": ["b"], "fresh": {"c": 3}}
    snapshot = copy.deepcopy((first, second))

    merged = object_merge([first, second], array_strategy="append")
    assert (first, second) == snapshot

    merged["fresh"]["c"] = 99
    merged["tags"].append("z")
    assert second["fresh"] == {"c": 3}
    assert second["tags"] == ["b"]


@pytest.mark.parametrize(
    "strategy,expected",
    [
        ("overwrite", [3, 4]),
        ("append", [1, 2, 3, 4]),
        ("prepend", [3, 4, 1, 2]),
        ("merge", [1, 2, 3, 4]),
        (MergeStrategy.APPEND, [1, 2, 3, 4]),
    ],
)
def test_object_merge_array_strategies(strategy, expected) -> None:
    merged = object_merge([{"a": [1, 2]}, {"a": [3, 4]}], array_strategy=strategy)
    assert merged == {"a": expected}


def test_object_merge_merge_strategy_deduplicates_deeply() -> None:
    merged = object_merge(
        [{"tags": ["x", {"id": 1}]}, {"tags": [{"id": 1}, "y", "x"]}],
        array_strategy="merge",
    )
    assert merged == {"tags": ["x", {"id": 1}, "y"]}


def test_object_merge_merge_strategy_keeps_nested_arrays() -> None:
    merged = object_merge([{"a": [[1, 2]]}, {"a": [[3]]}], array_strategy="merge")
    assert merged == {"a": [[1, 2], [3]]}


def test_object_merge_flat_spreads_one_level() -> None:
    merged = object_merge([{"a": [1]}, {"a": [[2, [3]]]}], array_strategy="merge", flat=True)
    assert merged == {"a": [1, 2, [3]]}

    grouped = object_merge(
        [{"a": [[1, 2]]}, {"a": [[3]]}],
        array_options={"merge_strategy": "merge", "flat": True},
    )
    assert grouped == {"a": [1, 2, 3]}


def test_object_merge_deep_flattens_one_level() -> None:
    merged = object_merge([{"a": [[1, 2]]}, {"a": [[3]]}], deep=True)
    assert merged == {"a": [1, 2, 3]}


def test_object_merge_merge_strategy_uses_comparison_strategy() -> None:
    first = {"pairs": [[1, 2]]}
    second = {"pairs": [[2, 1]]}
    exact = object_merge([first, second], array_strategy="merge", traverse=False)
    assert exact == {"pairs": [[1, 2], [2, 1]]}

    elements = object_merge(
        [first, second], array_strategy="merge", comparison_strategy="elements", traverse=False
    )
    assert elements == {"pairs": [[1, 2]]}


def test_object_merge_array_replaces_non_array() -> None:
    assert object_merge([{"a": "x"}, {"a": (1, 2)}]) == {"a": [1, 2]}
    assert object_merge([{"a": [1]}, {"a": "x"}]) == {"a": "x"}


def test_object_merge_deep_alias() -> None:
    merged = object_merge(
        [{"a": {"tags": ["x"]}}, {"a": {"tags": ["y", "x"]}}],
        traverse=False,
        array_strategy="overwrite",
        deep=True,
    )
    assert merged == {"a": {"tags": ["x", "y"]}}


def test_object_merge_deep_compares_functions_by_name() -> None:
    def handler():
        return 1

    def make():
        def handler():
            return 2

        return handler

    merged = object_merge([{"hooks": [handler]}, {"hooks": [make()]}], deep=True)
    assert merged == {"hooks": [handler]}


def test_object_merge_array_options() -> None:
    merged = object_merge(
        [{"a": [1, 2]}, {"a": [2, 3]}],
        array_options={"merge_strategy": "merge"},
    )
    assert merged == {"a": [1, 2, 3]}

    explicit = object_merge(
        [{"a": [1, 2]}, {"a": [2, 3]}],
        array_strategy="append",
        array_options={"merge_strategy": "merge"},
    )
    assert explicit == {"a": [1, 2, 2, 3]}


def test_object_merge_is_idempotent() -> None:
    value = {"a": 1, "b": {"c": [1, 2], "d": {"e": None}}}
    assert object_merge([value, value], array_strategy="merge") == value
    assert object_merge([value]) == value


def test_object_merge_unknown_strategy_raises() -> None:
    with pytest.raises(InvalidArgumentError):
        object_merge([{"a": [1]}, {"a": [2]}], array_strategy="zip")


def test_object_merge_defaults_ignore_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UTILKIT_merge__array_strategy", "append")
    assert object_merge([{"a": [1]}, {"a": [1]}]) == {"a": [1]}


def test_object_merge_uses_configured_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UTILKIT_merge__array_strategy", "append")
    configure_defaults()
    assert object_merge([{"a": [1]}, {"a": [1]}]) == {"a": [1, 1]}


# ---------------------------------------------------------------------------
# array_merge
# ---------------------------------------------------------------------------


def test_array_merge_removes_duplicates() -> None:
    assert array_merge([[1, 2], [2, 3], (3, 4)]) == [1, 2, 3, 4]


def test_array_merge_dedups_within_a_single_array() -> None:
    assert array_merge([[1, 1, {"a": 1}, {"a": 1}]]) == [1, {"a": 1}]


def test_array_merge_flat_spreads_one_level() -> None:
    assert array_merge([[1], [[2, 3]]], flat=True) == [1, 2, 3]
    assert array_merge([[1], [[2, [3]]]], flat=True) == [1, 2, [3]]
    assert array_merge([[1], [[2, 3]]]) == [1, [2, 3]]


def test_array_merge_comparison_strategy() -> None:
    assert array_merge([[[1, 2]], [[2, 1]]]) == [[1, 2], [2, 1]]
    assert array_merge([[[1, 2]], [[2, 1]]], comparison_strategy="elements") == [[1, 2]]


def test_array_merge_remove_falsy() -> None:
    assert array_merge([[0, 1, "", None], [False, 2, []]], remove_falsy=True) == [1, 2]
    assert array_merge([[1, 2, {"a": 1}], [3]], remove_falsy=[2, {"a": 1}]) == [1, 3]


def test_array_merge_skips_non_arrays() -> None:
    assert array_merge([[1], "23", None, [2]]) == [1, 2]


def test_array_merge_does_not_mutate_inputs() -> None:
    first = [1, [2]]
    second = [[2], 3]
    array_merge([first, second], flat=True)
    assert first == [1, [2]]
    assert second == [[2], 3]


# ---------------------------------------------------------------------------
# deep_merge (configuration layering)
# ---------------------------------------------------------------------------


def test_deep_merge_empty_list_overrides_base_list() -> None:
    base = {"compare": {"exclusions": ["*"]}}
    override = {"compare": {"exclusions": []}}

    merged = deep_merge(base, override)
    assert merged["compare"]["exclusions"] == []


def test_deep_merge_nested_mappings_and_scalars() -> None:
    merged = deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}, "e": 4})
    assert merged == {"a": 1, "b": {"c": 2, "d": 3}, "e": 4}


def test_deep_merge_accepts_empty_override() -> None:
    assert deep_merge({"a": 1}, {}) == {"a": 1}
    assert deep_merge({"a": 1}, None) == {"a": 1}  # type: ignore[arg-type]
