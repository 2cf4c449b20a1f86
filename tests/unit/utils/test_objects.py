from __future__ import annotations

import copy

from utilkit.core.utils.objects import (
    camelify_keys,
    extract_keys,
    flatten_object,
    has_key,
    has_value,
    is_mapping,
    key_from_value,
    remove_falsy_props,
    remove_props,
    snakeify_keys,
    to_query_string,
)


def test_is_mapping() -> None:
    assert is_mapping({})
    assert not is_mapping([("a", 1)])


# ---------------------------------------------------------------------------
# remove_falsy_props
# ---------------------------------------------------------------------------


def test_remove_falsy_props_defaults() -> None:
    obj = {"a": "", "b": None, "c": False, "d": [], "e": {}, "f": 0, "g": "x"}
    assert remove_falsy_props(obj) == {"b": None, "c": False, "d": [], "f": 0, "g": "x"}


def test_remove_falsy_props_options() -> None:
    obj = {"a": "", "b": None, "c": False, "d": [], "e": {}, "f": 0}
    cleaned = remove_falsy_props(
        obj,
        remove_none=True,
        remove_false=True,
        remove_empty_strings=False,
        remove_empty_mappings=False,
        remove_empty_arrays=True,
    )
    assert cleaned == {"a": "", "e": {}, "f": 0}


def test_remove_falsy_props_traverses_nested_mappings() -> None:
    obj = {"a": {"b": "", "c": {"d": None, "e": 1}}, "f": {"g": ""}}
    cleaned = remove_falsy_props(obj, remove_none=True)
    # A mapping emptied by the cleaning itself is kept.
    assert cleaned == {"a": {"c": {"e": 1}}, "f": {}}
    assert remove_falsy_props(obj, traverse=False) == obj


def test_remove_falsy_props_inclusions_and_exclusions() -> None:
    obj = {"a": "n/a", "b": [1, 2], "c": "", "d": "n/a"}
    cleaned = remove_falsy_props(obj, inclusions=["n/a", [1, 2]], exclusions=["c", "d"])
    assert cleaned == {"c": "", "d": "n/a"}


def test_remove_falsy_props_callables_are_invoked() -> None:
    calls: list = []

    def noop():
        calls.append("noop")

    def value():
        return 1

    obj = {"noop": noop, "value": value, "needs_arg": lambda x: None}
    assert remove_falsy_props(obj) == obj
    assert calls == []

    cleaned = remove_falsy_props(obj, remove_callables=True)
    assert set(cleaned) == {"value", "needs_arg"}
    assert calls == ["noop"]


def test_remove_falsy_props_does_not_mutate_input() -> None:
    obj = {"a": "", "b": {"c": ""}}
    snapshot = copy.deepcopy(obj)
    remove_falsy_props(obj)
    assert obj == snapshot


# ---------------------------------------------------------------------------
# remove_props / key case
# ---------------------------------------------------------------------------


def test_remove_props() -> None:
    obj = {"id": 1, "name": "x", "child": {"id": 2, "v": 3}}
    assert remove_props(obj, ["id"]) == {"name": "x", "child": {"id": 2, "v": 3}}
    assert remove_props(obj, ["id"], traverse=True) == {"name": "x", "child": {"v": 3}}


def test_camelify_keys() -> None:
    obj = {"created_at": 1, "user_info": {"first_name": "Ada"}, 3: "int key"}
    assert camelify_keys(obj) == {"createdAt": 1, "userInfo": {"firstName": "Ada"}, 3: "int key"}
    assert camelify_keys(obj, recursive=False)["userInfo"] == {"first_name": "Ada"}


def test_snakeify_keys() -> None:
    obj = {"createdAt": 1, "userInfo": {"firstName": "Ada"}}
    assert snakeify_keys(obj) == {"created_at": 1, "user_info": {"first_name": "Ada"}}
    assert snakeify_keys(obj, recursive=False) == {"created_at": 1, "user_info": {"firstName": "Ada"}}


# ---------------------------------------------------------------------------
# lookups
# ---------------------------------------------------------------------------


def test_key_from_value() -> None:
    obj = {"a": 1, "b": [1, 2], "c": {"d": "deep"}, "e": "deep"}
    assert key_from_value(obj, [1, 2]) == "b"
    assert key_from_value(obj, "missing") is None
    assert key_from_value(obj, "deep") == "e"
    assert key_from_value(obj, "deep", traverse=True) == "d"


def test_key_from_value_keeps_searching_after_a_nested_miss() -> None:
    obj = {"a": {"x": 1}, "b": 2}
    assert key_from_value(obj, 2, traverse=True) == "b"


def test_flatten_object() -> None:
    obj = {"a": 1, "b": {"c": 2, "d": {"e": 3}}, "keep": {"f": 4}}
    assert flatten_object(obj, exclusions=["keep"]) == {"a": 1, "keep": {"f": 4}, "c": 2, "e": 3}


def test_flatten_object_deeper_keys_win() -> None:
    assert flatten_object({"name": "root", "child": {"name": "child"}}) == {"name": "child"}


def test_has_key() -> None:
    obj = {"a": {"b": {"c": 1}}}
    assert has_key(obj, "a")
    assert not has_key(obj, "c")
    assert has_key(obj, "c", traverse=True)
    assert not has_key(obj, "z", traverse=True)


def test_has_value() -> None:
    obj = {"a": 1, "b": {"c": [1, 2]}}
    assert has_value(obj, 1) == (True, ("a", 1))
    assert has_value(obj, [1, 2]) == (False, None)
    assert has_value(obj, [1, 2], traverse=True) == (True, ("c", [1, 2]))
    assert has_value(obj, [2, 1], traverse=True) == (False, None)
    assert has_value(obj, [2, 1], traverse=True, array_strategy="elements") == (True, ("c", [1, 2]))


def test_extract_keys() -> None:
    obj = {"a": 1, "b": {"c": 2, "a": {"d": 3}}}
    assert extract_keys(obj, traverse=False) == ["a", "b"]
    assert extract_keys(obj) == [["a", "b"], [["c", "a"], [["d"]]]]
    assert extract_keys(obj, flat=True) == ["a", "b", "c", "a", "d"]
    assert extract_keys(obj, flat=True, remove_duplicates=True) == ["a", "b", "c", "d"]


# ---------------------------------------------------------------------------
# to_query_string
# ---------------------------------------------------------------------------


def test_to_query_string() -> None:
    params = {"q": "shoes", "size": [40, 41], "page": 2, "sale": True, "brand": None}
    assert to_query_string(params, "?") == "?q=shoes&size=40|41&page=2&sale=true&brand="


def test_to_query_string_separator_and_empty() -> None:
    assert to_query_string({"ids": (1, 2)}, array_separator=",") == "ids=1,2"
    assert to_query_string({}) == ""
    assert to_query_string({}, "?") == ""


def test_to_query_string_falsy_scalars_render_empty() -> None:
    assert to_query_string({"page": 0, "q": "", "on": False}) == "page=&q=&on="
    assert to_query_string({"ids": [0, None, True]}) == "ids=0||true"
