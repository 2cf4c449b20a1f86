"""Mapping helpers built on the deep-equality relation.

All helpers return new containers; the input mappings are never mutated.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .arrays import array_flatten
from .compare import (
    ArrayStrategyLike,
    CompareOptions,
    ValueKind,
    classify,
    compare_values,
    required_arity,
    resolve_options,
)
from .text.case import camel_to_snake, snake_to_camel

logger = logging.getLogger(__name__)


def is_mapping(value: Any) -> bool:
    """Return True for any ``collections.abc.Mapping``."""
    return isinstance(value, Mapping)


def _is_empty_array(value: Any) -> bool:
    return classify(value) is ValueKind.ARRAY and len(value) == 0


def _returns_none(func: Callable[..., Any]) -> bool:
    if required_arity(func) != 0:
        return False
    logger.debug("Invoking %r to decide whether it is a falsy property", func)
    return func() is None


def remove_falsy_props(
    obj: Mapping[Any, Any],
    *,
    traverse: bool = True,
    remove_none: bool = False,
    remove_false: bool = False,
    remove_empty_strings: bool = True,
    remove_empty_mappings: bool = True,
    remove_empty_arrays: bool = False,
    remove_callables: bool = False,
    inclusions: Optional[Sequence[Any]] = None,
    exclusions: Optional[Iterable[Any]] = None,
) -> Dict[Any, Any]:
    """Return a copy of ``obj`` without (selected) falsy values.

    Args:
        obj: Mapping to clean
        traverse: Clean nested mappings with the same settings
        remove_none: Remove ``None`` values
        remove_false: Remove ``False`` values
        remove_empty_strings: Remove ``""`` values
        remove_empty_mappings: Remove mappings that are empty in ``obj``. A
            nested mapping left empty by the cleaning itself is kept.
        remove_empty_arrays: Remove empty lists/tuples
        remove_callables: Remove callables without required arguments that
            return ``None``. They are invoked to find out.
        inclusions: Other values to remove (deep equality)
        exclusions: Keys that are never removed or cleaned

    Returns:
        New dictionary
    """
    skipped = set(exclusions or ())
    unwanted = list(inclusions or ())
    options = resolve_options() if unwanted else None

    result: Dict[Any, Any] = {}
    for key, value in obj.items():
        if key in skipped:
            result[key] = value
            continue
        if options is not None and any(compare_values(x, value, options) for x in unwanted):
            continue
        if value is None and remove_none:
            continue
        if value is False and remove_false:
            continue
        if isinstance(value, str) and value == "" and remove_empty_strings:
            continue
        if remove_empty_arrays and _is_empty_array(value):
            continue

        kind = classify(value)
        if kind is ValueKind.MAPPING:
            if not value and remove_empty_mappings:
                continue
            if traverse:
                value = remove_falsy_props(
                    value,
                    traverse=traverse,
                    remove_none=remove_none,
                    remove_false=remove_false,
                    remove_empty_strings=remove_empty_strings,
                    remove_empty_mappings=remove_empty_mappings,
                    remove_empty_arrays=remove_empty_arrays,
                    remove_callables=remove_callables,
                    inclusions=unwanted,
                    exclusions=skipped,
                )
        elif kind is ValueKind.CALLABLE and remove_callables and _returns_none(value):
            continue
        result[key] = value
    return result


def remove_props(obj: Mapping[Any, Any], keys: Iterable[Any], *, traverse: bool = False) -> Dict[Any, Any]:
    """Return a copy of ``obj`` without ``keys`` (also from nested mappings when ``traverse``)."""
    unwanted = set(keys)
    result: Dict[Any, Any] = {}
    for key, value in obj.items():
        if key in unwanted:
            continue
        if traverse and is_mapping(value):
            value = remove_props(value, unwanted, traverse=True)
        result[key] = value
    return result


def _rekey(obj: Mapping[Any, Any], convert: Callable[[str], str], recursive: bool) -> Dict[Any, Any]:
    result: Dict[Any, Any] = {}
    for key, value in obj.items():
        new_key = convert(key) if isinstance(key, str) else key
        if recursive and is_mapping(value):
            value = _rekey(value, convert, recursive)
        result[new_key] = value
    return result


def camelify_keys(obj: Mapping[Any, Any], *, recursive: bool = True) -> Dict[Any, Any]:
    """Convert string keys to camelCase (``created_at`` -> ``createdAt``)."""
    return _rekey(obj, snake_to_camel, recursive)


def snakeify_keys(obj: Mapping[Any, Any], *, recursive: bool = True) -> Dict[Any, Any]:
    """Convert string keys to snake_case (``createdAt`` -> ``created_at``)."""
    return _rekey(obj, camel_to_snake, recursive)


def key_from_value(obj: Mapping[Any, Any], value: Any, *, traverse: bool = False) -> Optional[Any]:
    """Return the first key whose value is deep-equal to ``value``.

    With ``traverse`` nested mappings are searched depth first, so a nested
    key can be returned before a later root key. Returns ``None`` when absent.
    """
    options = resolve_options()
    return _key_from_value(obj, value, traverse, options)


def _key_from_value(obj: Mapping[Any, Any], value: Any, traverse: bool, options: CompareOptions) -> Optional[Any]:
    for key, candidate in obj.items():
        if compare_values(candidate, value, options):
            return key
        if traverse and is_mapping(candidate):
            found = _key_from_value(candidate, value, traverse, options)
            if found is not None:
                return found
    return None


def flatten_object(obj: Mapping[Any, Any], *, exclusions: Optional[Iterable[Any]] = None) -> Dict[Any, Any]:
    """Lift the entries of nested mappings to the root.

    Keys found deeper overwrite the same key found higher up. Mappings stored
    under an excluded key are kept as they are.

    Example:
        >>> flatten_object({"a": 1, "b": {"c": 2, "d": {"e": 3}}})
        {'a': 1, 'c': 2, 'e': 3}
    """
    kept = set(exclusions or ())
    shallow: Dict[Any, Any] = {}
    deep: Dict[Any, Any] = {}
    for key, value in obj.items():
        if is_mapping(value) and key not in kept:
            deep.update(flatten_object(value, exclusions=kept))
        else:
            shallow[key] = value
    shallow.update(deep)
    return shallow


def has_key(obj: Mapping[Any, Any], key: Any, *, traverse: bool = False) -> bool:
    if key in obj:
        return True
    if not traverse:
        return False
    return any(is_mapping(v) and has_key(v, key, traverse=True) for v in obj.values())


def has_value(
    obj: Mapping[Any, Any],
    value: Any,
    *,
    traverse: bool = False,
    array_strategy: Optional[ArrayStrategyLike] = None,
) -> Tuple[bool, Optional[Tuple[Any, Any]]]:
    """Search ``obj`` for a value deep-equal to ``value``.

    Returns:
        ``(True, (key, stored_value))`` for the first match (depth first when
        ``traverse``), otherwise ``(False, None)``
    """
    options = resolve_options(array_strategy=array_strategy)
    return _has_value(obj, value, traverse, options)


def _has_value(obj: Mapping[Any, Any], value: Any, traverse: bool, options: CompareOptions) -> Tuple[bool, Optional[Tuple[Any, Any]]]:
    for key, candidate in obj.items():
        if compare_values(candidate, value, options):
            return True, (key, candidate)
        if traverse and is_mapping(candidate):
            found, entry = _has_value(candidate, value, traverse, options)
            if found:
                return found, entry
    return False, None


def extract_keys(
    obj: Mapping[Any, Any],
    *,
    traverse: bool = True,
    flat: bool = False,
    remove_duplicates: bool = False,
) -> List[Any]:
    """Collect the keys of ``obj`` and its nested mappings.

    Without ``traverse`` this is ``list(obj)``. Otherwise the result is
    ``[root_keys, nested_1, nested_2, ...]`` where each nested entry has the
    same shape; ``flat`` turns it into a single list of keys.

    Example:
        >>> extract_keys({"a": 1, "b": {"c": 2}})
        [['a', 'b'], [['c']]]
        >>> extract_keys({"a": 1, "b": {"c": 2}}, flat=True)
        ['a', 'b', 'c']
    """
    if not traverse:
        return list(obj)

    keys: List[Any] = [list(obj)]
    for value in obj.values():
        if is_mapping(value):
            keys.append(extract_keys(value, traverse=True, remove_duplicates=remove_duplicates))

    if flat:
        return array_flatten(keys, remove_duplicates=remove_duplicates)
    if remove_duplicates:
        options = resolve_options()
        unique: List[Any] = []
        for entry in keys:
            if not any(compare_values(seen, entry, options) for seen in unique):
                unique.append(entry)
        return unique
    return keys


def _query_element(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _query_value(value: Any, array_separator: str) -> str:
    if value is True:
        return "true"
    kind = classify(value)
    if kind is ValueKind.PRIMITIVE and not value:
        return ""
    if kind is ValueKind.ARRAY:
        return array_separator.join(_query_element(el) for el in value)
    if kind is ValueKind.MAPPING:
        return to_query_string(value, array_separator=array_separator)
    return str(value)


def to_query_string(obj: Mapping[Any, Any], start_with: str = "", *, array_separator: str = "|") -> str:
    """Serialise ``obj`` as ``key=value`` pairs joined with ``&``.

    Arrays are joined with ``array_separator`` and nested mappings are
    serialised recursively. Falsy values (``None``, ``False``, ``0``, ``""``)
    and empty containers render as ``key=``. No percent-encoding is applied.

    Example:
        >>> to_query_string({"q": "shoes", "size": [40, 41]}, "?")
        '?q=shoes&size=40|41'
    """
    pairs = [f"{key}={_query_value(value, array_separator)}" for key, value in obj.items()]
    result = start_with + "&".join(pairs)
    return result if len(result) > 1 else ""


__all__ = [
    "is_mapping",
    "remove_falsy_props",
    "remove_props",
    "camelify_keys",
    "snakeify_keys",
    "key_from_value",
    "flatten_object",
    "has_key",
    "has_value",
    "extract_keys",
    "to_query_string",
]
