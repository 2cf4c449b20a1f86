"""Deep merge utilities.

This module provides the single source of truth for merging mappings and
arrays throughout utilkit, including the configuration layers.

Features:
- N-way, left-to-right merging of mappings into a fresh ``dict``
- Recursive merging of nested mappings (``traverse``)
- Array merge strategies for array-valued keys:
  - ``overwrite``: later array replaces the earlier one
  - ``append``: later elements go after the earlier ones
  - ``prepend``: later elements go before the earlier ones
  - ``merge``: later elements are added unless a deep-equal element exists
- Inputs are never mutated; key order is first appearance across inputs
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .compare import (
    ArrayStrategy,
    ArrayStrategyLike,
    CompareOptions,
    FunctionStrategy,
    FunctionStrategyLike,
    ValueKind,
    classify,
    coerce_strategy,
    compare_values,
    resolve_options,
)
from .defaults import merge_defaults

logger = logging.getLogger(__name__)

_MISSING = object()


class MergeStrategy(str, Enum):
    """How an array-valued key is combined with an existing array."""

    OVERWRITE = "overwrite"
    APPEND = "append"
    PREPEND = "prepend"
    MERGE = "merge"


MergeStrategyLike = Union[MergeStrategy, str]


@dataclass(frozen=True)
class MergeOptions:
    """Resolved settings for one merge call tree."""

    traverse: bool = True
    flat: bool = False
    array_strategy: MergeStrategy = MergeStrategy.OVERWRITE
    compare: CompareOptions = field(default_factory=CompareOptions)


# Config layering must not consult the config system it is building.
_LAYER_OPTIONS = MergeOptions(
    traverse=True,
    flat=False,
    array_strategy=MergeStrategy.OVERWRITE,
    compare=CompareOptions(function_strategy=FunctionStrategy.SOURCE),
)


def resolve_merge_options(
    *,
    traverse: bool = True,
    flat: bool = False,
    array_strategy: Optional[MergeStrategyLike] = None,
    comparison_strategy: Optional[ArrayStrategyLike] = None,
    function_strategy: Optional[FunctionStrategyLike] = None,
    deep: bool = False,
) -> MergeOptions:
    """Build :class:`MergeOptions`, filling ``None`` values from the engine defaults.

    ``deep=True`` forces ``traverse``, ``flat`` and the ``merge`` array strategy;
    comparison falls back to ``exact`` and functions to
    ``merge.deep_function_strategy``.
    """
    if deep:
        traverse = True
        flat = True
        array_strategy = MergeStrategy.MERGE
        if comparison_strategy is None:
            comparison_strategy = ArrayStrategy.EXACT

    if array_strategy is None or comparison_strategy is None or function_strategy is None:
        cfg = merge_defaults()
        if array_strategy is None:
            array_strategy = cfg["array_strategy"]
        if comparison_strategy is None:
            comparison_strategy = cfg["comparison_strategy"]
        if function_strategy is None:
            function_strategy = cfg["deep_function_strategy"] if deep else cfg["function_strategy"]

    return MergeOptions(
        traverse=bool(traverse),
        flat=bool(flat),
        array_strategy=coerce_strategy(MergeStrategy, array_strategy, "array_strategy"),
        compare=resolve_options(
            traverse=True,
            array_strategy=comparison_strategy,
            function_strategy=function_strategy,
        ),
    )


def _present(values: Sequence[Any], target: Any, options: CompareOptions) -> bool:
    for candidate in values:
        if compare_values(candidate, target, options):
            return True
    return False


def _merge_array_list(
    arrays: Iterable[Any], *, flat: bool, options: CompareOptions
) -> List[Any]:
    merged: List[Any] = []
    for array in arrays:
        if classify(array) is not ValueKind.ARRAY:
            logger.debug("Skipping non-array merge input of type %s", type(array).__name__)
            continue
        for el in array:
            if _present(merged, el, options):
                continue
            if flat and classify(el) is ValueKind.ARRAY:
                # One level only: nested arrays inside ``el`` stay elements.
                for member in el:
                    if not _present(merged, member, options):
                        merged.append(member)
            else:
                merged.append(el)
    return merged


def _combine_arrays(existing: Sequence[Any], value: Sequence[Any], options: MergeOptions) -> List[Any]:
    strategy = options.array_strategy
    if strategy is MergeStrategy.APPEND:
        return [*existing, *value]
    if strategy is MergeStrategy.PREPEND:
        return [*value, *existing]
    if strategy is MergeStrategy.MERGE:
        return _merge_array_list((existing, value), flat=options.flat, options=options.compare)
    return list(value)


def _merge_value(existing: Any, value: Any, options: MergeOptions) -> Any:
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        if existing is not _MISSING and classify(existing) is ValueKind.ARRAY:
            return _combine_arrays(existing, value, options)
        return list(value)
    if kind is ValueKind.MAPPING:
        if not options.traverse:
            return value
        if existing is not _MISSING and classify(existing) is ValueKind.MAPPING:
            return _merge_mappings((existing, value), options)
        return _merge_mappings((value,), options)
    return value


def _merge_mappings(objects: Iterable[Any], options: MergeOptions) -> Dict[Any, Any]:
    merged: Dict[Any, Any] = {}
    for obj in objects:
        if obj is None:
            continue
        if not isinstance(obj, Mapping):
            logger.debug("Skipping non-mapping merge input of type %s", type(obj).__name__)
            continue
        for key, value in obj.items():
            merged[key] = _merge_value(merged.get(key, _MISSING), value, options)
    return merged


def object_merge(
    objects: Iterable[Any],
    *,
    traverse: bool = True,
    flat: bool = False,
    array_strategy: Optional[MergeStrategyLike] = None,
    comparison_strategy: Optional[ArrayStrategyLike] = None,
    function_strategy: Optional[FunctionStrategyLike] = None,
    deep: bool = False,
    array_options: Optional[Mapping[str, Any]] = None,
) -> Dict[Any, Any]:
    """Merge mappings left to right into a new dict.

    Later scalar values win. Nested mappings are merged recursively unless
    ``traverse`` is False, in which case the later mapping replaces the earlier
    one. Array-valued keys are combined with ``array_strategy``. Keys keep the
    order of their first appearance. Non-mapping inputs are skipped.

    Args:
        objects: Mappings to merge, lowest precedence first
        traverse: Merge nested mappings
        flat: Under the ``merge`` strategy, spread nested arrays one level
        array_strategy: ``"overwrite"``, ``"append"``, ``"prepend"`` or ``"merge"``
        comparison_strategy: Array comparison used for ``merge`` deduplication
        function_strategy: Function comparison used for ``merge`` deduplication
        deep: Shorthand for ``traverse=True``, ``flat=True`` and
            ``array_strategy="merge"``
        array_options: Grouped alternative to the array settings, with keys
            ``merge_strategy``, ``comparison_strategy``, ``function_strategy``
            and ``flat``. Explicit keyword arguments take precedence.

    Returns:
        New merged dictionary

    Example:
        >>> object_merge([{"a": 1, "b": 2}, {"b": 3, "c": 4}])
        {'a': 1, 'b': 3, 'c': 4}
        >>> object_merge([{"tags": ["x", "y"]}, {"tags": ["y", "z"]}], array_strategy="merge")
        {'tags': ['x', 'y', 'z']}
    """
    if array_options:
        if array_strategy is None:
            array_strategy = array_options.get("merge_strategy")
        if comparison_strategy is None:
            comparison_strategy = array_options.get("comparison_strategy")
        if function_strategy is None:
            function_strategy = array_options.get("function_strategy")
        if not flat:
            flat = bool(array_options.get("flat", False))

    options = resolve_merge_options(
        traverse=traverse,
        flat=flat,
        array_strategy=array_strategy,
        comparison_strategy=comparison_strategy,
        function_strategy=function_strategy,
        deep=deep,
    )
    return _merge_mappings(objects, options)


def array_merge(
    arrays: Iterable[Any],
    *,
    flat: bool = False,
    comparison_strategy: Optional[ArrayStrategyLike] = None,
    function_strategy: Optional[FunctionStrategyLike] = None,
    remove_falsy: Union[bool, Sequence[Any], None] = None,
) -> List[Any]:
    """Merge arrays into a new list without deep-equal duplicates.

    Args:
        arrays: Lists/tuples to merge in order; other inputs are skipped
        flat: Spread array elements one level into the result
        comparison_strategy: Array comparison used to detect duplicates
        function_strategy: Function comparison used to detect duplicates
        remove_falsy: ``True`` drops falsy elements; a list drops elements
            deep-equal to any of its values

    Returns:
        New merged list

    Example:
        >>> array_merge([[1, 2], [2, 3]])
        [1, 2, 3]
        >>> array_merge([[1], [[2, 3]]], flat=True)
        [1, 2, 3]
    """
    merge_options = resolve_merge_options(
        comparison_strategy=comparison_strategy,
        function_strategy=function_strategy,
    )
    merged = _merge_array_list(arrays, flat=flat, options=merge_options.compare)

    if remove_falsy is True:
        return [el for el in merged if el]
    if remove_falsy:
        unwanted = list(remove_falsy)
        return [el for el in merged if not _present(unwanted, el, merge_options.compare)]
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries without mutating inputs.

    Used for configuration layering: nested mappings merge, arrays and
    scalars from ``override`` replace those in ``base``.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    return _merge_mappings((base, override or {}), _LAYER_OPTIONS)


__all__ = [
    "MergeStrategy",
    "MergeOptions",
    "resolve_merge_options",
    "object_merge",
    "array_merge",
    "deep_merge",
]
