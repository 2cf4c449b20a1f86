"""Array helpers built on the deep-equality relation."""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from .compare import ArrayStrategyLike, ValueKind, classify, compare_values, resolve_options


def is_array(value: Any) -> bool:
    """Return True for lists and tuples."""
    return classify(value) is ValueKind.ARRAY


def _flatten_into(out: List[Any], array: Sequence[Any]) -> None:
    for el in array:
        if classify(el) is ValueKind.ARRAY:
            _flatten_into(out, el)
        else:
            out.append(el)


def array_flatten(
    array: Sequence[Any],
    *,
    remove_duplicates: bool = False,
    array_strategy: Optional[ArrayStrategyLike] = None,
) -> List[Any]:
    """Completely flatten nested lists/tuples into a new list.

    Args:
        array: Array with any depth of nested arrays
        remove_duplicates: Drop values deep-equal to an earlier one
        array_strategy: Array comparison used when removing duplicates

    Example:
        >>> array_flatten([1, [2, [3, [4]]]])
        [1, 2, 3, 4]
    """
    result: List[Any] = []
    _flatten_into(result, array)
    if not remove_duplicates:
        return result

    options = resolve_options(array_strategy=array_strategy)
    unique: List[Any] = []
    for value in result:
        if not any(compare_values(seen, value, options) for seen in unique):
            unique.append(value)
    return unique


__all__ = ["is_array", "array_flatten"]
