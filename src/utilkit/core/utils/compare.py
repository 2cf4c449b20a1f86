"""Deep equality across primitives, arrays, mappings and callables.

This module is the single source of truth for value comparison in utilkit.
The merge engine, the object helpers and the exclusion lists all use the
relation defined here.

Every value is classified once into a :class:`ValueKind`:

- ``CALLABLE``: functions, lambdas, methods, builtins, classes, callable objects
- ``ARRAY``: ``list`` and ``tuple`` (never ``str``/``bytes``)
- ``MAPPING``: any ``collections.abc.Mapping``
- ``PRIMITIVE``: everything else

Values of different kinds are never equal. Primitives use SameValue
semantics (``NaN`` equals ``NaN``, ``0.0`` and ``-0.0`` differ, ``True`` is
not ``1``).

WARNING: the ``strict`` function strategy *invokes* two callables that take
no required arguments and compares their return values. Comparing impure
zero-argument callables therefore runs their side effects. Use the
``source`` strategy to get the same check without invocation.
"""
from __future__ import annotations

import inspect
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from types import CodeType
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from utilkit.core.exceptions import InvalidArgumentError, RecursionLimitExceeded

from .defaults import compare_defaults

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)


class ValueKind(Enum):
    """Runtime category used to dispatch comparisons."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    MAPPING = "mapping"
    CALLABLE = "callable"


class ArrayStrategy(str, Enum):
    """How two arrays are judged equal."""

    EXACT = "exact"
    ELEMENTS = "elements"


class FunctionStrategy(str, Enum):
    """How two callables are judged equal."""

    NAME = "name"
    STRICT = "strict"
    SOURCE = "source"


ArrayStrategyLike = Union[ArrayStrategy, str]
FunctionStrategyLike = Union[FunctionStrategy, str]

_REQUIRED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def coerce_strategy(enum_cls: Type[_E], value: Any, label: str) -> _E:
    """Return ``value`` as a member of ``enum_cls``.

    Raises:
        InvalidArgumentError: If ``value`` is not a member or member value.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise InvalidArgumentError(
            f"Unknown {label} {value!r}; expected one of: {allowed}",
            context={label: value},
        ) from exc


def classify(value: Any) -> ValueKind:
    """Return the :class:`ValueKind` of ``value``."""
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if callable(value):
        return ValueKind.CALLABLE
    return ValueKind.PRIMITIVE


@dataclass(frozen=True)
class CompareOptions:
    """Resolved comparison settings shared by one comparison call tree."""

    traverse: bool = True
    array_strategy: ArrayStrategy = ArrayStrategy.EXACT
    function_strategy: FunctionStrategy = FunctionStrategy.STRICT
    key_exclusions: Tuple[Any, ...] = ()
    max_depth: int = 128


def resolve_options(
    *,
    traverse: Optional[bool] = None,
    array_strategy: Optional[ArrayStrategyLike] = None,
    function_strategy: Optional[FunctionStrategyLike] = None,
    key_exclusions: Optional[Iterable[Any]] = None,
    max_depth: Optional[int] = None,
) -> CompareOptions:
    """Build :class:`CompareOptions`, filling ``None`` values from the engine defaults.

    See :mod:`utilkit.core.utils.defaults`.
    """
    if traverse is None or array_strategy is None or function_strategy is None or max_depth is None:
        cfg = compare_defaults()
        traverse = cfg["traverse"] if traverse is None else traverse
        array_strategy = cfg["array_strategy"] if array_strategy is None else array_strategy
        function_strategy = cfg["function_strategy"] if function_strategy is None else function_strategy
        max_depth = cfg["max_depth"] if max_depth is None else max_depth

    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise InvalidArgumentError(
            f"max_depth must be a positive integer, got {max_depth!r}",
            context={"max_depth": max_depth},
        )

    return CompareOptions(
        traverse=bool(traverse),
        array_strategy=coerce_strategy(ArrayStrategy, array_strategy, "array_strategy"),
        function_strategy=coerce_strategy(FunctionStrategy, function_strategy, "function_strategy"),
        key_exclusions=tuple(key_exclusions or ()),
        max_depth=max_depth,
    )


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def same_value(a: Any, b: Any) -> bool:
    """SameValue equality for primitives.

    - ``NaN`` equals ``NaN``
    - ``0.0`` and ``-0.0`` are distinct
    - booleans only equal booleans (``True`` is not ``1``)
    - ``int`` and ``float`` compare numerically (``1 == 1.0``)
    - anything else falls back to ``==``

    Example:
        >>> same_value(float("nan"), float("nan"))
        True
        >>> same_value(0.0, -0.0)
        False
    """
    if a is b:
        return True

    a_bool, b_bool = isinstance(a, bool), isinstance(b, bool)
    if a_bool or b_bool:
        return a_bool and b_bool and a == b

    if isinstance(a, Real) and isinstance(b, Real):
        if _is_nan(a) or _is_nan(b):
            return _is_nan(a) and _is_nan(b)
        if a == 0 and b == 0:
            return math.copysign(1.0, a) == math.copysign(1.0, b)
        return a == b

    try:
        return bool(a == b)
    except (TypeError, ValueError):
        # Objects whose == is not a boolean (e.g. elementwise arrays) are unequal.
        return False


# ---------------------------------------------------------------------------
# Recursive core (pre-resolved options, explicit depth)
# ---------------------------------------------------------------------------


def _guard(depth: int, options: CompareOptions) -> None:
    if depth > options.max_depth:
        raise RecursionLimitExceeded(
            f"Comparison nested deeper than max_depth={options.max_depth}",
            max_depth=options.max_depth,
        )


def _values_equal(a: Any, b: Any, options: CompareOptions, depth: int) -> bool:
    if a is b:
        return True
    _guard(depth, options)

    kind = classify(a)
    if kind is not classify(b):
        return False

    if kind is ValueKind.CALLABLE:
        return _functions_equal(a, b, options.function_strategy, options, depth)
    if kind is ValueKind.ARRAY:
        return _arrays_equal((a, b), options, depth, ())
    if kind is ValueKind.MAPPING:
        if depth > 0 and not options.traverse:
            return False
        return _objects_equal(a, b, options, depth)
    if kind is ValueKind.PRIMITIVE:
        return same_value(a, b)
    raise AssertionError(f"Unhandled value kind: {kind!r}")


def _contains(values: Sequence[Any], target: Any, options: CompareOptions, depth: int) -> bool:
    for candidate in values:
        if _values_equal(candidate, target, options, depth):
            return True
    return False


def _arrays_equal(
    arrays: Sequence[Sequence[Any]],
    options: CompareOptions,
    depth: int,
    exclusions: Sequence[Any],
) -> bool:
    if exclusions:
        arrays = [
            [el for el in array if not _contains(exclusions, el, options, depth + 1)]
            for array in arrays
        ]

    first = arrays[0]
    if options.array_strategy is ArrayStrategy.EXACT:
        for array in arrays[1:]:
            if len(array) != len(first):
                return False
            for left, right in zip(first, array):
                if not _values_equal(left, right, options, depth + 1):
                    return False
        return True

    # Elements: every element must exist somewhere in its archetype
    # (linear scan, duplicates are not matched one-to-one).
    for index, array in enumerate(arrays):
        archetype = arrays[1] if index == 0 else first
        if len(array) != len(archetype):
            return False
        for el in array:
            if not _contains(archetype, el, options, depth + 1):
                return False
    return True


def _objects_equal(a: Mapping, b: Mapping, options: CompareOptions, depth: int) -> bool:
    excluded = options.key_exclusions
    keys = [k for k in a.keys() if k not in excluded]
    other_keys = [k for k in b.keys() if k not in excluded]
    if len(keys) != len(other_keys):
        return False

    for key in keys:
        if key not in b:
            return False
        if not _values_equal(a[key], b[key], options, depth + 1):
            return False
    return True


def _callable_name(func: Any) -> Optional[str]:
    return getattr(func, "__name__", None)


def required_arity(func: Any) -> Optional[int]:
    """Count parameters without defaults; ``None`` when the signature is unavailable."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    return sum(
        1
        for p in sig.parameters.values()
        if p.kind in _REQUIRED_KINDS and p.default is inspect.Parameter.empty
    )


def _code_fingerprint(code: CodeType) -> Tuple[Any, ...]:
    consts = tuple(
        _code_fingerprint(c) if isinstance(c, CodeType) else (type(c).__name__, c)
        for c in code.co_consts
    )
    return (
        code.co_name,
        code.co_code,
        consts,
        code.co_names,
        code.co_varnames,
        code.co_freevars,
        code.co_cellvars,
    )


def canonical_source(func: Any) -> Any:
    """Return the canonical source form of ``func``.

    Python callables are reduced to a fingerprint of their compiled code
    (bytecode, constants, names, variable names). Line numbers and file
    locations are not part of it, so two textually identical definitions
    compare equal wherever they live. Callables without Python code
    (builtins, classes, partials, callable objects) are their own canonical
    form, i.e. they only match themselves.
    """
    code = getattr(func, "__code__", None)
    if isinstance(code, CodeType):
        return _code_fingerprint(code)
    return func


def _functions_equal(
    a: Any,
    b: Any,
    strategy: FunctionStrategy,
    options: CompareOptions,
    depth: int,
) -> bool:
    if strategy is FunctionStrategy.NAME:
        return _callable_name(a) == _callable_name(b)

    arity = required_arity(a)
    if arity != required_arity(b):
        return False

    if canonical_source(a) != canonical_source(b):
        return False

    if strategy is FunctionStrategy.SOURCE or arity != 0:
        return True

    logger.debug("Invoking zero-argument callables %r and %r to compare their results", a, b)
    return _values_equal(a(), b(), options, depth + 1)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compare_values(a: Any, b: Any, options: CompareOptions) -> bool:
    """Compare two values with already-resolved options.

    Same relation as :func:`values_equal`, without the config lookup. Meant
    for hot loops (merge deduplication, exclusion scans).
    """
    return _values_equal(a, b, options, 0)


def values_equal(
    a: Any,
    b: Any,
    *,
    traverse: Optional[bool] = None,
    array_strategy: Optional[ArrayStrategyLike] = None,
    function_strategy: Optional[FunctionStrategyLike] = None,
    max_depth: Optional[int] = None,
) -> bool:
    """Check whether two values of any type are equal.

    Args:
        a: First value
        b: Second value
        traverse: Compare nested mappings structurally. When ``False``, mappings
            below the top level only match when they are the same object.
        array_strategy: ``"exact"`` (ordered) or ``"elements"`` (order-insensitive)
        function_strategy: ``"name"``, ``"strict"`` or ``"source"``. ``"strict"``
            invokes zero-argument callables; see the module docstring.
        max_depth: Maximum nesting depth before :class:`RecursionLimitExceeded`

    Returns:
        True if the values are equal under the configured strategies

    Example:
        >>> values_equal({"a": [1, 2]}, {"a": [1, 2]})
        True
        >>> values_equal([1, 2, 3], [3, 2, 1], array_strategy="elements")
        True
    """
    options = resolve_options(
        traverse=traverse,
        array_strategy=array_strategy,
        function_strategy=function_strategy,
        max_depth=max_depth,
    )
    return _values_equal(a, b, options, 0)


def arrays_equal(
    arrays: Iterable[Sequence[Any]],
    *,
    array_strategy: Optional[ArrayStrategyLike] = None,
    exclusions: Optional[Iterable[Any]] = None,
    traverse: Optional[bool] = None,
    function_strategy: Optional[FunctionStrategyLike] = None,
    max_depth: Optional[int] = None,
) -> bool:
    """Check whether two or more arrays are equal.

    Args:
        arrays: At least two lists/tuples
        array_strategy: ``"exact"``: same length and pairwise equal elements.
            ``"elements"``: same length and every element of each array has a
            deep-equal element in the archetype (first array; the first array is
            checked against the second). This is a linear existence scan, so
            ``[1, 1, 2]`` and ``[1, 2, 2]`` are considered equal.
        exclusions: Values stripped from every array before comparing
        traverse: See :func:`values_equal`
        function_strategy: See :func:`values_equal`
        max_depth: See :func:`values_equal`

    Returns:
        True if all arrays are equal

    Raises:
        InvalidArgumentError: Fewer than two arrays, or an item that is not a list/tuple
    """
    arrays = list(arrays)
    if len(arrays) < 2:
        raise InvalidArgumentError(
            "At least two arrays must be provided.",
            context={"count": len(arrays)},
        )
    for index, array in enumerate(arrays):
        if classify(array) is not ValueKind.ARRAY:
            raise InvalidArgumentError(
                f"Item {index} is not an array (got {type(array).__name__}).",
                context={"index": index},
            )

    options = resolve_options(
        traverse=traverse,
        array_strategy=array_strategy,
        function_strategy=function_strategy,
        max_depth=max_depth,
    )
    return _arrays_equal(arrays, options, 0, tuple(exclusions or ()))


def objects_equal(
    a: Any,
    b: Any,
    *,
    traverse: Optional[bool] = None,
    exclusions: Optional[Iterable[Any]] = None,
    array_strategy: Optional[ArrayStrategyLike] = None,
    function_strategy: Optional[FunctionStrategyLike] = None,
    max_depth: Optional[int] = None,
) -> bool:
    """Check whether two mappings have identical keys and deep-equal values.

    Two lists/tuples are delegated to :func:`arrays_equal`, a mapping never
    equals a non-mapping, and other values fall back to :func:`same_value`.

    Args:
        a: Mapping
        b: Mapping
        traverse: Recurse into nested mappings. When ``False``, nested mappings
            (depth >= 1) must be the same object; the top level is always
            compared key by key.
        exclusions: Keys skipped on both sides, at every nesting level
        array_strategy: Strategy for array-valued keys
        function_strategy: Strategy for callable-valued keys
        max_depth: See :func:`values_equal`

    Returns:
        True if the mappings are equal
    """
    options = resolve_options(
        traverse=traverse,
        array_strategy=array_strategy,
        function_strategy=function_strategy,
        key_exclusions=exclusions,
        max_depth=max_depth,
    )
    if a is b:
        return True

    kind = classify(a)
    if kind is not classify(b):
        return False
    if kind is ValueKind.ARRAY:
        return _arrays_equal((a, b), options, 0, ())
    if kind is ValueKind.MAPPING:
        return _objects_equal(a, b, options, 0)
    if kind is ValueKind.PRIMITIVE:
        return same_value(a, b)
    return False


def functions_equal(
    a: Any,
    b: Any,
    *,
    strategy: Optional[FunctionStrategyLike] = None,
) -> bool:
    """Check whether two callables are equal.

    Strategies:
        - ``"name"``: ``__name__`` must match (lambdas are all ``<lambda>``;
          nameless callables match each other)
        - ``"source"``: same number of required parameters and same
          :func:`canonical_source`
        - ``"strict"``: ``"source"`` and, when neither callable requires an
          argument, **both callables are invoked** and their return values
          compared with :func:`values_equal`. Invocation only happens after the
          other checks pass.

    Raises:
        InvalidArgumentError: If either argument is not callable
    """
    if not callable(a):
        raise InvalidArgumentError(
            "The first argument is not callable.", context={"type": type(a).__name__}
        )
    if not callable(b):
        raise InvalidArgumentError(
            "The second argument is not callable.", context={"type": type(b).__name__}
        )

    options = resolve_options(function_strategy=strategy)
    return _functions_equal(a, b, options.function_strategy, options, 0)


__all__: List[str] = [
    "ValueKind",
    "ArrayStrategy",
    "FunctionStrategy",
    "CompareOptions",
    "coerce_strategy",
    "classify",
    "resolve_options",
    "same_value",
    "canonical_source",
    "required_arity",
    "compare_values",
    "values_equal",
    "arrays_equal",
    "objects_equal",
    "functions_equal",
]
