"""Utility helpers for utilkit core.

This package provides:
- compare: deep equality across primitives, arrays, mappings and callables
- merge: n-way mapping and array merging
- arrays / objects: helpers built on the equality relation
- text/: case conversion, string validators, unit formatting
- time: UTC timestamps, date parsing and formatting
- ids: random identifiers
- io: YAML file helpers
"""
from __future__ import annotations

from .arrays import array_flatten, is_array
from .compare import (
    ArrayStrategy,
    CompareOptions,
    FunctionStrategy,
    ValueKind,
    arrays_equal,
    classify,
    functions_equal,
    objects_equal,
    values_equal,
)
from .defaults import configure_defaults, reset_defaults
from .ids import CryptoMode, gen_id, generate_id, random_number_string
from .io import iter_yaml_files, read_yaml
from .merge import MergeStrategy, array_merge, deep_merge, object_merge
from .objects import (
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
from .text import (
    camel_to_snake,
    camel_to_title,
    capitalise,
    format_bytes,
    is_base64_encoded,
    is_domain_or_url,
    is_url,
    is_valid_iso8601,
    snake_to_camel,
)
from .time import (
    dates_equal,
    format_date,
    format_time,
    parse_date,
    parse_iso8601,
    secs_to_hhmmss,
    secs_to_mins,
    utc_now,
    utc_timestamp,
    wait,
)

__all__ = [
    # compare
    "ValueKind",
    "ArrayStrategy",
    "FunctionStrategy",
    "CompareOptions",
    "classify",
    "values_equal",
    "arrays_equal",
    "objects_equal",
    "functions_equal",
    # merge
    "MergeStrategy",
    "object_merge",
    "array_merge",
    "deep_merge",
    # engine defaults
    "configure_defaults",
    "reset_defaults",
    # arrays
    "is_array",
    "array_flatten",
    # objects
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
    # text
    "snake_to_camel",
    "camel_to_snake",
    "camel_to_title",
    "capitalise",
    "is_valid_iso8601",
    "is_base64_encoded",
    "is_url",
    "is_domain_or_url",
    "format_bytes",
    # time
    "utc_now",
    "utc_timestamp",
    "parse_iso8601",
    "parse_date",
    "dates_equal",
    "format_time",
    "format_date",
    "secs_to_hhmmss",
    "secs_to_mins",
    "wait",
    # ids
    "CryptoMode",
    "generate_id",
    "gen_id",
    "random_number_string",
    # io
    "read_yaml",
    "iter_yaml_files",
]
