"""Identifier case conversions (snake_case, camelCase, Title Case)."""
from __future__ import annotations

import re

_SNAKE_BOUNDARY = re.compile(r"[-_][a-z]", re.IGNORECASE)
_UPPER = re.compile(r"([A-Z])")


def snake_to_camel(text: str) -> str:
    """``created_at`` / ``created-at`` -> ``createdAt``."""
    return _SNAKE_BOUNDARY.sub(lambda m: m.group(0)[1].upper(), text)


def camel_to_snake(text: str) -> str:
    """``createdAt`` -> ``created_at``."""
    return _UPPER.sub(r"_\1", text).lower()


def camel_to_title(text: str) -> str:
    """``createdAt`` -> ``Created At``."""
    spaced = _UPPER.sub(r" \1", text)
    return spaced[:1].upper() + spaced[1:]


def capitalise(text: str, *, all_words: bool = False) -> str:
    """Upper-case the first character, or the first character of every word.

    Words are separated by single spaces; the rest of each word is untouched.
    """
    if not all_words:
        return text[:1].upper() + text[1:]
    return " ".join(capitalise(word) for word in text.split(" "))


__all__ = ["snake_to_camel", "camel_to_snake", "camel_to_title", "capitalise"]
