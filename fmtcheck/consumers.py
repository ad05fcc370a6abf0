# fmtcheck/consumers.py
"""
Primitive text consumers used by the format-string grammar.

Every ``consume_*`` function looks at the *front* of a string view and
returns either:

  1. the remainder of the view with the matched prefix removed, or
  2. ``None`` when the prefix does not match.

Consumers never fabricate characters: a successful result is always a
suffix (same or shorter) of the input.  Single-character consumers check
for an empty view before reading, so probing past the end of a format
string degrades to an ordinary "no match".
"""

from __future__ import annotations

from typing import Any, Callable, Collection, Optional

Consumer = Callable[..., Optional[str]]


def consume_character(text: str, character: str) -> Optional[str]:
    """Strip exactly *character* from the front of *text*."""
    if text and text[0] == character:
        return text[1:]
    return None


def consume_character_from_range(
    text: str, first_character: str, last_character: str
) -> Optional[str]:
    """Strip one character ``c`` with ``first_character <= c <= last_character``."""
    if text and first_character <= text[0] <= last_character:
        return text[1:]
    return None


def consume_character_from_set(text: str, *characters: Any) -> Optional[str]:
    """Strip one character that belongs to a set of characters.

    The set is given either inline::

        consume_character_from_set(text, "+", "-", " ")

    or as a single collection computed elsewhere (e.g. the legal
    specifiers selected by a length modifier)::

        consume_character_from_set(text, frozenset("diu"))
    """
    if not text:
        return None
    candidates: Collection[str]
    if len(characters) == 1 and not _is_single_character(characters[0]):
        candidates = characters[0]
    else:
        candidates = characters
    if text[0] in candidates:
        return text[1:]
    return None


def consume_string(text: str, string_to_consume: str) -> Optional[str]:
    """Strip *string_to_consume* if *text* starts with it exactly."""
    if text.startswith(string_to_consume):
        return text[len(string_to_consume):]
    return None


def consume_repeatedly(function: Consumer, text: str, *args: Any) -> str:
    """Apply *function* until it stops matching or stops making progress.

    Never fails: zero repetitions return *text* unchanged.  Each accepted
    step strictly shrinks the view, so the loop is bounded by ``len(text)``.
    """
    while True:
        remainder = function(text, *args)
        if remainder is None or len(remainder) >= len(text):
            return text
        text = remainder


def _is_single_character(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 1
