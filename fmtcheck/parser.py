# fmtcheck/parser.py
"""
Placeholder parser and format scanner.

:func:`parse_first_placeholder` recognises one placeholder at the start of
a view by running the grammar fields in order::

    Start(%) → Flags → Width → Precision → Length → Specifier

:func:`parse_format_to_placeholder_matchers` walks a whole format string
and returns the ordered argument categories it demands.  A ``%`` that does
not begin a valid placeholder is treated as literal text: the scanner
steps over it by one character and keeps going, so arbitrary text never
makes the scan fail.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from fmtcheck.grammar import (
    consume_flags_if_any,
    consume_length_if_any,
    consume_precision_if_any,
    consume_specifier,
    consume_start_character,
    consume_width_if_any,
)
from fmtcheck.matcher import ArgumentCategory

_log = logging.getLogger(__name__)

ExpectationSequence = Tuple[ArgumentCategory, ...]

ESCAPED_START = "%%"


class PlaceholderParseResult(NamedTuple):
    is_valid: bool
    categories: ExpectationSequence
    consumed_length: int


_INVALID = PlaceholderParseResult(False, (), 0)


@dataclass(frozen=True)
class Placeholder:
    """One recognised placeholder and where it sits in the format text."""

    offset: int
    text: str
    flags: str
    width: str
    precision: Optional[str]      # None when no "." was given
    length: str                   # "" when no length modifier was given
    specifier: str
    categories: ExpectationSequence

    @property
    def end(self) -> int:
        return self.offset + len(self.text)

    def __str__(self) -> str:
        return self.text


def _consumed(before: str, after: str) -> str:
    return before[: len(before) - len(after)]


def parse_placeholder_at(format_text: str, offset: int = 0) -> Optional[Placeholder]:
    """Parse one placeholder at *offset*; ``None`` when there is none."""
    view = format_text[offset:]
    post_start = consume_start_character(view)
    if post_start is None:
        return None

    categories: List[ArgumentCategory] = []
    post_flags = consume_flags_if_any(post_start)

    post_width, width_category = consume_width_if_any(post_flags)
    if width_category is not None:
        categories.append(width_category)

    post_precision, precision_category = consume_precision_if_any(post_width)
    if precision_category is not None:
        categories.append(precision_category)

    post_length, allowed_specifiers, length = consume_length_if_any(post_precision)
    post_specifier, specifier_category = consume_specifier(post_length, allowed_specifiers)
    if post_specifier is None:
        return None
    categories.append(specifier_category)

    precision = _consumed(post_width, post_precision)
    return Placeholder(
        offset=offset,
        text=_consumed(view, post_specifier),
        flags=_consumed(post_start, post_flags),
        width=_consumed(post_flags, post_width),
        precision=precision[1:] if precision else None,
        length=length,
        specifier=post_length[0],
        categories=tuple(categories),
    )


def parse_first_placeholder(format_text: str) -> PlaceholderParseResult:
    """Try to match ``%[flags][width][.precision][length]specifier``.

    Returns validity, the argument categories the placeholder needs (width,
    precision, then the value itself) and the number of characters from
    ``%`` through the specifier.  Any failure yields ``(False, (), 0)``.
    """
    placeholder = parse_placeholder_at(format_text)
    if placeholder is None:
        return _INVALID
    return PlaceholderParseResult(True, placeholder.categories, len(placeholder.text))


def skip_escaped_starting_character(format_text: str) -> str:
    if format_text.startswith(ESCAPED_START):
        return format_text[len(ESCAPED_START):]
    return format_text


@functools.lru_cache(maxsize=1024)
def parse_format_to_placeholders(format_text: str) -> Tuple[Placeholder, ...]:
    """Return every valid placeholder of *format_text* in textual order."""
    placeholders: List[Placeholder] = []
    offset = 0
    end = len(format_text)
    while True:
        while format_text.startswith(ESCAPED_START, offset):
            offset += len(ESCAPED_START)
        if offset >= end:
            break
        if format_text[offset] != "%":
            offset += 1
            continue
        placeholder = parse_placeholder_at(format_text, offset)
        if placeholder is None:
            _log.debug("stray '%%' at offset %d of %r treated as text", offset, format_text)
            offset += 1
        else:
            placeholders.append(placeholder)
            offset = placeholder.end
    return tuple(placeholders)


@functools.lru_cache(maxsize=1024)
def parse_format_to_placeholder_matchers(format_text: str) -> ExpectationSequence:
    """Return the ExpectationSequence of *format_text*.

    >>> [str(c) for c in parse_format_to_placeholder_matchers("%*.*s")]
    ['unsigned integer', 'unsigned integer', 'string']
    """
    categories: List[ArgumentCategory] = []
    for placeholder in parse_format_to_placeholders(format_text):
        categories.extend(placeholder.categories)
    return tuple(categories)
