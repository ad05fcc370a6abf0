# fmtcheck/grammar.py
"""
The printf conversion grammar::

    %[flags][width][.precision][length]specifier

Each field has a ``consume_*`` function built from the primitives in
:mod:`fmtcheck.consumers`.  The optional fields never fail (``*_if_any``);
the specifier is required.  A ``*`` width or precision asks the caller for
one extra ``unsigned`` argument ahead of the converted value.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, NamedTuple, Optional, Tuple

from fmtcheck.consumers import (
    consume_character,
    consume_character_from_range,
    consume_character_from_set,
    consume_repeatedly,
    consume_string,
)
from fmtcheck.matcher import ArgumentCategory


class Specifier(Enum):
    """Terminal conversion characters."""

    d = "d"
    i = "i"
    u = "u"
    o = "o"
    x = "x"
    X = "X"
    f = "f"
    F = "F"
    e = "e"
    E = "E"
    g = "g"
    G = "G"
    a = "a"
    A = "A"
    c = "c"
    s = "s"
    p = "p"
    n = "n"


# ═══════════════════════════════════════════════════════════════════════
# Tables
# ═══════════════════════════════════════════════════════════════════════

FLAG_CHARACTERS: Tuple[str, ...] = ("+", "-", " ", "#", "0")

_INTEGER_SPECIFIERS: FrozenSet[Specifier] = frozenset(
    {Specifier.d, Specifier.i, Specifier.u, Specifier.o, Specifier.x,
     Specifier.X, Specifier.n}
)
_FLOATING_SPECIFIERS: FrozenSet[Specifier] = frozenset(
    {Specifier.f, Specifier.F, Specifier.e, Specifier.E, Specifier.g,
     Specifier.G, Specifier.a, Specifier.A}
)
ALL_SPECIFIERS: FrozenSet[Specifier] = frozenset(Specifier)

# Length modifier token → legal specifiers.  Checked in this order; the
# first token that matches wins, so "hh" and "ll" precede "h" and "l".
LENGTH_CONSTRAINTS: Tuple[Tuple[str, FrozenSet[Specifier]], ...] = (
    ("hh", _INTEGER_SPECIFIERS),
    ("ll", _INTEGER_SPECIFIERS),
    ("l", _INTEGER_SPECIFIERS | {Specifier.c, Specifier.s}),
    ("L", _FLOATING_SPECIFIERS),
    ("h", _INTEGER_SPECIFIERS),
    ("j", _INTEGER_SPECIFIERS),
    ("z", _INTEGER_SPECIFIERS),
    ("t", _INTEGER_SPECIFIERS),
)

_SINGLE_CHARACTER_LENGTHS: Tuple[str, ...] = ("h", "j", "z", "t")

SPECIFIER_CATEGORIES: Dict[Specifier, ArgumentCategory] = {
    Specifier.d: ArgumentCategory.SIGNED_INTEGER,
    Specifier.i: ArgumentCategory.SIGNED_INTEGER,
    Specifier.u: ArgumentCategory.UNSIGNED_INTEGER,
    Specifier.o: ArgumentCategory.UNSIGNED_INTEGER,
    Specifier.x: ArgumentCategory.UNSIGNED_INTEGER,
    Specifier.X: ArgumentCategory.UNSIGNED_INTEGER,
    Specifier.f: ArgumentCategory.FLOATING,
    Specifier.F: ArgumentCategory.FLOATING,
    Specifier.e: ArgumentCategory.FLOATING,
    Specifier.E: ArgumentCategory.FLOATING,
    Specifier.g: ArgumentCategory.FLOATING,
    Specifier.G: ArgumentCategory.FLOATING,
    Specifier.a: ArgumentCategory.FLOATING,
    Specifier.A: ArgumentCategory.FLOATING,
    Specifier.c: ArgumentCategory.CHAR,
    Specifier.s: ArgumentCategory.STRING,
    Specifier.p: ArgumentCategory.POINTER,
    Specifier.n: ArgumentCategory.UNSPECIFIED,
}


def allowed_specifiers_for(length: str) -> FrozenSet[Specifier]:
    """Legal specifiers after length modifier *length* (``""`` for none)."""
    for token, allowed in LENGTH_CONSTRAINTS:
        if token == length:
            return allowed
    return ALL_SPECIFIERS


def specifiers_to_characters(specifiers: FrozenSet[Specifier]) -> FrozenSet[str]:
    return frozenset(specifier.value for specifier in specifiers)


def specifier_to_category(character: str) -> ArgumentCategory:
    try:
        return SPECIFIER_CATEGORIES[Specifier(character)]
    except ValueError:
        return ArgumentCategory.UNSPECIFIED


# ═══════════════════════════════════════════════════════════════════════
# Field consumers
# ═══════════════════════════════════════════════════════════════════════


class FieldResult(NamedTuple):
    """Remainder after an optional field plus the extra argument it needs."""

    substring: str
    category: Optional[ArgumentCategory]


class LengthResult(NamedTuple):
    substring: str
    allowed_specifiers: FrozenSet[Specifier]
    token: str


class SpecifierResult(NamedTuple):
    substring: Optional[str]
    category: ArgumentCategory


def consume_start_character(text: str) -> Optional[str]:
    return consume_character(text, "%")


def consume_flags_if_any(text: str) -> str:
    """Consume at most one flag character."""
    substring = consume_character_from_set(text, *FLAG_CHARACTERS)
    return text if substring is None else substring


def _consume_digits(text: str) -> str:
    return consume_repeatedly(consume_character_from_range, text, "0", "9")


def consume_width_if_any(text: str) -> FieldResult:
    """Consume ``*`` or a (possibly empty) run of digits."""
    substring = consume_character(text, "*")
    if substring is not None:
        return FieldResult(substring, ArgumentCategory.UNSIGNED_INTEGER)
    return FieldResult(_consume_digits(text), None)


def consume_precision_if_any(text: str) -> FieldResult:
    """Consume ``.`` followed by ``*`` or a (possibly empty) run of digits.

    A bare ``.`` is valid and means an explicit zero precision.
    """
    after_dot = consume_character(text, ".")
    if after_dot is None:
        return FieldResult(text, None)
    substring = consume_character(after_dot, "*")
    if substring is not None:
        return FieldResult(substring, ArgumentCategory.UNSIGNED_INTEGER)
    return FieldResult(_consume_digits(after_dot), None)


def consume_length_if_any(text: str) -> LengthResult:
    """Consume a length modifier and report which specifiers may follow."""
    for token in ("hh", "ll"):
        substring = consume_string(text, token)
        if substring is not None:
            return LengthResult(substring, allowed_specifiers_for(token), token)
    for token in ("l", "L"):
        substring = consume_character(text, token)
        if substring is not None:
            return LengthResult(substring, allowed_specifiers_for(token), token)
    substring = consume_character_from_set(text, *_SINGLE_CHARACTER_LENGTHS)
    if substring is not None:
        token = text[0]
        return LengthResult(substring, allowed_specifiers_for(token), token)
    return LengthResult(text, ALL_SPECIFIERS, "")


def consume_specifier(
    text: str, allowed_specifiers: FrozenSet[Specifier]
) -> SpecifierResult:
    """Consume one specifier from *allowed_specifiers*.

    On failure the substring is ``None`` and the category is
    :attr:`ArgumentCategory.UNSPECIFIED`.
    """
    characters = specifiers_to_characters(allowed_specifiers)
    substring = consume_character_from_set(text, characters)
    if substring is None:
        return SpecifierResult(None, ArgumentCategory.UNSPECIFIED)
    return SpecifierResult(substring, specifier_to_category(text[0]))
