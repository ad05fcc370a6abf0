# fmtcheck/matcher.py
"""
Argument categories and the C type compatibility predicate.

A format placeholder demands an :class:`ArgumentCategory` of its argument;
a call site supplies C type spellings such as ``"unsigned long"`` or
``"const char *"``.  This module classifies those spellings and decides
whether a supplied type can satisfy a category.

The compatibility matrix follows printf's default argument promotions:
``char``, ``short`` and ``_Bool`` arrive as ``int``, and ``float`` arrives
as ``double``.  Outside *strict* mode signed and unsigned integers are
interchangeable, since the bit pattern is printed either way.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

_log = logging.getLogger(__name__)


class ArgumentCategory(Enum):
    """Abstract classification a placeholder demands of its argument."""

    SIGNED_INTEGER = "signed integer"
    UNSIGNED_INTEGER = "unsigned integer"
    FLOATING = "floating"
    CHAR = "char"
    STRING = "string"
    POINTER = "pointer"
    # Used for %n.  Accepts any argument.
    UNSPECIFIED = "unspecified"

    def __str__(self) -> str:
        return self.value


class CTypeClass(Enum):
    """Coarse classes of C argument types."""

    SIGNED = "signed"
    UNSIGNED = "unsigned"
    BOOL = "bool"
    CHAR = "char"
    FLOATING = "floating"
    CHAR_POINTER = "char pointer"
    POINTER = "pointer"
    UNKNOWN = "unknown"


# ═══════════════════════════════════════════════════════════════════════
# Type spelling tables
# ═══════════════════════════════════════════════════════════════════════

# Builtin types are matched by their keyword multiset (see _classify_builtin);
# this table holds the remaining single-word names.
_SCALAR_TYPES: Dict[str, CTypeClass] = {
    "wchar_t": CTypeClass.CHAR,
    "_Bool": CTypeClass.BOOL,
    "bool": CTypeClass.BOOL,
    # <stddef.h>, <stdint.h>, <wchar.h>
    "size_t": CTypeClass.UNSIGNED,
    "ssize_t": CTypeClass.SIGNED,
    "ptrdiff_t": CTypeClass.SIGNED,
    "intmax_t": CTypeClass.SIGNED,
    "uintmax_t": CTypeClass.UNSIGNED,
    "intptr_t": CTypeClass.SIGNED,
    "uintptr_t": CTypeClass.UNSIGNED,
    "wint_t": CTypeClass.UNSIGNED,
    "int8_t": CTypeClass.SIGNED,
    "int16_t": CTypeClass.SIGNED,
    "int32_t": CTypeClass.SIGNED,
    "int64_t": CTypeClass.SIGNED,
    "uint8_t": CTypeClass.UNSIGNED,
    "uint16_t": CTypeClass.UNSIGNED,
    "uint32_t": CTypeClass.UNSIGNED,
    "uint64_t": CTypeClass.UNSIGNED,
    "nullptr_t": CTypeClass.POINTER,
    "std::nullptr_t": CTypeClass.POINTER,
}

_INTEGER_CLASSES: FrozenSet[CTypeClass] = frozenset(
    {CTypeClass.SIGNED, CTypeClass.UNSIGNED, CTypeClass.BOOL, CTypeClass.CHAR}
)

_BUILTIN_WORDS: FrozenSet[str] = frozenset(
    {"signed", "unsigned", "short", "long", "int", "char", "float", "double"}
)

_QUALIFIER_RE = re.compile(r"\b(?:const|volatile|restrict|__restrict|struct|enum|union)\b")
_ENUM_RE = re.compile(r"\benum\b")
_WHITESPACE_RE = re.compile(r"\s+")
_ARRAY_RE = re.compile(r"\[[^\]]*\]")


def _normalise(spelling: str) -> str:
    text = _QUALIFIER_RE.sub(" ", spelling)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _classify_builtin(words: List[str]) -> Optional[CTypeClass]:
    """Classify a builtin type from its specifier keywords in any order.

    Returns None when *words* is not made of builtin keywords alone, and
    :attr:`CTypeClass.UNKNOWN` for an invalid keyword combination such as
    ``short long``.
    """
    if not words or not set(words) <= _BUILTIN_WORDS:
        return None
    counts = Counter(words)
    signed, unsigned = counts["signed"], counts["unsigned"]
    short, long_, int_ = counts["short"], counts["long"], counts["int"]
    char, float_, double = counts["char"], counts["float"], counts["double"]

    if char:
        if char == 1 and signed + unsigned <= 1 and len(words) == 1 + signed + unsigned:
            return CTypeClass.CHAR
        return CTypeClass.UNKNOWN
    if double:
        if double == 1 and long_ <= 1 and len(words) == 1 + long_:
            return CTypeClass.FLOATING
        return CTypeClass.UNKNOWN
    if float_:
        return CTypeClass.FLOATING if len(words) == 1 else CTypeClass.UNKNOWN

    if (
        int_ > 1
        or short > 1
        or long_ > 2
        or (short and long_)
        or signed + unsigned > 1
    ):
        return CTypeClass.UNKNOWN
    return CTypeClass.UNSIGNED if unsigned else CTypeClass.SIGNED


def _classify_scalar(base: str) -> CTypeClass:
    klass = _classify_builtin(base.split(" "))
    if klass is None:
        klass = _SCALAR_TYPES.get(base, CTypeClass.UNKNOWN)
    return klass


def classify_c_type(spelling: str) -> CTypeClass:
    """Classify a C type spelling into a :class:`CTypeClass`.

    Qualifiers (``const``, ``volatile``, ``restrict``) are ignored and
    builtin keywords may appear in any order.  A trailing ``*`` or an array
    suffix makes the type a pointer; a pointer to a character type is a
    :attr:`CTypeClass.CHAR_POINTER`.  An ``enum`` promotes to ``int``.

    >>> classify_c_type("const char *")
    <CTypeClass.CHAR_POINTER: 'char pointer'>
    >>> classify_c_type("long unsigned int")
    <CTypeClass.UNSIGNED: 'unsigned'>
    """
    is_enum = _ENUM_RE.search(spelling) is not None
    text = _normalise(spelling)
    indirections = text.count("*") + len(_ARRAY_RE.findall(text))
    base = _normalise(_ARRAY_RE.sub(" ", text.replace("*", " ")))

    if indirections:
        if (
            indirections == 1
            and base
            and not is_enum
            and _classify_scalar(base) is CTypeClass.CHAR
        ):
            return CTypeClass.CHAR_POINTER
        return CTypeClass.POINTER

    if is_enum:
        return CTypeClass.SIGNED
    if not base:
        return CTypeClass.UNKNOWN
    klass = _classify_scalar(base)
    if klass is CTypeClass.UNKNOWN:
        _log.debug("unrecognised C type spelling %r", spelling)
    return klass


def is_compatible(
    category: ArgumentCategory, spelling: str, strict: bool = False
) -> bool:
    """Return True if an argument of type *spelling* satisfies *category*.

    Unknown spellings are treated as compatible; callers that care should
    check :func:`classify_c_type` for :attr:`CTypeClass.UNKNOWN` first.
    """
    klass = classify_c_type(spelling)
    if category is ArgumentCategory.UNSPECIFIED or klass is CTypeClass.UNKNOWN:
        return True

    if category is ArgumentCategory.SIGNED_INTEGER:
        if strict:
            return klass in (CTypeClass.SIGNED, CTypeClass.BOOL, CTypeClass.CHAR)
        return klass in _INTEGER_CLASSES
    if category is ArgumentCategory.UNSIGNED_INTEGER:
        if strict:
            return klass in (CTypeClass.UNSIGNED, CTypeClass.BOOL, CTypeClass.CHAR)
        return klass in _INTEGER_CLASSES
    if category is ArgumentCategory.FLOATING:
        return klass is CTypeClass.FLOATING
    if category is ArgumentCategory.CHAR:
        return klass in _INTEGER_CLASSES
    if category is ArgumentCategory.STRING:
        return klass is CTypeClass.CHAR_POINTER
    if category is ArgumentCategory.POINTER:
        return klass in (CTypeClass.POINTER, CTypeClass.CHAR_POINTER)
    return False
