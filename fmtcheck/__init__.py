"""
fmtcheck - Static Validation of printf-style Format Strings
===========================================================

Parses a printf format string into the ordered list of argument categories
its placeholders demand, and verifies the argument types of a call site
against that list.

Core modules
------------
consumers
    Primitive prefix consumers and the repetition combinator.
grammar
    ``%[flags][width][.precision][length]specifier`` field consumers and
    the length-modifier / specifier tables.
parser
    Single-placeholder parser and the whole-format scanner.
matcher
    Argument categories and the C type compatibility predicate.
verify
    Arity and type verification of a call site.
diagnostics
    Summary, gcc and JSON rendering of verification results.

Quick start
-----------
>>> from fmtcheck import parse_format_to_placeholder_matchers, verify
>>> [str(c) for c in parse_format_to_placeholder_matchers("%*d items")]
['unsigned integer', 'signed integer']
>>> verify("%s=%d", "const char *", "int").passed
True
"""

from __future__ import annotations

import logging
from typing import List

__version__ = "0.1.0"

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

from fmtcheck.errors import (  # noqa: E402
    ArityMismatchError,
    ErrorSeverity,
    FormatCheckError,
    TypeMismatchError,
)
from fmtcheck.grammar import Specifier  # noqa: E402
from fmtcheck.matcher import (  # noqa: E402
    ArgumentCategory,
    CTypeClass,
    classify_c_type,
    is_compatible,
)
from fmtcheck.parser import (  # noqa: E402
    Placeholder,
    PlaceholderParseResult,
    parse_first_placeholder,
    parse_format_to_placeholder_matchers,
    parse_format_to_placeholders,
)
from fmtcheck.verify import (  # noqa: E402
    FormatContract,
    VerificationReport,
    VerifyOptions,
    compile_format,
    verify,
    verify_format_with_arguments,
)

__all__: List[str] = [
    "ArgumentCategory",
    "ArityMismatchError",
    "CTypeClass",
    "ErrorSeverity",
    "FormatCheckError",
    "FormatContract",
    "Placeholder",
    "PlaceholderParseResult",
    "Specifier",
    "TypeMismatchError",
    "VerificationReport",
    "VerifyOptions",
    "classify_c_type",
    "compile_format",
    "is_compatible",
    "parse_first_placeholder",
    "parse_format_to_placeholder_matchers",
    "parse_format_to_placeholders",
    "verify",
    "verify_format_with_arguments",
]
