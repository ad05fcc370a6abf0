# fmtcheck/errors.py
"""
Error codes and exceptions raised by format verification.

Error Codes:
────────────
Each error has a code following the pattern FMT-XXXX:
  - 1000-1999: arity errors (argument count vs. placeholder count)
  - 2000-2999: argument type errors

Malformed placeholders never produce an error: the scanner treats a stray
``%`` as literal text, the same way printf-like systems do.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from fmtcheck.matcher import ArgumentCategory
    from fmtcheck.verify import VerificationReport


@unique
class ErrorSeverity(Enum):
    """Severity of a verification issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def is_error(self) -> bool:
        return self is ErrorSeverity.ERROR


class ErrorCode:
    """A structured error code such as ``FMT-1001``."""

    __slots__ = ("prefix", "number", "name", "default_severity")

    def __init__(
        self,
        prefix: str,
        number: int,
        name: str,
        default_severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> None:
        self.prefix = prefix
        self.number = number
        self.name = name
        self.default_severity = default_severity

    @property
    def code(self) -> str:
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.name!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ErrorCode):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)


ARITY_MISMATCH = ErrorCode("FMT", 1001, "argumentCount")
TYPE_MISMATCH = ErrorCode("FMT", 2001, "argumentType")
UNKNOWN_TYPE = ErrorCode("FMT", 2002, "unknownArgumentType", ErrorSeverity.WARNING)


class FormatCheckError(Exception):
    """Base class for verification failures."""

    code: Optional[ErrorCode] = None

    def __init__(
        self, message: str, *, report: Optional[VerificationReport] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.report = report

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"[{self.code}] {self.message}"


class ArityMismatchError(FormatCheckError):
    """The number of arguments differs from the number of placeholders."""

    code = ARITY_MISMATCH

    def __init__(
        self,
        format_text: str,
        expected: int,
        actual: int,
        *,
        report: Optional[VerificationReport] = None,
    ) -> None:
        super().__init__(
            f"format {format_text!r} expects {expected} argument(s) "
            f"but {actual} supplied",
            report=report,
        )
        self.format_text = format_text
        self.expected = expected
        self.actual = actual


class TypeMismatchError(FormatCheckError):
    """An argument's type cannot satisfy its placeholder's category."""

    code = TYPE_MISMATCH

    def __init__(
        self,
        format_text: str,
        position: int,
        category: ArgumentCategory,
        actual_type: str,
        *,
        report: Optional[VerificationReport] = None,
    ) -> None:
        super().__init__(
            f"format {format_text!r}: argument #{position + 1} should be "
            f"{category} but has type {actual_type!r}",
            report=report,
        )
        self.format_text = format_text
        self.position = position
        self.category = category
        self.actual_type = actual_type
