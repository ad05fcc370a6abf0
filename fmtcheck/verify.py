# fmtcheck/verify.py
"""
Verification of a call site against its format string.

Two independent checks are run against the ExpectationSequence:

* arity - the number of supplied arguments must equal the number of
  categories the format demands;
* types - each supplied C type must be compatible with the category at
  the same position (see :mod:`fmtcheck.matcher`).  Types that cannot be
  classified are reported as warnings and do not fail verification.

Format literals are usually constant, so :func:`compile_format` memoises
one :class:`FormatContract` per literal and every call site sharing it
reuses the parsed expectations.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from fmtcheck.errors import (
    ARITY_MISMATCH,
    TYPE_MISMATCH,
    UNKNOWN_TYPE,
    ArityMismatchError,
    ErrorCode,
    ErrorSeverity,
    TypeMismatchError,
)
from fmtcheck.matcher import ArgumentCategory, CTypeClass, classify_c_type, is_compatible
from fmtcheck.parser import (
    ExpectationSequence,
    Placeholder,
    parse_format_to_placeholder_matchers,
    parse_format_to_placeholders,
)

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifyOptions:
    """Knobs for :func:`verify`.

    check_types:
        Run the pairwise type check in addition to the arity check.
    strict:
        Require integer signedness to match ``%d``/``%u`` style specifiers.
    """

    check_types: bool = True
    strict: bool = False


DEFAULT_OPTIONS = VerifyOptions()


@dataclass(frozen=True)
class VerificationIssue:
    code: ErrorCode
    severity: ErrorSeverity
    message: str
    position: Optional[int] = None            # zero-based argument index
    placeholder: Optional[Placeholder] = None
    expected: Optional[ArgumentCategory] = None
    actual_type: Optional[str] = None


@dataclass
class VerificationReport:
    """Outcome of verifying one call site."""

    format_text: str
    expected: ExpectationSequence
    supplied: Tuple[str, ...]
    issues: List[VerificationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(issue.severity.is_error() for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity.is_error())

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is ErrorSeverity.WARNING)

    def raise_for_issues(self) -> None:
        """Raise the exception matching the first error, if any."""
        for issue in self.issues:
            if not issue.severity.is_error():
                continue
            if issue.code == ARITY_MISMATCH:
                raise ArityMismatchError(
                    self.format_text, len(self.expected), len(self.supplied), report=self
                )
            if issue.code == TYPE_MISMATCH:
                raise TypeMismatchError(
                    self.format_text,
                    issue.position,
                    issue.expected,
                    issue.actual_type,
                    report=self,
                )


def _argument_owners(placeholders: Sequence[Placeholder]) -> Tuple[Placeholder, ...]:
    """Map every argument slot to the placeholder that consumes it."""
    owners: List[Placeholder] = []
    for placeholder in placeholders:
        owners.extend([placeholder] * len(placeholder.categories))
    return tuple(owners)


def _check_arity(report: VerificationReport) -> None:
    expected, actual = len(report.expected), len(report.supplied)
    if expected == actual:
        return
    report.issues.append(
        VerificationIssue(
            code=ARITY_MISMATCH,
            severity=ARITY_MISMATCH.default_severity,
            message=(
                f"format {report.format_text!r} expects {expected} argument(s) "
                f"but {actual} supplied"
            ),
        )
    )


def _check_types(report: VerificationReport, strict: bool) -> None:
    owners = _argument_owners(parse_format_to_placeholders(report.format_text))
    for position, (category, actual_type) in enumerate(zip(report.expected, report.supplied)):
        placeholder = owners[position]
        if classify_c_type(actual_type) is CTypeClass.UNKNOWN:
            if category is ArgumentCategory.UNSPECIFIED:
                continue
            report.issues.append(
                VerificationIssue(
                    code=UNKNOWN_TYPE,
                    severity=UNKNOWN_TYPE.default_severity,
                    message=(
                        f"unable to prove that argument #{position + 1} "
                        f"({actual_type!r}) matches {placeholder}"
                    ),
                    position=position,
                    placeholder=placeholder,
                    expected=category,
                    actual_type=actual_type,
                )
            )
            continue
        if is_compatible(category, actual_type, strict=strict):
            continue
        report.issues.append(
            VerificationIssue(
                code=TYPE_MISMATCH,
                severity=TYPE_MISMATCH.default_severity,
                message=(
                    f"{placeholder} expects {category} for argument "
                    f"#{position + 1}, but it has type {actual_type!r}"
                ),
                position=position,
                placeholder=placeholder,
                expected=category,
                actual_type=actual_type,
            )
        )


def verify(
    format_text: str,
    *argument_types: str,
    options: Optional[VerifyOptions] = None,
) -> VerificationReport:
    """Verify *argument_types* (C type spellings) against *format_text*."""
    options = options or DEFAULT_OPTIONS
    report = VerificationReport(
        format_text=format_text,
        expected=parse_format_to_placeholder_matchers(format_text),
        supplied=tuple(argument_types),
    )
    _check_arity(report)
    if options.check_types:
        _check_types(report, options.strict)
    _log.debug(
        "verified %r against %d argument(s): %d error(s), %d warning(s)",
        format_text,
        len(report.supplied),
        report.error_count,
        report.warning_count,
    )
    return report


def verify_format_with_arguments(
    format_text: str,
    *argument_types: str,
    options: Optional[VerifyOptions] = None,
) -> None:
    """Raise :class:`~fmtcheck.errors.FormatCheckError` unless the call site is valid."""
    verify(format_text, *argument_types, options=options).raise_for_issues()


@dataclass(frozen=True)
class FormatContract:
    """The parsed expectations of one format literal."""

    format_text: str
    placeholders: Tuple[Placeholder, ...]
    expected: ExpectationSequence

    @property
    def arity(self) -> int:
        return len(self.expected)

    def verify(
        self, *argument_types: str, options: Optional[VerifyOptions] = None
    ) -> VerificationReport:
        return verify(self.format_text, *argument_types, options=options)

    def check(self, *argument_types: str, options: Optional[VerifyOptions] = None) -> None:
        self.verify(*argument_types, options=options).raise_for_issues()


@functools.lru_cache(maxsize=1024)
def compile_format(format_text: str) -> FormatContract:
    return FormatContract(
        format_text=format_text,
        placeholders=parse_format_to_placeholders(format_text),
        expected=parse_format_to_placeholder_matchers(format_text),
    )
