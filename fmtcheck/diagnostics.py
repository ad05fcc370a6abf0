# fmtcheck/diagnostics.py
"""
Rendering of verification issues.

Three output forms are supported:

* ``summary`` - coloured, human readable, with the offending placeholder
  underlined in the format text;
* ``gcc``     - ``<file>:<line>:<col>: <severity>: <message> [<code>]``;
* ``json``    - cppcheck-style objects (``errorId``, ``severity``,
  ``message``, ``location``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, TextIO

from termcolor import colored

from fmtcheck.errors import ErrorSeverity
from fmtcheck.matcher import ArgumentCategory
from fmtcheck.verify import VerificationIssue, VerificationReport

FORMAT_FILE = "<format>"

_SEVERITY_COLORS: Dict[ErrorSeverity, str] = {
    ErrorSeverity.ERROR: "red",
    ErrorSeverity.WARNING: "yellow",
    ErrorSeverity.INFO: "cyan",
}


@dataclass(frozen=True)
class Diagnostic:
    code: str
    error_id: str
    severity: ErrorSeverity
    message: str
    format_text: str
    column: int = 0               # 1-based; 0 when no placeholder applies
    length: int = 0

    @classmethod
    def from_issue(cls, report: VerificationReport, issue: VerificationIssue) -> Diagnostic:
        placeholder = issue.placeholder
        return cls(
            code=issue.code.code,
            error_id=f"formatString.{issue.code.name}",
            severity=issue.severity,
            message=issue.message,
            format_text=report.format_text,
            column=placeholder.offset + 1 if placeholder is not None else 0,
            length=len(placeholder.text) if placeholder is not None else 0,
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "errorId": self.error_id,
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "location": [{"file": FORMAT_FILE, "linenr": 1, "column": self.column}],
        }

    def to_gcc(self, file: str = FORMAT_FILE) -> str:
        return f"{file}:1:{self.column}: {self.severity.value}: {self.message} [{self.code}]"

    def to_summary(self, color: bool = True) -> str:
        severity = self.severity.value
        code = f"[{self.code}]"
        if color:
            severity = colored(severity, _SEVERITY_COLORS[self.severity], attrs=["bold"])
            code = colored(code, "magenta")
        lines = [f"{severity}: {self.message} {code}"]
        if self.length:
            underline = " " * (self.column - 1) + "^" + "~" * (self.length - 1)
            if color:
                underline = colored(underline, "green")
            lines.append(f"    {self.format_text}")
            lines.append(f"    {underline}")
        return "\n".join(lines)


def diagnostics_for(report: VerificationReport) -> List[Diagnostic]:
    return [Diagnostic.from_issue(report, issue) for issue in report.issues]


def emit_report(
    report: VerificationReport,
    stream: TextIO,
    fmt: str = "summary",
    color: bool = True,
    verbose: bool = False,
) -> int:
    """Write *report* to *stream* in the chosen format.

    Returns the number of error-severity diagnostics.
    """
    diagnostics = diagnostics_for(report)

    if fmt == "json":
        payload: Dict[str, Any] = {
            "format": report.format_text,
            "expected": [str(category) for category in report.expected],
            "supplied": list(report.supplied),
            "passed": report.passed,
            "diagnostics": [diag.to_json() for diag in diagnostics],
        }
        stream.write(json.dumps(payload, indent=2) + "\n")
        return report.error_count

    for diag in diagnostics:
        if fmt == "gcc":
            stream.write(diag.to_gcc() + "\n")
        else:
            stream.write(diag.to_summary(color=color) + "\n")

    if fmt == "summary":
        if verbose:
            stream.write(f"expected: {format_expectations(report.expected)}\n")
        status = "passed" if report.passed else "failed"
        if color:
            status = colored(status, "green" if report.passed else "red", attrs=["bold"])
        stream.write(
            f"--- {status}: {report.error_count} error(s), "
            f"{report.warning_count} warning(s) ---\n"
        )
    return report.error_count


def format_expectations(expected: Sequence[ArgumentCategory]) -> str:
    """Render an ExpectationSequence as ``[a, b, c]``."""
    return "[" + ", ".join(str(category) for category in expected) + "]"
