# fmtcheck/__main__.py
"""
Command-line front end.

Usage::

    fmtcheck [options] FORMAT [TYPE ...]
    python -m fmtcheck [options] FORMAT [TYPE ...]

Each ``TYPE`` is the C type spelling of one call-site argument, in order::

    fmtcheck "%-8s %5.2f%%" "const char *" double

Exit status: 0 when verification passes, 1 when it fails, 2 on usage or
infrastructure errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from fmtcheck import __version__
from fmtcheck.diagnostics import emit_report, format_expectations
from fmtcheck.verify import VerifyOptions, compile_format

_log = logging.getLogger("fmtcheck")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_VIOLATION: int = 1
EXIT_INFRA: int = 2


def _configure_logging(verbosity: int) -> None:
    """Set up the ``fmtcheck`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("fmtcheck")
    root.setLevel(level)
    for stale in list(root.handlers):
        root.removeHandler(stale)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fmtcheck",
        description="Validate a printf-style format string against argument types.",
        epilog=(
            "Codes:\n"
            "  FMT-1001  argument count differs from placeholder count\n"
            "  FMT-2001  argument type incompatible with its placeholder\n"
            "  FMT-2002  argument type could not be classified (warning)\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("format", metavar="FORMAT", help="the format string literal")
    p.add_argument("types", nargs="*", metavar="TYPE",
                   help="C type of each argument, in call order")
    out = p.add_mutually_exclusive_group()
    out.add_argument("--json", dest="output", action="store_const", const="json",
                     help="emit a JSON report")
    out.add_argument("--gcc", dest="output", action="store_const", const="gcc",
                     help="emit gcc-style diagnostics")
    p.set_defaults(output="summary")
    p.add_argument("--show-expected", action="store_true",
                   help="print the expected argument categories and exit")
    p.add_argument("--no-type-check", dest="check_types", action="store_false",
                   help="only compare the number of arguments")
    p.add_argument("--strict", action="store_true",
                   help="require integer signedness to match the specifier")
    p.add_argument("--no-color", dest="color", action="store_false",
                   help="disable coloured output")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _run(args: argparse.Namespace) -> int:
    contract = compile_format(args.format)
    _log.info("format %r expects %d argument(s)", args.format, contract.arity)

    if args.show_expected:
        sys.stdout.write(format_expectations(contract.expected) + "\n")
        return EXIT_OK

    options = VerifyOptions(check_types=args.check_types, strict=args.strict)
    report = contract.verify(*args.types, options=options)
    emit_report(
        report,
        sys.stdout,
        fmt=args.output,
        color=args.color and args.output == "summary",
        verbose=args.verbose > 0,
    )
    return EXIT_OK if report.passed else EXIT_VIOLATION


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return EXIT_OK if exc.code in (0, None) else EXIT_INFRA

    _configure_logging(args.verbose)

    try:
        return _run(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


if __name__ == "__main__":
    sys.exit(main())
