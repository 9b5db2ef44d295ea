"""Command line front-end: expand `#[logtest]` functions in Rust files.

Usage:
    logtest-expand src/lib.rs tests/*.rs            # print expanded sources
    logtest-expand --in-place tests/*.rs            # rewrite files
    logtest-expand --check tests/*.rs               # fail if files would change
    logtest-expand --format json tests/*.rs         # machine-readable report

Exit codes:
    0  success
    1  diagnostics were reported, or --check found files to expand
    2  usage error or unreadable file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.logging import RichHandler

from logtest import __version__
from logtest.application.expander import expand_file
from logtest.application.reporters import ConsoleConfig, ConsoleReporter, JSONReporter
from logtest.domain.exceptions import SourceReadError
from logtest.domain.model.configuration import DEFAULT_ATTRIBUTE, ExpansionConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logtest.domain.model.diagnostic import ExpansionResult
    from logtest.domain.ports.reporter import ReporterProtocol

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for logtest-expand."""
    parser = argparse.ArgumentParser(
        prog="logtest-expand",
        description="Expand #[logtest] test functions in Rust source files.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Rust source files")
    parser.add_argument(
        "--attribute",
        default=DEFAULT_ATTRIBUTE,
        help=f"annotation name to expand (default: {DEFAULT_ATTRIBUTE})",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--in-place",
        action="store_true",
        help="rewrite files that contain annotated functions",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="write nothing; fail if any file would change",
    )
    parser.add_argument(
        "--format",
        choices=("console", "json"),
        default="console",
        help="report format (default: console)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="disable styled console output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress (-v) or debug details (-vv) to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbosity: int, stream: TextIO | None = None) -> None:
    """Route logtest logs through rich on stderr.

    Args:
        verbosity: 0 warnings only, 1 info, 2+ debug
        stream: Destination (default: sys.stderr)
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = RichHandler(
        console=Console(file=stream or sys.stderr),
        show_time=False,
        show_path=verbosity >= 2,
    )
    package_logger = logging.getLogger("logtest")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False


def main(
    argv: Sequence[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run logtest-expand.

    Expanded sources and the JSON report go to stdout; the console report
    and logs go to stderr.

    Args:
        argv: Arguments without program name (default: sys.argv[1:])
        stdout: Output stream (default: sys.stdout)
        stderr: Error stream (default: sys.stderr)

    Returns:
        Process exit code
    """
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, err)

    try:
        config = ExpansionConfig(attribute=args.attribute)
    except ValueError as e:
        logger.error("invalid --attribute: %s", e)
        return EXIT_USAGE

    results: list[ExpansionResult] = []
    for path in args.files:
        try:
            results.append(expand_file(path, config))
        except SourceReadError as e:
            logger.error("%s", e)
            return EXIT_USAGE

    if args.in_place:
        _write_back(results)
    elif not args.check and args.format == "console":
        for result in results:
            out.write(result.expanded)

    reporter: ReporterProtocol
    if args.format == "json":
        reporter = JSONReporter()
    else:
        color = not args.no_color and err.isatty()
        reporter = ConsoleReporter(ConsoleConfig(color=color, show_items=args.verbose > 0))
    report = reporter.report(results)
    if args.format == "json":
        out.write(report)
    else:
        err.write(report)

    if any(not r.ok for r in results):
        return EXIT_FAILED
    if args.check and any(r.changed for r in results):
        for result in results:
            if result.changed:
                logger.warning("%s would be rewritten", result.path)
        return EXIT_FAILED
    return EXIT_OK


def _write_back(results: Sequence[ExpansionResult]) -> None:
    for result in results:
        if not result.changed:
            continue
        result.path.write_text(result.expanded, encoding="utf-8")
        logger.info("rewrote %s (%d function(s))", result.path, len(result.items))
