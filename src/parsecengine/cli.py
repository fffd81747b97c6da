"""Command-line front end for the demo grammars.

Usage:
    parsecengine calc "(0 + 3) * x + 4*y - 1" --var x=3 --var y=5
    parsecengine json '{"x": 3, "y": null}' --indent 2
    parsecengine json --file document.json
    parsecengine calc            # read one expression per line, blank line exits

Exit Codes:
    0   Every input parsed (and, for calc, evaluated)
    1   At least one input failed
    2   Usage or file read error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TextIO

from parsecengine import __version__
from parsecengine.config import ParseConfig
from parsecengine.diagnostics import EvaluationError
from parsecengine.enums import OutputFormat
from parsecengine.grammars.calculator import evaluate, parse_expression, render
from parsecengine.grammars.json import parse_json
from parsecengine.grammars.json import render as render_json

__all__ = ["main"]


def _variable(text: str) -> tuple[str, int]:
    """argparse type for --var NAME=VALUE."""
    name, sep, value = text.partition("=")
    if not sep or not name:
        msg = f"expected NAME=VALUE, got {text!r}"
        raise argparse.ArgumentTypeError(msg)
    try:
        return name, int(value)
    except ValueError:
        msg = f"value of {name!r} must be an integer, got {value!r}"
        raise argparse.ArgumentTypeError(msg) from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parsecengine",
        description="Parse arithmetic expressions or JSON with parser combinators.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evaluate an expression with variables:
  parsecengine calc "(0 + 3) * x + 4*y - 1" --var x=3 --var y=5

  # Pretty-print JSON:
  parsecengine json '{"x": 3, "y": null}' --indent 2

  # Interactive: one input per line, blank line exits
  parsecengine calc
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--format",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.RUST,
        help="Diagnostic style for inputs that fail to parse (default: rust)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log parser activity at DEBUG level",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    calc = commands.add_parser("calc", help="Parse and evaluate arithmetic expressions")
    calc.add_argument("expression", nargs="?", help="Expression (default: read stdin lines)")
    calc.add_argument(
        "--var",
        type=_variable,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Integer value for a variable (repeatable)",
    )

    json_cmd = commands.add_parser("json", help="Parse and re-render JSON")
    source = json_cmd.add_mutually_exclusive_group()
    source.add_argument("document", nargs="?", help="JSON text (default: read stdin lines)")
    source.add_argument("--file", type=Path, help="Read one JSON document from a file")
    json_cmd.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print with this many spaces per level (default: compact)",
    )
    return parser


def _inputs(single: str | None, stdin: TextIO) -> Iterator[str]:
    """The single argument, or stdin lines up to the first blank line."""
    if single is not None:
        yield single
        return
    for line in stdin:
        text = line.rstrip("\r\n")
        if not text.strip():
            return
        yield text


def _run_calc(args: argparse.Namespace, config: ParseConfig, stdin: TextIO) -> int:
    variables = dict(args.var)
    status = 0
    for text in _inputs(args.expression, stdin):
        outcome = parse_expression(text, config)
        if not outcome.ok or outcome.value is None:
            print(f"Failed to parse: {text}", file=sys.stderr)
            print(outcome.message, file=sys.stderr)
            status = 1
            continue
        print(f"Parsed: {text}")
        print(f"  as  : {render(outcome.value)}")
        try:
            print(f"  eval: {evaluate(outcome.value, variables)}")
        except EvaluationError as e:
            print(f"  eval: error: {e}", file=sys.stderr)
            status = 1
    return status


def _run_json(args: argparse.Namespace, config: ParseConfig, stdin: TextIO) -> int:
    if args.file is not None:
        try:
            documents: Iterator[str] = iter([args.file.read_text(encoding="utf-8")])
        except OSError as e:
            print(f"[ERROR] Cannot read file: {e}", file=sys.stderr)
            return 2
    else:
        documents = _inputs(args.document, stdin)

    status = 0
    for text in documents:
        outcome = parse_json(text, config)
        if not outcome.ok or outcome.value is None:
            print(outcome.message, file=sys.stderr)
            status = 1
            continue
        print(render_json(outcome.value, indent=args.indent))
    return status


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    """Main entry point.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        stdin: Line source when no input argument is given (default: sys.stdin)

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = ParseConfig(output_format=args.format)
    stdin = stdin if stdin is not None else sys.stdin
    match args.command:
        case "calc":
            return _run_calc(args, config, stdin)
        case "json":
            return _run_json(args, config, stdin)
    return 2
