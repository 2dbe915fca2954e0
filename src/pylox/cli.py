#!/usr/bin/env python3
"""
pylox CLI

A command-line interface for running and validating pylox programs stored as
JSON AST documents (the output of an external parser).

Usage:
    python -m pylox.cli <path> [options]
    pylox <path> [options]

Examples:
    pylox examples/closures/counter.lox.json
    pylox examples/classes/inheritance.lox.json --trace
    pylox examples/classes/inheritance.lox.json --validate
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO

from pylox.errors import LoxRuntimeError, ValidationResult, format_runtime_error
from pylox.evaluator import EvalOptions, Evaluator
from pylox.validator import validate_program

logger = logging.getLogger(__name__)


#==============================================================================
# Exit Codes (sysexits.h)
#==============================================================================

EXIT_OK = 0
EXIT_DATAERR = 65
EXIT_NOINPUT = 66
EXIT_SOFTWARE = 70


#==============================================================================
# CLI Output Formatting
#==============================================================================

class Colors:
    """ANSI color codes for terminal output"""
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"


def print_msg(msg: str, color: str = Colors.RESET, stream: Optional[TextIO] = None) -> None:
    """Print a diagnostic message, colored only when writing to a terminal"""
    stream = stream if stream is not None else sys.stderr
    if stream.isatty():
        msg = f"{color}{msg}{Colors.RESET}"
    print(msg, file=stream)


#==============================================================================
# Document Loading
#==============================================================================

def load_document(path: str) -> Optional[Any]:
    """
    Load a JSON AST document from a file path.

    If the path does not exist, ``<path>.lox.json`` is tried as well.

    Args:
        path: Path to the document file

    Returns:
        The parsed JSON document, or None if it cannot be read or parsed
    """
    path_obj = Path(path)
    if not path_obj.exists():
        candidate = Path(f"{path}.lox.json")
        if not candidate.exists():
            return None
        path_obj = candidate

    try:
        with open(path_obj, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug(f"could not load {path_obj}: {e}")
        return None


def report_validation(result: ValidationResult) -> None:
    print_msg("Validation failed:", Colors.RED)
    for error in result.errors:
        print_msg(f"  - {error.path}: {error.message}", Colors.RED)


#==============================================================================
# Main CLI
#==============================================================================

def run_document(
    path: str,
    trace: bool = False,
    validate_only: bool = False,
    verbose: bool = False,
) -> int:
    """
    Run a pylox document.

    Args:
        path: Path to the document
        trace: Log every executed statement and call
        validate_only: Only validate, don't evaluate
        verbose: Show progress messages

    Returns:
        Process exit code
    """
    doc = load_document(path)
    if doc is None:
        print_msg(f"Error: Could not load document: {path}", Colors.RED)
        return EXIT_NOINPUT

    result = validate_program(doc)
    if not result.valid:
        report_validation(result)
        return EXIT_DATAERR

    if verbose:
        print_msg(f"Validation passed ({len(result.value)} statements)", Colors.GREEN)

    if validate_only:
        return EXIT_OK

    evaluator = Evaluator(options=EvalOptions(trace=trace))
    try:
        evaluator.interpret(result.value)
    except LoxRuntimeError as error:
        print_msg(format_runtime_error(error), Colors.RED)
        return EXIT_SOFTWARE

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog="pylox",
        description="pylox - Run and validate JSON AST documents",
    )

    parser.add_argument(
        "path",
        help="Path to the JSON AST document",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed output",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Only validate, don't evaluate",
    )

    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace logging for debugging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.trace else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    return run_document(
        args.path,
        trace=args.trace,
        validate_only=args.validate,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    sys.exit(main())
