"""
numlang command line driver.

Reads a source file (or falls back to a built-in sample program), runs
the front end and prints the token list, statement trace, diagnostics
and symbol table.

Author: xwest
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .frontend import FrontendOptions, FrontendResult, analyze_source


SAMPLE_PROGRAM = """\
/* Sample program */
long _x;
long _y;
double _avg;

read(_x);
read(_y);

if (_x > _y) then
    _avg = (_x + _y) / 2;
else
    _avg = (_y - _x) / 2;

write(_avg);

// End of program
"""


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="{message}", style="{")
    if verbose:
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.INFO)


def build_argument_parser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        prog="numlang",
        description="numlang front end: tokenize, parse and check a program"
    )
    argparser.add_argument(
        "file", nargs="?", default=None,
        help="source file (the built-in sample program is used when omitted)"
    )
    argparser.add_argument(
        "-v", "--verbose", action="store_true",
        help="log scope and pipeline activity"
    )
    argparser.add_argument(
        "--tokens", action="store_true",
        help="print the token list"
    )
    argparser.add_argument(
        "--symbols", action="store_true",
        help="print the final symbol table"
    )
    argparser.add_argument(
        "-W", dest="warnings", choices=("default", "error", "ignore"), default="default",
        help="treat redeclaration warnings as errors, or drop them"
    )
    argparser.add_argument(
        "--stop-on-lex-errors", action="store_true",
        help="do not parse when the tokenizer reported errors"
    )
    return argparser


def render_result(result: FrontendResult, show_tokens: bool, show_symbols: bool,
                  out: TextIO, err: TextIO) -> None:
    if show_tokens:
        out.write("=== TOKENS ===\n")
        for token in result.tokens:
            out.write(f"{token}\n")
        out.write("\n")

    if result.diagnostics.has_diagnostics():
        err.write(f"Found {len(result.errors)} error(s), {len(result.warnings)} warning(s):\n")
        result.diagnostics.print_all(err)

    if result.parsed:
        out.write("=== PROGRAM STRUCTURE ===\n")
        for statement in result.statements:
            out.write(f"{statement}\n")

    if show_symbols:
        out.write("\n")
        out.write(result.symbol_table.format_table())
        out.write("\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argument_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.file is not None:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            sys.stderr.write(f"numlang: cannot read {args.file}: {e.strerror}\n")
            return 2
        filename = args.file
    else:
        source = SAMPLE_PROGRAM
        filename = "<sample>"

    options = FrontendOptions(
        filename=filename,
        warnings_as_errors=args.warnings == "error",
        report_redeclarations=args.warnings != "ignore",
        stop_after_lexical_errors=args.stop_on_lex_errors
    )
    result = analyze_source(source, options)
    render_result(result, args.tokens, args.symbols, sys.stdout, sys.stderr)

    return 1 if result.has_errors() else 0


if __name__ == '__main__':
    sys.exit(main())
