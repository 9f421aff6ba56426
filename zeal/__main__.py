"""Command line driver: `python -m zeal [FILE]`.

With a file, runs it (or dumps its tokens / AST). Without one, starts an
interactive session; a line ending in ':' or '->' starts a multi-line entry
that a blank line finishes.
"""

from __future__ import annotations

import argparse
import logging
import sys

from zeal import config
from zeal.builtin.env_builtin import format_value
from zeal.debug_utils.pprint import DEFAULT_OPTIONS, format_tokens, pprint_program
from zeal.errors import ZealError
from zeal.interpreter import Interpreter
from zeal.types.unit import UnitType

PROMPT = "zeal> "
CONTINUATION_PROMPT = "....> "


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zeal", description="Run zeal programs")
    parser.add_argument("file", nargs="?", help="source file to run; omit for an interactive session")
    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("--tokens", action="store_true", help="print the token stream instead of running")
    dump.add_argument("--ast", action="store_true", help="print the parsed statements instead of running")
    parser.add_argument("--no-color", action="store_true", help="disable ANSI colors in --ast output")
    parser.add_argument("--log-level", default=config.get_log_level(), help="logging level (default: %(default)s)")
    return parser


def run_file(interp: Interpreter, args: argparse.Namespace) -> int:
    try:
        with open(args.file, encoding="utf-8") as f:
            source = f.read()
        if args.tokens:
            print(format_tokens(interp.scan(source)))
        elif args.ast:
            options = {**DEFAULT_OPTIONS, "color": not args.no_color and sys.stdout.isatty()}
            print(pprint_program(interp.parse(source), options))
        else:
            interp.eval(source)
    except (OSError, ZealError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def read_entry() -> str | None:
    """Read one REPL entry, continuing over lines that open a block."""
    try:
        line = input(PROMPT)
    except EOFError:
        return None
    lines = [line]
    if line.rstrip().endswith((":", "->")):
        while True:
            try:
                more = input(CONTINUATION_PROMPT)
            except EOFError:
                break
            if not more.strip():
                break
            lines.append(more)
    return "\n".join(lines)


def repl(interp: Interpreter) -> int:
    while (entry := read_entry()) is not None:
        if not entry.strip():
            continue
        try:
            values = interp.eval(entry)
        except ZealError as e:
            print(f"error: {e}", file=sys.stderr)
            continue
        if values and not isinstance(values[-1], UnitType):
            print(f"=> {format_value(values[-1])}")
    print()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    interp = Interpreter()
    if args.file:
        return run_file(interp, args)
    return repl(interp)


if __name__ == "__main__":
    sys.exit(main())
