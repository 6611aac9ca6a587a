"""
Monkey command line and interactive REPL.

The REPL is a thin driver around Interpreter: it reads a line, evaluates it
in a persistent session and prints the display text of each statement's
value. Parse and runtime errors are reported and the loop carries on.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence, TextIO

from monkey import __version__
from monkey.config import get_log_level, get_prompt
from monkey.errors import MonkeyError
from monkey.interpreter import Interpreter
from monkey.reader.lexer import tokenize
from monkey.reader.parser import parse

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit")


def create_arg_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog="monkey",
        description="Monkey programming language interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                         # Interactive mode
  %(prog)s script.monkey           # Run a script and print its final value
  %(prog)s -e 'let a = 5; a * 2'   # Evaluate a string
  %(prog)s -i script.monkey        # Run a script, then stay interactive
  %(prog)s --ast script.monkey     # Show the parenthesized AST
  %(prog)s --tokens script.monkey  # Show the token stream
        """,
    )
    parser.add_argument("script", nargs="?", help="Monkey script file to execute")
    parser.add_argument("-e", "--eval", dest="code", help="Evaluate CODE instead of a file")
    parser.add_argument(
        "-i", "--interactive", action="store_true",
        help="Start interactive mode after running the script",
    )
    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("--tokens", action="store_true", help="Print tokens instead of evaluating")
    dump.add_argument("--ast", action="store_true", help="Print the parsed AST instead of evaluating")
    parser.add_argument(
        "--max-depth", type=int, default=None,
        help="Maximum function call depth (default: $MONKEY_MAX_CALL_DEPTH or 100)",
    )
    parser.add_argument("--version", action="version", version=f"monkey {__version__}")
    return parser


def _enable_history() -> None:
    try:
        import readline  # noqa: F401  (importing enables line editing for input())
    except ImportError:
        logger.debug("readline not available; line editing disabled")


def run_repl(
    interp: Interpreter,
    read_line: Optional[Callable[[str], str]] = None,
    out: TextIO = sys.stdout,
    prompt: Optional[str] = None,
) -> None:
    """Read-eval-print loop. Ends on EOF or an exit command."""
    read_line = read_line or input
    prompt = get_prompt() if prompt is None else prompt
    while True:
        try:
            line = read_line(prompt)
        except EOFError:
            print(file=out)
            break
        except KeyboardInterrupt:
            print(file=out)
            continue

        code = line.strip()
        if not code:
            continue
        if code in EXIT_COMMANDS:
            break

        try:
            for text in interp.eval_lines(code):
                print(text, file=out)
        except MonkeyError as e:
            logger.debug("evaluation failed: %r", e)
            print(f"error: {e}", file=out)


def dump_tokens(source: str, out: TextIO) -> None:
    for token in tokenize(source, include_eof=True):
        print(f"{token.line + 1}:{token.column + 1}\t{token.kind.name}\t{token.literal}", file=out)


def dump_ast(source: str, out: TextIO) -> None:
    print(parse(source), file=out)


def _read_source(args: argparse.Namespace) -> Optional[str]:
    if args.code is not None:
        return args.code
    if args.script is None:
        return None
    with open(args.script, encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[Sequence[str]] = None, out: TextIO = sys.stdout, err: TextIO = sys.stderr) -> int:
    args = create_arg_parser().parse_args(argv)
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    try:
        source = _read_source(args)
    except OSError as e:
        print(f"error: cannot read '{args.script}': {e.strerror or e}", file=err)
        return 1

    interp = Interpreter(max_depth=args.max_depth)

    if source is not None:
        try:
            if args.tokens:
                dump_tokens(source, out)
            elif args.ast:
                dump_ast(source, out)
            else:
                print(interp.eval(source), file=out)
        except MonkeyError as e:
            print(f"error: {e}", file=err)
            if not args.interactive:
                return 1

        if not args.interactive:
            return 0

    _enable_history()
    run_repl(interp, out=out)
    return 0
