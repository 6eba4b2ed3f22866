"""
Command-line entry point

    bincalc [-v] [--max-depth N] [--debug] [-e EXPR] MODE

Without -e an interactive session runs until end of input or "exit".
Line editing and history come from the readline module when the platform
has one; history lives only as long as the process.
"""

import argparse
import logging
import sys
from typing import List, Optional

try:
    import readline  # noqa: F401  (line editing for input())
except ImportError:
    readline = None

from . import __version__
from .encoding import ENCODINGS, ENCODING_NAMES
from .evaluator import DEFAULT_MAX_DEPTH, EvaluatorConfig
from .repl import Session

MODES_HELP = "\n".join(
    ["mode: one of the following:"]
    + [f"  {enc.name:<4} {enc.description} encoding" for enc in ENCODINGS]
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bincalc",
        description="A binary calculator for unsigned, signed, and floating point encodings.",
        epilog=MODES_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("mode", choices=ENCODING_NAMES, metavar="mode",
                        help="encoding for every value in the session")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="be verbose, print each computation step")
    parser.add_argument("-e", "--expression",
                        help="evaluate one expression and exit")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help=f"maximum parenthesis/unary nesting (default: {DEFAULT_MAX_DEPTH})")
    parser.add_argument("--debug", action="store_true",
                        help="log evaluator internals to stderr")
    parser.add_argument("--version", action="version", version=f"bincalc {__version__}")
    return parser


def configure_logging(verbose: bool, debug: bool, stream=None):
    """Route step traces to stdout and, with --debug, everything else to stderr"""
    trace = logging.getLogger("bincalc.trace")
    trace.handlers.clear()
    trace.propagate = False
    if verbose:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        trace.addHandler(handler)
        trace.setLevel(logging.INFO)

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(levelname)s] %(name)s: %(message)s",
            stream=sys.stderr,
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_depth < 1:
        parser.error("--max-depth must be positive")

    configure_logging(args.verbose, args.debug)
    config = EvaluatorConfig(args.mode, verbose=args.verbose, max_depth=args.max_depth)
    session = Session(config)

    if args.expression is not None:
        return 0 if session.handle_input(args.expression) else 1
    return session.run()


if __name__ == "__main__":
    sys.exit(main())
