"""Runs gama programs from a file or from piped stdin, or starts command-line mode when stdin is a terminal. Also uses
the error handling context manager. Called from the gama executable script.
"""

import argparse
import sys

from gama.lang.error import ErrorHandler
from gama.lang.limits import Limits
from gama.lang.session import Session
from gama.lang.shell import Shell


def positive(value):
    """argparse type for the capacity limits."""
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'")
    return number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="gama", description="Interpreter for the gama teaching language.")
    parser.add_argument("file", nargs="?",
                        help="file to interpret and run ('-' reads stdin; if empty, goes to command-line mode when "
                             "stdin is a terminal)")
    parser.add_argument("--tokens", metavar="DUMP", help="also write the classified token list to DUMP")
    parser.add_argument("--max-tokens", type=positive, default=Limits.max_tokens, help="token limit")
    parser.add_argument("--max-vars", type=positive, default=Limits.max_vars, help="variable limit")
    parser.add_argument("--max-lexeme", type=positive, default=Limits.max_lexeme, help="lexeme length limit")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs gama interpreter. Called from the gama executable script. Exits with status 1 on any gama error."""
    with ErrorHandler() as error_handler:
        args = parse_args(argv)
        limits = Limits(args.max_tokens, args.max_lexeme, args.max_vars)

        if args.file is None and sys.stdin.isatty():
            Shell(Session(error_handler, Session.SH_FILE, limits=limits, cmd_line=True)).cmdloop()
            return 0

        sess = Session(error_handler, args.file or Session.STDIN, limits=limits)
        try:
            sess.run()
        finally:
            if args.tokens:
                sess.dump_tokens(args.tokens)

    return 0


if __name__ == "__main__":
    sys.exit(main())
