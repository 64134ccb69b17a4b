"""Runs .mk files or the command-line mode of the monkey interpreter, inside the error handling context manager.
Called from the monkey console script.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell

RECURSION_LIMIT = 100000  # each Monkey call takes about a dozen Python frames


def build_parser():
    parser = argparse.ArgumentParser(prog="monkey", description="Tree-walking interpreter for the Monkey language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-p", "--parse", action="store_true",
                        help="print the canonical, fully parenthesized rendering of file instead of running it")
    return parser


def main(argv=None):
    """Runs monkey interpreter. Called from monkey executable script."""
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.file is None:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()

        elif args.parse:
            sess = Session(error_handler, args.file, cmd_line=False)
            for program in sess.to_exec.values():
                print(program)

        else:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            for result in sess.results:
                print(result.inspect())


if __name__ == "__main__":
    main()
