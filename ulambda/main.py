"""Runs ulambda files or the interactive shell. Also uses error handling context manager. Called from the ulambda
console script.
"""

import argparse

from ulambda.lang.error import ErrorHandler
from ulambda.lang.session import Session
from ulambda.lang.shell import Shell


def main(argv=None):
    """Runs ulambda interpreter. Called from ulambda console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="ulambda", description="untyped lambda calculus interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--trace", help="print every β and ζ step taken during evaluation", action="store_true")
        args = parser.parse_args(argv)

        error_handler.trace = args.trace

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
