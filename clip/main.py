"""Runs a .clip file, or starts command-line mode when no file is given. Also uses the error handling context
manager. Called from the clip executable script.
"""

import argparse

from clip.lang.error import ErrorHandler
from clip.lang.session import Session
from clip.lang.shell import Shell


def main():
    """Runs clip interpreter. Called from clip executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="clip")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        show = parser.add_mutually_exclusive_group()
        show.add_argument("-t", "--token", action="store_true", help="print the tokens instead of evaluating")
        show.add_argument("-p", "--parse", action="store_true", help="print the statements instead of evaluating")
        parser.add_argument("-v", "--verbose", action="store_true", help="trace every evaluated statement")
        args = parser.parse_args()

        error_handler.verbose = args.verbose
        if args.verbose and (args.token or args.parse):
            error_handler.warn("--verbose has no effect with --token or --parse")

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, show_tokens=args.token, show_tree=args.parse)
            sess.run()

            for line in sess.results:
                print(line)

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, show_tokens=args.token,
                           show_tree=args.parse)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
