"""Error handling for clip. Only ClipErrors should be encountered while running a program: if another type of error
makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class ClipError(Exception):
    """The one error kind used by lexing, parsing and evaluation. str(error) is the message.

    loc is the Location of the offending token, when the error can be pinned to one. internal marks errors that are
    not caused by the program being run.
    """

    def __init__(self, msg, loc=None, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.loc = loc
        self.internal = internal


class ErrorHandler:
    """Context manager that reports ClipErrors (and turns stray Python errors into internal ClipErrors)."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False, stream=None):
        self.fatal = fatal
        self.verbose = verbose
        self.stream = stream
        self.sources = {}  # dict of path: source text, used to show the offending line
        self.path = None   # path of the source currently being run

    def register_source(self, path, text):
        """Registers text as the source of path and makes path the current source. Call before running text."""
        self.sources[path] = text
        self.path = path

    def remove_source(self, path):
        """Forgets the source of path. Should be called once path has run without error."""
        self.sources.pop(path, None)
        if self.path == path:
            self.path = None

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def _header(self, loc=None):
        """Returns 'path:line:col: ' for the current source, or '' if nothing is registered."""
        if self.path is None:
            return ""
        if loc is None:
            return colored(f"{self.path}: ", attrs=["bold"])
        return colored(f"{self.path}:{loc.line_start}:{loc.col_start}: ", attrs=["bold"])

    def diagnose(self, error, warning=False):
        """Returns the source line containing error.loc, with the offending span underlined. None if unavailable."""
        text = self.sources.get(self.path)
        if error.loc is None or text is None:
            return None

        lines = text.splitlines()
        if not 0 < error.loc.line_start <= len(lines):
            return None

        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        line = lines[error.loc.line_start - 1]
        start = error.loc.col_start - 1
        if error.loc.line_stop == error.loc.line_start:
            end = max(error.loc.col_stop - 1, start + 1)
        else:
            end = len(line)

        diagnosis = "  " + line[:start] + colored(line[start:end], color, attrs=["bold"]) + line[end:] + "\n"
        diagnosis += "  " + " " * start + colored("^" + "~" * (end - start - 1), color, attrs=["bold"])
        return diagnosis

    def warn(self, msg, loc=None):
        """Prints a warning message."""
        warning = ClipError(msg, loc)
        self._print(self._header(loc) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg)

        diagnosis = self.diagnose(warning, warning=True)
        if diagnosis:
            self._print(diagnosis)

    def register_step(self, kind, text):
        """Reports one evaluation step. Only printed in verbose mode."""
        if self.verbose:
            self._print(colored(f"[{kind}] ", ErrorHandler.STEP, attrs=["bold"]) + text)

    def throw(self, error):
        """Reports error, a ClipError. Exits if fatal, otherwise forgets the current source."""
        error_msg = self._header(error.loc)
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        diagnosis = None if error.internal else self.diagnose(error)
        if diagnosis:
            self._print(diagnosis)

        if self.fatal:
            sys.exit(1)
        if self.path is not None:
            self.remove_source(self.path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(ClipError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(ClipError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, ClipError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(ClipError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
