"""Session control for clip. Runs clip source, either a whole file or successive command-line inputs, against the
session's Scope.
"""

from clip.core.evaluator import evaluate
from clip.core.lexer import Lexer
from clip.core.parser import parse
from clip.core.scope import Scope
from clip.core.value import describe
from clip.lang.error import ClipError


class Session:
    """Governs a clip session, with control over the Scope that sources run against.

    A file session runs its file once in a fresh Scope. A command-line session keeps one Scope for every line it is
    given, so names assigned on one line can be used on the next.
    """
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, show_tokens=False, show_tree=False):
        self.error_handler = error_handler

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.show_tokens = show_tokens  # print tokens instead of evaluating
        self.show_tree = show_tree      # print statement trees instead of evaluating

        self.scope = Scope()
        self.source = None
        self.results = []  # lines of output produced by run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise ClipError(f"'{path}' could not be opened")

        elif not cmd_line:
            raise ClipError(f"'{Session.SH_FILE}' is a reserved filename")

    def run(self, source=None):
        """Runs source (by default, the session's file) and appends its output to self.results. Raises any errors
        that are encountered.
        """
        if source is None:
            source = self.source
        if source is None:
            raise ClipError("nothing to run")

        self.error_handler.register_source(self.path, source)  # in case an error is raised

        tokens = Lexer(source).lex()
        if self.show_tokens:
            self.results.extend(repr(token) for token in tokens)
        else:
            program = parse(tokens)
            if self.show_tree:
                self.results.extend(statement.display() for statement in program.statements)
            else:
                if not program.statements and not self.cmd_line:
                    self.error_handler.warn(f"'{self.path}' contains no statements")
                value = evaluate(program, self.scope, self.error_handler)
                self.results.append(describe(value))

        self.error_handler.remove_source(self.path)  # error was not raised

    def pop(self):
        """Returns the pending output as one string and clears it."""
        output = "\n".join(self.results)
        self.results = []
        return output
