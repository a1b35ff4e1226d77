"""Handles interactive/command-line mode for the clip interpreter. Uses cmd as backend."""

import cmd

from clip.core.lexer import Lexer
from clip.core.tokens import TokenKind


class Shell(cmd.Cmd):
    """clip interpreter shell."""
    intro = "clip interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def is_open(source):
        """Whether source leaves a '{' block unclosed, in which case input continues on the next line."""
        depth = 0
        for token in Lexer(source).lex():
            if token.kind is TokenKind.BLOCK_START:
                depth += 1
            elif token.kind is TokenKind.BLOCK_END:
                depth -= 1
        return depth > 0

    def default(self, line):
        """Executes arbitrary clip input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line

            if Shell.is_open(line):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.run(line)
            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the clip interpreter!\n\n"
              "Everything is written in prefix notation. Try '+ 1 2 3' or '+ \"a\" \"b\"'. Assign \n"
              "names with '= x 5', and define functions with '= add { [a b] + a b }', then \n"
              "call them with 'add 2 3'. Conditionals look like 'if == x 5 { ... } else { ... }'.\n"
              "Every result is printed as '<value> : <type>'. Floats always show a decimal point,\n"
              "so '+ 1.5 2.5' prints '4.0 : float'.")

    def emptyline(self):
        """Do not repeat previous command on empty line, but keep an open block going."""
        if self._tmp_line:
            self._tmp_line += "\n"
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
