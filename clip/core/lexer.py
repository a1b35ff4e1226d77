r"""Lexical analysis for clip: turns source text into a list of Tokens, always terminated by an EOF token.

The lexer never fails. Characters it does not understand become ILLEGAL tokens carrying a message, and it is up to the
parser to reject them.

```
<newline>    ::= "\n" | "\r\n"
<comment>    ::= "#" <char>* (<newline> | <eof>)          ; skipped, including its newline
<integer>    ::= <digit> (<digit> | "_")*                  ; "_" is a digit group separator
<float>      ::= <digit> (<digit> | "_")* "." (<digit> | "_")*
<string>     ::= '"' (<char> | '\"')* '"'                  ; backslashes are kept in the string
<ident>      ::= (<letter> | "_")+                         ; no digits in identifiers
<reserved>   ::= "if" | "elif" | "else" | "true" | "false"
<operator>   ::= "=" | "==" | "+" | "-" | "*" | "/" | "!" | "&&" | "||"
```
"""

import string

from clip.core.tokens import Location, Token, TokenKind, SINGLE_CHARACTER_TOKENS


DIGITS = string.digits
IDENT_CHARS = string.ascii_letters + "_"


class Lexer:
    """Single pass, one character of lookahead."""

    def __init__(self, text):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1

    @property
    def current_char(self):
        if self.position < len(self.text):
            return self.text[self.position]
        return None

    @property
    def next_char(self):
        if self.position + 1 < len(self.text):
            return self.text[self.position + 1]
        return None

    def location(self):
        return Location(self.line, self.column)

    def advance(self):
        """Consumes the current character, keeping track of lines and columns."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1

    def lex(self):
        """Returns every token in self.text. The last token is always EOF."""
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind is TokenKind.EOF:
                return tokens

    def next_token(self):
        """Scans and returns the next token, skipping blanks and comments."""
        while self.current_char is not None:
            char = self.current_char
            start = self.location()

            if char in " \t":
                self.advance()

            elif char == "\n" or (char == "\r" and self.next_char == "\n"):
                if char == "\r":
                    self.advance()
                self.advance()
                return Token(TokenKind.NEWLINE, None, start.stop(start.line_start, start.col_start + 1))

            elif char == "\r":
                self.advance()  # lone carriage return

            elif char == "#":
                while self.current_char is not None and self.current_char != "\n":
                    self.advance()
                if self.current_char == "\n":
                    self.advance()

            elif char == "=":
                self.advance()
                if self.current_char == "=":
                    self.advance()
                    return self._token(TokenKind.EQUAL, start)
                return self._token(TokenKind.ASSIGN, start)

            elif char in "&|":
                self.advance()
                if self.current_char == char:
                    self.advance()
                    return self._token(TokenKind.AND if char == "&" else TokenKind.OR, start)
                return self._token(TokenKind.ILLEGAL, start, f"unexpected: {char}")

            elif char in SINGLE_CHARACTER_TOKENS:
                self.advance()
                return self._token(SINGLE_CHARACTER_TOKENS[char], start)

            elif char in DIGITS:
                return self.lex_number(start)

            elif char == "\"":
                return self.lex_string(start)

            elif char in IDENT_CHARS:
                return self.lex_ident(start)

            else:
                self.advance()
                return self._token(TokenKind.ILLEGAL, start, f"unexpected: {char}")

        return self._token(TokenKind.EOF, self.location())

    def lex_number(self, start):
        """Integer or float literal. A second '.' is consumed and reported as an ILLEGAL token."""
        value = ""
        is_float = False

        while self.current_char is not None:
            char = self.current_char
            if char in DIGITS:
                value += char
            elif char == "_":
                pass
            elif char == ".":
                if is_float:
                    self.advance()
                    return self._token(TokenKind.ILLEGAL, start, f"unexpected: {char}")
                is_float = True
                value += char
            else:
                break
            self.advance()

        return self._token(TokenKind.FLOAT if is_float else TokenKind.INTEGER, start, value)

    def lex_string(self, start):
        """Double-quoted string. A backslash lets the following quote through as text and is itself kept."""
        value = ""
        escaped = False
        self.advance()

        while self.current_char is not None:
            char = self.current_char
            self.advance()

            if char == "\\":
                escaped = not escaped
            elif char == "\"":
                if not escaped:
                    return self._token(TokenKind.STRING, start, value)
                escaped = False
            else:
                escaped = False
            value += char

        return self._token(TokenKind.ILLEGAL, start, "unterminated quote string")

    def lex_ident(self, start):
        value = ""
        while self.current_char is not None and self.current_char in IDENT_CHARS:
            value += self.current_char
            self.advance()

        kind = TokenKind.reserved_words().get(value)
        if kind is not None:
            return self._token(kind, start)
        return self._token(TokenKind.IDENT, start, value)

    def _token(self, kind, start, text=None):
        return Token(kind, text, start.stop(self.line, self.column))
