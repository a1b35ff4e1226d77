"""Token vocabulary shared by the lexer and the parser."""

from enum import Enum


class TokenKind(Enum):
    """Every kind of token the lexer can produce. The value is the display name used in error messages."""
    EOF = "eof"
    SEMICOLON = "semicolon"
    NEWLINE = "newline"
    LEFT_PAREN = "left paren"
    RIGHT_PAREN = "right paren"
    LEFT_BRACKET = "left bracket"
    RIGHT_BRACKET = "right bracket"
    BLOCK_START = "block start"
    BLOCK_END = "block end"

    # reserved words
    IF = "if"
    ELIF = "elif"
    ELSE = "else"
    TRUE = "true"
    FALSE = "false"

    # operators
    ASSIGN = "assign"
    EQUAL = "equal"
    PLUS = "plus"
    MINUS = "minus"
    ASTERISK = "asterisk"
    SLASH = "slash"
    BANG = "bang"
    AND = "and"
    OR = "or"

    # tokens carrying text
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    IDENT = "ident"
    ILLEGAL = "illegal"

    @classmethod
    def reserved_words(cls):
        """Maps reserved word text to its token kind."""
        return {kind.value: kind for kind in (cls.IF, cls.ELIF, cls.ELSE, cls.TRUE, cls.FALSE)}

    @classmethod
    def separators(cls):
        """Kinds that end a statement."""
        return (cls.EOF, cls.SEMICOLON, cls.NEWLINE)


SINGLE_CHARACTER_TOKENS = {
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    "{": TokenKind.BLOCK_START,
    "}": TokenKind.BLOCK_END,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "!": TokenKind.BANG,
}


class Location:
    """Source span of a token: lines and columns are 1-based, the stop column is one past the last character."""

    def __init__(self, line_start, col_start, line_stop=None, col_stop=None):
        self.line_start = line_start
        self.col_start = col_start
        self.line_stop = line_start if line_stop is None else line_stop
        self.col_stop = col_start if col_stop is None else col_stop

    def stop(self, line_stop, col_stop):
        """Returns a copy of this location ending at (line_stop, col_stop)."""
        return Location(self.line_start, self.col_start, line_stop, col_stop)

    def __eq__(self, other):
        return isinstance(other, Location) and self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def _key(self):
        return self.line_start, self.col_start, self.line_stop, self.col_stop

    def __repr__(self):
        return f"Location({self.line_start}:{self.col_start}, {self.line_stop}:{self.col_stop})"

    def __str__(self):
        return f"{self.line_start}:{self.col_start}-{self.line_stop}:{self.col_stop}"


class Token:
    """A lexed token. text is only meaningful for integer, float, string, ident and illegal tokens."""
    __slots__ = ("kind", "text", "loc")

    def __init__(self, kind, text, loc):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "loc", loc)

    def __setattr__(self, name, value):
        raise AttributeError("tokens are immutable")

    @property
    def name(self):
        """Display name of this token, e.g. 'ident: foo' or 'block end'."""
        if self.kind in (TokenKind.TRUE, TokenKind.FALSE):
            return f"boolean: {self.kind.value}"
        if self.text is not None:
            return f"{self.kind.value}: {self.text}"
        return self.kind.value

    def __eq__(self, other):
        return isinstance(other, Token) and (self.kind, self.text) == (other.kind, other.text)

    def __hash__(self):
        return hash((self.kind, self.text))

    def __repr__(self):
        return f"Token({self.name}, {self.loc!r})"

    def __str__(self):
        return self.name
