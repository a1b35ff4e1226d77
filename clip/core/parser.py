"""Recursive descent parser for clip. Turns the token list produced by the Lexer into a Program.

Grammar, loosely (`<sep>` is a newline, a semicolon or the end of input):

```
<program>    ::= (<sep>* <statement> <sep>)*
<statement>  ::= <assign> | <if> | <expression>
<assign>     ::= "=" <ident> <expression>                      ; must be followed by <sep> or "}"
<if>         ::= "if" <expression> <block> ("else" <block>)?
<block>      ::= "{" (<statement> | <sep>)* "}"
<expression> ::= "(" ")"                                       ; null
               | "(" <expression> ")"
               | "&&" <expression>*                            ; and
               | "||" <expression>*                            ; or
               | "{" ("[" <ident>* "]")? (<statement> | <sep>)* "}"    ; function
               | <ident> <expression>+                         ; call (an <ident> not followed by <sep>)
               | <ident>
               | <primitive>
               | <op> <operand>*                               ; op is one of == + - * / !
<operand>    ::= any <expression> except a call                ; a bare <ident> is always a variable here
```

Operands of an operator are collected until one fails to parse: the failed operand is left unconsumed, and the
operator keeps what it already has. `elif` is a reserved word with no production.
"""

from clip.core.syntax import (
    And, Assign, Call, Function, Identifier, If, Operator, OperatorKind, Or, Primitive, PrimitiveKind, Program,
    INTEGER_MAX, INTEGER_MIN, NULL,
)
from clip.core.tokens import TokenKind
from clip.lang.error import ClipError


OPERATORS = {
    TokenKind.EQUAL: OperatorKind.EQUAL,
    TokenKind.PLUS: OperatorKind.ADD,
    TokenKind.MINUS: OperatorKind.SUBTRACT,
    TokenKind.ASTERISK: OperatorKind.MULTIPLY,
    TokenKind.SLASH: OperatorKind.DIVIDE,
    TokenKind.BANG: OperatorKind.INVERSE,
}

PRIMITIVES = (TokenKind.INTEGER, TokenKind.FLOAT, TokenKind.STRING, TokenKind.TRUE, TokenKind.FALSE)

SEPARATORS = TokenKind.separators()
CALL_END = SEPARATORS + (TokenKind.RIGHT_PAREN, TokenKind.BLOCK_END, TokenKind.RIGHT_BRACKET)
LOGIC_END = CALL_END + (TokenKind.BLOCK_START,)
OPERATOR_END = SEPARATORS + (TokenKind.RIGHT_PAREN, TokenKind.BLOCK_START)


class Parser:
    """Parses a list of tokens ending with EOF. pos always points at the next unconsumed token (current)."""

    def __init__(self, tokens):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ClipError("token stream must end with eof", internal=True)
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self):
        return self.tokens[self.pos]

    @property
    def peek(self):
        """Token after current. Past the end of the list, this is the final EOF token."""
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def advance(self):
        """Consumes and returns current. Never moves past the final EOF token."""
        token = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def at(self, *kinds):
        return self.current.kind in kinds

    def error(self, msg, token=None):
        token = self.current if token is None else token
        return ClipError(msg, token.loc)

    def unexpected(self, token=None):
        token = self.current if token is None else token
        return self.error(f"unexpected token {token}", token)

    def expect(self, kind, what):
        if not self.at(kind):
            raise self.error(f"expected {what}; got {self.current}")
        return self.advance()

    def skip_separators(self):
        while self.at(TokenKind.SEMICOLON, TokenKind.NEWLINE):
            self.advance()

    def parse(self):
        """Parses the whole token list into a Program."""
        statements = []

        while True:
            self.skip_separators()
            if self.at(TokenKind.EOF):
                return Program(tuple(statements))

            statements.append(self.parse_statement())
            if not self.at(*SEPARATORS):
                raise self.unexpected()

    def parse_statement(self):
        if self.at(TokenKind.ASSIGN):
            return self.parse_assign()
        elif self.at(TokenKind.IF):
            return self.parse_if()
        return self.parse_expression()

    def parse_assign(self):
        self.advance()
        name = self.parse_name()
        value = self.parse_expression()

        if not self.at(TokenKind.BLOCK_END, *SEPARATORS):
            raise self.unexpected()
        return Assign(name, value)

    def parse_if(self):
        self.advance()
        condition = self.parse_expression()
        consequence = self.parse_block()

        alternative = None
        mark = self.pos
        self.skip_separators()
        if self.at(TokenKind.ELSE):
            self.advance()
            alternative = self.parse_block()
        else:
            self.pos = mark  # separators belong to the enclosing statement list

        return If(condition, consequence, alternative)

    def parse_block(self):
        self.expect(TokenKind.BLOCK_START, "block start")
        return self.parse_body()

    def parse_body(self):
        """Statements up to and including the closing '}'. The opening '{' is already consumed."""
        statements = []

        while True:
            self.skip_separators()
            if self.at(TokenKind.EOF):
                raise self.error("unexpected end of file")
            elif self.at(TokenKind.BLOCK_END):
                self.advance()
                return tuple(statements)

            statements.append(self.parse_statement())
            if not self.at(TokenKind.BLOCK_END, *SEPARATORS):
                raise self.unexpected()

    def parse_name(self):
        if not self.at(TokenKind.IDENT):
            raise self.unexpected()
        return self.advance().text

    def parse_expression(self):
        if self.at(TokenKind.IDENT):
            if self.peek.kind in SEPARATORS:
                return Identifier(self.advance().text)
            return self.parse_call()
        return self.parse_operand()

    def parse_operand(self):
        """Any expression except a call."""
        kind = self.current.kind

        if kind is TokenKind.LEFT_PAREN:
            return self.parse_group()
        elif kind is TokenKind.AND:
            self.advance()
            return And(self.parse_arguments(LOGIC_END))
        elif kind is TokenKind.OR:
            self.advance()
            return Or(self.parse_arguments(LOGIC_END))
        elif kind is TokenKind.BLOCK_START:
            return self.parse_function()
        elif kind in PRIMITIVES:
            return self.parse_primitive()
        elif kind is TokenKind.IDENT:
            return Identifier(self.advance().text)
        elif kind in OPERATORS:
            return self.parse_operator()
        raise self.unexpected()

    def parse_group(self):
        self.advance()
        if self.at(TokenKind.RIGHT_PAREN):
            self.advance()
            return NULL

        expr = self.parse_expression()
        self.expect(TokenKind.RIGHT_PAREN, "right paren")
        return expr

    def parse_primitive(self):
        token = self.advance()

        if token.kind is TokenKind.INTEGER:
            try:
                value = int(token.text)
            except ValueError as exc:
                raise self.error(str(exc), token) from exc
            if not INTEGER_MIN <= value <= INTEGER_MAX:
                raise self.error("number too large to fit in target type", token)
            return Primitive(PrimitiveKind.INTEGER, value)

        elif token.kind is TokenKind.FLOAT:
            try:
                return Primitive(PrimitiveKind.FLOAT, float(token.text))
            except ValueError as exc:
                raise self.error(str(exc), token) from exc

        elif token.kind is TokenKind.STRING:
            return Primitive(PrimitiveKind.STRING, token.text)

        return Primitive.boolean(token.kind is TokenKind.TRUE)

    def parse_arguments(self, end):
        """Full expressions (calls included) until current is one of end."""
        args = []
        while not self.at(*end):
            args.append(self.parse_expression())
        return tuple(args)

    def parse_call(self):
        name = self.advance().text
        return Call(name, self.parse_arguments(CALL_END))

    def parse_operator(self):
        kind = OPERATORS[self.advance().kind]

        args = []
        while not self.at(*OPERATOR_END):
            arg = self.try_parse(self.parse_operand)
            if arg is None:
                break
            args.append(arg)

        return Operator(kind, tuple(args))

    def try_parse(self, parse):
        """Runs parse; if it fails, rewinds to where it started and returns None."""
        mark = self.pos
        try:
            return parse()
        except ClipError:
            self.pos = mark
            return None

    def parse_function(self):
        self.advance()

        params = []
        if self.at(TokenKind.LEFT_BRACKET):
            self.advance()
            while not self.at(TokenKind.RIGHT_BRACKET):
                if self.at(TokenKind.EOF):
                    raise self.error("unexpected end of file")
                params.append(self.parse_name())
            self.advance()

        return Function(tuple(params), self.parse_body())


def parse(tokens):
    """Parses tokens (ending with EOF) into a Program. Raises ClipError on the first syntax error."""
    return Parser(tokens).parse()
