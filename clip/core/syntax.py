"""Abstract syntax tree for clip. Every node is an immutable dataclass; the parser builds them and the evaluator walks
them. Primitive doubles as the runtime representation of atomic values, and Function as the runtime function value.

```
<program>    ::= <statement>*
<statement>  ::= Assign | If | <expression>
<expression> ::= Primitive | Identifier | Operator | Function | Call | And | Or
```
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional, Tuple


INTEGER_MIN = -2 ** 63
INTEGER_MAX = 2 ** 63 - 1


class Node:
    """Superclass of every syntax tree node."""

    def display(self, indents=0):
        """Recursively displays the tree rooted at this node with readable format.

        Format:
        <Node>(<field>=<value>, <field>=[
            <Node>(...),
            <Node>(...)
        ])
        """
        pad = "    " * indents
        parts = []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                value = (value,)
            if isinstance(value, tuple) and all(isinstance(node, Node) for node in value):
                if value:
                    nested = ",".join("\n" + node.display(indents + 1) for node in value)
                    parts.append(f"{field.name}=[{nested}\n{pad}]")
                else:
                    parts.append(f"{field.name}=[]")
            elif isinstance(value, Enum):
                parts.append(f"{field.name}={value.value}")
            else:
                parts.append(f"{field.name}={value!r}")
        return f"{pad}{type(self).__name__}({', '.join(parts)})"


class Statement(Node):
    """Anything that can appear in a statement list."""


class Expression(Statement):
    """A statement that produces a value by itself."""


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...] = ()


@dataclass(frozen=True)
class Assign(Statement):
    name: str
    value: Expression


@dataclass(frozen=True)
class If(Statement):
    """alternative is None when there is no else block (as opposed to an empty else block)."""
    condition: Expression
    consequence: Tuple[Statement, ...] = ()
    alternative: Optional[Tuple[Statement, ...]] = None


class PrimitiveKind(Enum):
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class Primitive(Expression):
    kind: PrimitiveKind
    value: Any = None

    @classmethod
    def boolean(cls, value):
        return cls(PrimitiveKind.BOOLEAN, bool(value))

    @property
    def is_null(self):
        return self.kind is PrimitiveKind.NULL

    def __str__(self):
        if self.kind is PrimitiveKind.BOOLEAN:
            return "true" if self.value else "false"
        elif self.kind is PrimitiveKind.NULL:
            return "null"
        return str(self.value)


NULL = Primitive(PrimitiveKind.NULL)


@dataclass(frozen=True)
class Identifier(Expression):
    name: str


class OperatorKind(Enum):
    EQUAL = "equal"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    INVERSE = "inverse"


@dataclass(frozen=True)
class Operator(Expression):
    kind: OperatorKind
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Function(Expression):
    """Function literal. As a value it is just its syntax: no environment is captured."""
    params: Tuple[str, ...] = ()
    body: Tuple[Statement, ...] = ()

    def __str__(self):
        return "function"


@dataclass(frozen=True)
class Call(Expression):
    name: str
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class And(Expression):
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Or(Expression):
    args: Tuple[Expression, ...] = ()
