"""Operator semantics. Every operator but inverse is variadic and typed by its first operand: all other operands must
be of the same primitive type.
"""

from functools import reduce

from clip.core.syntax import Function, OperatorKind, Primitive, PrimitiveKind
from clip.core.value import check_integer, type_name
from clip.lang.error import ClipError


NUMERIC = (PrimitiveKind.INTEGER, PrimitiveKind.FLOAT)

VERBS = {OperatorKind.EQUAL: "compare"}  # the other operator names already are verbs


def apply(kind, args, evaluate):
    """Evaluates the operand expressions args with evaluate and applies operator kind to them."""
    if kind is OperatorKind.INVERSE:
        if len(args) != 1:
            raise ClipError("expected exactly one argument for inverse operator")
        return inverse(evaluate(args[0]))

    if len(args) < 2:
        raise ClipError(f"expected at least 2 arguments for {kind.value} operator")

    values = []
    for arg in args:
        value = evaluate(arg)
        if isinstance(value, Function):
            raise ClipError(f"cannot {VERBS.get(kind, kind.value)} type function")
        values.append(value)

    return OPERATIONS[kind](values)


def inverse(value):
    if isinstance(value, Primitive) and value.kind is PrimitiveKind.BOOLEAN:
        return Primitive.boolean(not value.value)
    raise ClipError(f"cannot inverse type {type_name(value)}")


def _operands(name, values, allowed):
    """Checks that values[0] is one of allowed and that every other value has its type. Returns (type, raw values)."""
    first = values[0]
    if first.kind not in allowed:
        raise ClipError(f"cannot {name} type {type_name(first)}")

    for value in values[1:]:
        if value.kind is not first.kind:
            raise ClipError(f"cannot {name} type {type_name(first)} with type {type_name(value)}")

    return first.kind, [value.value for value in values]


def _fold(name, values, step):
    kind, numbers = _operands(name, values, NUMERIC)
    if kind is PrimitiveKind.INTEGER:
        return Primitive(kind, reduce(lambda acc, number: check_integer(step(acc, number)), numbers))
    return Primitive(kind, reduce(step, numbers))


def add(values):
    kind, items = _operands("add", values, NUMERIC + (PrimitiveKind.STRING,))
    if kind is PrimitiveKind.STRING:
        return Primitive(kind, "".join(items))
    return _fold("add", values, lambda acc, number: acc + number)


def subtract(values):
    return _fold("subtract", values, lambda acc, number: acc - number)


def multiply(values):
    return _fold("multiply", values, lambda acc, number: acc * number)


def _int_divide(numerator, denominator):
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def divide(values):
    """Left fold of divisions.

    A zero divisor is only checked in two cases: a zero accumulator ('divide 0 by 0') and an accumulator of exactly
    one ('infinity division'). Any other zero divisor fails the way Python's own division does.
    """
    kind, numbers = _operands("divide", values, NUMERIC)

    result = numbers[0]
    for number in numbers[1:]:
        if number == 0:
            if result == 0:
                raise ClipError("divide 0 by 0")
            elif result == 1:
                raise ClipError("infinity division")

        try:
            if kind is PrimitiveKind.INTEGER:
                result = check_integer(_int_divide(result, number))
            else:
                result = result / number
        except ZeroDivisionError as exc:
            raise ClipError(str(exc)) from exc

    return Primitive(kind, result)


def equal(values):
    """True if every value equals the first. null only equals null; other mismatched types cannot be compared."""
    first = values[0]
    result = True

    for value in values[1:]:
        if first.is_null or value.is_null:
            result = result and first.is_null and value.is_null
        elif value.kind is not first.kind:
            raise ClipError(f"cannot compare type {type_name(first)} with type {type_name(value)}")
        else:
            result = result and value.value == first.value

    return Primitive.boolean(result)


OPERATIONS = {
    OperatorKind.EQUAL: equal,
    OperatorKind.ADD: add,
    OperatorKind.SUBTRACT: subtract,
    OperatorKind.MULTIPLY: multiply,
    OperatorKind.DIVIDE: divide,
}
