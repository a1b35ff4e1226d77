"""Runtime values. A value is either a Primitive or a Function (the function literal itself)."""

from clip.core.syntax import Function, INTEGER_MAX, INTEGER_MIN
from clip.lang.error import ClipError


def type_name(value):
    """Short type name of value: integer, float, string, boolean, null or function."""
    if isinstance(value, Function):
        return "function"
    return value.kind.value


def render(value):
    """Human readable text of value."""
    return str(value)


def describe(value):
    """'<value> : <type>', as printed by the command line and the shell."""
    return f"{render(value)} : {type_name(value)}"


def check_integer(value):
    """Returns value if it fits in a signed 64-bit integer."""
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        raise ClipError("integer overflow")
    return value
