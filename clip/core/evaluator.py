"""Tree-walking evaluator for clip. Runs a Program's statements in order against a Scope and returns the value of the
last statement run (null if there is none). Assignments mutate the Scope they run in.
"""

import sys

from clip.core import ops
from clip.core.syntax import And, Assign, Call, Function, Identifier, If, Operator, Or, Primitive, PrimitiveKind, NULL
from clip.core.value import describe, type_name
from clip.lang.error import ClipError


RECURSION_LIMIT = 10000


def is_false(value):
    """Whether value counts as false for And/Or: boolean false or null. Functions are never false."""
    if isinstance(value, Function):
        return False
    return value.is_null or (value.kind is PrimitiveKind.BOOLEAN and not value.value)


class Evaluator:
    """Evaluates statements and expressions. If error_handler is given, every executed statement is reported to its
    register_step (printed in verbose mode).
    """

    def __init__(self, error_handler=None):
        self.error_handler = error_handler
        self._statements = {
            Assign: self.exec_assign,
            If: self.exec_if,
        }
        self._expressions = {
            Primitive: self.eval_primitive,
            Identifier: self.eval_identifier,
            Operator: self.eval_operator,
            Function: self.eval_function,
            Call: self.eval_call,
            And: self.eval_and,
            Or: self.eval_or,
        }

    def step(self, kind, text):
        if self.error_handler is not None:
            self.error_handler.register_step(kind, text)

    def run(self, program, scope):
        """Runs program in scope. Returns the value of its last statement."""
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)  # every clip call costs about a dozen Python frames
        try:
            return self.exec_statements(program.statements, scope)
        except RecursionError as exc:
            raise ClipError("maximum recursion depth exceeded") from exc

    def exec_statements(self, statements, scope):
        result = NULL
        for statement in statements:
            result = self.exec_statement(statement, scope)
        return result

    def exec_statement(self, statement, scope):
        run = self._statements.get(type(statement))
        if run is not None:
            return run(statement, scope)

        result = self.eval(statement, scope)
        self.step("expr", describe(result))
        return result

    def exec_assign(self, assign, scope):
        value = self.eval(assign.value, scope)
        scope.set(assign.name, value)
        self.step("assign", f"{assign.name} = {describe(value)}")
        return value

    def exec_if(self, stmt, scope):
        """Branches run in scope itself, so their assignments stay visible afterwards. Always returns null."""
        condition = self.eval(stmt.condition, scope)

        if isinstance(condition, Function):
            raise ClipError(f"cannot use type {type_name(condition)} as a condition")
        elif condition.kind is PrimitiveKind.BOOLEAN:
            taken = condition.value
        else:
            taken = not condition.is_null

        if taken:
            self.step("if", f"{describe(condition)}: consequence")
            self.exec_statements(stmt.consequence, scope)
        elif stmt.alternative is not None:
            self.step("if", f"{describe(condition)}: alternative")
            self.exec_statements(stmt.alternative, scope)
        else:
            self.step("if", f"{describe(condition)}: skipped")

        return NULL

    def eval(self, expr, scope):
        evaluate = self._expressions.get(type(expr))
        if evaluate is None:
            raise ClipError(f"cannot evaluate {type(expr).__name__}", internal=True)
        return evaluate(expr, scope)

    def eval_primitive(self, primitive, scope):
        return primitive

    def eval_identifier(self, identifier, scope):
        value = scope.get(identifier.name)
        if value is None:
            raise ClipError(f"undefined variable {identifier.name}")
        return value

    def eval_function(self, function, scope):
        return function

    def eval_operator(self, operator, scope):
        return ops.apply(operator.kind, operator.args, lambda arg: self.eval(arg, scope))

    def eval_and(self, expr, scope):
        """Every operand is evaluated (no short-circuit) before the result is decided."""
        values = [self.eval(arg, scope) for arg in expr.args]
        return Primitive.boolean(not any(is_false(value) for value in values))

    def eval_or(self, expr, scope):
        """Every operand is evaluated (no short-circuit) before the result is decided."""
        values = [self.eval(arg, scope) for arg in expr.args]
        return Primitive.boolean(any(not is_false(value) for value in values))

    def eval_call(self, call, scope):
        """Runs the function bound to call.name in a child of the caller's scope.

        Parameters are bound in the child scope in order, each argument being evaluated in that child scope. A
        function without parameters may also be called with a single '()' argument.
        """
        function = scope.get(call.name)
        if function is None:
            raise ClipError(f"undefined function variable {call.name}")
        elif not isinstance(function, Function):
            raise ClipError(f"cannot call type {type_name(function)} as a function")

        args = call.args
        if not function.params and args == (NULL,):
            args = ()

        if len(args) != len(function.params):
            raise ClipError(f"expected {len(function.params)} arguments to function {call.name}")

        self.step("call", f"{call.name} with {len(args)} argument(s)")
        child = scope.child()
        for param, arg in zip(function.params, args):
            child.set(param, self.eval(arg, child))

        return self.exec_statements(function.body, child)


def evaluate(program, scope, error_handler=None):
    """Runs program in scope and returns the value of its last statement. Raises ClipError on the first error."""
    return Evaluator(error_handler).run(program, scope)
