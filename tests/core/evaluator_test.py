import unittest

import clip
from clip.core.evaluator import Evaluator, is_false
from clip.core.scope import Scope
from clip.core.syntax import Function, Primitive, PrimitiveKind, NULL
from clip.core.value import describe
from clip.lang.error import ClipError


def run(source, scope=None):
    return describe(clip.run(source, scope))


class EvaluatorTestCase(unittest.TestCase):

    def assert_results(self, cases):
        for case, result in cases.items():
            self.assertEqual(result, run(case), case)

    def assert_errors(self, cases):
        for case, msg in cases.items():
            with self.assertRaises(ClipError, msg=case) as ctx:
                run(case)
            self.assertEqual(msg, str(ctx.exception), case)


class LiteralTestCase(EvaluatorTestCase):

    def test_literals(self):
        self.assert_results({
            "": "null : null",
            "42": "42 : integer",
            "1.5": "1.5 : float",
            "\"hi there\"": "hi there : string",
            "true": "true : boolean",
            "false": "false : boolean",
            "()": "null : null",
            "{ }": "function : function",
            "1; 2; 3": "3 : integer",
        })

    def test_assign(self):
        self.assert_results({
            "= x 5": "5 : integer",
            "= x 5\nx": "5 : integer",
            "= x 5\n= x \"five\"\nx": "five : string",
            "= x 5\n= y x\ny": "5 : integer",
        })
        self.assert_errors({
            "x": "undefined variable x",
            "= x y": "undefined variable y",
        })


class OperatorTestCase(EvaluatorTestCase):

    def test_add(self):
        self.assert_results({
            "+ 1 2 3": "6 : integer",
            "+ \"a\" \"b\" \"c\"": "abc : string",
            "+ 1.5 2.5": "4.0 : float",
            "+ (- 0 1) 1": "0 : integer",
        })
        self.assert_errors({
            "+ 1": "expected at least 2 arguments for add operator",
            "+": "expected at least 2 arguments for add operator",
            "+ 1 2.0": "cannot add type integer with type float",
            "+ \"a\" 1": "cannot add type string with type integer",
            "+ true false": "cannot add type boolean",
            "+ () 1": "cannot add type null",
            "= f { }\n+ 1 f": "cannot add type function",
            "+ 1 { }": "unexpected token block start",
        })

    def test_subtract_multiply(self):
        self.assert_results({
            "- 10 1 2": "7 : integer",
            "- 1.5 0.5": "1.0 : float",
            "* 2 3 4": "24 : integer",
            "* 0.5 4.0": "2.0 : float",
        })
        self.assert_errors({
            "- \"a\" \"b\"": "cannot subtract type string",
            "* 2 2.0": "cannot multiply type integer with type float",
        })

    def test_divide(self):
        self.assert_results({
            "/ 4 2": "2 : integer",
            "/ 7 2": "3 : integer",
            "/ (- 0 7) 2": "-3 : integer",
            "/ 7 (- 0 2)": "-3 : integer",
            "/ 100 5 2": "10 : integer",
            "/ 7.0 2.0": "3.5 : float",
        })
        self.assert_errors({
            "/ 1 0": "infinity division",
            "/ 1.0 0.0": "infinity division",
            "/ 0 0": "divide 0 by 0",
            "/ 0 5 0": "divide 0 by 0",
            "/ \"a\" \"b\"": "cannot divide type string",
        })

        for case in ("/ 5 0", "/ 5.0 0.0", "/ 10 5 0"):
            self.assertRaises(ClipError, run, case)

    def test_equal(self):
        self.assert_results({
            "== 1 1 1": "true : boolean",
            "== 1 2": "false : boolean",
            "== 1 1 2": "false : boolean",
            "== \"a\" \"a\"": "true : boolean",
            "== true false": "false : boolean",
            "== () ()": "true : boolean",
            "== () 1": "false : boolean",
            "== 1 ()": "false : boolean",
        })
        self.assert_errors({
            "== 1": "expected at least 2 arguments for equal operator",
            "== 1 \"1\"": "cannot compare type integer with type string",
            "== 1 1.0": "cannot compare type integer with type float",
            "= f { }\n== f f": "cannot compare type function",
        })

    def test_inverse(self):
        self.assert_results({
            "! true": "false : boolean",
            "! false": "true : boolean",
            "! == 1 2": "true : boolean",
        })
        self.assert_errors({
            "! 1": "cannot inverse type integer",
            "! ()": "cannot inverse type null",
            "! true false": "expected exactly one argument for inverse operator",
            "!": "expected exactly one argument for inverse operator",
        })

    def test_integer_overflow(self):
        self.assert_results({
            "+ 9223372036854775806 1": "9223372036854775807 : integer",
        })
        self.assert_errors({
            "+ 9223372036854775807 1": "integer overflow",
            "+ 9223372036854775807 1 (- 0 1)": "integer overflow",
            "* 4294967296 4294967296": "integer overflow",
            "- (- 0 9223372036854775807) 2": "integer overflow",
        })


class LogicTestCase(EvaluatorTestCase):

    def test_and(self):
        self.assert_results({
            "&& true true": "true : boolean",
            "&& true false": "false : boolean",
            "&& true ()": "false : boolean",
            "&& 1 \"a\" 0": "true : boolean",
            "&&": "true : boolean",
        })

    def test_or(self):
        self.assert_results({
            "|| false true": "true : boolean",
            "|| false ()": "false : boolean",
            "|| false 0": "true : boolean",
            "||": "false : boolean",
            "= f { }\n|| false f": "true : boolean",
        })

    def test_every_operand_is_evaluated(self):
        self.assert_errors({
            "&& false nope": "undefined variable nope",
            "|| true nope": "undefined variable nope",
        })

    def test_is_false(self):
        self.assertTrue(is_false(NULL))
        self.assertTrue(is_false(Primitive.boolean(False)))
        self.assertFalse(is_false(Primitive(PrimitiveKind.INTEGER, 0)))
        self.assertFalse(is_false(Primitive(PrimitiveKind.STRING, "")))
        self.assertFalse(is_false(Function()))


class IfTestCase(EvaluatorTestCase):

    def test_branches(self):
        branches = "{ = x 1 } else { = x 2 }\nx"
        self.assert_results({
            "if true " + branches: "1 : integer",
            "if false " + branches: "2 : integer",
            "if () " + branches: "2 : integer",
            "if 0 " + branches: "1 : integer",
            "if \"\" " + branches: "1 : integer",
            "if == 1 1 " + branches: "1 : integer",
            "= x 0\nif false { = x 1 }\nx": "0 : integer",
        })

    def test_if_returns_null(self):
        self.assert_results({
            "if true { 1 }": "null : null",
            "if false { 1 } else { 2 }": "null : null",
        })

    def test_branch_shares_scope(self):
        self.assert_results({"if true { = x 1 }\nx": "1 : integer"})
        self.assert_errors({"if false { = x 1 }\nx": "undefined variable x"})

    def test_function_condition(self):
        self.assert_errors({"if { } { }": "cannot use type function as a condition"})


class CallTestCase(EvaluatorTestCase):

    def test_calls(self):
        self.assert_results({
            "= f { [a b] + a b }\nf 2 3": "5 : integer",
            "= f { [a b] + a b }\nf \"x\" \"y\"": "xy : string",
            "= f { [a b] + a b }\nf 1 a": "2 : integer",
            "= f { [a b] + a b }\n+ (f 1 2) 10": "13 : integer",
            "= k 5\n= f { [a] + a k }\nf 1": "6 : integer",
            "= g { 3 }\n= h g\nh ()": "3 : integer",
            "= f { }\nf ()": "null : null",
            "= f { 7 }\n(f)": "7 : integer",
            "= f { 7 }\nf": "function : function",
            "= f { [a]\na\n}\nf ()": "null : null",
            "= f { [a]\n= b * a 2\nb\n}\nf 21": "42 : integer",
        })

    def test_call_errors(self):
        self.assert_errors({
            "= f { [a b] + a b }\nf 2": "expected 2 arguments to function f",
            "= f { [a b] + a b }\nf 1 2 3": "expected 2 arguments to function f",
            "= f { 7 }\nf 1": "expected 0 arguments to function f",
            "g 1": "undefined function variable g",
            "= n 1\nn 2": "cannot call type integer as a function",
            "= f { [a] + a 1 }\nf \"a\"": "cannot add type string with type integer",
        })

    def test_dynamic_scope(self):
        self.assert_results({
            "= y 10\n= f { + y 1 }\n= y 20\nf ()": "21 : integer",
            "= f { + z 1 }\n= g { [z] f () }\ng 4": "5 : integer",
        })

    def test_callee_assignments_stay_local(self):
        self.assert_results({"= x 1\n= f { = x 2 }\nf ()\nx": "1 : integer"})
        self.assert_errors({"= f { = z 1 }\nf ()\nz": "undefined variable z"})

    def test_recursion(self):
        fact = ("= fact { [n]\n"
                "if == n 0 { = r 1 } else { = r * n (fact - n 1) }\n"
                "r\n"
                "}\n")
        self.assert_results({
            fact + "fact 5": "120 : integer",
            fact + "fact 0": "1 : integer",
        })
        self.assert_errors({"= f { f () }\nf ()": "maximum recursion depth exceeded"})

    def test_deep_recursion(self):
        total = ("= sum { [n]\n"
                 "if == n 0 { = r 0 } else { = r + n (sum - n 1) }; r\n"
                 "}\n")
        self.assert_results({
            total + "sum 100": "5050 : integer",
            total + "sum 500": "125250 : integer",
        })


class ScopeReuseTestCase(unittest.TestCase):

    def test_scope_survives_runs(self):
        scope = Scope()
        self.assertEqual("5 : integer", run("= x 5", scope))
        self.assertEqual("6 : integer", run("+ x 1", scope))
        self.assertEqual(Primitive(PrimitiveKind.INTEGER, 5), scope.get("x"))

    def test_steps(self):
        steps = []

        class Recorder:
            def register_step(self, kind, text):
                steps.append((kind, text))

        Evaluator(Recorder()).run(clip.parse("= x 1\n+ x 1\nif true { }"), Scope())
        expected = [
            ("assign", "x = 1 : integer"),
            ("expr", "2 : integer"),
            ("if", "true : boolean: consequence"),
        ]
        self.assertEqual(expected, steps)


if __name__ == '__main__':
    unittest.main()
