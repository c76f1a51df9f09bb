import unittest

from lcore.lang.bindings import IntTypes
from lcore.lang.error import EndOfInput, MismatchedTypes, NotAVariable, StackUnderflow, UnexpectedToken
from lcore.pure import tokens
from lcore.pure.lexical import Application, Constant, Lambda, Variable, apply, lam, val, var
from lcore.pure.parser import PostfixParser, parse
from lcore.pure.tokens import APPLY, LAMBDA, ident


class ParseTestCase(unittest.TestCase):

    def test_parse(self):
        cases = [
            ([ident("x"), ident("y"), APPLY], Application(Variable("x"), Variable("y"))),
            ([ident("x"), ident("y"), LAMBDA], Lambda("x", Variable("y"))),
            ([ident("x"), ident("y"), LAMBDA, ident("z"), APPLY], apply(lam("x", var("y")), var("z"))),
            ([tokens.val(0)], Constant(0)),
            ([ident("x")], Variable("x")),
            ([ident("x"), ident("x"), LAMBDA, tokens.val(0), APPLY], apply(lam("x", var("x")), val(0))),
            ([ident("f"), ident("x"), ident("f"), ident("x"), APPLY, LAMBDA, LAMBDA],
             lam("f", lam("x", apply(var("f"), var("x"))))),
        ]
        for case, expected in cases:
            self.assertEqual(expected, parse(case), case)

    def test_parse_is_deterministic(self):
        program = [ident("f"), ident("f"), tokens.val(0), APPLY, LAMBDA, ident("x"), ident("x"), LAMBDA, APPLY]
        self.assertEqual(parse(program), parse(program))

    def test_parse_iterator(self):
        program = iter([ident("x"), ident("y"), APPLY])
        self.assertEqual(apply(var("x"), var("y")), parse(program))

    def test_postfix_inverse(self):
        cases = [
            var("x"),
            val(0),
            lam("x", lam("y", var("x"))),
            apply(lam("f", apply(var("f"), val(0))), lam("x", var("x"))),
            apply(var("a"), var("b"), var("c"), lam("d", apply(var("d"), var("a")))),
        ]
        for case in cases:
            self.assertEqual(case, parse(case.postfix()), case)

    def test_not_a_variable(self):
        with self.assertRaises(NotAVariable) as ctx:
            parse([tokens.val(0), ident("y"), LAMBDA])

        self.assertEqual(Constant(0), ctx.exception.candidate)
        self.assertEqual(2, ctx.exception.position)
        self.assertEqual("0 y λ", ctx.exception.expr)
        self.assertEqual((4, 5), (ctx.exception.start, ctx.exception.end))

        should_raise = [
            [ident("x"), ident("y"), APPLY, ident("z"), LAMBDA],
            [ident("x"), ident("x"), LAMBDA, ident("y"), LAMBDA],
        ]
        for case in should_raise:
            self.assertRaises(NotAVariable, parse, case)

    def test_stack_underflow(self):
        should_raise = [
            [APPLY],
            [ident("x"), APPLY],
            [LAMBDA],
            [ident("x"), LAMBDA],
            [ident("x"), ident("y"), APPLY, APPLY],
        ]
        for case in should_raise:
            self.assertRaises(StackUnderflow, parse, case)

        with self.assertRaises(StackUnderflow) as ctx:
            parse([ident("x"), APPLY])
        self.assertEqual(1, ctx.exception.position)
        self.assertEqual(APPLY, ctx.exception.token)
        self.assertEqual((2, 3), (ctx.exception.start, ctx.exception.end))

    def test_end_of_input(self):
        cases = [
            (0, []),
            (2, [ident("x"), ident("y")]),
            (3, [ident("x"), ident("y"), ident("z")]),
            (2, [ident("x"), ident("y"), LAMBDA, tokens.val(1)]),
        ]
        for remaining, case in cases:
            with self.assertRaises(EndOfInput) as ctx:
                parse(case)
            self.assertEqual(remaining, ctx.exception.remaining, case)
            self.assertIsNone(ctx.exception.position)

    def test_unexpected_token(self):
        should_raise = [["x"], [ident("x"), None], [ident("x"), ident("y"), "@"]]
        for case in should_raise:
            with self.assertRaises(UnexpectedToken) as ctx:
                parse(case)
            self.assertEqual(len(case) - 1, ctx.exception.position, case)

    def test_mismatched_types(self):
        should_raise = [[tokens.val("0")], [tokens.val(True)], [ident(3)], [ident("x"), tokens.val(1.5), LAMBDA]]
        for case in should_raise:
            self.assertRaises(MismatchedTypes, parse, case, IntTypes())

        # without a binding nothing is checked
        for case in should_raise[:-1]:
            parse(case)

    def test_parser_reuse(self):
        parser = PostfixParser()
        self.assertRaises(EndOfInput, parser.parse, [ident("x"), ident("y")])
        self.assertEqual(var("z"), parser.parse([ident("z")]))


if __name__ == '__main__':
    unittest.main()
