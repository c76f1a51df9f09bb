import unittest

from lcore.lang.env import DictEnv
from lcore.lang.error import LambdaError, RecursiveDefinition
from lcore.pure.lexical import apply, lam, val, var


class DictEnvTestCase(unittest.TestCase):

    def setUp(self):
        self.env = DictEnv({"I": lam("x", var("x")), "K": lam("x", lam("y", var("x")))})

    def test_subst(self):
        self.assertEqual(lam("x", var("x")), self.env.subst("I"))
        self.assertEqual(var("S"), self.env.subst("S"))
        self.assertIsNot(self.env.bindings["I"], self.env.subst("I"))

    def test_define(self):
        self.env.define("zero", val(0))
        self.assertIn("zero", self.env.names())
        self.assertEqual(val(0), self.env.subst("zero"))

    def test_expand(self):
        cases = [
            (apply(var("I"), var("y")), apply(lam("x", var("x")), var("y"))),
            (apply(var("K"), var("I")), apply(lam("x", lam("y", var("x"))), lam("x", var("x")))),
            (var("S"), var("S")),
            # bound occurrences are not names from the environment
            (lam("I", apply(var("I"), var("K"))), lam("I", apply(var("I"), lam("x", lam("y", var("x")))))),
        ]
        for case, expected in cases:
            self.assertEqual(expected, self.env.expand(case), case)

    def test_expand_nested(self):
        env = DictEnv({"a": var("b"), "b": val(0)})
        cases = [
            (var("a"), val(0)),
            (var("b"), val(0)),
            (apply(var("a"), var("b")), apply(val(0), val(0))),
            (apply(var("b"), var("a")), apply(val(0), val(0))),
        ]
        for case, expected in cases:
            self.assertEqual(expected, env.expand(case), case)

        env = DictEnv({"c": apply(var("b"), var("a")), "b": var("a"), "a": val(1)})
        self.assertEqual(apply(val(1), val(1)), env.expand(var("c")))

        # definitions are substituted without capture
        env = DictEnv({"a": var("y")})
        self.assertEqual(lam("y₀", var("y")), env.expand(lam("y", var("a"))))

    def test_recursive_definition(self):
        should_fail = [
            (DictEnv({"a": apply(var("f"), var("a"))}), var("a")),
            (DictEnv({"a": var("b"), "b": var("a")}), var("a")),
            (DictEnv({"a": var("b"), "b": lam("x", apply(var("c"), var("x"))), "c": var("a")}),
             apply(var("a"), val(0))),
        ]
        for env, case in should_fail:
            self.assertRaises(RecursiveDefinition, env.expand, case)

        with self.assertRaises(RecursiveDefinition) as ctx:
            DictEnv({"a": var("a")}).expand(var("a"))
        self.assertEqual(["a"], ctx.exception.names)
        self.assertIsInstance(ctx.exception, LambdaError)

        # a binder of the same name is not a reference to the definition
        env = DictEnv({"f": lam("f", var("f"))})
        self.assertEqual(lam("f", var("f")), env.expand(var("f")))

    def test_empty(self):
        env = DictEnv()
        self.assertEqual([], env.names())
        self.assertEqual(var("x"), env.expand(var("x")))


if __name__ == '__main__':
    unittest.main()
