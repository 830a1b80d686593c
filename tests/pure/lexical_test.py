import unittest

from ulambda.lang.error import ReadError
from ulambda.pure.lexical import read, tokenize
from ulambda.pure.resolution import lam, let, neu, neu_with_index, resolve, var, var_with_index


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "λx x#0": ["lambda", "name", "name"],
            "\\x. (f x)": ["lambda", "name", "period", "open", "name", "name", "close"],
            "let f = 2 in f": ["let", "name", "equals", "number", "in", "name"],
            "def f' = g in f'": ["let", "name", "equals", "name", "in", "name"],
        }
        for case, kinds in cases.items():
            self.assertEqual(kinds, [token.kind for token in tokenize(case)], case)

    def test_positions(self):
        self.assertEqual([0, 1, 4, 5], [token.start for token in tokenize("(f  x)")])

    def test_illegal(self):
        should_raise = ["x := y", "λx [x]", "f, g", "let#0"]
        for case in should_raise:
            self.assertRaises(ReadError, tokenize, case)

        with self.assertRaises(ReadError) as context:
            tokenize("λx x & y")
        self.assertEqual((5, 6), (context.exception.start, context.exception.end))


class ReadTestCase(unittest.TestCase):

    def test_read(self):
        cases = {
            "x": var("x"),
            "x#3": var_with_index("x", 3),
            "(x)": var("x"),
            "λx x": lam("x", var("x")),
            "\\x.x": lam("x", var("x")),
            "λx λy x#1": lam("x", lam("y", var_with_index("x", 1))),
            "f x y": neu("f", [var("x"), var("y")]),
            "(f#0 λz z#0)": neu_with_index("f", 0, [lam("z", var_with_index("z", 0))]),
            "λx f x y": lam("x", neu("f", [var("x"), var("y")])),
            "f λx x y": neu("f", [lam("x", neu("x", [var("y")]))]),
            "((f a) b)": neu("f", [var("a"), var("b")]),
            "(let f = λx λy x#1 in (f λz z#0))": let(
                "f", lam("x", lam("y", var_with_index("x", 1))), neu("f", [lam("z", var_with_index("z", 0))]),
            ),
            "def f = λx x in f f": let("f", lam("x", var("x")), neu("f", [var("f")])),
            "let a = let b = x in b in a": let("a", let("b", var("x"), var("b")), var("a")),
            "(f 0)": neu("f", [lam("f", lam("x", var("x")))]),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, read(case), case)

    def test_read_display(self):
        # the display of a resolved term reads back to the same term
        should_pass = [
            "λx x#0",
            "(let f = λx λy x#1 in (f#0 λz z#0))",
            "λf λx (f#1 (f#1 x#0))",
            "λa (let b = a#0 in (let a = b#0 in (a#0 b#1 a#0)))",
        ]
        for case in should_pass:
            self.assertEqual(case, str(resolve(read(case))))

    def test_read_errors(self):
        should_raise = [
            "",
            "   ",
            "(",
            "(f x",
            "f x)",
            "()",
            "λ",
            "λx",
            "λx#0 x",
            "λ(x) x",
            "(λx x) y",
            "let f λx x in f",
            "let f = λx x",
            "let f = in f",
            "let in = x in x",
            "x = y",
            "2 f",
        ]
        for case in should_raise:
            self.assertRaises(ReadError, read, case)

    def test_error_span(self):
        with self.assertRaises(ReadError) as context:
            read("f x) y")
        self.assertEqual((3, 4), (context.exception.start, context.exception.end))
        self.assertEqual("f x) y", context.exception.expr)


if __name__ == '__main__':
    unittest.main()
