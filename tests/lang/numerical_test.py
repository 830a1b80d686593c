import unittest

from ulambda.lang.error import LambdaException
from ulambda.lang.numerical import cnumber, number
from ulambda.pure.evaluation import evaluate
from ulambda.pure.lexical import read
from ulambda.pure.resolution import resolve
from ulambda.pure.runtime import Environment


def value_of(expr):
    return evaluate(Environment(), resolve(read(expr)))


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, 0.3, 4.0, 14.2, True, "two"]
        for case in should_fail:
            self.assertRaises(LambdaException, cnumber, case)

        should_pass = {0: "λf λx x#0", 3: "λf λx (f#1 (f#1 (f#1 x#0)))", "2": "λf λx (f#1 (f#1 x#0))"}
        for case, result in should_pass.items():
            self.assertEqual(result, str(resolve(cnumber(case))))

    def test_number(self):
        should_fail = ["λf λx (f f)", "λf λx (x f x)", "λf λx (f x x)", "λx x", "λf λx f", "λf λx (x x)"]
        for case in should_fail:
            self.assertIsNone(number(value_of(case)), case)

        should_pass = {3: "λf λx (f (f (f x)))", 0: "λf λx x", 1: "λs λz (s z)", 2: "2"}
        for result, case in should_pass.items():
            self.assertEqual(result, number(value_of(case)), case)

    def test_number_shadowed(self):
        # λx λx (x#1 x#0) is 1 even though both binders are called x
        self.assertEqual(1, number(value_of("λx λx (x#1 x#0)")))
        self.assertIsNone(number(value_of("λx λx (x#0 x#0)")))

    def test_not_a_closure(self):
        self.assertIsNone(number("λf λx x"))


if __name__ == '__main__':
    unittest.main()
