import unittest

from ulambda.pure.syntax import Abstraction, Binding, NameIntro, NameRef, Neutral


class NameRefTestCase(unittest.TestCase):

    def test_index(self):
        should_fail = [-1, 0.5, "0", True, None]
        for case in should_fail:
            self.assertRaises(ValueError, NameRef, "x", case)

        should_pass = {0: "x#0", 3: "x#3"}
        for case, result in should_pass.items():
            self.assertEqual(result, str(NameRef("x", case)))

    def test_immutable(self):
        ref = NameRef("x", 0)
        with self.assertRaises(AttributeError):
            ref.index = 1


class TermTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            "λx x#0": Abstraction(NameIntro("x"), Neutral.var(NameRef("x", 0))),
            "f#0": Neutral(NameRef("f", 0), []),
            "(f#1 x#0)": Neutral(NameRef("f", 1), [Neutral.var(NameRef("x", 0))]),
            "(f#2 x#0 λy y#0)": Neutral(NameRef("f", 2), [
                Neutral.var(NameRef("x", 0)),
                Abstraction(NameIntro("y"), Neutral.var(NameRef("y", 0))),
            ]),
            "(let f = λx x#0 in (f#0 f#0))": Binding(
                NameIntro("f"),
                Abstraction(NameIntro("x"), Neutral.var(NameRef("x", 0))),
                Neutral(NameRef("f", 0), [Neutral.var(NameRef("f", 0))]),
            ),
        }
        for expected, term in cases.items():
            self.assertEqual(expected, str(term))

    def test_equality(self):
        identity = Abstraction(NameIntro("x"), Neutral.var(NameRef("x", 0)))

        self.assertEqual(identity, Abstraction(NameIntro("x"), Neutral(NameRef("x", 0), [])))
        self.assertEqual(hash(identity), hash(Abstraction(NameIntro("x"), Neutral.var(NameRef("x", 0)))))

        should_differ = [
            Abstraction(NameIntro("y"), Neutral.var(NameRef("x", 0))),
            Abstraction(NameIntro("x"), Neutral.var(NameRef("x", 1))),
            Binding(NameIntro("x"), identity, Neutral.var(NameRef("x", 0))),
        ]
        for case in should_differ:
            self.assertNotEqual(identity, case)

    def test_arguments_are_tuples(self):
        arguments = [Neutral.var(NameRef("x", 0))]
        term = Neutral(NameRef("f", 1), arguments)
        arguments.append(Neutral.var(NameRef("y", 2)))

        self.assertEqual(1, len(term.arguments))
        self.assertIsInstance(term.arguments, tuple)


if __name__ == '__main__':
    unittest.main()
