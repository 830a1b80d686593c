"""Natural numbers encoded as Church numerals. Operations are not implemented here: they are ordinary definitions
written in ulambda itself, thus keeping everything as pure as possible.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from ulambda.lang.error import LambdaException
from ulambda.pure.resolution import lam, neu, var
from ulambda.pure.runtime import Closure
from ulambda.pure.syntax import Abstraction, NameRef, Neutral


def cnumber(num):
    """Returns the surface term λf λx (f (... (f x))) of num (cnum = Church numeral)."""
    try:
        assert not isinstance(num, (float, bool))
        num = int(num)
        assert num >= 0
    except (AssertionError, TypeError, ValueError):
        raise LambdaException("expected natural number, got '{}'", str(num), internal=True)

    body = var("x")
    for __ in range(num):
        body = neu("f", [body])
    return lam("f", lam("x", body))


def number(value):
    """Returns the natural number value encodes if it is a numeral-shaped closure, else None.

    Evaluation stops at abstraction boundaries, so only closures whose body literally is a numeral are recognized:
    (SUCC 1) evaluates to a closure of SUCC's body, not to the closure of 2.
    """
    if not isinstance(value, Closure) or not isinstance(value.body, Abstraction):
        return None

    f = NameRef(value.intro.label, 1)
    x = NameRef(value.body.intro.label, 0)

    num = 0
    nth_body = value.body.body
    while isinstance(nth_body, Neutral) and nth_body.arguments:
        if nth_body.applicant != f or len(nth_body.arguments) != 1:
            return None
        nth_body, = nth_body.arguments
        num += 1

    return num if nth_body == Neutral.var(x) else None
