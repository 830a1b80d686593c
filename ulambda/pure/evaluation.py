"""Call-by-value evaluation of λ-terms to closures.

Arguments are evaluated before the applicant is looked up, and evaluation stops at abstraction boundaries: evaluating
an Abstraction only captures the current environment. Applying a closure to several arguments binds them one at a
time, each application producing the applicant for the next argument.

trace, when given, is called as trace(step, expr) for every β step (a closure applied to an argument) and every ζ step
(the body of a let entered with its binding). It never influences the result.
"""

from ulambda.lang.error import NotApplicable
from ulambda.pure.runtime import Closure
from ulambda.pure.syntax import Abstraction, Binding, Neutral


def evaluate(env, term, trace=None):
    """Evaluates term in env and returns its Value. Raises an EvaluationError if a reference does not match env."""
    if isinstance(term, Abstraction):
        return Closure(term.intro, term.body, env)

    elif isinstance(term, Neutral):
        arguments = [evaluate(env, argument, trace) for argument in term.arguments]
        return apply(env.lookup(term.applicant), arguments, trace)

    elif isinstance(term, Binding):
        binding = evaluate(env, term.binding, trace)
        if trace is not None:
            trace("ζ", f"{term.intro} = {binding}")
        return evaluate(env.extend(term.intro, binding), term.body, trace)

    raise TypeError(f"cannot evaluate {term!r}: not a Term")


def apply(applicant, arguments, trace=None):
    """Applies applicant to arguments in order. With no arguments, applicant itself is returned."""
    for argument in arguments:
        if not isinstance(applicant, Closure):
            raise NotApplicable(applicant)
        if trace is not None:
            trace("β", f"({applicant} {argument})")

        applicant = evaluate(applicant.closure.extend(applicant.intro, argument), applicant.body, trace)
    return applicant
