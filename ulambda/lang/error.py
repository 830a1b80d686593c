"""Error handling for ulambda. Every error raised by the reader, the resolver or the evaluator is a LambdaException: if
another type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


def render_context(context):
    """Renders a resolution context (labels, nearest binder first) for error messages."""
    return "[" + ", ".join(context) + "]"


class LambdaException(Exception):
    """Templates an error/warning message so that it can be used to throw a ulambda error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0] if exprs else ""  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ReadError(LambdaException):
    """Raised when text is not valid λ-term or statement grammar."""


class ResolutionError(LambdaException):
    """Raised when a surface term cannot be turned into a de Bruijn indexed term."""


class UnboundName(ResolutionError):

    def __init__(self, label, context):
        self.label = label
        self.index = None
        self.context = tuple(context)

        msg = "name '{}' is not bound in the context '{}'"
        super().__init__(msg, (label, render_context(self.context)), diagnosis=False)


class InvalidNameRef(ResolutionError):

    def __init__(self, label, index, context):
        self.label = label
        self.index = index
        self.context = tuple(context)

        msg = "the name ref with label '{}' and index '{}' is invalid in the context '{}'"
        super().__init__(msg, (label, index, render_context(self.context)), diagnosis=False)


class EvaluationError(LambdaException):
    """Raised when a term cannot be evaluated in the environment it was given."""


class UnboundReference(EvaluationError):
    """The environment has no layer at the reference's index."""

    def __init__(self, ref, length):
        self.label = ref.label
        self.index = ref.index
        self.length = length

        msg = "'{}' is unbound: environment of {} binding(s) doesn't have binding at index '{}'"
        super().__init__(msg, (ref, length, ref.index), diagnosis=False)


class NameMismatch(EvaluationError):
    """The layer at the reference's index was introduced under a different name."""

    def __init__(self, ref, actual):
        self.label = ref.label
        self.index = ref.index
        self.actual = actual

        msg = "'{}' mismatch: binding at index '{}' was expected to have the name '{}' but it actually has the name '{}'"
        super().__init__(msg, (ref, ref.index, ref.label, actual), diagnosis=False)


class NotApplicable(EvaluationError):
    """Only closures can be applied to arguments."""

    def __init__(self, applicant):
        self.applicant = applicant
        super().__init__("'{}' is not applicable", str(applicant), diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom ulambda errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, trace=False):
        self.fatal = fatal
        self.trace = trace
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, step, expr):
        """Reports one evaluation step (β: application, ζ: let). Silent unless tracing."""
        if self.trace:
            print(colored(f"  {step} ", ErrorHandler.STEP, attrs=["bold"]) + expr)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = LambdaException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                location = f"{file}:{line_num}: "

        error_msg = colored(location, attrs=["bold"]) if location else ""
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a LambdaException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LambdaException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LambdaException("maximum recursion depth exceeded during evaluation"))
        elif exc_type is not None and issubclass(exc_type, LambdaException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LambdaException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
