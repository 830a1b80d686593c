"""Lexical analysis for ulambda statements, a shallow wrapper around the λ-term reader. Note that this module does not
provide input file parsing, but rather tokenization of single (already joined) statements.

All grammar can be loosely defined as follows:

```
<import_stmt> ::= "#import " <filepath>     ; imports definitions, relative to the importing file
<named_func>  ::= <name> ":=" <λ-term>      ; evaluated and bound for every later statement
<exec_stmt>   ::= <λ-term>                  ; will be outputted when interpreter is run

<comment>     ::= ";;" <char>*
```

Comments are handled in session.py: there is no dedicated Grammar class for comments.
"""

import re
from abc import abstractmethod, ABC

from ulambda.lang.error import ReadError
from ulambda.pure.lexical import KEYWORDS, read

NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_']*")


class Grammar(ABC):
    """Superclass representing any statement in the ulambda language."""

    def __init__(self, expr, original_expr=None):
        """Assumes check_grammar has been run."""
        if original_expr is None:
            original_expr = Grammar.preprocess(expr)

        self.expr = Grammar.preprocess(expr)
        self.original_expr = original_expr  # used for errors messages
        self._cls = type(self).__name__

    @staticmethod
    @abstractmethod
    def check_grammar(expr, original_expr):
        """This method should check expr's top-level grammar and return whether or not it is valid. It should also
        raise a ReadError if expr's top-level grammar is similar to the accepted grammar but syntactically invalid.
        original_expr is used for error messages.
        """

    @staticmethod
    def preprocess(expr):
        """Removes surrounding whitespace."""
        return expr.strip()

    @classmethod
    def infer(cls, expr, original_expr=None):
        """Infers the type of expr and returns an object of the matching statement class."""
        original_expr = original_expr if original_expr else expr
        for subclass in (ImportStmt, NamedFunc, ExecStmt):
            if subclass.check_grammar(expr, original_expr):
                return subclass(expr, original_expr)

        raise ReadError("'{}' is not valid ulambda grammar", original_expr)

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.expr == self.expr

    def __hash__(self):
        return hash(self.expr)


class ImportStmt(Grammar):
    """Import statement in ulambda. See docstrings for grammar."""

    def __init__(self, expr, original_expr=None):
        super().__init__(expr, original_expr)

        __, path = self.expr.split(" ", 1)
        self.path = Grammar.preprocess(path)[1:-1]  # get rid of surrounding " "

    @staticmethod
    def check_grammar(expr, original_expr):
        expr = Grammar.preprocess(expr)

        if not expr.startswith("#import"):
            return False

        try:
            hash_import, path = expr.split(" ", 1)
            path = Grammar.preprocess(path)

            assert hash_import == "#import"
            assert len(path) > 2 and path.startswith("\"") and path.endswith("\"")

        except (AssertionError, ValueError):
            raise ReadError("#import expects \"FILENAME\"", original_expr)

        return True


class NamedFunc(Grammar):
    """NamedFuncs represent binding statements in ulambda: <NAME> := <λ-term>."""

    def __init__(self, expr, original_expr=None):
        super().__init__(expr, original_expr)

        name, term = self.expr.split(":=")
        self.name = name.strip()
        self.term = read(term.strip())

    @staticmethod
    def check_grammar(expr, original_expr):
        expr = Grammar.preprocess(expr)

        # check 1: is ":=" in expr?
        eq = expr.find(":=")
        if eq == -1:
            return False
        elif eq != expr.rfind(":="):
            start = expr.rfind(":=")
            raise ReadError("'{}' contains illegal reserved ':='", expr, start=start, end=start + 2)

        # check 2: is l-value a name?
        lval = expr[:eq].strip()
        if not NAME.fullmatch(lval):
            raise ReadError("l-value of '{}' is not a valid name", expr, end=eq)
        elif lval in KEYWORDS:
            raise ReadError("l-value of '{}' is the reserved word '{}'", (expr, lval), end=eq)

        # check 3: is there an r-value at all? (its grammar is checked when it is read)
        if not expr[eq + 2:].strip():
            raise ReadError("'{}' is missing an r-value", expr, start=eq, end=eq + 2)

        return True

    def __repr__(self):
        return f"{self._cls}(name='{self.name}', term={repr(self.term)})"


class ExecStmt(Grammar):
    """Thin wrapper around a surface term, which is resolved and evaluated when the session runs."""

    def __init__(self, expr, original_expr=None):
        super().__init__(expr, original_expr)
        self.term = read(self.expr)

    @staticmethod
    def check_grammar(expr, original_expr):
        return bool(Grammar.preprocess(expr))
