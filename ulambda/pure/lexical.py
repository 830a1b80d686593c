"""Reader for the textual λ-term syntax. Produces surface terms, which still have to be resolved before evaluation.

The accepted syntax is the display syntax of core terms, except that indices may be left out:

```
<seq>  ::= <item>+                                ; more than one item: the first is the applicant of the rest
<item> ::= <name> | <name> "#" <index>            ; reference, index optional (checked during resolution)
         | <number>                               ; Church numeral literal
         | "(" <seq> ")"
         | ("λ" | "\") <name> ["."] <seq>         ; abstraction
         | ("let" | "def") <name> "=" <seq> "in" <seq>
```

- abstraction and let bodies are greedy: λx f x = λx (f x) != (λx f) x
- applicants must be references: (λx x) y is not a valid λ-term here, since core applications apply names
- applications of applications are flattened: ((f a) b) = (f a b)
"""

import re
from collections import namedtuple

from ulambda.lang.error import ReadError
from ulambda.lang.numerical import cnumber
from ulambda.pure.resolution import SurfaceNeutral, lam, let, neu_with_index

Token = namedtuple("Token", ["kind", "text", "start"])

KEYWORDS = {"let": "let", "def": "let", "in": "in"}

TOKENS = re.compile(r"""
      (?P<space>\s+)
    | (?P<lambda>[λ\\])
    | (?P<period>\.)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<equals>=)
    | (?P<name>[A-Za-z_][A-Za-z0-9_']*(?:\#[0-9]+)?)
    | (?P<number>[0-9]+)
""", re.VERBOSE)


def tokenize(expr):
    """Splits expr into Tokens, dropping whitespace. Keywords get their own kind."""
    tokens = []
    pos = 0
    while pos < len(expr):
        match = TOKENS.match(expr, pos)
        if match is None:
            raise ReadError("'{}' contains illegal character '{}'", (expr, expr[pos]), start=pos, end=pos + 1)

        kind, text = match.lastgroup, match.group()
        if kind == "name" and text.split("#")[0] in KEYWORDS:
            if "#" in text:
                msg = "'{}' uses reserved word '{}' as a name"
                raise ReadError(msg, (expr, text.split("#")[0]), start=pos, end=match.end())
            kind = KEYWORDS[text]

        if kind != "space":
            tokens.append(Token(kind, text, pos))
        pos = match.end()

    return tokens


class Reader:
    """Recursive descent reader over the tokens of a single expression."""

    def __init__(self, expr):
        self.expr = expr
        self.tokens = tokenize(expr)
        self.pos = 0

    def read(self):
        """Reads the whole expression as one surface term."""
        if not self.tokens:
            raise ReadError("λ-term cannot be empty", self.expr)

        term = self._sequence()
        if not self._done():
            token = self._peek()
            self._fail("'{}' has unexpected '{}'", token)
        return term

    def _done(self):
        return self.pos >= len(self.tokens)

    def _peek(self):
        return None if self._done() else self.tokens[self.pos]

    def _next(self):
        token = self._peek()
        if token is None:
            raise ReadError("'{}' ends unexpectedly", self.expr, start=len(self.expr), end=len(self.expr) + 1)
        self.pos += 1
        return token

    def _expect(self, kind, what):
        token = self._next()
        if token.kind != kind:
            self._fail("'{}' expected " + what + ", got '{}'", token)
        return token

    def _fail(self, msg, token):
        raise ReadError(msg, (self.expr, token.text), start=token.start, end=token.start + len(token.text))

    def _binder(self):
        token = self._expect("name", "a name")
        if "#" in token.text:
            self._fail("'{}' has an index on binder '{}'", token)
        return token.text

    def _sequence(self):
        """One or more items up to a closing parenthesis, 'in', or the end of the expression."""
        first = self._peek()
        items = []
        while not self._done() and self._peek().kind not in ("close", "in"):
            greedy = self._peek().kind in ("lambda", "let")
            items.append(self._item())
            if greedy:
                break

        if not items:
            if first is None:
                raise ReadError("'{}' ends unexpectedly", self.expr, start=len(self.expr), end=len(self.expr) + 1)
            self._fail("'{}' expected a λ-term before '{}'", first)

        applicant, *arguments = items
        if not arguments:
            return applicant
        if not isinstance(applicant, SurfaceNeutral):
            self._fail("'{}' applies '{}', but only names can be applied", first)
        return neu_with_index(applicant.name, applicant.index, applicant.arguments + tuple(arguments))

    def _item(self):
        token = self._next()

        if token.kind == "name":
            label, __, index = token.text.partition("#")
            return neu_with_index(label, int(index) if index else None, [])

        elif token.kind == "number":
            return cnumber(token.text)

        elif token.kind == "open":
            term = self._sequence()
            self._expect("close", "')'")
            return term

        elif token.kind == "lambda":
            name = self._binder()
            if not self._done() and self._peek().kind == "period":
                self._next()
            return lam(name, self._sequence())

        elif token.kind == "let":
            name = self._binder()
            self._expect("equals", "'='")
            binding = self._sequence()
            self._expect("in", "'in'")
            return let(name, binding, self._sequence())

        self._fail("'{}' has unexpected '{}'", token)


def read(expr):
    """Reads expr into a surface term. Raises ReadError if expr is not valid λ-term grammar."""
    return Reader(expr).read()
