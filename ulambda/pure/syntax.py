"""Core syntax of the untyped lambda calculus: names and terms.

Use occurrences carry a de Bruijn index alongside their label. The index counts binding layers outward from the use
to its binder, innermost binder first:

```
<term> ::= "λ" <name_intro> <term>                        ; Abstraction
         | <name_ref>                                     ; Neutral without arguments (a bare reference)
         | "(" <name_ref> <term>+ ")"                     ; Neutral: a reference applied to a spine of arguments
         | "(let " <name_intro> " = " <term> " in " <term> ")"  ; Binding, not recursive

<name_ref> ::= <label> "#" <index>
```

The grammar above is also how terms are displayed. Terms are immutable and compare structurally.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class NameIntro:
    """Binding occurrence of a name: a λ parameter or a let binder."""
    label: str

    def __str__(self):
        return self.label


@dataclass(frozen=True)
class NameRef:
    """Use occurrence of a name, resolved to the binder `index` layers out."""
    label: str
    index: int

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index < 0:
            raise ValueError(f"index of '{self.label}' must be a natural number, got {self.index!r}")

    def __str__(self):
        return f"{self.label}#{self.index}"


class Term(ABC):
    """Superclass of the closed set of λ-terms: Abstraction, Neutral and Binding."""

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


@dataclass(frozen=True, repr=False)
class Abstraction(Term):
    """λ<intro> <body>: binds one parameter, so body sees one extra layer."""
    intro: NameIntro
    body: Term

    def __str__(self):
        return f"λ{self.intro} {self.body}"


@dataclass(frozen=True, repr=False)
class Neutral(Term):
    """A reference applied, left to right, to zero or more arguments. Zero arguments is a bare variable."""
    applicant: NameRef
    arguments: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))

    @classmethod
    def var(cls, ref):
        """<ref>"""
        return cls(ref, ())

    def __str__(self):
        if not self.arguments:
            return str(self.applicant)
        return "(" + " ".join([str(self.applicant)] + [str(argument) for argument in self.arguments]) + ")"


@dataclass(frozen=True, repr=False)
class Binding(Term):
    """let <intro> = <binding> in <body>. binding is scoped outside intro, body inside it."""
    intro: NameIntro
    binding: Term
    body: Term

    def __str__(self):
        return f"(let {self.intro} = {self.binding} in {self.body})"
