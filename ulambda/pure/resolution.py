"""Name resolution: surface terms written with plain names become de Bruijn indexed Terms.

A surface use occurrence either leaves its index out, in which case the nearest enclosing binder with the same label is
chosen, or gives one explicitly, in which case it is checked against the binders in scope rather than trusted. The
scope is threaded as a context: a tuple of labels, nearest binder first, which lines up position for position with the
Environment the resolved term will later be evaluated in.

Builders mirror the core constructors:

```
lam("x", var("x"))                      ; λx x#0
let("f", lam("x", var("x")), neu("f", [lam("z", var("z"))]))
var_with_index("x", 1)                  ; x#1, checked during resolution
```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ulambda.lang.error import InvalidNameRef, UnboundName
from ulambda.pure.syntax import Abstraction, Binding, NameIntro, NameRef, Neutral


class SurfaceTerm(ABC):
    """Superclass of terms built from plain labels, before resolution."""

    @abstractmethod
    def resolve(self, context):
        """This method should return the Term this surface term denotes under context (labels, nearest first), or
        raise a ResolutionError.
        """

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


@dataclass(frozen=True, repr=False)
class SurfaceAbstraction(SurfaceTerm):
    name: str
    body: SurfaceTerm

    def resolve(self, context):
        return Abstraction(NameIntro(self.name), self.body.resolve((self.name,) + context))

    def __str__(self):
        return f"λ{self.name} {self.body}"


@dataclass(frozen=True, repr=False)
class SurfaceNeutral(SurfaceTerm):
    name: str
    index: Optional[int] = None
    arguments: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def resolve(self, context):
        if self.index is None:
            if self.name not in context:
                raise UnboundName(self.name, context)
            applicant = NameRef(self.name, context.index(self.name))

        else:
            if not 0 <= self.index < len(context) or context[self.index] != self.name:
                raise InvalidNameRef(self.name, self.index, context)
            applicant = NameRef(self.name, self.index)

        return Neutral(applicant, [argument.resolve(context) for argument in self.arguments])

    def __str__(self):
        applicant = self.name if self.index is None else f"{self.name}#{self.index}"
        if not self.arguments:
            return applicant
        return "(" + " ".join([applicant] + [str(argument) for argument in self.arguments]) + ")"


@dataclass(frozen=True, repr=False)
class SurfaceBinding(SurfaceTerm):
    name: str
    binding: SurfaceTerm
    body: SurfaceTerm

    def resolve(self, context):
        # binding is resolved outside its own name: let is not recursive
        return Binding(NameIntro(self.name), self.binding.resolve(context), self.body.resolve((self.name,) + context))

    def __str__(self):
        return f"(let {self.name} = {self.binding} in {self.body})"


def lam(name, body):
    """λ<name> <body>"""
    return SurfaceAbstraction(name, body)


def neu(name, arguments):
    """(<name> <argument> ... <argument>)"""
    return SurfaceNeutral(name, None, arguments)


def neu_with_index(name, index, arguments):
    """(<name>#<index> <argument> ... <argument>)"""
    return SurfaceNeutral(name, index, arguments)


def var(name):
    return neu(name, [])


def var_with_index(name, index):
    return neu_with_index(name, index, [])


def let(name, binding, body):
    """let <name> = <binding> in <body>"""
    return SurfaceBinding(name, binding, body)


def def_(name, binding, body):
    """def <name> = <binding> in <body>. Same binder as let."""
    return SurfaceBinding(name, binding, body)


def resolve(surface, context=()):
    """Resolves surface under context (labels, nearest binder first). Raises UnboundName or InvalidNameRef."""
    return surface.resolve(tuple(context))


def to_surface(term):
    """Rebuilds term as a surface term with every index explicit, so resolving it gives back term."""
    if isinstance(term, Abstraction):
        return lam(term.intro.label, to_surface(term.body))
    elif isinstance(term, Neutral):
        return neu_with_index(term.applicant.label, term.applicant.index, [to_surface(arg) for arg in term.arguments])
    elif isinstance(term, Binding):
        return let(term.intro.label, to_surface(term.binding), to_surface(term.body))
    raise TypeError(f"cannot convert {term!r}: not a Term")
