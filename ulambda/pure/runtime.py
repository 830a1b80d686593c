"""Runtime data for evaluation: values and the environments closures capture.

An Environment is a persistent stack of binding layers. `extend` never touches the environment it is called on, so a
closure that captured an environment keeps seeing exactly the bindings it saw when it was created, however the
environment is extended afterwards.
"""

from abc import ABC
from collections import namedtuple
from dataclasses import dataclass

from ulambda.lang.error import NameMismatch, UnboundReference
from ulambda.pure.syntax import NameIntro, Term


class Value(ABC):
    """Superclass of everything evaluation can produce. Closure is the only variant for now."""

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


_Layer = namedtuple("_Layer", ["intro", "value", "outer"])


class Environment:
    """Ordered (NameIntro, Value) bindings, most recently bound first (index 0)."""

    def __init__(self, bindings=()):
        """bindings are given nearest first, the same order lookup indexes them in."""
        top = None
        length = 0
        for intro, value in reversed(list(bindings)):
            top = _Layer(intro, value, top)
            length += 1

        self._top = top
        self._length = length

    @classmethod
    def _from_layer(cls, top, length):
        env = cls.__new__(cls)
        env._top = top
        env._length = length
        return env

    def extend(self, intro, value):
        """Returns a new environment with (intro, value) in front. self is left as it was."""
        return Environment._from_layer(_Layer(intro, value, self._top), self._length + 1)

    def lookup(self, ref):
        """Returns the value bound ref.index layers out, checking that it was bound under ref.label."""
        if ref.index >= self._length:
            raise UnboundReference(ref, self._length)

        layer = self._top
        for __ in range(ref.index):
            layer = layer.outer

        if layer.intro.label != ref.label:
            raise NameMismatch(ref, layer.intro.label)
        return layer.value

    def labels(self):
        """Bound labels, nearest first. This is the resolution context that matches this environment."""
        return tuple(intro.label for intro, __ in self)

    def __iter__(self):
        layer = self._top
        while layer is not None:
            yield layer.intro, layer.value
            layer = layer.outer

    def __reversed__(self):
        """Bindings from the outermost layer to the current one."""
        return reversed(list(self))

    def __len__(self):
        return self._length

    def __eq__(self, other):
        if not isinstance(other, Environment) or len(self) != len(other):
            return False
        return all(binding == other_binding for binding, other_binding in zip(self, other))

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        return f"Environment('{self}')"

    def __str__(self):
        return "[" + ", ".join(f"{intro} = {value}" for intro, value in self) + "]"


@dataclass(frozen=True, repr=False)
class Closure(Value):
    """λ<closure><intro> <body>: an abstraction together with the environment it was evaluated in."""
    intro: NameIntro
    body: Term
    closure: Environment

    def __str__(self):
        return f"λ{self.closure}{self.intro} {self.body}"
