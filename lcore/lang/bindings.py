"""Concrete bindings of the capability contract in lcore/types.py. These show how a host plugs its own constants into
lcore: integer constants, and integer constants plus primitive functions that fold through the delta rule.
"""

from lcore.lang.error import CombineError
from lcore.types import PureTypes


class IntTypes(PureTypes):
    """int constants and str symbols. Applying one int to another is nonsense, so nothing combines."""
    val = int
    sym = str

    def is_val(self, obj):
        return isinstance(obj, int) and not isinstance(obj, bool)


class Primitive:
    """A named built-in function of one argument. fn may return another Primitive to take more arguments."""

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    def __call__(self, arg):
        return self.fn(arg)

    def __eq__(self, other):
        return isinstance(other, Primitive) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"Primitive('{self.name}')"

    def __str__(self):
        return self.name


def _add(x):
    return Primitive(f"+{x}", lambda y: x + y)


SUCC = Primitive("succ", lambda x: x + 1)
ADD = Primitive("+", _add)


class PrimitiveTypes(IntTypes):
    """int constants and Primitives. A Primitive applied to a constant calls it, everything else is an error."""
    val = (int, Primitive)

    def is_val(self, obj):
        return isinstance(obj, Primitive) or super().is_val(obj)

    def duplicate_val(self, val):
        # Primitives wrap plain functions: there is nothing to copy
        return val

    def combine(self, f, x):
        if not isinstance(f, Primitive):
            raise CombineError(f, x)
        if isinstance(x, Primitive):
            raise CombineError(f, x, "expects a number, cannot be applied to")
        return f(x)
