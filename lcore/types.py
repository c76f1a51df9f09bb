"""Capability contract for the values and symbols an lcore expression is built from.

lcore never looks inside a constant or a symbol. Everything it needs to know about them goes through a binding: an
instance of a Types subclass. Hosts write one binding per application domain (see lcore/lang/bindings.py for integer
constants and primitive functions).

Required of values: duplication, debug formatting, and a combination rule (combine).
Required of symbols: duplication, debug formatting, and equality (plain ==; symbols need not be hashable).
"""

from abc import ABC, abstractmethod
from copy import deepcopy

from lcore.lang.error import CombineError


class Types(ABC):
    """Binds the constant type (val) and symbol type (sym) of an expression tree."""
    val = object
    sym = object

    def is_val(self, obj):
        return isinstance(obj, self.val)

    def is_sym(self, obj):
        return isinstance(obj, self.sym)

    def duplicate_val(self, val):
        return deepcopy(val)

    def duplicate_sym(self, sym):
        return deepcopy(sym)

    def format_val(self, val):
        return str(val)

    def format_sym(self, sym):
        return str(sym)

    @abstractmethod
    def combine(self, f, x):
        """Returns the value of constant f applied to constant x. Must raise CombineError if f cannot be applied to x.
        This is the delta rule: it is never used by beta reduction, only by delta_reduce.
        """

    def fresh(self, sym, used):
        """Returns a symbol derived from sym that is not equal to any symbol in used, or None if this binding cannot
        make up new symbols. Needed to rename binders that would otherwise capture a free variable.
        """
        return None


class PureTypes(Types):
    """Pure lambda calculus: constants are opaque and never combine. str symbols are renamed with subscripts."""
    SUBS = ["₀", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₉"]

    def combine(self, f, x):
        raise CombineError(f, x)

    @staticmethod
    def subscript(sym, num):
        """Returns sym with subscript of num."""
        return sym + "".join(PureTypes.SUBS[int(digit)] for digit in str(num))

    @staticmethod
    def split(sym):
        """Splits sym into name and subscript (-1 if there is none)."""
        subscript = []
        while sym and sym[-1] in PureTypes.SUBS:
            subscript.insert(0, PureTypes.SUBS.index(sym[-1]))
            sym = sym[:-1]
        return sym, int("".join(str(sub) for sub in subscript)) if subscript else -1

    def fresh(self, sym, used):
        if not isinstance(sym, str):
            return None

        name, __ = PureTypes.split(sym)
        max_subscript = -1
        for other in used:
            if isinstance(other, str):
                other_name, subscript = PureTypes.split(other)
                if other_name == name and subscript > max_subscript:
                    max_subscript = subscript

        return PureTypes.subscript(name, max_subscript + 1)


DEFAULT_TYPES = PureTypes()
