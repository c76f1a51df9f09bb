"""Environments: mappings from names to expressions, used to expand named terms before reduction."""

from abc import abstractmethod, ABC

from lcore.lang.error import RecursiveDefinition
from lcore.pure.lexical import Variable
from lcore.pure.reduction import substitute
from lcore.types import DEFAULT_TYPES


class Env(ABC):
    """Abstracts over different ways of implementing an environment."""

    @abstractmethod
    def subst(self, name, types=None):
        """Returns a copy of the expression bound to name, or Variable(name) if name is unbound."""

    @abstractmethod
    def names(self):
        """Names bound in this environment."""

    def expand(self, tree, types=None):
        """Replaces free variables of tree bound in this environment with their definitions until none are left. Names
        used inside definitions are expanded too, so with a := b and b := 0, a expands to 0 and a b to 0 0.

        Each round substitutes every pending name once. Without cycles no chain of definitions is longer than the
        environment, so names still pending after len(names()) rounds raise RecursiveDefinition.
        """
        types = types or DEFAULT_TYPES
        names = self.names()
        rounds = 0

        pending = [name for name in tree.free_vars() if name in names]
        while pending:
            if rounds == len(names):
                raise RecursiveDefinition(pending)
            for name in pending:
                tree = substitute(tree, name, self.subst(name, types), types)
            rounds += 1
            pending = [name for name in tree.free_vars() if name in names]
        return tree


class DictEnv(Env):
    """Environment backed by a dict of name: expression."""

    def __init__(self, bindings=None):
        self.bindings = dict(bindings) if bindings else {}

    def define(self, name, tree):
        self.bindings[name] = tree

    def subst(self, name, types=None):
        if name in self.bindings:
            return self.bindings[name].duplicate(types)
        return Variable(name)

    def names(self):
        return list(self.bindings)
