"""Normal-order reduction driver. The core only provides single steps (lcore/pure/reduction.py); this is the host-side
loop that repeats them until a normal form is reached.
"""

from lcore.lang.error import NoNormalForm, StepLimitExceeded
from lcore.pure.lexical import Lambda
from lcore.pure.reduction import get, left_outer_redex, reduce_redex, replace
from lcore.types import DEFAULT_TYPES


class NormalOrderReducer:
    """Implements normal-order (leftmost outermost first) reduction of a tree.

    There is no step limit unless one is asked for, through step_limit or by setting STEP_LIMIT on the (sub)class.
    If delta, applications of a constant to a constant are folded with the binding's combine rule.
    """
    STEP_LIMIT = None
    HISTORY = 100  # number of previous trees kept to detect reductions that go round in circles

    def __init__(self, tree, types=None, error_handler=None, delta=False, step_limit=None):
        self.tree = tree
        self.types = types or DEFAULT_TYPES
        self.error_handler = error_handler
        self.delta = delta
        self.step_limit = step_limit if step_limit is not None else self.STEP_LIMIT

        self.steps = 0
        self.reduced = False
        self._seen = []

    def step(self):
        """Reduces the leftmost outermost redex of self.tree. Returns whether or not there was one."""
        path = left_outer_redex(self.tree, self.delta)
        if path is None:
            self.reduced = True
            return False

        redex = get(self.tree, path)
        self.tree = replace(self.tree, path, reduce_redex(redex, self.types, self.delta))
        self.steps += 1

        if self.error_handler is not None:
            rule = "β" if isinstance(redex.function, Lambda) else "δ"
            self.error_handler.register_step(rule, self.tree)
        return True

    def reduce(self):
        """Steps until self.tree is in normal form and returns it.

        A tree that comes back exactly as it was before has no normal form: if there is an error handler, a warning is
        given and the tree is returned as is, otherwise NoNormalForm is raised.
        """
        self._seen = [self.tree]

        while True:
            if self.step_limit is not None and self.steps >= self.step_limit and not self.normal:
                raise StepLimitExceeded(self.tree, self.step_limit)
            if not self.step():
                break

            if self.tree in self._seen:
                if self.error_handler is None:
                    raise NoNormalForm(self.tree)
                self.error_handler.warn("'{}' does not have a beta-normal form", self.tree.expr)
                break
            self._seen = self._seen[max(0, len(self._seen) - self.HISTORY):] + [self.tree]

        return self.tree

    @property
    def normal(self):
        """Whether or not self.tree is in normal form."""
        return left_outer_redex(self.tree, self.delta) is None

    def __repr__(self):
        return repr(self.tree)

    def __str__(self):
        return self.tree.display()
