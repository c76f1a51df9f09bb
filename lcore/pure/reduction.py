"""Substitution and single-step reduction of expression trees.

- beta:  (λx.M) N  ->  M[x := N]
- delta: f x       ->  types.combine(f, x), where f and x are both constants (opt-in, never part of beta_reduce)

Each function builds and returns a new tree: inputs are never modified. Nothing here loops: driving an expression to
normal form is left to the caller (see lcore/lang/reducer.py), since a normal form might not exist.
"""

from lcore.lang.error import NotReducible, TooDeep
from lcore.pure.lexical import Application, Constant, Lambda
from lcore.types import DEFAULT_TYPES


def substitute(target, var, replacement, types=None):
    """Returns target with every free occurrence of var replaced by a duplicate of replacement.

    - Lambdas binding var shadow it, so their bodies are left alone.
    - Lambdas whose binder occurs free in replacement are renamed (types.fresh) before substituting in their body, so
      that free variables of replacement stay free. Raises VariableCapture if types cannot provide a new name.

    Raises TooDeep if target nests deeper than the recursion limit allows.
    """
    try:
        return target.sub(var, replacement, types or DEFAULT_TYPES)
    except RecursionError:
        raise TooDeep(target) from None


def is_redex(tree, delta=False):
    """Whether or not tree can be reduced in one step at its root."""
    if not isinstance(tree, Application):
        return False
    if isinstance(tree.function, Lambda):
        return True
    return delta and isinstance(tree.function, Constant) and isinstance(tree.argument, Constant)


def beta_reduce(tree, types=None):
    """One beta reduction step at the root of tree. tree must be an Application of a Lambda, otherwise NotReducible
    is raised. Raises TooDeep if the body nests too deeply to substitute into.
    """
    if not isinstance(tree, Application):
        raise NotReducible(tree, "is not an application")
    if not isinstance(tree.function, Lambda):
        raise NotReducible(tree, "does not apply an abstraction")

    abstraction, argument = tree.nodes
    return substitute(abstraction.body, abstraction.binder, argument, types)


def delta_reduce(tree, types=None):
    """One delta reduction step at the root of tree: folds an Application of two Constants with types.combine. Raises
    NotReducible for any other shape and lets the binding's CombineError through.
    """
    types = types or DEFAULT_TYPES
    if not isinstance(tree, Application):
        raise NotReducible(tree, "is not an application")
    if not isinstance(tree.function, Constant) or not isinstance(tree.argument, Constant):
        raise NotReducible(tree, "does not apply a constant to a constant")

    return Constant(types.combine(tree.function.val, tree.argument.val))


def reduce_redex(tree, types=None, delta=False):
    """Reduces the redex at the root of tree with whichever rule applies."""
    if delta and not isinstance(tree.function, Lambda):
        return delta_reduce(tree, types)
    return beta_reduce(tree, types)


def left_outer_redex(tree, delta=False):
    """Returns the index path to the leftmost outermost redex in tree, or None if tree is in normal form."""

    def find_outer_redex(node, path):
        if is_redex(node, delta):
            return path
        for idx, sub_node in enumerate(node.nodes):
            result = find_outer_redex(sub_node, path + [idx])
            if result is not None:
                return result
        return None

    try:
        return find_outer_redex(tree, [])
    except RecursionError:
        raise TooDeep(tree) from None


def get(tree, idxs):
    """Gets node at positions specified by idxs. idxs=[] will return tree."""
    if not idxs:
        return tree

    this, *others = idxs
    return get(tree.nodes[this], others)


def replace(tree, idxs, node):
    """Returns a copy of tree with the node at positions specified by idxs replaced by node. idxs=[] returns node."""
    if not idxs:
        return node

    this, *others = idxs
    nodes = list(tree.nodes)
    nodes[this] = replace(nodes[this], others, node)
    return tree.rebuild(nodes)
