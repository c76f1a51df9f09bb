"""Lambda calculus expression trees.

```
<λ-term> ::= <variable>                 ; Variable: refers to the nearest enclosing binder of the same name
           | <constant>                 ; Constant: opaque host value, see lcore/types.py
           | "λ" <variable> "." <λ-term>  ; Lambda: abstraction, owns its body
           | <λ-term> <λ-term>          ; Application: function applied to argument, left associative
```

Trees are immutable: substitution and reduction never modify a node, they build new ones. Names are structural (not De
Bruijn indices), so two trees that only differ in binder names are different (==) but alpha-equivalent
(alpha_equals).

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from abc import abstractmethod, ABC
from dataclasses import dataclass

from lcore.lang.error import VariableCapture
from lcore.pure import tokens
from lcore.types import DEFAULT_TYPES


def _union(*groups):
    """Concatenates groups of symbols, dropping duplicates (by ==, symbols need not be hashable)."""
    result = []
    for group in groups:
        for sym in group:
            if sym not in result:
                result.append(sym)
    return result


class Expression(ABC):
    """Superclass of the four kinds of λ-term."""

    @property
    @abstractmethod
    def nodes(self):
        """Child expressions, left to right."""

    @abstractmethod
    def rebuild(self, nodes):
        """Returns a node of the same kind as self with nodes as its children."""

    @abstractmethod
    def render(self, types=None):
        """λ-notation of self. Values and symbols are formatted through types if given, else with str."""

    @abstractmethod
    def duplicate(self, types=None):
        """Structural copy of self. Values and symbols are copied through types."""

    @abstractmethod
    def free_vars(self):
        """Symbols occurring free in self, in order of first occurrence."""

    @abstractmethod
    def all_vars(self):
        """Every symbol in self, bound or free."""

    @abstractmethod
    def bound_vars(self):
        """Symbols bound by some λ in self. A symbol can be both bound and free: x in (λx.x) x."""

    @abstractmethod
    def sub(self, var, new_term, types=None, free=None):
        """Returns a new tree in which every free occurrence of var is replaced by a duplicate of new_term. Binders that
        would capture a free variable of new_term are renamed with types.fresh first. free caches
        new_term.free_vars() through the recursion.
        """

    @abstractmethod
    def alpha_equals(self, other, bound=()):
        """Whether or not self and other are equal up to renaming of binders. bound is the stack of (self binder,
        other binder) pairs entered so far, innermost last.
        """

    @abstractmethod
    def postfix(self):
        """Encodes self as a list of postfix tokens. lcore.pure.parser.parse is its inverse."""

    @property
    def expr(self):
        return self.render()

    @property
    def tokenizable(self):
        """Whether or not this node needs parentheses when it appears inside another one."""
        return bool(self.nodes)

    def display(self, indents=0):
        """Recursively displays the tree in readable format.

        Format:
        <Expression>(expr='<expr>', nodes=[
            <Expression>(expr='<expr>', nodes=[
                ...
                <Expression>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{type(self).__name__}('{self.expr}')"

    def __str__(self):
        return self.expr


@dataclass(frozen=True, repr=False)
class Variable(Expression):
    name: object

    @property
    def nodes(self):
        return []

    def rebuild(self, nodes):
        return self

    def render(self, types=None):
        return types.format_sym(self.name) if types else str(self.name)

    def duplicate(self, types=None):
        types = types or DEFAULT_TYPES
        return Variable(types.duplicate_sym(self.name))

    def free_vars(self):
        return [self.name]

    def all_vars(self):
        return [self.name]

    def bound_vars(self):
        return []

    def sub(self, var, new_term, types=None, free=None):
        if self.name == var:
            return new_term.duplicate(types)
        return self.duplicate(types)

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Variable):
            return False

        mine = theirs = None
        for depth in range(len(bound) - 1, -1, -1):
            binder, other_binder = bound[depth]
            if mine is None and binder == self.name:
                mine = depth
            if theirs is None and other_binder == other.name:
                theirs = depth

        if mine is None and theirs is None:
            return self.name == other.name
        return mine == theirs

    def postfix(self):
        return [tokens.Identifier(self.name)]


@dataclass(frozen=True, repr=False)
class Constant(Expression):
    val: object

    @property
    def nodes(self):
        return []

    def rebuild(self, nodes):
        return self

    def render(self, types=None):
        return types.format_val(self.val) if types else str(self.val)

    def duplicate(self, types=None):
        types = types or DEFAULT_TYPES
        return Constant(types.duplicate_val(self.val))

    def free_vars(self):
        return []

    def all_vars(self):
        return []

    def bound_vars(self):
        return []

    def sub(self, var, new_term, types=None, free=None):
        return self.duplicate(types)

    def alpha_equals(self, other, bound=()):
        return isinstance(other, Constant) and self.val == other.val

    def postfix(self):
        return [tokens.Constant(self.val)]


@dataclass(frozen=True, repr=False)
class Lambda(Expression):
    binder: object
    body: Expression

    @property
    def nodes(self):
        return [self.body]

    def rebuild(self, nodes):
        body, = nodes
        return Lambda(self.binder, body)

    def render(self, types=None):
        binder = types.format_sym(self.binder) if types else str(self.binder)
        if isinstance(self.body, Application):
            return f"λ{binder}.({self.body.render(types)})"
        return f"λ{binder}.{self.body.render(types)}"

    def duplicate(self, types=None):
        types = types or DEFAULT_TYPES
        return Lambda(types.duplicate_sym(self.binder), self.body.duplicate(types))

    def free_vars(self):
        return [sym for sym in self.body.free_vars() if sym != self.binder]

    def all_vars(self):
        return _union([self.binder], self.body.all_vars())

    def bound_vars(self):
        return _union([self.binder], self.body.bound_vars())

    def sub(self, var, new_term, types=None, free=None):
        types = types or DEFAULT_TYPES

        # var is shadowed, or simply absent: nothing to replace below this binder
        if self.binder == var or var not in self.body.free_vars():
            return self.duplicate(types)

        if free is None:
            free = new_term.free_vars()

        binder, body = self.binder, self.body
        if binder in free:
            renamed = types.fresh(binder, _union(free, body.all_vars(), [var]))
            if renamed is None:
                raise VariableCapture(binder, self)
            body = body.sub(binder, Variable(renamed), types)
            binder = renamed

        return Lambda(types.duplicate_sym(binder), body.sub(var, new_term, types, free))

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Lambda):
            return False
        return self.body.alpha_equals(other.body, bound + ((self.binder, other.binder),))

    def postfix(self):
        return [tokens.Identifier(self.binder), *self.body.postfix(), tokens.LAMBDA]


@dataclass(frozen=True, repr=False)
class Application(Expression):
    function: Expression
    argument: Expression

    @property
    def nodes(self):
        return [self.function, self.argument]

    def rebuild(self, nodes):
        function, argument = nodes
        return Application(function, argument)

    def render(self, types=None):
        function = self.function.render(types)
        if isinstance(self.function, Lambda):
            function = f"({function})"

        argument = self.argument.render(types)
        if self.argument.tokenizable:
            argument = f"({argument})"

        return f"{function} {argument}"

    def duplicate(self, types=None):
        types = types or DEFAULT_TYPES
        return Application(self.function.duplicate(types), self.argument.duplicate(types))

    def free_vars(self):
        return _union(self.function.free_vars(), self.argument.free_vars())

    def all_vars(self):
        return _union(self.function.all_vars(), self.argument.all_vars())

    def bound_vars(self):
        return _union(self.function.bound_vars(), self.argument.bound_vars())

    def sub(self, var, new_term, types=None, free=None):
        return Application(
            self.function.sub(var, new_term, types, free),
            self.argument.sub(var, new_term, types, free)
        )

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Application):
            return False
        return self.function.alpha_equals(other.function, bound) and self.argument.alpha_equals(other.argument, bound)

    def postfix(self):
        return [*self.function.postfix(), *self.argument.postfix(), tokens.APPLY]


def lam(binder, body):
    return Lambda(binder, body)


def val(value):
    return Constant(value)


def var(name):
    return Variable(name)


def apply(function, argument, *more):
    """Applies function to one or more arguments, associating by left: apply(f, a, b) = (f a) b."""
    result = Application(function, argument)
    for arg in more:
        result = Application(result, arg)
    return result
