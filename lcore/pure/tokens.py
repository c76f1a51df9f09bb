"""Postfix token encoding of lambda calculus: the abstract I/O format of lcore.

Operators follow their operands, so a token sequence is unambiguous without parentheses and is evaluated with a single
stack (see lcore/pure/parser.py):

```
<program> ::= <term>
<term>    ::= Identifier                ; variable
            | Constant                  ; constant value
            | Identifier <term> λ       ; abstraction: binder, then body
            | <term> <term> @           ; application: function, then argument
```

Example: `λx.x` is `[Identifier("x"), Identifier("x"), LAMBDA]`, and `(λx.x) 0` is
`[Identifier("x"), Identifier("x"), LAMBDA, Constant(0), APPLY]`.
"""

from abc import ABC
from dataclasses import dataclass


class Token(ABC):
    """Superclass of the four postfix tokens."""


@dataclass(frozen=True)
class Identifier(Token):
    sym: object

    def __str__(self):
        return str(self.sym)


@dataclass(frozen=True)
class Constant(Token):
    val: object

    def __str__(self):
        return str(self.val)


@dataclass(frozen=True)
class LambdaMarker(Token):

    def __str__(self):
        return "λ"


@dataclass(frozen=True)
class ApplyMarker(Token):

    def __str__(self):
        return "@"


LAMBDA = LambdaMarker()
APPLY = ApplyMarker()


def ident(name):
    return Identifier(name)


def val(value):
    return Constant(value)
