"""Embeddable lambda calculus core: postfix token sequences in, expression trees out, and the substitution engine that
rewrites them.

For reference:
- "pure": the core itself, lcore/pure (tokens, trees, parser, substitution and single-step reduction)
- "lang": host-side scaffolding, lcore/lang (errors, example bindings, environments, Church numerals, reduction loop)

Basic program flow:
    1. Tokens: a caller-supplied postfix token sequence, see lcore/pure/tokens.py
    2. Parser: a single operand stack turns the sequence into exactly one expression tree, see lcore/pure/parser.py
    3. Reduction: beta_reduce performs one step, NormalOrderReducer repeats steps until a normal form is reached

Constants and symbols are opaque: their capabilities are declared by a binding, see lcore/types.py.
"""

from lcore.lang.error import (
    CombineError, EndOfInput, ErrorHandler, LambdaError, MismatchedTypes, NoNormalForm, NotAVariable, NotReducible,
    ParseError, RecursiveDefinition, ReductionError, StackUnderflow, StepLimitExceeded, TooDeep, UnexpectedToken,
    VariableCapture
)
from lcore.lang.reducer import NormalOrderReducer
from lcore.pure import tokens
from lcore.pure.lexical import Application, Constant, Expression, Lambda, Variable
from lcore.pure.parser import PostfixParser, parse
from lcore.pure.reduction import beta_reduce, delta_reduce, substitute
from lcore.types import PureTypes, Types
