"""Stack-based parser for postfix token sequences (see lcore/pure/tokens.py for the encoding).

Tokens are processed strictly in order, with a single operand stack:
    - Constant(v):  push Constant(v)
    - Identifier(s): push Variable(s)
    - LAMBDA:       pop body, then binder (must be a Variable), push Lambda(binder, body)
    - APPLY:        pop argument, then function, push Application(function, argument)

At end of input exactly one expression must be left on the stack. Parsing never returns a partial tree: any problem
raises a ParseError pointing at the offending token.
"""

from lcore.lang.error import EndOfInput, MismatchedTypes, NotAVariable, StackUnderflow, UnexpectedToken
from lcore.pure import tokens
from lcore.pure.lexical import Application, Constant, Lambda, Variable


class PostfixParser:
    """Parses one token sequence. If types is given, token payloads are checked against the binding."""

    def __init__(self, types=None):
        self.types = types
        self.stack = []
        self.tokens = []
        self.position = 0

    def parse(self, token_seq):
        self.stack = []
        self.tokens = list(token_seq)

        handlers = {
            tokens.Constant: self.push_constant,
            tokens.Identifier: self.push_variable,
            tokens.LambdaMarker: self.reduce_lambda,
            tokens.ApplyMarker: self.reduce_apply,
        }

        for position, token in enumerate(self.tokens):
            self.position = position
            handler = handlers.get(type(token))
            if handler is None:
                raise UnexpectedToken(token, self.tokens, self.position)
            handler(token)

        if len(self.stack) != 1:
            raise EndOfInput(len(self.stack), self.tokens)
        return self.stack.pop()

    def pop(self, token):
        if not self.stack:
            raise StackUnderflow(token, self.tokens, self.position)
        return self.stack.pop()

    def push_constant(self, token):
        if self.types is not None and not self.types.is_val(token.val):
            raise MismatchedTypes(token, "constant", self.tokens, self.position)
        self.stack.append(Constant(token.val))

    def push_variable(self, token):
        if self.types is not None and not self.types.is_sym(token.sym):
            raise MismatchedTypes(token, "symbol", self.tokens, self.position)
        self.stack.append(Variable(token.sym))

    def reduce_lambda(self, token):
        body = self.pop(token)
        arg = self.pop(token)
        if not isinstance(arg, Variable):
            raise NotAVariable(arg, self.tokens, self.position)
        self.stack.append(Lambda(arg.name, body))

    def reduce_apply(self, token):
        argument = self.pop(token)
        function = self.pop(token)
        self.stack.append(Application(function, argument))


def parse(token_seq, types=None):
    """Converts a postfix token sequence into an expression tree, raises a ParseError if it does not encode exactly
    one expression.
    """
    return PostfixParser(types).parse(token_seq)
