"""Error handling for lcore. Core operations (parsing, substitution, reduction) only ever raise LambdaErrors: they never
print and never exit. Reporting is left to ErrorHandler, which hosts wrap around their own evaluation loop. If another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


def debug(prefix, value):
    """Prints value with a bold prefix to stderr."""
    print(f"{colored(prefix, attrs=['bold'])}: {value!r}", file=sys.stderr)


class LambdaError(Exception):
    """Templates an error/warning message. {} slots in msg are filled with exprs, which are bolded when displayed."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.plain_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        self.expr = exprs[0] if exprs else ""  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain_msg)


class ParseError(LambdaError):
    """Raised when a token sequence does not encode exactly one expression. self.tokens is the full sequence and
    self.position the index of the offending token (None if the whole sequence is at fault).
    """

    def __init__(self, msg, tokens=(), position=None, exprs=()):
        self.tokens = list(tokens)
        self.position = position

        rendered = [str(token) for token in self.tokens]
        program = " ".join(rendered)

        if position is None:
            start, end = 0, len(program)
        else:
            start = sum(len(token) + 1 for token in rendered[:position])
            end = start + len(rendered[position])

        super().__init__(msg, [program, *exprs], start=start, end=end, diagnosis=bool(program))


class UnexpectedToken(ParseError):

    def __init__(self, token, tokens=(), position=None):
        self.token = token
        super().__init__("'{}' contains unexpected token '{}'", tokens, position, [repr(token)])


class MismatchedTypes(ParseError):

    def __init__(self, token, expected, tokens=(), position=None):
        self.token = token
        self.expected = expected
        super().__init__("'{}': payload of '{}' is not a {}", tokens, position, [str(token), expected])


class StackUnderflow(ParseError):

    def __init__(self, token, tokens=(), position=None):
        self.token = token
        super().__init__("'{}': '{}' needs two operands", tokens, position, [str(token)])


class NotAVariable(ParseError):

    def __init__(self, candidate, tokens=(), position=None):
        self.candidate = candidate
        super().__init__("'{}': cannot bind non-variable '{}'", tokens, position, [candidate.expr])


class EndOfInput(ParseError):
    """The program is incomplete (nothing left on the stack) or over-complete (more than one expression left)."""

    def __init__(self, remaining, tokens=()):
        self.remaining = remaining
        super().__init__("'{}' leaves {} expressions on the stack, expected 1", tokens, None, [str(remaining)])


class ReductionError(LambdaError):
    """Raised when an expression cannot be rewritten as requested."""


class NotReducible(ReductionError):

    def __init__(self, tree, reason="is not a redex"):
        self.tree = tree
        super().__init__("'{}' " + reason, tree.expr)


class VariableCapture(ReductionError):

    def __init__(self, binder, tree):
        self.binder = binder
        self.tree = tree
        super().__init__("'{}' would capture free variable '{}' and it cannot be renamed", [tree.expr, str(binder)])


class NoNormalForm(ReductionError):

    def __init__(self, tree):
        self.tree = tree
        super().__init__("'{}' does not have a beta-normal form", tree.expr)


class StepLimitExceeded(ReductionError):

    def __init__(self, tree, limit):
        self.tree = tree
        self.limit = limit
        super().__init__("'{}' not in normal form after {} steps", [tree.expr, str(limit)], diagnosis=False)


class TooDeep(ReductionError):
    """The tree nests deeper than Python's recursion limit lets a rewrite descend. The message never renders the tree,
    which would recurse just as deep.
    """

    def __init__(self, tree=None):
        self.tree = tree
        super().__init__("expression nests too deeply: maximum recursion depth exceeded", diagnosis=False)


class RecursiveDefinition(LambdaError):
    """Raised when expanding names from an environment never ends because some definition refers back to itself."""

    def __init__(self, names):
        self.names = list(names)
        super().__init__("recursive definitions not supported: '{}'", ", ".join(str(name) for name in self.names),
                         diagnosis=False)


class CombineError(LambdaError):
    """Raised by a binding's combine rule when two constants cannot be combined."""

    def __init__(self, f, x, reason="cannot be applied to"):
        self.f = f
        self.x = x
        super().__init__("'{}' " + reason + " '{}'", [repr(f), repr(x)], diagnosis=False)


class ErrorHandler:
    """Context manager that reports lcore errors/warnings instead of letting them propagate. Exits the process only if
    fatal.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, verbose=False, stream=None):
        self.fatal = fatal
        self.verbose = verbose
        self.stream = stream
        self.steps = []
        self.errors = []

    def register_step(self, rule, tree):
        """Records a reduction step. rule is the name of the rewrite rule that produced tree."""
        self.steps.append((rule, tree))
        if self.verbose:
            debug(rule, tree.expr)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stdout)

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args (same signature as LambdaError)."""
        error = LambdaError(*args, **kwargs)
        self._print(colored("warning: ", self.WARNING, attrs=["bold"]) + error.msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(self.diagnose(error, warning=True))

    def throw(self, error):
        """Prints error, a LambdaError, and exits if fatal."""
        self.errors.append(error)

        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", self.ERROR, attrs=["bold"])

        error_msg += colored("error: ", self.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(self.diagnose(error))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LambdaError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(TooDeep())
        elif exc_type is not None and issubclass(exc_type, LambdaError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LambdaError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
