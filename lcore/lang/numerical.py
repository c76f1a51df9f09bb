"""Natural numbers encoded as Church numerals: n is λf.λx.f (f (... (f x))), with n applications of f.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lcore.lang.error import LambdaError
from lcore.pure.lexical import Application, Lambda, Variable


def cnumber(num, f="f", x="x"):
    """Returns the Church numeral of num (cnum = Church numeral). f and x are the binder names to use."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise LambdaError("expected natural number, got '{}'", repr(num), internal=True)

    body = Variable(x)
    for __ in range(num):
        body = Application(Variable(f), body)

    return Lambda(f, Lambda(x, body))


def number(cnum):
    """Returns the number encoded by Church numeral cnum, or None if cnum isn't a Church numeral."""
    if not isinstance(cnum, Lambda) or not isinstance(cnum.body, Lambda):
        return None

    f, x = cnum.binder, cnum.body.binder
    if f == x:
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        if nth_body.function != Variable(f):
            return None
        nth_body = nth_body.argument
        num += 1

    return num if nth_body == Variable(x) else None
