# scalar_aad/ops/arithmetic.py
import numbers

from ..core.var import Value
from ..core.node import OpTag
from ..core.registry import RULES
from ..core.errors import DomainError


def _as_value(x):
    """Ensure x is a Value; otherwise wrap it as a constant leaf."""
    return x if isinstance(x, Value) else Value(x)


def _build(op, parents, exponent=None):
    """
    Generic primitive:
      - computes out.data with the registered forward rule
      - records op tag, parents (in operand order) and exponent on the node
    """
    args = tuple(p.data for p in parents)
    data = RULES[op].forward(args, exponent)
    return Value._from_op(data, parents, op, exponent)


def add(x, y): return _build(OpTag.ADD, (_as_value(x), _as_value(y)))
def mul(x, y): return _build(OpTag.MUL, (_as_value(x), _as_value(y)))


def pow(x, exponent):
    """
    Power with a constant exponent:
      out.data = x.data ** exponent
      ∂out/∂x  = exponent * x^(exponent-1)

    The exponent is not a graph node. A negative base with a non-integer
    exponent yields NaN, as in numpy. x**0 is the constant 1, so its
    derivative is 0 everywhere (including x == 0).
    """
    if isinstance(exponent, Value) or not isinstance(exponent, numbers.Real):
        raise TypeError(f"pow only supports int/float exponents, got {type(exponent)}")
    return _build(OpTag.POW, (_as_value(x),), exponent=float(exponent))


# Composites: expressed through add/mul/pow only, so they need no rule of their own.
def neg(x):
    return mul(x, -1.0)


def sub(x, y):
    return add(x, neg(y))


def div(x, y):
    """x / y as x * y**-1; division by zero raises DomainError."""
    y = _as_value(y)
    if y.data == 0:
        raise DomainError("div", float(y.data), f"div is undefined for divisor {float(y.data)!r} (division by zero)")
    return mul(x, pow(y, -1.0))
