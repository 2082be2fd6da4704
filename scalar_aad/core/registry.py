# scalar_aad/core/registry.py
"""
Operator table: the single source of truth for forward values and local
derivatives.

Every primitive is described by an ``OpRule``:
    forward(args, exponent)           -> output value
    local_grads(args, out, exponent)  -> (∂out/∂arg_0, ∂out/∂arg_1, ...)

``args`` holds the parents' data in parent order, ``out`` the node's own data
and ``exponent`` the Power constant (``None`` for every other operator).
Builders in ``scalar_aad.ops`` call ``forward`` when a node is created, the
engine calls ``local_grads`` during the reverse sweep, and the gradient
checker replays ``forward`` to re-evaluate a graph. Composite operators
(sub, div, neg) have no entry here; they are built from these primitives.
"""
from __future__ import annotations
from typing import Callable, Dict, NamedTuple, Optional, Tuple
import numpy as np

from .node import OpTag
from .errors import DomainError


class OpRule(NamedTuple):
    arity: int
    forward: Callable[[Tuple[np.float64, ...], Optional[float]], np.float64]
    local_grads: Callable[[Tuple[np.float64, ...], np.float64, Optional[float]], Tuple[float, ...]]


def _log_forward(args, exponent):
    (a,) = args
    if a <= 0:
        raise DomainError("log", float(a), f"log is undefined for non-positive operand {float(a)!r}")
    return np.log(a)


def _relu_forward(args, exponent):
    (a,) = args
    return np.float64(0.0) if a < 0 else a


RULES: Dict[OpTag, OpRule] = {
    OpTag.ADD: OpRule(
        2,
        lambda args, e: args[0] + args[1],
        lambda args, out, e: (1.0, 1.0),
    ),
    OpTag.MUL: OpRule(
        2,
        lambda args, e: args[0] * args[1],
        lambda args, out, e: (args[1], args[0]),
    ),
    OpTag.POW: OpRule(
        1,
        lambda args, e: args[0] ** e,
        lambda args, out, e: (0.0 if e == 0 else e * args[0] ** (e - 1),),
    ),
    OpTag.RELU: OpRule(
        1,
        _relu_forward,
        lambda args, out, e: (1.0 if args[0] > 0 else 0.0,),
    ),
    OpTag.TANH: OpRule(
        1,
        lambda args, e: np.tanh(args[0]),
        lambda args, out, e: (1.0 - out * out,),
    ),
    OpTag.EXP: OpRule(
        1,
        lambda args, e: np.exp(args[0]),
        lambda args, out, e: (out,),
    ),
    OpTag.LOG: OpRule(
        1,
        _log_forward,
        lambda args, out, e: (1.0 / args[0],),
    ),
}


def get_rule(op: OpTag) -> Optional[OpRule]:
    """Return the rule for ``op`` or ``None`` if the tag is unregistered."""
    return RULES.get(op)
