# scalar_aad/ops/transcendental.py
from ..core.node import OpTag
from .arithmetic import _as_value, _build


def tanh(x):
    return _build(OpTag.TANH, (_as_value(x),))


def exp(x):
    return _build(OpTag.EXP, (_as_value(x),))


def log(x):
    """Natural log; raises DomainError for x <= 0."""
    return _build(OpTag.LOG, (_as_value(x),))
