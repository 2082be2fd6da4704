# scalar_aad/ops/activation.py
from ..core.node import OpTag
from .arithmetic import _as_value, _build


def relu(x):
    """max(0, x); the derivative is 1 only for x > 0."""
    return _build(OpTag.RELU, (_as_value(x),))
