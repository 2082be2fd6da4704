# scalar_aad/core/var.py
from __future__ import annotations
import numpy as np
from typing import Any, Optional, Tuple

from . import tape as tape_mod


class Value:
    """
    A scalar node of the computation graph.

    Attributes
    ----------
    data : np.float64
        Forward value. Fixed at construction; only an optimizer writes it
        between training steps.
    grad : float
        Accumulated ∂root/∂self of the last reverse pass. Starts at 0.0.
    op : Optional[OpTag]
        Operator that produced this node, ``None`` for leaves.
    parents : Tuple[Value, ...]
        Operands in operator order. Shared: one node may feed many others.
    exponent : Optional[float]
        Constant exponent of a Power node, ``None`` otherwise.
    name : Optional[str]
        Optional debug/display label.
    tape_idx : Optional[int]
        Slot on the tape that was active when this node was created.

    Equality and hashing are by identity: two nodes holding the same number
    are different graph positions.
    """

    def __init__(self, data: Any, *, name: Optional[str] = None):
        if isinstance(data, bool) or not isinstance(data, (int, float, np.integer, np.floating)):
            raise TypeError(
                f"Value only accepts real scalars (int, float, numpy scalar), "
                f"but got {type(data)}"
            )
        self.data = np.float64(data)
        self.grad = 0.0
        self.op = None
        self.parents: Tuple[Value, ...] = ()
        self.exponent = None
        self.name = name
        self.tape_idx = None

        tape = tape_mod.current_tape()
        if tape is not None:
            tape.record(self)

    @classmethod
    def _from_op(cls, data, parents, op, exponent=None) -> "Value":
        """Create an operator node; parents and tag are set before recording."""
        out = cls.__new__(cls)
        out.data = np.float64(data)
        out.grad = 0.0
        out.op = op
        out.parents = tuple(parents)
        out.exponent = exponent
        out.name = None
        out.tape_idx = None
        tape = tape_mod.current_tape()
        if tape is not None:
            tape.record(out)
        return out

    @property
    def is_leaf(self) -> bool:
        return self.op is None

    def __repr__(self):
        label = f", name={self.name!r}" if self.name else ""
        op = f", op={self.op}" if self.op is not None else ""
        return f"Value(data={float(self.data)!r}, grad={float(self.grad)!r}{op}{label})"

    def __float__(self):
        return float(self.data)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    # Unary primitives
    def relu(self):
        from ..ops.activation import relu
        return relu(self)

    def tanh(self):
        from ..ops.transcendental import tanh
        return tanh(self)

    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def log(self):
        from ..ops.transcendental import log
        return log(self)

    # Reverse mode
    def backward(self):
        from .engine import backward
        backward(self)

    def zero_grad(self):
        from .engine import zero_grad
        zero_grad(self)
