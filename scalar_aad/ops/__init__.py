# scalar_aad/ops/__init__.py

# Convenience re-exports so users can do: from scalar_aad.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .transcendental import tanh, exp, log
from .activation import relu

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "tanh", "exp", "log",
    "relu",
]
