# scalar_aad/core/__init__.py

"""
Core public API for the scalar_aad package.

Exports:
    Value          : The differentiable scalar node.
    OpTag          : Operator tags carried by non-leaf nodes.
    Tape, use_tape : Optional recording arena and the context manager that activates it.
    topological_order : Parents-before-children ordering of a graph.
    backward       : Run a single reverse pass from a root.
    zero_grad      : Reset every gradient reachable from a root.
    grad, grads    : Convenience: gradients of a function at a point.
    value          : Convenience: extract the primal value from a Value.
"""

from .errors import ScalarAADError, DomainError, GraphDefect
from .node import OpTag
from .var import Value
from .tape import Tape, use_tape, current_tape
from .graph import topological_order
from .engine import backward, zero_grad, graph_lock
from .seeds import grad, grads, grads_list, value

__all__ = [
    "ScalarAADError", "DomainError", "GraphDefect",
    "OpTag",
    "Value",
    "Tape", "use_tape", "current_tape",
    "topological_order",
    "backward", "zero_grad", "graph_lock",
    "grad", "grads", "grads_list", "value",
]
