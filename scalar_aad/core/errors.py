# scalar_aad/core/errors.py
"""
Exception types raised by the differentiation engine.

DomainError  : an operator was applied outside its mathematical domain
               (log of a non-positive number, division by zero). Raised when
               the offending node is constructed.
GraphDefect  : a broken graph invariant (unknown operator tag, leaf with
               parents, cycle). Indicates a programming error; not meant to be
               caught and retried.
"""


class ScalarAADError(Exception):
    """Base class for all errors raised by scalar_aad."""


class DomainError(ScalarAADError, ValueError):
    def __init__(self, op, value, message=None):
        self.op = op
        self.value = value
        if message is None:
            message = f"{op} is undefined for operand {value!r}"
        super().__init__(message)


class GraphDefect(ScalarAADError, RuntimeError):
    def __init__(self, node, message):
        self.node = node
        op = getattr(node, "op", None)
        super().__init__(f"{message} (node={node!r}, op={op})")
