# scalar_aad/core/engine.py
from __future__ import annotations
import logging
import threading

from .graph import topological_order
from .registry import get_rule
from .errors import GraphDefect

logger = logging.getLogger(__name__)

# Serializes reverse passes and resets. Threads that share nodes should also
# hold it while building graphs.
graph_lock = threading.RLock()


def backward(root):
    """
    Run one reverse pass from `root`.

    Args:
        root: the Value whose derivatives are wanted.

    Notes:
        - root.grad is set to 1.0; every other reachable node accumulates
          p.grad += node.grad * (∂node/∂p). Nothing is zeroed beforehand, so
          gradients from earlier passes add up unless the caller runs
          zero_grad() first.
        - Nodes are processed in reverse topological order so each node's
          gradient is complete before it is pushed to its parents.
    """
    with graph_lock:
        topo = topological_order(root)
        logger.debug("backward: %d nodes reachable from %r", len(topo), root)
        root.grad = 1.0
        for node in reversed(topo):
            _propagate(node)


def _propagate(node):
    if node.op is None:
        if node.parents:
            raise GraphDefect(node, "leaf node has parents")
        return
    rule = get_rule(node.op)
    if rule is None:
        raise GraphDefect(node, "no backward rule registered for operator")
    if len(node.parents) != rule.arity:
        raise GraphDefect(
            node, f"operator expects {rule.arity} parent(s), node has {len(node.parents)}"
        )
    args = tuple(p.data for p in node.parents)
    partials = rule.local_grads(args, node.data, node.exponent)
    for parent, local in zip(node.parents, partials):
        # Accumulate: a parent may be reached through several consumers
        parent.grad += node.grad * local


def zero_grad(root):
    """Set grad to 0.0 on every node reachable from `root`."""
    with graph_lock:
        for node in topological_order(root):
            node.grad = 0.0
