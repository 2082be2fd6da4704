# scalar_aad/core/graph.py
from __future__ import annotations
from typing import List

from .errors import GraphDefect


def topological_order(root) -> List:
    """
    Every node reachable from `root` through `parents`, each exactly once,
    with every parent placed before all of its consumers (root last).

    Depth-first post-order with a visited set keyed by object identity. The
    walk is iterative so deep chains (long sums in a training loop) do not hit
    the recursion limit; it visits parents in stored order, which keeps the
    result deterministic for a fixed graph.

    Raises:
        GraphDefect: if a node is reached again while still on the DFS path.
    """
    order = []
    visited = set()
    on_path = set()
    stack = [(root, iter(root.parents))]
    on_path.add(id(root))

    while stack:
        node, parents = stack[-1]
        advanced = False
        for parent in parents:
            pid = id(parent)
            if pid in on_path:
                raise GraphDefect(parent, "cycle detected in parents")
            if pid not in visited:
                on_path.add(pid)
                stack.append((parent, iter(parent.parents)))
                advanced = True
                break
        if not advanced:
            stack.pop()
            on_path.discard(id(node))
            visited.add(id(node))
            order.append(node)

    return order
