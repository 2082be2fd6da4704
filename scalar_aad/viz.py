"""
Graphviz rendering of a computation graph.

Reads data, grad, op and parents of each reachable Value; never mutates the
graph. Building the Digraph only needs the ``graphviz`` Python package;
``render`` additionally needs the Graphviz ``dot`` executable.
"""

from graphviz import Digraph

from .core.graph import topological_order


def trace(root):
    """
    All nodes reachable from root and the (parent, child) edges between them.
    Nodes come back in topological order; an edge appears once per operand
    slot, so ``a + a`` yields the edge (a, out) twice.
    """
    nodes = topological_order(root)
    edges = [(p, n) for n in nodes for p in n.parents]
    return nodes, edges


def draw_dot(root, rankdir="LR", fmt="svg"):
    """graphviz Digraph of the graph under root: one record per value, one node per operator."""
    dot = Digraph(format=fmt, graph_attr={'rankdir': rankdir})

    nodes, edges = trace(root)
    for n in nodes:
        uid = str(id(n))
        dot.node(name=uid,
                 label="{ %s | data %.4f | grad %.4f }" % (n.name or "", n.data, n.grad),
                 shape="record")
        if n.op is not None:
            # operator node feeding the value it produced
            dot.node(name=uid + "_op", label=n.op.symbol(n.exponent))
            dot.edge(uid + "_op", uid)

    for n1, n2 in edges:
        dot.edge(str(id(n1)), str(id(n2)) + "_op")
    return dot


def render(root, path, fmt="svg", view=False):
    """Write the graph to ``path`` (extension added by graphviz); returns the output file."""
    return draw_dot(root, fmt=fmt).render(path, view=view, cleanup=True)
