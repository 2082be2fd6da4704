"""
Graph inspection utilities.
Print and analyse the structure of a computation graph, given either its
root Value or the Tape it was recorded on.
"""

import numpy as np
from typing import Dict, List
from collections import Counter

from .tape import Tape
from .graph import topological_order


def _collect(source) -> List:
    """Nodes in creation/topological order, parents before children."""
    if isinstance(source, Tape):
        return source.values()
    return topological_order(source)


def _op_label(value) -> str:
    if value.op is None:
        return "leaf"
    return value.op.symbol(value.exponent)


def get_graph_stats(source) -> Dict:
    """
    Graph statistics (no printing).

    Returns:
        dict with node/edge counts, fan-in/fan-out and an operator breakdown
    """
    values = _collect(source)
    if not values:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    position = {id(v): i for i, v in enumerate(values)}
    fan_ins = [len(v.parents) for v in values]
    fan_outs = [0] * len(values)
    for v in values:
        for parent in v.parents:
            i = position.get(id(parent))
            if i is not None:
                fan_outs[i] += 1

    op_counter = Counter(_op_label(v) for v in values)

    return {
        'nodes': len(values),
        'edges': sum(fan_ins),
        'leaves': op_counter.get('leaf', 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(source) -> Dict:
    """Print the statistics of get_graph_stats() and return them."""
    stats = get_graph_stats(source)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")
    return stats


def print_computation_graph(source, max_nodes: int = 20) -> None:
    """
    Print one line per node: data, grad, operator and parent positions.

    Args:
        source: root Value or Tape
        max_nodes: print at most this many nodes
    """
    values = _collect(source)

    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if not values:
        print("Empty graph")
        return

    position = {id(v): i for i, v in enumerate(values)}
    for i, v in enumerate(values[:max_nodes]):
        label = f" {v.name}" if v.name else ""
        head = f"Node {i:4d}: {_op_label(v):8s} data={float(v.data):10.6f} grad={float(v.grad):10.6f}"
        if v.parents:
            parent_info = ", ".join(
                f"Node{position[id(p)]}" if id(p) in position else "external"
                for p in v.parents
            )
            print(f"{head} <- [{parent_info}]{label}")
        else:
            print(f"{head} [leaf/input]{label}")

    if len(values) > max_nodes:
        print(f"... ({len(values) - max_nodes} more nodes)")

    print("="*70 + "\n")
