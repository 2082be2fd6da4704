# scalar_aad/core/tape.py
from __future__ import annotations
from typing import List, Optional
from contextlib import contextmanager
from contextvars import ContextVar
from .node import Node
from .engine import graph_lock


class Tape:
    """
    An arena that records Values in creation order while it is active.

    Recording is optional: graphs are ordinary object graphs and the engine
    never needs a tape. A tape gives every node a stable index, which makes
    whole-graph inspection and resets possible without a root.
    """
    def __init__(self):
        self.nodes: List[Node] = []

    def __len__(self):
        return len(self.nodes)

    def reset(self):
        for node in self.nodes:
            node.out.tape_idx = None
        self.nodes.clear()

    def record(self, value) -> int:
        """Append `value` to the tape and stamp its `tape_idx`."""
        idx = len(self.nodes)
        parent_ids = tuple(self._index_of(p) for p in value.parents)
        self.nodes.append(Node(index=idx, op_tag=value.op, out=value, parent_ids=parent_ids))
        value.tape_idx = idx
        return idx

    def _index_of(self, value) -> Optional[int]:
        idx = value.tape_idx
        if idx is not None and idx < len(self.nodes) and self.nodes[idx].out is value:
            return idx
        return None

    def values(self):
        return [node.out for node in self.nodes]

    def zero_grad(self):
        """Set the gradient of every recorded value to 0.0."""
        with graph_lock:
            for node in self.nodes:
                node.out.grad = 0.0

    def is_topologically_ordered(self) -> bool:
        """True if every recorded parent sits at a lower index than its child."""
        return all(
            pid is None or pid < node.index
            for node in self.nodes
            for pid in node.parent_ids
        )


# Active tape per thread / async context. None by default, so nodes are only
# recorded inside use_tape().
_active_tape: ContextVar[Optional[Tape]] = ContextVar("scalar_aad_active_tape", default=None)


def current_tape() -> Optional[Tape]:
    return _active_tape.get()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to record into a tape (a fresh one unless given):
        with use_tape() as t:
            ... build computation ...
            backward(y)

    Only the calling thread records into it; other threads keep their own
    active tape.
    """
    token = _active_tape.set(tape if tape is not None else Tape())
    try:
        yield _active_tape.get()
    finally:
        _active_tape.reset(token)
