# scalar_aad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class OpTag(Enum):
    """Operator that produced a node. Leaves carry no tag (``None``)."""

    ADD = "+"
    MUL = "*"
    POW = "**"
    RELU = "ReLU"
    TANH = "tanh"
    EXP = "exp"
    LOG = "log"

    def symbol(self, exponent=None) -> str:
        """Short display label, e.g. ``**2`` for a square."""
        if self is OpTag.POW and exponent is not None:
            return f"**{exponent:g}"
        return self.value

    def __str__(self):
        return self.name.lower()


@dataclass
class Node:
    """
    One slot on a tape.

    Attributes
    ----------
    index      : int
        Position on the tape (creation order).
    op_tag     : Optional[OpTag]
        Operator tag of the recorded value, ``None`` for leaves.
    out        : Any
        The Value stored in this slot.
    parent_ids : Tuple[Optional[int], ...]
        Tape indices of the parents; ``None`` for a parent recorded elsewhere
        (created outside this tape).
    """
    index: int
    op_tag: Any
    out: Any
    parent_ids: Tuple
