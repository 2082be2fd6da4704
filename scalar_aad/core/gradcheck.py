# scalar_aad/core/gradcheck.py
"""
Numeric verification of analytic gradients.

For an input x of a graph with root y, the central difference

    (y(x + h) - y(x - h)) / (2h)

is compared against x.grad from backward(y). The graph is re-evaluated by
replaying the registered forward rules over its topological order with the
perturbed value substituted for x, so no node is rebuilt or mutated.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from .graph import topological_order
from .registry import get_rule
from .engine import backward, zero_grad
from .errors import GraphDefect
from ..config import GradCheckConfig

logger = logging.getLogger(__name__)


@dataclass
class GradCheckResult:
    name: str
    analytic: float
    numeric: float
    abs_err: float
    rel_err: float
    ok: bool


def evaluate(root, overrides: Optional[Mapping] = None) -> float:
    """
    Recompute root's forward value, substituting `overrides` {Value: number}
    for the data of the given nodes. Everything else is held fixed.
    """
    overrides = overrides or {}
    computed: Dict[int, np.float64] = {}
    for node in topological_order(root):
        if node in overrides:
            val = np.float64(overrides[node])
        elif node.op is None:
            val = node.data
        else:
            rule = get_rule(node.op)
            if rule is None:
                raise GraphDefect(node, "no forward rule registered for operator")
            args = tuple(computed[id(p)] for p in node.parents)
            val = rule.forward(args, node.exponent)
        computed[id(node)] = val
    return float(computed[id(root)])


def numeric_grad(root, x, h: float = 1e-6) -> float:
    """Central-difference estimate of ∂root/∂x."""
    f_plus = evaluate(root, {x: x.data + h})
    f_minus = evaluate(root, {x: x.data - h})
    return (f_plus - f_minus) / (2.0 * h)


def _is_close(analytic: float, numeric: float, tol: float):
    abs_err = abs(analytic - numeric)
    rel_err = abs_err / max(abs(analytic), abs(numeric), 1e-12)
    return abs_err, rel_err, abs_err <= tol * max(1.0, abs(analytic), abs(numeric))


def check_gradients(root, inputs: Sequence, config: Optional[GradCheckConfig] = None) -> List[GradCheckResult]:
    """
    Zero the graph, run backward(root), and compare each input's analytic
    gradient with its central-difference estimate.

    Args:
        root: output Value
        inputs: Values to check (usually leaves)
        config: step size and tolerance; defaults to GradCheckConfig()

    Returns:
        One GradCheckResult per input, in input order.
    """
    config = config or GradCheckConfig()
    zero_grad(root)
    backward(root)

    results = []
    for i, x in enumerate(inputs):
        analytic = float(x.grad)
        numeric = numeric_grad(root, x, config.h)
        abs_err, rel_err, ok = _is_close(analytic, numeric, config.tol)
        name = x.name or f"input[{i}]"
        if not ok:
            logger.warning(
                "gradient mismatch for %s: analytic=%.8g numeric=%.8g (abs err %.3g)",
                name, analytic, numeric, abs_err,
            )
        results.append(GradCheckResult(name, analytic, numeric, abs_err, rel_err, ok))
    return results


def assert_gradients_close(root, inputs: Sequence, config: Optional[GradCheckConfig] = None):
    """check_gradients(), raising AssertionError that lists every mismatch."""
    results = check_gradients(root, inputs, config)
    bad = [r for r in results if not r.ok]
    if bad:
        lines = [
            f"  {r.name}: analytic={r.analytic:.8g} numeric={r.numeric:.8g} abs_err={r.abs_err:.3g}"
            for r in bad
        ]
        raise AssertionError("gradient check failed:\n" + "\n".join(lines))
    return results
