# scalar_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import Value
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return float(x.data) if isinstance(x, Value) else x


def _ensure_value(v: Any, *, name: str) -> Value:
    return v if isinstance(v, Value) else Value(v, name=name)


def _ensure_output(y: Any) -> Value:
    # A function that ignores its inputs may return a plain number
    return y if isinstance(y, Value) else Value(y, name="y")


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Value], Value], x0: float) -> float:
    """
    Derivative of y=f(x) at x0.
    Builds the graph on a fresh, isolated tape and runs one reverse pass.
    """
    with use_tape() as tape:
        x = _ensure_value(x0, name="x")
        y = _ensure_output(f(x))
        tape.zero_grad()
        backward(y)
        return float(x.grad)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Value]], Value],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form), from ONE reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a Value
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with use_tape() as tape:
        vars_ad = {k: _ensure_value(v, name=k) for k, v in inputs.items()}
        y = _ensure_output(f(vars_ad))
        tape.zero_grad()
        backward(y)
        return {k: float(vars_ad[k].grad) for k in inputs}


def grads_list(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but inputs and partials are lists in matching order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape() as tape:
        xs = [_ensure_value(v, name=f"x{i}") for i, v in enumerate(x0_list)]
        y = _ensure_output(f(xs))
        tape.zero_grad()
        backward(y)
        return [float(x.grad) for x in xs]
