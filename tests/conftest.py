# tests/conftest.py

import pytest

from scalar_aad import Value


@pytest.fixture
def quickstart():
    """The quick-start neuron: loss = tanh(x1*w1 + x2*w2 + b)."""
    x1 = Value(2.0, name="x1")
    x2 = Value(0.0, name="x2")
    w1 = Value(-3.0, name="w1")
    w2 = Value(1.0, name="w2")
    b = Value(6.7, name="b")
    out = x1 * w1 + x2 * w2 + b
    loss = out.tanh()
    return {"x1": x1, "x2": x2, "w1": w1, "w2": w2, "b": b, "out": out, "loss": loss}


@pytest.fixture
def diamond():
    """x feeds two branches that meet again: y = (x*3) * (x+1)."""
    x = Value(2.0, name="x")
    left = x * 3.0
    right = x + 1.0
    y = left * right
    return x, left, right, y
