import math

import numpy as np
import pytest

from scalar_aad import Value, OpTag, GraphDefect, backward, zero_grad, topological_order
from scalar_aad.core import graph_lock


def test_multiply_literal():
    a = Value(2.0)
    b = Value(-3.0)
    c = a * b
    assert c.data == -6.0
    backward(c)
    assert a.grad == -3.0
    assert b.grad == 2.0
    assert c.grad == 1.0


def test_relu_negative_literal():
    x = Value(-1.0)
    y = x.relu()
    assert y.data == 0.0
    backward(y)
    assert x.grad == 0.0


def test_quickstart_gradients(quickstart):
    q = quickstart
    assert q["out"].data == pytest.approx(0.7)
    q["loss"].backward()
    t = math.tanh(0.7)
    assert q["w1"].grad == pytest.approx(2.0 * (1 - t * t))
    assert q["w2"].grad == pytest.approx(0.0)
    assert q["x1"].grad == pytest.approx(-3.0 * (1 - t * t))
    assert q["b"].grad == pytest.approx(1 - t * t)


def test_shared_subexpression_accumulates(diamond):
    x, left, right, y = diamond
    backward(y)
    # y = 3x(x+1) -> dy/dx = 6x + 3
    assert x.grad == pytest.approx(6 * 2.0 + 3)
    assert left.grad == pytest.approx(3.0)
    assert right.grad == pytest.approx(6.0)


def test_same_operand_twice():
    a = Value(3.0)
    b = a + a
    c = a * a
    backward(b)
    assert a.grad == 2.0
    zero_grad(b)
    backward(c)
    assert a.grad == 6.0


def test_gradients_accumulate_across_backward_calls():
    x = Value(2.0)
    y1 = x * 3.0
    y2 = x * x
    backward(y1)
    backward(y2)
    assert x.grad == pytest.approx(3.0 + 4.0)


def test_zero_grad_is_idempotent_and_backward_repeatable(quickstart):
    loss = quickstart["loss"]
    backward(loss)
    first = [n.grad for n in topological_order(loss)]

    zero_grad(loss)
    zero_grad(loss)
    assert all(n.grad == 0.0 for n in topological_order(loss))

    backward(loss)
    second = [n.grad for n in topological_order(loss)]
    assert second == pytest.approx(first)


def test_topological_order_parents_first(diamond):
    x, left, right, y = diamond
    order = topological_order(y)
    assert order[-1] is y
    assert len(order) == len({id(n) for n in order})
    pos = {id(n): i for i, n in enumerate(order)}
    for n in order:
        for p in n.parents:
            assert pos[id(p)] < pos[id(n)]


def _random_graph(seed, size=60):
    rng = np.random.default_rng(seed)
    pool = [Value(float(v)) for v in rng.uniform(0.5, 1.5, size=4)]
    for _ in range(size):
        kind = rng.integers(0, 4)
        a = pool[rng.integers(0, len(pool))]
        b = pool[rng.integers(0, len(pool))]
        if kind == 0:
            pool.append(a + b)
        elif kind == 1:
            pool.append(a * b)
        elif kind == 2:
            pool.append(a.tanh())
        else:
            pool.append(a ** 2)
    root = pool[-1]
    for v in pool[:-1]:
        root = root + v
    return root


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_topological_order_valid_and_deterministic(seed):
    root = _random_graph(seed)
    order = topological_order(root)
    pos = {id(n): i for i, n in enumerate(order)}
    assert len(pos) == len(order)
    for n in order:
        for p in n.parents:
            assert pos[id(p)] < pos[id(n)]
    assert [id(n) for n in topological_order(root)] == [id(n) for n in order]


def test_deep_chain_does_not_recurse():
    x = Value(0.0)
    y = x
    for _ in range(5000):
        y = y + 1.0
    backward(y)
    assert y.data == 5000.0
    assert x.grad == 1.0


def test_equal_data_nodes_are_distinct():
    a = Value(1.0)
    b = Value(1.0)
    c = a * b
    assert len(topological_order(c)) == 3


def test_unknown_operator_is_a_defect():
    a, b = Value(1.0), Value(2.0)
    c = a + b
    c.op = "bogus"
    with pytest.raises(GraphDefect) as e:
        backward(c)
    assert "bogus" in str(e.value)


def test_leaf_with_parents_is_a_defect():
    a, b = Value(1.0), Value(2.0)
    a.parents = (b,)
    with pytest.raises(GraphDefect):
        backward(a)


def test_arity_mismatch_is_a_defect():
    a, b = Value(1.0), Value(2.0)
    r = a.relu()
    r.parents = (a, b)
    with pytest.raises(GraphDefect):
        backward(r)


def test_cycle_is_detected():
    a = Value(1.0)
    b = a * 2.0
    a.parents = (b,)
    a.op = OpTag.RELU
    with pytest.raises(GraphDefect):
        topological_order(b)


def test_graph_lock_is_reentrant(quickstart):
    with graph_lock:
        backward(quickstart["loss"])
    assert quickstart["w1"].grad != 0.0
