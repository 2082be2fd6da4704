import numpy as np
import pytest

from scalar_aad import Value, TrainConfig
from scalar_aad.nn import Neuron, Layer, MLP, SGD, mse_loss, train


@pytest.fixture
def rng():
    return np.random.default_rng(0)


def test_mlp_parameter_count(rng):
    model = MLP(2, [4, 4, 1], rng=rng)
    assert len(model.parameters()) == 37
    assert len({id(p) for p in model.parameters()}) == 37


def test_neuron_forward():
    n = Neuron(2, nonlin=False)
    n.w[0].data, n.w[1].data, n.b.data = 0.5, -1.0, 0.25
    out = n([2.0, 3.0])
    assert out.data == pytest.approx(0.5 * 2.0 - 3.0 + 0.25)
    out.backward()
    assert n.w[0].grad == pytest.approx(2.0)
    assert n.w[1].grad == pytest.approx(3.0)
    assert n.b.grad == pytest.approx(1.0)


def test_neuron_weights_in_range(rng):
    n = Neuron(50, rng=rng)
    assert all(-1.0 <= w.data <= 1.0 for w in n.w)
    assert n.b.data == 0.0


def test_neuron_rejects_wrong_input_size(rng):
    with pytest.raises(ValueError):
        Neuron(3, rng=rng)([1.0, 2.0])


def test_layer_and_mlp_shapes(rng):
    layer = Layer(2, 3, rng=rng)
    outs = layer([Value(2.0), Value(3.0)])
    assert len(outs) == 3
    model = MLP(2, [4, 4, 1], rng=rng)
    assert len(model([0.5, -0.5])) == 1
    assert model.layers[0].neurons[0].nonlin
    assert not model.layers[-1].neurons[0].nonlin


def test_module_zero_grad(rng):
    model = MLP(2, [3, 1], rng=rng)
    model([1.0, 2.0])[0].backward()
    assert any(p.grad != 0.0 for p in model.parameters())
    model.zero_grad()
    assert all(p.grad == 0.0 for p in model.parameters())


def test_sgd_step_and_zero_grad():
    p = Value(1.0)
    p.grad = 0.5
    opt = SGD([p], lr=0.1)
    opt.step()
    assert p.data == pytest.approx(0.95)
    opt.zero_grad()
    assert p.grad == 0.0


def test_sgd_rejects_bad_lr():
    with pytest.raises(ValueError):
        SGD([], lr=0.0)


def test_mse_loss():
    loss = mse_loss([Value(1.0), Value(3.0)], [0.0, 1.0])
    assert loss.data == pytest.approx(2.5)
    with pytest.raises(ValueError):
        mse_loss([Value(1.0)], [0.0, 1.0])


def test_train_fits_a_line(rng):
    model = MLP(1, [1], rng=rng)
    xs = [[-1.0], [0.0], [1.0], [2.0]]
    ys = [2 * x[0] + 1 for x in xs]
    losses = train(model, xs, ys, TrainConfig(learning_rate=0.1, epochs=200))
    assert losses[-1] < 1e-6
    neuron = model.layers[0].neurons[0]
    assert neuron.w[0].data == pytest.approx(2.0, abs=1e-3)
    assert neuron.b.data == pytest.approx(1.0, abs=1e-3)


def test_train_reduces_xor_loss(rng):
    model = MLP(2, [4, 4, 1], rng=rng)
    xs = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    ys = [0.0, 1.0, 1.0, 0.0]
    losses = train(model, xs, ys, TrainConfig(learning_rate=0.05, epochs=30, log_every=10))
    assert len(losses) == 30
    assert losses[-1] < losses[0]


def test_train_rejects_mismatched_data(rng):
    with pytest.raises(ValueError):
        train(MLP(1, [1], rng=rng), [[1.0]], [1.0, 2.0])
