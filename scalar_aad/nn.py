"""
A small feed-forward network built on the scalar engine.

Neuron, Layer and MLP compose Values; SGD applies plain gradient descent to
their parameters. Every forward call builds a fresh graph, so parameter
gradients are the only state that has to be reset between steps.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from .core.var import Value
from .config import TrainConfig

logger = logging.getLogger(__name__)


class Module:
    """Base class: anything that owns parameter Values."""

    def parameters(self) -> List[Value]:
        return []

    def zero_grad(self):
        for p in self.parameters():
            p.grad = 0.0


class Neuron(Module):
    """
    tanh(w · x + b), or the bare affine sum when ``nonlin`` is False.

    Weights are drawn uniformly from [-1, 1]; the bias starts at 0.
    """

    def __init__(self, nin: int, nonlin: bool = True, rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        self.w = [Value(w, name="w") for w in rng.uniform(-1.0, 1.0, size=nin)]
        self.b = Value(0.0, name="b")
        self.nonlin = nonlin

    def __call__(self, x: Sequence) -> Value:
        if len(x) != len(self.w):
            raise ValueError(f"Neuron expects {len(self.w)} inputs, got {len(x)}")
        act = self.b
        for wi, xi in zip(self.w, x):
            act = act + wi * xi
        return act.tanh() if self.nonlin else act

    def parameters(self):
        return self.w + [self.b]

    def __repr__(self):
        return f"{'Tanh' if self.nonlin else 'Linear'}Neuron({len(self.w)})"


class Layer(Module):

    def __init__(self, nin: int, nout: int, nonlin: bool = True, rng: Optional[np.random.Generator] = None):
        self.neurons = [Neuron(nin, nonlin=nonlin, rng=rng) for _ in range(nout)]

    def __call__(self, x: Sequence) -> List[Value]:
        return [n(x) for n in self.neurons]

    def parameters(self):
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):
    """Multi-layer network; every layer but the last applies tanh."""

    def __init__(self, nin: int, nouts: Sequence[int], rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        sz = [nin] + list(nouts)
        self.layers = [
            Layer(sz[i], sz[i + 1], nonlin=i != len(nouts) - 1, rng=rng)
            for i in range(len(nouts))
        ]

    def __call__(self, x: Sequence) -> List[Value]:
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"


class SGD:
    """Plain gradient descent: p.data -= lr * p.grad."""

    def __init__(self, params: Sequence[Value], lr: float):
        if lr <= 0:
            raise ValueError(f"learning rate must be positive, got {lr}")
        self.params = list(params)
        self.lr = lr

    def step(self):
        for p in self.params:
            p.data -= self.lr * p.grad

    def zero_grad(self):
        for p in self.params:
            p.grad = 0.0


def mse_loss(preds: Sequence[Value], targets: Sequence) -> Value:
    """Mean of (pred - target)**2."""
    if len(preds) != len(targets):
        raise ValueError(f"got {len(preds)} predictions for {len(targets)} targets")
    if not preds:
        raise ValueError("mse_loss needs at least one prediction")
    total = sum(((p - t) ** 2 for p, t in zip(preds, targets)), Value(0.0))
    return total * (1.0 / len(preds))


def train(model: MLP, xs: Sequence[Sequence], ys: Sequence, config: Optional[TrainConfig] = None) -> List[float]:
    """
    Full-batch gradient descent on a single-output model.

    Each epoch rebuilds the graph (forward), zeroes the parameter gradients,
    runs backward on the loss and takes one SGD step.

    Returns:
        Loss of every epoch, measured before that epoch's update.
    """
    config = config or TrainConfig()
    if len(xs) != len(ys):
        raise ValueError(f"got {len(xs)} inputs for {len(ys)} targets")

    optimizer = SGD(model.parameters(), config.learning_rate)
    losses = []
    for epoch in range(1, config.epochs + 1):
        preds = [model(x)[0] for x in xs]
        loss = mse_loss(preds, ys)

        optimizer.zero_grad()
        loss.backward()
        optimizer.step()

        losses.append(float(loss.data))
        if epoch == 1 or epoch % config.log_every == 0:
            logger.info("[Epoch %d] loss: %.6f", epoch, losses[-1])
    return losses
