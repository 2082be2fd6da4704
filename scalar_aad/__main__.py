"""
Command line demos.

    python -m scalar_aad demo [--render PATH]
    python -m scalar_aad xor [--epochs N] [--lr X] [--seed S]
"""

import argparse
import logging
import sys

import numpy as np

from .core.var import Value
from .core.graph_utils import print_computation_graph, print_graph_summary
from .config import TrainConfig
from .nn import MLP, train

XOR_INPUTS = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
XOR_TARGETS = [0.0, 1.0, 1.0, 0.0]


def run_demo(args):
    x1 = Value(2.0, name="x1")
    x2 = Value(0.0, name="x2")
    w1 = Value(-3.0, name="w1")
    w2 = Value(1.0, name="w2")
    b = Value(6.7, name="b")
    out = x1 * w1 + x2 * w2 + b
    out.name = "out"
    loss = out.tanh()
    loss.name = "loss"
    loss.backward()

    print_computation_graph(loss)
    print_graph_summary(loss)
    for v in (x1, x2, w1, w2, b):
        print(f"d(loss)/d({v.name}) = {float(v.grad): .6f}")

    if args.render:
        from .viz import render
        path = render(loss, args.render)
        print(f"Graph written to {path}")
    return 0


def run_xor(args):
    config = TrainConfig(learning_rate=args.lr, epochs=args.epochs, seed=args.seed,
                         log_every=args.log_every)
    model = MLP(2, [4, 4, 1], rng=np.random.default_rng(config.seed))
    losses = train(model, XOR_INPUTS, XOR_TARGETS, config)

    print(f"Final loss: {losses[-1]:.6f}")
    for x, y_true in zip(XOR_INPUTS, XOR_TARGETS):
        pred = float(model(x)[0].data)
        print(f"In: {x} Target: {y_true} Pred: {pred:.4f}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="scalar_aad", description="Scalar autodiff demos")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="differentiate the quick-start neuron")
    demo.add_argument("--render", metavar="PATH", help="write a graphviz rendering to PATH")
    demo.set_defaults(func=run_demo)

    xor = sub.add_parser("xor", help="train a 2-4-4-1 network on XOR")
    xor.add_argument("--epochs", type=int, default=500)
    xor.add_argument("--lr", type=float, default=0.1)
    xor.add_argument("--seed", type=int, default=0)
    xor.add_argument("--log-every", type=int, default=50)
    xor.set_defaults(func=run_xor)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
