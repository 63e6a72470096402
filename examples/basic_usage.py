"""
Fit a single parameter x to a target by gradient descent on (x - target)^2.
"""

import argparse
import logging

import numpy as np

from scalar_grad import DescentConfig, descend, leaf


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Minimize (x - target)^2 with scalar autodiff',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--target', type=float, default=2.0,
                        help='value x should converge to')
    parser.add_argument('--lr', type=float, default=0.01,
                        help='learning rate')
    parser.add_argument('--steps', type=int, default=1000,
                        help='number of gradient-descent steps')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed for the random starting point')
    parser.add_argument('--verbose', action='store_true',
                        help='log progress while descending')
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    rng = np.random.default_rng(args.seed)
    x = leaf(rng.random())
    target = leaf(args.target)

    def loss_fn():
        d = x - target
        return d * d

    cfg = DescentConfig(learning_rate=args.lr, num_steps=args.steps)
    losses = descend(loss_fn, [x], cfg)
    if losses:
        print(f"loss: {losses[0]:.6f} -> {losses[-1]:.6f}")
    print(x.value())


if __name__ == "__main__":
    main()
