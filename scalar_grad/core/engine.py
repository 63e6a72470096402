# scalar_grad/core/engine.py
from __future__ import annotations
import logging
from typing import Iterable, List

from .tape import Tape
from .var import Var

logger = logging.getLogger(__name__)


def topological_order(root: Var) -> List[Var]:
    """
    Depth-first post-order of the subgraph reachable from `root`.

    Parents are visited in operand order before the node itself is
    appended, so every node appears after all the nodes it depends on and
    `root` comes last. A node reached along several edges appears once.
    Uses an explicit stack, so graph depth is not bounded by the
    interpreter's recursion limit.
    """
    tape = root.tape
    order: List[Var] = []
    visited = {root._live()}
    # (arena index, position of the next parent to visit)
    stack = [(root.index, 0)]
    while stack:
        idx, pos = stack[-1]
        parents = tape.parent_indices(idx)
        if pos < len(parents):
            stack[-1] = (idx, pos + 1)
            p = parents[pos]
            if p not in visited:
                visited.add(p)
                stack.append((p, 0))
        else:
            stack.pop()
            order.append(Var(tape, idx))
    return order


def backward(root: Var):
    """
    Reverse pass from `root`.

    Seeds d(root)/d(root) = 1, then walks the topological order back to
    front. Every node that carries an operation pushes its accumulated
    gradient into its parents; leaves only accumulate.
    """
    root.set_gradient(1.0)
    order = topological_order(root)
    for v in reversed(order):
        op = v.operation
        if op is None:
            continue
        op.backward(v.gradient(), v.parents())
    logger.debug("backward from node %d visited %d nodes", root.index, len(order))


def zero_grad(root: Var):
    """Reset the gradient of `root` and of every node reachable from it, once each."""
    zero_reachable(root.tape, [root._live()])


def zero_reachable(tape: Tape, indices: Iterable[int]):
    """Reset gradients of the nodes at `indices` and of everything they depend on."""
    grads = tape._grads
    work = list(indices)
    seen = set(work)
    while work:
        idx = work.pop()
        grads[idx] = 0.0
        for p in tape.parent_indices(idx):
            if p not in seen:
                seen.add(p)
                work.append(p)
