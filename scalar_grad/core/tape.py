# scalar_grad/core/tape.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .node import Node

_INITIAL_CAPACITY = 64


class Tape:
    """
    Arena that owns every node recorded on it, in creation order.

    Values and gradients live in float64 columns; operations and parent
    indices live in parallel lists. A parent index is always smaller than
    the index of the node that uses it, so the recorded graph is acyclic.

    Every slot also carries a serial number. Handles remember the serial of
    the slot they were created for, so a handle into a slot that has been
    released by `truncate` is detected instead of silently reading whatever
    was recorded there afterwards.
    """

    def __init__(self, capacity: int = _INITIAL_CAPACITY):
        capacity = max(int(capacity), 1)
        self._values = np.zeros(capacity, dtype=np.float64)
        self._grads = np.zeros(capacity, dtype=np.float64)
        self._serials = np.zeros(capacity, dtype=np.int64)
        self._ops: List = []
        self._parents: List[Tuple[int, ...]] = []
        self._size = 0
        self._next_serial = 1

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"Tape(nodes={self._size}, capacity={self._values.shape[0]})"

    # ------------------------------------------------------------------ #
    def _grow(self):
        cap = self._values.shape[0] * 2
        for name in ("_values", "_grads", "_serials"):
            old = getattr(self, name)
            new = np.zeros(cap, dtype=old.dtype)
            new[: self._size] = old[: self._size]
            setattr(self, name, new)

    def push_node(self, value: float, operation=None, parents: Sequence[int] = ()) -> int:
        """
        Record a node and return its arena index.
        `parents` are indices of nodes already on this tape.
        """
        parents = tuple(int(p) for p in parents)
        for p in parents:
            if not 0 <= p < self._size:
                raise ValueError(f"parent index {p} is not recorded on this tape")
        if self._size == self._values.shape[0]:
            self._grow()
        idx = self._size
        self._values[idx] = value
        self._grads[idx] = 0.0
        self._serials[idx] = self._next_serial
        self._next_serial += 1
        self._ops.append(operation)
        self._parents.append(parents)
        self._size += 1
        return idx

    def serial(self, index: int) -> int:
        return int(self._serials[index])

    def is_live(self, index: int, serial: int) -> bool:
        return index < self._size and self._serials[index] == serial

    def operation(self, index: int):
        return self._ops[index]

    def parent_indices(self, index: int) -> Tuple[int, ...]:
        return self._parents[index]

    def node(self, index: int) -> Node:
        if not 0 <= index < self._size:
            raise IndexError(f"no node at index {index} (tape holds {self._size})")
        op = self._ops[index]
        return Node(
            index=index,
            op_tag=None if op is None else op.tag,
            value=float(self._values[index]),
            grad=float(self._grads[index]),
            parents=self._parents[index],
        )

    def nodes(self) -> Iterator[Node]:
        for i in range(self._size):
            yield self.node(i)

    # ------------------------------------------------------------------ #
    def zero_grads(self):
        """Set the gradient of every node on the tape to zero."""
        self._grads[: self._size] = 0.0

    def truncate(self, size: int):
        """
        Release every node recorded at or after `size`.
        Handles to released nodes become stale.
        """
        if not 0 <= size <= self._size:
            raise ValueError(f"cannot truncate a tape of {self._size} nodes to {size}")
        self._serials[size: self._size] = 0
        self._grads[size: self._size] = 0.0
        del self._ops[size:]
        del self._parents[size:]
        self._size = size

    def reset(self):
        self.truncate(0)


# Global singleton tape
global_tape = Tape()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record on a fresh (or given) tape:
        with use_tape() as t:
            x = leaf(2.0)
            ...
    """
    from . import tape as _tape_mod  # module access so callers see the swap
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev


def active_tape() -> Tape:
    """The tape new nodes are currently recorded on (follows use_tape)."""
    from . import tape as _tape_mod
    return _tape_mod.global_tape
