# scalar_grad/core/var.py
from __future__ import annotations
import numbers
from typing import Optional, Sequence, Tuple

import numpy as np

from . import tape as tape_mod  # module access for use_tape() compatibility
from .tape import Tape


def _check_real(val, what: str = "Var"):
    # bool is an int subclass; a truth value is not a graph input
    if isinstance(val, bool) or not isinstance(val, numbers.Real):
        raise TypeError(f"{what} only accepts real scalars, but got {type(val)}")
    return np.float64(val)


class Var:
    """
    Handle to one node of the computation graph.

    The node itself lives on a `Tape`; a Var only stores where. Two handles
    are equal exactly when they point at the same recorded node, so
    two leaves holding the same number are still different nodes.

    Attributes
    ----------
    tape  : Tape
        The arena that owns the node.
    index : int
        Arena index of the node.
    """

    __slots__ = ("_tape", "_index", "_serial")

    def __init__(self, tape: Tape, index: int):
        self._tape = tape
        self._index = index
        self._serial = tape.serial(index)

    # ---------------------------- construction ---------------------------- #
    @classmethod
    def leaf(cls, val, tape: Optional[Tape] = None) -> "Var":
        """Create an input node: given value, zero gradient, no parents, no operation."""
        t = tape if tape is not None else tape_mod.global_tape
        return cls(t, t.push_node(_check_real(val, "leaf")))

    @classmethod
    def apply(cls, operation, operands: Sequence["Var"]) -> "Var":
        """
        Evaluate `operation` over the operands' values and record the result
        as a new node whose parents are exactly `operands`, in order.
        """
        operands = tuple(operands)
        if len(operands) != operation.arity:
            raise ValueError(
                f"{operation.tag} takes {operation.arity} operands, got {len(operands)}"
            )
        for v in operands:
            if not isinstance(v, Var):
                raise TypeError(f"operands must be Var, but got {type(v)}")
        t = operands[0]._tape
        if any(v._tape is not t for v in operands):
            raise ValueError("operands are recorded on different tapes")
        out = operation.forward([v.value() for v in operands])
        return cls(t, t.push_node(out, operation, [v._index for v in operands]))

    # ------------------------------ accessors ----------------------------- #
    def _live(self) -> int:
        if not self._tape.is_live(self._index, self._serial):
            raise ReferenceError(f"node {self._index} has been released from its tape")
        return self._index

    @property
    def tape(self) -> Tape:
        return self._tape

    @property
    def index(self) -> int:
        return self._index

    @property
    def operation(self):
        return self._tape.operation(self._live())

    @property
    def is_leaf(self) -> bool:
        return self.operation is None

    def value(self) -> float:
        return float(self._tape._values[self._live()])

    def gradient(self) -> float:
        return float(self._tape._grads[self._live()])

    def set_value(self, val: float):
        self._tape._values[self._live()] = val

    def set_gradient(self, val: float):
        self._tape._grads[self._live()] = val

    def add_gradient(self, delta: float):
        self._tape._grads[self._live()] += delta

    def parents(self) -> Tuple["Var", ...]:
        t = self._tape
        return tuple(Var(t, p) for p in t.parent_indices(self._live()))

    # ---------------------------- differentiation ------------------------- #
    def backward(self):
        from .engine import backward
        backward(self)

    def zero_grad(self):
        from .engine import zero_grad
        zero_grad(self)

    # ------------------------------- identity ----------------------------- #
    def __eq__(self, other):
        if not isinstance(other, Var):
            return NotImplemented
        return (self._tape is other._tape and self._index == other._index
                and self._serial == other._serial)

    def __hash__(self):
        return hash((id(self._tape), self._index, self._serial))

    def __repr__(self):
        if not self._tape.is_live(self._index, self._serial):
            return f"Var(<released #{self._index}>)"
        op = self.operation
        tag = "leaf" if op is None else op.tag
        return f"Var({self.value()!r}, grad={self.gradient()!r}, op={tag})"

    # ------------------------------- operators ---------------------------- #
    # Scalars are never promoted to leaves here: returning NotImplemented
    # makes `x + 2.0` a TypeError.
    def __add__(self, other):
        if not isinstance(other, Var):
            return NotImplemented
        from ..ops.arithmetic import add
        return add(self, other)

    def __sub__(self, other):
        if not isinstance(other, Var):
            return NotImplemented
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __mul__(self, other):
        if not isinstance(other, Var):
            return NotImplemented
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)


def leaf(val, tape: Optional[Tape] = None) -> Var:
    """Create a leaf node on `tape` (the active global tape by default)."""
    return Var.leaf(val, tape=tape)
