# scalar_grad/core/node.py
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Node:
    """
    Read-only snapshot of one slot on the tape.

    Attributes
    ----------
    index   : int
        Arena index of the node on its tape.
    op_tag  : Optional[str]
        Operation tag ("add", "mul"), or None for a leaf.
    value   : float
        Forward value at the time of the snapshot.
    grad    : float
        Accumulated gradient at the time of the snapshot.
    parents : Tuple[int, ...]
        Arena indices of the operands, in operand order.
    """
    index: int
    op_tag: Optional[str]
    value: float
    grad: float
    parents: Tuple[int, ...]

    @property
    def is_leaf(self) -> bool:
        return self.op_tag is None
