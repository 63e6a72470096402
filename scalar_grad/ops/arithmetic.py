# scalar_grad/ops/arithmetic.py
from enum import Enum
from typing import Sequence

from ..core.var import Var


class Operation(Enum):
    """
    Closed set of primitive operations. Members carry no state; their
    behaviour comes from the rule table below.
    """
    ADD = "add"
    MUL = "mul"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def arity(self) -> int:
        return _RULES[self][0]

    def forward(self, values: Sequence[float]) -> float:
        """Value of the operation applied to the operand values."""
        return _RULES[self][1](*values)

    def backward(self, grad: float, operands: Sequence[Var]):
        """
        Accumulate `grad * d(out)/d(operand)` into each operand.
        Partials are evaluated from the operands' current values.
        """
        _, _, *partials = _RULES[self]
        values = [v.value() for v in operands]
        for v, dfd in zip(operands, partials):
            v.add_gradient(dfd(*values) * grad)


# op -> (arity, f, df/da, df/db)
_RULES = {
    Operation.ADD: (2, lambda a, b: a + b, lambda a, b: 1.0, lambda a, b: 1.0),
    Operation.MUL: (2, lambda a, b: a * b, lambda a, b: b,   lambda a, b: a),
}


def add(x: Var, y: Var) -> Var: return Var.apply(Operation.ADD, (x, y))
def mul(x: Var, y: Var) -> Var: return Var.apply(Operation.MUL, (x, y))


def neg(x: Var) -> Var:
    """
    -x, recorded as (-1) * x. The -1 is an explicit constant leaf on x's
    tape; it receives a gradient like any other leaf.
    """
    return mul(Var.leaf(-1.0, tape=x.tape), x)


def sub(x: Var, y: Var) -> Var:
    """x - y, recorded as x + (-1) * y."""
    return add(x, neg(y))
