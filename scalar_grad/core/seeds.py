# scalar_grad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper records on its own fresh tape so
# nothing leaks into the caller's graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import Var
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Var; pass through plain numbers unchanged."""
    return x.value() if isinstance(x, Var) else x


def _check_output(y: Any, caller: str) -> Var:
    if not isinstance(y, Var):
        raise TypeError(f"{caller} expects f to return a Var, but got {type(y)}")
    return y


def grad(f: Callable[[Var], Var], x0: float) -> float:
    """
    Derivative of a scalar function y = f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = Var.leaf(x0)
        y = _check_output(f(x), "grad(f, x0)")
        backward(y)
        return x.gradient()


def grads(f: Callable[[Dict[str, Var]], Var],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(vars) w.r.t. ALL named inputs from ONE reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Var} and returning a Var
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # in the same key order as `inputs`
    """
    with use_tape():
        xs = {k: Var.leaf(v) for k, v in inputs.items()}
        y = _check_output(f(xs), "grads(f, inputs)")
        backward(y)
        return {k: xs[k].gradient() for k in inputs}


def grads_list(f: Callable[[List[Var]], Var], x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), with positional inputs.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + xs[0]*xs[1]
    grads_list(f, [2.0, 4.0]) -> [8.0, 2.0]
    """
    with use_tape():
        xs = [Var.leaf(v) for v in x0_list]
        y = _check_output(f(xs), "grads_list(f, x0_list)")
        backward(y)
        return [x.gradient() for x in xs]
