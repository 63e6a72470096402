"""
Gradient-descent optimizer: a single parameter update and a small descent
loop built on top of it.

The loop keeps the tape from growing across iterations: it remembers the
tape length before building the loss and truncates back to it after the
update, so only the parameters (recorded earlier) survive.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .core.engine import backward, zero_grad, zero_reachable
from .core.tape import Tape
from .core.var import Var

logger = logging.getLogger(__name__)

DEFAULT_LEARNING_RATE = 0.01
DEFAULT_NUM_STEPS = 1000
DEFAULT_LOG_EVERY = 100


def step(parameters: Sequence[Var], learning_rate: float) -> None:
    """
    One vanilla gradient-descent update: value -= gradient * learning_rate.

    Only the listed nodes change, and gradients are left as they are. A
    parameter listed twice is updated twice.
    """
    by_tape: Dict[int, tuple] = {}
    for p in parameters:
        idx = p._live()
        by_tape.setdefault(id(p.tape), (p.tape, []))[1].append(idx)

    for tape, indices in by_tape.values():
        idx = np.asarray(indices, dtype=np.int64)
        np.subtract.at(tape._values, idx, tape._grads[idx] * learning_rate)


@dataclass
class DescentConfig:
    """Gradient-descent hyperparameters."""

    learning_rate: float = DEFAULT_LEARNING_RATE
    num_steps: int = DEFAULT_NUM_STEPS
    log_every: int = DEFAULT_LOG_EVERY  # 0 disables progress logging

    def __post_init__(self):
        if not self.learning_rate > 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.num_steps < 0:
            raise ValueError(f"num_steps must be non-negative, got {self.num_steps}")
        if self.log_every < 0:
            raise ValueError(f"log_every must be non-negative, got {self.log_every}")


def descend(
    loss_fn: Callable[[], Var],
    parameters: Sequence[Var],
    config: Optional[DescentConfig] = None,
) -> List[float]:
    """
    Minimize `loss_fn()` over `parameters`. Returns the loss value seen at
    each iteration (before that iteration's update).

    Each iteration:
    1. build the loss graph from the current parameter values
    2. backward pass from the loss
    3. gradient-descent step on the parameters
    4. reset the loss subgraph's gradients and release its nodes

    Gradients the parameters hold on entry are discarded. Step 4 also runs
    when an iteration raises, so a failed call leaves the tape as it found it.
    """
    cfg = config or DescentConfig()
    if not parameters:
        raise ValueError("descend needs at least one parameter")
    tape: Tape = parameters[0].tape
    if any(p.tape is not tape for p in parameters):
        raise ValueError("parameters are recorded on different tapes")

    for p in parameters:
        p.set_gradient(0.0)

    losses: List[float] = []
    for i in range(cfg.num_steps):
        mark = len(tape)
        loss = None
        try:
            loss = loss_fn()
            if not isinstance(loss, Var):
                raise TypeError(f"loss_fn must return a Var, but got {type(loss)}")
            if loss.tape is not tape:
                raise ValueError("loss_fn recorded the loss on a different tape than the parameters")
            backward(loss)
            step(parameters, cfg.learning_rate)
            losses.append(loss.value())
        finally:
            # everything this iteration recorded, and whatever it reaches below the mark
            zero_reachable(tape, range(mark, len(tape)))
            if isinstance(loss, Var) and loss.tape is tape and tape.is_live(loss.index, loss._serial):
                zero_grad(loss)
            for p in parameters:
                p.set_gradient(0.0)
            tape.truncate(mark)

        if cfg.log_every and (i + 1) % cfg.log_every == 0:
            logger.info("step %5d / %5d | loss %.6g", i + 1, cfg.num_steps, losses[-1])

    return losses
