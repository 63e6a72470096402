# scalar_grad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core import (
    Node,
    Tape,
    active_tape,
    Var,
    backward,
    get_graph_stats,
    global_tape,
    grad,
    grads,
    grads_list,
    leaf,
    log_graph_summary,
    topological_order,
    use_tape,
    value,
    zero_grad,
)
from .ops import Operation, add, mul, neg, sub
from .optim import DescentConfig, descend, step

__all__ = [
    # Core
    'Var',
    'leaf',
    'Node',
    'Tape',
    'global_tape',
    'active_tape',
    'use_tape',
    # Engine
    'backward',
    'zero_grad',
    'topological_order',
    # Helpers
    'grad',
    'grads',
    'grads_list',
    'value',
    'get_graph_stats',
    'log_graph_summary',
    # Operations
    'Operation',
    'add',
    'mul',
    'neg',
    'sub',
    # Optimizer
    'step',
    'DescentConfig',
    'descend',
]
