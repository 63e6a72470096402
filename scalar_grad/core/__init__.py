# scalar_grad/core/__init__.py

"""
Core public API of the autodiff engine.

Exports:
    Var               : Handle to a node of the computation graph.
    leaf              : Create an input node from a real scalar.
    Node              : Read-only snapshot of a recorded node.
    Tape              : Arena that owns recorded nodes.
    global_tape       : The default tape, bound at import; inside use_tape()
                        it is not the active tape, use active_tape() for that.
    active_tape       : The tape new nodes are currently recorded on.
    use_tape          : Context manager to temporarily switch the active tape.
    backward          : Reverse pass accumulating gradients from one output.
    zero_grad         : Reset gradients of a node and everything it depends on.
    topological_order : Dependency order of the subgraph below a node.
    grad, grads, grads_list, value : Functional convenience helpers.
"""

from .node import Node
from .tape import Tape, active_tape, global_tape, use_tape
from .var import Var, leaf
from .engine import backward, topological_order, zero_grad
from .seeds import grad, grads, grads_list, value
from .graph_utils import get_graph_stats, log_graph_summary

__all__ = [
    "Node", "Tape", "active_tape", "global_tape", "use_tape",
    "Var", "leaf",
    "backward", "topological_order", "zero_grad",
    "grad", "grads", "grads_list", "value",
    "get_graph_stats", "log_graph_summary",
]
