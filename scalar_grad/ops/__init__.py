# scalar_grad/ops/__init__.py

from .arithmetic import Operation, add, mul, neg, sub

__all__ = [
    "Operation",
    "add", "mul", "neg", "sub",
]
