# Kernel sources package
from .loader import load_kernel
from .registry import (register_kernel, register_op_descriptor,
                       list_kernels, get_op_descriptor, op_chain)

__all__ = [
    "load_kernel",
    "register_kernel",
    "register_op_descriptor",
    "list_kernels",
    "get_op_descriptor",
    "op_chain",
]
__version__ = "0.3.0"
