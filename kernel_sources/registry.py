from __future__ import annotations
from typing import Dict, Any, List

# Nested dict: [fractal][op_name][backend] -> meta
_REGISTRY: Dict[str, Dict[str, Dict[str, Dict[str, Any]]]] = {}

# Static op descriptors (backend-agnostic): dependencies between ops.
_OP_DESCRIPTORS: Dict[str, Dict[str, Dict[str, Any]]] = {}
# shape: [fractal][op_name] -> {"depends_on": ["iter"], ...}

def register_kernel(fractal: str, op_name: str, backend: str, **meta: Any) -> None:
    """
    Register kernel metadata for a given fractal, operation and backend.
    Example:
        register_kernel("mandelbrot", "iter", "CPU", func=my_func, arg_order=[...])
    """
    _REGISTRY.setdefault(fractal, {}).setdefault(op_name, {})[backend.upper()] = meta

def register_op_descriptor(fractal: str, op_name: str, **descriptor: Any) -> None:
    """
    Register static operation descriptor for a given fractal and operation.
    Example:
        register_op_descriptor("mandelbrot", "smooth", depends_on=["iter"])
    """
    _OP_DESCRIPTORS.setdefault(fractal, {})[op_name] = descriptor

def lookup_kernel(backend: str, fractal: str, op_name: str) -> Dict[str, Any]:
    """
    Fetch kernel metadata from the registry. Raises KeyError if not found.
    """
    be = backend.upper()
    try:
        return _REGISTRY[fractal][op_name][be]
    except KeyError as e:
        raise KeyError(f"Kernel not found for fractal='{fractal}', op='{op_name}', backend='{be}'") from e

def list_kernels(fractal: str, backend: str) -> List[str]:
    """
    List all registered operation names for the given fractal and backend.
    """
    be = backend.upper()
    return sorted(op for op, backends in _REGISTRY.get(fractal, {}).items() if be in backends)

def get_op_descriptor(fractal: str, op_name: str) -> Dict[str, Any]:
    """
    Get the static operation descriptor for the given fractal and operation.
    Raises KeyError if not found.
    """
    try:
        descriptor = _OP_DESCRIPTORS[fractal][op_name]
    except KeyError as e:
        raise KeyError(f"Operation descriptor not found for fractal='{fractal}', op='{op_name}'") from e
    return descriptor

def op_chain(fractal: str, last_op: str) -> List[str]:
    """
    Resolve the ops needed to produce `last_op`, dependencies first.
    """
    chain: List[str] = []

    def visit(op: str) -> None:
        if op in chain:
            return
        for dep in get_op_descriptor(fractal, op).get("depends_on", []):
            visit(dep)
        chain.append(op)

    visit(last_op)
    return chain
