from __future__ import annotations
import importlib
import logging
from typing import Dict, Any

from kernel_sources.registry import lookup_kernel


logger = logging.getLogger(__name__)

KERNEL_ROOT = "kernel_sources"

def _module_name(backend: str, fractal: str, operation: str) -> str:
    return f"{KERNEL_ROOT}.{backend.lower()}.{fractal.lower()}.{operation.lower()}"

def load_kernel(backend: str, fractal: str, operation: str) -> Dict[str, Any]:
    """
    Import the kernel module by convention (it registers itself on import)
    and return its validated registry metadata.
    """
    try:
        meta = lookup_kernel(backend, fractal, operation)
    except KeyError:
        name = _module_name(backend, fractal, operation)
        logger.debug("Importing kernel module %s", name)
        try:
            importlib.import_module(name)
        except ModuleNotFoundError as e:
            raise KeyError(f"No kernel module '{name}'") from e
        meta = lookup_kernel(backend, fractal, operation)
    _validate_meta(meta, f"registry[{fractal}.{operation}:{backend}]")
    return meta

def _validate_meta(meta: Dict[str, Any], where: str) -> None:
    if "arg_order" not in meta or not isinstance(meta["arg_order"], (list, tuple)):
        raise KeyError(f"{where} must provide an 'arg_order' list")
    if "func" not in meta or not callable(meta["func"]):
        raise KeyError(f"{where} must provide a callable 'func'")

    for key in ("scalars", "produces", "consumes"):
        if key not in meta or not isinstance(meta[key], (list, tuple)):
            meta.setdefault(key, [])
