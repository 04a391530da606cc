import pytest

import kernel_sources.cpu.mandelbrot  # noqa: F401  registers the op descriptors
from fractals.mandelbrot import MandelbrotFractal
from kernel_sources import load_kernel, list_kernels, op_chain, get_op_descriptor
from kernel_sources.registry import register_kernel, lookup_kernel


def test_op_chain_resolves_dependencies_first():
    assert op_chain("mandelbrot", "normalize") == ["iter", "smooth", "normalize"]
    assert op_chain("mandelbrot", "iter") == ["iter"]


def test_program_follows_op_chain():
    program = MandelbrotFractal().program()
    assert [op for op, _ in program] == ["iter", "smooth", "normalize"]
    assert list_kernels("mandelbrot", "cpu") == ["iter", "normalize", "smooth"]


def test_loaded_kernel_metadata():
    meta = load_kernel("CPU", "mandelbrot", "iter")
    assert callable(meta["func"])
    assert callable(meta["parallel_func"])
    assert meta["produces"] == ["iter_raw", "mag2"]
    assert meta["arg_order"][-2:] == ["iter_raw", "mag2"]


def test_missing_kernel_and_descriptor():
    with pytest.raises(KeyError):
        load_kernel("CPU", "mandelbrot", "no_such_op")
    with pytest.raises(KeyError):
        load_kernel("CPU", "no_such_fractal", "iter")
    with pytest.raises(KeyError):
        get_op_descriptor("mandelbrot", "no_such_op")


def test_incomplete_metadata_is_rejected():
    register_kernel("test_fractal", "iter", "cpu", func=len)
    assert lookup_kernel("CPU", "test_fractal", "iter")["func"] is len
    with pytest.raises(KeyError):
        load_kernel("CPU", "test_fractal", "iter")


def test_descriptors_only_carry_dependencies():
    assert get_op_descriptor("mandelbrot", "iter") == {"depends_on": []}
    assert get_op_descriptor("mandelbrot", "smooth") == {"depends_on": ["iter"]}
    assert get_op_descriptor("mandelbrot", "normalize") == {"depends_on": ["smooth"]}
