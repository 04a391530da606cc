from dataclasses import dataclass
from typing import Dict, Any, List, Tuple

import numpy as np

import kernel_sources.cpu.mandelbrot  # noqa: F401  (op descriptors)
from kernel_sources import load_kernel, op_chain
from kernel_sources.cpu.mandelbrot.iter import map_pixel, escape_time
from fractals.base import (Viewport, RenderSettings, ComplexPoint,
                           IterationResult, BAILOUT)


@dataclass
class MandelbrotFractal:
    """
    Escape-time Mandelbrot set, evaluated per pixel by the CPU kernels
    registered under kernel_sources/cpu/mandelbrot.
    """
    name: str = "mandelbrot"
    backend: str = "CPU"
    bailout: float = BAILOUT
    output_op: str = "normalize"

    # ---- Per-point API -------------------------------------------------

    def map_pixel(self, px: int, py: int, vp: Viewport) -> ComplexPoint:
        re, im = map_pixel(px, py, float(vp.center_x), float(vp.center_y),
                           float(vp.scale), int(vp.width), int(vp.height))
        return ComplexPoint(re, im)

    def evaluate(self, point: ComplexPoint, iterations: int) -> IterationResult:
        n, m = escape_time(float(point.re), float(point.im), int(iterations),
                           self.bailout)
        return IterationResult(escaped=bool(m > self.bailout), count=int(n),
                               last_magnitude_sq=float(m))

    # ---- Band API ------------------------------------------------------

    def kernel_args(self, vp: Viewport, st: RenderSettings, row0: int) -> Dict[str, Any]:
        return {
            "center_x": float(vp.center_x),
            "center_y": float(vp.center_y),
            "scale": float(vp.scale),
            "width": int(vp.width),
            "height": int(vp.height),
            "row0": int(row0),
            "max_iter": int(st.max_iter),
            "bailout": float(self.bailout),
        }

    def program(self) -> List[Tuple[str, Dict[str, Any]]]:
        return [(op, load_kernel(self.backend, self.name, op))
                for op in op_chain(self.name, self.output_op)]

    def compute_band(self, vp: Viewport, st: RenderSettings, row0: int,
                     rows: int, parallel: bool = False) -> Tuple[np.ndarray, np.ndarray]:
        """
        Runs the kernel chain over rows [row0, row0 + rows) of the frame.
        Returns (iter_norm, interior_mask), both (rows, width).
        """
        shape = (int(rows), int(vp.width))
        values: Dict[str, Any] = self.kernel_args(vp, st, row0)
        values.update(
            iter_raw=np.zeros(shape, dtype=np.int32),
            mag2=np.zeros(shape, dtype=np.float64),
            iter_smooth=np.zeros(shape, dtype=np.float64),
            iter_norm=np.zeros(shape, dtype=np.float64),
        )
        for op, meta in self.program():
            func = meta["func"]
            if parallel and "parallel_func" in meta:
                func = meta["parallel_func"]
            func(*[values[a] for a in meta["arg_order"]])

        interior = ~(values["mag2"] > self.bailout)
        return values["iter_norm"], interior
