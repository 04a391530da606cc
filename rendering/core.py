from __future__ import annotations
import logging
import time
from typing import Optional

import numpy as np

from coloring.base import ColoringStrategy
from coloring.smooth_escape import get_coloring
from fractals.base import Viewport, RenderSettings, Pixel
from fractals.mandelbrot import MandelbrotFractal
from kernel_sources import load_kernel
from rendering.engines.base import BaseRenderEngine
from rendering.engines.full_frame import FullFrameEngine
from rendering.engines.tile import TileEngine
from utils.enums import EngineMode

logger = logging.getLogger(__name__)


def make_engine(settings: RenderSettings) -> BaseRenderEngine:
    if settings.engine == EngineMode.FULL_FRAME:
        return FullFrameEngine()
    if settings.engine == EngineMode.TILED:
        return TileEngine(tile_rows=settings.tile_rows, max_workers=settings.workers)
    raise ValueError(f"Unknown engine mode {settings.engine!r}")


class Renderer:

    """
    Facade that binds together:
      - the fractal + render settings,
      - the render engine (strategy),
      - the coloring strategy.

    Holds no per-frame state: every render() call is self-contained.
    """

    def __init__(
        self,
        settings: Optional[RenderSettings] = None,
        *,
        fractal: Optional[MandelbrotFractal] = None,
        engine: Optional[BaseRenderEngine] = None,
        coloring: Optional[ColoringStrategy] = None,
    ):
        self.settings = settings or RenderSettings()
        self.fractal = fractal or MandelbrotFractal()
        self.engine = engine or make_engine(self.settings)
        self.coloring = coloring or get_coloring(self.settings.palette)

    def render_rgba(self, vp: Viewport) -> np.ndarray:
        """
        Returns a freshly allocated (H, W, 4) uint8 canvas, top row first.
        """
        out = np.empty((int(vp.height), int(vp.width), 4), dtype=np.uint8)
        return self.render_into(vp, out)

    def render_into(self, vp: Viewport, out: np.ndarray) -> np.ndarray:
        t0 = time.perf_counter()
        self.engine.render(self.fractal, self.coloring, self.settings, vp, out)
        logger.debug("Rendered %dx%d (%s, %d iterations) in %.2f ms",
                     vp.width, vp.height, type(self.engine).__name__,
                     self.settings.max_iter, (time.perf_counter() - t0) * 1000.0)
        return out

    def color_for(self, count: int, last_magnitude_sq: float) -> Pixel:
        """
        Color of a single escape result, through the same kernels and
        coloring as a full frame.
        """
        values = {
            "max_iter": int(self.settings.max_iter),
            "bailout": float(self.fractal.bailout),
            "iter_raw": np.array([[count]], dtype=np.int32),
            "mag2": np.array([[last_magnitude_sq]], dtype=np.float64),
            "iter_smooth": np.zeros((1, 1), dtype=np.float64),
            "iter_norm": np.zeros((1, 1), dtype=np.float64),
        }
        for op in ("smooth", "normalize"):
            meta = load_kernel(self.fractal.backend, self.fractal.name, op)
            meta["func"](*[values[a] for a in meta["arg_order"]])
        interior = ~(values["mag2"] > self.fractal.bailout)
        rgba = self.coloring.apply(values["iter_norm"], interior)
        return Pixel(*(int(c) for c in rgba[0, 0]))
