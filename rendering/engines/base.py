from __future__ import annotations

import numpy as np

from coloring.base import ColoringStrategy
from fractals.base import Viewport, RenderSettings
from fractals.mandelbrot import MandelbrotFractal


class BaseRenderEngine:
    """
    Base class for render engines (full-frame, tiled).

    Responsibilities:
      - Decide *how* to decompose a viewport into work (strategy),
      - run the fractal kernels and the coloring for each piece,
      - write every pixel of the caller's (H, W, 4) canvas exactly once.
    """

    def render(
        self,
        fractal: MandelbrotFractal,
        coloring: ColoringStrategy,
        settings: RenderSettings,
        viewport: Viewport,
        out: np.ndarray,
    ) -> np.ndarray:
        """
        Subclasses must implement the strategy and return `out`, fully
        populated with RGBA8 pixels.
        """
        raise NotImplementedError("BaseRenderEngine.render() must be implemented by subclasses.")

    @staticmethod
    def _render_band(fractal: MandelbrotFractal, coloring: ColoringStrategy,
                     settings: RenderSettings, viewport: Viewport,
                     out: np.ndarray, y0: int, h: int, parallel: bool) -> None:
        iter_norm, interior = fractal.compute_band(viewport, settings, y0, h,
                                                   parallel=parallel)
        coloring.apply(iter_norm, interior, out=out[y0:y0 + h])
