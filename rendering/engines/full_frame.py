from __future__ import annotations

import numpy as np

from coloring.base import ColoringStrategy
from fractals.base import Viewport, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from rendering.engines.base import BaseRenderEngine


class FullFrameEngine(BaseRenderEngine):
    """
    Full-frame rendering strategy:
      - One blocking call into the numba-parallel kernel (rows spread over
        numba's own thread pool),
      - then a single coloring pass over the whole canvas.
    """

    def render(
        self,
        fractal: MandelbrotFractal,
        coloring: ColoringStrategy,
        settings: RenderSettings,
        viewport: Viewport,
        out: np.ndarray,
    ) -> np.ndarray:
        self._render_band(fractal, coloring, settings, viewport, out,
                          0, int(viewport.height), parallel=True)
        return out
