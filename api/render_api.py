"""
Boundary functions of the fractal engine.

`generate_fractal` keeps the fixed, void-returning call shape the viewer
expects: a caller-owned buffer plus (width, height, center_x, center_y, zoom,
iterations). It has no error channel, so bad input is sanitized instead of
rejected and nothing here raises for numeric arguments.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from fractals.base import RenderSettings, DEFAULT_CENTER_X, DEFAULT_CENTER_Y, \
    DEFAULT_ZOOM, DEFAULT_ITERATIONS
from fractals.sanitize import sanitize_viewport, sanitize_iterations
from rendering.core import Renderer
from utils.enums import EngineMode

logger = logging.getLogger(__name__)


def _writable_bytes(buffer: Any, nbytes: int) -> Optional[np.ndarray]:
    """
    Flat uint8 view over the first `nbytes` of a writable buffer, or None
    if the object cannot serve as the output.
    """
    if buffer is None:
        logger.error("No output buffer given")
        return None
    try:
        flat = np.frombuffer(buffer, dtype=np.uint8)
    except (TypeError, ValueError, BufferError) as e:
        logger.error("Output buffer is not a contiguous byte buffer: %s", e)
        return None
    if not flat.flags.writeable:
        logger.error("Output buffer is read-only")
        return None
    if flat.size < nbytes:
        logger.error("Output buffer holds %d bytes, %d needed", flat.size, nbytes)
        return None
    return flat[:nbytes]


def generate_fractal(buffer: Any, width: int, height: int,
                     center_x: float, center_y: float, zoom: float,
                     iterations: int, *, palette: str = "Psychedelic",
                     engine: EngineMode = EngineMode.FULL_FRAME) -> None:
    """
    Fill `buffer` with width*height RGBA8 pixels, row-major, top row first.

    - width <= 0 or height <= 0: no-op, buffer untouched.
    - zoom <= 0 -> 1.0, iterations <= 0 -> 1.
    - NaN/inf center_x, center_y, zoom -> -0.5, 0.0, 1.0.
    - buffer missing or too small: logged, buffer untouched.
    Bytes past width*height*4 are never written.
    """
    vp = sanitize_viewport(width, height, center_x, center_y, zoom)
    if vp is None:
        return
    flat = _writable_bytes(buffer, vp.width * vp.height * 4)
    if flat is None:
        return

    settings = RenderSettings(max_iter=sanitize_iterations(iterations),
                              palette=palette, engine=engine)
    Renderer(settings).render_into(vp, flat.reshape(vp.height, vp.width, 4))


def render_fractal(width: int, height: int,
                   center_x: float = DEFAULT_CENTER_X,
                   center_y: float = DEFAULT_CENTER_Y,
                   zoom: float = DEFAULT_ZOOM,
                   iterations: int = DEFAULT_ITERATIONS, *,
                   palette: str = "Psychedelic",
                   engine: EngineMode = EngineMode.FULL_FRAME) -> bytes:
    """Allocating variant of generate_fractal; empty bytes for an empty frame."""
    try:
        size = max(0, int(width)) * max(0, int(height)) * 4
    except (TypeError, ValueError, OverflowError):
        size = 0
    buf = bytearray(size)
    if size:
        generate_fractal(buf, width, height, center_x, center_y, zoom,
                         iterations, palette=palette, engine=engine)
    return bytes(buf)
