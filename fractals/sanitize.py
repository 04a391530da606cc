from __future__ import annotations
import logging
import math
from typing import Any, Optional

from fractals.base import (Viewport, DEFAULT_CENTER_X, DEFAULT_CENTER_Y,
                           DEFAULT_ZOOM, DEFAULT_ITERATIONS)
from utils.coords import viewport_span

logger = logging.getLogger(__name__)


def _as_float(name: str, value: Any, default: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        logger.warning("%s=%r is not a number, using %s", name, value, default)
        return default
    if not math.isfinite(v):
        logger.warning("%s=%r is not finite, using %s", name, value, default)
        return default
    return v


def _as_int(name: str, value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning("%s=%r is not an integer", name, value)
        return None


def sanitize_iterations(iterations: Any) -> int:
    """
    Clamp the iteration budget on the low end; anything below 1 becomes 1.
    """
    n = _as_int("iterations", iterations)
    if n is None:
        return DEFAULT_ITERATIONS
    if n < 1:
        logger.warning("iterations=%d clamped to 1", n)
        return 1
    return n


def sanitize_viewport(width: Any, height: Any, center_x: Any, center_y: Any,
                      zoom: Any) -> Optional[Viewport]:
    """
    Turns raw boundary arguments into a valid Viewport.

    Returns None when the resolution is empty (the call becomes a no-op).
    Non-finite centers and zooms fall back to the default view, non-positive
    zooms become 1.0. A zoom too small to resolve keeps its value and the
    frame collapses onto the center. Never raises.
    """
    w = _as_int("width", width)
    h = _as_int("height", height)
    if w is None or h is None or w <= 0 or h <= 0:
        logger.debug("Empty resolution %rx%r, nothing to render", width, height)
        return None

    cx = _as_float("center_x", center_x, DEFAULT_CENTER_X)
    cy = _as_float("center_y", center_y, DEFAULT_CENTER_Y)
    z = _as_float("zoom", zoom, DEFAULT_ZOOM)
    if z <= 0.0:
        logger.warning("zoom=%r is not positive, using %s", z, DEFAULT_ZOOM)
        z = DEFAULT_ZOOM
    if viewport_span(z) == 0.0:
        logger.warning("zoom=%r is too small to resolve, view collapses onto "
                       "(%s, %s)", z, cx, cy)

    return Viewport(center_x=cx, center_y=cy, zoom=z, width=w, height=h)
