"""
Interactive state of the viewer, kept free of Qt so it can be driven by
tests and scripted runs. The window only forwards input and draws.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from fractals.base import (Viewport, DEFAULT_CENTER_X, DEFAULT_CENTER_Y,
                           DEFAULT_ZOOM, DEFAULT_ITERATIONS)
from utils.enums import Key

logger = logging.getLogger(__name__)

PAN_SPEED = 1.5         # complex units per second at zoom 1
ZOOM_SPEED = 2.0        # relative zoom per second
DRAG_SPEED = 0.005      # complex units per dragged pixel at zoom 1
ITER_STEP = 50
MIN_ITER = 10

_KEY_ALIASES = {"=": Key.MORE_ITER, "kp+": Key.MORE_ITER, "kp-": Key.LESS_ITER}


def _as_key(key) -> Optional[Key]:
    if isinstance(key, Key):
        return key
    if key in _KEY_ALIASES:
        return _KEY_ALIASES[key]
    try:
        return Key(key)
    except ValueError:
        return None


@dataclass
class ViewState:
    """
    Holds the current view and the flags the event loop reacts to.
    `needs_regenerate` is raised by every change that alters the frame.
    """
    center_x: float = DEFAULT_CENTER_X
    center_y: float = DEFAULT_CENTER_Y
    zoom: float = DEFAULT_ZOOM
    iterations: int = DEFAULT_ITERATIONS

    auto_animate: bool = False
    show_help: bool = True
    needs_regenerate: bool = True
    screenshot_requested: bool = False
    quit_requested: bool = False

    initial: Tuple[float, float, float, int] = field(init=False)

    def __post_init__(self) -> None:
        self.initial = (self.center_x, self.center_y, self.zoom, self.iterations)

    def viewport(self, width: int, height: int) -> Viewport:
        return Viewport(self.center_x, self.center_y, self.zoom, width, height)

    # ---- Continuous input ----------------------------------------------

    def update(self, dt: float, held: Iterable = ()) -> None:
        """Advance one frame with the given keys held down."""
        keys = {_as_key(k) for k in held}
        move = PAN_SPEED / self.zoom * dt
        step = ZOOM_SPEED * dt

        if Key.LEFT in keys:
            self.pan(-move, 0.0)
        if Key.RIGHT in keys:
            self.pan(move, 0.0)
        # screen coordinates: up means smaller imaginary part
        if Key.UP in keys:
            self.pan(0.0, -move)
        if Key.DOWN in keys:
            self.pan(0.0, move)
        if Key.ZOOM_IN in keys:
            self.zoom_in(step)
        if Key.ZOOM_OUT in keys:
            self.zoom_out(step)

        if self.auto_animate:
            self.zoom_in(step * 0.5)

    def pan(self, dx: float, dy: float) -> None:
        self.center_x += dx
        self.center_y += dy
        self.needs_regenerate = True

    def zoom_in(self, step: float) -> None:
        self.zoom *= 1.0 + step
        self.needs_regenerate = True

    def zoom_out(self, step: float) -> None:
        new_zoom = self.zoom / (1.0 + step)
        # never zoom out past the full view
        if new_zoom > 1.0:
            self.zoom = new_zoom
            self.needs_regenerate = True

    def drag(self, dx_px: float, dy_px: float) -> None:
        move = DRAG_SPEED / self.zoom
        self.pan(-dx_px * move, -dy_px * move)

    def wheel(self, delta: float, dt: float) -> None:
        if delta > 0:
            self.zoom_in(ZOOM_SPEED * dt)
        elif delta < 0:
            self.zoom_out(ZOOM_SPEED * dt)

    # ---- Discrete input ------------------------------------------------

    def key_pressed(self, key) -> None:
        k = _as_key(key)
        if k is Key.QUIT:
            self.quit_requested = True
        elif k is Key.ANIMATE:
            self.auto_animate = not self.auto_animate
        elif k is Key.RESET:
            self.reset()
        elif k is Key.HELP:
            self.show_help = not self.show_help
        elif k is Key.SCREENSHOT:
            self.screenshot_requested = True
        elif k is Key.MORE_ITER:
            self.iterations += ITER_STEP
            self.needs_regenerate = True
        elif k is Key.LESS_ITER:
            self.iterations = max(MIN_ITER, self.iterations - ITER_STEP)
            self.needs_regenerate = True

    def reset(self) -> None:
        self.center_x, self.center_y, self.zoom, self.iterations = self.initial
        self.needs_regenerate = True


# (end time in seconds, action) run in order by CaseStudy
CASE_STUDY_SCRIPT = (
    (0.30, "pan_left"),
    (0.73, "pan_down"),
    (3.0, "zoom"),
    (3.1, "pan_down"),
    (7.5, "zoom"),
)
CASE_STUDY_QUIT_AT = 13.0


@dataclass
class CaseStudy:
    """
    Scripted demo: a fixed sequence of pans and zooms, one screenshot once
    the motion ends, and a quit request a few seconds later.
    """
    timer: float = 0.0
    screenshot_taken: bool = False

    def step(self, state: ViewState, dt: float) -> None:
        self.timer += dt
        move = PAN_SPEED / state.zoom * dt
        step = ZOOM_SPEED * dt

        for end, action in CASE_STUDY_SCRIPT:
            if self.timer <= end:
                if action == "pan_left":
                    state.pan(-move, 0.0)
                elif action == "pan_down":
                    state.pan(0.0, move)
                else:
                    state.zoom_in(step)
                return

        if not self.screenshot_taken:
            logger.info("Case study motion finished, taking screenshot")
            state.screenshot_requested = True
            self.screenshot_taken = True
        elif self.timer >= CASE_STUDY_QUIT_AT:
            state.quit_requested = True
