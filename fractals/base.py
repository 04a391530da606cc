from dataclasses import dataclass
from typing import NamedTuple

from utils.coords import viewport_span
from utils.enums import EngineMode


DEFAULT_CENTER_X = -0.5
DEFAULT_CENTER_Y = 0.0
DEFAULT_ZOOM = 1.0
DEFAULT_ITERATIONS = 100

# |z|^2 bound beyond which the orbit is guaranteed to diverge.
BAILOUT = 4.0


@dataclass(frozen=True)
class Viewport:
    """
    Holds the viewport parameters for rendering a fractal.
    Center and zoom determine the area of the complex plane to render.
    Width and Height determine the size of the resulting image in pixels.
    """
    center_x: float = DEFAULT_CENTER_X
    center_y: float = DEFAULT_CENTER_Y
    zoom: float = DEFAULT_ZOOM
    width: int = 800
    height: int = 800

    @property
    def scale(self) -> float:
        return viewport_span(self.zoom)


@dataclass(frozen=True)
class RenderSettings:
    """
    Holds the rendering settings for a fractal.
    Max_iter is the escape-time iteration budget.
    Palette names the gradient used for escaped points.
    Engine selects full-frame or banded (tiled) execution; tile_rows and
    workers only apply to the tiled engine (workers=0 means one per CPU).
    """
    max_iter: int = DEFAULT_ITERATIONS
    palette: str = "Psychedelic"
    engine: EngineMode = EngineMode.FULL_FRAME
    tile_rows: int = 64
    workers: int = 0


class ComplexPoint(NamedTuple):
    re: float
    im: float


class IterationResult(NamedTuple):
    escaped: bool
    count: int
    last_magnitude_sq: float


class Pixel(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255
