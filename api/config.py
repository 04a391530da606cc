from dataclasses import dataclass
from typing import Optional

from fractals.base import (RenderSettings, DEFAULT_CENTER_X, DEFAULT_CENTER_Y,
                           DEFAULT_ZOOM, DEFAULT_ITERATIONS)
from utils.enums import EngineMode


@dataclass(frozen=True)
class ViewerConfig:
    """
    Everything decided before the first frame: initial view, window size,
    look, and how the run ends (interactive, scripted case study, or a
    single headless frame written to `output`).
    """
    center_x: float = DEFAULT_CENTER_X
    center_y: float = DEFAULT_CENTER_Y
    zoom: float = DEFAULT_ZOOM
    iterations: int = DEFAULT_ITERATIONS
    case_study: bool = False
    width: int = 800
    height: int = 800
    palette: str = "Psychedelic"
    engine: EngineMode = EngineMode.FULL_FRAME
    output: Optional[str] = None
    log_level: str = "INFO"

    def render_settings(self) -> RenderSettings:
        return RenderSettings(max_iter=self.iterations, palette=self.palette,
                              engine=self.engine)
