"""
Command line entry point.

    tambanokano [--center-x X] [--center-y Y] [--zoom Z] [--iterations N]
                [--case-study] [--output PATH] ...

Invalid numeric values do not abort the program: they are reported and the
default is used instead.
"""
import argparse
import logging
import math
import sys
from typing import List, Optional

import numpy as np

from api.config import ViewerConfig
from coloring.palettes import PALETTE_NAMES
from utils.enums import EngineMode

logger = logging.getLogger(__name__)

_DEFAULTS = ViewerConfig()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tambanokano",
        description="Tambanokano fractal viewer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--center-x", default=str(_DEFAULTS.center_x),
                   help="initial center X coordinate")
    p.add_argument("--center-y", default=str(_DEFAULTS.center_y),
                   help="initial center Y coordinate")
    p.add_argument("--zoom", default=str(_DEFAULTS.zoom),
                   help="initial zoom level (must be positive)")
    p.add_argument("--iterations", default=str(_DEFAULTS.iterations),
                   help="initial iteration count (positive integer)")
    p.add_argument("--case-study", action="store_true",
                   help="run the scripted case study and exit")
    p.add_argument("--size", default=f"{_DEFAULTS.width}x{_DEFAULTS.height}",
                   help="window / image size as WxH")
    p.add_argument("--palette", default=_DEFAULTS.palette, choices=PALETTE_NAMES)
    p.add_argument("--engine", default="full", choices=["full", "tiled"],
                   help="full-frame parallel kernel or banded thread pool")
    p.add_argument("-o", "--output", default=None,
                   help="render one frame to this PNG file instead of opening a window")
    p.add_argument("--log-level", default=_DEFAULTS.log_level,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _float_or_default(name: str, raw: str, default: float, positive: bool = False) -> float:
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value) or (positive and value <= 0):
        rule = " (must be positive)" if positive else ""
        logger.warning("invalid value for --%s%s, using default", name, rule)
        return default
    return value


def _iterations_or_default(raw: str, default: int) -> int:
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value) or value <= 0 or value != math.floor(value):
        logger.warning("invalid value for --iterations (must be positive integer), using default")
        return default
    return int(value)


def _size_or_default(raw: str) -> tuple:
    try:
        w, h = (int(v) for v in raw.lower().split("x"))
    except ValueError:
        w = h = 0
    if w <= 0 or h <= 0:
        logger.warning("invalid value for --size, using default")
        return _DEFAULTS.width, _DEFAULTS.height
    return w, h


def parse_config(argv: Optional[List[str]] = None) -> ViewerConfig:
    args = build_parser().parse_args(argv)
    width, height = _size_or_default(args.size)
    return ViewerConfig(
        center_x=_float_or_default("center-x", args.center_x, _DEFAULTS.center_x),
        center_y=_float_or_default("center-y", args.center_y, _DEFAULTS.center_y),
        zoom=_float_or_default("zoom", args.zoom, _DEFAULTS.zoom, positive=True),
        iterations=_iterations_or_default(args.iterations, _DEFAULTS.iterations),
        case_study=args.case_study,
        width=width,
        height=height,
        palette=args.palette,
        engine=EngineMode.TILED if args.engine == "tiled" else EngineMode.FULL_FRAME,
        output=args.output,
        log_level=args.log_level,
    )


def render_to_file(config: ViewerConfig) -> bool:
    from api.render_api import generate_fractal
    from utils.image_helpers import save_png

    rgba = np.zeros((config.height, config.width, 4), dtype=np.uint8)
    generate_fractal(rgba, config.width, config.height, config.center_x,
                     config.center_y, config.zoom, config.iterations,
                     palette=config.palette, engine=config.engine)
    return save_png(rgba, config.output)


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_config(argv)
    logging.basicConfig(level=getattr(logging, config.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if config.output:
        return 0 if render_to_file(config) else 1

    from PySide6.QtWidgets import QApplication
    from ui.view import FractalViewer

    app = QApplication.instance() or QApplication(sys.argv[:1])
    viewer = FractalViewer(config)
    viewer.show()
    return app.exec()
