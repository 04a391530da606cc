"""
Benchmark the fractal engine (full-frame vs. banded thread pool).

Usage examples:
  python -m benchmarking.benchmark --res 800x600,1280x720 --max-iter 1000 --runs 5

  python -m benchmarking.benchmark --engines tiled --tile-rows 32 --workers 8
"""

import argparse
import csv
import logging
import os
import platform
import time
from typing import List, Tuple

from fractals.base import Viewport, RenderSettings
from rendering.core import Renderer
from utils.enums import EngineMode

logger = logging.getLogger(__name__)

ENGINES = {"full": EngineMode.FULL_FRAME, "tiled": EngineMode.TILED}

# --- Helpers -----------------------------------------------------------------

def parse_resolution_list(res_str: str) -> List[Tuple[int, int]]:
    """
    Parse resolutions like "800x600,1280x720".
    """
    if not res_str:
        return [(800, 600), (1280, 720), (1920, 1080)]
    out: List[Tuple[int, int]] = []
    for token in res_str.split(','):
        token = token.strip().lower()
        if not token:
            continue
        w, h = token.split('x')
        out.append((int(w), int(h)))
    return out

def benchmark_renderer(renderer: Renderer, vp: Viewport, runs: int = 3,
                       warmup: int = 1) -> Tuple[float, float]:
    """
    Returns (average seconds per frame, frames per second). Warmup runs
    absorb numba compilation.
    """
    for _ in range(max(0, warmup)):
        renderer.render_rgba(vp)
    times = []
    for _ in range(max(1, runs)):
        start = time.perf_counter()
        renderer.render_rgba(vp)
        times.append(time.perf_counter() - start)
    avg_time = sum(times) / len(times)
    fps = 1.0 / avg_time if avg_time > 0 else 0.0
    return avg_time, fps

# --- CLI ---------------------------------------------------------------------

def main(argv=None):
    p = argparse.ArgumentParser(description="Benchmark the Mandelbrot engine.")
    p.add_argument("--engines", type=str, default="full,tiled",
                   help="Comma separated list: full,tiled")
    p.add_argument("--res", type=str, default="800x600,1280x720,1920x1080",
                   help="Comma separated WxH list")
    p.add_argument("--center", type=float, nargs=2, default=[-0.7269, 0.1889])
    p.add_argument("--zoom", type=float, default=50.0)
    p.add_argument("--max-iter", type=int, default=500)
    p.add_argument("--runs", type=int, default=3)
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--tile-rows", type=int, default=64)
    p.add_argument("--workers", type=int, default=0)
    p.add_argument("--csv", type=str, default="benchmark_results.csv")
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    tags = [t.strip().lower() for t in args.engines.split(",") if t.strip()]
    unknown = [t for t in tags if t not in ENGINES]
    if unknown:
        p.error(f"unknown engine(s): {', '.join(unknown)}")
    resolutions = parse_resolution_list(args.res)

    cpu_info = platform.processor() or platform.machine()
    logger.info("CPU: %s (%s cores)", cpu_info, os.cpu_count())

    renderers = {
        tag: Renderer(RenderSettings(max_iter=args.max_iter, engine=ENGINES[tag],
                                     tile_rows=args.tile_rows, workers=args.workers))
        for tag in tags
    }

    if os.path.exists(args.csv):
        os.remove(args.csv)
    with open(args.csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Hardware Summary"])
        writer.writerow(["CPU", cpu_info])
        writer.writerow(["Cores", os.cpu_count()])
        writer.writerow([])

        header = ["Resolution"]
        for tag in tags:
            header.extend([f"{tag} Time (s)", f"{tag} FPS"])
        writer.writerow(header)

        for width, height in resolutions:
            vp = Viewport(args.center[0], args.center[1], args.zoom, width, height)
            row = [f"{width}x{height}"]
            for tag in tags:
                avg, fps = benchmark_renderer(renderers[tag], vp, args.runs, args.warmup)
                logger.info("%dx%d %s: %.4fs | FPS: %.2f", width, height, tag, avg, fps)
                row.extend([f"{avg:.4f}", f"{fps:.2f}"])
            writer.writerow(row)

    logger.info("Benchmark results saved to %s", args.csv)


if __name__ == '__main__':
    main()
