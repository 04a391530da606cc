import numpy as np
import pytest

from fractals.base import Viewport, RenderSettings
from rendering.core import Renderer, make_engine
from rendering.engines.full_frame import FullFrameEngine
from rendering.engines.tile import TileEngine
from utils.enums import EngineMode


@pytest.fixture
def viewport():
    return Viewport(center_x=-0.7269, center_y=0.1889, zoom=20.0, width=64, height=45)


def test_make_engine():
    assert isinstance(make_engine(RenderSettings(engine=EngineMode.FULL_FRAME)), FullFrameEngine)
    tiled = make_engine(RenderSettings(engine=EngineMode.TILED, tile_rows=16, workers=2))
    assert isinstance(tiled, TileEngine)
    assert (tiled.tile_rows, tiled.max_workers) == (16, 2)


def test_render_shape_and_alpha(viewport):
    rgba = Renderer(RenderSettings(max_iter=200)).render_rgba(viewport)
    assert rgba.shape == (45, 64, 4)
    assert rgba.dtype == np.uint8
    assert np.all(rgba[..., 3] == 255)


@pytest.mark.parametrize("tile_rows,workers", [(1, 4), (7, 3), (16, 1), (100, 0)])
def test_tiled_matches_full_frame(viewport, tile_rows, workers):
    full = Renderer(RenderSettings(max_iter=300)).render_rgba(viewport)
    tiled = Renderer(RenderSettings(max_iter=300, engine=EngineMode.TILED,
                                    tile_rows=tile_rows, workers=workers)).render_rgba(viewport)
    assert np.array_equal(full, tiled)


def test_render_is_deterministic(viewport):
    renderer = Renderer(RenderSettings(max_iter=250, palette="Classic"))
    assert np.array_equal(renderer.render_rgba(viewport), renderer.render_rgba(viewport))


def test_grid_center_of_default_view_is_interior():
    vp = Viewport(center_x=-0.5, center_y=0.0, zoom=1.0, width=100, height=100)
    rgba = Renderer(RenderSettings(max_iter=50)).render_rgba(vp)
    assert tuple(rgba[50, 50]) == (0, 0, 0, 255)
    # far corner (-2.5, -2.0) is outside the set
    assert tuple(rgba[0, 0, :3]) != (0, 0, 0)


def test_pixels_match_per_point_pipeline(viewport):
    renderer = Renderer(RenderSettings(max_iter=300))
    rgba = renderer.render_rgba(viewport)
    for px, py in [(0, 0), (31, 22), (63, 44), (10, 40)]:
        result = renderer.fractal.evaluate(renderer.fractal.map_pixel(px, py, viewport), 300)
        pixel = renderer.color_for(result.count, result.last_magnitude_sq)
        assert tuple(rgba[py, px]) == tuple(pixel)


def test_render_into_only_touches_its_region(viewport):
    renderer = Renderer(RenderSettings(max_iter=100))
    backing = np.full(64 * 45 * 4 + 16, 7, dtype=np.uint8)
    renderer.render_into(viewport, backing[:-16].reshape(45, 64, 4))
    assert np.all(backing[-16:] == 7)
    assert np.array_equal(backing[:-16].reshape(45, 64, 4), renderer.render_rgba(viewport))
