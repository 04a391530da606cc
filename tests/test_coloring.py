import math

import numpy as np
import pytest

from coloring.palettes import psychedelic, palettes, PALETTE_NAMES, create_smooth_gradient
from coloring.smooth_escape import SmoothEscapeColoring, SineSweepColoring, get_coloring
from fractals.base import RenderSettings, Pixel
from rendering.core import Renderer


def test_interior_is_opaque_black():
    renderer = Renderer(RenderSettings(max_iter=100))
    assert renderer.color_for(100, 0.25) == Pixel(0, 0, 0, 255)


def test_escaped_point_uses_smooth_sine_sweep():
    renderer = Renderer(RenderSettings(max_iter=100))
    smooth = 1 + 1 - math.log2(math.log2(8.0) / 2)
    expected = psychedelic(np.array([smooth / 100]))[0]
    assert renderer.color_for(1, 8.0) == Pixel(*(int(c) for c in expected), 255)


def test_color_is_pure_function_of_inputs():
    a = Renderer(RenderSettings(max_iter=300)).color_for(17, 12.5)
    b = Renderer(RenderSettings(max_iter=300)).color_for(17, 12.5)
    assert a == b
    assert a.a == 255
    assert a[:3] != (0, 0, 0)


def test_huge_magnitude_does_not_poison_color():
    renderer = Renderer(RenderSettings(max_iter=50))
    pixel = renderer.color_for(1, float("inf"))
    # both clamp to t == 0 instead of going NaN
    assert pixel == renderer.color_for(1, 1e308)
    assert pixel.a == 255
    assert pixel[:3] != (0, 0, 0)


@pytest.mark.parametrize("name", PALETTE_NAMES)
def test_every_palette_keeps_exterior_distinct_from_interior(name):
    coloring = get_coloring(name)
    t = np.linspace(0.0, 0.999, 2000).reshape(40, 50)
    interior = np.zeros_like(t, dtype=bool)
    interior[0, :5] = True
    rgba = coloring.apply(t, interior)
    assert rgba.shape == (40, 50, 4)
    assert np.all(rgba[..., 3] == 255)
    assert np.all(rgba[interior][:, :3] == 0)
    exterior_rgb = rgba[~interior][:, :3]
    assert not np.any(np.all(exterior_rgb == 0, axis=1))


def test_black_palette_entries_are_nudged():
    coloring = SmoothEscapeColoring(np.zeros((8, 3), dtype=np.uint8))
    rgba = coloring.apply(np.array([[0.5]]), np.array([[False]]))
    assert tuple(rgba[0, 0]) == (1, 0, 0, 255)


def test_lookup_palette_blends_between_entries():
    coloring = SmoothEscapeColoring(np.array([[0, 0, 0], [200, 100, 50]], dtype=np.uint8))
    rgb = coloring.exterior(np.array([0.5]))
    assert tuple(rgb[0]) == (100, 50, 25)


def test_get_coloring():
    assert isinstance(get_coloring("Psychedelic"), SineSweepColoring)
    assert isinstance(get_coloring("Classic"), SmoothEscapeColoring)
    with pytest.raises(ValueError):
        get_coloring("NoSuchPalette")


def test_gradient_tables():
    assert set(palettes) < set(PALETTE_NAMES)
    for table in palettes.values():
        assert table.shape == (256, 3)
        assert table.dtype == np.uint8
    with pytest.raises(ValueError):
        create_smooth_gradient([(0, 0, 0)])
