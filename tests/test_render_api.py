import ctypes
import logging
import math

import numpy as np
import pytest

from api.render_api import generate_fractal, render_fractal
from utils.enums import EngineMode

W, H = 24, 16
N = W * H * 4


def frame(**overrides):
    args = dict(width=W, height=H, center_x=-0.5, center_y=0.0, zoom=1.0, iterations=60)
    args.update(overrides)
    return render_fractal(**args)


def test_buffer_size_and_alpha():
    buf = bytearray(N)
    generate_fractal(buf, W, H, -0.5, 0.0, 1.0, 60)
    assert len(buf) == N
    assert all(a == 255 for a in buf[3::4])


def test_render_fractal_matches_generate_fractal():
    buf = bytearray(N)
    generate_fractal(buf, W, H, -0.5, 0.0, 1.0, 60)
    assert bytes(buf) == frame()


def test_deterministic():
    assert frame(center_x=-0.7269, center_y=0.1889, zoom=50.0, iterations=300) == \
        frame(center_x=-0.7269, center_y=0.1889, zoom=50.0, iterations=300)


@pytest.mark.parametrize("width,height", [(0, 16), (24, 0), (-3, 16), (24, -1), (0, 0)])
def test_empty_resolution_leaves_buffer_untouched(width, height):
    buf = bytearray(b"\x07" * N)
    generate_fractal(buf, width, height, -0.5, 0.0, 1.0, 60)
    assert buf == bytearray(b"\x07" * N)


def test_empty_resolution_without_buffer():
    generate_fractal(None, 0, 0, -0.5, 0.0, 1.0, 60)
    assert render_fractal(0, 10) == b""


def test_non_positive_zoom_is_zoom_one():
    assert frame(zoom=-5.0) == frame(zoom=1.0)
    assert frame(zoom=0.0) == frame(zoom=1.0)


def test_non_positive_iterations_is_one():
    assert frame(iterations=0) == frame(iterations=1)
    assert frame(iterations=-20) == frame(iterations=1)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_inputs_use_defaults(bad):
    default = frame(center_x=-0.5, center_y=0.0, zoom=1.0)
    assert frame(center_x=bad) == default
    assert frame(center_y=bad) == default
    assert frame(zoom=bad) == default


def test_numpy_and_ctypes_buffers():
    expected = frame()
    arr = np.zeros((H, W, 4), dtype=np.uint8)
    generate_fractal(arr, W, H, -0.5, 0.0, 1.0, 60)
    assert arr.tobytes() == expected

    raw = (ctypes.c_ubyte * N)()
    generate_fractal(raw, W, H, -0.5, 0.0, 1.0, 60)
    assert bytes(raw) == expected


def test_bytes_past_the_frame_are_not_written():
    buf = bytearray(b"\x07" * (N + 10))
    generate_fractal(buf, W, H, -0.5, 0.0, 1.0, 60)
    assert bytes(buf[:N]) == frame()
    assert buf[N:] == bytearray(b"\x07" * 10)


def test_unusable_buffers_are_logged_not_raised(caplog):
    small = bytearray(b"\x07" * (N - 1))
    with caplog.at_level(logging.ERROR):
        generate_fractal(small, W, H, -0.5, 0.0, 1.0, 60)
        generate_fractal(bytes(N), W, H, -0.5, 0.0, 1.0, 60)
        generate_fractal(None, W, H, -0.5, 0.0, 1.0, 60)
    assert small == bytearray(b"\x07" * (N - 1))
    assert len(caplog.records) == 3


def test_extreme_zoom_degenerates_to_one_color():
    data = np.frombuffer(frame(zoom=1e300), dtype=np.uint8).reshape(H, W, 4)
    assert np.all(data == data[0, 0])
    # the whole frame collapses onto (-0.5, 0), an interior point
    assert tuple(data[0, 0]) == (0, 0, 0, 255)


@pytest.mark.parametrize("zoom", [1e-320, 5e-324])
def test_vanishing_zoom_collapses_to_center_color(zoom, caplog):
    with caplog.at_level(logging.WARNING):
        data = np.frombuffer(frame(zoom=zoom), dtype=np.uint8).reshape(H, W, 4)
    assert np.all(data == data[0, 0])
    assert tuple(data[0, 0]) == (0, 0, 0, 255)
    assert "too small" in caplog.text

    # an exterior center gives a uniform exterior color, not a NaN column
    data = np.frombuffer(frame(center_x=2.0, center_y=2.0, zoom=zoom),
                         dtype=np.uint8).reshape(H, W, 4)
    assert np.all(data == data[0, 0])
    assert tuple(data[0, 0, :3]) != (0, 0, 0)


def test_tiled_engine_through_boundary():
    assert render_fractal(W, H, -0.5, 0.0, 1.0, 60, engine=EngineMode.TILED) == frame()


def test_case_study_view():
    data = np.frombuffer(
        render_fractal(800, 800, -0.7269, 0.1889, 50.0, 500), dtype=np.uint8
    ).reshape(800, 800, 4)
    assert np.all(data[..., 3] == 255)
    rgb = data[..., :3]
    interior = np.all(rgb == 0, axis=-1)
    # zoomed boundary: both set and escaped points, many distinct shades
    assert interior.any()
    assert (~interior).any()
    assert len(np.unique(rgb.reshape(-1, 3), axis=0)) > 100
