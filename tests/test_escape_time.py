import pytest

from fractals.base import ComplexPoint
from fractals.mandelbrot import MandelbrotFractal


@pytest.fixture
def fractal():
    return MandelbrotFractal()


@pytest.mark.parametrize("budget", [1, 2, 50, 1000])
def test_far_point_escapes_after_one_iteration(fractal, budget):
    result = fractal.evaluate(ComplexPoint(2.0, 2.0), budget)
    assert result.escaped
    assert result.count == 1
    assert result.last_magnitude_sq == 8.0


def test_cardioid_point_is_interior(fractal):
    result = fractal.evaluate(ComplexPoint(-0.5, 0.0), 50)
    assert not result.escaped
    assert result.count == 50
    assert result.last_magnitude_sq <= 4.0


def test_origin_never_moves(fractal):
    result = fractal.evaluate(ComplexPoint(0.0, 0.0), 30)
    assert result == (False, 30, 0.0)


def test_bailout_is_strict(fractal):
    # c = -2 bounces on |z|^2 == 4 forever and never escapes
    result = fractal.evaluate(ComplexPoint(-2.0, 0.0), 200)
    assert not result.escaped
    assert result.count == 200
    assert result.last_magnitude_sq == 4.0


def test_orbit_of_one(fractal):
    # z: 0 -> 1 -> 2 -> 5; |z|^2 == 4 still iterates
    assert fractal.evaluate(ComplexPoint(1.0, 0.0), 2) == (False, 2, 4.0)
    assert fractal.evaluate(ComplexPoint(1.0, 0.0), 3) == (True, 3, 25.0)


@pytest.mark.parametrize("point", [ComplexPoint(1.0, 0.0), ComplexPoint(0.5, 0.0),
                                   ComplexPoint(0.26, 0.0), ComplexPoint(-0.75, 0.1)])
def test_escape_count_is_stable_under_larger_budgets(fractal, point):
    first = fractal.evaluate(point, 5000)
    assert first.escaped
    for budget in (first.count, first.count + 1, first.count * 3, 10000):
        again = fractal.evaluate(point, budget)
        assert again.escaped
        assert again.count == first.count
        assert again.last_magnitude_sq == first.last_magnitude_sq
