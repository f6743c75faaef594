import pytest

from swanengine.drawutil import Color, linear_gradient

BLACK = Color(0.0, 0.0, 0.0, 0.0)
OTHER = Color(2.0, 4.0, 6.0, 8.0)


def test_below_first_stop_gives_first_color():
    assert linear_gradient(-5.0, [(0.0, BLACK), (1.0, OTHER)]) == BLACK


def test_above_last_stop_gives_last_color():
    assert linear_gradient(5.0, [(0.0, BLACK), (1.0, OTHER)]) == OTHER


def test_exact_stop_gives_that_color():
    stops = [(0.0, BLACK), (1.0, OTHER), (2.0, BLACK)]
    assert linear_gradient(1.0, stops) == OTHER


def test_midpoint_interpolates():
    result = linear_gradient(0.5, [(0.0, BLACK), (1.0, OTHER)])
    assert result == Color(1.0, 2.0, 3.0, 4.0)


def test_interpolation_is_monotonic():
    stops = [(0.0, BLACK), (1.0, OTHER)]
    reds = [linear_gradient(v / 10, stops).r for v in range(11)]
    assert reds == sorted(reds)


def test_components_clamped_to_255():
    bright = Color(300.0, 300.0, 300.0, 300.0)
    result = linear_gradient(0.5, [(0.0, bright), (1.0, bright)])
    assert result.r == 255.0
    assert result.a == 255.0


def test_single_stop():
    assert linear_gradient(3.0, [(0.0, OTHER)]) == OTHER


def test_empty_gradient_rejected():
    with pytest.raises(ValueError):
        linear_gradient(0.0, [])