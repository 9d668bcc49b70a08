import pytest

from roi_annotation.core.annotation.elements import Point
from roi_annotation.core.annotation.transform import (
    CoordinateTransform,
    commit_point,
    round_half_up,
)


def test_round_half_up_matches_math_round():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.49) == 2


def test_not_ready_until_both_sizes_known():
    transform = CoordinateTransform()
    assert not transform.is_ready

    transform.native_size = (1920, 1080)
    assert not transform.is_ready
    with pytest.raises(ValueError):
        transform.to_native(1, 1)

    transform.display_size = (0, 0)
    assert not transform.is_ready

    transform.display_size = (640, 360)
    assert transform.is_ready


def test_scale_factors():
    transform = CoordinateTransform((1920, 1080), (640, 360))
    assert transform.scale_to_native == (3.0, 3.0)
    assert transform.scale_to_display == (1 / 3, 1 / 3)


def test_to_native_point_example():
    transform = CoordinateTransform((1920, 1080), (640, 360))
    assert transform.to_native_point(100, 50) == Point(300, 150)
    assert transform.to_native_point(200, 150) == Point(600, 450)


def test_independent_axis_scales():
    transform = CoordinateTransform((1280, 720), (800, 600))
    assert transform.to_native_point(400, 300) == Point(640, 360)


@pytest.mark.parametrize(
    "native_size,display_size",
    [
        ((1920, 1080), (640, 360)),
        ((1920, 1080), (1013, 571)),
        ((2560, 1440), (1280, 719)),
        ((704, 576), (704, 576)),
        ((3840, 2160), (777, 333)),
    ],
)
def test_display_native_round_trip_within_one_pixel(native_size, display_size):
    transform = CoordinateTransform(native_size, display_size)
    dw, dh = display_size
    for x, y in [(0, 0), (1, 1), (dw // 3, dh // 7), (dw - 1, dh - 1), (dw // 2, dh // 2)]:
        native = transform.to_native_point(x, y)
        back_x, back_y = transform.to_display(native.x, native.y)
        assert abs(back_x - x) <= 1
        assert abs(back_y - y) <= 1


def test_resize_does_not_touch_committed_points():
    transform = CoordinateTransform((1920, 1080), (640, 360))
    committed = transform.to_native_point(123, 45)

    transform.display_size = (1280, 720)
    transform.display_size = (1280, 720)
    assert committed == Point(369, 135)
    assert transform.to_display(committed.x, committed.y) == pytest.approx((246.0, 90.0))


def test_commit_point_rounds_once():
    assert commit_point(10.5, 20.4) == Point(11, 20)
