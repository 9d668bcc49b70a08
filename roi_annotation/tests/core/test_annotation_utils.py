"""
Tests for the OpenCV raster helpers.
"""

import numpy as np
import pytest

from roi_annotation.core.annotation.elements import (
    Point,
    Polyline,
    Rectangle,
    Text,
    deserialize_collection,
)
from roi_annotation.core.annotation.render import FillText, StrokeRect
from roi_annotation.core.annotation.utils import (
    draw_command,
    draw_elements_on_image,
    parse_color,
    validate_image,
)


class TestParseColor:
    def test_hex_to_bgr(self):
        assert parse_color("#FF0000") == (0, 0, 255)
        assert parse_color("#00ff00") == (0, 255, 0)
        assert parse_color("0000FF") == (255, 0, 0)

    @pytest.mark.parametrize(
        "value", ["", None, "#FFF", "#GG0000", "red", 255, ["#00FF00"]]
    )
    def test_fallback_to_red(self, value):
        assert parse_color(value) == (0, 0, 255)


def test_draw_rectangle_outline():
    image = np.zeros((50, 50, 3), dtype=np.uint8)
    draw_command(image, StrokeRect(10, 10, 40, 40, "#00FF00", 1))

    assert tuple(image[10, 25]) == (0, 255, 0)
    assert tuple(image[40, 25]) == (0, 255, 0)
    # Outline only
    assert tuple(image[25, 25]) == (0, 0, 0)


def test_draw_text_marks_pixels():
    image = np.zeros((60, 200, 3), dtype=np.uint8)
    draw_command(image, FillText(5, 40, "Gate", "#FFFFFF", 20))
    assert image.any()


def test_draw_unknown_command():
    with pytest.raises(ValueError):
        draw_command(np.zeros((5, 5, 3), dtype=np.uint8), object())


def test_draw_elements_on_image_native_space(test_frame):
    elements = [
        Rectangle(points=[Point(300, 150), Point(600, 450)], color="#FF0000"),
        Polyline(points=[Point(1000, 100), Point(1500, 100)], color="#0000FF", thickness=3),
        Text(points=[Point(100, 900)], text="Lane 1", color="#00FF00", font_size=40),
    ]
    result = draw_elements_on_image(test_frame, elements)

    # Original frame untouched
    assert not test_frame.any()
    assert tuple(result[150, 450]) == (0, 0, 255)
    assert tuple(result[100, 1250]) == (255, 0, 0)
    assert result[860:900, 100:300, 1].any()


def test_draw_elements_with_non_string_color(test_frame):
    elements = deserialize_collection(
        [
            {
                "type": "rectangle",
                "points": [{"x": 300, "y": 150}, {"x": 600, "y": 450}],
                "color": 255,
            }
        ]
    )
    result = draw_elements_on_image(test_frame, elements)
    assert tuple(result[150, 450]) == (0, 0, 255)


def test_draw_elements_handles_out_of_frame_points(test_frame):
    elements = [Rectangle(points=[Point(-100, -100), Point(5000, 5000)])]
    result = draw_elements_on_image(test_frame, elements)
    assert result.shape == test_frame.shape


def test_validate_image():
    validate_image(np.zeros((10, 10, 3), dtype=np.uint8))

    with pytest.raises(ValueError, match="None"):
        validate_image(None)
    with pytest.raises(ValueError, match="shape"):
        validate_image(np.zeros((10, 10), dtype=np.uint8))
    with pytest.raises(ValueError, match="dtype"):
        validate_image(np.zeros((10, 10, 3), dtype=np.float32))
