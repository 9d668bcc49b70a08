"""
Raster helpers for annotation elements.

These functions draw on numpy image buffers with OpenCV. Colors follow
OpenCV's BGR channel order.
"""

from typing import Iterable, Tuple

import cv2
import numpy as np

from .elements import Element
from .render import DrawCommand, FillText, StrokePolyline, StrokeRect, render_elements
from .transform import CoordinateTransform, round_half_up

BGR = Tuple[int, int, int]

DEFAULT_BGR: BGR = (0, 0, 255)
FONT_FACE = cv2.FONT_HERSHEY_SIMPLEX


def parse_color(hex_color: str) -> BGR:
    """
    Convert "#RRGGBB" (leading # optional) to a BGR tuple.

    Anything unparsable falls back to red.
    """
    if not isinstance(hex_color, str) or not hex_color:
        return DEFAULT_BGR

    value = hex_color[1:] if hex_color.startswith("#") else hex_color
    if len(value) != 6:
        return DEFAULT_BGR

    try:
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return DEFAULT_BGR
    return (b, g, r)


def _pixel(x: float, y: float) -> Tuple[int, int]:
    return round_half_up(x), round_half_up(y)


def draw_command(image: np.ndarray, command: DrawCommand) -> np.ndarray:
    """
    Issue a single draw command on an image, in place.

    Returns:
        The same image, for chaining
    """
    if isinstance(command, StrokeRect):
        cv2.rectangle(
            image,
            _pixel(command.x1, command.y1),
            _pixel(command.x2, command.y2),
            parse_color(command.color),
            command.thickness,
        )
    elif isinstance(command, StrokePolyline):
        pts = np.array([_pixel(x, y) for x, y in command.points], dtype=np.int32)
        cv2.polylines(
            image,
            [pts.reshape(-1, 1, 2)],
            False,
            parse_color(command.color),
            command.thickness,
        )
    elif isinstance(command, FillText):
        scale = cv2.getFontScaleFromHeight(FONT_FACE, command.font_size, 1)
        cv2.putText(
            image,
            command.text,
            _pixel(command.x, command.y),
            FONT_FACE,
            scale,
            parse_color(command.color),
            1,
            cv2.LINE_AA,
        )
    else:
        raise ValueError(f"Unknown draw command: {command!r}")
    return image


def draw_elements_on_image(image: np.ndarray, elements: Iterable[Element]) -> np.ndarray:
    """
    Burn elements into a frame at its native resolution.

    Args:
        image: BGR frame, the size the elements were annotated against
        elements: Committed elements (native coordinates)

    Returns:
        Annotated copy of the frame
    """
    validate_image(image)
    result = image.copy()
    h, w = result.shape[:2]
    transform = CoordinateTransform(native_size=(w, h), display_size=(w, h))
    for command in render_elements(elements, transform):
        draw_command(result, command)
    return result


def validate_image(image: np.ndarray) -> None:
    """
    Validate that image has correct format.

    Raises:
        ValueError: If image is invalid
    """
    if image is None:
        raise ValueError("Image is None")

    if not isinstance(image, np.ndarray):
        raise ValueError(f"Image must be numpy array, got {type(image)}")

    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Image must be (H, W, 3), got shape {image.shape}")

    if image.dtype != np.uint8:
        raise ValueError(f"Invalid image dtype: {image.dtype}")
