"""
Rendering of annotation elements as draw commands.

The functions here are pure: they turn elements (native space) and the
current transform into display-space commands. A surface adapter issues
the commands against a real canvas, window or image buffer.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from .elements import (
    DEFAULT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_THICKNESS,
    Element,
    Polyline,
    Rectangle,
    Text,
)
from .state import AnnotationState, GesturePhase, Style
from .transform import CoordinateTransform

DisplayPosition = Tuple[float, float]


@dataclass(frozen=True)
class StrokeRect:
    """Outline between two opposite corners."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    thickness: int


@dataclass(frozen=True)
class StrokePolyline:
    """Open path through `points`."""

    points: Tuple[DisplayPosition, ...]
    color: str
    thickness: int


@dataclass(frozen=True)
class FillText:
    """Text whose baseline starts at (x, y)."""

    x: float
    y: float
    text: str
    color: str
    font_size: int


DrawCommand = Union[StrokeRect, StrokePolyline, FillText]


def _color(element: Element) -> str:
    return element.color or DEFAULT_COLOR


def _thickness(element: Element) -> int:
    if element.thickness and element.thickness > 0:
        return element.thickness
    return DEFAULT_THICKNESS


def render_element(element: Element, transform: CoordinateTransform) -> List[DrawCommand]:
    """
    Commands for a single committed element.

    Elements without enough points to draw produce no commands.
    """
    points = [transform.to_display(p.x, p.y) for p in element.points]

    if isinstance(element, Rectangle) and len(points) >= 2:
        (x1, y1), (x2, y2) = points[0], points[1]
        return [StrokeRect(x1, y1, x2, y2, _color(element), _thickness(element))]

    if isinstance(element, Polyline) and len(points) > 1:
        return [StrokePolyline(tuple(points), _color(element), _thickness(element))]

    if isinstance(element, Text) and points:
        x, y = points[0]
        font_size = element.font_size if element.font_size > 0 else DEFAULT_FONT_SIZE
        return [FillText(x, y, element.text or "", _color(element), font_size)]

    return []


def render_elements(
    elements: Iterable[Element], transform: CoordinateTransform
) -> List[DrawCommand]:
    """
    Commands for the committed surface, in collection (z-)order.

    Returns an empty list while the transform is not ready.
    """
    if not transform.is_ready:
        return []

    commands = []
    for element in elements:
        commands.extend(render_element(element, transform))
    return commands


def _preview_path(
    points: Sequence[Tuple[float, float]], transform: CoordinateTransform
) -> Tuple[DisplayPosition, ...]:
    return tuple(transform.to_display(x, y) for x, y in points)


def render_preview(state: AnnotationState) -> List[DrawCommand]:
    """Commands for the live in-progress gesture surface."""
    transform = state.transform
    if not transform.is_ready or not state.drawing_enabled:
        return []

    gesture = state.gesture
    style: Style = state.style
    phase = state.phase

    if phase == GesturePhase.DRAWING_RECTANGLE and gesture.pointer is not None:
        (x1, y1), (x2, y2) = _preview_path([gesture.anchor, gesture.pointer], transform)
        return [StrokeRect(x1, y1, x2, y2, style.color, style.thickness)]

    if phase == GesturePhase.ACCUMULATING_POLYLINE:
        path = list(gesture.polyline_points)
        if gesture.pointer is not None:
            path.append(gesture.pointer)
        return [
            StrokePolyline(_preview_path(path, transform), style.color, style.thickness)
        ]

    return []
