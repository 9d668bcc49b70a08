"""
Annotation element model.

Defines the three element kinds (rectangle, polyline, text), their
validation rules and their persisted record shape:

    {"type": "rectangle" | "polyline" | "text",
     "points": [{"x": int, "y": int}, ...],
     "color": "#RRGGBB", "thickness": int,
     "text": str, "fontSize": int}        # text elements only

Points of a committed element are always in native image-pixel space.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, List

from .errors import InvalidElement, UnknownElementType

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#FF0000"
DEFAULT_THICKNESS = 2
DEFAULT_FONT_SIZE = 13


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go towards +infinity)."""
    return int(math.floor(value + 0.5))


class ElementType(Enum):
    RECTANGLE = "rectangle"
    POLYLINE = "polyline"
    TEXT = "text"


@dataclass(frozen=True)
class Point:
    """A pixel position."""

    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point":
        # Records written by other tools may carry fractional pixels
        return cls(
            x=round_half_up(float(data["x"])), y=round_half_up(float(data["y"]))
        )


@dataclass
class Element:
    """Fields shared by every element kind."""

    element_type: ClassVar[ElementType]

    points: List[Point] = field(default_factory=list)
    color: str = DEFAULT_COLOR
    thickness: int = DEFAULT_THICKNESS


@dataclass
class Rectangle(Element):
    """Two opposite corners, in either order."""

    element_type: ClassVar[ElementType] = ElementType.RECTANGLE


@dataclass
class Polyline(Element):
    """Open path through two or more points."""

    element_type: ClassVar[ElementType] = ElementType.POLYLINE


@dataclass
class Text(Element):
    """Label anchored at its single point (left edge, baseline)."""

    element_type: ClassVar[ElementType] = ElementType.TEXT

    text: str = ""
    font_size: int = DEFAULT_FONT_SIZE


_ELEMENT_CLASSES = {
    ElementType.RECTANGLE.value: Rectangle,
    ElementType.POLYLINE.value: Polyline,
    ElementType.TEXT.value: Text,
}


def validate(element: Element) -> None:
    """
    Check that an element is well formed.

    Raises:
        InvalidElement: With the reason the element was rejected
    """
    num_points = len(element.points)

    if isinstance(element, Rectangle):
        if num_points != 2:
            raise InvalidElement(
                f"Rectangle needs exactly 2 points, got {num_points}"
            )
    elif isinstance(element, Polyline):
        if num_points < 2:
            raise InvalidElement(
                f"Polyline needs at least 2 points, got {num_points}"
            )
    elif isinstance(element, Text):
        if num_points != 1:
            raise InvalidElement(f"Text needs exactly 1 point, got {num_points}")
        if not isinstance(element.text, str) or not element.text.strip():
            raise InvalidElement("Text must not be empty")
        if element.font_size <= 0:
            raise InvalidElement(
                f"Font size must be positive, got {element.font_size}"
            )
    else:
        raise InvalidElement(f"Not an annotation element: {element!r}")

    if element.thickness <= 0:
        raise InvalidElement(f"Thickness must be positive, got {element.thickness}")


def serialize(element: Element) -> Dict[str, Any]:
    """Convert an element to its persisted record."""
    record = {
        "type": element.element_type.value,
        "points": [p.to_dict() for p in element.points],
        "color": element.color,
        "thickness": element.thickness,
    }
    if isinstance(element, Text):
        record["text"] = element.text
        record["fontSize"] = element.font_size
    return record


def _positive_or_default(value, default: int) -> int:
    # Older records omit style fields; the stream server writes 0 for unset
    if value is None:
        return default
    value = int(value)
    return value if value > 0 else default


def _color_or_default(value) -> str:
    if isinstance(value, str) and value:
        return value
    return DEFAULT_COLOR


def deserialize(record: Dict[str, Any]) -> Element:
    """
    Build an element from a persisted record.

    Raises:
        UnknownElementType: If the record's type tag is not recognised
        InvalidElement: If the record is malformed
    """
    if not isinstance(record, dict):
        raise InvalidElement(f"Element record must be a mapping, got {type(record)}")

    element_type = record.get("type")
    element_cls = None
    if isinstance(element_type, str):
        element_cls = _ELEMENT_CLASSES.get(element_type)
    if element_cls is None:
        raise UnknownElementType(element_type)

    try:
        points = [Point.from_dict(p) for p in record.get("points") or []]
        kwargs = {
            "points": points,
            "color": _color_or_default(record.get("color")),
            "thickness": _positive_or_default(
                record.get("thickness"), DEFAULT_THICKNESS
            ),
        }
        if element_cls is Text:
            text = record.get("text") or ""
            if not isinstance(text, str):
                raise InvalidElement(
                    f"Text must be a string, got {type(text).__name__}"
                )
            kwargs["text"] = text
            kwargs["font_size"] = _positive_or_default(
                record.get("fontSize"), DEFAULT_FONT_SIZE
            )
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise InvalidElement(f"Malformed {record.get('type')} record: {e}") from e

    element = element_cls(**kwargs)
    validate(element)
    return element


def serialize_collection(elements: Iterable[Element]) -> List[Dict[str, Any]]:
    return [serialize(e) for e in elements]


def deserialize_collection(records: Iterable[Dict[str, Any]]) -> List[Element]:
    """
    Build elements from a list of records, skipping the bad ones.

    A record with an unknown type or a malformed shape is logged and
    dropped; the remaining records keep their order.
    """
    elements = []
    for index, record in enumerate(records or []):
        try:
            elements.append(deserialize(record))
        except UnknownElementType as e:
            logger.warning(f"Skipping record {index}: {e}")
        except InvalidElement as e:
            logger.warning(f"Skipping invalid record {index}: {e.reason}")
    return elements


def describe(element: Element) -> str:
    """One-line summary of an element for listings."""
    points = element.points
    if isinstance(element, Rectangle):
        a, b = points
        return f"rectangle ({a.x},{a.y}) -> ({b.x},{b.y})"
    if isinstance(element, Polyline):
        return f"polyline ({len(points)} points)"
    if isinstance(element, Text):
        anchor = points[0]
        return f'text "{element.text}" ({anchor.x},{anchor.y})'
    return repr(element)
