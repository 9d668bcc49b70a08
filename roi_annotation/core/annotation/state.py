"""
State management for annotation sessions.

Contains data classes representing the state of a camera's annotation
session: tool selection, drawing style, in-progress gesture and the
committed element collection.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .elements import (
    DEFAULT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_THICKNESS,
    Element,
    ElementType,
    describe,
    serialize_collection,
)
from .transform import CoordinateTransform

# Unrounded native-space position
NativePosition = Tuple[float, float]


class Tool(Enum):
    """Drawing tools, one per element kind."""

    RECTANGLE = ElementType.RECTANGLE.value
    POLYLINE = ElementType.POLYLINE.value
    TEXT = ElementType.TEXT.value

    @classmethod
    def parse(cls, value) -> "Tool":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown tool: {value!r}") from None


class GesturePhase(Enum):
    IDLE = "idle"
    DRAWING_RECTANGLE = "drawing_rectangle"
    ACCUMULATING_POLYLINE = "accumulating_polyline"


@dataclass
class Style:
    """Style applied to newly committed elements."""

    color: str = DEFAULT_COLOR
    thickness: int = DEFAULT_THICKNESS
    font_size: int = DEFAULT_FONT_SIZE

    def __post_init__(self):
        if not self.color:
            raise ValueError("Color must not be empty")
        if int(self.thickness) <= 0:
            raise ValueError(f"Thickness must be positive, got {self.thickness}")
        if int(self.font_size) <= 0:
            raise ValueError(f"Font size must be positive, got {self.font_size}")
        self.thickness = int(self.thickness)
        self.font_size = int(self.font_size)


@dataclass
class Gesture:
    """
    Pointer interaction that has not been committed yet.

    The rectangle anchor and the polyline points are kept apart: polyline
    points left behind by a tool switch stay until drawing is disabled.
    """

    anchor: Optional[NativePosition] = None
    polyline_points: List[NativePosition] = field(default_factory=list)
    pointer: Optional[NativePosition] = None

    def phase(self, tool: Tool) -> GesturePhase:
        if tool == Tool.RECTANGLE and self.anchor is not None:
            return GesturePhase.DRAWING_RECTANGLE
        if tool == Tool.POLYLINE and self.polyline_points:
            return GesturePhase.ACCUMULATING_POLYLINE
        return GesturePhase.IDLE

    def reset(self):
        self.anchor = None
        self.polyline_points.clear()
        self.pointer = None


@dataclass
class AnnotationState:
    """
    Complete state of one camera's annotation session.

    Only `elements` is persisted; everything else lives as long as the
    session does.
    """

    camera_id: Optional[str] = None
    elements: List[Element] = field(default_factory=list)
    tool: Tool = Tool.RECTANGLE
    style: Style = field(default_factory=Style)
    text: str = ""
    drawing_enabled: bool = False
    gesture: Gesture = field(default_factory=Gesture)
    transform: CoordinateTransform = field(default_factory=CoordinateTransform)

    @property
    def phase(self) -> GesturePhase:
        return self.gesture.phase(self.tool)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "camera_id": self.camera_id,
            "tool": self.tool.value,
            "drawing_enabled": self.drawing_enabled,
            "phase": self.phase.value,
            "native_size": self.transform.native_size,
            "display_size": self.transform.display_size,
            "elements": serialize_collection(self.elements),
            "listing": [describe(e) for e in self.elements],
        }
