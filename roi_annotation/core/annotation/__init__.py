"""
Core annotation module - UI-agnostic annotation logic.

This module provides the element model, the coordinate transform and the
interactive annotation session that can be driven by any UI framework
(OpenCV window, Web, tests).
"""

from .elements import (
    Element,
    ElementType,
    Point,
    Polyline,
    Rectangle,
    Text,
    describe,
    deserialize,
    deserialize_collection,
    serialize,
    serialize_collection,
    validate,
)
from .errors import (
    AnnotationError,
    EmptyTextInput,
    InvalidElement,
    PersistFailure,
    UnknownElementType,
)
from .events import AnnotationEvent, EventEmitter, EventType
from .manager import SessionManager
from .render import DrawCommand, FillText, StrokePolyline, StrokeRect
from .session import AnnotationSession
from .state import AnnotationState, GesturePhase, Style, Tool
from .transform import CoordinateTransform

__all__ = [
    "AnnotationSession",
    "SessionManager",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "AnnotationState",
    "GesturePhase",
    "Style",
    "Tool",
    "CoordinateTransform",
    "Element",
    "ElementType",
    "Point",
    "Rectangle",
    "Polyline",
    "Text",
    "validate",
    "serialize",
    "deserialize",
    "serialize_collection",
    "deserialize_collection",
    "describe",
    "DrawCommand",
    "StrokeRect",
    "StrokePolyline",
    "FillText",
    "AnnotationError",
    "InvalidElement",
    "UnknownElementType",
    "EmptyTextInput",
    "PersistFailure",
]
