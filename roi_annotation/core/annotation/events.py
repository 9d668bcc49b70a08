"""
Event system for the annotation workflow.

Provides a decoupled way for the annotation core to notify UI components
about state changes without depending on specific UI frameworks.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur during annotation."""

    # Session events
    SESSION_LOADED = "session_loaded"
    SESSION_SAVED = "session_saved"
    PERSIST_FAILED = "persist_failed"

    # Committed collection events
    ELEMENT_ADDED = "element_added"
    ELEMENT_DELETED = "element_deleted"
    ELEMENTS_CLEARED = "elements_cleared"
    ELEMENTS_CHANGED = "elements_changed"

    # In-progress gesture events
    PREVIEW_CHANGED = "preview_changed"
    PREVIEW_CLEARED = "preview_cleared"
    TEXT_REJECTED = "text_rejected"

    # Configuration events
    TOOL_CHANGED = "tool_changed"
    STYLE_CHANGED = "style_changed"
    DRAWING_TOGGLED = "drawing_toggled"

    # Geometry events
    VIEWPORT_RESIZED = "viewport_resized"
    RESOLUTION_CHANGED = "resolution_changed"


@dataclass
class AnnotationEvent:
    """Event that occurs during annotation."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def off(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: AnnotationEvent):
        """Emit an event to all subscribers."""
        for callback in list(self._listeners.get(event.event_type, [])):
            try:
                callback(event)
            except Exception:
                # Log but don't crash on listener errors
                logger.exception(f"Error in listener for {event.event_type.value}")

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
