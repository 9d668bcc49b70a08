"""
Canvas adapter for annotation sessions.

Bridges an AnnotationSession with two drawing surfaces: one for committed
elements and one for the live in-progress gesture.
"""

import logging
from typing import Callable, List, Optional

import numpy as np

from ..core.annotation import (
    AnnotationEvent,
    AnnotationSession,
    EmptyTextInput,
    EventType,
)
from ..core.annotation.render import DrawCommand, FillText, StrokePolyline, StrokeRect
from ..core.annotation.utils import draw_command

logger = logging.getLogger(__name__)


class ImageSurface:
    """
    Drawing surface backed by a BGR numpy image.

    Any object with the same four methods can stand in for it (a Tk
    canvas wrapper, a web canvas proxy, a Mock in tests).
    """

    def __init__(self, width: int, height: int):
        self.image = np.zeros((height, width, 3), dtype=np.uint8)

    def resize(self, width: int, height: int):
        self.image = np.zeros((height, width, 3), dtype=np.uint8)

    def clear(self):
        self.image[:] = 0

    def stroke_rect(self, command: StrokeRect):
        draw_command(self.image, command)

    def stroke_polyline(self, command: StrokePolyline):
        draw_command(self.image, command)

    def fill_text(self, command: FillText):
        draw_command(self.image, command)


class CanvasAdapter:
    """
    Adapter connecting AnnotationSession to drawing surfaces.

    Provides a layer that:
    - Resizes the surfaces with the viewport
    - Redraws the committed surface when the collection or geometry changes
    - Redraws the preview surface while a gesture is in progress
    - Forwards pointer events and reports rejected text placement
    - Refreshes the element listing
    """

    def __init__(
        self,
        session: AnnotationSession,
        committed_surface,
        preview_surface,
        on_listing: Optional[Callable[[List[str]], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        """
        Initialize adapter.

        Args:
            session: Core annotation session
            committed_surface: Surface for committed elements
            preview_surface: Surface for the in-progress gesture
            on_listing: Called with the element summaries after each mutation
            on_error: Called with operator-facing errors (e.g. EmptyTextInput)
        """
        self.session = session
        self.committed_surface = committed_surface
        self.preview_surface = preview_surface
        self.on_listing = on_listing
        self.on_error = on_error

        # Subscribe to session events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        for event_type in (EventType.ELEMENTS_CHANGED, EventType.RESOLUTION_CHANGED):
            self.session.events.on(event_type, self._on_committed_changed)
        self.session.events.on(EventType.VIEWPORT_RESIZED, self._on_viewport_resized)
        self.session.events.on(EventType.PREVIEW_CHANGED, self._on_preview_changed)
        self.session.events.on(EventType.PREVIEW_CLEARED, self._on_preview_cleared)
        self.session.events.on(EventType.ELEMENTS_CHANGED, self._on_listing_changed)

    def _on_committed_changed(self, event: AnnotationEvent):
        self.redraw_committed()

    def _on_viewport_resized(self, event: AnnotationEvent):
        # Surfaces without a resize method are sized by their owner
        size = (event.data["width"], event.data["height"])
        for surface in (self.committed_surface, self.preview_surface):
            resize = getattr(surface, "resize", None)
            if resize is not None:
                resize(*size)
        self.redraw_committed()

    def _on_preview_changed(self, event: AnnotationEvent):
        self.redraw_preview()

    def _on_preview_cleared(self, event: AnnotationEvent):
        self.preview_surface.clear()

    def _on_listing_changed(self, event: AnnotationEvent):
        if self.on_listing:
            self.on_listing(event.data.get("listing", []))

    def redraw_committed(self):
        """Clear the committed surface and draw every element."""
        self.committed_surface.clear()
        issue_commands(self.committed_surface, self.session.render_committed())

    def redraw_preview(self):
        """Clear the preview surface and draw the current gesture."""
        self.preview_surface.clear()
        issue_commands(self.preview_surface, self.session.render_preview())

    # Pointer forwarding

    def pointer_down(self, x: float, y: float):
        try:
            self.session.on_pointer_down(x, y)
        except EmptyTextInput as e:
            logger.info(str(e))
            if self.on_error:
                self.on_error(e)

    def pointer_move(self, x: float, y: float):
        self.session.on_pointer_move(x, y)

    def pointer_up(self, x: float, y: float):
        self.session.on_pointer_up(x, y)

    def double_click(self, x: float, y: float):
        self.session.on_double_click(x, y)


def issue_commands(surface, commands: List[DrawCommand]):
    """Dispatch draw commands to a surface's stroke/fill methods."""
    for command in commands:
        if isinstance(command, StrokeRect):
            surface.stroke_rect(command)
        elif isinstance(command, StrokePolyline):
            surface.stroke_polyline(command)
        elif isinstance(command, FillText):
            surface.fill_text(command)
        else:
            raise ValueError(f"Unknown draw command: {command!r}")
