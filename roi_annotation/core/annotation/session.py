"""
Annotation session management.

Core logic for annotating one camera: tool state machine, display/native
coordinate transform, committed element collection and persistence.
UI-agnostic - can be used with any interface (OpenCV window, Web, tests).
"""

import asyncio
import logging
from typing import List, Optional

from .elements import (
    Element,
    Polyline,
    Rectangle,
    Text,
    describe,
    deserialize_collection,
    serialize_collection,
    validate,
)
from .errors import EmptyTextInput, PersistFailure
from .events import AnnotationEvent, EventEmitter, EventType
from .render import DrawCommand, render_elements, render_preview
from .state import AnnotationState, GesturePhase, Style, Tool
from .transform import commit_point

logger = logging.getLogger(__name__)


class AnnotationSession:
    """
    Manages the state and logic of a camera's annotation session.

    This class handles:
    - Tool selection and the drawing-enabled switch
    - Turning pointer gestures into rectangles, polylines and text labels
    - Mapping display coordinates to the camera's native resolution
    - Deleting and clearing committed elements
    - Loading from and saving to the camera store
    - Event emission for UI updates

    The session is UI-agnostic - it emits events that UI components
    can listen to, rather than directly manipulating UI elements.
    """

    def __init__(self, camera_id: str, store=None, style: Optional[Style] = None):
        """
        Initialize annotation session.

        Args:
            camera_id: Identifier of the camera being annotated
            store: Camera store used by load/save (see core.store)
            style: Initial drawing style
        """
        self.camera_id = camera_id
        self.store = store
        self.state = AnnotationState(camera_id=camera_id, style=style or Style())

        # Event emitter for UI notifications
        self.events = EventEmitter()

    @property
    def elements(self) -> List[Element]:
        return self.state.elements

    @property
    def transform(self):
        return self.state.transform

    # Tool configuration

    def set_tool(self, kind):
        """Select the rectangle, polyline or text tool."""
        tool = Tool.parse(kind)
        self.state.tool = tool
        self._emit(EventType.TOOL_CHANGED, tool=tool.value)
        self._emit(EventType.PREVIEW_CHANGED)

    def set_style(
        self,
        color: Optional[str] = None,
        thickness: Optional[int] = None,
        font_size: Optional[int] = None,
    ):
        """Update the style used for new elements; omitted values are kept."""
        current = self.state.style
        self.state.style = Style(
            color=color if color is not None else current.color,
            thickness=thickness if thickness is not None else current.thickness,
            font_size=font_size if font_size is not None else current.font_size,
        )
        self._emit(
            EventType.STYLE_CHANGED,
            color=self.state.style.color,
            thickness=self.state.style.thickness,
            font_size=self.state.style.font_size,
        )

    def set_text(self, text: str):
        """Set the label placed by the next text click."""
        self.state.text = text or ""

    def toggle_drawing_enabled(self) -> bool:
        """
        Switch drawing mode on or off.

        Disabling always discards the in-progress gesture.

        Returns:
            The new drawing-enabled flag
        """
        self.state.drawing_enabled = not self.state.drawing_enabled
        if not self.state.drawing_enabled:
            self.state.gesture.reset()
            self._emit(EventType.PREVIEW_CLEARED)
        self._emit(EventType.DRAWING_TOGGLED, enabled=self.state.drawing_enabled)
        return self.state.drawing_enabled

    # Geometry

    def on_viewport_resized(self, display_width: int, display_height: int):
        """Record the canvas size; committed native geometry is untouched."""
        self.transform.display_size = (int(display_width), int(display_height))
        self._emit(
            EventType.VIEWPORT_RESIZED, width=display_width, height=display_height
        )
        self._emit(EventType.PREVIEW_CHANGED)

    def on_source_resolution_known(self, native_width: int, native_height: int):
        """Record the source image resolution once it has loaded."""
        self.transform.native_size = (int(native_width), int(native_height))
        self._emit(
            EventType.RESOLUTION_CHANGED, width=native_width, height=native_height
        )

    # Pointer events (display coordinates)

    def on_pointer_down(self, x: float, y: float):
        """
        Start or extend a gesture at a display position.

        Raises:
            EmptyTextInput: Text tool clicked with no text entered
        """
        if not self._accepts_gestures():
            return

        position = self.transform.to_native(x, y)
        gesture = self.state.gesture
        tool = self.state.tool

        if tool == Tool.RECTANGLE:
            gesture.anchor = position
            gesture.pointer = position
            self._emit(EventType.PREVIEW_CHANGED)
        elif tool == Tool.POLYLINE:
            gesture.polyline_points.append(position)
            gesture.pointer = position
            self._emit(
                EventType.PREVIEW_CHANGED, num_points=len(gesture.polyline_points)
            )
        elif tool == Tool.TEXT:
            self._place_text(position)

    def on_pointer_move(self, x: float, y: float):
        """Follow the pointer with the live preview."""
        if not self.transform.is_ready:
            return

        self.state.gesture.pointer = self.transform.to_native(x, y)
        if self.state.phase != GesturePhase.IDLE:
            self._emit(EventType.PREVIEW_CHANGED)

    def on_pointer_up(self, x: float, y: float):
        """Finish a rectangle; ignored when no rectangle was started."""
        gesture = self.state.gesture
        if gesture.anchor is None:
            return

        anchor = gesture.anchor
        gesture.anchor = None
        self._emit(EventType.PREVIEW_CLEARED)

        if self.state.tool != Tool.RECTANGLE or not self._accepts_gestures():
            return

        end = self.transform.to_native(x, y)
        style = self.state.style
        self.add_element(
            Rectangle(
                points=[commit_point(*anchor), commit_point(*end)],
                color=style.color,
                thickness=style.thickness,
            )
        )

    def on_double_click(self, x: float, y: float):
        """Commit the accumulated polyline; a no-op below two points."""
        gesture = self.state.gesture
        if self.state.tool != Tool.POLYLINE or not self.state.drawing_enabled:
            return
        if len(gesture.polyline_points) < 2:
            logger.debug("Double click with fewer than 2 polyline points ignored")
            return

        style = self.state.style
        points = [commit_point(px, py) for px, py in gesture.polyline_points]
        gesture.polyline_points.clear()
        self._emit(EventType.PREVIEW_CLEARED)
        self.add_element(
            Polyline(points=points, color=style.color, thickness=style.thickness)
        )

    # Collection mutations

    def add_element(self, element: Element):
        """
        Validate and append an element to the committed collection.

        Raises:
            InvalidElement: If the element is malformed
        """
        validate(element)
        self.state.elements.append(element)
        index = len(self.state.elements) - 1
        logger.debug(f"Camera {self.camera_id}: added {describe(element)}")
        self._emit(EventType.ELEMENT_ADDED, index=index, element=element)
        self._elements_changed()

    def delete_element(self, index: int) -> bool:
        """
        Remove the element at `index`.

        Returns:
            True if an element was removed, False if the index is out of range
        """
        if not 0 <= index < len(self.state.elements):
            logger.debug(f"Camera {self.camera_id}: no element at index {index}")
            return False

        element = self.state.elements.pop(index)
        self._emit(EventType.ELEMENT_DELETED, index=index, element=element)
        self._elements_changed()
        return True

    def clear_all(self):
        """Remove every committed element."""
        self.state.elements.clear()
        self._emit(EventType.ELEMENTS_CLEARED)
        self._elements_changed()

    def list_elements(self) -> List[str]:
        """Human-readable summaries, in collection order."""
        return [describe(e) for e in self.state.elements]

    # Rendering

    def render_committed(self) -> List[DrawCommand]:
        """Draw commands for the committed-elements surface."""
        return render_elements(self.state.elements, self.transform)

    def render_preview(self) -> List[DrawCommand]:
        """Draw commands for the in-progress gesture surface."""
        return render_preview(self.state)

    # Persistence

    def save(self):
        """
        Write the full collection to the camera store.

        Raises:
            PersistFailure: If there is no store or the store call failed
        """
        records = serialize_collection(self.state.elements)
        self._store_call("save", self._require_store().set_elements, records)
        logger.info(f"Camera {self.camera_id}: saved {len(records)} elements")
        self._emit(EventType.SESSION_SAVED, num_elements=len(records))

    def load(self) -> List[Element]:
        """
        Replace the collection with the elements held by the camera store.

        Records of unknown type or bad shape are skipped.

        Raises:
            PersistFailure: If there is no store or the store call failed;
                the local collection is left unchanged
        """
        records = self._store_call("load", self._require_store().get_elements)
        return self.load_records(records)

    def load_records(self, records) -> List[Element]:
        """Replace the collection from already-fetched records."""
        self.state.elements = deserialize_collection(records)
        logger.debug(
            f"Camera {self.camera_id}: loaded {len(self.state.elements)} elements"
        )
        self._emit(EventType.SESSION_LOADED, num_elements=len(self.state.elements))
        self._elements_changed()
        return self.state.elements

    async def save_async(self):
        """Like save(), with the store call run in the default executor."""
        records = serialize_collection(self.state.elements)
        store = self._require_store()
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, self._store_call, "save", store.set_elements, records
        )
        self._emit(EventType.SESSION_SAVED, num_elements=len(records))

    async def load_async(self) -> List[Element]:
        """Like load(), with the store call run in the default executor."""
        store = self._require_store()
        loop = asyncio.get_running_loop()
        records = await loop.run_in_executor(
            None, self._store_call, "load", store.get_elements
        )
        return self.load_records(records)

    def to_dict(self):
        """Snapshot of the session for debugging and UI shells."""
        return self.state.to_dict()

    # Internals

    def _accepts_gestures(self) -> bool:
        return self.state.drawing_enabled and self.transform.is_ready

    def _place_text(self, position):
        text = self.state.text.strip()
        if not text:
            self._emit(EventType.TEXT_REJECTED)
            raise EmptyTextInput()

        style = self.state.style
        self.add_element(
            Text(
                points=[commit_point(*position)],
                color=style.color,
                thickness=style.thickness,
                text=text,
                font_size=style.font_size,
            )
        )
        self.state.text = ""

    def _require_store(self):
        if self.store is None:
            raise PersistFailure(f"No camera store configured for {self.camera_id}")
        return self.store

    def _store_call(self, action: str, fn, *args):
        try:
            return fn(self.camera_id, *args)
        except Exception as e:
            logger.warning(f"Camera {self.camera_id}: {action} failed: {e}")
            self._emit(EventType.PERSIST_FAILED, action=action, error=str(e))
            raise PersistFailure(str(e)) from e

    def _elements_changed(self):
        self._emit(EventType.ELEMENTS_CHANGED, listing=self.list_elements())

    def _emit(self, event_type: EventType, **data):
        self.events.emit(AnnotationEvent(event_type, data))
