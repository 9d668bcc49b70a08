"""
OpenCV window front-end for an annotation session.

Mouse: draw with the selected tool (double click finishes a polyline).
Keys:  d toggle drawing   r/p/t rectangle/polyline/text tool
       e edit label text (typed into the window, Enter applies, Esc cancels)
       x delete last element   c clear all   s save   q/Esc quit
"""

import logging
from gettext import gettext as _
from typing import Optional

import cv2

from roi_annotation.config import load_config, style_from_config
from roi_annotation.core.annotation import PersistFailure, SessionManager
from roi_annotation.core.store import JsonCameraStore
from roi_annotation.interfaces import CanvasAdapter, ImageSurface

logger = logging.getLogger(__name__)

WINDOW_NAME = "roi_annotation"

TOOL_KEYS = {ord("r"): "rectangle", ord("p"): "polyline", ord("t"): "text"}

KEY_NONE = 255
KEY_ENTER = (10, 13)
KEY_ESCAPE = 27
KEY_BACKSPACE = (8, 127)


class LabelEditor:
    """Label text typed into the window, one key per loop iteration."""

    def __init__(self):
        self.active = False
        self.buffer = ""

    def start(self, text: str = ""):
        self.active = True
        self.buffer = text

    def feed(self, key: int) -> Optional[str]:
        """
        Consume one key code.

        Returns the finished text when Enter is pressed, None otherwise.
        """
        if key == KEY_NONE:
            return None
        if key in KEY_ENTER:
            self.active = False
            return self.buffer
        if key == KEY_ESCAPE:
            self.active = False
            self.buffer = ""
        elif key in KEY_BACKSPACE:
            self.buffer = self.buffer[:-1]
        elif 32 <= key < 127:
            self.buffer += chr(key)
        return None


def overlay(frame, surface: ImageSurface):
    """Copy the non-black pixels of a surface onto a frame, in place."""
    mask = surface.image.any(axis=2)
    frame[mask] = surface.image[mask]
    return frame


def make_mouse_callback(adapter: CanvasAdapter):
    def on_mouse(event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN:
            adapter.pointer_down(x, y)
        elif event == cv2.EVENT_MOUSEMOVE:
            adapter.pointer_move(x, y)
        elif event == cv2.EVENT_LBUTTONUP:
            adapter.pointer_up(x, y)
        elif event == cv2.EVENT_LBUTTONDBLCLK:
            adapter.double_click(x, y)

    return on_mouse


def print_listing(listing):
    print(_("Elements:"))
    for index, summary in enumerate(listing):
        print(f"  {index}: {summary}")


def handle(args) -> int:  # pragma: no cover
    cfg = load_config()
    manager = SessionManager(
        JsonCameraStore(args.config), style=style_from_config(cfg)
    )
    session = manager.open(args.camera_id)
    session.set_tool(args.tool)
    session.set_text(args.text)
    print_listing(session.list_elements())

    source = int(args.source) if args.source.isdigit() else args.source
    capture = cv2.VideoCapture(source)
    if not capture.isOpened():
        logger.error(_("Could not open video source {source}").format(source=source))
        return 1

    display_width = args.display_width or cfg.display.width
    committed = ImageSurface(1, 1)
    preview = ImageSurface(1, 1)
    adapter = CanvasAdapter(
        session,
        committed,
        preview,
        on_listing=print_listing,
        on_error=lambda e: print(e),
    )

    cv2.namedWindow(WINDOW_NAME)
    cv2.setMouseCallback(WINDOW_NAME, make_mouse_callback(adapter))

    editor = LabelEditor()
    last_frame = None
    try:
        while True:
            ok, frame = capture.read()
            if ok:
                last_frame = frame
            elif last_frame is None:
                logger.error(_("No frames received from {source}").format(source=source))
                return 1
            frame = last_frame

            h, w = frame.shape[:2]
            if session.transform.native_size != (w, h):
                session.on_source_resolution_known(w, h)
            display_size = (display_width, max(1, round(h * display_width / w)))
            if session.transform.display_size != display_size:
                session.on_viewport_resized(*display_size)

            view = cv2.resize(frame, display_size)
            overlay(view, committed)
            overlay(view, preview)
            if editor.active:
                cv2.putText(
                    view,
                    _("Label: {text}_").format(text=editor.buffer),
                    (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX,
                    0.8,
                    (255, 255, 255),
                    2,
                    cv2.LINE_AA,
                )
            cv2.imshow(WINDOW_NAME, view)

            key = cv2.waitKey(30) & 0xFF
            if editor.active:
                text = editor.feed(key)
                if text is not None:
                    session.set_text(text)
                    print(_("Label text: {text}").format(text=text))
            elif key in (ord("q"), KEY_ESCAPE):
                break
            elif key in TOOL_KEYS:
                session.set_tool(TOOL_KEYS[key])
                print(_("Tool: {tool}").format(tool=TOOL_KEYS[key]))
            elif key == ord("d"):
                enabled = session.toggle_drawing_enabled()
                print(_("Drawing enabled") if enabled else _("Drawing disabled"))
            elif key == ord("e"):
                editor.start(session.state.text)
            elif key == ord("x"):
                session.delete_element(len(session.elements) - 1)
            elif key == ord("c"):
                session.clear_all()
            elif key == ord("s"):
                try:
                    session.save()
                    print(_("Saved"))
                except PersistFailure as e:
                    print(_("Save failed: {error}").format(error=e.message))
    finally:
        capture.release()
        cv2.destroyWindow(WINDOW_NAME)
        manager.close(args.camera_id)
    return 0
