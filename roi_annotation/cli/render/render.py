import logging
from gettext import gettext as _

import cv2

from roi_annotation.core.annotation import AnnotationSession, PersistFailure
from roi_annotation.core.annotation.utils import draw_elements_on_image
from roi_annotation.core.store import JsonCameraStore
from roi_annotation.interfaces import ImageSurface, issue_commands

logger = logging.getLogger(__name__)


def render_onto(image, session: AnnotationSession, native_size=None):
    """
    Draw a session's elements onto a frame.

    Without `native_size` the frame is taken to be at the camera's
    resolution; otherwise elements are scaled from `native_size` to the
    frame size.
    """
    h, w = image.shape[:2]
    if native_size is None or tuple(native_size) == (w, h):
        return draw_elements_on_image(image, session.elements)

    session.on_source_resolution_known(*native_size)
    session.on_viewport_resized(w, h)
    surface = ImageSurface(w, h)
    surface.image = image.copy()
    issue_commands(surface, session.render_committed())
    return surface.image


def handle(args) -> int:
    session = AnnotationSession(args.camera_id, store=JsonCameraStore(args.config))
    try:
        session.load()
    except PersistFailure as e:
        logger.error(_("Could not load elements: {error}").format(error=e.message))
        return 1

    image = cv2.imread(str(args.image), cv2.IMREAD_COLOR)
    if image is None:
        logger.error(_("Could not read image {path}").format(path=args.image))
        return 1

    result = render_onto(image, session, args.native_size)
    if not cv2.imwrite(str(args.output), result):
        logger.error(_("Could not write image {path}").format(path=args.output))
        return 1

    logger.info(f"Rendered {len(session.elements)} elements to {args.output}")
    return 0
