import json
import logging
from gettext import gettext as _

from roi_annotation.core.annotation import (
    AnnotationSession,
    PersistFailure,
    serialize_collection,
)
from roi_annotation.core.store import JsonCameraStore

logger = logging.getLogger(__name__)


def handle(args) -> int:
    session = AnnotationSession(args.camera_id, store=JsonCameraStore(args.config))
    try:
        session.load()
    except PersistFailure as e:
        logger.error(_("Could not load elements: {error}").format(error=e.message))
        return 1

    if args.as_json:
        print(json.dumps(serialize_collection(session.elements), indent=2))
        return 0

    listing = session.list_elements()
    if not listing:
        print(_("No elements"))
    for index, summary in enumerate(listing):
        print(f"{index}: {summary}")
    return 0
