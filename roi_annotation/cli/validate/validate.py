import logging
from gettext import gettext as _
from typing import Any, Dict, List, Tuple

from roi_annotation.core.annotation import (
    InvalidElement,
    UnknownElementType,
    deserialize,
)
from roi_annotation.core.store import JsonCameraStore, StoreError

logger = logging.getLogger(__name__)


def check_records(records: List[Dict[str, Any]]) -> Tuple[int, List[str]]:
    """
    Count loadable records and describe the ones a session would skip.

    Returns:
        (number of loadable records, problem descriptions)
    """
    loaded = 0
    problems = []
    for index, record in enumerate(records):
        try:
            deserialize(record)
        except UnknownElementType as e:
            problems.append(f"#{index}: {e}")
        except InvalidElement as e:
            problems.append(f"#{index}: {e.reason}")
        else:
            loaded += 1
    return loaded, problems


def handle(args) -> int:
    store = JsonCameraStore(args.config)
    try:
        cameras = store.list_cameras()
    except StoreError as e:
        logger.error(str(e))
        return 1

    failed = False
    for camera in cameras:
        records = camera.get(JsonCameraStore.ELEMENTS_KEY) or []
        loaded, problems = check_records(records)
        print(
            _("{camera}: {loaded}/{total} elements load").format(
                camera=camera.get("id"), loaded=loaded, total=len(records)
            )
        )
        for problem in problems:
            print(f"  {problem}")
        failed = failed or bool(problems)
    return 1 if failed else 0
