"""
Registry of open annotation sessions, one per camera.
"""

import logging
from typing import Dict, List, Optional

from .errors import PersistFailure
from .session import AnnotationSession
from .state import Style

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Creates, hands out and disposes of per-camera sessions.

    Opening a camera seeds its session from the store; closing it drops
    everything that was not saved.
    """

    def __init__(self, store, style: Optional[Style] = None):
        self.store = store
        self.style = style
        self._sessions: Dict[str, AnnotationSession] = {}

    def open(self, camera_id: str) -> AnnotationSession:
        """Return the camera's session, creating and seeding it if needed."""
        session = self._sessions.get(camera_id)
        if session is not None:
            return session

        style = Style(**vars(self.style)) if self.style is not None else None
        session = AnnotationSession(camera_id, store=self.store, style=style)
        try:
            session.load()
        except PersistFailure as e:
            logger.warning(
                f"Opening camera {camera_id} with no elements: {e.message}"
            )
        self._sessions[camera_id] = session
        return session

    def get(self, camera_id: str) -> Optional[AnnotationSession]:
        return self._sessions.get(camera_id)

    def close(self, camera_id: str) -> bool:
        """Dispose of a camera's session; unsaved changes are lost."""
        session = self._sessions.pop(camera_id, None)
        if session is None:
            return False
        session.events.clear()
        return True

    def close_all(self):
        for camera_id in list(self._sessions):
            self.close(camera_id)

    @property
    def camera_ids(self) -> List[str]:
        return list(self._sessions)

    def __contains__(self, camera_id) -> bool:
        return camera_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
