"""
Camera store: the persistence boundary of annotation sessions.

A store hands out and accepts each camera's element records (the plain
dicts produced by core.annotation.elements.serialize). Sessions do not
know whether the store is local or remote.
"""

import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

Records = List[Dict[str, Any]]


class StoreError(Exception):
    """A camera store operation failed."""


class CameraStore(ABC):
    """Per-camera element persistence."""

    @abstractmethod
    def get_elements(self, camera_id: str) -> Records:
        """Return the camera's stored element records (empty if none)."""

    @abstractmethod
    def set_elements(self, camera_id: str, records: Records) -> None:
        """Replace the camera's stored element records."""


class InMemoryCameraStore(CameraStore):
    """Dict-backed store, mostly for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, Records]] = None):
        self._elements: Dict[str, Records] = copy.deepcopy(initial or {})

    def get_elements(self, camera_id: str) -> Records:
        return copy.deepcopy(self._elements.get(camera_id, []))

    def set_elements(self, camera_id: str, records: Records) -> None:
        self._elements[camera_id] = copy.deepcopy(list(records))


class JsonCameraStore(CameraStore):
    """
    Store backed by the stream manager's JSON configuration file.

    The file looks like::

        {"webPort": "8080",
         "cameras": [{"id": "cam1", "name": "...", "rtspUrl": "...",
                      "roi": [], "drawElements": [...], "enabled": true}]}

    Only `drawElements` is ever modified; other keys are written back as
    they were read.
    """

    ELEMENTS_KEY = "drawElements"

    def __init__(self, path):
        self.path = Path(path)

    def list_cameras(self) -> List[Dict[str, Any]]:
        return self._read().get("cameras") or []

    def get_elements(self, camera_id: str) -> Records:
        camera = self._find_camera(self._read(), camera_id)
        return camera.get(self.ELEMENTS_KEY) or []

    def set_elements(self, camera_id: str, records: Records) -> None:
        config = self._read()
        camera = self._find_camera(config, camera_id)
        camera[self.ELEMENTS_KEY] = list(records)
        self._write(config)
        logger.debug(
            f"Wrote {len(camera[self.ELEMENTS_KEY])} elements for {camera_id} "
            f"to {self.path}"
        )

    def _find_camera(self, config: Dict[str, Any], camera_id: str) -> Dict[str, Any]:
        for camera in config.get("cameras") or []:
            if camera.get("id") == camera_id:
                return camera
        raise StoreError(f"camera not found: {camera_id}")

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except OSError as e:
            raise StoreError(f"failed to open config file: {e}") from e
        except json.JSONDecodeError as e:
            raise StoreError(f"failed to parse config file: {e}") from e

        if not isinstance(config, dict):
            raise StoreError(f"failed to parse config file: {self.path} is not an object")
        return config

    def _write(self, config: Dict[str, Any]):
        directory = self.path.parent
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(directory)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(config, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreError(f"failed to write config file: {e}") from e
