"""
Display <-> native coordinate transform.

Display space is the on-screen canvas, resized with the viewport.
Native space is the camera's source resolution, fixed per camera and the
frame every persisted point is expressed in.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .elements import Point, round_half_up

Size = Tuple[int, int]


@dataclass
class CoordinateTransform:
    """
    Scale factors between the canvas and the source image.

    Both sizes are (width, height). Until both are known the transform
    is not ready and callers must not draw or commit geometry.
    """

    native_size: Optional[Size] = None
    display_size: Optional[Size] = None

    @property
    def is_ready(self) -> bool:
        return _is_valid(self.native_size) and _is_valid(self.display_size)

    @property
    def scale_to_native(self) -> Tuple[float, float]:
        self._check_ready()
        (nw, nh), (dw, dh) = self.native_size, self.display_size
        return nw / dw, nh / dh

    @property
    def scale_to_display(self) -> Tuple[float, float]:
        self._check_ready()
        (nw, nh), (dw, dh) = self.native_size, self.display_size
        return dw / nw, dh / nh

    def to_native(self, x: float, y: float) -> Tuple[float, float]:
        """Map a display position to native space, unrounded."""
        sx, sy = self.scale_to_native
        return x * sx, y * sy

    def to_native_point(self, x: float, y: float) -> Point:
        """Map a display position to a committed (rounded) native point."""
        nx, ny = self.to_native(x, y)
        return commit_point(nx, ny)

    def to_display(self, x: float, y: float) -> Tuple[float, float]:
        """Map a native position (rounded or not) to display space."""
        sx, sy = self.scale_to_display
        return x * sx, y * sy

    def _check_ready(self):
        if not self.is_ready:
            raise ValueError("Native resolution or display size not known yet")


def commit_point(x: float, y: float) -> Point:
    """Round an unrounded native position into a persisted point."""
    return Point(round_half_up(x), round_half_up(y))


def _is_valid(size: Optional[Size]) -> bool:
    return size is not None and size[0] > 0 and size[1] > 0
