"""
Test fixtures and utilities for roi_annotation tests.

Provides reusable fixtures for sessions, stores and element records.
"""

import numpy as np
import pytest

from roi_annotation.core.annotation import AnnotationSession
from roi_annotation.core.store import InMemoryCameraStore

NATIVE_SIZE = (1920, 1080)
DISPLAY_SIZE = (640, 360)


@pytest.fixture
def sample_records():
    """Persisted records as the browser tool writes them."""
    return [
        {
            "type": "rectangle",
            "points": [{"x": 300, "y": 150}, {"x": 600, "y": 450}],
            "color": "#FF0000",
            "thickness": 2,
        },
        {
            "type": "polyline",
            "points": [{"x": 30, "y": 30}, {"x": 60, "y": 30}, {"x": 60, "y": 60}],
            "color": "#00FF00",
            "thickness": 3,
        },
        {
            "type": "text",
            "points": [{"x": 900, "y": 120}],
            "text": "Gate A",
            "color": "#0000FF",
            "thickness": 2,
            "fontSize": 20,
        },
    ]


@pytest.fixture
def memory_store(sample_records):
    return InMemoryCameraStore({"cam1": sample_records})


@pytest.fixture
def session(memory_store):
    """Session for cam1 with a 1920x1080 source shown at 640x360 (3x)."""
    session = AnnotationSession("cam1", store=memory_store)
    session.on_source_resolution_known(*NATIVE_SIZE)
    session.on_viewport_resized(*DISPLAY_SIZE)
    return session


@pytest.fixture
def drawing_session(session):
    """Same as `session`, with drawing enabled and nothing committed."""
    session.toggle_drawing_enabled()
    return session


@pytest.fixture
def test_frame():
    """Black native-resolution frame."""
    return np.zeros((NATIVE_SIZE[1], NATIVE_SIZE[0], 3), dtype=np.uint8)
