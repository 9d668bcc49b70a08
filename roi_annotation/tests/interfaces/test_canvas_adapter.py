"""
Tests for CanvasAdapter.

Surfaces are mocks or numpy-backed ImageSurfaces, so no window is needed.
"""

from unittest.mock import Mock

import pytest

from roi_annotation.core.annotation.render import FillText, StrokePolyline, StrokeRect
from roi_annotation.interfaces import CanvasAdapter, ImageSurface, issue_commands


@pytest.fixture
def surfaces():
    return Mock(), Mock()


@pytest.fixture
def adapter(drawing_session, surfaces):
    committed, preview = surfaces
    return CanvasAdapter(drawing_session, committed, preview)


def test_commit_redraws_committed_surface(adapter, surfaces):
    committed, preview = surfaces

    adapter.pointer_down(100, 50)
    adapter.pointer_move(150, 100)
    assert preview.stroke_rect.call_count == 2

    adapter.pointer_up(200, 150)
    committed.clear.assert_called()
    committed.stroke_rect.assert_called_once()
    preview.clear.assert_called()


def test_resize_redraws_committed_surface(adapter, surfaces, sample_records):
    committed, _ = surfaces
    adapter.session.load_records(sample_records)
    committed.reset_mock()

    adapter.session.on_viewport_resized(1280, 720)
    committed.clear.assert_called_once()
    committed.stroke_rect.assert_called_once()
    committed.stroke_polyline.assert_called_once()
    committed.fill_text.assert_called_once()


def test_resize_resizes_surfaces(drawing_session, sample_records):
    committed, preview = ImageSurface(640, 360), ImageSurface(640, 360)
    CanvasAdapter(drawing_session, committed, preview)
    drawing_session.load_records(sample_records)

    drawing_session.on_viewport_resized(1280, 720)

    assert committed.image.shape == (720, 1280, 3)
    assert preview.image.shape == (720, 1280, 3)
    # Rectangle (300,150)-(600,450) native is (200,100)-(400,300) at 1280x720
    assert tuple(committed.image[100, 300]) == (0, 0, 255)


def test_resize_skips_surfaces_without_resize(drawing_session):
    committed = Mock(spec=["clear", "stroke_rect", "stroke_polyline", "fill_text"])
    preview = Mock(spec=["clear", "stroke_rect", "stroke_polyline", "fill_text"])
    CanvasAdapter(drawing_session, committed, preview)

    drawing_session.on_viewport_resized(1280, 720)
    committed.clear.assert_called_once()


def test_listing_callback(drawing_session, surfaces):
    listings = []
    CanvasAdapter(drawing_session, *surfaces, on_listing=listings.append)

    drawing_session.on_pointer_down(100, 50)
    drawing_session.on_pointer_up(200, 150)
    drawing_session.clear_all()

    assert listings == [["rectangle (300,150) -> (600,450)"], []]


def test_empty_text_reported_not_raised(drawing_session, surfaces):
    on_error = Mock()
    adapter = CanvasAdapter(drawing_session, *surfaces, on_error=on_error)
    drawing_session.set_tool("text")

    adapter.pointer_down(100, 50)

    on_error.assert_called_once()
    assert drawing_session.elements == []


def test_polyline_through_image_surfaces(drawing_session):
    committed = ImageSurface(640, 360)
    preview = ImageSurface(640, 360)
    adapter = CanvasAdapter(drawing_session, committed, preview)
    drawing_session.set_tool("polyline")
    drawing_session.set_style(color="#00FF00", thickness=1)

    adapter.pointer_down(10, 10)
    adapter.pointer_down(100, 10)
    adapter.pointer_move(100, 100)
    assert preview.image[10, 50, 1] == 255

    adapter.double_click(100, 100)
    assert not preview.image.any()
    assert committed.image[10, 50, 1] == 255
    assert not committed.image[50, 100].any()


def test_issue_commands_dispatch():
    surface = Mock()
    issue_commands(
        surface,
        [
            StrokeRect(0, 0, 1, 1, "#FF0000", 1),
            StrokePolyline(((0, 0), (1, 1)), "#FF0000", 1),
            FillText(0, 0, "a", "#FF0000", 13),
        ],
    )
    surface.stroke_rect.assert_called_once()
    surface.stroke_polyline.assert_called_once()
    surface.fill_text.assert_called_once()

    with pytest.raises(ValueError):
        issue_commands(surface, ["bogus"])
