"""Tests for app/services/canvas_transform.py."""
import pytest

from app.exceptions import CanvasTransformError
from app.services.canvas_transform import BoundingBox, CanvasPoint, canvas_to_client, client_to_canvas


def test_scales_viewport_box_to_canvas():
    box = BoundingBox(left=50, top=100, width=400, height=300)
    assert client_to_canvas(250, 250, box, 800, 600) == CanvasPoint(400, 300)


def test_box_origin_maps_to_canvas_origin():
    box = BoundingBox(left=12, top=34, width=1600, height=1200)
    assert client_to_canvas(12, 34, box, 800, 600) == CanvasPoint(0, 0)
    assert client_to_canvas(1612, 1234, box, 800, 600) == CanvasPoint(800, 600)


def test_pointer_outside_box_maps_outside_canvas():
    box = BoundingBox(0, 0, 800, 600)
    point = client_to_canvas(-10, 700, box, 800, 600)
    assert point.x < 0
    assert point.y > 600


def test_box_recomputed_per_event():
    # Same pointer, page scrolled by 100px between events
    before = client_to_canvas(300, 300, BoundingBox(0, 0, 800, 600), 800, 600)
    after = client_to_canvas(300, 300, BoundingBox(0, -100, 800, 600), 800, 600)
    assert after.y - before.y == 100


@pytest.mark.parametrize("box", [
    BoundingBox(0, 0, 0, 600),
    BoundingBox(0, 0, 800, 0),
    BoundingBox(0, 0, -5, 600),
])
def test_degenerate_box_raises(box):
    with pytest.raises(CanvasTransformError):
        client_to_canvas(10, 10, box, 800, 600)


def test_canvas_to_client_inverts():
    box = BoundingBox(left=50, top=100, width=400, height=300)
    assert canvas_to_client(CanvasPoint(400, 300), box, 800, 600) == CanvasPoint(250, 250)
