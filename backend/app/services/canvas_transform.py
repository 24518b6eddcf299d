# backend/app/services/canvas_transform.py
# Pointer (viewport) coordinates -> virtual canvas coordinates
#
# The on-screen box of the canvas changes with scroll and resize, so the host
# passes the current box with every event. Nothing is cached here.

from typing import NamedTuple

from ..config import CANVAS_W, CANVAS_H
from ..exceptions import CanvasTransformError


class BoundingBox(NamedTuple):
    """On-screen box of the canvas element (viewport pixels)."""
    left: float
    top: float
    width: float
    height: float


class CanvasPoint(NamedTuple):
    x: float
    y: float


def client_to_canvas(
    client_x: float,
    client_y: float,
    box: BoundingBox,
    canvas_w: int = CANVAS_W,
    canvas_h: int = CANVAS_H
) -> CanvasPoint:
    """
    Map a pointer position to virtual canvas units.

    Args:
        client_x: Pointer x in viewport pixels
        client_y: Pointer y in viewport pixels
        box: Canvas element's current bounding box
        canvas_w: Virtual canvas width
        canvas_h: Virtual canvas height

    Returns:
        CanvasPoint (may lie outside the canvas when the pointer is outside)

    Raises:
        CanvasTransformError: box has no area (element hidden or detached)
    """
    if box.width <= 0 or box.height <= 0:
        raise CanvasTransformError(
            f"Canvas bounding box has no area ({box.width}x{box.height})"
        )

    return CanvasPoint(
        x=(client_x - box.left) / box.width * canvas_w,
        y=(client_y - box.top) / box.height * canvas_h,
    )


def canvas_to_client(
    point: CanvasPoint,
    box: BoundingBox,
    canvas_w: int = CANVAS_W,
    canvas_h: int = CANVAS_H
) -> CanvasPoint:
    """Inverse of client_to_canvas, for hosts positioning overlays."""
    return CanvasPoint(
        x=box.left + point.x / canvas_w * box.width,
        y=box.top + point.y / canvas_h * box.height,
    )
