# backend/app/services/drag_controller.py
"""
Drag/resize state machine for room rectangles.

Two states: idle, or active with a DragInfo describing the gesture. The host
input layer drives it through three entry points:

    controller.begin_gesture(layout, room_id, DragMode.RESIZE_SE, point)
    controller.update_gesture(point)      # every pointer move
    controller.end_gesture()              # pointer up

The host decides where pointer events are captured (document, window,
pointer capture). It must keep delivering moves and the final up even when
the pointer leaves the room being dragged, otherwise the controller stays
active. On teardown call ``cancel_gesture`` or ``end_gesture``; neither
raises.

All positions are virtual-canvas units. Every intermediate frame is snapped
to the grid and kept inside the canvas with sizes >= MIN_SIZE.
"""

from typing import Any, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum
import logging

from ..config import CANVAS_W, CANVAS_H, GRID, MIN_SIZE, HANDLE
from ..exceptions import GestureError
from .canvas_transform import CanvasPoint
from .geometry import Rect, align_rect, clamp, contains_point, corner_points, snap, snap_down
from .layout_types import find_room

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS AND DATA CLASSES
# =============================================================================

class DragMode(str, Enum):
    MOVE = "move"
    RESIZE_NW = "resize-nw"
    RESIZE_NE = "resize-ne"
    RESIZE_SW = "resize-sw"
    RESIZE_SE = "resize-se"


# Corner handle -> resize mode
HANDLE_MODES = {
    'nw': DragMode.RESIZE_NW,
    'ne': DragMode.RESIZE_NE,
    'sw': DragMode.RESIZE_SW,
    'se': DragMode.RESIZE_SE,
}


@dataclass(frozen=True)
class DragInfo:
    """Everything needed to recompute the rectangle from a pointer position."""
    room_id: str
    mode: DragMode
    anchor_x: float
    anchor_y: float
    orig_x: int
    orig_y: int
    orig_w: int
    orig_h: int


# =============================================================================
# GEOMETRY OF ONE FRAME
# =============================================================================

def compute_drag_rect(
    info: DragInfo,
    dx: float,
    dy: float,
    canvas_w: int = CANVAS_W,
    canvas_h: int = CANVAS_H,
    grid: int = GRID,
    min_size: int = MIN_SIZE
) -> Rect:
    """
    Rectangle for a pointer offset (dx, dy) from the gesture anchor.

    Move keeps the size and clamps the position. Resizes hold the corner
    opposite the dragged handle fixed: the moving edge is derived from the
    fixed edge so the anchored side never jumps.
    """
    ox, oy, ow, oh = info.orig_x, info.orig_y, info.orig_w, info.orig_h

    if info.mode == DragMode.MOVE:
        x = clamp(snap(ox + dx, grid), 0, snap_down(canvas_w - ow, grid))
        y = clamp(snap(oy + dy, grid), 0, snap_down(canvas_h - oh, grid))
        return Rect(int(x), int(y), ow, oh)

    right = ox + ow
    bottom = oy + oh
    west = info.mode in (DragMode.RESIZE_NW, DragMode.RESIZE_SW)
    north = info.mode in (DragMode.RESIZE_NW, DragMode.RESIZE_NE)

    if west:
        w = min(snap(max(min_size, ow - dx), grid), right)
        x = right - w
    else:
        w = min(snap(max(min_size, ow + dx), grid), snap_down(canvas_w - ox, grid))
        x = ox

    if north:
        h = min(snap(max(min_size, oh - dy), grid), bottom)
        y = bottom - h
    else:
        h = min(snap(max(min_size, oh + dy), grid), snap_down(canvas_h - oy, grid))
        y = oy

    return Rect(x, y, w, h)


# =============================================================================
# HIT TESTING
# =============================================================================

def hit_test(
    rooms: List[Any],
    point: CanvasPoint,
    selected_id: Optional[str] = None,
    handle: int = HANDLE
) -> Optional[Tuple[str, DragMode]]:
    """
    Decide what a pointer-down at ``point`` grabs.

    Handles exist only on the selected room and use a hit square twice the
    visible handle size. Bodies are tested topmost (last drawn) first.

    Returns:
        (room_id, mode), or None for empty canvas
    """
    if selected_id is not None:
        selected = find_room(rooms, selected_id)
        if selected is not None:
            # Reverse draw order: the last handle drawn is on top
            for corner, (cx, cy) in reversed(list(corner_points(selected).items())):
                if abs(point.x - cx) <= handle and abs(point.y - cy) <= handle:
                    return selected.id, HANDLE_MODES[corner]

    for room in reversed(rooms):
        if contains_point(room, point.x, point.y):
            return room.id, DragMode.MOVE

    return None


# =============================================================================
# CONTROLLER
# =============================================================================

class DragResizeController:
    """Single-gesture drag/resize state machine over a list of rooms."""

    def __init__(
        self,
        canvas_w: int = CANVAS_W,
        canvas_h: int = CANVAS_H,
        grid: int = GRID,
        min_size: int = MIN_SIZE
    ):
        self.canvas_w = canvas_w
        self.canvas_h = canvas_h
        self.grid = grid
        self.min_size = min_size
        self._drag: Optional[DragInfo] = None
        self._room: Any = None
        self._before: Optional[Rect] = None

    @property
    def is_active(self) -> bool:
        return self._drag is not None

    @property
    def state(self) -> str:
        return "active" if self._drag is not None else "idle"

    @property
    def drag_info(self) -> Optional[DragInfo]:
        return self._drag

    def begin_gesture(
        self,
        rooms: List[Any],
        room_id: str,
        mode: DragMode,
        point: CanvasPoint
    ) -> DragInfo:
        """
        Idle -> active on pointer-down over a room body or handle.

        Raises:
            GestureError: a gesture is already active, or room_id is unknown
        """
        if self._drag is not None:
            raise GestureError(f"Gesture already active on room {self._drag.room_id}")

        room = find_room(rooms, room_id)
        if room is None:
            raise GestureError(f"Room not found: {room_id}")

        mode = DragMode(mode)
        start = align_rect(room, self.canvas_w, self.canvas_h, self.grid, self.min_size)

        self._before = Rect(room.x, room.y, room.w, room.h)
        self._room = room
        self._drag = DragInfo(
            room_id=room_id,
            mode=mode,
            anchor_x=point.x,
            anchor_y=point.y,
            orig_x=start.x,
            orig_y=start.y,
            orig_w=start.w,
            orig_h=start.h,
        )
        logger.debug(f"Gesture {mode.value} started on room {room_id}")
        return self._drag

    def update_gesture(self, point: CanvasPoint) -> Optional[Any]:
        """
        Apply a pointer move. Ignored (returns None) while idle.

        Returns:
            The updated room
        """
        drag = self._drag
        if drag is None:
            return None

        rect = compute_drag_rect(
            drag,
            point.x - drag.anchor_x,
            point.y - drag.anchor_y,
            self.canvas_w,
            self.canvas_h,
            self.grid,
            self.min_size,
        )
        room = self._room
        room.x, room.y, room.w, room.h = rect.x, rect.y, rect.w, rect.h
        return room

    def end_gesture(self) -> Optional[Any]:
        """Active -> idle on pointer-up. The last computed rectangle is final."""
        room = self._room
        if self._drag is not None:
            logger.debug(f"Gesture {self._drag.mode.value} ended on room {self._drag.room_id}")
        self._reset()
        return room

    def cancel_gesture(self, restore: bool = True) -> None:
        """Abandon the gesture (teardown, escape). Safe to call while idle."""
        if self._drag is not None and restore and self._before is not None:
            room = self._room
            room.x, room.y, room.w, room.h = self._before
            logger.debug(f"Gesture on room {self._drag.room_id} cancelled, rectangle restored")
        self._reset()

    def _reset(self):
        self._drag = None
        self._room = None
        self._before = None
