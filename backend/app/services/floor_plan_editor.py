# backend/app/services/floor_plan_editor.py
"""
Interactive editing session for one project's floor plan.

Owns the live layout, the selected room, the drag/resize controller and an
optional change notifier. The layout comes from ``initial_layout`` when one
was stored, otherwise from the auto-layout of the project's room selections.

Usage:
    editor = FloorPlanEditor(selections, initial_layout=stored, notifier=notifier)
    editor.pointer_down(point)
    editor.pointer_move(point)
    editor.pointer_up()
    editor.close()
"""

from typing import Any, Dict, List, Optional
import logging

from ..config import CANVAS_W, CANVAS_H, GRID, MIN_SIZE
from .canvas_transform import BoundingBox, CanvasPoint, client_to_canvas
from .drag_controller import DragMode, DragResizeController, hit_test
from .layout_generator import generate_layout
from .layout_notifier import LayoutChangeNotifier
from .layout_types import (
    PlacedRoom,
    RoomSelection,
    find_room,
    group_by_type,
    layout_snapshot,
    validate_layout,
)

logger = logging.getLogger(__name__)


class FloorPlanEditor:
    """Drag/resize editing of a placed-room layout."""

    def __init__(
        self,
        selections: List[RoomSelection],
        initial_layout: Optional[List[PlacedRoom]] = None,
        notifier: Optional[LayoutChangeNotifier] = None,
        editable: bool = True,
        canvas_w: int = CANVAS_W,
        canvas_h: int = CANVAS_H,
        grid: int = GRID,
        min_size: int = MIN_SIZE,
        layout_options: Optional[Dict[str, Any]] = None
    ):
        self.selections = list(selections)
        self.notifier = notifier
        self.editable = editable
        self.canvas_w = canvas_w
        self.canvas_h = canvas_h
        self.layout_options = layout_options or {}
        self.controller = DragResizeController(canvas_w, canvas_h, grid, min_size)
        self.selected_id: Optional[str] = None
        self._closed = False

        if initial_layout:
            self.layout = layout_snapshot(initial_layout)
        else:
            self.layout = self._generate()
        self._changed()

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def pointer_down(self, point: CanvasPoint) -> Optional[DragMode]:
        """
        Select and grab what is under the pointer; empty canvas clears the selection.

        Returns:
            The started DragMode, or None
        """
        if not self.editable or self._closed or self.controller.is_active:
            return None

        hit = hit_test(self.layout, point, self.selected_id)
        if hit is None:
            self.selected_id = None
            return None

        room_id, mode = hit
        self.selected_id = room_id
        self.controller.begin_gesture(self.layout, room_id, mode, point)
        return mode

    def pointer_move(self, point: CanvasPoint) -> Optional[PlacedRoom]:
        room = self.controller.update_gesture(point)
        if room is not None:
            self._changed()
        return room

    def pointer_up(self) -> Optional[PlacedRoom]:
        if not self.controller.is_active:
            return None
        return self.controller.end_gesture()

    def client_point(self, client_x: float, client_y: float, box: BoundingBox) -> CanvasPoint:
        """Pointer event coordinates -> canvas point (box re-read by the host each event)."""
        return client_to_canvas(client_x, client_y, box, self.canvas_w, self.canvas_h)

    # ------------------------------------------------------------------
    # Selection and layout
    # ------------------------------------------------------------------

    def select(self, room_id: Optional[str]):
        if room_id is not None and find_room(self.layout, room_id) is None:
            room_id = None
        self.selected_id = room_id

    @property
    def selected_room(self) -> Optional[PlacedRoom]:
        if self.selected_id is None:
            return None
        return find_room(self.layout, self.selected_id)

    def reset_layout(self):
        """Throw away manual edits and regenerate from the room selections."""
        self.controller.cancel_gesture(restore=False)
        self.layout = self._generate()
        self.selected_id = None
        self._changed()

    def snapshot(self) -> List[PlacedRoom]:
        return layout_snapshot(self.layout)

    def room_selections(self) -> List[RoomSelection]:
        return group_by_type(self.layout)

    def validation(self) -> Dict[str, Any]:
        return validate_layout(self.layout, self.canvas_w, self.canvas_h)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self):
        """End any gesture where it stands and flush pending notifications."""
        if self._closed:
            return
        self.controller.end_gesture()
        if self.notifier is not None:
            self.notifier.close()
        self._closed = True
        logger.debug("Floor plan editor closed")

    def _generate(self) -> List[PlacedRoom]:
        return generate_layout(
            self.selections,
            canvas_w=self.canvas_w,
            canvas_h=self.canvas_h,
            **self.layout_options
        )

    def _changed(self):
        if self.notifier is not None and not self._closed:
            self.notifier.notify(self.layout)
