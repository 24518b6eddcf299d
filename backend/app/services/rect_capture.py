# backend/app/services/rect_capture.py
"""
Capture workflows: turn pointer gestures into labelled room rectangles.

One state machine serves both authoring paths:

    free draw     DRAW -> LABEL -> finish()
    photo trace   UPLOAD -> DRAW -> LABEL -> finish()

In DRAW, a pointer-down on empty canvas starts a new rectangle and a
pointer-down on an existing one (body or handle of the selected room) starts
a move/resize through DragResizeController. Rectangles not larger than
MIN_DRAW_SIZE in both directions are dropped as gesture noise.

In LABEL, every rectangle needs a room type from the catalog before
finish() will produce the layout and the regrouped room selections.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum
import uuid
import logging

from ..config import CANVAS_W, CANVAS_H, GRID, MIN_SIZE, MIN_DRAW_SIZE
from ..exceptions import CaptureStateError, InvalidImageError
from .background_image import (
    BackgroundImage,
    NOT_AN_IMAGE_MESSAGE,
    is_image_content_type,
    load_background_image,
)
from .canvas_transform import CanvasPoint
from .drag_controller import DragResizeController, hit_test
from .geometry import Rect, align_rect, normalize_rect
from .layout_types import DraftRoom, PlacedRoom, RoomSelection, find_room, group_by_type
from .room_catalog import RoomTypeConfig, get_room_config

logger = logging.getLogger(__name__)


class CaptureStep(str, Enum):
    UPLOAD = "upload"
    DRAW = "draw"
    LABEL = "label"


@dataclass
class CaptureResult:
    """What a finished capture hands back to the project form."""
    selections: List[RoomSelection]
    layout: List[PlacedRoom]
    background_image: Optional[BackgroundImage] = None
    drafts: List[DraftRoom] = field(default_factory=list)


class RectCaptureWorkflow:
    """Free-draw capture: blank canvas, draw rooms, label them."""

    initial_step = CaptureStep.DRAW

    def __init__(
        self,
        canvas_w: int = CANVAS_W,
        canvas_h: int = CANVAS_H,
        grid: int = GRID,
        min_size: int = MIN_SIZE,
        min_draw_size: int = MIN_DRAW_SIZE,
        catalog: Optional[Dict[str, RoomTypeConfig]] = None
    ):
        self.canvas_w = canvas_w
        self.canvas_h = canvas_h
        self.grid = grid
        self.min_size = min_size
        self.min_draw_size = min_draw_size
        self.catalog = catalog

        self.step = self.initial_step
        self.rooms: List[DraftRoom] = []
        self.selected_id: Optional[str] = None
        self.controller = DragResizeController(canvas_w, canvas_h, grid, min_size)

        self._draw_start: Optional[CanvasPoint] = None
        self._current: Optional[Rect] = None
        self._drawn = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def background_image(self) -> Optional[BackgroundImage]:
        return None

    @property
    def is_drawing(self) -> bool:
        return self._draw_start is not None

    @property
    def current_rect(self) -> Optional[Rect]:
        """Rectangle being drawn right now (for the renderer), unsnapped."""
        return self._current

    def _require_step(self, step: CaptureStep, action: str):
        if self.step != step:
            raise CaptureStateError(f"Cannot {action} during the {self.step.value} step")

    # ------------------------------------------------------------------
    # Pointer input (DRAW step only; ignored elsewhere)
    # ------------------------------------------------------------------

    def pointer_down(self, point: CanvasPoint) -> Optional[str]:
        """
        Start a gesture.

        Returns:
            "draw" for a new rectangle, the DragMode value for a move/resize,
            or None when ignored (wrong step or a gesture already running)
        """
        if self.step != CaptureStep.DRAW:
            return None
        if self.is_drawing or self.controller.is_active:
            return None

        hit = hit_test(self.rooms, point, self.selected_id)
        if hit is not None:
            room_id, mode = hit
            self.selected_id = room_id
            self.controller.begin_gesture(self.rooms, room_id, mode, point)
            return mode.value

        self._draw_start = point
        self._current = Rect(point.x, point.y, 0, 0)
        self.selected_id = None
        return "draw"

    def pointer_move(self, point: CanvasPoint) -> Optional[Rect]:
        if self.controller.is_active:
            room = self.controller.update_gesture(point)
            return Rect(room.x, room.y, room.w, room.h)

        if self._draw_start is not None:
            start = self._draw_start
            self._current = normalize_rect(start.x, start.y, point.x, point.y)
            return self._current

        return None

    def pointer_up(self) -> Optional[DraftRoom]:
        """
        Finish the running gesture.

        Returns:
            The new DraftRoom when a drawn rectangle was accepted, else None
        """
        if self.controller.is_active:
            self.controller.end_gesture()
            return None

        if self._draw_start is None:
            return None

        rect = self._current
        self._draw_start = None
        self._current = None

        if rect is None or rect.w <= self.min_draw_size or rect.h <= self.min_draw_size:
            logger.debug(f"Discarded sub-threshold draw {rect}")
            return None

        aligned = align_rect(rect, self.canvas_w, self.canvas_h, self.grid, self.min_size)
        self._drawn += 1
        draft = DraftRoom(
            id=f"draft-{uuid.uuid4().hex[:8]}",
            x=aligned.x,
            y=aligned.y,
            w=aligned.w,
            h=aligned.h,
            label=f"Room {self._drawn}",
        )
        self.rooms.append(draft)
        self.selected_id = draft.id
        logger.debug(f"Drew room {draft.id} at ({draft.x},{draft.y}) {draft.w}x{draft.h}")
        return draft

    def cancel_gesture(self):
        """Drop whatever gesture is in progress (teardown). Never raises."""
        self.controller.cancel_gesture()
        self._draw_start = None
        self._current = None

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def select(self, room_id: Optional[str]):
        if room_id is not None and find_room(self.rooms, room_id) is None:
            room_id = None
        self.selected_id = room_id

    def delete_room(self, room_id: str) -> bool:
        room = find_room(self.rooms, room_id)
        if room is None:
            return False
        if self.controller.drag_info is not None and self.controller.drag_info.room_id == room_id:
            self.controller.cancel_gesture(restore=False)
        self.rooms.remove(room)
        if self.selected_id == room_id:
            self.selected_id = None
        return True

    def clear(self):
        """Remove every drawn room."""
        self.cancel_gesture()
        self.rooms = []
        self.selected_id = None
        self._drawn = 0

    # ------------------------------------------------------------------
    # Labelling
    # ------------------------------------------------------------------

    def start_labeling(self):
        self._require_step(CaptureStep.DRAW, "start labelling")
        if not self.rooms:
            raise CaptureStateError("Draw at least one room before labelling")
        self.cancel_gesture()
        self.selected_id = None
        self.step = CaptureStep.LABEL

    def back_to_drawing(self):
        self._require_step(CaptureStep.LABEL, "go back to drawing")
        self.step = CaptureStep.DRAW

    def assign_type(self, room_id: str, room_type: str) -> DraftRoom:
        """
        Give a drawn room its type; the label becomes the catalog label.

        Raises:
            CaptureStateError: not in the LABEL step or unknown room id
            UnknownRoomTypeError: type outside the catalog
        """
        self._require_step(CaptureStep.LABEL, "assign room types")
        room = find_room(self.rooms, room_id)
        if room is None:
            raise CaptureStateError(f"Room not found: {room_id}")

        config = get_room_config(room_type, self.catalog)
        room.type = config.type
        room.label = config.label
        return room

    def unlabeled_count(self) -> int:
        return sum(1 for room in self.rooms if not room.is_labeled)

    def remaining_message(self) -> str:
        return f"{self.unlabeled_count()} room(s) remaining"

    def can_finish(self) -> bool:
        return self.step == CaptureStep.LABEL and bool(self.rooms) and self.unlabeled_count() == 0

    def finish(self) -> Optional[CaptureResult]:
        """
        Convert labelled drafts into a layout plus regrouped selections.

        Returns None (and changes nothing) while any room is still unlabelled.
        """
        self._require_step(CaptureStep.LABEL, "finish")
        if not self.can_finish():
            logger.info(f"Capture not finished: {self.remaining_message()}")
            return None

        layout = []
        for i, room in enumerate(self.rooms):
            config = get_room_config(room.type, self.catalog)
            layout.append(PlacedRoom(
                id=f"{room.type}-{i}",
                type=room.type,
                label=room.label,
                icon=config.icon,
                color=config.color,
                x=room.x,
                y=room.y,
                w=room.w,
                h=room.h,
            ))

        return CaptureResult(
            selections=group_by_type(self.rooms),
            layout=layout,
            background_image=self.background_image,
            drafts=list(self.rooms),
        )


class PhotoTraceWorkflow(RectCaptureWorkflow):
    """Photo trace: same capture, drawn over an uploaded floor plan image."""

    initial_step = CaptureStep.UPLOAD

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._image: Optional[BackgroundImage] = None

    @property
    def background_image(self) -> Optional[BackgroundImage]:
        return self._image

    def attach_image(self, image: BackgroundImage):
        """
        Use an already decoded image as the backdrop and move on to drawing.

        Raises:
            InvalidImageError: image carries a non-image MIME type
            CaptureStateError: called during labelling
        """
        if self.step == CaptureStep.LABEL:
            raise CaptureStateError("Cannot change the image during the label step")
        if image.content_type is not None and not is_image_content_type(image.content_type):
            raise InvalidImageError(NOT_AN_IMAGE_MESSAGE)

        self._image = image
        if self.step == CaptureStep.UPLOAD:
            self.step = CaptureStep.DRAW

    def upload_image(self, data: bytes, content_type: Optional[str]) -> BackgroundImage:
        image = load_background_image(data, content_type)
        self.attach_image(image)
        return image
