# backend/app/services/layout_types.py
"""
Floor plan data model.

A layout is an ordered list of PlacedRoom rectangles on the virtual canvas.
Capture workflows build DraftRoom rectangles first and turn them into
PlacedRoom once a room type has been assigned. Layouts leave the engine as
plain dicts (``to_dict``) and come back through ``layout_from_dicts``.
"""

from typing import Any, Dict, Iterable, List, Optional
from dataclasses import dataclass, replace
import logging

from ..config import CANVAS_W, CANVAS_H, GRID, MIN_SIZE
from ..exceptions import InvalidLayoutError, InvalidSelectionError
from .geometry import find_overlaps, rect_in_canvas, rect_on_grid, round_half_up

logger = logging.getLogger(__name__)

PLACED_ROOM_FIELDS = ('id', 'type', 'label', 'icon', 'color', 'x', 'y', 'w', 'h')


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class RoomSelection:
    """How many rooms of one type a project has."""
    type: str
    quantity: int
    custom_name: Optional[str] = None
    floor: int = 0

    def __post_init__(self):
        if not isinstance(self.quantity, int) or self.quantity <= 0:
            raise InvalidSelectionError(
                f"Quantity for '{self.type}' must be a positive integer, got {self.quantity!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'quantity': self.quantity}


@dataclass
class PlacedRoom:
    """A labelled room rectangle, integer virtual-canvas units."""
    id: str
    type: str
    label: str
    icon: str
    color: str
    x: int
    y: int
    w: int
    h: int

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in PLACED_ROOM_FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlacedRoom":
        missing = [name for name in PLACED_ROOM_FIELDS if name not in data]
        if missing:
            raise InvalidLayoutError(f"Room is missing field(s): {', '.join(missing)}")
        try:
            return cls(
                id=str(data['id']),
                type=str(data['type']),
                label=str(data['label']),
                icon=str(data['icon']),
                color=str(data['color']),
                x=round_half_up(float(data['x'])),
                y=round_half_up(float(data['y'])),
                w=round_half_up(float(data['w'])),
                h=round_half_up(float(data['h'])),
            )
        except (TypeError, ValueError) as e:
            raise InvalidLayoutError(f"Room {data.get('id')!r} has a non-numeric coordinate: {e}")

    def copy(self) -> "PlacedRoom":
        return replace(self)


@dataclass
class DraftRoom:
    """A drawn rectangle waiting for its room type."""
    id: str
    x: int
    y: int
    w: int
    h: int
    type: Optional[str] = None
    label: str = ""

    @property
    def is_labeled(self) -> bool:
        return self.type is not None


# =============================================================================
# LAYOUT HELPERS
# =============================================================================

def layout_snapshot(layout: Iterable[PlacedRoom]) -> List[PlacedRoom]:
    """Independent copy of a layout; changing it never touches the original."""
    return [room.copy() for room in layout]


def layout_to_dicts(layout: Iterable[PlacedRoom]) -> List[Dict[str, Any]]:
    return [room.to_dict() for room in layout]


def layout_from_dicts(data: Any) -> List[PlacedRoom]:
    """
    Parse a stored layout (a JSON array of room objects).

    Raises:
        InvalidLayoutError: not a list, or a room is malformed / has a duplicate id
    """
    if not isinstance(data, list):
        raise InvalidLayoutError("Layout must be a list of rooms")

    rooms = []
    seen = set()
    for item in data:
        if not isinstance(item, dict):
            raise InvalidLayoutError("Each room must be an object")
        room = PlacedRoom.from_dict(item)
        if room.id in seen:
            raise InvalidLayoutError(f"Duplicate room id: {room.id}")
        seen.add(room.id)
        rooms.append(room)
    return rooms


def find_room(layout: Iterable[Any], room_id: str) -> Optional[Any]:
    for room in layout:
        if room.id == room_id:
            return room
    return None


def group_by_type(rooms: Iterable[Any]) -> List[RoomSelection]:
    """
    Rebuild the RoomSelection multiset from placed (or labelled draft) rooms.

    Types keep first-seen order; rooms without a type are skipped.
    """
    counts: Dict[str, int] = {}
    for room in rooms:
        if room.type is None:
            continue
        counts[room.type] = counts.get(room.type, 0) + 1
    return [RoomSelection(type=room_type, quantity=quantity) for room_type, quantity in counts.items()]


def validate_layout(
    layout: List[PlacedRoom],
    canvas_w: int = CANVAS_W,
    canvas_h: int = CANVAS_H,
    grid: int = GRID,
    min_size: int = MIN_SIZE
) -> Dict[str, Any]:
    """
    Check a layout against the placed-room invariants.

    Overlaps are reported but never make a layout invalid.

    Returns:
        Dict with 'valid', 'out_of_bounds', 'undersized', 'off_grid', 'overlaps'
    """
    out_of_bounds = [room.id for room in layout if not rect_in_canvas(room, canvas_w, canvas_h)]
    undersized = [room.id for room in layout if room.w < min_size or room.h < min_size]
    off_grid = [room.id for room in layout if not rect_on_grid(room, grid)]
    overlaps = find_overlaps(layout)

    return {
        'valid': not out_of_bounds and not undersized,
        'room_count': len(layout),
        'out_of_bounds': out_of_bounds,
        'undersized': undersized,
        'off_grid': off_grid,
        'overlaps': [
            {'room_a': a, 'room_b': b, 'area': area} for a, b, area in overlaps
        ],
    }
