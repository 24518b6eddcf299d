from typing import Any, Iterable

from .config import CANVAS_W, CANVAS_H
from .services.geometry import rect_in_canvas
from .services.room_catalog import is_known_room_type


class FloorPlanValidators:
    """Validation rules for floor plan input"""
    
    @staticmethod
    def validate_room_type(room_type: str) -> bool:
        """Room type must exist in the catalog"""
        if not is_known_room_type(room_type):
            raise ValueError(f"Unknown room type: {room_type}")
        return True
    
    @staticmethod
    def validate_unique_types(room_types: Iterable[str]) -> bool:
        """Each room type may appear only once in a selection list"""
        seen = set()
        for room_type in room_types:
            if room_type in seen:
                raise ValueError(f"Room type '{room_type}' selected more than once; sum the quantities instead")
            seen.add(room_type)
        return True
    
    @staticmethod
    def validate_unique_ids(room_ids: Iterable[str]) -> bool:
        """Room ids must be unique within a layout"""
        seen = set()
        for room_id in room_ids:
            if room_id in seen:
                raise ValueError(f"Duplicate room id: {room_id}")
            seen.add(room_id)
        return True
    
    @staticmethod
    def validate_rooms_in_canvas(rooms: Iterable[Any], canvas_w: int = CANVAS_W, canvas_h: int = CANVAS_H) -> bool:
        """Every room rectangle must lie inside the virtual canvas"""
        outside = [room.id for room in rooms if not rect_in_canvas(room, canvas_w, canvas_h)]
        if outside:
            raise ValueError(f"Room(s) outside the {canvas_w}x{canvas_h} canvas: {', '.join(outside)}")
        return True
