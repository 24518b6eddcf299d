# backend/app/services/room_catalog.py
# Room type catalog: label, icon, colour and default area per room kind
#
# Read-only lookup table. Nothing here holds state.

from typing import Dict, List, Optional
from dataclasses import dataclass
import logging

from ..exceptions import UnknownRoomTypeError

logger = logging.getLogger(__name__)

FALLBACK_ROOM_TYPE = "other"


# =============================================================================
# DATA CLASS
# =============================================================================

@dataclass(frozen=True)
class RoomTypeConfig:
    """Catalog entry for one kind of room."""
    type: str
    label: str
    icon: str
    color: str
    default_area_m2: float   # m² - drives auto-layout proportions

    def to_dict(self) -> Dict[str, object]:
        return {
            'type': self.type,
            'label': self.label,
            'icon': self.icon,
            'color': self.color,
            'default_area_m2': self.default_area_m2,
        }


# =============================================================================
# CATALOG
# =============================================================================

ROOM_TYPES: List[RoomTypeConfig] = [
    RoomTypeConfig('living_room', 'Living Room', '🛋️', '#4F86C6', 20),
    RoomTypeConfig('dining_room', 'Dining Room', '🍽️', '#5A9BD5', 14),
    RoomTypeConfig('bedroom', 'Bedroom', '🛏️', '#7CB9E8', 12),
    RoomTypeConfig('suite', 'Suite', '🛏️', '#6CA0DC', 16),
    RoomTypeConfig('bathroom', 'Bathroom', '🚿', '#89CFF0', 5),
    RoomTypeConfig('powder_room', 'Powder Room', '🚽', '#A7D8DE', 3),
    RoomTypeConfig('kitchen', 'Kitchen', '🍳', '#FF8C42', 10),
    RoomTypeConfig('office', 'Office', '💻', '#9B59B6', 10),
    RoomTypeConfig('laundry', 'Laundry', '🧺', '#1ABC9C', 6),
    RoomTypeConfig('service_area', 'Service Area', '🧹', '#2ECC71', 6),
    RoomTypeConfig('balcony', 'Balcony', '🌤️', '#F1C40F', 6),
    RoomTypeConfig('veranda', 'Veranda', '🌿', '#E67E22', 8),
    RoomTypeConfig('terrace', 'Terrace', '☀️', '#F39C12', 15),
    RoomTypeConfig('garage', 'Garage', '🚗', '#95A5A6', 18),
    RoomTypeConfig('hallway', 'Hallway', '🚪', '#BDC3C7', 6),
    RoomTypeConfig('entrance_hall', 'Entrance Hall', '🏠', '#D5DBDB', 4),
    RoomTypeConfig('pantry', 'Pantry', '📦', '#A0522D', 4),
    RoomTypeConfig('closet', 'Closet', '👔', '#C39BD3', 5),
    RoomTypeConfig('barbecue', 'Barbecue Area', '🔥', '#E74C3C', 12),
    RoomTypeConfig('pool', 'Pool', '🏊', '#3498DB', 20),
    RoomTypeConfig('garden', 'Garden', '🌳', '#27AE60', 15),
    RoomTypeConfig(FALLBACK_ROOM_TYPE, 'Other', '📐', '#7F8C8D', 10),
]

ROOM_CATALOG: Dict[str, RoomTypeConfig] = {config.type: config for config in ROOM_TYPES}


# =============================================================================
# LOOKUP
# =============================================================================

def is_known_room_type(room_type: Optional[str]) -> bool:
    return room_type in ROOM_CATALOG


def get_room_config(
    room_type: str,
    catalog: Optional[Dict[str, RoomTypeConfig]] = None
) -> RoomTypeConfig:
    """
    Look up a room type.

    Args:
        room_type: Catalog key, e.g. "bedroom"
        catalog: Alternative table (defaults to ROOM_CATALOG)

    Returns:
        The RoomTypeConfig for that type

    Raises:
        UnknownRoomTypeError: type is not in the catalog
    """
    table = ROOM_CATALOG if catalog is None else catalog
    config = table.get(room_type)
    if config is None:
        raise UnknownRoomTypeError(room_type)
    return config


def get_room_config_or_default(room_type: str) -> RoomTypeConfig:
    """Like get_room_config but falls back to "other" for stored legacy types."""
    config = ROOM_CATALOG.get(room_type)
    if config is None:
        logger.warning(f"Unknown room type '{room_type}', using '{FALLBACK_ROOM_TYPE}'")
        return ROOM_CATALOG[FALLBACK_ROOM_TYPE]
    return config


def list_room_types() -> List[RoomTypeConfig]:
    return list(ROOM_TYPES)
