# backend/app/services/layout_generator.py
"""
Automatic floor plan layout.

Turns room selections ({type, quantity}) into a first arrangement of room
rectangles on the virtual canvas using greedy row packing:

    1. expand each selection into individual rooms ("Bedroom 1", "Bedroom 2")
    2. sort largest default area first
    3. size each room proportionally to its catalog area and place it in rows,
       wrapping when a row is full and compressing when the canvas runs out

There is no real scale; this is a schematic starting point the user then
moves and resizes.

Usage:
    from .layout_generator import generate_layout

    layout = generate_layout([RoomSelection('bedroom', 2), RoomSelection('kitchen', 1)])
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
import math
import random
import logging

from ..config import CANVAS_W, CANVAS_H, MIN_SIZE, LAYOUT_JITTER, LAYOUT_SEED
from .geometry import round_half_up
from .layout_types import PlacedRoom, RoomSelection
from .room_catalog import RoomTypeConfig, get_room_config

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

PADDING = 4         # canvas margin
GAP = 3             # space between neighbouring rooms
AREA_FILL = 0.85    # share of usable canvas area the rooms may take
MIN_ROOM_W = 60
MIN_ROOM_H = 40


# =============================================================================
# EXPANSION
# =============================================================================

@dataclass
class ExpandedRoom:
    """One room instance before placement"""
    type: str
    label: str
    icon: str
    color: str
    area: float


def expand_selections(
    selections: List[RoomSelection],
    catalog: Optional[Dict[str, RoomTypeConfig]] = None
) -> List[ExpandedRoom]:
    """
    Expand selections into single rooms, largest default area first.

    A type with quantity > 1 gets a 1-based index suffix on its label;
    a single room keeps the bare catalog label.
    """
    expanded = []

    for selection in selections:
        config = get_room_config(selection.type, catalog)
        for i in range(selection.quantity):
            suffix = f" {i + 1}" if selection.quantity > 1 else ""
            expanded.append(ExpandedRoom(
                type=selection.type,
                label=f"{config.label}{suffix}",
                icon=config.icon,
                color=config.color,
                area=float(config.default_area_m2),
            ))

    # Stable: equal areas keep selection order
    expanded.sort(key=lambda room: -room.area)
    return expanded


# =============================================================================
# PLACEMENT
# =============================================================================

def generate_layout(
    selections: List[RoomSelection],
    canvas_w: int = CANVAS_W,
    canvas_h: int = CANVAS_H,
    jitter: float = LAYOUT_JITTER,
    seed: Optional[int] = LAYOUT_SEED,
    rng: Optional[random.Random] = None,
    catalog: Optional[Dict[str, RoomTypeConfig]] = None
) -> List[PlacedRoom]:
    """
    Generate a row-packed layout for the selected rooms.

    Args:
        selections: Room types and quantities (types must not repeat)
        canvas_w: Virtual canvas width
        canvas_h: Virtual canvas height
        jitter: Max relative width variation per room (0 disables)
        seed: Seed for the jitter; the same seed gives the same geometry
        rng: Explicit random source (overrides seed)
        catalog: Alternative room catalog

    Returns:
        List of PlacedRoom, in placement order

    Raises:
        UnknownRoomTypeError: a selection names a type outside the catalog
    """
    expanded = expand_selections(selections, catalog)
    if not expanded:
        return []

    if rng is None:
        rng = random.Random(seed)

    total_area = sum(room.area for room in expanded)
    if total_area <= 0:
        # All-zero catalog areas: size everything equally
        for room in expanded:
            room.area = 1.0
        total_area = float(len(expanded))

    usable_w = canvas_w - PADDING * 2
    usable_h = canvas_h - PADDING * 2
    max_h = usable_h // 2
    min_h = max(MIN_ROOM_H, MIN_SIZE)
    min_w = max(MIN_ROOM_W, MIN_SIZE)

    # Each m² maps to scale² canvas units²
    scale = math.sqrt((usable_w * usable_h) / total_area) * AREA_FILL

    layout: List[PlacedRoom] = []
    cursor_x = PADDING
    cursor_y = PADDING
    row_height = 0

    for index, room in enumerate(expanded):
        factor = 1 + rng.random() * jitter if jitter else 1
        w = round_half_up(math.sqrt(room.area) * scale * factor)
        h = round_half_up((room.area * scale * scale) / w) if w > 0 else 0

        w = max(min_w, min(w, usable_w))
        h = max(min_h, min(h, max_h))

        # New row if it doesn't fit
        if cursor_x + w > canvas_w - PADDING:
            cursor_x = PADDING
            cursor_y += row_height + GAP
            row_height = 0

        # Compress vertically when past the bottom
        if cursor_y + h > canvas_h - PADDING:
            h = max(MIN_SIZE, canvas_h - PADDING - cursor_y)

        y = cursor_y
        if y + h > canvas_h - PADDING:
            # No room left at all: park against the bottom edge
            y = canvas_h - PADDING - h

        layout.append(PlacedRoom(
            id=f"{room.type}-{index}",
            type=room.type,
            label=room.label,
            icon=room.icon,
            color=room.color,
            x=cursor_x,
            y=y,
            w=w,
            h=h,
        ))

        cursor_x += w + GAP
        row_height = max(row_height, h)

    logger.debug(f"Generated layout with {len(layout)} rooms on {canvas_w}x{canvas_h} canvas")
    return layout
