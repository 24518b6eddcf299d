# backend/app/services/geometry.py
# Canvas geometry for floor plan layouts
# Grid snapping, clamping, bounds checks and overlap detection
#
# Everything works on objects exposing x, y, w, h in virtual-canvas units
# (Rect, PlacedRoom, DraftRoom).

from typing import Any, Dict, List, NamedTuple, Tuple
import math
import logging

from ..config import CANVAS_W, CANVAS_H, GRID, MIN_SIZE

logger = logging.getLogger(__name__)


class Rect(NamedTuple):
    x: float
    y: float
    w: float
    h: float


# =============================================================================
# ROUNDING / SNAPPING
# =============================================================================

def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def snap(value: float, grid: int = GRID) -> int:
    """Round a coordinate to the nearest multiple of the grid pitch."""
    return round_half_up(value / grid) * grid


def snap_down(value: float, grid: int = GRID) -> int:
    """Largest grid multiple not above value."""
    return int(math.floor(value / grid)) * grid


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# =============================================================================
# NORMALISATION
# =============================================================================

def normalize_rect(x0: float, y0: float, x1: float, y1: float) -> Rect:
    """Rectangle spanned by two corners, top-left first whatever the drag direction."""
    return Rect(min(x0, x1), min(y0, y1), abs(x1 - x0), abs(y1 - y0))


def align_rect(
    rect: Any,
    canvas_w: int = CANVAS_W,
    canvas_h: int = CANVAS_H,
    grid: int = GRID,
    min_size: int = MIN_SIZE
) -> Rect:
    """
    Snap a rectangle onto the grid and pull it inside the canvas.

    Sizes are snapped, raised to min_size and capped at the largest grid
    multiple that fits; the position is snapped and clamped. Already aligned,
    in-bounds rectangles come back unchanged.
    """
    max_w = snap_down(canvas_w, grid)
    max_h = snap_down(canvas_h, grid)
    w = min(max_w, snap(max(min_size, rect.w), grid))
    h = min(max_h, snap(max(min_size, rect.h), grid))
    x = int(clamp(snap(rect.x, grid), 0, snap_down(canvas_w - w, grid)))
    y = int(clamp(snap(rect.y, grid), 0, snap_down(canvas_h - h, grid)))
    return Rect(x, y, w, h)


# =============================================================================
# BOUNDS CHECKS
# =============================================================================

def rect_in_canvas(rect: Any, canvas_w: int = CANVAS_W, canvas_h: int = CANVAS_H) -> bool:
    return (
        rect.x >= 0 and rect.y >= 0
        and rect.x + rect.w <= canvas_w
        and rect.y + rect.h <= canvas_h
    )


def rect_on_grid(rect: Any, grid: int = GRID) -> bool:
    return all(int(v) == v and int(v) % grid == 0 for v in (rect.x, rect.y, rect.w, rect.h))


def contains_point(rect: Any, px: float, py: float) -> bool:
    return rect.x <= px <= rect.x + rect.w and rect.y <= py <= rect.y + rect.h


def corner_points(rect: Any) -> Dict[str, Tuple[float, float]]:
    """Corner coordinates keyed by compass name (nw, ne, sw, se)."""
    return {
        'nw': (rect.x, rect.y),
        'ne': (rect.x + rect.w, rect.y),
        'sw': (rect.x, rect.y + rect.h),
        'se': (rect.x + rect.w, rect.y + rect.h),
    }


# =============================================================================
# OVERLAP DETECTION
# =============================================================================

def get_overlap_area(rect1: Any, rect2: Any) -> float:
    """
    Calculate the overlapping area between two rectangles.

    Returns 0 if they don't overlap (touching edges count as no overlap).
    """
    overlap_x = max(0, min(rect1.x + rect1.w, rect2.x + rect2.w) - max(rect1.x, rect2.x))
    overlap_y = max(0, min(rect1.y + rect1.h, rect2.y + rect2.h) - max(rect1.y, rect2.y))
    return overlap_x * overlap_y


def rects_overlap(rect1: Any, rect2: Any) -> bool:
    """Check if two rectangles share interior space."""
    return get_overlap_area(rect1, rect2) > 0


def find_overlaps(rooms: List[Any], min_area: float = 0) -> List[Tuple[str, str, float]]:
    """
    Find all overlapping room pairs in a layout.

    The engine never prevents overlap; this is a report for consumers that
    need disjoint rooms (area estimates and the like).

    Args:
        rooms: Rooms with id, x, y, w, h
        min_area: Only report overlaps larger than this

    Returns:
        List of (room1_id, room2_id, overlap_area) tuples
    """
    overlaps = []

    for i, room1 in enumerate(rooms):
        for room2 in rooms[i + 1:]:
            area = get_overlap_area(room1, room2)
            if area > min_area:
                overlaps.append((room1.id, room2.id, area))

    if overlaps:
        logger.debug(f"Layout has {len(overlaps)} overlapping room pair(s)")
    return overlaps
