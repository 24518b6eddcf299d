# backend/app/services/svg_renderer.py
# SVG projection of a floor plan layout
#
# Pure read of a layout snapshot: nothing here feeds back into geometry.

from typing import List, Optional
import logging

import svgwrite

from ..config import CANVAS_W, CANVAS_H, GRID, HANDLE
from .geometry import corner_points
from .layout_types import PlacedRoom

logger = logging.getLogger(__name__)

# =============================================================================
# STYLE
# =============================================================================

GRID_COLOR = '#e5e7eb'
BORDER_COLOR = '#0B3D91'
LABEL_COLOR = '#333'
HANDLE_COLOR = '#0B3D91'
BACKGROUND_OPACITY = 0.25


def truncate_label(label: str, width: float) -> str:
    """Cut labels that would not fit the room (about 7 units per character)."""
    max_chars = int(width // 7)
    if len(label) > width / 7:
        return label[:max_chars] + '…'
    return label


def render_layout_svg(
    layout: List[PlacedRoom],
    background_url: Optional[str] = None,
    selected_id: Optional[str] = None,
    show_grid: bool = True,
    canvas_w: int = CANVAS_W,
    canvas_h: int = CANVAS_H
) -> str:
    """
    Render a layout as an SVG document.

    Args:
        layout: Rooms to draw, in stacking order
        background_url: Optional backdrop (photo-traced plans)
        selected_id: Room to draw with resize handles
        show_grid: Draw the snap grid
        canvas_w: Virtual canvas width (viewBox)
        canvas_h: Virtual canvas height (viewBox)

    Returns:
        SVG markup
    """
    dwg = svgwrite.Drawing(size=('100%', '100%'), profile='full', debug=False)
    dwg.viewbox(0, 0, canvas_w, canvas_h)

    if show_grid:
        pattern = dwg.pattern(id='fp-grid', size=(GRID, GRID), patternUnits='userSpaceOnUse')
        pattern.add(dwg.path(
            d=f"M {GRID} 0 L 0 0 0 {GRID}",
            fill='none', stroke=GRID_COLOR, stroke_width=0.3,
        ))
        dwg.defs.add(pattern)
        dwg.add(dwg.rect(insert=(0, 0), size=(canvas_w, canvas_h), fill='url(#fp-grid)'))

    if background_url:
        dwg.add(dwg.image(
            href=background_url, insert=(0, 0), size=(canvas_w, canvas_h),
            opacity=BACKGROUND_OPACITY,
        ))

    # Outer border
    dwg.add(dwg.rect(
        insert=(2, 2), size=(canvas_w - 4, canvas_h - 4), rx=4, ry=4,
        fill='none', stroke=BORDER_COLOR, stroke_width=2, stroke_opacity=0.2,
    ))

    for room in layout:
        selected = room.id == selected_id
        font_size = min(12, max(8, room.w / 10))
        icon_size = min(18, max(12, room.w / 5))
        cx = room.x + room.w / 2
        cy = room.y + room.h / 2

        group = dwg.g(id=f"room-{room.id}")
        group.add(dwg.rect(
            insert=(room.x, room.y), size=(room.w, room.h), rx=3, ry=3,
            fill=room.color, fill_opacity=0.15,
            stroke=BORDER_COLOR if selected else room.color,
            stroke_width=2.5 if selected else 1.5,
        ))
        group.add(dwg.rect(
            insert=(room.x + 3, room.y + 3),
            size=(max(0, room.w - 6), max(0, room.h - 6)), rx=2, ry=2,
            fill='none', stroke=room.color, stroke_width=0.5,
            stroke_opacity=0.3, stroke_dasharray='3 3',
        ))

        # Door indicator
        if room.h > 50:
            group.add(dwg.line(
                start=(room.x + room.w * 0.3, room.y), end=(room.x + room.w * 0.6, room.y),
                stroke=room.color, stroke_width=3, stroke_opacity=0.4, stroke_dasharray='2 2',
            ))

        group.add(dwg.text(
            room.icon, insert=(cx, cy - font_size * 0.5),
            text_anchor='middle', font_size=icon_size, dominant_baseline='central',
        ))
        group.add(dwg.text(
            truncate_label(room.label, room.w), insert=(cx, cy + icon_size * 0.7),
            text_anchor='middle', font_size=font_size, fill=LABEL_COLOR,
            font_weight='600', dominant_baseline='central',
        ))

        if selected:
            group.add(dwg.text(
                f"{room.w}×{room.h}", insert=(cx, room.y + room.h - 6),
                text_anchor='middle', font_size=8, fill='#666',
            ))
            for hx, hy in corner_points(room).values():
                group.add(dwg.rect(
                    insert=(hx - HANDLE / 2, hy - HANDLE / 2), size=(HANDLE, HANDLE),
                    rx=3, ry=3, fill=HANDLE_COLOR, stroke='#fff', stroke_width=1.5,
                ))

        dwg.add(group)

    logger.debug(f"Rendered {len(layout)} rooms to SVG")
    return dwg.tostring()
