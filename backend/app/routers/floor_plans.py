# backend/app/routers/floor_plans.py
"""
Stateless floor plan endpoints.

Layouts travel as JSON arrays of placed rooms; nothing here touches the
database. Project-bound layouts live under /api/v1/projects/{id}/floor-plan.
"""
from fastapi import APIRouter, File, Response, UploadFile
from typing import Optional
import logging

from .. import schemas
from ..config import CANVAS_W, CANVAS_H, GRID, MIN_SIZE, MAX_BACKGROUND_IMAGE_SIZE
from ..services.background_image import load_background_image
from ..services.layout_generator import generate_layout
from ..services.layout_types import group_by_type, validate_layout
from ..services.svg_renderer import render_layout_svg
from ..analytics import analytics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/floor-plans", tags=["floor-plans"])


def to_layout(rooms):
    return [room.to_placed_room() for room in rooms]


@router.post("/generate", response_model=schemas.LayoutResponse)
async def generate(request: schemas.GenerateLayoutRequest):
    """
    Auto-layout room selections on the virtual canvas.

    The same rooms, seed and jitter always give the same layout.
    """
    selections = [room.to_selection() for room in request.rooms]
    layout = generate_layout(selections, CANVAS_W, CANVAS_H, jitter=request.jitter, seed=request.seed)

    analytics.track_event("layout_generated", properties={
        "room_types": len(selections),
        "room_count": len(layout),
        "seed": request.seed
    })

    return {
        "layout": [room.to_dict() for room in layout],
        "rooms": [room.model_dump() for room in request.rooms],
        "canvas": schemas.CanvasInfo()
    }


@router.post("/selections", response_model=schemas.LayoutResponse)
async def selections_from_layout(request: schemas.LayoutRequest):
    """Regroup a layout into room selections (first-seen order)."""
    layout = to_layout(request.layout)
    rooms = group_by_type(layout)
    return {
        "layout": [room.to_dict() for room in layout],
        "rooms": [schemas.RoomSelectionSchema.from_selection(s) for s in rooms],
        "canvas": schemas.CanvasInfo()
    }


@router.post("/validate", response_model=schemas.LayoutValidationResponse)
async def validate(request: schemas.LayoutRequest):
    """Bounds, grid, minimum size and overlap report. Overlap never fails the request."""
    return validate_layout(to_layout(request.layout), CANVAS_W, CANVAS_H, GRID, MIN_SIZE)


@router.post("/background", response_model=schemas.BackgroundImageResponse)
async def upload_background(file: UploadFile = File(...)):
    """Accept a photographed or scanned plan to trace over."""
    content = await file.read()
    logger.info(f"Background upload: {file.filename} ({file.content_type}, {len(content)} bytes)")

    image = load_background_image(content, file.content_type, MAX_BACKGROUND_IMAGE_SIZE)

    analytics.track_event("background_uploaded", properties={
        "content_type": image.content_type,
        "width": image.width,
        "height": image.height
    })
    return image.to_dict()


@router.post("/render")
async def render(request: schemas.LayoutRequest, selected_id: Optional[str] = None, show_grid: bool = True):
    """Render a layout as SVG."""
    svg = render_layout_svg(to_layout(request.layout), selected_id=selected_id, show_grid=show_grid)
    return Response(content=svg, media_type="image/svg+xml")
