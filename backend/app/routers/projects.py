# backend/app/routers/projects.py
# Projects router: room selections and the stored floor plan of each project

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from .. import models, schemas
from ..database import get_db
from ..analytics import analytics
from ..services import floor_plan_store
from ..services.layout_generator import generate_layout
from ..services.layout_types import validate_layout
from ..services.svg_renderer import render_layout_svg

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


def get_project_or_404(project_id: int, db: Session) -> models.Project:
    project = floor_plan_store.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def floor_plan_payload(project: models.Project, layout, image_url: Optional[str]) -> dict:
    return {
        "project_id": project.id,
        "layout": [room.to_dict() for room in layout],
        "rooms": [
            schemas.RoomSelectionSchema.from_selection(selection)
            for selection in floor_plan_store.project_selections(project)
        ],
        "image_url": image_url,
        "validation": validate_layout(layout)
    }


def current_layout(project: models.Project):
    """Stored layout, or the auto-layout of the project's rooms when none was ever saved."""
    layout, image_url = floor_plan_store.load_floor_plan(project)
    if not floor_plan_store.has_stored_layout(project):
        layout = generate_layout(floor_plan_store.project_selections(project))
    return layout, image_url


@router.post("/", response_model=schemas.ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: schemas.ProjectCreate,
    db: Session = Depends(get_db)
):
    """Create a new project with its room selections."""
    db_project = models.Project(
        name=project.name,
        status=models.ProjectStatus.DRAFT
    )
    db.add(db_project)
    db.flush()

    floor_plan_store.replace_project_rooms(
        db, db_project, [room.to_selection() for room in project.rooms]
    )
    db.commit()
    db.refresh(db_project)

    analytics.track_event("project_created", db_project.id, {
        "room_types": len(project.rooms),
        "room_count": sum(room.quantity for room in project.rooms)
    })

    return db_project


@router.get("/", response_model=List[schemas.ProjectResponse])
async def list_projects(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """Get all projects, newest first."""
    projects = db.query(models.Project).order_by(
        models.Project.id.desc()
    ).offset(skip).limit(limit).all()

    return projects


@router.get("/{project_id}", response_model=schemas.ProjectResponse)
async def get_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Get a specific project by ID."""
    return get_project_or_404(project_id, db)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Delete a project and its rooms."""
    db_project = get_project_or_404(project_id, db)

    analytics.track_event("project_deleted", project_id, {
        "project_name": db_project.name
    })

    db.delete(db_project)
    db.commit()

    return None


@router.get("/{project_id}/floor-plan", response_model=schemas.FloorPlanResponse)
async def get_floor_plan(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Stored layout and backdrop of a project (auto-layout if nothing is stored)."""
    project = get_project_or_404(project_id, db)
    layout, image_url = current_layout(project)
    return floor_plan_payload(project, layout, image_url)


@router.put("/{project_id}/floor-plan", response_model=schemas.FloorPlanResponse)
async def save_floor_plan(
    project_id: int,
    floor_plan: schemas.FloorPlanSave,
    db: Session = Depends(get_db)
):
    """
    Save an edited or captured layout.

    The project's room selections are re-derived from the layout's room types;
    an empty layout is stored as such and leaves the project without rooms.
    Rooms must lie inside the canvas (422 otherwise); overlap is allowed.
    An empty image_url clears the backdrop; omitting it keeps the current one.
    """
    project = get_project_or_404(project_id, db)
    layout = [room.to_placed_room() for room in floor_plan.layout]

    project = floor_plan_store.save_floor_plan(db, project, layout, floor_plan.image_url)
    if project.status == models.ProjectStatus.DRAFT and layout:
        project.status = models.ProjectStatus.ACTIVE
        db.commit()
        db.refresh(project)

    analytics.track_event("floor_plan_saved", project_id, {
        "room_count": len(layout),
        "has_background": bool(project.floor_plan_image_url)
    })

    return floor_plan_payload(project, layout, project.floor_plan_image_url)


@router.post("/{project_id}/floor-plan/reset", response_model=schemas.FloorPlanResponse)
async def reset_floor_plan(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Discard manual edits: regenerate from the room selections and store the result."""
    project = get_project_or_404(project_id, db)
    layout = generate_layout(floor_plan_store.project_selections(project))

    project = floor_plan_store.save_floor_plan(db, project, layout, sync_rooms=False)
    logger.info(f"Reset floor plan for project {project_id}")

    return floor_plan_payload(project, layout, project.floor_plan_image_url)


@router.get("/{project_id}/floor-plan.svg")
async def get_floor_plan_svg(
    project_id: int,
    show_grid: bool = True,
    db: Session = Depends(get_db)
):
    """Rendered floor plan (with backdrop, when one is stored)."""
    project = get_project_or_404(project_id, db)
    layout, image_url = current_layout(project)
    svg = render_layout_svg(layout, background_url=image_url, show_grid=show_grid)
    return Response(content=svg, media_type="image/svg+xml")
