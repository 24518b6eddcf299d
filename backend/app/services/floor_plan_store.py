# backend/app/services/floor_plan_store.py
# Persistence boundary for floor plan layouts
#
# The layout is stored verbatim as a JSON array on the project record and the
# room selections are re-derived from it, so the two never disagree.

from typing import Callable, List, Optional, Tuple
import json
import logging

from sqlalchemy.orm import Session

from .. import models
from ..exceptions import InvalidLayoutError
from .layout_types import (
    PlacedRoom,
    RoomSelection,
    group_by_type,
    layout_from_dicts,
    layout_to_dicts,
)
from .room_catalog import get_room_config_or_default

logger = logging.getLogger(__name__)


def get_project(db: Session, project_id: int) -> Optional[models.Project]:
    return db.query(models.Project).filter(models.Project.id == project_id).first()


def project_selections(project: models.Project) -> List[RoomSelection]:
    return [
        RoomSelection(
            type=room.room_type,
            quantity=room.quantity,
            custom_name=room.custom_name,
            floor=room.floor or 0,
        )
        for room in project.rooms
        if room.quantity and room.quantity > 0
    ]


def replace_project_rooms(db: Session, project: models.Project, selections: List[RoomSelection]):
    """Swap the project's room rows for the given selections (no commit)."""
    project.rooms.clear()
    for selection in selections:
        project.rooms.append(models.ProjectRoom(
            room_type=selection.type,
            custom_name=selection.custom_name,
            quantity=selection.quantity,
            floor=selection.floor,
            area_m2=get_room_config_or_default(selection.type).default_area_m2,
        ))
    db.flush()


def has_stored_layout(project: models.Project) -> bool:
    """True once a layout was saved, even an empty one."""
    return project.floor_plan_layout is not None


def load_floor_plan(project: models.Project) -> Tuple[List[PlacedRoom], Optional[str]]:
    """
    Read the stored layout of a project.

    Returns:
        (layout, background image url); empty layout when nothing is stored

    Raises:
        InvalidLayoutError: stored JSON is corrupt
    """
    if not project.floor_plan_layout:
        return [], project.floor_plan_image_url

    try:
        data = json.loads(project.floor_plan_layout)
    except json.JSONDecodeError as e:
        logger.error(f"Corrupt floor plan layout on project {project.id}: {e}")
        raise InvalidLayoutError(f"Stored layout for project {project.id} is not valid JSON")

    return layout_from_dicts(data), project.floor_plan_image_url


def save_floor_plan(
    db: Session,
    project: models.Project,
    layout: List[PlacedRoom],
    image_url: Optional[str] = None,
    sync_rooms: bool = True
) -> models.Project:
    """
    Persist a layout snapshot on the project.

    Args:
        db: Database session (committed here)
        project: Owning project
        layout: Placed rooms to store
        image_url: Backdrop URL; None keeps the current one
        sync_rooms: Rebuild project rooms from the layout's room types
            (an empty layout leaves the project without rooms)
    """
    project.floor_plan_layout = json.dumps(layout_to_dicts(layout), ensure_ascii=False)
    if image_url is not None:
        project.floor_plan_image_url = image_url or None

    if sync_rooms:
        replace_project_rooms(db, project, group_by_type(layout))

    db.commit()
    db.refresh(project)
    logger.info(f"Saved floor plan for project {project.id}: {len(layout)} rooms")
    return project


def make_layout_sink(
    session_factory: Callable[[], Session],
    project_id: int
) -> Callable[[List[PlacedRoom]], None]:
    """
    Build a LayoutChangeNotifier sink that writes snapshots to one project.

    Each delivery uses its own short-lived session.
    """
    def sink(layout: List[PlacedRoom]):
        db = session_factory()
        try:
            project = get_project(db, project_id)
            if project is None:
                logger.warning(f"Project {project_id} vanished; layout change dropped")
                return
            save_floor_plan(db, project, layout)
        finally:
            db.close()

    return sink
