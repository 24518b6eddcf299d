# backend/app/routers/rooms.py
# Room catalog endpoints

from fastapi import APIRouter, HTTPException, status
from typing import List

from .. import schemas
from ..services.room_catalog import get_room_config_or_default, is_known_room_type, list_room_types

router = APIRouter(prefix="/api/v1/rooms", tags=["rooms"])


@router.get("/catalog", response_model=List[schemas.RoomTypeResponse])
async def get_catalog():
    """All room types a plan can contain, in display order."""
    return [config.to_dict() for config in list_room_types()]


@router.get("/catalog/{room_type}", response_model=schemas.RoomTypeResponse)
async def get_catalog_entry(room_type: str):
    """Single catalog entry."""
    if not is_known_room_type(room_type):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown room type: {room_type}"
        )
    return get_room_config_or_default(room_type).to_dict()
