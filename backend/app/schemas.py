from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime

from .config import CANVAS_W, CANVAS_H, GRID, MIN_SIZE, LAYOUT_JITTER, LAYOUT_SEED
from .services.layout_types import PlacedRoom, RoomSelection
from .validators import FloorPlanValidators


# Room Schemas
class RoomSelectionSchema(BaseModel):
    type: str = Field(..., min_length=1, max_length=50)
    quantity: int = Field(..., ge=1, le=50)
    custom_name: Optional[str] = Field(None, max_length=255)
    floor: int = Field(0, ge=0, le=10)
    
    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        FloorPlanValidators.validate_room_type(v)
        return v
    
    def to_selection(self) -> RoomSelection:
        return RoomSelection(
            type=self.type,
            quantity=self.quantity,
            custom_name=self.custom_name,
            floor=self.floor
        )
    
    @classmethod
    def from_selection(cls, selection: RoomSelection) -> "RoomSelectionSchema":
        return cls(
            type=selection.type,
            quantity=selection.quantity,
            custom_name=selection.custom_name,
            floor=selection.floor
        )

class RoomTypeResponse(BaseModel):
    type: str
    label: str
    icon: str
    color: str
    default_area_m2: float

class PlacedRoomSchema(BaseModel):
    id: str = Field(..., min_length=1, max_length=100)
    type: str
    label: str
    icon: str
    color: str
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    w: int = Field(..., ge=1)
    h: int = Field(..., ge=1)
    
    model_config = ConfigDict(from_attributes=True)
    
    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        FloorPlanValidators.validate_room_type(v)
        return v
    
    def to_placed_room(self) -> PlacedRoom:
        return PlacedRoom(**self.model_dump())


def _unique_room_ids(layout: List[PlacedRoomSchema]) -> List[PlacedRoomSchema]:
    FloorPlanValidators.validate_unique_ids(room.id for room in layout)
    return layout


# Layout Schemas
class CanvasInfo(BaseModel):
    width: int = CANVAS_W
    height: int = CANVAS_H
    grid: int = GRID
    min_size: int = MIN_SIZE

class GenerateLayoutRequest(BaseModel):
    rooms: List[RoomSelectionSchema]
    seed: Optional[int] = LAYOUT_SEED
    jitter: float = Field(LAYOUT_JITTER, ge=0, le=1)
    
    @field_validator('rooms')
    @classmethod
    def validate_rooms(cls, v):
        FloorPlanValidators.validate_unique_types(room.type for room in v)
        return v

class LayoutRequest(BaseModel):
    layout: List[PlacedRoomSchema]
    
    @field_validator('layout')
    @classmethod
    def validate_layout(cls, v):
        return _unique_room_ids(v)

class LayoutResponse(BaseModel):
    layout: List[PlacedRoomSchema]
    rooms: List[RoomSelectionSchema]
    canvas: CanvasInfo = CanvasInfo()

class OverlapSchema(BaseModel):
    room_a: str
    room_b: str
    area: float

class LayoutValidationResponse(BaseModel):
    valid: bool
    room_count: int
    out_of_bounds: List[str]
    undersized: List[str]
    off_grid: List[str]
    overlaps: List[OverlapSchema]

class BackgroundImageResponse(BaseModel):
    url: str
    content_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


# Project Schemas
class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    rooms: List[RoomSelectionSchema] = []
    
    @field_validator('rooms')
    @classmethod
    def validate_rooms(cls, v):
        FloorPlanValidators.validate_unique_types(room.type for room in v)
        return v

class ProjectRoomResponse(BaseModel):
    room_type: str
    quantity: int
    custom_name: Optional[str] = None
    floor: int = 0
    area_m2: Optional[float] = None
    
    model_config = ConfigDict(from_attributes=True)

class ProjectResponse(BaseModel):
    id: int
    name: str
    status: str
    floor_plan_image_url: Optional[str] = None
    rooms: List[ProjectRoomResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    model_config = ConfigDict(from_attributes=True)


# Floor Plan Schemas
class FloorPlanSave(BaseModel):
    layout: List[PlacedRoomSchema]
    image_url: Optional[str] = None
    
    @field_validator('layout')
    @classmethod
    def validate_layout(cls, v):
        FloorPlanValidators.validate_rooms_in_canvas(v)
        return _unique_room_ids(v)

class FloorPlanResponse(BaseModel):
    project_id: int
    layout: List[PlacedRoomSchema]
    rooms: List[RoomSelectionSchema]
    image_url: Optional[str] = None
    validation: Optional[LayoutValidationResponse] = None
