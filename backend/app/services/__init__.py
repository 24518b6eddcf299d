# backend/app/services/__init__.py
# Floor plan layout services

from .room_catalog import (
    get_room_config,
    get_room_config_or_default,
    is_known_room_type,
    list_room_types,
    RoomTypeConfig,
    ROOM_CATALOG,
    FALLBACK_ROOM_TYPE
)

from .geometry import (
    Rect,
    snap,
    clamp,
    align_rect,
    normalize_rect,
    rect_in_canvas,
    rect_on_grid,
    rects_overlap,
    get_overlap_area,
    find_overlaps
)

from .layout_types import (
    RoomSelection,
    PlacedRoom,
    DraftRoom,
    layout_snapshot,
    layout_to_dicts,
    layout_from_dicts,
    group_by_type,
    validate_layout
)

from .layout_generator import (
    expand_selections,
    generate_layout
)

from .canvas_transform import (
    BoundingBox,
    CanvasPoint,
    client_to_canvas,
    canvas_to_client
)

from .drag_controller import (
    DragMode,
    DragInfo,
    DragResizeController,
    compute_drag_rect,
    hit_test
)

from .background_image import (
    BackgroundImage,
    load_background_image,
    is_image_content_type
)

from .rect_capture import (
    CaptureStep,
    CaptureResult,
    RectCaptureWorkflow,
    PhotoTraceWorkflow
)

from .layout_notifier import (
    LayoutChangeNotifier,
    AsyncioScheduler
)

from .floor_plan_editor import FloorPlanEditor

from .svg_renderer import render_layout_svg

__all__ = [
    # Room catalog
    'get_room_config',
    'get_room_config_or_default',
    'is_known_room_type',
    'list_room_types',
    'RoomTypeConfig',
    'ROOM_CATALOG',
    'FALLBACK_ROOM_TYPE',
    
    # Geometry
    'Rect',
    'snap',
    'clamp',
    'align_rect',
    'normalize_rect',
    'rect_in_canvas',
    'rect_on_grid',
    'rects_overlap',
    'get_overlap_area',
    'find_overlaps',
    
    # Layout types
    'RoomSelection',
    'PlacedRoom',
    'DraftRoom',
    'layout_snapshot',
    'layout_to_dicts',
    'layout_from_dicts',
    'group_by_type',
    'validate_layout',
    
    # Auto-layout
    'expand_selections',
    'generate_layout',
    
    # Pointer input
    'BoundingBox',
    'CanvasPoint',
    'client_to_canvas',
    'canvas_to_client',
    'DragMode',
    'DragInfo',
    'DragResizeController',
    'compute_drag_rect',
    'hit_test',
    
    # Capture
    'BackgroundImage',
    'load_background_image',
    'is_image_content_type',
    'CaptureStep',
    'CaptureResult',
    'RectCaptureWorkflow',
    'PhotoTraceWorkflow',
    
    # Editing session
    'LayoutChangeNotifier',
    'AsyncioScheduler',
    'FloorPlanEditor',
    'render_layout_svg',
]
