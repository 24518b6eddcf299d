# backend/app/exceptions.py
"""Error types raised by the floor plan engine.

Everything derives from ``FloorPlanError`` (a ``ValueError``) so the API layer
can turn any of them into a 400 response with the message intact.
"""


class FloorPlanError(ValueError):
    """Base class for floor plan errors."""


class UnknownRoomTypeError(FloorPlanError):
    """Room type is not in the catalog."""

    def __init__(self, room_type: str):
        self.room_type = room_type
        super().__init__(f"Unknown room type: {room_type}")


class InvalidSelectionError(FloorPlanError):
    """Room selection has a bad quantity or shape."""


class InvalidLayoutError(FloorPlanError):
    """Layout payload cannot be turned into placed rooms."""


class InvalidImageError(FloorPlanError):
    """Uploaded background is not a usable image."""


class CanvasTransformError(FloorPlanError):
    """Canvas bounding box cannot map pointer coordinates."""


class GestureError(FloorPlanError):
    """Gesture started while another is active, or on a missing room."""


class CaptureStateError(FloorPlanError):
    """Capture workflow action is not allowed in the current step."""
