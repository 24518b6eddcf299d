# backend/app/services/background_image.py
# Background image intake for photo-traced floor plans
#
# The image is only a backdrop under the drawn rooms. It is checked, probed
# for its pixel size and handed back as a data URL; storage is someone else's job.

from typing import Optional
from dataclasses import dataclass
from io import BytesIO
import base64
import logging

from PIL import Image, UnidentifiedImageError

from ..config import MAX_BACKGROUND_IMAGE_SIZE
from ..exceptions import InvalidImageError

logger = logging.getLogger(__name__)

NOT_AN_IMAGE_MESSAGE = "Please upload an image (JPG, PNG, etc.)"

# Vector formats Pillow cannot decode; accepted on MIME type alone
UNDECODED_IMAGE_TYPES = {'image/svg+xml'}


@dataclass(frozen=True)
class BackgroundImage:
    """Reference to a decoded backdrop image."""
    url: str
    content_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_dict(self):
        return {
            'url': self.url,
            'content_type': self.content_type,
            'width': self.width,
            'height': self.height,
        }


def is_image_content_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.split(';')[0].strip().lower().startswith('image/')


def load_background_image(
    data: bytes,
    content_type: Optional[str],
    max_size: int = MAX_BACKGROUND_IMAGE_SIZE
) -> BackgroundImage:
    """
    Validate uploaded bytes and turn them into a BackgroundImage.

    Args:
        data: Raw file content
        content_type: MIME type reported by the client
        max_size: Upper bound in bytes

    Returns:
        BackgroundImage with a data URL and pixel size

    Raises:
        InvalidImageError: not an image/* MIME type, empty, too large or undecodable
    """
    if not is_image_content_type(content_type):
        logger.info(f"Rejected background upload with content type {content_type!r}")
        raise InvalidImageError(NOT_AN_IMAGE_MESSAGE)

    if not data:
        raise InvalidImageError("Image file is empty")

    if len(data) > max_size:
        raise InvalidImageError(
            f"Image too large. Maximum size: {max_size // (1024 * 1024)}MB"
        )

    mime = content_type.split(';')[0].strip().lower()
    width = height = None

    if mime not in UNDECODED_IMAGE_TYPES:
        try:
            img = Image.open(BytesIO(data))
            width, height = img.size
            img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            logger.warning(f"Could not decode background image ({mime}): {e}")
            raise InvalidImageError(NOT_AN_IMAGE_MESSAGE)

    encoded = base64.b64encode(data).decode('ascii')
    logger.info(f"Accepted background image {mime} {width}x{height}, {len(data)} bytes")

    return BackgroundImage(
        url=f"data:{mime};base64,{encoded}",
        content_type=mime,
        width=width,
        height=height,
    )
