"""Tests for app/services/background_image.py."""
import base64

import pytest

from app.exceptions import InvalidImageError
from app.services.background_image import is_image_content_type, load_background_image
from conftest import png_bytes


def test_png_is_decoded_to_data_url():
    data = png_bytes(64, 48)
    image = load_background_image(data, "image/png")
    assert image.url.startswith("data:image/png;base64,")
    assert base64.b64decode(image.url.split(",", 1)[1]) == data
    assert (image.width, image.height) == (64, 48)


def test_jpeg_accepted():
    image = load_background_image(png_bytes(10, 10, fmt="JPEG"), "image/jpeg")
    assert image.content_type == "image/jpeg"
    assert image.width == 10


def test_svg_accepted_without_decoding():
    image = load_background_image(b"<svg xmlns='http://www.w3.org/2000/svg'/>", "image/svg+xml")
    assert image.width is None


@pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None, ""])
def test_non_image_mime_rejected(content_type):
    with pytest.raises(InvalidImageError, match="Please upload an image"):
        load_background_image(png_bytes(), content_type)


def test_garbage_with_image_mime_rejected():
    with pytest.raises(InvalidImageError):
        load_background_image(b"definitely not a png", "image/png")


def test_empty_and_oversized_rejected():
    with pytest.raises(InvalidImageError, match="empty"):
        load_background_image(b"", "image/png")
    with pytest.raises(InvalidImageError, match="too large"):
        load_background_image(png_bytes(), "image/png", max_size=10)


def test_is_image_content_type():
    assert is_image_content_type("image/png")
    assert is_image_content_type("IMAGE/JPEG; charset=binary")
    assert not is_image_content_type("application/octet-stream")
