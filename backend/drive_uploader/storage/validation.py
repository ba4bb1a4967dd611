"""
Media type checks for incoming parts.

Only the declared Content-Type is inspected; file bytes are not sniffed.
"""
from typing import Iterable, Optional

from starlette.datastructures import UploadFile

from drive_uploader.exceptions import InvalidFileTypeError

IMAGE_TYPE_PREFIX = "image/"


def is_image_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith(IMAGE_TYPE_PREFIX)


def validate_content_type(content_type: Optional[str]) -> None:
    """Raise InvalidFileTypeError unless the declared type is an image type."""
    if not is_image_type(content_type):
        raise InvalidFileTypeError()


def validate_parts(parts: Iterable[UploadFile]) -> None:
    """
    Validate every part before any of them is staged.

    A single non-image part rejects the whole request.
    """
    for part in parts:
        validate_content_type(part.content_type)
