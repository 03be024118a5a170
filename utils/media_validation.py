"""Validation helpers for uploaded images."""

from typing import Any, Tuple

from starlette.datastructures import UploadFile

from utils.errors import PayloadTooLarge, ValidationError

DEFAULT_IMAGE_TYPE = "image/jpeg"
NO_IMAGE_MESSAGE = "No image uploaded"


async def read_image_upload(image: Any, max_bytes: int) -> Tuple[bytes, str]:
    """Read an uploaded image, enforcing presence and the size limit.

    Args:
        image: The form value sent under the image field. Anything other than
            an uploaded file (None, a plain text value) counts as missing.
        max_bytes: Largest accepted payload in bytes.

    Returns:
        A tuple of `(image_bytes, media_type)`; media type defaults to JPEG.

    Raises:
        ValidationError: If no file (or an empty file) was uploaded.
        PayloadTooLarge: If the payload exceeds `max_bytes`.
    """
    if not isinstance(image, UploadFile) or not image.filename:
        raise ValidationError(NO_IMAGE_MESSAGE, envelope=False)

    # At most one byte past the limit is read.
    data = await image.read(max_bytes + 1)
    if not data:
        raise ValidationError(NO_IMAGE_MESSAGE, envelope=False)
    if len(data) > max_bytes:
        raise PayloadTooLarge(f"Image exceeds the {max_bytes} byte upload limit", envelope=False)

    media_type = (image.content_type or "").split(";", 1)[0].strip() or DEFAULT_IMAGE_TYPE
    return data, media_type
