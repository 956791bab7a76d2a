# facereader/uploads.py
import os
import re
import uuid
import logging
from dataclasses import dataclass
from typing import Optional
from fastapi import File, UploadFile

from .config import settings
from .exceptions import UploadRejectedError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w.\-]+", re.UNICODE)


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


def check_image_type(filename: str, content_type: Optional[str]) -> None:
    """Both the declared MIME type and the file extension must be allowed."""
    ext = os.path.splitext(filename or "")[1].lower()
    mime_ok = (content_type or "").lower() in settings.ALLOWED_IMAGE_TYPES
    ext_ok = ext in settings.ALLOWED_IMAGE_EXTENSIONS
    if not (mime_ok and ext_ok):
        raise UploadRejectedError(
            f"Only JPEG and PNG images are allowed (got {content_type or 'unknown type'}, "
            f"extension {ext or 'none'})",
            status_code=415,
        )


def make_storage_key(filename: str) -> str:
    """Build a collision resistant blob key: ``<uuid4>-<sanitized stem><ext>``."""
    base = os.path.basename((filename or "").replace("\\", "/"))
    stem, ext = os.path.splitext(base)
    stem = _UNSAFE_CHARS.sub("_", stem).strip("._") or "image"
    ext = _UNSAFE_CHARS.sub("", ext).lower()
    return f"{uuid.uuid4()}-{stem}{ext}"


async def read_image_upload(image: Optional[UploadFile] = File(None)) -> Optional[ImageUpload]:
    """Upload layer for the single ``image`` field; runs before the handler body."""
    if image is None or not image.filename:
        return None

    check_image_type(image.filename, image.content_type)

    data = await image.read()
    if len(data) > settings.MAX_FILE_SIZE:
        raise UploadRejectedError(
            f"File too large (max {settings.MAX_FILE_SIZE // (1024*1024)}MB)",
            status_code=413,
        )

    logger.info(f"[Upload] Image received: {image.filename}, MIME: {image.content_type}, {len(data)} bytes")
    return ImageUpload(filename=image.filename, content_type=image.content_type, data=data)
