"""Image upload validation and storage on the local filesystem."""

import re
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from storefront.shared import settings

logger = structlog.get_logger(__name__)

ALLOWED_IMAGE_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/bmp",
        "image/tiff",
        "image/heic",
        "image/avif",
        "image/apng",
    }
)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class IncomingFile:
    filename: str
    content_type: str | None
    data: bytes


def _safe_name(filename: str) -> str:
    # Keep only the basename so a crafted name cannot escape the upload directory
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "image"


def validate_images(files: list[IncomingFile]) -> list[str]:
    """Return one error message per rejected file (empty when all are acceptable)."""
    limit = settings.max_upload_bytes()
    errors = []
    for file in files:
        if len(file.data) > limit:
            errors.append(f"{file.filename} exceeds {limit // (1024 * 1024)}MB limit")
        elif file.content_type not in ALLOWED_IMAGE_TYPES:
            errors.append(f"{file.filename} is not a valid image file")
    return errors


def store_images(files: list[IncomingFile]) -> list[str]:
    """Validate and write every file. Nothing is written when any file is rejected.

    Returns the stored file names (``<uuid>_<original name>``), which are
    served under ``/uploads/``.
    """
    if not files:
        raise ValidationError({"files": ["No files uploaded!"]})

    errors = validate_images(files)
    if errors:
        raise ValidationError({"files": errors})

    target = Path(settings.upload_dir())
    target.mkdir(parents=True, exist_ok=True)

    stored = []
    for file in files:
        name = f"{uuid4()}_{_safe_name(file.filename)}"
        (target / name).write_bytes(file.data)
        stored.append(name)

    logger.info("upload.images_stored", count=len(stored))
    return stored
