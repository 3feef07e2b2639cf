"""Local file storage for profile pictures."""
from __future__ import annotations

import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Optional

from bingekaro.config import AVATAR_CONTENT_TYPES
from bingekaro.errors import ValidationError
from bingekaro.settings import settings

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"


def _upload_dir() -> Path:
    path = settings.upload_dir
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_avatar(content: bytes, content_type: Optional[str]) -> str:
    """Write an uploaded image to the upload directory and return its filename."""
    extension = AVATAR_CONTENT_TYPES.get((content_type or "").lower())
    if extension is None:
        raise ValidationError("avatar", "Only JPEG, PNG, GIF and WebP images are allowed")
    if not content:
        raise ValidationError("avatar", "No file uploaded")
    if len(content) > settings.max_avatar_bytes:
        raise ValidationError("avatar", "File too large")

    dest_dir = _upload_dir()
    filename = f"avatar-{uuid.uuid4().hex}{extension}"
    final_path = dest_dir / filename

    fd, tmp_name = tempfile.mkstemp(prefix=filename + ".", dir=str(dest_dir))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(str(tmp_path), str(final_path))
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.info(f"Stored avatar {filename} ({len(content)} bytes)")
    return filename


def delete_avatar(filename: Optional[str]) -> None:
    """Remove a stored avatar; missing files are ignored."""
    if not filename:
        return
    path = _upload_dir() / Path(filename).name
    path.unlink(missing_ok=True)
    logger.info(f"Deleted avatar {filename}")


def avatar_url(filename: Optional[str]) -> Optional[str]:
    """Public URL path for a stored avatar."""
    if not filename:
        return None
    return f"{UPLOAD_URL_PREFIX}/{filename}"
