"""Object storage for avatar images."""

import re
from pathlib import Path
from uuid import uuid4

import structlog

from ..errors import BackendError

logger = structlog.get_logger(__name__)

ALLOWED_IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp"}
MAX_AVATAR_BYTES = 5 * 1024 * 1024


class AvatarStorage:
    """Stores uploaded avatars on disk and hands back their public URL."""

    def __init__(self, directory: Path, url_prefix: str = "/avatars"):
        self.directory = directory
        self.url_prefix = url_prefix.rstrip("/")

    async def upload(self, user_id: str, filename: str, content: bytes) -> str:
        """Store an image and return the URL it is served from."""
        suffix = Path(filename).suffix.lower()
        if suffix not in ALLOWED_IMAGE_SUFFIXES:
            raise ValueError(f"Unsupported image type: {suffix or 'none'}")
        if not content:
            raise ValueError("Uploaded file is empty")
        if len(content) > MAX_AVATAR_BYTES:
            raise ValueError("Avatar images must be 5 MB or smaller")

        safe_user = re.sub(r"[^A-Za-z0-9_-]", "_", user_id)
        object_name = f"{safe_user}-{uuid4().hex[:12]}{suffix}"

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            (self.directory / object_name).write_bytes(content)
        except OSError as e:
            raise BackendError(f"Could not store avatar: {e}") from e

        logger.info("avatar_stored", user_id=user_id, object_name=object_name, size=len(content))
        return f"{self.url_prefix}/{object_name}"
