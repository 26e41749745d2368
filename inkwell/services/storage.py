"""Local blob storage for post cover images, served back under /uploads."""

import logging
import os
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import UploadFile

from inkwell.core.exceptions import InvalidUpload, StoreError

if TYPE_CHECKING:
    from inkwell.core.config import Settings

logger = logging.getLogger(__name__)

# URL prefix the upload directory is mounted at; stored cover paths start with it.
PUBLIC_PREFIX = "uploads"


class CoverStorage:
    """Stores cover uploads under a random name and returns the public relative path."""

    def __init__(
        self,
        upload_dir: str | Path,
        allowed_extensions: list[str],
        max_bytes: int,
    ) -> None:
        self.root = Path(upload_dir)
        self.allowed_extensions = frozenset(ext.lower() for ext in allowed_extensions)
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: "Settings") -> "CoverStorage":
        return cls(
            settings.UPLOAD_DIR,
            settings.ALLOWED_COVER_EXTENSIONS,
            settings.MAX_COVER_BYTES,
        )

    def save(self, upload: UploadFile) -> str:
        """
        Persist the uploaded file and return its path (e.g. "uploads/<hex>.png").

        Raises InvalidUpload for a disallowed extension, an empty file or one
        larger than max_bytes; StoreError if the file cannot be written.
        """
        ext = Path(upload.filename or "").suffix.lower()
        if ext not in self.allowed_extensions:
            allowed = ", ".join(sorted(self.allowed_extensions))
            raise InvalidUpload(f"Cover must be one of: {allowed}")

        data = upload.file.read(self.max_bytes + 1)
        if not data:
            raise InvalidUpload("Cover file is empty")
        if len(data) > self.max_bytes:
            raise InvalidUpload(
                f"Cover must not exceed {self.max_bytes // 1024} KB"
            )

        name = f"{uuid.uuid4().hex}{ext}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            (self.root / name).write_bytes(data)
        except OSError as e:
            raise StoreError("Failed to store cover image", cause=e) from e
        logger.info("Stored cover image", extra={"cover_name": name, "size_bytes": len(data)})
        return f"{PUBLIC_PREFIX}/{name}"

    def discard(self, path: str) -> None:
        """Remove a stored cover that no post references any more."""
        target = self.root / Path(path).name
        try:
            target.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove orphaned cover", extra={"cover_path": path})

    def is_writable(self) -> bool:
        """True when the upload directory exists (or can be created) and accepts writes."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.root, os.W_OK)
