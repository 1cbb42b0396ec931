"""
Animal Catalog Backend — Image Storage Service
================================================

What:  Stores uploaded animal images on local disk and resolves them for serving.
How:   Checks the upload size, writes the bytes with aiofiles under a
       collision-resistant name, and maps stored files to the public URL
       prefix /uploads/animals.
Who:   Called by the upload dependency (size check), AnimalService (store and
       cleanup) and the uploads route (serving).

Storage Layout:
    <upload_root>/
    └── animals/
        ├── 1718000000123456789-iguana.png
        └── 1718000000987654321-gecko.jpg

    URL /uploads/animals/<name> maps 1:1 to <upload_root>/animals/<name>.

Filename Scheme:
    <time.time_ns()>-<original base name>
    Only the base name of the client-supplied filename is kept, so the stored
    file always lands directly inside the animals directory.
"""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import quote

import aiofiles

from animal_catalog.config import settings
from animal_catalog.exceptions import FileStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Public URL prefix; mirrors the on-disk "animals" directory
ANIMAL_IMAGE_URL_PREFIX = "/uploads/animals"
ANIMAL_IMAGE_SUBDIR = "animals"
DEFAULT_UPLOAD_NAME = "upload"


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image that already passed the size check."""
    filename: Optional[str]
    content: bytes
    content_type: Optional[str] = None


class FileService:
    """
    Manages the lifecycle of uploaded animal images.

    Lifecycle of an uploaded file:
        1. Upload dependency calls validate_size() before the handler runs
        2. AnimalService calls store_image() once the request is otherwise valid
        3. If the database insert fails, AnimalService calls cleanup_file()
        4. GET /uploads/animals/<name> calls resolve_image() to serve it
    """

    def __init__(self, upload_root: Optional[str] = None, max_size: Optional[int] = None):
        """
        Args:
            upload_root: Override the default upload root (used in tests).
            max_size: Override the maximum upload size in bytes.
        """
        root = Path(upload_root or settings.upload_root).resolve()
        self.image_dir = root / ANIMAL_IMAGE_SUBDIR
        self.max_size = max_size or settings.max_upload_size
        self.ensure_storage()
        logger.info("FileService initialized with image_dir=%s", self.image_dir)

    def ensure_storage(self) -> Path:
        """Create the image directory if it is missing. Idempotent."""
        self.image_dir.mkdir(parents=True, exist_ok=True)
        return self.image_dir

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Reject uploads above the configured maximum.

        Args:
            content_length: Size reported for the upload part (may be None)
            actual_size: Byte count actually received

        Raises:
            ValidationError with a human-readable limit message
        """
        max_mb = self.max_size / (1024 * 1024)

        if content_length and content_length > self.max_size:
            raise ValidationError(
                message=f"File too large. Maximum upload size is {max_mb:g}MB.",
                field="image",
                context={"max_size_bytes": self.max_size, "reported_size": content_length},
            )

        if actual_size > self.max_size:
            raise ValidationError(
                message=f"File too large. Maximum upload size is {max_mb:g}MB.",
                field="image",
                context={"max_size_bytes": self.max_size, "actual_size": actual_size},
            )

    @staticmethod
    def build_filename(original_name: Optional[str]) -> str:
        """
        Prefix the original base name with a nanosecond timestamp.

        Example: "photos/iguana.png" → "1718000000123456789-iguana.png"
        """
        base = Path((original_name or "").replace("\\", "/")).name
        if base in ("", ".", ".."):
            base = DEFAULT_UPLOAD_NAME
        return f"{time.time_ns()}-{base}"

    @staticmethod
    def public_url(filename: str) -> str:
        """Percent-encoded URL path; the router decodes it back to `filename`."""
        return f"{ANIMAL_IMAGE_URL_PREFIX}/{quote(filename)}"

    async def store_image(self, original_name: Optional[str], content: bytes) -> Tuple[str, str]:
        """
        Write image bytes to disk.

        Returns:
            Tuple of (absolute_path, public_url)

        Raises:
            FileStorageError if directory creation or file write fails.
        """
        filename = self.build_filename(original_name)
        absolute_path = self.image_dir / filename

        try:
            self.ensure_storage()
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("Image stored: %s (%d bytes)", filename, len(content))
        return str(absolute_path), self.public_url(filename)

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a stored file after a failed insert. Best-effort: a missing
        file is ignored and other failures are logged, never raised.
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
            else:
                logger.debug("Cleanup: file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))

    def resolve_image(self, filename: str) -> Path:
        """
        Map a public filename to the stored file.

        Raises:
            ValidationError: the path escapes the image directory
            NotFoundError: no such stored file
        """
        image_dir = self.image_dir.resolve()
        full_path = (image_dir / filename).resolve()

        if full_path.parent != image_dir:
            raise ValidationError(message="Invalid file path", field="filename")

        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=filename)

        return full_path


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
