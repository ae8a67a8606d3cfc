"""Service for storing uploaded puzzle images on local disk."""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

from app.config import settings

logger = logging.getLogger(__name__)


class InvalidImageError(ValueError):
    """Uploaded content is not a readable image."""


class ImageStorage:
    """Keeps uploaded puzzle images under the upload directory."""

    def __init__(self, upload_dir: Optional[Path] = None) -> None:
        """Initialize storage service."""
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self._paths: Dict[str, Path] = {}

    def save(self, puzzle_id: str, content: bytes) -> Path:
        """Store image bytes and return the file path.

        Raises:
            InvalidImageError: If Pillow cannot identify the content.
        """
        os.makedirs(self.upload_dir, exist_ok=True)
        file_path = self.upload_dir / f"{puzzle_id}.img"
        with open(file_path, "wb") as f:
            f.write(content)

        try:
            with Image.open(file_path) as image:
                image.verify()
        except (UnidentifiedImageError, OSError) as e:
            os.remove(file_path)
            raise InvalidImageError(f"Invalid image file: {e}") from e

        self._paths[puzzle_id] = file_path
        logger.info("Stored puzzle image %s", file_path)
        return file_path

    def get_path(self, puzzle_id: str) -> Optional[Path]:
        """Path of a stored image, if it is still on disk."""
        path = self._paths.get(puzzle_id)
        if path is None or not path.exists():
            return None
        return path

    def open(self, puzzle_id: str) -> Optional[Image.Image]:
        """Load a stored image."""
        path = self.get_path(puzzle_id)
        if path is None:
            return None
        with Image.open(path) as image:
            return image.copy()


# Singleton instance
_image_storage: Optional[ImageStorage] = None


def get_image_storage() -> ImageStorage:
    """Get the singleton ImageStorage instance."""
    global _image_storage
    if _image_storage is None:
        _image_storage = ImageStorage()
    return _image_storage
