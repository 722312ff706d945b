"""
Storage Service for generated image files.
Writes rendered images to a flat directory, lists them back and builds their URLs.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Union
from urllib.parse import quote

from config import IMAGES_DIR, PUBLIC_BASE_URL
from services.filename_service import IMAGE_EXTENSION

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service class for image file storage.
    The directory listing is the only index; there is no database.
    """

    def __init__(
        self,
        images_dir: Union[str, Path] = IMAGES_DIR,
        base_url: str = PUBLIC_BASE_URL,
    ):
        """
        Initialize storage service.

        Args:
            images_dir: Directory generated images are written to
            base_url: Base URL for generating file URLs
        """
        self.images_dir = Path(images_dir)
        self.base_url = base_url.rstrip("/")

    def ensure_directory(self):
        """Create the images directory (and parents) if it doesn't exist."""
        self.images_dir.mkdir(parents=True, exist_ok=True)

    def get_image_url(self, filename: str) -> str:
        """
        Generate URL for an image file.

        Args:
            filename: Name of the image file

        Returns:
            Percent-encoded URL for accessing the image
        """
        return f"{self.base_url}/images/{quote(filename)}"

    def save_image(self, filename: str, data: bytes) -> Path:
        """
        Write image bytes into the images directory.

        The bytes go to a temporary sibling first and are renamed into place,
        so a listed image is never a partial write.

        Args:
            filename: Bare filename (no directory components)
            data: Encoded image bytes

        Returns:
            Path to the saved image
        """
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            raise ValueError(f"Invalid image filename: {filename!r}")

        self.ensure_directory()

        dest_path = self.images_dir / filename
        tmp_path = dest_path.with_name(f".{filename}.tmp")
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
            os.replace(tmp_path, dest_path)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise

        logger.debug("Saved %s (%d bytes)", dest_path, len(data))
        return dest_path

    def list_images(self) -> List[Dict]:
        """
        List all stored images, newest first.

        Returns:
            List of {filename, url, created, size} dictionaries
        """
        if not self.images_dir.exists():
            return []

        entries = []
        for path in self.images_dir.iterdir():
            if not path.is_file() or path.suffix.lower() != IMAGE_EXTENSION:
                continue
            stat = path.stat()
            entries.append((stat.st_mtime, path.name, stat.st_size))

        entries.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)

        return [
            {
                "filename": name,
                "url": self.get_image_url(name),
                "created": datetime.fromtimestamp(mtime, tz=timezone.utc).isoformat(),
                "size": f"{size / 1024:.1f} KB",
            }
            for mtime, name, size in entries
        ]

