"""
Local photo storage: originals, JPEG thumbnails and EXIF metadata.
"""
import io
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import exifread
from PIL import Image, ImageOps, UnidentifiedImageError

from tripjournal.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

PHOTOS_DIR = "photos"
THUMBNAILS_DIR = "thumbnails"

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/heic": ".heic",
}


@dataclass
class StoredPhoto:
    """Paths are relative to the storage root."""
    local_path: str
    thumbnail_path: str
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


def _to_degrees(values) -> float:
    return (
        float(values[0].num) / values[0].den
        + float(values[1].num) / values[1].den / 60
        + float(values[2].num) / values[2].den / 3600
    )


def read_exif(content: bytes) -> Tuple[Optional[datetime], Optional[float], Optional[float]]:
    """Capture time and GPS position from EXIF, best effort."""
    try:
        tags = exifread.process_file(io.BytesIO(content), details=False)
    except Exception as e:
        logger.debug(f"EXIF parsing failed: {e}")
        return None, None, None

    taken_at = None
    raw_date = tags.get("EXIF DateTimeOriginal") or tags.get("Image DateTime")
    if raw_date:
        try:
            taken_at = datetime.strptime(str(raw_date), "%Y:%m:%d %H:%M:%S")
        except ValueError:
            logger.debug(f"Unrecognized EXIF date: {raw_date}")

    latitude = longitude = None
    if "GPS GPSLatitude" in tags and "GPS GPSLongitude" in tags:
        try:
            latitude = _to_degrees(tags["GPS GPSLatitude"].values)
            longitude = _to_degrees(tags["GPS GPSLongitude"].values)
            if str(tags.get("GPS GPSLatitudeRef", "N")) != "N":
                latitude = -latitude
            if str(tags.get("GPS GPSLongitudeRef", "E")) != "E":
                longitude = -longitude
        except (IndexError, ZeroDivisionError, AttributeError):
            latitude = longitude = None

    return taken_at, latitude, longitude


class PhotoStorage:
    """Writes uploads under `root/photos` and thumbnails under `root/thumbnails`."""

    def __init__(self, root: Path, thumbnail_size: int = 400, thumbnail_quality: int = 80):
        self.root = Path(root)
        self.thumbnail_size = thumbnail_size
        self.thumbnail_quality = thumbnail_quality

    def save(self, content: bytes, content_type: str) -> StoredPhoto:
        """Store an uploaded image and its thumbnail."""
        name = uuid.uuid4().hex
        extension = _EXTENSIONS.get(content_type, ".jpg")
        local_path = f"{PHOTOS_DIR}/{name}{extension}"
        thumbnail_path = f"{THUMBNAILS_DIR}/{name}.jpg"

        original = self.root / local_path
        original.parent.mkdir(parents=True, exist_ok=True)
        original.write_bytes(content)

        try:
            self._make_thumbnail(content, self.root / thumbnail_path)
        except (UnidentifiedImageError, OSError) as e:
            original.unlink(missing_ok=True)
            logger.warning(f"Rejected upload that is not a readable image: {e}")
            raise ValidationError("Invalid image file")

        taken_at, latitude, longitude = read_exif(content)
        return StoredPhoto(
            local_path=local_path,
            thumbnail_path=thumbnail_path,
            taken_at=taken_at,
            latitude=latitude,
            longitude=longitude,
        )

    def _make_thumbnail(self, content: bytes, thumb_path: Path) -> None:
        thumb_path.parent.mkdir(parents=True, exist_ok=True)
        with Image.open(io.BytesIO(content)) as im:
            im = ImageOps.exif_transpose(im)
            im.thumbnail((self.thumbnail_size, self.thumbnail_size), Image.LANCZOS)
            if im.mode == "RGBA":
                bg = Image.new("RGB", im.size, (255, 255, 255))
                bg.paste(im, mask=im.split()[3])
                im = bg
            elif im.mode != "RGB":
                im = im.convert("RGB")
            im.save(thumb_path, "JPEG", quality=self.thumbnail_quality, optimize=True)

    def delete(self, *relative_paths: Optional[str]) -> None:
        """Remove stored files; missing files are ignored."""
        for relative_path in relative_paths:
            if not relative_path:
                continue
            try:
                (self.root / relative_path).unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not delete {relative_path}: {e}")
