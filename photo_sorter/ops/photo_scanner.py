"""Directory scanning for image files.

Lists the immediate children of a folder whose extension is in the image
allow-list. No decoding happens here; the UI loads the files itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from photo_sorter.errors import InvalidPathError, ReadError
from photo_sorter.logger import get_logger

_logger = get_logger("photo_scanner")

PHOTO_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "tiff", "tif", "webp"})

_SIZE_UNITS = ("B", "KB", "MB", "GB")
_SIZE_STEP = 1024


@dataclass(frozen=True)
class PhotoInfo:
    name: str
    path: str
    size: int

    def to_dict(self) -> dict[str, Any]:
        """QML-friendly mapping (QVariantMap)."""
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "sizeText": format_file_size(self.size),
        }


def is_photo_file(name: str) -> bool:
    """Return True when ``name`` carries an allowed image extension (case-insensitive)."""
    # splitext treats a leading dot as part of the name, so ".jpg" has no extension
    ext = os.path.splitext(name)[1]
    return bool(ext) and ext[1:].lower() in PHOTO_EXTENSIONS


def format_file_size(num_bytes: int) -> str:
    """Human-readable size, e.g. ``1.5 KB``."""
    size = float(num_bytes)
    unit_index = 0
    while size >= _SIZE_STEP and unit_index < len(_SIZE_UNITS) - 1:
        size /= _SIZE_STEP
        unit_index += 1
    return f"{size:.1f} {_SIZE_UNITS[unit_index]}"


def load_photos_from_directory(directory_path: str) -> list[PhotoInfo]:
    """List image files directly inside ``directory_path``.

    Results are in filesystem enumeration order (not sorted). Entries that
    fail individually (vanished file, unreadable metadata) are skipped.

    Raises:
        InvalidPathError: path does not exist or is not a directory.
        ReadError: the directory could not be listed.
    """
    if not os.path.isdir(directory_path):
        raise InvalidPathError(f"Invalid directory path: {directory_path}")

    photos: list[PhotoInfo] = []
    try:
        it = os.scandir(directory_path)
    except OSError as e:
        _logger.warning("scan failed: %s -> %s", directory_path, e)
        raise ReadError(f"Failed to read directory: {e}") from e

    skipped = 0
    with it:
        while True:
            try:
                entry = next(it)
            except StopIteration:
                break
            except OSError as e:
                # The iterator cannot resume after a read error.
                _logger.debug("directory read stopped early: %s -> %s", directory_path, e)
                break

            if not is_photo_file(entry.name):
                continue
            try:
                if not entry.is_file():
                    continue
                size = entry.stat().st_size
            except OSError as e:
                skipped += 1
                _logger.debug("skipping unreadable entry: %s -> %s", entry.path, e)
                continue
            photos.append(PhotoInfo(name=entry.name, path=entry.path, size=size))

    _logger.debug("scan complete: %s (%d photos, %d skipped)", directory_path, len(photos), skipped)
    return photos
