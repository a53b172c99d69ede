"""Common file operation utilities.

This module provides low-level *headless* file operations.

UI concerns (confirmation dialogs, prompts) must live in QML.
"""

import shutil
from pathlib import Path

from photo_sorter.errors import CopyError, NameExtractionError, SourceNotFoundError, TargetNotFoundError
from photo_sorter.logger import get_logger

_logger = get_logger("file_operations")


def generate_unique_filename(dest_dir: str, filename: str) -> str:
    """Return a destination path in ``dest_dir`` that does not exist yet.

    ``photo.jpg`` becomes ``photo_1.jpg``, ``photo_2.jpg``, ... on collision;
    names without an extension get a plain ``_N`` suffix.
    """
    dest = Path(dest_dir) / filename
    if not dest.exists():
        return str(dest)
    stem = dest.stem
    suffix = dest.suffix
    counter = 1
    while dest.exists():
        dest = Path(dest_dir) / f"{stem}_{counter}{suffix}"
        counter += 1

    return str(dest)


def copy_file(source_path: str, target_dir: str) -> str:
    """Copy a file into a destination directory without overwriting anything.

    Args:
        source_path: Source file path
        target_dir: Destination directory

    Returns:
        Target file path

    Raises:
        SourceNotFoundError: source is missing or not a regular file
        TargetNotFoundError: target directory is missing or not a directory
        NameExtractionError: no file name in ``source_path``
        CopyError: the copy itself failed
    """
    src_path = Path(source_path)
    if not src_path.is_file():
        raise SourceNotFoundError(f"Source file does not exist: {source_path}")

    dest_dir = Path(target_dir)
    if not dest_dir.is_dir():
        raise TargetNotFoundError(f"Target directory does not exist: {target_dir}")

    name = src_path.name
    if not name or name in (".", ".."):
        raise NameExtractionError(f"Could not determine file name from: {source_path}")

    target = generate_unique_filename(str(dest_dir), name)
    _logger.debug("copying file: %s -> %s", source_path, target)
    try:
        shutil.copy2(str(src_path), target)
    except OSError as e:
        _logger.error("copy failed: %s -> %s, error: %s", source_path, target, e)
        raise CopyError(f"Failed to copy file: {e}") from e
    _logger.debug("copy success: %s -> %s", source_path, target)
    return target
