"""Errors raised by the photo operations.

Every error carries a single human-readable message (``str(exc)``); the UI
shows it as-is, so there are no structured error codes.
"""

from __future__ import annotations


class PhotoSorterError(Exception):
    """Base class for all operation failures reported to the UI."""


class InvalidPathError(PhotoSorterError):
    """Scan path does not exist or is not a directory."""


class ReadError(PhotoSorterError):
    """Directory exists but could not be listed."""


class SourceNotFoundError(PhotoSorterError):
    """Copy source does not exist or is not a regular file."""


class TargetNotFoundError(PhotoSorterError):
    """Copy target directory does not exist or is not a directory."""


class NameExtractionError(PhotoSorterError):
    """No file name could be derived from the copy source path."""


class CopyError(PhotoSorterError):
    """The byte copy itself failed."""
