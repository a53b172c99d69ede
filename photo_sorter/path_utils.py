"""Folder path normalization for the source/destination pickers.

Qt-free: the backend turns QML ``file:`` URLs into local paths first.
"""

from __future__ import annotations

from pathlib import Path


def normalize_folder(path: str | Path) -> str:
    """Absolute form of a folder chosen in the UI, as stored in settings.

    The path is not required to exist and is never swapped for its parent;
    callers check ``os.path.isdir`` themselves.
    """
    p = Path(path).expanduser()
    try:
        p = p.resolve(strict=False)
    except OSError:
        p = p.absolute()
    s = str(p)
    # "c:\\photos" and "C:\\photos" are the same folder
    if len(s) >= 2 and s[1] == ":":
        s = s[0].upper() + s[1:]
    return s
