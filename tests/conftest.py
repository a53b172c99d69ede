"""Pytest configuration.

The backend and state objects are QObjects. We create a single
`QGuiApplication` for the entire session as early as possible and cleanly
shut it down at the end.
"""

from __future__ import annotations

import os
from typing import Any

import pytest

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    """Ensure a QGuiApplication exists before collecting/running tests."""

    # No window system in CI; the backend never opens windows in tests anyway.
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    # Import lazily so non-Qt environments can still import this conftest.
    try:
        from PySide6.QtGui import QGuiApplication
    except ImportError:
        return

    global _APP

    app = QGuiApplication.instance()
    if app is None:
        # Keep a strong ref so it isn't GC'd mid-session.
        _APP = QGuiApplication([])
    else:
        _APP = app


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    """Attempt a clean Qt shutdown to avoid lingering threads at interpreter exit."""

    try:
        from PySide6.QtGui import QGuiApplication
    except ImportError:
        return

    app = QGuiApplication.instance()
    if app is None:
        return

    app.quit()
    app.processEvents()


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    """Never read or write the real settings.json next to the package."""
    monkeypatch.setenv("PHOTO_SORTER_SETTINGS", str(tmp_path / "settings.json"))


@pytest.fixture
def photo_dir(tmp_path):
    """A folder with a mix of image and non-image files."""
    d = tmp_path / "photos"
    d.mkdir()
    (d / "a.jpg").write_bytes(b"\xff\xd8\xff" + b"a" * 10)
    (d / "b.txt").write_text("not a photo")
    (d / "C.PNG").write_bytes(b"\x89PNG" + b"c" * 20)
    return d
