from __future__ import annotations

from typing import Any

from PySide6.QtCore import Property, QObject, Signal


class SorterState(QObject):
    """State bound by the sorting (card stack) UI."""

    sourceDirectoryChanged = Signal(str)
    destinationDirectoryChanged = Signal(str)
    photosChanged = Signal()
    currentIndexChanged = Signal(int)
    readyChanged = Signal(bool)
    lastCopiedPathChanged = Signal(str)
    errorTextChanged = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._source_directory = ""
        self._destination_directory = ""
        self._photos: list[dict[str, Any]] = []
        self._current_index = 0
        self._last_copied_path = ""
        self._error_text = ""

    def _get_source_directory(self) -> str:
        return str(self._source_directory)

    sourceDirectory = Property(str, _get_source_directory, notify=sourceDirectoryChanged)  # type: ignore[arg-type]

    def _get_destination_directory(self) -> str:
        return str(self._destination_directory)

    destinationDirectory = Property(str, _get_destination_directory, notify=destinationDirectoryChanged)  # type: ignore[arg-type]

    def _get_photos(self) -> list:
        return list(self._photos)

    photos = Property(list, _get_photos, notify=photosChanged)  # type: ignore[arg-type]

    def _get_current_index(self) -> int:
        return int(self._current_index)

    currentIndex = Property(int, _get_current_index, notify=currentIndexChanged)  # type: ignore[arg-type]

    # currentPhoto/finished are derived from photos + currentIndex
    def _get_current_photo(self) -> dict:
        if 0 <= self._current_index < len(self._photos):
            return dict(self._photos[self._current_index])
        return {}

    currentPhoto = Property(dict, _get_current_photo, notify=currentIndexChanged)  # type: ignore[arg-type]

    def _get_finished(self) -> bool:
        return self._current_index >= len(self._photos)

    finished = Property(bool, _get_finished, notify=currentIndexChanged)  # type: ignore[arg-type]

    def _get_ready(self) -> bool:
        return bool(self._source_directory and self._destination_directory)

    ready = Property(bool, _get_ready, notify=readyChanged)  # type: ignore[arg-type]

    def _get_last_copied_path(self) -> str:
        return str(self._last_copied_path)

    lastCopiedPath = Property(str, _get_last_copied_path, notify=lastCopiedPathChanged)  # type: ignore[arg-type]

    def _get_error_text(self) -> str:
        return str(self._error_text)

    errorText = Property(str, _get_error_text, notify=errorTextChanged)  # type: ignore[arg-type]

    # ---- internal mutation helpers (called by backend) ----
    def _set_source_directory(self, folder: str) -> None:
        f = str(folder)
        if f == self._source_directory:
            return
        was_ready = self._get_ready()
        self._source_directory = f
        self.sourceDirectoryChanged.emit(f)
        self._emit_ready_if_changed(was_ready)

    def _set_destination_directory(self, folder: str) -> None:
        f = str(folder)
        if f == self._destination_directory:
            return
        was_ready = self._get_ready()
        self._destination_directory = f
        self.destinationDirectoryChanged.emit(f)
        self._emit_ready_if_changed(was_ready)

    def _emit_ready_if_changed(self, was_ready: bool) -> None:
        now = self._get_ready()
        if now != was_ready:
            self.readyChanged.emit(now)

    def _set_photos(self, photos: list[dict[str, Any]]) -> None:
        self._photos = list(photos)
        self.photosChanged.emit()
        # A new list always restarts the stack; emit even when the index was 0
        self._current_index = 0
        self.currentIndexChanged.emit(0)

    def _set_current_index(self, idx: int) -> None:
        i = max(0, min(int(idx), len(self._photos)))
        if i == self._current_index:
            return
        self._current_index = i
        self.currentIndexChanged.emit(i)

    def _set_last_copied_path(self, path: str) -> None:
        p = str(path)
        if p == self._last_copied_path:
            return
        self._last_copied_path = p
        self.lastCopiedPathChanged.emit(p)

    def _set_error_text(self, text: str) -> None:
        t = str(text)
        if t == self._error_text:
            return
        self._error_text = t
        self.errorTextChanged.emit(t)
