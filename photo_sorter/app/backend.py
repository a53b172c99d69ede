from __future__ import annotations

import contextlib
import os
import re
import sys
from pathlib import Path
from typing import Any

from PySide6.QtCore import Property, QObject, QUrl, Signal, Slot

from photo_sorter.app import commands
from photo_sorter.app.state.sorter_state import SorterState
from photo_sorter.errors import PhotoSorterError
from photo_sorter.logger import get_logger
from photo_sorter.ops.file_operations import copy_file
from photo_sorter.ops.photo_scanner import PhotoInfo, load_photos_from_directory
from photo_sorter.path_utils import normalize_folder
from photo_sorter.settings_manager import SettingsManager, default_settings_path

_logger = get_logger("backend")
_BASE_DIR = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parents[1]))
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _to_local_path(value: object) -> str:
    """QML FolderDialog hands back ``file:`` URLs; everything else is taken as a path."""
    p = str(value or "")
    if p.startswith("file:"):
        url = QUrl(p)
        if url.isLocalFile():
            p = url.toLocalFile()
    return p


def _photo_for_qml(photo: PhotoInfo) -> dict[str, Any]:
    # Image.source needs a percent-encoded URL: names may contain '#', '%' or '?'
    d = photo.to_dict()
    d["url"] = QUrl.fromLocalFile(photo.path).toString()
    return d


def _unwrap_variant(payload: object | None) -> object | None:
    # QML often passes a JS object which arrives as QJSValue/QVariant.
    if payload is not None and payload.__class__.__name__ == "QJSValue" and hasattr(payload, "toVariant"):
        with contextlib.suppress(Exception):
            payload = payload.toVariant()  # type: ignore[assignment, attr-defined]
    return payload


def _snake_case_keys(args: dict[str, Any]) -> dict[str, Any]:
    """``directoryPath`` -> ``directory_path`` so JS-style argument names work."""
    return {_CAMEL_BOUNDARY.sub(r"_\1", str(k)).lower(): v for k, v in args.items()}


class BackendFacade(QObject):
    """Single backend object exposed to QML.

    QML → Python: backend.dispatch(cmd, payload) for UI flows,
                  backend.invoke(name, args) for request/response calls
    Python → QML: backend.event(dict)
    QML bindings: backend.sorter
    """

    # QObject already has an .event() handler method, so we must not shadow it.
    # Expose the QML signal name as "event" while keeping a safe Python attribute.
    event_ = Signal(object, name="event")

    def __init__(
        self,
        settings: SettingsManager | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)

        self._settings_mgr = settings or SettingsManager(default_settings_path(str(_BASE_DIR)))
        self._sorter = SorterState(self)

        self._restore_last_dirs()

    # ---- expose state objects to QML ----
    def _get_sorter(self) -> QObject:
        return self._sorter

    sorterState = Property(QObject, _get_sorter, constant=True)  # type: ignore[arg-type]

    # For ergonomic QML usage: backend.sorter
    sorter = Property(QObject, _get_sorter, constant=True)  # type: ignore[arg-type]

    # ---- init wiring ----
    def _restore_last_dirs(self) -> None:
        if not self._settings_mgr.restore_last_dirs:
            return

        dest = self._settings_mgr.last_destination_dir
        if dest:
            self._sorter._set_destination_directory(dest)

        src = self._settings_mgr.last_source_dir
        if src:
            self._open_source_directory(src)

    # ---- QML request/response entry ----
    @Slot(str, "QVariant", result="QVariant")  # type: ignore[call-overload]
    def invoke(self, name: str, args: object | None = None) -> dict[str, Any]:
        payload = _unwrap_variant(args)
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            return commands.CommandResult(ok=False, error="Arguments must be an object").to_dict()

        result = commands.invoke(str(name or "").strip(), **_snake_case_keys(payload))
        if not result.ok:
            _logger.debug("invoke %s failed: %s", name, result.error)
        return result.to_dict()

    # ---- QML command entry ----
    # NOTE: The second argument must be a Qt-friendly variant type.
    # Using `object` here causes runtime failures when QML passes a JS object
    # (e.g. `{ path: "..." }`).
    @Slot(str, "QVariant")  # type: ignore[call-overload]
    def dispatch(self, cmd: str, payload: object | None = None) -> None:  # noqa: PLR0911
        command = str(cmd or "").strip()
        if not command:
            self.event_.emit({"type": "event", "name": "error", "level": "error", "message": "Empty cmd"})
            return

        if command == "log":
            self._handle_log_cmd(payload)
            return

        if command == "setSourceDirectory":
            self._cmd_set_source_directory(_get_payload_value(payload, "path", default=payload))
            return

        if command == "setDestinationDirectory":
            self._cmd_set_destination_directory(_get_payload_value(payload, "path", default=payload))
            return

        if command == "reloadPhotos":
            self._cmd_reload_photos()
            return

        if command == "savePhoto":
            self._cmd_save_photo()
            return

        if command == "skipPhoto":
            self._sorter._set_current_index(self._sorter._get_current_index() + 1)
            return

        if command == "previousPhoto":
            self._sorter._set_current_index(self._sorter._get_current_index() - 1)
            return

        self.event_.emit(
            {
                "type": "event",
                "name": "error",
                "level": "warning",
                "message": f"Unknown cmd: {command}",
            }
        )

    # ---- cmd handlers ----
    def _handle_log_cmd(self, payload: object | None) -> None:
        level = str(_get_payload_value(payload, "level", default="debug")).lower()
        msg = str(_get_payload_value(payload, "message", default=""))
        if not msg:
            return

        if level == "info":
            _logger.info("[QML] %s", msg)
        elif level in {"warn", "warning"}:
            _logger.warning("[QML] %s", msg)
        elif level == "error":
            _logger.error("[QML] %s", msg)
        else:
            _logger.debug("[QML] %s", msg)

    def _cmd_set_source_directory(self, raw: object) -> None:
        p = _to_local_path(raw)
        if not p:
            self._emit_error("No source folder selected")
            return

        # A rejected folder leaves the current source and the saved one alone
        folder = normalize_folder(p)
        if self._open_source_directory(folder):
            self._settings_mgr.set("last_source_dir", folder)

    def _cmd_set_destination_directory(self, raw: object) -> None:
        p = _to_local_path(raw)
        if not p:
            self._emit_error("No destination folder selected")
            return

        folder = normalize_folder(p)
        if not os.path.isdir(folder):
            self._emit_error(f"Destination is not a folder: {folder}")
            return

        self._sorter._set_error_text("")
        self._sorter._set_destination_directory(folder)
        self._settings_mgr.set("last_destination_dir", folder)

    def _cmd_reload_photos(self) -> None:
        folder = self._sorter._get_source_directory()
        if not folder:
            return
        photos = self._scan(folder)
        if photos is None:
            self._sorter._set_photos([])
            return
        self._show_photos(folder, photos)

    def _cmd_save_photo(self) -> None:
        photo = self._sorter._get_current_photo()
        if not photo:
            return

        dest = self._sorter._get_destination_directory()
        if not dest:
            self._emit_error("Select a destination folder first")
            return

        try:
            new_path = copy_file(str(photo["path"]), dest)
        except PhotoSorterError as e:
            self._emit_error(f"Save failed: {e}")
            return

        self._sorter._set_last_copied_path(new_path)
        self._sorter._set_error_text("")
        self._sorter._set_current_index(self._sorter._get_current_index() + 1)
        self.event_.emit({"type": "event", "name": "photoSaved", "source": photo["path"], "path": new_path})

    def _open_source_directory(self, folder: str) -> bool:
        photos = self._scan(folder)
        if photos is None:
            return False
        self._sorter._set_source_directory(folder)
        self._show_photos(folder, photos)
        return True

    def _scan(self, folder: str) -> list[PhotoInfo] | None:
        try:
            return load_photos_from_directory(folder)
        except PhotoSorterError as e:
            self._emit_error(f"Failed to load photos: {e}")
            return None

    def _show_photos(self, folder: str, photos: list[PhotoInfo]) -> None:
        self._sorter._set_error_text("")
        self._sorter._set_photos([_photo_for_qml(p) for p in photos])
        _logger.debug("loaded %d photos from %s", len(photos), folder)
        self.event_.emit({"type": "event", "name": "photosLoaded", "folder": folder, "count": len(photos)})

    def _emit_error(self, message: str) -> None:
        _logger.warning("%s", message)
        self._sorter._set_error_text(message)
        self.event_.emit({"type": "event", "name": "toast", "level": "error", "message": message})


def _get_payload_value(payload: object | None, key: str, *, default: Any) -> Any:
    """Extract a value from a QML payload.

    Supports:
    - dict-like payloads (Python dict)
    - None
    - otherwise returns default

    We intentionally keep schema small and explicit.
    """

    payload = _unwrap_variant(payload)
    if payload is None:
        return default

    if isinstance(payload, dict):
        return payload.get(key, default)

    return default
