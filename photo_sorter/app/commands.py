"""Name-addressable commands for the UI layer.

The UI calls an operation by name with keyword arguments and gets back either
a value or a single error message. This module is Qt-free so it can be used
(and tested) headless; ``BackendFacade.invoke`` is a thin Qt slot around it.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from photo_sorter.errors import PhotoSorterError
from photo_sorter.logger import get_logger
from photo_sorter.ops.file_operations import copy_file
from photo_sorter.ops.photo_scanner import PhotoInfo, load_photos_from_directory

_logger = get_logger("commands")


@dataclass
class CommandResult:
    ok: bool
    value: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "value": self.value, "error": self.error}


COMMANDS: dict[str, Callable[..., Any]] = {
    "load_photos_from_directory": load_photos_from_directory,
    "copy_file": copy_file,
}


def _to_plain(value: Any) -> Any:
    # PhotoInfo lists must cross into QML as plain dicts.
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    if isinstance(value, PhotoInfo):
        return value.to_dict()
    return value


def invoke(name: str, **kwargs: Any) -> CommandResult:
    """Run command ``name`` and wrap the outcome.

    Operation failures (``PhotoSorterError``) and bad calls (unknown name,
    missing/extra arguments) become ``ok=False`` results. Anything else is a
    bug and propagates.
    """
    func = COMMANDS.get(name)
    if func is None:
        return CommandResult(ok=False, error=f"Unknown command: {name}")

    try:
        inspect.signature(func).bind(**kwargs)
    except TypeError as e:
        return CommandResult(ok=False, error=f"Invalid arguments for {name}: {e}")

    try:
        value = func(**kwargs)
    except PhotoSorterError as e:
        _logger.debug("command %s failed: %s", name, e)
        return CommandResult(ok=False, error=str(e))
    return CommandResult(ok=True, value=_to_plain(value))
