import argparse
import os
import sys
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QGuiApplication
from PySide6.QtQml import QQmlApplicationEngine

from photo_sorter.app.backend import BackendFacade
from photo_sorter.logger import get_logger, setup_logger
from photo_sorter.settings_manager import SettingsManager, default_settings_path

logger = get_logger("main")
_BASE_DIR = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))
_QML_PATH = _BASE_DIR / "qml" / "App.qml"

# --- CLI logging options -----------------------------------------------------
# Qt rejects unknown options, so ours are parsed first, copied into
# PHOTO_SORTER_LOG_LEVEL / PHOTO_SORTER_LOG_CATS and removed from argv.


def _apply_cli_logging_options(argv: list[str]) -> list[str]:
    parser = argparse.ArgumentParser(description="Photo Sorter", add_help=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    args, remaining = parser.parse_known_args(argv[1:])
    if args.log_level:
        os.environ["PHOTO_SORTER_LOG_LEVEL"] = args.log_level
    if args.log_cats:
        os.environ["PHOTO_SORTER_LOG_CATS"] = args.log_cats
    return [argv[0], *remaining]


def run(argv: list[str] | None = None) -> int:
    """Application entrypoint (packaging-friendly)."""
    if argv is None:
        argv = sys.argv

    argv = _apply_cli_logging_options(list(argv))
    # Re-read the env overrides that were just applied
    setup_logger()

    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("source_dir", nargs="?", help="Folder with photos to sort")
    args, qt_args = parser.parse_known_args(argv[1:])

    app = QGuiApplication.instance() or QGuiApplication([argv[0], *qt_args])
    app.setApplicationName("Photo Sorter")

    settings = SettingsManager(default_settings_path(str(_BASE_DIR)))
    backend = BackendFacade(settings=settings)

    # An explicit folder on the command line wins over the restored one
    if args.source_dir:
        if Path(args.source_dir).is_dir():
            backend.dispatch("setSourceDirectory", {"path": args.source_dir})
        else:
            logger.warning("not a directory, ignoring: %s", args.source_dir)

    engine = QQmlApplicationEngine()
    engine.setInitialProperties({"backend": backend})
    engine.load(QUrl.fromLocalFile(str(_QML_PATH)))
    if not engine.rootObjects():
        logger.error("failed to load QML: %s", _QML_PATH)
        return 1

    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
