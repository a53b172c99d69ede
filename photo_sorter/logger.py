import logging
import os
import sys

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class _CategoryFilter(logging.Filter):
    """Pass records whose last name component is one of ``categories``."""

    def __init__(self, categories: set[str]) -> None:
        super().__init__()
        self.categories = categories

    def filter(self, record: logging.LogRecord) -> bool:
        # "photo_sorter.photo_scanner" -> "photo_scanner"
        return (record.name or "").rsplit(".", 1)[-1] in self.categories


def setup_logger(level: int = logging.INFO, name: str = "photo_sorter") -> logging.Logger:
    """Configure the ``photo_sorter`` logger and return it.

    Safe to call repeatedly. Each call re-reads PHOTO_SORTER_LOG_LEVEL and
    PHOTO_SORTER_LOG_CATS, which ``main`` sets from ``--log-level`` and
    ``--log-cats`` before the window opens. Output goes to a single stderr
    handler; there is no log file.
    """
    logger = logging.getLogger(name)

    env_level = (os.getenv("PHOTO_SORTER_LOG_LEVEL") or "").strip().lower()
    logger.setLevel(_LEVELS.get(env_level, level))

    handler = next(
        (
            h
            for h in logger.handlers
            if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        ),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(stream=sys.stderr)
        logger.addHandler(handler)

    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s", datefmt="%H:%M:%S"))

    handler.filters.clear()
    cats = {c.strip() for c in (os.getenv("PHOTO_SORTER_LOG_CATS") or "").split(",") if c.strip()}
    if cats:
        handler.addFilter(_CategoryFilter(cats))

    # Records stop at the photo_sorter logger
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = setup_logger()
    return base if not name else base.getChild(name)
