from __future__ import annotations

import logging

from app.config.settings import settings

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """Install one stream handler on the ``app`` logger.

    Level comes from ``settings.log_level`` unless given. Calling it twice is a
    no-op so uvicorn reloads and tests do not stack handlers.
    """

    logger = logging.getLogger("app")
    if logger.handlers:
        return

    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger.setLevel(resolved)
    handler = logging.StreamHandler()
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
