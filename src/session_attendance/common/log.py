from __future__ import annotations

import logging

LOG_FORMAT = "[session-attendance] %(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stream handler on the package logger.

    Safe to call more than once (tests build many apps).
    """
    logger = logging.getLogger("session_attendance")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_session_attendance", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._session_attendance = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
