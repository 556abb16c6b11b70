"""
Taskboard Witness — Operation Logging
======================================
Observes and reports what the API does. Pure observation: never
modifies data and never raises into the request that it is logging.
"""

from __future__ import annotations

import logging
from typing import Any, Optional


LOGGER_NAME = "taskboard"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


class TaskWitness:
    """Logs one line per API operation."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def log_action(self, action: str, details: dict[str, Any]) -> None:
        """Witnesses a successful operation, e.g. ``task.create id=... title='...'``"""
        try:
            self.logger.info("%s %s", action, _format_details(details))
        except Exception:
            pass

    def log_failure(self, action: str, status_code: int, message: str,
                    exc: Optional[BaseException] = None) -> None:
        """Witnesses a failed operation. 5xx failures carry the traceback."""
        try:
            if status_code >= 500:
                self.logger.error("%s failed (%d): %s", action, status_code, message,
                                  exc_info=exc)
            else:
                self.logger.warning("%s rejected (%d): %s", action, status_code, message)
        except Exception:
            pass


def _format_details(details: dict[str, Any]) -> str:
    return " ".join(f"{key}={value!r}" for key, value in details.items())
