"""
Taskboard Errors
================
Every failure a request can end in. Each error knows the HTTP status
it maps to and the envelope it renders as.
"""

from __future__ import annotations

from typing import Any, Optional


class TaskServiceError(Exception):
    """Base class for failures reported back to the client."""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_envelope(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"success": False, "message": self.message}
        if self.error is not None:
            envelope["error"] = self.error
        return envelope


class ValidationError(TaskServiceError):
    """The request body is unusable (missing title, malformed JSON)."""

    status_code = 400


class NotFoundError(TaskServiceError):
    """No task with the given id, or no route matching the request."""

    status_code = 404


class InternalError(TaskServiceError):
    """Anything unexpected raised while handling a request."""

    status_code = 500

    @classmethod
    def from_exception(cls, exc: BaseException) -> InternalError:
        return cls("Server error", error=str(exc))


TASK_NOT_FOUND = "Task not found"
ROUTE_NOT_FOUND = "Route not found"
TITLE_REQUIRED = "Title is required"
INVALID_BODY = "Invalid request body"
