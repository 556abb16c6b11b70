"""
Taskboard API — Request Layer
==============================
The five task operations plus the unmatched-route answer. Each
operation returns an ApiResult: either a success payload or a tagged
error. Exceptions never leave an operation; the HTTP layer only has
to turn the result into a response.

Operations:
    list_tasks()              → 200 {count, data}
    get_task(id)              → 200 {data}            | 404
    create_task(body)         → 201 {message, data}   | 400
    update_task(id, body)     → 200 {message, data}   | 404 | 400
    delete_task(id)           → 200 {message, data}   | 404
    route_not_found()         → 404
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from taskboard.errors import (
    InternalError, NotFoundError, TaskServiceError, ValidationError,
    INVALID_BODY, ROUTE_NOT_FOUND, TASK_NOT_FOUND, TITLE_REQUIRED,
)
from taskboard.models import TaskCreate, TaskUpdate
from taskboard.store import TaskStore
from taskboard.witness import TaskWitness


# ─────────────────────────────────────────────────────────────
#  Result
# ─────────────────────────────────────────────────────────────

@dataclass
class ApiResult:
    """Outcome of one operation, ready to be rendered as an envelope."""

    success: bool
    status_code: int = 200
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None
    count: Optional[int] = None

    @classmethod
    def ok(cls, data: Any, status_code: int = 200, message: Optional[str] = None,
           count: Optional[int] = None) -> ApiResult:
        return cls(success=True, status_code=status_code, data=data,
                   message=message, count=count)

    @classmethod
    def fail(cls, err: TaskServiceError) -> ApiResult:
        return cls(success=False, status_code=err.status_code,
                   message=err.message, error=err.error)

    def to_envelope(self) -> dict[str, Any]:
        """{success, data?, message?, error?, count?} with empty keys left out."""
        envelope: dict[str, Any] = {"success": self.success}
        if self.message is not None:
            envelope["message"] = self.message
        if self.error is not None:
            envelope["error"] = self.error
        if self.count is not None:
            envelope["count"] = self.count
        if self.data is not None:
            envelope["data"] = self.data
        return envelope


# ─────────────────────────────────────────────────────────────
#  Operations
# ─────────────────────────────────────────────────────────────

class TaskAPI:
    """Routes task operations to a TaskStore and reports them to a TaskWitness."""

    def __init__(self, store: TaskStore, witness: Optional[TaskWitness] = None):
        self.store = store
        self.witness = witness or TaskWitness()

    def list_tasks(self) -> ApiResult:
        def op():
            tasks = self.store.list()
            self.witness.log_action("task.list", {"count": len(tasks)})
            return ApiResult.ok([t.to_dict() for t in tasks], count=len(tasks))

        return self._run("task.list", op)

    def get_task(self, task_id: str) -> ApiResult:
        def op():
            task = self._require(task_id)
            self.witness.log_action("task.get", {"id": task.id})
            return ApiResult.ok(task.to_dict())

        return self._run("task.get", op)

    def create_task(self, body: Optional[TaskCreate]) -> ApiResult:
        def op():
            body_ = body or TaskCreate()
            if body_.title is None or not body_.title.strip():
                raise ValidationError(TITLE_REQUIRED)
            task = self.store.create(body_.title, body_.description, body_.status)
            self.witness.log_action("task.create", {"id": task.id, "title": task.title})
            return ApiResult.ok(task.to_dict(), status_code=201,
                                message="Task created successfully")

        return self._run("task.create", op)

    def update_task(self, task_id: str, body: Any) -> ApiResult:
        """Partially update a task.

        `body` is the decoded JSON as sent (dict, TaskUpdate or None).
        An unknown id is reported before anything wrong with the body.
        """
        def op():
            self._require(task_id)
            changes = self._parse_update(body)
            task = self.store.update(task_id, changes)
            if task is None:
                raise NotFoundError(TASK_NOT_FOUND)
            self.witness.log_action("task.update", {"id": task.id, "fields": sorted(changes)})
            return ApiResult.ok(task.to_dict(), message="Task updated successfully")

        return self._run("task.update", op)

    def delete_task(self, task_id: str) -> ApiResult:
        def op():
            task = self.store.delete(task_id)
            if task is None:
                raise NotFoundError(TASK_NOT_FOUND)
            self.witness.log_action("task.delete", {"id": task.id})
            return ApiResult.ok(task.to_dict(), message="Task deleted successfully")

        return self._run("task.delete", op)

    def route_not_found(self, method: str = "", path: str = "") -> ApiResult:
        self.witness.log_failure(f"{method} {path}".strip() or "route", 404, ROUTE_NOT_FOUND)
        return ApiResult.fail(NotFoundError(ROUTE_NOT_FOUND))

    # ─────────────────────────────────────────────
    #  Helpers
    # ─────────────────────────────────────────────

    def _require(self, task_id: str):
        task = self.store.get(task_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return task

    @staticmethod
    def _parse_update(body: Any) -> dict[str, Optional[str]]:
        if body is None:
            return {}
        if isinstance(body, TaskUpdate):
            update = body
        elif isinstance(body, dict):
            try:
                update = TaskUpdate.model_validate(body)
            except PydanticValidationError as e:
                errors = e.errors()
                raise ValidationError(INVALID_BODY, error=errors[0].get("msg", "") if errors else "")
        else:
            raise ValidationError(INVALID_BODY, error="Body must be a JSON object")
        try:
            return update.changes()
        except ValueError as e:
            raise ValidationError(INVALID_BODY, error=str(e))

    def _run(self, action: str, op: Callable[[], ApiResult]) -> ApiResult:
        """Single conversion point from exceptions to tagged results."""
        try:
            return op()
        except TaskServiceError as e:
            self.witness.log_failure(action, e.status_code, e.message)
            return ApiResult.fail(e)
        except Exception as e:
            err = InternalError.from_exception(e)
            self.witness.log_failure(action, err.status_code, err.error, exc=e)
            return ApiResult.fail(err)
