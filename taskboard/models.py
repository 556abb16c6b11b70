"""
Taskboard Models — Task Record and Request Bodies
==================================================
The single entity of the service plus the JSON bodies accepted by
the create and update routes.

Components:
    Task         — One unit of work (id, title, description, status, timestamps)
    TaskCreate   — POST /api/tasks body
    TaskUpdate   — PUT /api/tasks/{id} body (any subset of fields)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel


DEFAULT_STATUS = "pending"

UPDATABLE_FIELDS = ("title", "description", "status")
NON_NULLABLE_FIELDS = ("title", "description")


def generate_task_id() -> str:
    """Random 128-bit identifier (UUID4)."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2026-10-19T08:15:30.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ─────────────────────────────────────────────────────────────
#  Task
# ─────────────────────────────────────────────────────────────

@dataclass
class Task:
    """A task record as held by the store.

    `id` and `created_at` are fixed at creation. `updated_at` stays
    None until the first update and is left out of the JSON until then.
    """

    id: str
    title: str
    description: str = ""
    status: Optional[str] = DEFAULT_STATUS
    created_at: str = ""
    updated_at: Optional[str] = None

    @classmethod
    def new(cls, task_id: str, title: str, description: Optional[str] = None,
            status: Optional[str] = None) -> Task:
        """Build a freshly created task, normalising the optional fields."""
        return cls(
            id=task_id,
            title=title.strip(),
            description=description.strip() if description else "",
            status=status or DEFAULT_STATUS,
            created_at=utc_timestamp(),
        )

    def apply_changes(self, changes: dict[str, Optional[str]]) -> None:
        """Overwrite the fields named in `changes` and stamp `updated_at`.

        Every key present is applied, even an empty string or a null
        status. Title and description are trimmed.
        """
        if "title" in changes:
            self.title = changes["title"].strip()
        if "description" in changes:
            self.description = changes["description"].strip()
        if "status" in changes:
            self.status = changes["status"]
        self.updated_at = utc_timestamp()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire format (camelCase timestamps)."""
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "createdAt": self.created_at,
        }
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            status=data.get("status", DEFAULT_STATUS),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt"),
        )


# ─────────────────────────────────────────────────────────────
#  Request Bodies
# ─────────────────────────────────────────────────────────────

class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None

    def changes(self) -> dict[str, Optional[str]]:
        """Every updatable field the client sent, nulls included.

        Title and description cannot be null; the status can.

        Raises:
            ValueError: If title or description was sent as null.
        """
        sent = self.model_dump(exclude_unset=True)
        for name in NON_NULLABLE_FIELDS:
            if name in sent and sent[name] is None:
                raise ValueError(f"{name} cannot be null")
        return {name: value for name, value in sent.items() if name in UPDATABLE_FIELDS}
