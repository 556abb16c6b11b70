"""
Taskboard Store — In-Memory Task Collection
============================================
Pure data layer. Holds tasks in insertion order with an id index
for lookups. Knows nothing about HTTP.

The store is owned by the application that creates it; nothing in
the package keeps a module-level instance.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, Optional

from taskboard.models import Task, generate_task_id


SEED_TASKS = [
    {
        "title": "Complete project documentation",
        "description": "Write comprehensive docs for the API",
        "status": "pending",
    },
    {
        "title": "Review pull requests",
        "description": "Check and merge pending PRs",
        "status": "in-progress",
    },
]


class TaskStore:
    """Ordered, lock-guarded collection of tasks.

    Every identifier handed out is remembered for the lifetime of the
    store, so ids of deleted tasks are never issued again.
    """

    def __init__(self, id_factory: Callable[[], str] = generate_task_id):
        self._tasks: list[Task] = []
        self._index: dict[str, Task] = {}
        self._issued: set[str] = set()
        self._id_factory = id_factory
        self._lock = Lock()

    @classmethod
    def with_seed(cls, **kwargs) -> TaskStore:
        store = cls(**kwargs)
        store.seed()
        return store

    def seed(self) -> list[Task]:
        """Append the two startup tasks."""
        return [self.create(**fields) for fields in SEED_TASKS]

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: str) -> bool:
        with self._lock:
            return task_id in self._index

    # ─────────────────────────────────────────────
    #  Reads
    # ─────────────────────────────────────────────

    def list(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        with self._lock:
            return self._index.get(task_id)

    # ─────────────────────────────────────────────
    #  Writes
    # ─────────────────────────────────────────────

    def create(self, title: str, description: Optional[str] = None,
               status: Optional[str] = None) -> Task:
        """Append a new task. The caller is responsible for validating `title`."""
        with self._lock:
            task = Task.new(self._next_id(), title, description, status)
            self._tasks.append(task)
            self._index[task.id] = task
            return task

    def update(self, task_id: str, changes: dict[str, Optional[str]]) -> Optional[Task]:
        """Apply a partial update. Returns None if the id is unknown."""
        with self._lock:
            task = self._index.get(task_id)
            if task is None:
                return None
            task.apply_changes(changes)
            return task

    def delete(self, task_id: str) -> Optional[Task]:
        """Remove one task. Returns the removed task, or None if the id is unknown."""
        with self._lock:
            task = self._index.pop(task_id, None)
            if task is None:
                return None
            self._tasks.remove(task)
            return task

    def _next_id(self) -> str:
        # Caller holds the lock
        task_id = self._id_factory()
        while task_id in self._issued:
            task_id = self._id_factory()
        self._issued.add(task_id)
        return task_id
