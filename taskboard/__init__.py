"""
Taskboard — In-Memory Task CRUD Service
========================================
A small HTTP/JSON service over a single process-local collection of tasks.

Architecture:
    Store    — Ordered in-memory collection with an id index
    API      — The five task operations, each returning an ApiResult
    Witness  — Operation logging, never touches data
    Server   — FastAPI boundary that turns results into JSON envelopes
"""

__version__ = "0.1.0"

from taskboard.models import Task, TaskCreate, TaskUpdate
from taskboard.store import TaskStore
from taskboard.errors import TaskServiceError, ValidationError, NotFoundError, InternalError
from taskboard.api import ApiResult, TaskAPI
from taskboard.witness import TaskWitness
from taskboard.config import ServerConfig

__all__ = [
    "Task", "TaskCreate", "TaskUpdate", "TaskStore",
    "TaskServiceError", "ValidationError", "NotFoundError", "InternalError",
    "ApiResult", "TaskAPI", "TaskWitness", "ServerConfig",
]
