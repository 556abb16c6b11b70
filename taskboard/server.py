"""
Taskboard Server — HTTP Boundary
=================================
FastAPI application exposing the task collection as JSON over HTTP.

Launch:
    taskboard serve                 # Via CLI
    python -m taskboard.server      # Direct

Endpoints:
    GET     /api/tasks              → All tasks, in insertion order
    GET     /api/tasks/{id}         → One task
    POST    /api/tasks              → Create a task
    PUT     /api/tasks/{id}         → Partially update a task
    DELETE  /api/tasks/{id}         → Delete a task
    *       anything else           → 404 Route not found
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard import __version__
from taskboard.api import ApiResult, TaskAPI
from taskboard.config import ServerConfig
from taskboard.errors import ValidationError, INVALID_BODY
from taskboard.models import TaskCreate
from taskboard.store import TaskStore
from taskboard.witness import TaskWitness, configure_logging, LOGGER_NAME


logger = logging.getLogger(LOGGER_NAME)

ROUTES = [
    ("GET", "/api/tasks", "List all tasks"),
    ("GET", "/api/tasks/{id}", "Get a task by id"),
    ("POST", "/api/tasks", "Create a task"),
    ("PUT", "/api/tasks/{id}", "Update a task"),
    ("DELETE", "/api/tasks/{id}", "Delete a task"),
]


def _respond(result: ApiResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.to_envelope())


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(config: Optional[ServerConfig] = None,
               store: Optional[TaskStore] = None,
               witness: Optional[TaskWitness] = None) -> FastAPI:
    """Build an application that owns its own task store.

    Args:
        config: Server settings. Defaults to ServerConfig().
        store: Pre-built store (tests inject one). When omitted a new
            store is created, seeded unless config.seed is False.
        witness: Operation logger. Defaults to the package logger.
    """
    config = config or ServerConfig()
    if store is None:
        store = TaskStore.with_seed() if config.seed else TaskStore()
    api = TaskAPI(store, witness)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Task store ready with %d task(s)", len(store))
        yield
        logger.info("Shutting down; discarding %d task(s)", len(store))

    app = FastAPI(
        title="Taskboard",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.config = config
    app.state.store = store
    app.state.api = api

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─────────────────────────────────────────────
    #  Routes
    # ─────────────────────────────────────────────

    # Plain `def` handlers run on the worker thread pool; the store locks.
    # Each path is also served with a trailing slash.

    @app.get("/api/tasks")
    @app.get("/api/tasks/")
    def list_tasks():
        return _respond(api.list_tasks())

    @app.get("/api/tasks/{task_id}")
    @app.get("/api/tasks/{task_id}/")
    def get_task(task_id: str):
        return _respond(api.get_task(task_id))

    @app.post("/api/tasks")
    @app.post("/api/tasks/")
    def create_task(body: Optional[TaskCreate] = None):
        return _respond(api.create_task(body))

    @app.put("/api/tasks/{task_id}")
    @app.put("/api/tasks/{task_id}/")
    def update_task(task_id: str, body: Any = Body(None)):
        # Raw body: the id lookup must happen before field validation
        return _respond(api.update_task(task_id, body))

    @app.delete("/api/tasks/{task_id}")
    @app.delete("/api/tasks/{task_id}/")
    def delete_task(task_id: str):
        return _respond(api.delete_task(task_id))

    # ─────────────────────────────────────────────
    #  Error Conversion
    # ─────────────────────────────────────────────

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # Unknown path and known path with the wrong method are both "no route"
        if exc.status_code in (404, 405):
            return _respond(api.route_not_found(request.method, request.url.path))
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
        )

    @app.exception_handler(RequestValidationError)
    async def body_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "") if errors else ""
        err = ValidationError(INVALID_BODY, error=detail)
        api.witness.log_failure(f"{request.method} {request.url.path}",
                                err.status_code, detail)
        return _respond(ApiResult.fail(err))

    return app


# ─────────────────────────────────────────────────────────────
#  Startup
# ─────────────────────────────────────────────────────────────

def run_server(config: Optional[ServerConfig] = None):
    """Launch the Taskboard server with uvicorn (blocks until interrupted)."""
    import uvicorn

    config = config or ServerConfig.from_env()
    configure_logging(config.log_level)
    app = create_app(config)

    print(f"\n◬ ─── Taskboard ───")
    print(f"  Server running on {config.base_url}")
    print(f"  API endpoint: {config.base_url}/api/tasks")
    print(f"  Press Ctrl+C to stop\n")

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)


if __name__ == "__main__":
    run_server()
