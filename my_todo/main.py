import logging
from typing import Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from my_todo.config import Settings, settings
from my_todo.core.logging_config import setup_logging
from my_todo.db.session import create_session_factory

from my_todo.api.todo.task.routes import router as todo_task_router
from my_todo.api.todo.label.routes import router as todo_label_router
from my_todo.api.todo.task.services import (
    TaskRepository,
    TaskRepositoryForDb,
    TaskRepositoryForMemory,
)
from my_todo.api.todo.label.services import (
    LabelRepository,
    LabelRepositoryForDb,
    LabelRepositoryForMemory,
)

logger = logging.getLogger(__name__)


def build_repositories(config: Settings) -> Tuple[TaskRepository, LabelRepository]:
    """Pick the storage backend named by ``config.STORE``."""
    store = config.STORE.lower()
    if store == "db":
        if not config.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is required when STORE=db")
        session_factory = create_session_factory(config.DATABASE_URL)
        return TaskRepositoryForDb(session_factory), LabelRepositoryForDb(session_factory)
    if store == "memory":
        labels = LabelRepositoryForMemory()
        return TaskRepositoryForMemory(labels), labels
    raise ValueError(f"Unknown STORE [{config.STORE}], expected 'memory' or 'db'")


def create_app(
    task_repository: Optional[TaskRepository] = None,
    label_repository: Optional[LabelRepository] = None,
) -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    if task_repository is None or label_repository is None:
        task_repository, label_repository = build_repositories(settings)
        logger.info("Using %s store", settings.STORE)

    app = FastAPI(title="my_todo")
    app.state.task_repository = task_repository
    app.state.label_repository = label_repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["content-type"],
    )

    # Routers
    app.include_router(todo_task_router, prefix="/task", tags=["Todo Tasks"])
    app.include_router(todo_label_router, prefix="/label", tags=["Todo Labels"])

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return PlainTextResponse(
            f"Validation error: [{exc.errors()}]",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Hello, world!"

    return app
