from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth import AccessGate, BasicAccessGate
from .errors import StorageError, TodoApiError, UnauthorizedError
from .repositories import Repository, get_repository
from .routers import todos as todos_router
from .service import TodoService
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items stored in MongoDB.",
    },
]


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[Repository] = None,
    access_gate: Optional[AccessGate] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The repository and access gate are constructed here (or injected, e.g. by
    tests) and kept on app.state for the lifetime of the app.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo API",
        description="REST backend for todo items backed by a document database.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )

    repo = repository if repository is not None else get_repository(settings)
    app.state.settings = settings
    app.state.todo_service = TodoService(repo)
    app.state.access_gate = access_gate if access_gate is not None else BasicAccessGate.from_settings(settings)

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        logger.debug("Rejected request body for %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(TodoApiError)
    async def todo_api_exception_handler(request: Request, exc: TodoApiError) -> JSONResponse:
        """
        Map service errors onto their HTTP status and JSON envelope.
        """
        headers = None
        if isinstance(exc, UnauthorizedError):
            headers = {"WWW-Authenticate": "Basic"}
        elif isinstance(exc, StorageError):
            logger.error("Responding 500 to %s %s", request.method, request.url.path)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content(), headers=headers)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "API Running", "backend": settings.persistence_backend}

    app.include_router(todos_router.router)
    return app


_settings = get_settings()
configure_logging(_settings.log_level)
app = create_app(_settings)
