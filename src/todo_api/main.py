from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, Optional

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth import get_auth_dependency
from .logging_config import setup_logging
from .repositories import Repository, TodoNotFoundError, TodoStore
from .request_logger import RequestLoggerMiddleware
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .static import SPAStaticFiles

log = structlog.get_logger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "List, add, delete and complete todo items."},
]


def _jsonable_errors(exc: RequestValidationError) -> list:
    """
    Pydantic error details may carry the original exception under 'ctx';
    render those as strings so the body is always JSON serializable.
    """
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors


@asynccontextmanager
async def lifespan(application: FastAPI):
    application.state.store.initialize()
    log.info(
        "application started",
        auth=application.state.settings.enable_auth,
        static_dir=application.state.settings.static_dir,
    )
    yield
    log.info("application stopped")


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    store: Optional[Repository] = None,
    jwks_client: Optional[Any] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The app owns exactly one store, created here unless one is passed in, and
    exposes it to handlers through app.state. jwks_client overrides the key
    lookup used when auth is enabled.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo API",
        description="In-memory todo list with optional bearer-token auth and a static front-end.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else TodoStore()

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    # Global exception handlers for consistent JSON error bodies
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": _jsonable_errors(exc),
            },
        )

    @app.exception_handler(TodoNotFoundError)
    async def not_found_exception_handler(request: Request, exc: TodoNotFoundError) -> JSONResponse:
        """
        Map a missing todo onto 404, naming the id that was not found.
        """
        return JSONResponse(
            status_code=404,
            content={
                "error": "NotFound",
                "message": "Todo not found",
                "detail": {"id": exc.todo_id},
            },
        )

    @app.get("/health", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {
            "message": "Healthy",
            "auth": settings.enable_auth,
            "todos": app.state.store.count(),
        }

    auth_dep = get_auth_dependency(settings, jwks_client=jwks_client)
    app.include_router(todos_router.router, dependencies=[Depends(auth_dep)])

    # Anything the API does not match falls through to the front-end
    if os.path.isdir(settings.static_dir):
        app.mount("/", SPAStaticFiles(directory=settings.static_dir), name="static")
    else:
        log.warning("static directory missing, front-end disabled", static_dir=settings.static_dir)

    return app


# PUBLIC_INTERFACE
def run() -> None:
    """Run the development server with the configured host and port."""
    settings = get_settings()
    setup_logging(settings.log_format, settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
