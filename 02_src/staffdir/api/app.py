"""FastAPI application setup."""

from contextlib import asynccontextmanager

import socketio
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..app import Application
from ..errors import DirectoryError
from ..logging_config import get_logger
from .routes import (
    create_auth_router,
    create_conversations_router,
    create_employees_router,
)

logger = get_logger(__name__)


def create_fastapi_app(application: Application) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Staff Directory API",
        description="Employee directory with realtime messaging",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(application.settings.cors_origins),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )

    @fastapi_app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(
            "New request: %s %s",
            request.method,
            request.url.path,
            extra={"context": {"host": request.url.hostname}},
        )
        return await call_next(request)

    @fastapi_app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @fastapi_app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @fastapi_app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation error",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @fastapi_app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    fastapi_app.include_router(create_employees_router(application))
    fastapi_app.include_router(create_auth_router(application))
    fastapi_app.include_router(create_conversations_router(application))

    return fastapi_app


def create_asgi_app(application: Application) -> socketio.ASGIApp:
    """Mount the Socket.IO server in front of the REST API.

    Socket.IO traffic (long-polling and websocket upgrades) is served on
    the configured path; everything else, including lifespan, goes to FastAPI.
    """
    return socketio.ASGIApp(
        application.sio,
        other_asgi_app=create_fastapi_app(application),
        socketio_path=application.settings.socketio_path,
    )
