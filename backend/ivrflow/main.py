"""FastAPI application entry point.

This module defines the main FastAPI application with CORS middleware,
lifespan management, exception handlers and API routing configuration.

Every error leaves the API as ``{"error": "<message>"}`` with the status
code of the AppError subclass that was raised; request validation errors
answer 400 and anything unexpected answers 500.

Logging:
    Initializes structured logging on application startup.
    All application events are logged with appropriate context.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ivrflow import __version__
from ivrflow.api import router as api_router
from ivrflow.core.config import settings
from ivrflow.core.exceptions import AppError
from ivrflow.core.logging import get_logger, setup_logging
from ivrflow.db.session import init_models
from ivrflow.schemas.base import ErrorResponse

# Initialize logging system
setup_logging(
    log_level=settings.LOG_LEVEL.value,
    log_file=settings.LOG_FILE,
    service_name=settings.PROJECT_NAME,
    enable_json=settings.LOG_JSON_FORMAT,
    enable_sensitive_filter=settings.LOG_SENSITIVE_FILTER,
)

# Get application logger
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001 - Required by FastAPI lifespan interface
    """Application lifespan context manager.

    Creates missing tables on startup when AUTO_CREATE_TABLES is set.
    """
    logger.info(
        f"Starting {settings.PROJECT_NAME}",
        extra={
            "context": {
                "action": "application_startup",
                "version": __version__,
                "debug": settings.DEBUG,
                "log_level": settings.LOG_LEVEL.value,
            }
        },
    )

    if settings.AUTO_CREATE_TABLES:
        await init_models()

    logger.info(
        "Application startup completed",
        extra={"context": {"action": "application_startup", "status": "success"}},
    )

    yield

    logger.info(
        f"Shutting down {settings.PROJECT_NAME}",
        extra={"context": {"action": "application_shutdown", "status": "success"}},
    )


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Design and manage IVR caller-authentication flows",
    version=__version__,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map application errors to their status code."""
    level = "error" if exc.status_code >= 500 else "info"
    getattr(logger, level)(
        f"Request failed: {exc.message}",
        extra={
            "context": {
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
                "details": exc.details,
            }
        },
    )
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Answer malformed or incomplete requests with 400."""
    errors = exc.errors()
    if any(error.get("type") == "missing" for error in errors):
        message = "Missing required fields"
    elif errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"

    logger.info(
        "Request validation failed",
        extra={
            "context": {
                "path": request.url.path,
                "method": request.method,
                "error_count": len(errors),
            }
        },
    )
    return error_response(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request,  # noqa: ARG001 - Part of the handler interface
    exc: StarletteHTTPException,
) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures with their traceback and answer 500."""
    logger.exception(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"context": {"path": request.url.path, "method": request.method}},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Include API router
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns basic API information.
    """
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
    }
