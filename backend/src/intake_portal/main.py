"""Document Intake Portal - Main FastAPI Application

Companies submit their export paperwork (registration, permits, TK forms,
shipping documents) in one form; staff review the stored submissions.

This module creates and configures the FastAPI application, including:
- API routers (uploads, submissions, document categories)
- Middleware (request ID correlation, CORS)
- Exception handlers
- Health and observability endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .database import init_db
from .domain.documents.ports.object_storage_port import StorageError
from .domain.submissions.errors import (
    PersistenceError,
    SubmissionError,
    TotalFailureError,
    ValidationError,
)

# Observability
from .observability.logging_config import configure_logging
from .observability.middleware import RequestIDMiddleware
from .observability.router import router as observability_router

# Domain Routers
from .uploads.router import router as uploads_router
from .submissions.router import router as submissions_router
from .submissions.router import categories_router

# Configure logging
configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)

DOCS_ENABLED = settings.ENVIRONMENT != "production"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Startup: create tables when DB_AUTO_CREATE is set (development only)
    - Shutdown: log
    """
    logger.info("Document Intake Portal starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if settings.DB_AUTO_CREATE:
        init_db()
        logger.info("Database tables created")

    yield

    logger.info("Document Intake Portal shutting down...")


app = FastAPI(
    title="Document Intake Portal API",
    description="Collects company export documents into object storage and records each submission",
    version="0.1.0",
    docs_url="/docs" if DOCS_ENABLED else None,
    redoc_url="/redoc" if DOCS_ENABLED else None,
    openapi_url="/openapi.json" if DOCS_ENABLED else None,
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

SUBMISSION_ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    TotalFailureError: status.HTTP_502_BAD_GATEWAY,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def submission_error_status(exc: SubmissionError) -> int:
    """HTTP status for a submission failure

    A TotalFailureError with no attempted uploads means nothing was selected,
    which the user has to correct; failed uploads are a storage-side failure.
    """
    if isinstance(exc, TotalFailureError) and not exc.failures:
        return status.HTTP_400_BAD_REQUEST
    return SUBMISSION_ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(SubmissionError)
async def submission_exception_handler(
    request: Request,
    exc: SubmissionError
) -> JSONResponse:
    """Map submission failures to their HTTP status with {error, message}"""
    status_code = submission_error_status(exc)
    logger.warning(
        f"Submission failed on {request.method} {request.url.path}: {exc.message}",
        extra={"error_type": exc.code, "status_code": status_code},
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(StorageError)
async def storage_exception_handler(
    request: Request,
    exc: StorageError
) -> JSONResponse:
    """Handle object storage failures outside the upload endpoint"""
    logger.error(
        f"Storage error on {request.method} {request.url.path}: {exc}",
        extra={"error_type": "storage_error"},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Returns a structured error response with field-level details.
    """
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context from validation errors"""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle database errors.

    Logs the full error but returns a generic message to prevent
    information leakage.
    """
    logger.error(
        f"Database error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "database_error",
            "message": "A database error occurred. Please try again later.",
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle uncaught exceptions.

    Full details are logged but not exposed to the client.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

# Observability (health, metrics, ready)
app.include_router(observability_router)

app.include_router(uploads_router, prefix="/api/v1")
app.include_router(submissions_router, prefix="/api/v1")
app.include_router(categories_router, prefix="/api/v1")


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

@app.get("/", include_in_schema=False)
async def root() -> dict[str, Any]:
    """Root endpoint - API information."""
    return {
        "name": "Document Intake Portal API",
        "version": "0.1.0",
        "status": "running",
        "docs": "/docs" if DOCS_ENABLED else None,
    }


@app.get("/api/v1", include_in_schema=False)
async def api_root() -> dict[str, Any]:
    """API v1 root endpoint."""
    return {
        "version": "v1",
        "status": "active",
        "endpoints": {
            "upload": "/api/v1/upload",
            "submissions": "/api/v1/submissions",
            "document_categories": "/api/v1/document-categories",
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "intake_portal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
