"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from habit_tracker.api.v1.router import api_router
from habit_tracker.core.config import settings
from habit_tracker.core.exceptions import HabitNotFoundError, HabitValidationError
from habit_tracker.core.logging import setup_logging
from habit_tracker.db.init_db import init_db
from habit_tracker.schemas.habit import FieldError

logger = logging.getLogger(__name__)

# Wire names that do not follow the camelCase rule.
_WIRE_NAMES = {"category_id": "idCategory"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.STORAGE_BACKEND == "database" and settings.DB_AUTO_CREATE:
        init_db()
    logger.info("%s %s started (storage: %s)", settings.PROJECT_NAME, settings.VERSION, settings.STORAGE_BACKEND)
    yield


# ----------------------------------------------------------------------
# Error handlers
# ----------------------------------------------------------------------

async def habit_validation_handler(request: Request, exc: HabitValidationError) -> JSONResponse:
    error = FieldError(field=_WIRE_NAMES.get(exc.field, to_camel(exc.field)), reason=exc.reason.value,
                       message=exc.message)
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": [error.model_dump()]})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        names = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        errors.append(FieldError(field=".".join(names) or "body", reason="InvalidPayload",
                                 message=err.get("msg", "Invalid value")).model_dump())
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": errors})


async def habit_not_found_handler(request: Request, exc: HabitNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"detail": "An unexpected error occurred"})


# ----------------------------------------------------------------------
# Application
# ----------------------------------------------------------------------

def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Personal habit tracking: create, list, edit and deactivate habits.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan)

    app.add_exception_handler(HabitValidationError, habit_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HabitNotFoundError, habit_not_found_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include API router
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "status": "healthy"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "habit-tracker-api",
            "version": settings.VERSION,
            "storage": settings.STORAGE_BACKEND
        }

    @app.get("/info")
    async def info():
        return {
            "project name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "project url": settings.PROJECT_URL
        }

    return app


app = create_app()
