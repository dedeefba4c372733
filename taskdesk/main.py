"""
TaskDesk - Main Application Entry Point
Multi-tenant task management API
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlmodel import Session
import logging
import structlog

from taskdesk import __version__
from taskdesk.core.config import get_settings
from taskdesk.core.database import engine, init_db
from taskdesk.core.exceptions import TaskDeskError
from taskdesk.api import auth, dashboard, subscription, tasks
from taskdesk.services.reference_data import seed_reference_data

settings = get_settings()

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.LOG_LEVEL.upper())
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing TaskDesk backend")
    if settings.ENVIRONMENT == "development":
        # Outside development the schema is managed by Alembic migrations
        init_db()
    with Session(engine) as session:
        seed_reference_data(session)

    yield

    # Shutdown
    logger.info("Shutting down TaskDesk backend")


def _validation_errors(exc: RequestValidationError) -> dict:
    """Group pydantic errors by field name"""
    errors: dict = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as {"message": ..., ["errors": ...]}"""

    @app.exception_handler(TaskDeskError)
    async def taskdesk_error_handler(request: Request, exc: TaskDeskError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"message": "Validation failed", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app() -> FastAPI:
    app = FastAPI(
        title="TaskDesk API",
        description="Multi-tenant task management with role-based access and subscription plans",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure middleware stack
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["auth"])
    app.include_router(dashboard.router, prefix=f"{settings.API_PREFIX}/dashboard", tags=["dashboard"])
    app.include_router(subscription.router, prefix=f"{settings.API_PREFIX}/subscription", tags=["subscription"])
    app.include_router(tasks.router, prefix=f"{settings.API_PREFIX}/tasks", tags=["tasks"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "taskdesk-api"}

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "TaskDesk API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "taskdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
