"""
FastAPI application entry point.

Uses structured logging from issuetracker.logging module.
"""

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from issuetracker.config import get_settings
from issuetracker.db import db
from issuetracker.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .error_handlers import register_exception_handlers
from .routers import comments as comments_router
from .routers import issues as issues_router

# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = get_logger("api")


def create_app() -> FastAPI:
    # API version prefix
    api_version = "v1"
    api_prefix = f"{settings.api_prefix}/{api_version}"

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    )

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize the database on startup."""
        logger.info("app_startup", app_name=settings.app_name)

        db.initialize(settings.database_url)
        if settings.auto_create_tables:
            db.create_all_tables()
        logger.info("database_initialized", auto_create_tables=settings.auto_create_tables)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("app_shutdown")
        db.reset()

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        Returns 200 once the database answers and holds every tracker
        table, 503 otherwise.
        """
        result = db.health_check()
        if not result["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "not_ready",
                    "checks": {"database": False, "missing_tables": result["missing_tables"]},
                },
            )
        return {"status": "ready", "checks": {"database": True}}

    # Register routers with versioned API prefix
    # API is accessible at /api/v1/*
    app.include_router(issues_router.router, prefix=api_prefix)
    app.include_router(comments_router.router, prefix=api_prefix)

    return app


app = create_app()
