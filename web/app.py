"""
FastAPI application for the vacancy engine.

Exposes the vacancy report and the application intake/evaluation
endpoints. Production deployment configuration via environment variables.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from utils.config import Config
from utils.logging import configure_logging
from web.application_routes import router as application_router
from web.vacancy_routes import router as vacancy_router


logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config.load()
    configure_logging(config.log_level)

    app = FastAPI(
        title="Tenant Vacancy Engine",
        description="Vacancy workflow tracking and compliant applicant screening",
        version=VERSION,
        # Production settings: disable docs/redoc for private deployment
        docs_url=None if config.is_production else "/docs",
        redoc_url=None if config.is_production else "/redoc",
        openapi_url=None if config.is_production else "/openapi.json",
        debug=config.debug and not config.is_production,
    )

    # Healthcheck endpoints perform no IO and are registered first
    @app.get("/", include_in_schema=False)
    def root():
        """Root healthcheck. No dependencies, no IO."""
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        """Secondary health endpoint with environment details."""
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": config.app_env,
        }

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed payloads are client errors."""
        return JSONResponse(
            {"error": "invalid request", "details": jsonable_errors(exc)},
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "internal server error"}, status_code=500)

    app.include_router(vacancy_router)
    app.include_router(application_router)

    logger.info("Vacancy engine started (%s)", config.app_env)
    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors reduced to location and message."""
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


# Create app instance for uvicorn
app = create_app()
