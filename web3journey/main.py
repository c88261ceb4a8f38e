import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv


# Load .env FIRST before any other imports that might need env vars
PROJECT_DIR = Path(__file__).parent.parent
ENV_PATH = PROJECT_DIR / ".env"
load_dotenv(ENV_PATH)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request

from .ai.assistant.router import router as assistant_router
from .ai.review.router import router as review_router
from .catalog.router import router as catalog_router
from .certificates.router import router as certificates_router
from .config.logging import setup_logging
from .config.settings import get_settings
from .database.base import create_all_tables
from .database.engine import engine
from .exceptions import RemoteStoreError, ResourceNotFoundError, ValidationError as CustomValidationError
from .middleware.error_handlers import (
    ErrorCategory,
    ErrorCode,
    ExternalServiceError,
    format_error_response,
    handle_database_errors,
    handle_external_service_errors,
    handle_validation_errors,
    log_error_context,
)
from .middleware.security import SimpleSecurityMiddleware, limiter
from .notes.router import router as notes_router
from .progress.dependencies import registry
from .progress.local_router import router as local_progress_router
from .progress.router import router as progress_router
from .reports.router import router as reports_router
from .stats.router import router as stats_router


setup_logging(debug=get_settings().DEBUG)
logger = logging.getLogger(__name__)


def _register_routers(app: FastAPI) -> None:
    """Register all application routers."""
    app.include_router(catalog_router)
    app.include_router(progress_router)
    app.include_router(local_progress_router)  # No-account progress kept on disk
    app.include_router(stats_router)
    app.include_router(notes_router)
    app.include_router(assistant_router)
    app.include_router(review_router)
    app.include_router(certificates_router)
    app.include_router(reports_router)


async def _shutdown_cleanup() -> None:
    """Clean up resources on shutdown."""
    logger.info("Starting graceful shutdown...")

    # Unsubscribe every cached progress store from the change feed
    registry.clear()

    try:
        await engine.dispose()
        logger.info("Database engine disposed successfully")
    except SQLAlchemyError as e:
        logger.warning(f"Error disposing database engine: {e}")

    logger.info("Shutdown complete")


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    await create_all_tables()
    logger.info("Database tables ready")

    yield

    await _shutdown_cleanup()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    try:
        settings = get_settings()
    except Exception:
        logger.exception("Failed to load settings")
        raise

    app = FastAPI(
        title="Web3 Journey API",
        description="Progress tracking, achievements, AI tutoring and certificates for the Web3 learning path",
        version="0.1.0",
        debug=settings.DEBUG,
        lifespan=lifespan if settings.ENVIRONMENT != "test" else None,
    )

    # Note: When allow_credentials=True, allow_origins cannot be ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Local-Progress-Id"],
    )

    # PDF reports and catalog payloads compress well
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SimpleSecurityMiddleware)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(ResourceNotFoundError)
    async def resource_not_found_handler(
        _request: Request,
        exc: ResourceNotFoundError,
    ) -> JSONResponse:
        return format_error_response(
            category=ErrorCategory.RESOURCE_NOT_FOUND,
            code=ErrorCode.NOT_FOUND,
            detail=str(exc),
            status_code=404,
            suggestions=["The requested resource does not exist"],
        )

    # Validation errors (400/422)
    @app.exception_handler(ValidationError)
    async def pydantic_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return await handle_validation_errors(request, exc)

    @app.exception_handler(CustomValidationError)
    async def custom_validation_handler(request: Request, exc: CustomValidationError) -> JSONResponse:
        return await handle_validation_errors(request, exc)

    # Database errors
    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        return await handle_database_errors(request, exc)

    @app.exception_handler(RemoteStoreError)
    async def remote_store_error_handler(request: Request, exc: RemoteStoreError) -> JSONResponse:
        return await handle_database_errors(request, exc)

    # External service errors (503)
    @app.exception_handler(ExternalServiceError)
    async def external_service_handler(request: Request, exc: ExternalServiceError) -> JSONResponse:
        return await handle_external_service_errors(request, exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled errors."""
        from uuid import uuid4

        error_id = uuid4()
        log_error_context(request, exc, error_id)

        return format_error_response(
            category=ErrorCategory.INTERNAL,
            code=ErrorCode.INTERNAL,
            detail="An unexpected error occurred",
            status_code=500,
            metadata={"error_id": str(error_id)},
            suggestions=["Please try again later", "If the problem persists, contact support with the error ID"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Check application health status."""
        return {"status": "healthy"}

    _register_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from web3journey.config import env

    host = env("API_HOST", "127.0.0.1")
    port = int(env("API_PORT", "8080"))

    uvicorn.run(app, host=host, port=port)
