"""Error responses shared by every router.

All failures leave the API as ``{"error": {"category", "code", "detail", ...}}``
so the frontend can tell a missing module apart from an unsynced progress write.
"""

import logging
from enum import Enum
from typing import Any
from uuid import UUID

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, OperationalError

from web3journey.exceptions import RemoteStoreError


logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    DATABASE = "DATABASE_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE_ERROR"
    INTERNAL = "INTERNAL_ERROR"


class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_RECORD = "DUPLICATE_RECORD"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL = "INTERNAL_ERROR"


class ErrorBody(BaseModel):
    category: ErrorCategory
    code: ErrorCode
    detail: str
    suggestions: list[str] | None = None
    metadata: dict[str, Any] | None = None


class ExternalServiceError(HTTPException):
    """A dependency outside the app (LLM provider, chain RPC) failed."""

    def __init__(self, service: str, detail: str) -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=f"{service} service error: {detail}")
        self.service = service


def format_error_response(
    category: ErrorCategory,
    code: ErrorCode,
    detail: str,
    status_code: int,
    suggestions: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorBody(category=category, code=code, detail=detail, suggestions=suggestions, metadata=metadata)
    return JSONResponse(status_code=status_code, content={"error": body.model_dump(mode="json", exclude_none=True)})


def _field_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]


async def handle_validation_errors(request: Request, exc: Exception) -> JSONResponse:
    """Pydantic failures are 422 with per-field errors; domain rule violations are 400."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)

    if isinstance(exc, PydanticValidationError):
        return format_error_response(
            category=ErrorCategory.VALIDATION,
            code=ErrorCode.INVALID_INPUT,
            detail="Invalid input data",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            metadata={"errors": _field_errors(exc)},
        )

    # Domain ValidationError: e.g. minting a certificate that is not complete yet
    return format_error_response(
        category=ErrorCategory.VALIDATION,
        code=ErrorCode.NOT_ELIGIBLE if request.url.path.endswith("/mint") else ErrorCode.INVALID_INPUT,
        detail=str(exc),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_database_errors(request: Request, exc: Exception) -> JSONResponse:
    """Map store failures. Progress already applied in memory stays applied."""
    logger.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)

    if isinstance(exc, IntegrityError):
        return format_error_response(
            category=ErrorCategory.DATABASE,
            code=ErrorCode.DUPLICATE_RECORD,
            detail="A record with this key already exists",
            status_code=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, OperationalError | RemoteStoreError):
        return format_error_response(
            category=ErrorCategory.DATABASE,
            code=ErrorCode.STORE_UNAVAILABLE,
            detail="The progress store is unreachable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            suggestions=["Retry the action once the connection is back"],
        )

    return format_error_response(
        category=ErrorCategory.DATABASE,
        code=ErrorCode.INTERNAL,
        detail="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def handle_external_service_errors(request: Request, exc: ExternalServiceError) -> JSONResponse:
    logger.error("%s unavailable during %s %s: %s", exc.service, request.method, request.url.path, exc.detail)

    return format_error_response(
        category=ErrorCategory.EXTERNAL_SERVICE,
        code=ErrorCode.SERVICE_UNAVAILABLE,
        detail=exc.detail,
        status_code=exc.status_code,
        suggestions=["Please try again in a moment"],
        metadata={"service": exc.service},
    )


def log_error_context(request: Request, exc: Exception, error_id: UUID | None = None) -> None:
    """Log an unhandled failure with enough request context to find it again."""
    logger.error(
        "Unhandled %s on %s %s (error_id=%s, client=%s, query=%s)",
        type(exc).__name__,
        request.method,
        request.url.path,
        error_id,
        request.client.host if request.client else "unknown",
        dict(request.query_params),
        exc_info=exc,
    )
