"""
Exception-to-response mapping.

``ERROR_TABLE`` is scanned top to bottom and the first matching entry wins,
so subclasses must come before their bases.
"""
import logging
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from inventory.config import settings
from inventory.core.exceptions import (
    AppError,
    BadRequestError,
    ConcurrencyError,
    ConflictError,
    ForbiddenError,
    IntegrationError,
    MappingError,
    NotFoundError,
    RateLimitExceededError,
    UnauthorizedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."


@dataclass(frozen=True)
class ErrorMapping:
    exc_types: tuple[type[BaseException], ...]
    status_code: int
    message: str | None = None  # None: use the exception's own message


ERROR_TABLE: list[ErrorMapping] = [
    ErrorMapping((RateLimitExceededError,), 429),
    ErrorMapping((ValidationFailedError,), 400),
    ErrorMapping((ConcurrencyError, StaleDataError), 409, ConcurrencyError.default_message),
    ErrorMapping((ConflictError,), 409),
    ErrorMapping((BadRequestError,), 400),
    ErrorMapping((UnauthorizedError,), 401),
    ErrorMapping((ForbiddenError,), 403),
    ErrorMapping((PermissionError,), 403, ForbiddenError.default_message),
    ErrorMapping((NotFoundError,), 404),
    ErrorMapping((KeyError,), 404, NotFoundError.default_message),
    ErrorMapping((MappingError, PydanticValidationError), 500, MappingError.default_message),
    ErrorMapping((IntegrationError,), 500),
    ErrorMapping((ValueError,), 400),
    ErrorMapping((SQLAlchemyError,), 500, "A database error occurred while processing your request."),
    ErrorMapping((TimeoutError, httpx.TimeoutException), 504, "The request timed out. Please try again later."),
]


def resolve(exc: BaseException) -> tuple[int, str]:
    for mapping in ERROR_TABLE:
        if isinstance(exc, mapping.exc_types):
            if mapping.message is not None:
                return mapping.status_code, mapping.message
            if isinstance(exc, AppError):
                return mapping.status_code, exc.message
            return mapping.status_code, str(exc) or UNEXPECTED_MESSAGE
    return 500, UNEXPECTED_MESSAGE


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_error_body(
    status_code: int,
    message: str,
    correlation_id: str | None,
    exc: BaseException | None = None,
) -> dict:
    body = {
        "error": message,
        "statusCode": status_code,
        "correlationId": correlation_id,
        "timestamp": _timestamp(),
    }
    if isinstance(exc, ValidationFailedError):
        body["errors"] = [failure.to_dict() for failure in exc.failures]
    if exc is not None and settings.is_development:
        body["detail"] = str(exc)
        body["exceptionType"] = type(exc).__name__
        body["stackTrace"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def rate_limit_response(exc: RateLimitExceededError) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error": exc.message,
            "statusCode": 429,
            "retryAfterSeconds": exc.retry_after_seconds,
        },
        headers={"Retry-After": str(exc.retry_after_seconds)},
    )


def error_response(exc: BaseException, correlation_id: str | None, path: str = "") -> JSONResponse:
    if isinstance(exc, RateLimitExceededError):
        logger.warning("Rate limit hit on %s (policy=%s)", path, exc.policy)
        return rate_limit_response(exc)

    status_code, message = resolve(exc)
    if status_code >= 500:
        logger.error("Unhandled error on %s: %s", path, exc, exc_info=exc)
    else:
        logger.warning("Request to %s failed with %d: %s", path, status_code, exc)

    return JSONResponse(status_code=status_code, content=build_error_body(status_code, message, correlation_id, exc))
