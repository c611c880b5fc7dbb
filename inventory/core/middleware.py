import logging
import uuid as uuid_mod

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from inventory.config import settings
from inventory.core.errors import build_error_body, error_response
from inventory.core.logging import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


def get_correlation_id(request: Request) -> str | None:
    return getattr(request.state, "correlation_id", None) or correlation_id_var.get()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Tag every request with a correlation id, echo it on the response and expose it to logging."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid_mod.uuid4())
        request.state.correlation_id = correlation_id
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Render any exception escaping the routes through the error table."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return error_response(exc, get_correlation_id(request), request.url.path)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.APP_ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


# Outermost first
MIDDLEWARE_STAGES = [
    (CorrelationIdMiddleware, {}),
    (ErrorHandlingMiddleware, {}),
    (SecurityHeadersMiddleware, {}),
    (GZipMiddleware, {"minimum_size": 500}),
    (
        CORSMiddleware,
        {
            "allow_origins": settings.CORS_ORIGINS,
            "allow_credentials": True,
            "allow_methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization", CORRELATION_ID_HEADER],
            "expose_headers": [CORRELATION_ID_HEADER, "Retry-After"],
        },
    ),
]


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = build_error_body(exc.status_code, str(exc.detail), get_correlation_id(request))
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = build_error_body(400, "One or more validation errors occurred.", get_correlation_id(request))
    body["errors"] = [
        {"field": ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]), "message": err["msg"]}
        for err in exc.errors()
    ]
    logger.warning("Request validation failed on %s: %d error(s)", request.url.path, len(body["errors"]))
    return JSONResponse(status_code=400, content=body)


def setup_middleware(app: FastAPI) -> None:
    # add_middleware prepends, so register innermost first
    for middleware_class, options in reversed(MIDDLEWARE_STAGES):
        app.add_middleware(middleware_class, **options)

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
