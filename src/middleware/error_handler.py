"""Global exception handlers mapping exceptions to structured JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.auth.errors import ProviderUnavailable, SessionError

logger = logging.getLogger(__name__)

HTTP_ERROR_TYPES = {
    400: "bad_request",
    401: "authentication_error",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error_response(
    request: Request, status: int, error_type: str, message: str, headers: dict | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "status": "error",
            "error": {
                "type": error_type,
                "message": message,
                "request_id": _request_id(request),
            },
        },
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return _error_response(request, 422, "validation_error", messages)

    @app.exception_handler(SessionError)
    async def session_error(request: Request, exc: SessionError):
        if isinstance(exc, ProviderUnavailable):
            logger.error("Identity provider unavailable on %s %s", request.method, request.url.path)
        return _error_response(request, exc.status_code, exc.error_type, exc.message)

    # Starlette's class also covers router-level 404/405, not just raised fastapi.HTTPException
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        error_type = HTTP_ERROR_TYPES.get(exc.status_code, "http_error")
        return _error_response(request, exc.status_code, error_type, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error_response(request, 500, "internal_error", "An unexpected error occurred")
