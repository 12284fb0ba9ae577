"""Exception handlers that render every error as the standard envelope.

Envelope: ``{"status_code": int, "message": str, "error": str | None}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

_REASONS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    413: "Payload Too Large",
    500: "Internal Server Error",
}


def error_body(status_code: int, message: str, error: str | None = None) -> dict:
    return {"status_code": status_code, "message": message, "error": error or _REASONS.get(status_code)}


def envelope(status_code: int, message: str, error: str | None = None, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(status_code, message, error), headers=headers)


def _flatten(messages) -> str:
    if isinstance(messages, dict):
        parts = []
        for field_name, errors in messages.items():
            errors = errors if isinstance(errors, list) else [errors]
            parts.extend(f"{field_name}: {e}" if field_name != "_entity" else str(e) for e in errors)
        return "; ".join(parts)
    return str(messages)


def _request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


async def _on_validation_error(request: Request, exc: ValidationError):
    return envelope(400, _flatten(exc.messages))


async def _on_request_validation_error(request: Request, exc: RequestValidationError):
    return envelope(400, _request_errors(exc))


async def _on_not_found(request: Request, exc: ObjectNotFoundError):
    message = exc.args[0] if exc.args else "Resource not found"
    return envelope(404, _flatten(message))


async def _on_invalid_operation(request: Request, exc: InvalidOperationError):
    message = exc.args[0] if exc.args else "Operation not allowed"
    return envelope(409, _flatten(message))


async def _on_http_exception(request: Request, exc: StarletteHTTPException):
    return envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def _on_unexpected(request: Request, exc: Exception):
    logger.error(
        "request.unhandled_exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return envelope(500, "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _on_validation_error)
    app.add_exception_handler(RequestValidationError, _on_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _on_not_found)
    app.add_exception_handler(InvalidOperationError, _on_invalid_operation)
    app.add_exception_handler(StarletteHTTPException, _on_http_exception)
    app.add_exception_handler(Exception, _on_unexpected)
