"""Exception handlers mapping errors to JSON responses at the HTTP boundary."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import AppError, ErrorKind
from ..core.schemas.common import ErrorResponse

logger = logging.getLogger("notekeep.errors")


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc) or "unknown", "message": err.get("msg", "")})
    return errors


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Install handlers for domain errors, request validation and anything unexpected."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(
                f"{exc.kind.value}: {exc.message}",
                exc_info=exc,
                extra={"path": request.url.path},
            )
        else:
            logger.info(
                f"{exc.kind.value}: {exc.message}",
                extra={"path": request.url.path, "status_code": exc.status_code},
            )
        return _error_response(exc.status_code, exc.kind.value, exc.message, exc.details, exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = _field_errors(exc)
        message = ", ".join(f"{e['field']}: {e['message']}" for e in errors) or "Invalid request"
        return _error_response(
            ErrorKind.VALIDATION.status_code,
            ErrorKind.VALIDATION.value,
            message,
            {"errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # routing level errors (unknown path, wrong method)
        return _error_response(
            exc.status_code,
            "HTTPError",
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
        details = {"type": type(exc).__name__, "detail": str(exc)} if debug else None
        return _error_response(
            ErrorKind.INTERNAL.status_code,
            ErrorKind.INTERNAL.value,
            "Internal server error",
            details,
        )
