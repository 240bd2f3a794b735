"""Global exception handlers.

Every error leaves the API as {"status": "fail"|"error", "message": ...},
with "stack" added only when APP_ENV=development. Programming errors are
logged in full and answered with a generic message.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.model.errors import DomainError
from utils.settings import get_settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


def build_error_body(status_code: int, message: str, exc: BaseException | None = None) -> dict:
    body = {
        "status": "fail" if 400 <= status_code < 500 else "error",
        "message": message,
    }
    if exc is not None and get_settings().is_development:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def _auth_headers(status_code: int) -> dict | None:
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return {"WWW-Authenticate": "Bearer"}
    return None


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        if exc.is_operational:
            logger.info("Request failed", extra={
                "path": request.url.path,
                "statusCode": exc.status_code,
                "error": exc.message,
            })
        else:
            logger.error("Request failed", exc_info=exc, extra={
                "path": request.url.path,
                "statusCode": exc.status_code,
            })
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_body(exc.status_code, exc.message, exc),
            headers=_auth_headers(exc.status_code),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first.get("loc", ())[1:])
        message = f"Invalid value for {field}: {first.get('msg')}" if field else "Invalid request body."
        logger.info("Request validation failed", extra={"path": request.url.path, "field": field})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_error_body(status.HTTP_400_BAD_REQUEST, message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_body(exc.status_code, str(exc.detail)),
            headers=exc.headers or _auth_headers(exc.status_code),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE, exc),
        )
