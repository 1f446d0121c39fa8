"""Global exception handlers: the one place failures become ``{"msg": ...}``.

Invariants:
    - ApiError -> its own status and message, always first
    - DBAPIError -> fixed (status, message) per vendor code, else 500
    - unmatched route or method -> 404 "Route not found"
    - Exception (catch-all) -> 500, never leaks internal details
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from news_api.errors import ApiError, ErrorKind, classify

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = {"msg": "Route not found"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_api_error_handler(app)
    _register_database_error_handler(app)
    _register_validation_error_handler(app)
    _register_route_not_found_handler(app)
    _register_generic_error_handler(app)


def _error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_response())


def _register_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.info("%s on %s: %s", exc.kind.value, request.url.path, exc.msg)
        return _error_response(exc)


def _register_database_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DBAPIError)
    async def database_error_handler(request: Request, exc: DBAPIError):
        error = classify(exc)
        if error.kind is ErrorKind.INTERNAL:
            logger.error(
                "Unclassified database error on %s", request.url.path, exc_info=exc,
            )
        else:
            logger.warning(
                "Database rejected request on %s: %s", request.url.path, error.msg,
            )
        return _error_response(error)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Malformed JSON or wrongly typed body fields are plain client errors."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return _error_response(ApiError.validation())


def _register_route_not_found_handler(app: FastAPI) -> None:
    """
    Starlette raises HTTPException when routing fails.  A path that exists
    but not for this method is answered the same as an unknown path.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=ROUTE_NOT_FOUND)
        return JSONResponse(
            status_code=exc.status_code, content={"msg": str(exc.detail)}, headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error("Unhandled exception on %s", request.url.path, exc_info=exc)
        return _error_response(classify(exc))
