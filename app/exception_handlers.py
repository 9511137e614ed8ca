"""
FastAPI exception handlers.

All error responses share one shape, ``{"msg": "<stable message>"}``, so
clients can branch on the message regardless of where the failure began.
"""
import logging
from collections.abc import Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.errors import ApiError, BadRequest, InvalidDataType, MissingFields

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.msg})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"msg": "route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": str(exc.detail).lower()},
        headers=getattr(exc, "headers", None),
    )


def classify_validation_errors(errors: Sequence[dict]) -> ApiError:
    """
    Reduce FastAPI request-validation errors to one API error.

    A bad path identifier wins, then an undecodable body, then any
    missing field (an absent body counts as a body with no fields), then a
    body that is not a JSON object.  Every remaining failure is a field of
    the wrong type or out of range.
    """
    if any(err["loc"][0] == "path" for err in errors):
        return InvalidDataType()
    if any(err["type"] == "json_invalid" for err in errors):
        return BadRequest("invalid request body")
    if any(err["type"] == "missing" for err in errors):
        return MissingFields()
    if any(tuple(err["loc"]) == ("body",) for err in errors):
        return BadRequest("invalid request body")
    return InvalidDataType()


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request on %s %s: %s", request.method, request.url.path, exc.errors())
    return await api_error_handler(request, classify_validation_errors(exc.errors()))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"msg": "internal server error"})


def setup_exception_handlers(app: FastAPI) -> None:
    """Register every handler on *app*.  Call once while building the app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
