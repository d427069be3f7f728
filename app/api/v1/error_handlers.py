# Standard library imports
import logging
from http import HTTPStatus
from typing import List, Optional

# External package imports
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Local application imports
from ...application.dto.device_dto import ErrorResponse, FieldErrorItem
from ...utils.datetime_utils import to_iso, utc_now

logger = logging.getLogger(__name__)


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    field_errors: Optional[List[FieldErrorItem]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=to_iso(utc_now()),
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        path=request.url.path,
        field_errors=field_errors,
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body, exclude_none=True))


async def http_exception_handler(request: Request, exception: StarletteHTTPException) -> JSONResponse:
    return _error_response(request, exception.status_code, str(exception.detail))


async def validation_exception_handler(request: Request, exception: RequestValidationError) -> JSONResponse:
    """Malformed or invalid payloads and parameters are a 400, with one entry per field"""
    field_errors = [
        FieldErrorItem(
            field=".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")),
            message=error.get("msg", "Invalid value"),
        )
        for error in exception.errors()
    ]
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {field_errors}")
    return _error_response(request, status.HTTP_400_BAD_REQUEST, "Validation failed", field_errors)


async def unhandled_exception_handler(request: Request, exception: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception for {request.method} {request.url.path}", exc_info=exception)
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(application: FastAPI) -> None:
    """Install the JSON error body for every failure path"""
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)
