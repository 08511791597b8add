"""
API Response Envelope

Every endpoint answers with ``{success, message, data?, errors?}`` and camelCase
keys. Success bodies are built from ``ApiResponse``; failures are produced by the
exception handlers installed with ``install_exception_handlers``.
"""

import logging
from typing import Any, Generic, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

DataT = TypeVar("DataT")

GENERIC_ERROR_MESSAGE = "Something went wrong while processing your request. Please try again later."


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[DataT]):
    success: bool = True
    message: str
    data: DataT | None = None
    errors: list[str] | None = None


def error_body(
    message: str,
    error: str | None = None,
    errors: list[str] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if error:
        body["error"] = error
    if errors:
        body["errors"] = errors
    return body


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        body = error_body(
            message=detail.get("message", "Request failed"),
            error=detail.get("error"),
            errors=detail.get("errors"),
        )
    else:
        body = error_body(message=str(detail))

    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


def _format_validation_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are reported as 400, like rule failures."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            message="Invalid request",
            error="INVALID_REQUEST",
            errors=[_format_validation_error(error) for error in exc.errors()],
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            message="Internal server error",
            error="INTERNAL_ERROR",
            errors=[GENERIC_ERROR_MESSAGE],
        ),
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
