"""
Maps service errors and request validation failures to the `{error: string}`
response body every client of this API expects.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pengiriman.core.errors import ServiceError

logger = logging.getLogger(__name__)


def error_response(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI puts in front.
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("service_error path=%s status=%s", request.url.path, exc.status_code)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    missing = []
    invalid = []
    for err in exc.errors():
        name = _field_name(tuple(err.get("loc", ())))
        if err.get("type") == "missing":
            missing.append(name)
        else:
            invalid.append(name)
    parts = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(sorted(set(missing)))}")
    if invalid:
        parts.append(f"Invalid fields: {', '.join(sorted(set(invalid)))}")
    return error_response(400, "; ".join(parts) or "Malformed request")


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error path=%s error=%s", request.url.path, exc, exc_info=exc)
    return error_response(500, "Something went wrong.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
