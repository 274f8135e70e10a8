"""
Exception handlers.

Maps the error taxonomy onto HTTP responses so every request gets a
JSON envelope, whatever fails underneath.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import (
    TaskerError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
)
from modules.auth.exceptions import AlreadyAuthenticatedError

from .dependencies import container_for

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"success": False, "message": "Something went wrong!", "error": "INTERNAL_ERROR"}

STATUS_BY_ERROR: list[tuple[type[TaskerError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(exc: TaskerError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def tasker_error_handler(request: Request, exc: TaskerError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed (%s): %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=status_code, content=INTERNAL_ERROR_BODY)

    body = exc.to_dict()
    if isinstance(exc, AuthenticationError):
        body["redirectTo"] = container_for(request.app).settings.login_url
    return JSONResponse(status_code=status_code, content=body)


async def already_authenticated_handler(
    request: Request, exc: AlreadyAuthenticatedError
) -> RedirectResponse:
    return RedirectResponse(exc.redirect_to, status_code=status.HTTP_302_FOUND)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Validation failed",
            "error": "VALIDATION_ERROR",
            "details": details,
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(AlreadyAuthenticatedError, already_authenticated_handler)
    app.add_exception_handler(TaskerError, tasker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
