"""
Error taxonomy and its translation to HTTP responses.

Services raise these exceptions and never recover from them; the handlers
registered by ``register_exception_handlers`` turn them into
``{"detail": message}`` responses at the boundary.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class QRLinkError(Exception):
    """Base class for every failure surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(QRLinkError):
    """Malformed input (empty URL, invalid QR size)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(QRLinkError):
    """No live record exists for the identifier."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageFailure(QRLinkError):
    """Any failure reported by the database layer."""


class LockFailure(QRLinkError):
    """The shared connection lock could not be acquired."""


class RenderFailure(QRLinkError):
    """QR symbol or image encoding failed."""


async def qrlink_error_handler(request: Request, exc: QRLinkError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Path and query parsing problems are plain bad requests."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "Invalid request"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QRLinkError, qrlink_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
