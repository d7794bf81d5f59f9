"""Domain errors and their HTTP mapping.

Stores raise these; the handler registered by ``register_exception_handlers``
turns them into a JSON body of the form ``{"error", "detail", "context"}``.

Usage:
    from community_events.errors import ValidationError

    if not participant_id:
        raise ValidationError(detail="participantId is required", field="participantId")
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: Optional[str] = None
    context: Optional[dict[str, Any]] = None


class APIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    error: str = "internal_error"
    detail: str = "An unexpected error occurred"

    def __init__(self, detail: Optional[str] = None, **context: Any) -> None:
        self.detail = detail or self.__class__.detail
        self.context = context or None
        super().__init__(self.detail)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, detail=self.detail, context=self.context)


class ValidationError(APIError):
    """A required field is missing or carries an unknown value (400)."""

    status_code = 400
    error = "validation_error"
    detail = "Invalid request"


class NotFoundError(APIError):
    """Requested resource does not exist (404)."""

    status_code = 404
    error = "not_found"
    detail = "Resource not found"


class ConflictError(APIError):
    """The request collides with a record owned by someone else (409)."""

    status_code = 409
    error = "conflict"
    detail = "Conflicting record"


class StorageUnavailableError(APIError):
    """The underlying collection could not be read or written (503)."""

    status_code = 503
    error = "storage_unavailable"
    detail = "Storage temporarily unavailable"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Serialize an APIError, logging server-side failures louder than client ones."""
    if exc.status_code >= 500:
        logger.error("API error: %s (status=%d, path=%s)", exc.detail, exc.status_code, request.url.path)
    else:
        logger.warning("API error: %s (status=%d, path=%s)", exc.detail, exc.status_code, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
