"""Map domain errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tally.core.exceptions import (
    NotFoundError,
    PersistenceError,
    UniqueConstraintError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: 422,
    UniqueConstraintError: 409,
    NotFoundError: 404,
    PersistenceError: 503,
}


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per domain error type."""

    async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
        status_code = _lookup(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    for exc_type in STATUS_CODES:
        app.add_exception_handler(exc_type, handle_domain_error)


def _lookup(exc: Exception) -> int:
    for exc_type, status_code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return 500
