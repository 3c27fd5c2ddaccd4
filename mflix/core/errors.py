"""
mflix/core/errors.py

Purpose: Translate repository errors for the HTTP layer

- Caller faults (IncorrectOperationError and subclasses) become their 4xx
  status with the error code, logged at warning level
- Any other MflixError keeps its own status and is logged as an error
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mflix.core.exceptions import IncorrectOperationError, MflixError
from mflix.core.logging import get_logger
from mflix.schemas.response import ErrorResponse

logger = get_logger(__name__)


def error_response(exc: MflixError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse.from_error(exc).model_dump()
    )


def add_exception_handlers(app: FastAPI):
    """
    Registers the repository error handlers on the app that calls them.
    """
    @app.exception_handler(IncorrectOperationError)
    async def incorrect_operation_handler(request: Request, exc: IncorrectOperationError):
        logger.warning(
            f"Rejected {request.method} {request.url.path}: {exc.code} {exc.message}"
        )
        return error_response(exc)

    @app.exception_handler(MflixError)
    async def mflix_error_handler(request: Request, exc: MflixError):
        logger.error(
            f"Data access failure on {request.method} {request.url.path}: {exc.message}",
            extra={"code": exc.code}
        )
        return error_response(exc)
