"""
Exception handlers for the FastAPI application.

- ``TechMatchError`` subclasses render as ``{"error": detail, "type": name}``
  with the status the class pins.
- Request bodies or parameters FastAPI cannot parse render as
  ``ValidationError`` (400) listing the offending fields.
- SQLAlchemy errors that escape a service render as ``StoreFailure``.
- Anything else is logged with an error id and rendered as a 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from techmatch.errors import StoreFailure, TechMatchError, ValidationError

logger = logging.getLogger(__name__)


def _render(exc: TechMatchError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "type": type(exc).__name__},
    )


async def techmatch_exception_handler(request: Request, exc: TechMatchError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s in %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    else:
        logger.info("%s in %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    return _render(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(p) for p in err["loc"] if p != "body") or "body" for err in exc.errors()})
    logger.info("Rejected %s %s: invalid %s", request.method, request.url.path, fields)
    return _render(ValidationError(f"Invalid or missing fields: {', '.join(fields)}"))


async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Persistence failure in %s %s: %s", request.method, request.url.path, exc)
    return _render(StoreFailure())


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and return a 500 carrying an error id that
    clients can quote when reporting the issue.
    """
    error_id = id(exc)
    logger.error(
        "Unhandled exception [%s] in %s %s: %s",
        error_id, request.method, request.url.path, exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "type": type(exc).__name__, "error_id": error_id},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register every handler on ``app``."""
    app.add_exception_handler(TechMatchError, techmatch_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered")
