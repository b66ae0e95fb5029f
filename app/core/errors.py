import logging
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Request locations FastAPI prefixes to every error path
_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _format_location(loc: Sequence[Any]) -> str:
    parts = [str(p) for i, p in enumerate(loc) if not (i == 0 and p in _LOCATIONS)]
    return ".".join(parts)


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Collapses pydantic errors into one readable sentence, e.g.
    'Validation error: Input should be greater than or equal to 0 at "income"'.
    """
    messages = []
    for error in errors:
        location = _format_location(error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        messages.append(f'{message} at "{location}"' if location else message)
    return "Validation error: " + "; ".join(messages)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    detail = format_validation_errors(exc.errors())
    logger.info("Rejected %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
