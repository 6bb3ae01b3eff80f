"""Error taxonomy and JSON error envelope for the Contacts API.

Every error leaving the application is rendered as::

    {"errors": {"message": ["..."]}}
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    """Input was rejected, including uniqueness conflicts."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class Unauthenticated(HTTPException):
    """Missing or unknown API token."""

    def __init__(self, message: str = "unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


class InvalidCredentials(HTTPException):
    """Login with an unknown username or a wrong password."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


class NotFound(HTTPException):
    """Resource is absent or not owned by the caller."""

    def __init__(self, message: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


def error_envelope(*messages: str) -> dict:
    """
    Build the error response body.

    Args:
        *messages (str): Human readable error messages.

    Returns:
        dict: ``{"errors": {"message": [...]}}``
    """
    return {"errors": {"message": list(messages)}}


def format_validation_error(error: dict) -> str:
    """Render one pydantic error as ``"<field>: <reason>"``."""
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Wrap any HTTP exception into the error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request schema failures as 422 with one message per field."""
    messages = [format_validation_error(error) for error in exc.errors()]
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, messages)
    return JSONResponse(
        status_code=422,
        content=error_envelope(*messages),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
