"""Error response rendering shared by all routers.

Browser callers expect `{"error": "<message>"}` bodies rather than FastAPI's
default `{"detail": ...}` shape.
"""

from __future__ import annotations

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render an HTTPException as an `error` body.

    A dict detail is used as the body verbatim so that routes can attach
    extra fields (for example the id of a user that was created before a
    later step failed).
    """
    if isinstance(exc.detail, dict):
        body = exc.detail
    else:
        body = {"error": exc.detail}
    return JSONResponse(body, status_code=exc.status_code, headers=exc.headers)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 responses."""
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        reason = first.get("msg", "invalid value")
        message = f"{message}: {location}: {reason}" if location else f"{message}: {reason}"
    return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)


def install_error_handlers(app: FastAPI) -> None:
    """Register the shared error handlers on an application."""
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
